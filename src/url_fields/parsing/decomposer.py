"""
URL decomposition into Field Records.

Tokenizes the URL, splits the host on the public suffix boundary and
optionally flattens the query string into a key/value mapping.
"""

import logging
from typing import Any, Optional, Union
from urllib.parse import unquote_plus

from url_fields.config import get_config
from url_fields.exceptions import InvalidInput
from url_fields.suffix import RuleSet, SuffixRuleSource, get_default_source, resolve

from .fields import Field, FieldRecord
from .uri import split_uri

logger = logging.getLogger(__name__)


def flatten_query_string(query: Optional[str]) -> dict[str, str]:
    """
    Flatten a raw query string into an ordered mapping.

    Segments that do not split into exactly one key and one value
    ('bad', 'a=b=c') are dropped. Values are URL-decoded, keys are not.
    Later duplicate keys overwrite earlier ones.
    """
    params: dict[str, str] = {}
    if not query:
        return params

    for segment in query.split("&"):
        pair = segment.split("=")
        if len(pair) == 2:
            params[pair[0]] = unquote_plus(pair[1])

    return params


class URLDecomposer:
    """
    Decompose URLs into FieldRecords.

    Usage:
        decomposer = URLDecomposer()
        record = decomposer.parse("http://www.pref.okinawa.jp/page.html")
        print(record.subdomain)  # www
        print(record.domain)     # pref.okinawa.jp
    """

    def __init__(
        self,
        rules: Union[RuleSet, SuffixRuleSource, None] = None,
        flatten_query: Optional[bool] = None,
    ):
        """
        Initialize decomposer.

        Args:
            rules: Rule set, or a source to load it from (defaults to the
                process-wide source). Sources are loaded on first parse.
            flatten_query: Default for parse() (defaults to config)
        """
        self._rules = rules
        self.flatten_query = (
            get_config().parser.flatten_query if flatten_query is None else flatten_query
        )

    @property
    def rules(self) -> RuleSet:
        """
        The suffix rule set, loading it from the source if needed.

        Raises:
            SuffixRuleSourceError: If the source cannot supply rules
        """
        if isinstance(self._rules, RuleSet):
            return self._rules
        source = self._rules if self._rules is not None else get_default_source()
        return source.load()

    def parse(self, url: str, flatten_query: Optional[bool] = None) -> FieldRecord:
        """
        Decompose a URL.

        Args:
            url: URL string
            flatten_query: Return the query as a mapping (defaults to
                the decomposer's setting)

        Returns:
            FieldRecord

        Raises:
            InvalidInput: If url is empty or not a string
            SuffixRuleSourceError: If suffix rules cannot be loaded
        """
        if not url or not isinstance(url, str):
            raise InvalidInput(f"Invalid URL: {url!r}")

        if flatten_query is None:
            flatten_query = self.flatten_query

        parts = split_uri(url)
        subdomain, domain = resolve(parts.host or "", self.rules)

        query: Any = parts.query
        if flatten_query:
            query = flatten_query_string(parts.query)

        return FieldRecord(
            scheme=parts.scheme,
            host=parts.host,
            subdomain=subdomain,
            domain=domain,
            port=parts.port,
            user=parts.user,
            password=parts.password,
            path=parts.path or "/",
            query=query,
            fragment=parts.fragment,
        )

    def lookup(
        self,
        url: str,
        field_id: Union[Field, str],
        flatten_query: Optional[bool] = None,
    ) -> Any:
        """
        Decompose a URL and return one field.

        Returns:
            The field value, or None when the field is absent or not a
            known field identifier

        Raises:
            InvalidInput: If url is empty or not a string
        """
        record = self.parse(url, flatten_query=flatten_query)
        try:
            return record.get(field_id)
        except InvalidInput:
            logger.debug(f"Lookup of unknown field {field_id!r}")
            return None


# Default decomposer instance
_decomposer: Optional[URLDecomposer] = None


def get_decomposer() -> URLDecomposer:
    """Get or create the default decomposer."""
    global _decomposer
    if _decomposer is None:
        _decomposer = URLDecomposer()
    return _decomposer


def reset_decomposer() -> None:
    """Reset the default decomposer (for testing)."""
    global _decomposer
    _decomposer = None


def parse(url: str, flatten_query: Optional[bool] = None) -> FieldRecord:
    """Decompose a URL with the default decomposer."""
    return get_decomposer().parse(url, flatten_query=flatten_query)


def lookup(url: str, field_id: Union[Field, str]) -> Any:
    """Return one field of a URL decomposed with the default decomposer."""
    return get_decomposer().lookup(url, field_id)
