"""
Field identifiers, the Field Record and reconstruction templates.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Optional, Union

from url_fields.exceptions import InvalidInput


class Field(str, Enum):
    """Closed set of URL field identifiers."""

    SCHEME = "scheme"
    HOST = "host"
    SUBDOMAIN = "subdomain"
    DOMAIN = "domain"
    PORT = "port"
    USER = "user"
    PASS = "pass"
    PATH = "path"
    QUERY = "query"
    FRAGMENT = "fragment"

    @classmethod
    def coerce(cls, value: Union["Field", str]) -> "Field":
        """Convert an identifier string to a Field."""
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidInput(f"Unknown URL field: {value!r}") from e


# Order used when rebuilding URLs; separators depend on it
CANONICAL_ORDER: tuple[Field, ...] = (
    Field.HOST,
    Field.SCHEME,
    Field.USER,
    Field.PASS,
    Field.SUBDOMAIN,
    Field.DOMAIN,
    Field.PORT,
    Field.PATH,
    Field.QUERY,
    Field.FRAGMENT,
)

# Templates: fields excluded when joining
REGEXP = frozenset(
    {
        Field.SCHEME,
        Field.HOST,
        Field.SUBDOMAIN,
        Field.DOMAIN,
        Field.USER,
        Field.PASS,
        Field.PORT,
        Field.QUERY,
        Field.FRAGMENT,
    }
)
EXACT = frozenset(
    {Field.SCHEME, Field.HOST, Field.USER, Field.PASS, Field.PORT, Field.FRAGMENT}
)
SIMPLE = frozenset(
    {
        Field.SCHEME,
        Field.HOST,
        Field.USER,
        Field.PASS,
        Field.PORT,
        Field.QUERY,
        Field.FRAGMENT,
    }
)
DOMAIN = frozenset(
    {
        Field.SCHEME,
        Field.HOST,
        Field.USER,
        Field.PASS,
        Field.PORT,
        Field.PATH,
        Field.QUERY,
        Field.FRAGMENT,
    }
)

TEMPLATES: Mapping[str, frozenset[Field]] = MappingProxyType(
    {"regexp": REGEXP, "exact": EXACT, "simple": SIMPLE, "domain": DOMAIN}
)


def get_template(name: str) -> frozenset[Field]:
    """
    Look up a template by name (case-insensitive).

    Raises:
        InvalidInput: If no template has that name
    """
    try:
        return TEMPLATES[name.lower()]
    except (KeyError, AttributeError) as e:
        raise InvalidInput(
            f"Unknown template {name!r}; expected one of {sorted(TEMPLATES)}"
        ) from e


# Record attribute holding each field ("pass" is a keyword)
_ATTRIBUTES = {f: ("password" if f is Field.PASS else f.value) for f in Field}

QueryValue = Union[str, Mapping[str, str], None]


@dataclass(frozen=True)
class FieldRecord:
    """
    A URL decomposed into semantic fields.

    Attributes:
        scheme: URL scheme (e.g. 'http')
        host: Full host as parsed
        subdomain: Labels before the registrable domain (may be empty)
        domain: Registrable domain (eTLD+1)
        port: Port text as written in the URL
        user: Userinfo user name
        password: Userinfo password (field identifier 'pass')
        path: Path, '/' when the URL has none
        query: Raw query string, or a read-only mapping when flattened
        fragment: Fragment without '#'
    """

    scheme: Optional[str] = None
    host: Optional[str] = None
    subdomain: Optional[str] = None
    domain: Optional[str] = None
    port: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    path: str = "/"
    query: QueryValue = None
    fragment: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.query, Mapping) and not isinstance(self.query, MappingProxyType):
            object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def get(self, field_id: Union[Field, str]) -> Any:
        """Read a value by field identifier."""
        return getattr(self, _ATTRIBUTES[Field.coerce(field_id)])

    def replace(self, **changes: Any) -> "FieldRecord":
        """Return a copy with the given attributes changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict keyed by field identifier, in canonical order."""
        result = {}
        for f in CANONICAL_ORDER:
            value = self.get(f)
            if isinstance(value, Mapping):
                value = dict(value)
            result[f.value] = value
        return result

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldRecord":
        """
        Build a record from a mapping keyed by field identifier.

        Fields missing from the mapping stay empty; no path is added.

        Raises:
            InvalidInput: If a key is not a field identifier
        """
        kwargs = {"path": ""}
        for key, value in data.items():
            kwargs[_ATTRIBUTES[Field.coerce(key)]] = value
        return cls(**kwargs)


if {f.name for f in fields(FieldRecord)} != set(_ATTRIBUTES.values()):
    raise RuntimeError("Every URL field needs a FieldRecord attribute")
