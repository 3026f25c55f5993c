"""
Stateful convenience accessors over the last parsed URL.
"""

from typing import Optional

from url_fields.exceptions import InvalidInput

from .decomposer import URLDecomposer
from .fields import DOMAIN, FieldRecord
from .reconstructor import join


class URLAccessor:
    """
    Hold the most recently parsed URL and answer questions about it.

    Not safe for concurrent use; keep one accessor per thread.

    Usage:
        accessor = URLAccessor()
        accessor.get_host("http://www.pref.okinawa.jp/")    # www.pref.okinawa.jp
        accessor.get_domain()                               # pref.okinawa.jp
    """

    def __init__(self, decomposer: Optional[URLDecomposer] = None):
        self.decomposer = decomposer or URLDecomposer()
        self._record: Optional[FieldRecord] = None

    @property
    def record(self) -> Optional[FieldRecord]:
        """Last parsed record, or None before the first parse."""
        return self._record

    def parse(self, url: str, flatten_query: Optional[bool] = None) -> FieldRecord:
        """Parse url and keep the result as current state."""
        self._record = self.decomposer.parse(url, flatten_query=flatten_query)
        return self._record

    def _current(self, url: Optional[str]) -> FieldRecord:
        if url:
            self.parse(url)
        if self._record is None:
            raise InvalidInput("No URL has been parsed yet")
        return self._record

    def get_host(self, url: Optional[str] = None) -> Optional[str]:
        """Full host of url, or of the last parsed URL."""
        return self._current(url).host

    def get_domain(self, url: Optional[str] = None) -> str:
        """
        Join the record with the DOMAIN template.

        Only a literal 'www' subdomain is dropped; any other subdomain is
        kept ('jp2.pref.okinawa.jp'). Use get_registrable_domain() for the
        bare eTLD+1.
        """
        return join(self._current(url), DOMAIN, remove_www_subdomain=True)

    def get_registrable_domain(self, url: Optional[str] = None) -> Optional[str]:
        """Registrable domain (eTLD+1) of url, or of the last parsed URL."""
        return self._current(url).domain
