"""
Raw URI tokenization.

Thin layer over urllib.parse.urlsplit that also splits the authority into
user, password, host and port without validating them.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from url_fields.exceptions import InvalidInput

_AUTHORITY_RE = re.compile(r"^([^:/?#]+:)?//")


@dataclass(frozen=True)
class URIParts:
    """Raw URI components. Absent components are None."""

    scheme: Optional[str]
    user: Optional[str]
    password: Optional[str]
    host: Optional[str]
    port: Optional[str]
    path: str
    query: Optional[str]
    fragment: Optional[str]


def split_authority(netloc: str) -> tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
    """
    Split an authority into (user, password, host, port).

    IPv6 hosts keep their brackets. The host is lower-cased.
    """
    userinfo, at, hostport = netloc.rpartition("@")
    user = password = None
    if at:
        user, colon, pw = userinfo.partition(":")
        password = pw if colon else None

    if hostport.startswith("["):
        end = hostport.find("]")
        if end == -1:
            raise InvalidInput(f"Unterminated IPv6 host in authority: {netloc!r}")
        host, rest = hostport[: end + 1], hostport[end + 1 :]
        port = rest[1:] if rest.startswith(":") else ""
    else:
        host, _, port = hostport.partition(":")

    return user, password, host.lower() or None, port or None


def split_uri(url: str) -> URIParts:
    """
    Tokenize a URL into raw components.

    URLs without a '//' authority marker (e.g. 'www.example.com/page') are
    read authority-first and get no scheme.

    Raises:
        InvalidInput: If urllib cannot split the URL
    """
    if not _AUTHORITY_RE.match(url):
        url = "//" + url

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidInput(f"Failed to parse URL '{url}': {e}") from e

    user, password, host, port = split_authority(parts.netloc)

    return URIParts(
        scheme=parts.scheme or None,
        user=user,
        password=password,
        host=host,
        port=port,
        path=parts.path,
        query=parts.query or None,
        fragment=parts.fragment or None,
    )
