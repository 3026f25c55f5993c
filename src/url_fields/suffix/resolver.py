"""
Registrable domain (eTLD+1) resolution.

Splits a host into its subdomain and registrable domain against an
in-memory RuleSet. No file or network access happens here.
"""

import ipaddress

from .rules import RuleSet


def _is_ip_literal(host: str) -> bool:
    """Check whether host is an IPv4 address or a bracketed IPv6 address."""
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def public_suffix_length(labels: list[str], rules: RuleSet) -> int:
    """
    Count the labels forming the effective public suffix.

    Exception rules prevail over every other match and shorten the
    suffix by one label. Otherwise the longest plain or wildcard match
    wins. Without any match the suffix is the last label.

    Args:
        labels: Lower-cased host labels
        rules: Rule set to match against

    Returns:
        Number of trailing labels in the public suffix
    """
    total = len(labels)

    for i in range(total):
        if ".".join(labels[i:]) in rules.exceptions:
            return total - i - 1

    for i in range(total):
        candidate = labels[i:]
        if not all(candidate):
            continue
        if ".".join(candidate) in rules.plain:
            return total - i
        if len(candidate) >= 2 and ".".join(candidate[1:]) in rules.wildcards:
            return total - i

    return 1


def resolve(host: str, rules: RuleSet) -> tuple[str, str]:
    """
    Split a host into (subdomain, registrable domain).

    Examples:
        www.pref.okinawa.jp -> ("www", "pref.okinawa.jp")
        www.example.com.    -> ("www", "example.com.")
        localhost           -> ("", "localhost")

    Args:
        host: Host name as parsed from a URL
        rules: Public suffix rule set

    Returns:
        Tuple of (subdomain, domain). Subdomain may be empty.
    """
    if not host:
        return "", ""

    # Fully-qualified form: the root label stays on the domain
    if host.endswith(".") and host != ".":
        subdomain, domain = resolve(host[:-1], rules)
        return subdomain, domain + "."

    if _is_ip_literal(host):
        return "", host

    labels = host.split(".")
    if len(labels) == 1:
        return "", host

    suffix_len = public_suffix_length([label.lower() for label in labels], rules)

    # Host is itself a public suffix: nothing registrable under it
    if suffix_len >= len(labels):
        return "", host

    domain_len = suffix_len + 1
    if domain_len >= len(labels):
        return "", host

    return ".".join(labels[:-domain_len]), ".".join(labels[-domain_len:])
