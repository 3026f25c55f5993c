"""
Error types raised by url_fields.
"""


class UrlFieldsError(Exception):
    """Base class for all url_fields errors."""


class InvalidInput(UrlFieldsError, ValueError):
    """
    Raised when an operation receives input it cannot work with.

    Covers an empty URL given to parse, a non-record given to join,
    unknown field identifiers or template names, and accessors called
    before anything has been parsed.
    """


class SuffixRuleSourceError(UrlFieldsError, RuntimeError):
    """Raised when public suffix rule data cannot be obtained."""
