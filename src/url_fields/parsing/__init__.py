"""
URL decomposition and reconstruction.

Handles tokenization, Field Records, templates and joining.
"""

from .accessor import URLAccessor
from .decomposer import (
    URLDecomposer,
    flatten_query_string,
    get_decomposer,
    lookup,
    parse,
    reset_decomposer,
)
from .fields import (
    CANONICAL_ORDER,
    DOMAIN,
    EXACT,
    REGEXP,
    SIMPLE,
    TEMPLATES,
    Field,
    FieldRecord,
    get_template,
)
from .reconstructor import join
from .uri import URIParts, split_uri

__all__ = [
    "URLDecomposer",
    "URLAccessor",
    "parse",
    "lookup",
    "join",
    "flatten_query_string",
    "get_decomposer",
    "reset_decomposer",
    "Field",
    "FieldRecord",
    "CANONICAL_ORDER",
    "REGEXP",
    "EXACT",
    "SIMPLE",
    "DOMAIN",
    "TEMPLATES",
    "get_template",
    "URIParts",
    "split_uri",
]
