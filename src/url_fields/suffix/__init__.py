"""
Public suffix handling.

Loads suffix rule lists and splits hosts into subdomain and registrable domain.
"""

from .cache import CacheEntry, RuleCache
from .resolver import public_suffix_length, resolve
from .rules import RuleSet
from .source import SuffixRuleSource, get_default_source, reset_default_source

__all__ = [
    "RuleSet",
    "resolve",
    "public_suffix_length",
    "SuffixRuleSource",
    "get_default_source",
    "reset_default_source",
    "RuleCache",
    "CacheEntry",
]
