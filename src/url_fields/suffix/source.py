"""
Suffix rule sources.

Supplies the RuleSet used for host splitting, from one of:
- bundled: the list shipped inside the publicsuffixlist distribution
- file: a local rule file (plain text or .zst)
- url: a remote list, cached on disk between runs
"""

import logging
from importlib import resources
from pathlib import Path
from typing import Optional

import requests
import zstandard as zstd

from url_fields.config import SuffixConfig, get_config
from url_fields.exceptions import SuffixRuleSourceError

from .cache import RuleCache
from .rules import RuleSet

logger = logging.getLogger(__name__)

BUNDLED_PACKAGE = "publicsuffixlist"
BUNDLED_FILENAME = "public_suffix_list.dat"


def read_bundled_list() -> str:
    """Read the rule list bundled with the publicsuffixlist package."""
    try:
        return (
            resources.files(BUNDLED_PACKAGE)
            .joinpath(BUNDLED_FILENAME)
            .read_text(encoding="utf-8")
        )
    except (ModuleNotFoundError, FileNotFoundError) as e:
        raise SuffixRuleSourceError(
            f"Bundled suffix list not available from '{BUNDLED_PACKAGE}': {e}"
        ) from e


def read_list_file(path: Path) -> str:
    """Read a rule file, decompressing .zst files."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SuffixRuleSourceError(f"Cannot read suffix list {path}: {e}") from e

    if path.suffix == ".zst":
        try:
            data = zstd.ZstdDecompressor().decompress(data)
        except zstd.ZstdError as e:
            raise SuffixRuleSourceError(f"Cannot decompress suffix list {path}: {e}") from e

    return data.decode("utf-8")


class SuffixRuleSource:
    """
    Load and memoize the public suffix RuleSet.

    Usage:
        source = SuffixRuleSource()
        rules = source.load()
    """

    def __init__(self, config: Optional[SuffixConfig] = None):
        """
        Initialize the source.

        Args:
            config: Suffix settings (defaults to get_config().suffix)
        """
        self.config = config or get_config().suffix
        self.cache = RuleCache(
            self.config.cache_dir, compression_level=self.config.compression_level
        )
        self._rules: Optional[RuleSet] = None

    def load(self) -> RuleSet:
        """
        Get the rule set, loading it on first use.

        Raises:
            SuffixRuleSourceError: If no rule data can be obtained
        """
        if self._rules is None:
            self._rules = self._load()
        return self._rules

    def refresh(self) -> RuleSet:
        """Drop the memoized rule set and load again (refetching remote lists)."""
        self._rules = None
        if self.config.source == "url":
            self._rules = self._fetch(allow_fresh_cache=False)
            return self._rules
        return self.load()

    def _load(self) -> RuleSet:
        source = self.config.source
        logger.info(f"Loading suffix rules (source={source})")

        if source == "bundled":
            text = read_bundled_list()
        elif source == "file":
            if self.config.file_path is None:
                raise SuffixRuleSourceError("source='file' requires file_path")
            text = read_list_file(self.config.file_path)
        elif source == "url":
            return self._fetch(allow_fresh_cache=True)
        else:
            raise SuffixRuleSourceError(f"Unknown suffix rule source: {source!r}")

        return self._parse(text)

    def _rules_from_text(self, text: str) -> RuleSet:
        return RuleSet.from_text(
            text, include_private=self.config.include_private_domains
        )

    def _parse(self, text: str) -> RuleSet:
        rules = self._rules_from_text(text)
        if not rules:
            raise SuffixRuleSourceError("Suffix rule list contains no valid rules")
        logger.info(f"Loaded {len(rules)} suffix rules (fingerprint {rules.fingerprint})")
        return rules

    def _fetch(self, allow_fresh_cache: bool) -> RuleSet:
        """
        Get the remote rule set, going through the on-disk cache.

        Args:
            allow_fresh_cache: Use a cache younger than the TTL without fetching

        Returns:
            Parsed RuleSet
        """
        cached = self.cache.read()
        if (
            allow_fresh_cache
            and cached is not None
            and cached.source_url == self.config.url
            and cached.is_fresh(self.config.cache_ttl_hours)
        ):
            logger.info(f"Using cached suffix list from {cached.fetched_at}")
            return self._parse(cached.text)

        logger.info(f"Fetching suffix list from {self.config.url}")
        try:
            resp = requests.get(self.config.url, timeout=self.config.fetch_timeout_seconds)
            resp.raise_for_status()
            text = resp.text
        except requests.RequestException as e:
            if cached is not None:
                logger.warning(
                    f"Failed to fetch suffix list ({e}); "
                    f"falling back to stale cache from {cached.fetched_at}"
                )
                return self._parse(cached.text)
            raise SuffixRuleSourceError(
                f"Failed to fetch suffix list from {self.config.url}: {e}"
            ) from e

        rules = self._rules_from_text(text)
        if not rules:
            if cached is not None:
                logger.warning("Fetched suffix list is empty; keeping cached copy")
                return self._parse(cached.text)
            raise SuffixRuleSourceError(
                f"Suffix list from {self.config.url} contains no valid rules"
            )

        self.cache.write(text, source_url=self.config.url, rule_count=len(rules))
        logger.info(f"Loaded {len(rules)} suffix rules (fingerprint {rules.fingerprint})")
        return rules


# Global source instance
_default_source: Optional[SuffixRuleSource] = None


def get_default_source() -> SuffixRuleSource:
    """Get or create the process-wide rule source."""
    global _default_source
    if _default_source is None:
        _default_source = SuffixRuleSource()
    return _default_source


def reset_default_source() -> None:
    """Reset the process-wide rule source (for testing)."""
    global _default_source
    _default_source = None
