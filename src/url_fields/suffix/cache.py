"""
On-disk cache for downloaded public suffix lists.

Layout under the cache directory:
- public_suffix_list.dat.zst: rule list text, zstd compressed
- manifest.json: source URL, fetch time, rule count and fingerprint
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

import xxhash
import zstandard as zstd

logger = logging.getLogger(__name__)

LIST_FILENAME = "public_suffix_list.dat.zst"
MANIFEST_FILENAME = "manifest.json"


def text_fingerprint(text: str) -> str:
    """xxh3_64 hex digest of rule list text."""
    return xxhash.xxh3_64(text.encode("utf-8")).hexdigest()


class CacheEntry:
    """
    A cached rule list together with its manifest data.
    """

    def __init__(
        self,
        text: str,
        source_url: str,
        fetched_at: str,
        rule_count: int,
        fingerprint: str,
    ):
        self.text = text
        self.source_url = source_url
        self.fetched_at = fetched_at
        self.rule_count = rule_count
        self.fingerprint = fingerprint

    def age(self) -> timedelta:
        """Time elapsed since the list was fetched."""
        return datetime.now(timezone.utc) - datetime.fromisoformat(self.fetched_at)

    def is_fresh(self, ttl_hours: float) -> bool:
        """Check whether the entry is younger than ttl_hours."""
        return self.age() < timedelta(hours=ttl_hours)


class RuleCache:
    """
    Persist a downloaded rule list with atomic writes.
    """

    def __init__(self, cache_dir: Path, compression_level: int = 6):
        """
        Initialize the cache.

        Args:
            cache_dir: Directory for cache files
            compression_level: Zstd compression level (1-22)
        """
        self.cache_dir = Path(cache_dir)
        self.compression_level = compression_level
        self.list_path = self.cache_dir / LIST_FILENAME
        self.manifest_path = self.cache_dir / MANIFEST_FILENAME

    def write(self, text: str, source_url: str, rule_count: int) -> CacheEntry:
        """
        Store a rule list.

        Args:
            text: Full rule list text as downloaded
            source_url: URL the list came from
            rule_count: Number of valid rules parsed from text

        Returns:
            The stored CacheEntry
        """
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        entry = CacheEntry(
            text=text,
            source_url=source_url,
            fetched_at=datetime.now(timezone.utc).isoformat(),
            rule_count=rule_count,
            fingerprint=text_fingerprint(text),
        )

        compressor = zstd.ZstdCompressor(level=self.compression_level)
        raw = text.encode("utf-8")
        compressed = compressor.compress(raw)

        tmp_list = self.list_path.with_suffix(".tmp")
        tmp_list.write_bytes(compressed)
        tmp_list.replace(self.list_path)

        manifest = {
            "source_url": entry.source_url,
            "fetched_at": entry.fetched_at,
            "rule_count": entry.rule_count,
            "fingerprint": entry.fingerprint,
        }
        tmp_manifest = self.manifest_path.with_suffix(".tmp")
        tmp_manifest.write_text(json.dumps(manifest, indent=2, sort_keys=True))
        tmp_manifest.replace(self.manifest_path)

        logger.info(
            f"Cached suffix list: {len(raw):,} bytes → {len(compressed):,} bytes "
            f"({rule_count} rules) at {self.list_path}"
        )
        return entry

    def read(self) -> CacheEntry | None:
        """
        Load the cached rule list.

        Returns:
            CacheEntry, or None when missing, unreadable or corrupted
        """
        if not self.list_path.exists() or not self.manifest_path.exists():
            return None

        try:
            manifest = json.loads(self.manifest_path.read_text())
            fetched_at = manifest["fetched_at"]
            decompressor = zstd.ZstdDecompressor()
            text = decompressor.decompress(self.list_path.read_bytes()).decode("utf-8")
        except (KeyError, json.JSONDecodeError, zstd.ZstdError, UnicodeDecodeError) as exc:
            logger.warning(f"Ignoring unreadable suffix cache {self.cache_dir}: {exc}")
            return None

        fingerprint = text_fingerprint(text)
        if fingerprint != manifest.get("fingerprint"):
            logger.warning(
                f"Ignoring suffix cache {self.cache_dir}: fingerprint mismatch "
                f"({fingerprint} != {manifest.get('fingerprint')})"
            )
            return None

        return CacheEntry(
            text=text,
            source_url=manifest.get("source_url", ""),
            fetched_at=fetched_at,
            rule_count=int(manifest.get("rule_count", 0)),
            fingerprint=fingerprint,
        )

    def clear(self) -> None:
        """Remove cached files."""
        for path in (self.list_path, self.manifest_path):
            if path.exists():
                path.unlink()
