"""
Configuration management for url_fields.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PUBLIC_SUFFIX_LIST_URL = "https://publicsuffix.org/list/public_suffix_list.dat"


class SuffixConfig(BaseSettings):
    """Configuration for the public suffix rule source."""

    source: Literal["bundled", "file", "url"] = Field(
        default="bundled",
        description="Where suffix rules come from: 'bundled', 'file' or 'url'",
    )
    file_path: Optional[Path] = Field(
        default=None, description="Rule file for source='file' (.zst allowed)"
    )
    url: str = Field(
        default=PUBLIC_SUFFIX_LIST_URL, description="Rule list URL for source='url'"
    )

    # Download cache (source='url' only)
    cache_dir: Path = Field(
        default=Path("./data/suffix_cache"),
        description="Directory holding the downloaded rule list",
    )
    cache_ttl_hours: float = Field(
        default=24.0, description="Age after which the cached list is refetched"
    )
    fetch_timeout_seconds: float = Field(
        default=30.0, description="HTTP timeout for fetching the rule list"
    )
    compression_level: int = Field(
        default=6, description="Zstd compression level for the cache (1-22)"
    )

    include_private_domains: bool = Field(
        default=True,
        description="Honor rules from the PRIVATE section of the list",
    )

    model_config = SettingsConfigDict(env_prefix="SUFFIX_")


class ParserConfig(BaseSettings):
    """Defaults for decomposition and reconstruction."""

    flatten_query: bool = Field(
        default=False, description="Flatten query strings into key/value mappings"
    )
    remove_www_subdomain: bool = Field(
        default=True, description="Drop a literal 'www' subdomain when joining"
    )
    default_template: str = Field(
        default="simple",
        description="Template used when none is given: regexp, exact, simple, domain",
    )

    model_config = SettingsConfigDict(env_prefix="PARSER_")


class Config(BaseSettings):
    """Main configuration."""

    suffix: SuffixConfig = Field(default_factory=SuffixConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_nested_delimiter="__"
    )


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
