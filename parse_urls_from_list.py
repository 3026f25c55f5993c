#!/usr/bin/env python3
"""
Batch URL decomposition from a URL list.

Reads URLs from a text file, decomposes each one and prints a JSON line
with its fields and the URL rebuilt with the chosen template.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

# Ensure local package imports work when running as a script
sys.path.insert(0, str(Path(__file__).parent / "src"))

from url_fields.config import get_config
from url_fields.exceptions import InvalidInput
from url_fields.logging_setup import configure_logging
from url_fields.parsing import TEMPLATES, URLDecomposer, get_template, join
from url_fields.suffix import SuffixRuleSource

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    config = get_config()
    parser = argparse.ArgumentParser(
        description="Decompose URLs from a list and rebuild them from a field template."
    )
    parser.add_argument(
        "--url-file",
        required=True,
        type=Path,
        help="Path to a file containing URLs (one per line, '#' comments allowed).",
    )
    parser.add_argument(
        "--template",
        type=str.lower,
        choices=sorted(TEMPLATES),
        default=config.parser.default_template.lower(),
        help="Exclusion template for the rebuilt URL.",
    )
    parser.add_argument(
        "--flatten-query",
        default=config.parser.flatten_query,
        action=argparse.BooleanOptionalAction,
        help="Emit the query string as a key/value mapping.",
    )
    parser.add_argument(
        "--keep-www",
        action="store_true",
        default=not config.parser.remove_www_subdomain,
        help="Keep a 'www' subdomain in the rebuilt URL.",
    )
    parser.add_argument(
        "--suffix-source",
        choices=["bundled", "file", "url"],
        default=config.suffix.source,
        help="Where public suffix rules come from (defaults to config).",
    )
    parser.add_argument(
        "--suffix-file",
        type=Path,
        default=config.suffix.file_path,
        help="Suffix rule file for --suffix-source=file.",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        help="Logging level (defaults to config).",
    )
    return parser.parse_args(argv)


def load_urls(path: Path) -> list[str]:
    """
    Read URLs from file.

    Ignores blank lines and comments starting with '#'.
    """
    if not path.exists():
        raise FileNotFoundError(f"URL list file not found: {path}")

    urls: list[str] = []
    for raw_line in path.read_text().splitlines():
        entry = raw_line.strip()
        if not entry or entry.startswith("#"):
            continue
        urls.append(entry)

    return urls


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    config = get_config()
    suffix_config = config.suffix.model_copy(
        update={"source": args.suffix_source, "file_path": args.suffix_file}
    )
    template = get_template(args.template)
    decomposer = URLDecomposer(SuffixRuleSource(suffix_config))

    urls = load_urls(args.url_file)
    logger.info("URLs to parse (%d) with template '%s'", len(urls), args.template)

    start_time = time.time()
    failed = 0
    for url in urls:
        try:
            record = decomposer.parse(url, flatten_query=args.flatten_query)
        except InvalidInput:
            logger.exception("Skipping unparseable URL %r", url)
            failed += 1
            continue

        output = record.to_dict()
        output["url"] = url
        output["joined"] = join(
            record, template, remove_www_subdomain=not args.keep_www
        )
        print(json.dumps(output, ensure_ascii=False))

    logger.info(
        "Parsed %d URLs in %.2fs (%d failed)",
        len(urls) - failed,
        time.time() - start_time,
        failed,
    )
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
