"""
Public suffix rule sets.

Parses rule lists in the publicsuffix.org file format:
- One rule per line, read up to the first whitespace
- Lines starting with // are comments
- "*.x" is a wildcard rule, "!x" an exception rule
- "===BEGIN PRIVATE DOMAINS===" / "===END PRIVATE DOMAINS===" comments
  delimit privately-registered suffixes
"""

import logging
from dataclasses import dataclass
from typing import Iterable

import xxhash

logger = logging.getLogger(__name__)

BEGIN_PRIVATE_MARKER = "===BEGIN PRIVATE DOMAINS==="
END_PRIVATE_MARKER = "===END PRIVATE DOMAINS==="


def _valid_name(name: str) -> bool:
    """Check a rule body: non-empty labels, no wildcard characters."""
    if not name or "*" in name or "!" in name:
        return False
    return all(name.split("."))


@dataclass(frozen=True)
class RuleSet:
    """
    Immutable set of public suffix rules.

    Attributes:
        plain: Plain suffix rules (e.g. 'co.uk')
        wildcards: Parents of wildcard rules ('*.kawasaki.jp' is stored as 'kawasaki.jp')
        exceptions: Exception rules without the '!' ('city.kawasaki.jp')
    """

    plain: frozenset[str] = frozenset()
    wildcards: frozenset[str] = frozenset()
    exceptions: frozenset[str] = frozenset()

    @classmethod
    def from_lines(cls, lines: Iterable[str], include_private: bool = True) -> "RuleSet":
        """
        Build a rule set from rule file lines.

        Malformed entries are skipped.

        Args:
            lines: Lines of a public suffix list file (or bare rules)
            include_private: Keep rules from the PRIVATE section

        Returns:
            Parsed RuleSet
        """
        plain: set[str] = set()
        wildcards: set[str] = set()
        exceptions: set[str] = set()
        in_private = False
        skipped = 0

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue

            if line.startswith("//"):
                if BEGIN_PRIVATE_MARKER in line:
                    in_private = True
                elif END_PRIVATE_MARKER in line:
                    in_private = False
                continue

            if in_private and not include_private:
                continue

            rule = line.split()[0].lower()

            if rule.startswith("!"):
                name = rule[1:]
                if _valid_name(name) and "." in name:
                    exceptions.add(name)
                    continue
            elif rule.startswith("*."):
                name = rule[2:]
                if _valid_name(name):
                    wildcards.add(name)
                    continue
            elif _valid_name(rule):
                plain.add(rule)
                continue

            skipped += 1
            logger.debug(f"Skipping malformed suffix rule: {rule!r}")

        if skipped:
            logger.info(f"Skipped {skipped} malformed suffix rules")

        return cls(
            plain=frozenset(plain),
            wildcards=frozenset(wildcards),
            exceptions=frozenset(exceptions),
        )

    @classmethod
    def from_text(cls, text: str, include_private: bool = True) -> "RuleSet":
        """Build a rule set from the full text of a rule file."""
        return cls.from_lines(text.splitlines(), include_private=include_private)

    def to_lines(self) -> list[str]:
        """Render rules back into sorted rule-file lines."""
        lines = list(self.plain)
        lines.extend(f"*.{name}" for name in self.wildcards)
        lines.extend(f"!{name}" for name in self.exceptions)
        return sorted(lines)

    @property
    def fingerprint(self) -> str:
        """xxh3_64 hex digest over the sorted rules."""
        return xxhash.xxh3_64("\n".join(self.to_lines()).encode("utf-8")).hexdigest()

    def __len__(self) -> int:
        return len(self.plain) + len(self.wildcards) + len(self.exceptions)
