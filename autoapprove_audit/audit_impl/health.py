"""Per-file findings and per-prefix health statistics."""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .classifier import NonBooleanEntry, Rule, evaluate

logger = logging.getLogger(__name__)

UNKNOWN_PREFIX = "unknown"
STATUS_HEALTHY = "healthy"
STATUS_CRITICAL = "critical"
STATUS_MIXED = "mixed"

_PREFIX_PATTERN = re.compile(r"^:([A-Za-z0-9_]+)[-:]")


def extract_prefix(pattern: str) -> str:
    """Return the leading identifier of a pattern, e.g. `:tachyon-x` -> `tachyon`."""
    match = _PREFIX_PATTERN.match(pattern)
    return match.group(1) if match else UNKNOWN_PREFIX


@dataclass
class PrefixHealth:
    """Risk statistics for every rule sharing one prefix."""

    prefix: str
    total_patterns: int = 0
    risky_patterns: int = 0
    safe_patterns: int = 0
    patterns: list[str] = field(default_factory=list)
    risky_list: list[str] = field(default_factory=list)

    def record(self, pattern: str, risky: bool) -> None:
        self.total_patterns += 1
        self.patterns.append(pattern)
        if risky:
            self.risky_patterns += 1
            self.risky_list.append(pattern)
        else:
            self.safe_patterns += 1

    def merge(self, other: "PrefixHealth") -> "PrefixHealth":
        """Combine two entries for the same prefix into a new one."""
        if other.prefix != self.prefix:
            raise ValueError(f"cannot merge prefix {other.prefix!r} into {self.prefix!r}")
        return PrefixHealth(
            prefix=self.prefix,
            total_patterns=self.total_patterns + other.total_patterns,
            risky_patterns=self.risky_patterns + other.risky_patterns,
            safe_patterns=self.safe_patterns + other.safe_patterns,
            patterns=self.patterns + other.patterns,
            risky_list=self.risky_list + other.risky_list,
        )

    @property
    def risk_percentage(self) -> int:
        if self.total_patterns == 0:
            return 0
        # halves round up: 1/8 -> 13
        return int(self.risky_patterns * 100 / self.total_patterns + 0.5)

    @property
    def status(self) -> str:
        if self.risky_patterns == 0:
            return STATUS_HEALTHY
        if self.safe_patterns == 0:
            return STATUS_CRITICAL
        return STATUS_MIXED

    def to_dict(self) -> dict[str, Any]:
        return {
            "prefix": self.prefix,
            "totalPatterns": self.total_patterns,
            "riskyPatterns": self.risky_patterns,
            "safePatterns": self.safe_patterns,
            "patterns": list(self.patterns),
            "riskyList": list(self.risky_list),
        }


@dataclass
class FileResult:
    """Outcome of ingesting one settings file."""

    file: str
    risky: list[str] = field(default_factory=list)
    non_boolean: list[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.risky or self.non_boolean)


@dataclass
class Finding:
    """A settings file with risky or non-boolean entries."""

    file: str
    risky_patterns: list[str]
    non_boolean: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": self.file, "riskyPatterns": list(self.risky_patterns)}
        if self.non_boolean:
            data["nonBoolean"] = list(self.non_boolean)
        return data


def split_rule_map(rule_map: Any) -> tuple[list[Rule], list[NonBooleanEntry]]:
    """Separate boolean rules from non-boolean entries; bad shapes yield nothing."""
    rules: list[Rule] = []
    non_boolean: list[NonBooleanEntry] = []
    if not isinstance(rule_map, Mapping):
        return rules, non_boolean

    for pattern, value in rule_map.items():
        if isinstance(value, bool):
            rules.append(Rule(pattern=str(pattern), enabled=value))
        else:
            non_boolean.append(NonBooleanEntry(pattern=str(pattern)))
    return rules, non_boolean


def aggregate(results: Iterable[FileResult]) -> list[Finding]:
    """One Finding per file with issues, in encounter order."""
    return [
        Finding(file=r.file, risky_patterns=list(r.risky), non_boolean=list(r.non_boolean))
        for r in results
        if r.has_issues
    ]


class HealthAggregator:
    """Accumulates classification results across files for one audit run."""

    def __init__(self, allowed_prefixes: Sequence[str] = ()) -> None:
        self.allowed_prefixes = tuple(allowed_prefixes)
        self.prefix_health: dict[str, PrefixHealth] = {}
        self.results: list[FileResult] = []

    def _health_for(self, prefix: str) -> PrefixHealth:
        health = self.prefix_health.get(prefix)
        if health is None:
            health = PrefixHealth(prefix=prefix)
            self.prefix_health[prefix] = health
        return health

    def ingest(self, file: str | Path, rule_map: Any) -> FileResult:
        """Classify every enabled rule of one file and record the outcome.

        Disabled rules are skipped entirely: they count toward neither the
        prefix totals nor the file's risky list.
        """
        result = FileResult(file=str(file))
        rules, non_boolean = split_rule_map(rule_map)
        result.non_boolean = [entry.pattern for entry in non_boolean]

        for rule in rules:
            if not rule.enabled:
                continue

            classification = evaluate(rule.pattern, self.allowed_prefixes)
            health = self._health_for(extract_prefix(rule.pattern))
            health.record(rule.pattern, classification.risky)

            if classification.risky:
                logger.debug(
                    "%s: risky pattern %r (%s)",
                    result.file,
                    rule.pattern,
                    "; ".join(classification.reasons()),
                )
                if classification.syntax_issues:
                    labels = ", ".join(i.label for i in classification.syntax_issues)
                    result.risky.append(f"syntax issues: {labels}")
                result.risky.append(rule.pattern)

        self.results.append(result)
        return result

    def findings(self) -> list[Finding]:
        return aggregate(self.results)

    def sorted_health(self) -> list[PrefixHealth]:
        """Prefix entries with the most patterns first; ties keep insertion order."""
        return sorted(self.prefix_health.values(), key=lambda h: -h.total_patterns)
