"""Risk classification for a single auto-approve rule."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from .rules_danger import matched_danger_labels
from .rules_rm import is_dangerous_removal
from .syntax import SyntaxIssue, validate_syntax

GLOBAL_CLEAN_TOKEN = ":clean"


class RiskVerdict(str, Enum):
    SAFE = "safe"
    RISKY = "risky"


@dataclass(frozen=True)
class Rule:
    """One pattern from the auto-approve map with a boolean value."""

    pattern: str
    enabled: bool


@dataclass(frozen=True)
class NonBooleanEntry:
    """A pattern whose value is not a boolean; reported, never classified."""

    pattern: str


@dataclass
class Classification:
    """Every check run against one pattern, with the combined verdict."""

    pattern: str
    syntax_issues: list[SyntaxIssue] = field(default_factory=list)
    danger_labels: list[str] = field(default_factory=list)
    dangerous_removal: bool = False
    allowed: bool = True

    @property
    def verdict(self) -> RiskVerdict:
        risky = (
            bool(self.syntax_issues)
            or bool(self.danger_labels)
            or self.dangerous_removal
            or not self.allowed
        )
        return RiskVerdict.RISKY if risky else RiskVerdict.SAFE

    @property
    def risky(self) -> bool:
        return self.verdict is RiskVerdict.RISKY

    def reasons(self) -> list[str]:
        reasons: list[str] = []
        if self.syntax_issues:
            labels = ", ".join(issue.label for issue in self.syntax_issues)
            reasons.append(f"syntax issues: {labels}")
        for label in self.danger_labels:
            reasons.append(f"dangerous command: {label}")
        if self.dangerous_removal:
            reasons.append("recursive force delete outside known build artifacts")
        if not self.allowed:
            reasons.append("not an allowed prefix")
        return reasons


def build_safe_template(prefixes: Sequence[str]) -> re.Pattern[str]:
    """Build the anchored matcher for allowed patterns.

    Accepted shapes, for prefix `tachyon`:
      :tachyon-archiver:downloadZstd   (module + task)
      :tachyon-something               (module only)
      :clean                           (global clean)
    """
    alt = "|".join(re.escape(p) for p in prefixes)
    return re.compile(
        rf"^:({alt})-[A-Za-z0-9_-]+(:[A-Za-z0-9_-]+)?$|^{re.escape(GLOBAL_CLEAN_TOKEN)}$"
    )


def matches_allowed_prefix(pattern: str, allowed_prefixes: Sequence[str]) -> bool:
    """Return True if the pattern fits the allow template.

    With no prefixes the check is skipped and every pattern passes.
    """
    if not allowed_prefixes:
        return True
    return build_safe_template(allowed_prefixes).match(pattern) is not None


def evaluate(pattern: str, allowed_prefixes: Sequence[str] = ()) -> Classification:
    """Run every check against a pattern. Never raises."""
    return Classification(
        pattern=pattern,
        syntax_issues=validate_syntax(pattern).issues,
        danger_labels=matched_danger_labels(pattern),
        dangerous_removal=is_dangerous_removal(pattern),
        allowed=matches_allowed_prefix(pattern, allowed_prefixes),
    )


def classify(rule: Rule, allowed_prefixes: Sequence[str] = ()) -> RiskVerdict:
    return evaluate(rule.pattern, allowed_prefixes).verdict
