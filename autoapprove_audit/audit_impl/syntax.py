"""Syntax validation for auto-approve patterns."""

from dataclasses import dataclass, field
from enum import Enum

MAX_PATTERN_LENGTH = 1000


class SyntaxIssue(str, Enum):
    """A structural problem found in a pattern."""

    UNTERMINATED_SINGLE_QUOTE = "unterminated-single-quote"
    UNTERMINATED_DOUBLE_QUOTE = "unterminated-double-quote"
    UNTERMINATED_BACKTICK = "unterminated-backtick"
    UNBALANCED_PARENS = "unbalanced-parens"
    UNBALANCED_BRACKETS = "unbalanced-brackets"
    UNBALANCED_BRACES = "unbalanced-braces"
    DIRECTORY_TRAVERSAL = "directory-traversal"
    NULL_BYTE = "null-byte"
    TOO_LONG = "too-long"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SyntaxIssue.UNTERMINATED_SINGLE_QUOTE: "unterminated single quotes",
    SyntaxIssue.UNTERMINATED_DOUBLE_QUOTE: "unterminated double quotes",
    SyntaxIssue.UNTERMINATED_BACKTICK: "unterminated backticks",
    SyntaxIssue.UNBALANCED_PARENS: "unbalanced parentheses",
    SyntaxIssue.UNBALANCED_BRACKETS: "unbalanced brackets",
    SyntaxIssue.UNBALANCED_BRACES: "unbalanced braces",
    SyntaxIssue.DIRECTORY_TRAVERSAL: "directory traversal (..)",
    SyntaxIssue.NULL_BYTE: "null bytes detected",
    SyntaxIssue.TOO_LONG: "pattern too long",
}

_QUOTES = {
    "'": SyntaxIssue.UNTERMINATED_SINGLE_QUOTE,
    '"': SyntaxIssue.UNTERMINATED_DOUBLE_QUOTE,
    "`": SyntaxIssue.UNTERMINATED_BACKTICK,
}

_PAIRS = (
    ("(", ")", SyntaxIssue.UNBALANCED_PARENS),
    ("[", "]", SyntaxIssue.UNBALANCED_BRACKETS),
    ("{", "}", SyntaxIssue.UNBALANCED_BRACES),
)


@dataclass
class SyntaxResult:
    """Result of validating one pattern."""

    issues: list[SyntaxIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    def labels(self) -> list[str]:
        return [issue.label for issue in self.issues]


def validate_syntax(pattern: str) -> SyntaxResult:
    """Scan a pattern for unterminated quotes, unbalanced brackets and bad paths.

    Quote parity is counted per quote kind over unescaped characters; a
    backslash escapes a following quote or backslash. Bracket characters are
    tallied outside quoted strings, escaped or not, so `\\(` in a `/regex/` key
    still needs its `\\)`. All issues found are reported, in a fixed order.
    """
    quote_counts = dict.fromkeys(_QUOTES, 0)
    bracket_counts = {ch: 0 for pair in _PAIRS for ch in pair[:2]}
    open_quote: str | None = None
    escape = False

    for ch in pattern:
        if escape:
            escape = False
            if ch in quote_counts or ch == "\\":
                continue

        if ch == "\\":
            escape = True
            continue

        if ch in quote_counts:
            quote_counts[ch] += 1
            if open_quote is None:
                open_quote = ch
            elif open_quote == ch:
                open_quote = None
            continue

        if open_quote is None and ch in bracket_counts:
            bracket_counts[ch] += 1

    result = SyntaxResult()
    for quote, issue in _QUOTES.items():
        if quote_counts[quote] % 2 != 0:
            result.issues.append(issue)

    for opener, closer, issue in _PAIRS:
        if bracket_counts[opener] != bracket_counts[closer]:
            result.issues.append(issue)

    if "/../" in pattern or "\\..\\" in pattern:
        result.issues.append(SyntaxIssue.DIRECTORY_TRAVERSAL)

    if "\0" in pattern:
        result.issues.append(SyntaxIssue.NULL_BYTE)

    if len(pattern) > MAX_PATTERN_LENGTH:
        result.issues.append(SyntaxIssue.TOO_LONG)

    return result
