"""Text and JSON reporting for audit results."""

import json
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape

from .classifier import build_safe_template
from .health import STATUS_CRITICAL, STATUS_HEALTHY, Finding, PrefixHealth

_STATUS_MARKERS = {
    STATUS_HEALTHY: "✅",
    STATUS_CRITICAL: "❌",
}
_MIXED_MARKER = "⚠️"
_MAX_LISTED_RISKY = 3


def make_console(*, stderr: bool = False, no_color: bool = False) -> Console:
    """Console configured so patterns are printed verbatim."""
    return Console(
        stderr=stderr,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        no_color=no_color,
    )


class TextReporter:
    """Human-readable, colourised report."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def _line(self, text: str = "") -> None:
        self.console.print(text)

    def prefix_health(self, health: Sequence[PrefixHealth]) -> None:
        self._line("\n📊 Prefix Health Report:")
        self._line("========================")
        for entry in health:
            marker = _STATUS_MARKERS.get(entry.status, _MIXED_MARKER)
            self._line(
                f"{marker} {escape(entry.prefix)}: "
                f"{entry.safe_patterns}/{entry.total_patterns} safe "
                f"({entry.risk_percentage}% risky)"
            )
            if entry.risky_patterns > 0:
                shown = ", ".join(entry.risky_list[:_MAX_LISTED_RISKY])
                more = "..." if len(entry.risky_list) > _MAX_LISTED_RISKY else ""
                self._line(f"    Risky patterns: {escape(shown)}{more}")
        self._line("")

    def success(self, prefixes: Sequence[str]) -> None:
        suffix = f" for prefixes: {', '.join(prefixes)}" if prefixes else ""
        self._line(f"[green]✅ All autoApprove entries are safe{escape(suffix)}[/]")

    def findings(self, findings: Sequence[Finding], prefixes: Sequence[str]) -> None:
        self._line(f"⚠️  Found issues in {len(findings)} file(s):")
        for finding in findings:
            self._line(f"- {escape(finding.file)}")
            for pattern in finding.risky_patterns:
                self._line(f"    [red]✖ risky (enabled & not allowed):[/] {escape(pattern)}")
            for pattern in finding.non_boolean:
                self._line(f"    [yellow]? non-boolean value (ignored):[/] {escape(pattern)}")
        if prefixes:
            self._line("\nExpected safe pattern:")
            self._line(escape(build_safe_template(prefixes).pattern))


class JsonReporter:
    """Single JSON document with findings, prefixes, and prefix health."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def document(
        self,
        findings: Sequence[Finding],
        prefixes: Sequence[str],
        health: Sequence[PrefixHealth],
    ) -> dict:
        return {
            "findings": [f.to_dict() for f in findings],
            "prefixes": list(prefixes),
            "prefixHealth": {h.prefix: h.to_dict() for h in health},
        }

    def emit(
        self,
        findings: Sequence[Finding],
        prefixes: Sequence[str],
        health: Sequence[PrefixHealth],
    ) -> None:
        payload = self.document(findings, prefixes, health)
        self.console.out(json.dumps(payload, indent=2, ensure_ascii=False), highlight=False)
