"""Command-line entry point for auditing terminal auto-approve rules."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler
from rich.markup import escape

from .audit_impl.auditor import AuditOptions, run_audit
from .audit_impl.classifier import evaluate
from .audit_impl.report import JsonReporter, TextReporter, make_console
from .audit_impl.settings import parse_allow_prefix

app = typer.Typer(
    add_completion=False,
    help="Audit editor auto-approve rules for risky terminal commands.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=make_console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def audit(
    allow_prefix: Optional[str] = typer.Option(
        None,
        "--allow-prefix",
        help="Comma-separated allowed prefixes (auto-scans prefix health if omitted)",
    ),
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings-file",
        help="Audit only this settings file instead of searching user & workspace",
    ),
    root: Path = typer.Option(
        Path("."),
        "--root",
        file_okay=False,
        help="Directory to search for workspace settings",
    ),
    fail_on_risk: bool = typer.Option(
        False, "--fail-on-risk", help="Exit 1 if risky patterns are found"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
    scan_prefixes: bool = typer.Option(
        False, "--scan-prefixes", help="Report prefix health even with --allow-prefix"
    ),
    silent: bool = typer.Option(False, "--silent", help="Suppress success messages"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Audit chat.tools.terminal.autoApprove entries in editor settings."""
    _configure_logging(verbose)
    console = make_console()
    result = run_audit(
        AuditOptions(
            allow_prefix=allow_prefix,
            settings_file=settings_file,
            root=root,
            fail_on_risk=fail_on_risk,
            json_output=json_output,
            scan_prefixes=scan_prefixes,
            silent=silent,
        ),
        text=TextReporter(console),
        json_reporter=JsonReporter(console),
    )
    raise typer.Exit(code=result.exit_code)


@app.command()
def explain(
    pattern: str = typer.Argument(..., help="Auto-approve pattern to classify"),
    allow_prefix: Optional[str] = typer.Option(
        None, "--allow-prefix", help="Comma-separated allowed prefixes"
    ),
) -> None:
    """Classify a single pattern and list why it is risky."""
    _configure_logging(False)
    console = make_console()
    classification = evaluate(pattern, parse_allow_prefix(allow_prefix).prefixes)
    if not classification.risky:
        console.print(f"[green]✓ safe:[/] {escape(pattern)}")
        raise typer.Exit(code=0)

    console.print(f"[red]✗ risky:[/] {escape(pattern)}")
    console.print("  Reasons:")
    for i, reason in enumerate(classification.reasons(), 1):
        console.print(f"    {i}. {escape(reason)}")
    raise typer.Exit(code=1)


def main() -> None:
    app(prog_name="autoapprove-audit")


if __name__ == "__main__":  # pragma: no cover - manual execution
    main()
