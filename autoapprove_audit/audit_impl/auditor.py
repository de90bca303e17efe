"""Audit orchestration: discover, parse, classify, aggregate, report."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .health import Finding, HealthAggregator, PrefixHealth
from .report import JsonReporter, TextReporter
from .settings import (
    AUTO_APPROVE_KEY,
    AuditMode,
    AutoScan,
    extract_rule_map,
    load_settings,
    parse_allow_prefix,
    resolve_sources,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RISK = 1


@dataclass
class AuditOptions:
    allow_prefix: str | None = None
    settings_file: Path | None = None
    root: Path | None = None
    fail_on_risk: bool = False
    json_output: bool = False
    scan_prefixes: bool = False
    silent: bool = False


@dataclass
class AuditResult:
    """Everything one audit run produced."""

    mode: AuditMode
    files: list[str] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)
    prefix_health: list[PrefixHealth] = field(default_factory=list)
    exit_code: int = EXIT_OK

    @property
    def prefixes(self) -> tuple[str, ...]:
        return self.mode.prefixes


def collect(mode: AuditMode, sources: list[Path]) -> tuple[HealthAggregator, list[str]]:
    """Ingest every readable source; unreadable or malformed files are skipped."""
    aggregator = HealthAggregator(mode.prefixes)
    audited: list[str] = []
    for path in sources:
        data = load_settings(path)
        if data is None:
            continue
        audited.append(str(path))
        rule_map = extract_rule_map(data, path)
        if rule_map is None:
            logger.debug("%s: no %s map", path, AUTO_APPROVE_KEY)
            continue
        aggregator.ingest(path, rule_map)
    return aggregator, audited


def run_audit(
    options: AuditOptions,
    *,
    text: TextReporter,
    json_reporter: JsonReporter,
) -> AuditResult:
    """Run one audit pass and render it. Returns the result with its exit code."""
    mode = parse_allow_prefix(options.allow_prefix)
    sources = resolve_sources(options.settings_file, options.root)
    aggregator, audited = collect(mode, sources)
    if options.settings_file is not None and not audited:
        logger.warning("settings file %s could not be read, skipping", options.settings_file)

    result = AuditResult(
        mode=mode,
        files=audited,
        findings=aggregator.findings(),
        prefix_health=aggregator.sorted_health(),
    )
    logger.info(
        "audited %d of %d settings file(s): %d finding(s)",
        len(audited),
        len(sources),
        len(result.findings),
    )

    show_health = options.scan_prefixes or isinstance(mode, AutoScan)

    if options.json_output:
        json_reporter.emit(result.findings, result.prefixes, result.prefix_health)
    else:
        if show_health:
            text.prefix_health(result.prefix_health)
        if not result.findings:
            if not options.silent:
                text.success(result.prefixes)
        elif not options.silent or options.fail_on_risk:
            text.findings(result.findings, result.prefixes)

    if result.findings and options.fail_on_risk:
        result.exit_code = EXIT_RISK
    return result
