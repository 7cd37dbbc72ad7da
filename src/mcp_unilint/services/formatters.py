"""Render an AggregateSummary as table, compact or JSON text."""

from __future__ import annotations

import json
import re
from typing import Any, Iterable

from ..domain.models import AggregateSummary, FileResult, Finding

DESCRIPTION_LIMIT = 100
_RULE_WIDTH = 80
_SUMMARY_WIDTH = 50
_TAG_RE = re.compile(r"<[^>]*>")

_ICONS = {"error": "✗", "warning": "⚠", "info": "ℹ"}


def truncate_description(description: str, limit: int = DESCRIPTION_LIMIT) -> str:
    """Strip HTML tags and cut the text to ``limit`` characters."""

    if not description:
        return ""
    clean = _TAG_RE.sub("", description)
    if len(clean) <= limit:
        return clean
    return clean[:limit] + "..."


def _issues(result: FileResult, quiet: bool) -> list[Finding]:
    issues = list(result.errors) + list(result.warnings)
    if not quiet:
        issues.extend(result.info)
    return issues


def _location(finding: Finding) -> str:
    if finding.feature is None or not finding.feature.line:
        return ""
    return f"{finding.feature.line}:{finding.feature.column or 1}"


def _table_section(title: str, results: Iterable[FileResult], quiet: bool) -> list[str]:
    lines = ["", title, "═" * _RULE_WIDTH]
    for result in results:
        lines.append("")
        lines.append(result.file)
        issues = _issues(result, quiet)
        if not issues:
            lines.append("  ✓ No compatibility issues found")
            continue
        issues.sort(key=lambda finding: finding.line)
        for finding in issues:
            location = _location(finding)
            prefix = f"{location} " if location else ""
            lines.append(f"  {_ICONS.get(finding.severity, '*')} {prefix}{finding.message}")
            if finding.feature and finding.feature.description and not quiet:
                lines.append(f"    {truncate_description(finding.feature.description)}")
    return lines


def format_table(summary: AggregateSummary, quiet: bool = False) -> str:
    lines: list[str] = []
    if summary.javascript:
        lines.extend(_table_section("JavaScript Files:", summary.javascript, quiet))
    if summary.css:
        lines.extend(_table_section("CSS Files:", summary.css, quiet))
    return "\n".join(lines)


def format_compact(summary: AggregateSummary, quiet: bool = False) -> str:
    """One ``file:line:col severity: message`` line per finding."""

    lines: list[str] = []
    for result in summary.results:
        for finding in _issues(result, quiet):
            location = _location(finding)
            prefix = f"{result.file}:{location}" if location else result.file
            lines.append(f"{prefix} {finding.severity}: {finding.message}")
    return "\n".join(lines)


def summary_mapping(summary: AggregateSummary) -> dict[str, Any]:
    return {
        "summary": summary.counts(),
        "javascript": [result.to_mapping() for result in summary.javascript],
        "css": [result.to_mapping() for result in summary.css],
    }


def format_json(summary: AggregateSummary, quiet: bool = False) -> str:
    document = summary_mapping(summary)
    if quiet:
        for section in ("javascript", "css"):
            for entry in document[section]:
                entry["info"] = []
    return json.dumps(document, indent=2, ensure_ascii=False)


def format_summary(summary: AggregateSummary) -> str:
    lines = [
        "",
        "Summary:",
        "─" * _SUMMARY_WIDTH,
        f"Files analyzed: {summary.total_files}",
        f"JavaScript files: {summary.js_files}",
        f"CSS files: {summary.css_files}",
    ]
    if summary.failed_files:
        lines.append(f"Failed files: {summary.failed_files}")
    if summary.errors:
        lines.append(f"Errors: {summary.errors}")
    if summary.warnings:
        lines.append(f"Warnings: {summary.warnings}")
    if not summary.errors and not summary.warnings:
        lines.append("✓ No compatibility issues found!")
    return "\n".join(lines)


_FORMATTERS = {
    "table": format_table,
    "compact": format_compact,
    "json": format_json,
}


def format_results(summary: AggregateSummary, fmt: str = "table", quiet: bool = False) -> str:
    """
    Render ``summary`` in the requested format.

    Unknown formats fall back to the table. The trailing summary block is
    omitted in quiet mode and for JSON, which already carries the counts.
    """

    formatter = _FORMATTERS.get(fmt, format_table)
    text = formatter(summary, quiet)
    if quiet or fmt == "json":
        return text
    return text + "\n" + format_summary(summary)
