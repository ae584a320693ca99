"""Markdown rendering of (filtered) coverage reports.

Rendering is pure: the same report and mode always produce the same text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from changecov.core.aggregate import displayable, target_coverage
from changecov.core.types import DisplayMode

if TYPE_CHECKING:
    from collections.abc import Sequence

    from changecov.core.model import CoverageFile, CoverageReport, Target

GOOD_COVERAGE = 0.80
FAIR_COVERAGE = 0.50

TABLE_HEADER = "Files changed | - | - \n--- | --- | ---\n"
NO_FILES_NOTICE = "✅ *No files affecting coverage found*\n\n---\n"
ATTRIBUTION = "\n> Powered by changecov"


def coverage_emoji(ratio: float) -> str:
    if ratio >= GOOD_COVERAGE:
        return "✅"
    if ratio >= FAIR_COVERAGE:
        return "⚠️"
    return "🚫"


def format_file_row(file: CoverageFile) -> str:
    """One table row: name, coverage and a traffic-light emoji."""
    return f"{file.name} | `{displayable(file.coverage)}` | {coverage_emoji(file.coverage)}\n"


def format_changed_files(files: Sequence[CoverageFile]) -> str:
    """Changed-files table, or ``''`` when there are no files."""
    if not files:
        return ""
    rows = "".join(format_file_row(file) for file in files)
    return f"{TABLE_HEADER}{rows}\n---\n"


def heading(name: str, ratio: float) -> str:
    return f"## Current coverage for {name} is `{displayable(ratio)}`\n"


def format_target(target: Target) -> str:
    return heading(target.name, target.coverage) + (format_changed_files(target.files) or NO_FILES_NOTICE)


def render_default(report: CoverageReport) -> str:
    """One section per target, in report order."""
    return "".join(format_target(target) for target in report.targets) + ATTRIBUTION


def render_average(report: CoverageReport, title: str) -> str:
    """Single aggregate for the target called *title*, then the changed files."""
    tables = "".join(format_changed_files(target.files) for target in report.targets)
    return heading(title, target_coverage(report, title)) + (tables or NO_FILES_NOTICE) + ATTRIBUTION


def render(report: CoverageReport, mode: DisplayMode = DisplayMode.DEFAULT, *, title: str = "") -> str:
    """Render *report* as markdown.

    Average-only mode falls back to the default layout when *title* is empty.
    """
    if mode is DisplayMode.AVERAGE_ONLY and title:
        return render_average(report, title)
    return render_default(report)


__all__ = [
    "ATTRIBUTION",
    "NO_FILES_NOTICE",
    "TABLE_HEADER",
    "coverage_emoji",
    "format_changed_files",
    "format_file_row",
    "format_target",
    "render",
    "render_average",
    "render_default",
]
