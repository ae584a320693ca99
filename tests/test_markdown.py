from __future__ import annotations

import pytest

from changecov.core.model import CoverageFile, CoverageReport, Target
from changecov.core.types import DisplayMode
from changecov.output.markdown import (
    ATTRIBUTION,
    NO_FILES_NOTICE,
    TABLE_HEADER,
    coverage_emoji,
    format_changed_files,
    format_file_row,
    render,
)


def _file(name: str, coverage: float) -> CoverageFile:
    return CoverageFile(name=name, location=f"/repo/{name}", coverage=coverage)


@pytest.mark.parametrize(
    ("ratio", "emoji"),
    [
        (1.0, "✅"),
        (0.80, "✅"),
        (0.7999, "⚠️"),
        (0.50, "⚠️"),
        (0.4999, "🚫"),
        (0.0, "🚫"),
    ],
)
def test_coverage_emoji_bands(ratio: float, emoji: str) -> None:
    assert coverage_emoji(ratio) == emoji


def test_file_row() -> None:
    assert format_file_row(_file("A.swift", 0.9)) == "A.swift | `90.00%` | ✅\n"


def test_changed_files_table_is_empty_without_files() -> None:
    assert format_changed_files([]) == ""


def test_default_mode_single_target() -> None:
    report = CoverageReport(targets=(Target("App", (_file("A.swift", 0.9),)),))
    assert render(report) == (
        "## Current coverage for App is `90.00%`\n"
        "Files changed | - | - \n"
        "--- | --- | ---\n"
        "A.swift | `90.00%` | ✅\n"
        "\n---\n"
        "\n> Powered by changecov"
    )


def test_default_mode_empty_target_shows_notice() -> None:
    report = CoverageReport(targets=(Target("App"),))
    assert render(report) == (
        "## Current coverage for App is `0.00%`\n✅ *No files affecting coverage found*\n\n---\n" + ATTRIBUTION
    )


def test_default_mode_sections_follow_target_order() -> None:
    report = CoverageReport(
        targets=(
            Target("Kit", (_file("K.swift", 0.25),)),
            Target("App", (_file("A.swift", 0.5), _file("B.swift", 1.0))),
        )
    )
    text = render(report)
    assert text.index("coverage for Kit is `25.00%`") < text.index("coverage for App is `75.00%`")
    assert "K.swift | `25.00%` | 🚫\n" in text
    assert "A.swift | `50.00%` | ⚠️\nB.swift | `100.00%` | ✅\n" in text
    assert text.count(TABLE_HEADER) == 2
    assert text.endswith(ATTRIBUTION)


def test_average_mode_uses_named_target_for_heading() -> None:
    report = CoverageReport(
        targets=(
            Target("App", (_file("A.swift", 0.5),)),
            Target("Kit", (_file("K.swift", 1.0),)),
        )
    )
    text = render(report, DisplayMode.AVERAGE_ONLY, title="App")
    assert text == (
        "## Current coverage for App is `50.00%`\n"
        + TABLE_HEADER
        + "A.swift | `50.00%` | ⚠️\n\n---\n"
        + TABLE_HEADER
        + "K.swift | `100.00%` | ✅\n\n---\n"
        + ATTRIBUTION
    )
    assert text.count("## Current coverage") == 1


def test_average_mode_without_files_shows_notice() -> None:
    report = CoverageReport(targets=(Target("App"), Target("Kit")))
    text = render(report, DisplayMode.AVERAGE_ONLY, title="App")
    assert text == "## Current coverage for App is `0.00%`\n" + NO_FILES_NOTICE + ATTRIBUTION


def test_average_mode_skips_targets_without_files() -> None:
    report = CoverageReport(targets=(Target("App"), Target("Kit", (_file("K.swift", 1.0),))))
    text = render(report, DisplayMode.AVERAGE_ONLY, title="App")
    assert text.count(TABLE_HEADER) == 1
    assert NO_FILES_NOTICE not in text


def test_average_mode_with_unknown_title_reports_zero() -> None:
    report = CoverageReport(targets=(Target("App", (_file("A.swift", 0.9),)),))
    assert render(report, DisplayMode.AVERAGE_ONLY, title="Nope").startswith(
        "## Current coverage for Nope is `0.00%`\n"
    )


def test_average_mode_without_title_falls_back_to_default() -> None:
    report = CoverageReport(targets=(Target("App", (_file("A.swift", 0.9),)),))
    assert render(report, DisplayMode.AVERAGE_ONLY, title="") == render(report)


def test_render_is_deterministic() -> None:
    report = CoverageReport(targets=(Target("App", (_file("A.swift", 0.123),)),))
    assert render(report) == render(report)
    assert "`12.30%`" in render(report)
