from __future__ import annotations

import math

import pytest

from changecov.core.model import CoverageFile, CoverageReport, Target
from changecov.errors import MalformedReportError


@pytest.mark.parametrize("ratio", [-0.01, 1.01, math.nan, math.inf])
def test_coverage_ratio_outside_unit_interval_is_rejected(ratio: float) -> None:
    with pytest.raises(MalformedReportError, match="outside"):
        CoverageFile(name="a.py", location="/p/a.py", coverage=ratio)


def test_boolean_coverage_is_rejected() -> None:
    with pytest.raises(MalformedReportError, match="must be a number"):
        CoverageFile(name="a.py", location="/p/a.py", coverage=True)


@pytest.mark.parametrize("ratio", [0.0, 0.5, 1.0, 1])
def test_coverage_ratio_bounds_are_inclusive(ratio: float) -> None:
    assert CoverageFile(name="a.py", location="/p/a.py", coverage=ratio).coverage == ratio


def test_from_counts_computes_ratio() -> None:
    file = CoverageFile.from_counts("a.py", "/p/a.py", 3, 4)
    assert file.coverage == 0.75
    assert (file.lines_covered, file.lines_total) == (3, 4)


def test_from_counts_without_lines_is_zero_coverage() -> None:
    assert CoverageFile.from_counts("empty.py", "/p/empty.py", 0, 0).coverage == 0.0


@pytest.mark.parametrize(
    ("covered", "total", "pattern"),
    [
        (-1, 4, "must be >= 0"),
        (1, -4, "must be >= 0"),
        (5, 4, "exceed total"),
    ],
)
def test_from_counts_rejects_bad_counts(covered: int, total: int, pattern: str) -> None:
    with pytest.raises(MalformedReportError, match=pattern):
        CoverageFile.from_counts("a.py", "/p/a.py", covered, total)


def test_line_counts_must_come_in_pairs() -> None:
    with pytest.raises(MalformedReportError, match="together"):
        CoverageFile(name="a.py", location="/p/a.py", coverage=0.5, lines_covered=1)


def test_duplicate_location_within_target_is_rejected() -> None:
    a = CoverageFile(name="a.py", location="/p/a.py", coverage=0.5)
    again = CoverageFile(name="a-copy.py", location="/p/a.py", coverage=0.9)
    with pytest.raises(MalformedReportError, match="duplicate file location"):
        Target(name="App", files=(a, again))


def test_same_location_in_different_targets_is_allowed() -> None:
    a = CoverageFile(name="a.py", location="/p/a.py", coverage=0.5)
    report = CoverageReport(targets=(Target("App", (a,)), Target("AppTests", (a,))))
    assert len(report.files) == 2


def test_target_files_are_frozen_into_a_tuple() -> None:
    a = CoverageFile(name="a.py", location="/p/a.py", coverage=0.5)
    target = Target("App", [a])  # type: ignore[arg-type]
    assert target.files == (a,)


def test_report_accessors() -> None:
    a = CoverageFile(name="a.py", location="/p/a.py", coverage=0.5)
    b = CoverageFile(name="b.py", location="/p/b.py", coverage=1.0)
    report = CoverageReport(targets=(Target("App", (a,)), Target("Kit", (b,)), Target("Empty")))

    assert report.files == (a, b)
    assert report.target("Kit") == Target("Kit", (b,))
    assert report.target("Missing") is None
    assert not report.is_empty
    assert CoverageReport(targets=(Target("Empty"),)).is_empty


def test_derived_coverage_follows_file_list() -> None:
    a = CoverageFile(name="a.py", location="/p/a.py", coverage=0.5)
    b = CoverageFile(name="b.py", location="/p/b.py", coverage=1.0)
    assert Target("App", (a, b)).coverage == 0.75
    assert Target("App", (a,)).coverage == 0.5
    assert Target("App").coverage == 0.0
