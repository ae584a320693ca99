from __future__ import annotations

from pathlib import Path

from changecov.core.change_set import filter_report, normalize_change_set
from changecov.core.model import CoverageFile, CoverageReport, Target


def _report() -> CoverageReport:
    return CoverageReport(
        targets=(
            Target(
                "App",
                (
                    CoverageFile(name="A.swift", location="/repo/App/A.swift", coverage=0.9),
                    CoverageFile(name="B.swift", location="/repo/App/B.swift", coverage=0.5),
                    CoverageFile(name="C.swift", location="/repo/App/C.swift", coverage=0.1),
                ),
            ),
            Target("Kit", (CoverageFile(name="K.swift", location="/repo/Kit/K.swift", coverage=1.0),)),
        )
    )


def test_filter_keeps_only_changed_files_in_order() -> None:
    filtered = filter_report(_report(), {"/repo/App/C.swift", "/repo/App/A.swift"})
    assert [f.name for f in filtered.targets[0].files] == ["A.swift", "C.swift"]


def test_filter_retains_targets_left_empty() -> None:
    filtered = filter_report(_report(), {"/repo/App/A.swift"})
    assert [t.name for t in filtered.targets] == ["App", "Kit"]
    assert filtered.targets[1].files == ()


def test_filter_is_a_subset_operation() -> None:
    report = _report()
    changed = {"/repo/App/B.swift", "/repo/Kit/K.swift", "/repo/Unknown.swift"}
    filtered = filter_report(report, changed)
    originals = set(report.files)
    for file in filtered.files:
        assert file in originals
        assert file.location in changed
    assert len(filtered.files) == 2


def test_filter_is_idempotent() -> None:
    changed = {"/repo/App/B.swift", "/repo/Kit/K.swift"}
    once = filter_report(_report(), changed)
    assert filter_report(once, changed) == once


def test_filter_does_not_mutate_source_report() -> None:
    report = _report()
    filter_report(report, set())
    assert len(report.files) == 4


def test_filter_matches_exactly_and_case_sensitively() -> None:
    filtered = filter_report(_report(), {"/repo/app/a.swift", "/repo/App/A"})
    assert filtered.is_empty


def test_relative_change_set_paths_are_resolved_against_base() -> None:
    filtered = filter_report(_report(), ["App/A.swift", "./Kit/../Kit/K.swift"], base=Path("/repo"))
    assert [f.name for f in filtered.files] == ["A.swift", "K.swift"]


def test_normalize_change_set_does_not_resolve_symlinks(tmp_path: Path) -> None:
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    link.symlink_to(real, target_is_directory=True)
    assert normalize_change_set(["link/a.py"], base=tmp_path) == frozenset({str(link / "a.py")})


def test_recomputed_coverage_after_filter() -> None:
    filtered = filter_report(_report(), {"/repo/App/A.swift"})
    assert filtered.coverage == 0.9
    assert filtered.targets[0].coverage == 0.9
    assert filtered.targets[1].coverage == 0.0
