"""Restrict a coverage report to the files touched by a change set."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changecov._meta import logger
from changecov.core.files import normalize_location
from changecov.core.model import CoverageReport, Target

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def normalize_change_set(paths: Iterable[str | Path], *, base: Path | None = None) -> frozenset[str]:
    """Return *paths* as a set of normalised absolute path strings."""
    return frozenset(normalize_location(p, base=base) for p in paths)


def filter_report(
    report: CoverageReport,
    changed: Iterable[str | Path],
    *,
    base: Path | None = None,
) -> CoverageReport:
    """Keep only the files whose location is in *changed*.

    Targets left without files are kept; file order is preserved.
    """
    wanted = normalize_change_set(changed, base=base)
    targets: list[Target] = []
    for target in report.targets:
        files = tuple(f for f in target.files if f.location in wanted)
        logger.debug("change-set filter %s: kept %d of %d file(s)", target.name, len(files), len(target.files))
        targets.append(Target(name=target.name, files=files))
    return CoverageReport(targets=tuple(targets))


__all__ = ["filter_report", "normalize_change_set"]
