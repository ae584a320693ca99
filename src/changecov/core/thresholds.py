"""Coverage threshold evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from changecov._meta import logger
from changecov.core.aggregate import as_percent
from changecov.errors import CoverageBelowMinimum, FileCoverageBelowMinimum, ThresholdViolation

if TYPE_CHECKING:
    from collections.abc import Sequence

    from changecov.core.model import CoverageFile, CoverageReport, Target
    from changecov.core.types import CoveragePercent


@dataclass(frozen=True, slots=True)
class ThresholdPolicy:
    """Configured minimums.

    Fields
    ------
    minimum:
        Global minimum percentage for the filtered report; ``0`` never fails.
    file_minimum:
        Per-file minimum for changed files; only checked when ``> 0``.
    ignore:
        Substrings of file names exempt from the per-file check.
    """

    minimum: CoveragePercent = 0
    file_minimum: CoveragePercent = 0
    ignore: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ThresholdsResult:
    """Outcome of evaluating a policy."""

    passed: bool
    failures: list[ThresholdViolation]


def check_minimum(report: CoverageReport, threshold: CoveragePercent) -> CoverageBelowMinimum | None:
    """Compare the report's overall coverage against *threshold*."""
    actual = as_percent(report.coverage)
    logger.debug("global coverage %.2f%% vs minimum %d%%", actual, threshold)
    if actual < threshold:
        return CoverageBelowMinimum(threshold)
    return None


def eligible_files(target: Target, ignore: Sequence[str]) -> list[CoverageFile]:
    """Files of *target* whose name contains none of the *ignore* terms."""
    return [file for file in target.files if not any(term in file.name for term in ignore)]


def check_changed_files(
    report: CoverageReport,
    threshold: CoveragePercent,
    ignore: Sequence[str] = (),
) -> list[FileCoverageBelowMinimum]:
    """Return one failure per target that has files below *threshold*."""
    if threshold <= 0:
        return []
    failures: list[FileCoverageBelowMinimum] = []
    for target in report.targets:
        violations = [f for f in eligible_files(target, ignore) if as_percent(f.coverage) < threshold]
        if violations:
            logger.debug("target %s: %d file(s) below %d%%", target.name, len(violations), threshold)
            failures.append(FileCoverageBelowMinimum(threshold, [f.name for f in violations]))
    return failures


def evaluate(report: CoverageReport, policy: ThresholdPolicy) -> ThresholdsResult:
    """Run every check in *policy*; failures accumulate, nothing short-circuits."""
    failures: list[ThresholdViolation] = []
    global_failure = check_minimum(report, policy.minimum)
    if global_failure is not None:
        failures.append(global_failure)
    failures.extend(check_changed_files(report, policy.file_minimum, policy.ignore))
    return ThresholdsResult(passed=not failures, failures=failures)


__all__ = [
    "ThresholdPolicy",
    "ThresholdsResult",
    "check_changed_files",
    "check_minimum",
    "eligible_files",
    "evaluate",
]
