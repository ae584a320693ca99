"""Coverage aggregation and percentage helpers (pure, no I/O).

Aggregates are the unweighted mean of per-file ratios: every file counts
once regardless of its size, which is what threshold comparisons use.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from changecov.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from changecov.core.model import CoverageFile, CoverageReport

FULL_PERCENT = 100


def aggregate(files: Iterable[CoverageFile]) -> float:
    """Return the mean coverage ratio of *files*, ``0.0`` when there are none."""
    ratios = [file.coverage for file in files]
    if not ratios:
        return 0.0
    return sum(ratios) / len(ratios)


def target_coverage(report: CoverageReport, name: str) -> float:
    """Aggregate over the files of the target called *name* (``0.0`` if absent)."""
    target = report.target(name)
    if target is None:
        return 0.0
    return aggregate(target.files)


def as_percent(ratio: float) -> float:
    """Return *ratio* as an unrounded percentage."""
    return ratio * FULL_PERCENT


def displayable(ratio: float) -> str:
    """Format *ratio* the way reports show it, e.g. ``'87.50%'``."""
    return f"{as_percent(ratio):.2f}%"


def truncate_percent(value: object) -> int:
    """Truncate a configured percentage toward zero.

    Accepts ints, floats and numeric strings; ``None`` means "not configured"
    and yields ``0``.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        msg = f"invalid percentage: {value!r}"
        raise ConfigError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip().rstrip("%")
        try:
            return int(text)
        except ValueError:
            pass
        try:
            value = float(text)
        except ValueError as exc:
            msg = f"invalid percentage: {value!r}"
            raise ConfigError(msg) from exc
    if isinstance(value, float):
        if not math.isfinite(value):
            msg = f"invalid percentage: {value!r}"
            raise ConfigError(msg)
        return math.trunc(value)
    msg = f"invalid percentage: {value!r}"
    raise ConfigError(msg)


__all__ = [
    "FULL_PERCENT",
    "aggregate",
    "as_percent",
    "displayable",
    "target_coverage",
    "truncate_percent",
]
