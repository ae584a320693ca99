"""Coverage report model consumed by the filter, evaluator and renderers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from changecov.core.aggregate import aggregate
from changecov.errors import MalformedReportError

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True, slots=True)
class CoverageFile:
    """Coverage of a single source file.

    Notes
    -----
    - `location` is the absolute path and the join key against the change set.
    - `lines_covered`/`lines_total` are optional metadata; when present they
      must be given together.
    """

    name: str
    location: str
    coverage: float
    lines_covered: int | None = None
    lines_total: int | None = None

    def __post_init__(self) -> None:
        """Reject ratios outside [0, 1] and inconsistent line counts."""
        if isinstance(self.coverage, bool) or not isinstance(self.coverage, int | float):
            msg = f"{self.location}: coverage must be a number, got {self.coverage!r}"
            raise MalformedReportError(msg)
        if not math.isfinite(self.coverage) or not 0.0 <= self.coverage <= 1.0:
            msg = f"{self.location}: coverage ratio {self.coverage!r} is outside [0.0, 1.0]"
            raise MalformedReportError(msg)
        if (self.lines_covered is None) != (self.lines_total is None):
            msg = f"{self.location}: lines_covered and lines_total must be given together"
            raise MalformedReportError(msg)
        if self.lines_covered is not None and self.lines_total is not None:
            _check_counts(self.location, self.lines_covered, self.lines_total)

    @classmethod
    def from_counts(cls, name: str, location: str, covered: int, total: int) -> CoverageFile:
        """Build a file from line counts; a file without lines has zero coverage."""
        _check_counts(location, covered, total)
        ratio = 0.0 if total == 0 else covered / total
        return cls(name=name, location=location, coverage=ratio, lines_covered=covered, lines_total=total)


@dataclass(frozen=True, slots=True)
class Target:
    """A build target and its files, in the order the coverage tool reported them."""

    name: str
    files: tuple[CoverageFile, ...] = ()

    def __post_init__(self) -> None:
        """Freeze the file list and reject duplicate locations."""
        object.__setattr__(self, "files", tuple(self.files))
        seen: set[str] = set()
        for file in self.files:
            if file.location in seen:
                msg = f"duplicate file location {file.location!r} in target {self.name!r}"
                raise MalformedReportError(msg)
            seen.add(file.location)

    @property
    def coverage(self) -> float:
        return aggregate(self.files)


@dataclass(frozen=True, slots=True)
class CoverageReport:
    """Whole coverage report: an ordered sequence of targets."""

    targets: tuple[Target, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "targets", tuple(self.targets))

    @property
    def files(self) -> tuple[CoverageFile, ...]:
        """All files, flattened in target order then file order."""
        return tuple(self.iter_files())

    @property
    def coverage(self) -> float:
        """Equal-weight mean over every file of every target."""
        return aggregate(self.files)

    @property
    def is_empty(self) -> bool:
        return not any(target.files for target in self.targets)

    def iter_files(self) -> Iterator[CoverageFile]:
        for target in self.targets:
            yield from target.files

    def target(self, name: str) -> Target | None:
        """Return the first target called *name*, if any."""
        for target in self.targets:
            if target.name == name:
                return target
        return None


def _check_counts(location: str, covered: int, total: int) -> None:
    if covered < 0 or total < 0:
        msg = f"{location}: line counts must be >= 0 (covered={covered}, total={total})"
        raise MalformedReportError(msg)
    if covered > total:
        msg = f"{location}: covered lines ({covered}) exceed total lines ({total})"
        raise MalformedReportError(msg)


__all__ = ["CoverageFile", "CoverageReport", "Target"]
