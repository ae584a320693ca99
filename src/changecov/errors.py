"""Centralised exception hierarchy for changecov."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class ChangecovError(Exception):
    """Base class for all custom changecov exceptions."""


class ConfigError(ChangecovError):
    """Gate configuration is invalid."""


class ToolUnavailableError(ChangecovError):
    """The coverage tool could not be located or run."""


class MalformedReportError(ChangecovError):
    """Raw coverage data violates the report model."""


class ChangeSetError(ChangecovError):
    """The list of changed files could not be obtained."""


class OutputError(ChangecovError):
    """The markdown summary could not be written."""


class ThresholdViolation(ChangecovError):
    """A coverage threshold was not met.

    Violations are collected and reported, never raised out of the evaluator.
    """

    def __init__(self, message: str, threshold: int) -> None:
        super().__init__(message)
        self.threshold = threshold

    @property
    def message(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThresholdViolation):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class CoverageBelowMinimum(ThresholdViolation):
    """Overall coverage of the changed files is below the global minimum."""

    def __init__(self, threshold: int) -> None:
        super().__init__(f"Code coverage under minimum of {threshold}%", threshold)


class FileCoverageBelowMinimum(ThresholdViolation):
    """Changed files of one target are below the per-file minimum."""

    def __init__(self, threshold: int, files: Sequence[str]) -> None:
        self.files = tuple(files)
        names = ", ".join(self.files)
        super().__init__(
            f"Class code coverage is below minimum, please improve {names} to at least {threshold}%.",
            threshold,
        )


__all__ = [
    "ChangeSetError",
    "ChangecovError",
    "ConfigError",
    "CoverageBelowMinimum",
    "FileCoverageBelowMinimum",
    "MalformedReportError",
    "OutputError",
    "ThresholdViolation",
    "ToolUnavailableError",
]
