"""Interfaces for the collaborators the gate talks to."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from changecov.core.change_set import normalize_change_set

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path


@runtime_checkable
class CoverageTool(Protocol):
    """Produces a raw coverage report."""

    def is_available(self) -> bool: ...

    def produce(self, options: Mapping[str, Any]) -> Path:
        """Run the tool with pass-through *options*; return the report path."""
        ...


@runtime_checkable
class ChangeSource(Protocol):
    """Lists the files modified or added by the change under review."""

    def modified_files(self) -> Sequence[str]: ...

    def added_files(self) -> Sequence[str]: ...

    def paths(self, base: Path | None = None) -> frozenset[str]: ...


@runtime_checkable
class ReviewChannel(Protocol):
    """Where the summary and failures are reported."""

    def markdown(self, text: str) -> None: ...

    def fail(self, message: str) -> None: ...


def change_set_paths(source: ChangeSource, base: Path | None = None) -> frozenset[str]:
    """Union of modified and added files as normalised absolute paths."""
    return normalize_change_set([*source.modified_files(), *source.added_files()], base=base)


__all__ = ["ChangeSource", "CoverageTool", "ReviewChannel", "change_set_paths"]
