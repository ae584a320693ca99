"""Path helpers shared by the parsers and the change-set filter."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_location(path: str | os.PathLike[str], base: Path | None = None) -> str:
    """Return *path* as a normalised absolute path string.

    Relative paths are joined onto *base* (the working directory when not
    given). ``.`` and ``..`` segments are collapsed lexically; symlinks are
    left alone so the result matches what the coverage tool recorded.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = (base or Path.cwd()) / candidate
    return os.path.normpath(candidate)


def display_name(location: str) -> str:
    """Return the name a file is shown under (its basename)."""
    return Path(location).name


__all__ = ["display_name", "normalize_location"]
