"""Shared type aliases and enumerations used across changecov."""

from __future__ import annotations

from enum import StrEnum
from typing import TypeAlias

CoveragePercent: TypeAlias = int
"""Integer percentage threshold, truncated from the configured value."""


class DisplayMode(StrEnum):
    """How the markdown summary is laid out."""

    DEFAULT = "default"
    AVERAGE_ONLY = "average-only"


__all__ = ["CoveragePercent", "DisplayMode"]
