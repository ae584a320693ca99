"""Output formatting utilities for changecov."""

from __future__ import annotations

from changecov.core.types import DisplayMode
from changecov.output.markdown import format_file_row, render

__all__ = ["DisplayMode", "format_file_row", "render"]
