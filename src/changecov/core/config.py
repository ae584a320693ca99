"""Central configuration and constants for ``changecov``."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cache
from importlib import resources
from typing import TYPE_CHECKING, Any

from changecov._meta import logger
from changecov.core.aggregate import truncate_percent
from changecov.core.thresholds import ThresholdPolicy
from changecov.core.types import DisplayMode
from changecov.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

MINIMUM_COVERAGE = "minimum_coverage_percentage"
FILE_MINIMUM_COVERAGE = "minimum_coverage_percentage_for_changed_files"
FILE_IGNORE_LIST = "ignore_list_of_minimum_coverage_percentage_for_changed_files"
DISPLAY_ONLY_AVERAGE = "display_only_average_coverage"
AVERAGE_TITLE = "average_coverage_target_title"

# Keys consumed by changecov itself; never forwarded to the coverage tool.
# MINIMUM_COVERAGE is forwarded as well; the tool may enforce it too.
INTERNAL_KEYS = frozenset(
    {
        "verbose",
        FILE_MINIMUM_COVERAGE,
        FILE_IGNORE_LIST,
        DISPLAY_ONLY_AVERAGE,
        AVERAGE_TITLE,
        "tool_command",
        "report_path",
        "base_ref",
    }
)

PYPROJECT_TABLE = "changecov"


@dataclass(frozen=True, slots=True)
class GateConfig:
    """Everything the gate needs, threaded explicitly through the pipeline."""

    minimum_coverage_percentage: int = 0
    minimum_coverage_percentage_for_changed_files: int = 0
    ignore_list: tuple[str, ...] = ()
    display_only_average_coverage: bool = False
    average_coverage_target_title: str = ""
    tool_options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def display_mode(self) -> DisplayMode:
        """Average-only mode needs both the flag and a non-empty title."""
        if self.display_only_average_coverage and self.average_coverage_target_title:
            return DisplayMode.AVERAGE_ONLY
        return DisplayMode.DEFAULT

    @property
    def policy(self) -> ThresholdPolicy:
        return ThresholdPolicy(
            minimum=self.minimum_coverage_percentage,
            file_minimum=self.minimum_coverage_percentage_for_changed_files,
            ignore=self.ignore_list,
        )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> GateConfig:
        """Split *options* into gate settings and pass-through tool options."""
        tool_options = {key: value for key, value in options.items() if key not in INTERNAL_KEYS}
        config = cls(
            minimum_coverage_percentage=_percent(options, MINIMUM_COVERAGE),
            minimum_coverage_percentage_for_changed_files=_percent(options, FILE_MINIMUM_COVERAGE),
            ignore_list=_string_list(options.get(FILE_IGNORE_LIST), FILE_IGNORE_LIST),
            display_only_average_coverage=_flag(options.get(DISPLAY_ONLY_AVERAGE), DISPLAY_ONLY_AVERAGE),
            average_coverage_target_title=_title(options.get(AVERAGE_TITLE)),
            tool_options=tool_options,
        )
        logger.debug("gate config: %s", config)
        return config


def load_pyproject_options(pyproject: Path) -> dict[str, Any]:
    """Return the ``[tool.changecov]`` table of *pyproject* (empty when absent)."""
    if not pyproject.exists():
        return {}
    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"failed to read {pyproject}: {exc}"
        raise ConfigError(msg) from exc

    table = data.get("tool", {}).get(PYPROJECT_TABLE, {})
    if not isinstance(table, dict):
        msg = f"[tool.{PYPROJECT_TABLE}] in {pyproject} must be a table"
        raise ConfigError(msg)
    if table:
        logger.info("Using configuration from %s", pyproject)
    return dict(table)


@cache
def get_schema() -> dict[str, Any]:
    """Load and cache the JSON schema for JSON coverage reports."""
    text = resources.files("changecov.data").joinpath("report.schema.json").read_text(encoding="utf-8")
    return json.loads(text)


def _percent(options: Mapping[str, Any], key: str) -> int:
    try:
        return truncate_percent(options.get(key))
    except ConfigError as exc:
        msg = f"{key}: {exc}"
        raise ConfigError(msg) from exc


def _string_list(value: object, key: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list | tuple) and all(isinstance(item, str) for item in value):
        return tuple(value)
    msg = f"{key}: expected a list of strings, got {value!r}"
    raise ConfigError(msg)


def _flag(value: object, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    msg = f"{key}: expected true or false, got {value!r}"
    raise ConfigError(msg)


def _title(value: object) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        msg = f"{AVERAGE_TITLE}: expected a string, got {value!r}"
        raise ConfigError(msg)
    return value


__all__ = [
    "AVERAGE_TITLE",
    "DISPLAY_ONLY_AVERAGE",
    "FILE_IGNORE_LIST",
    "FILE_MINIMUM_COVERAGE",
    "INTERNAL_KEYS",
    "LOG_FORMAT",
    "MINIMUM_COVERAGE",
    "GateConfig",
    "get_schema",
    "load_pyproject_options",
]
