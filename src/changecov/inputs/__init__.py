"""Coverage report readers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from changecov._meta import logger
from changecov.errors import MalformedReportError
from changecov.inputs.cobertura import read_cobertura_report
from changecov.inputs.json_report import read_json_report, report_from_mapping

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from changecov.core.model import CoverageReport

READERS: dict[str, Callable[[Path], CoverageReport]] = {
    ".json": read_json_report,
    ".xml": read_cobertura_report,
}


def load_report(path: Path) -> CoverageReport:
    """Parse the coverage report at *path*, picking a reader by file suffix."""
    try:
        reader = READERS[path.suffix.lower()]
    except KeyError as exc:
        choices = ", ".join(sorted(READERS))
        msg = f"unsupported report format {path.suffix!r} for {path} (expected one of {choices})"
        raise MalformedReportError(msg) from exc
    report = reader(path)
    logger.debug("loaded %d target(s) from %s", len(report.targets), path)
    return report


__all__ = ["READERS", "load_report", "read_cobertura_report", "read_json_report", "report_from_mapping"]
