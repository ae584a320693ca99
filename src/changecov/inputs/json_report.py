"""Reader for JSON coverage reports (xcov-style ``targets``/``files`` layout)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from jsonschema import ValidationError, validate

from changecov.core.config import get_schema
from changecov.core.files import display_name, normalize_location
from changecov.core.model import CoverageFile, CoverageReport, Target
from changecov.errors import MalformedReportError

if TYPE_CHECKING:
    from pathlib import Path


def read_json_report(path: Path) -> CoverageReport:
    """Parse and validate the JSON report at *path*."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        msg = f"invalid JSON in {path}: {exc}"
        raise MalformedReportError(msg) from exc
    return report_from_mapping(data, base=path.parent.resolve(), source=str(path))


def report_from_mapping(data: Any, *, base: Path, source: str = "<report>") -> CoverageReport:
    """Build a :class:`CoverageReport` from already-decoded JSON *data*.

    Relative file locations are resolved against *base*.
    """
    try:
        validate(instance=data, schema=get_schema())
    except ValidationError as exc:
        where = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        msg = f"{source}: {where}: {exc.message}"
        raise MalformedReportError(msg) from exc

    targets = tuple(
        Target(name=raw["name"], files=tuple(_file(item, base) for item in raw["files"])) for raw in data["targets"]
    )
    return CoverageReport(targets=targets)


def _file(raw: dict[str, Any], base: Path) -> CoverageFile:
    location = normalize_location(raw["location"], base=base)
    name = raw.get("name") or display_name(location)
    covered = raw.get("lines_covered")
    total = raw.get("lines_total")
    if "coverage" not in raw:
        return CoverageFile.from_counts(name, location, covered, total)
    return CoverageFile(
        name=name,
        location=location,
        coverage=float(raw["coverage"]),
        lines_covered=covered,
        lines_total=total,
    )


__all__ = ["read_json_report", "report_from_mapping"]
