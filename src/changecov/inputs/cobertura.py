"""Reader for Cobertura-style coverage XML.

Each ``<package>`` becomes a target and each distinct ``<class filename>``
inside it a file. Classes sharing a filename (inner classes, for instance)
are merged line by line, keeping the highest hit count.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from defusedxml import DefusedXmlException, ElementTree

from changecov._meta import logger
from changecov.core.files import display_name, normalize_location
from changecov.core.model import CoverageFile, CoverageReport, Target
from changecov.errors import MalformedReportError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


def read_root(path: Path) -> Element:
    """Parse coverage XML and return the ``<coverage>`` root element."""
    try:
        root = ElementTree.parse(path).getroot()
    except (ElementTree.ParseError, DefusedXmlException) as exc:
        msg = f"failed to parse coverage XML {path}: {exc}"
        raise MalformedReportError(msg) from exc
    tag = (root.tag or "").split("}")[-1]
    if tag.lower() != "coverage":
        msg = f"unexpected root tag {root.tag!r} in {path}"
        raise MalformedReportError(msg)
    return root


def source_root(root: Element, report_path: Path) -> Path:
    """First ``<source>`` directory that exists, else the report's directory."""
    fallback = report_path.parent.resolve()
    for node in root.findall("./sources/source"):
        text = (node.text or "").strip()
        if not text:
            continue
        candidate = Path(text)
        if not candidate.is_absolute():
            candidate = fallback / candidate
        if candidate.is_dir():
            return candidate
    return fallback


def read_cobertura_report(path: Path) -> CoverageReport:
    """Parse the Cobertura XML report at *path*."""
    root = read_root(path)
    base = source_root(root, path)
    logger.debug("resolving Cobertura file names against %s", base)

    targets: list[Target] = []
    for package in root.findall("./packages/package"):
        name = package.get("name") or "."
        targets.append(Target(name=name, files=tuple(_package_files(package, base))))
    return CoverageReport(targets=tuple(targets))


def _package_files(package: Element, base: Path) -> list[CoverageFile]:
    hits_by_file: dict[str, dict[int, int]] = {}
    for cls in package.findall("./classes/class"):
        filename = cls.get("filename", "")
        if not filename:
            continue
        location = normalize_location(filename, base=base)
        lines = hits_by_file.setdefault(location, {})
        for line in cls.findall("./lines/line"):
            number, hits = _line_stats(line, location)
            lines[number] = max(hits, lines.get(number, 0))

    return [
        CoverageFile.from_counts(
            display_name(location),
            location,
            sum(1 for hits in lines.values() if hits > 0),
            len(lines),
        )
        for location, lines in hits_by_file.items()
    ]


def _line_stats(line: Element, location: str) -> tuple[int, int]:
    raw_number = line.get("number", "")
    raw_hits = line.get("hits", "0") or "0"
    try:
        number = int(raw_number)
        hits = int(raw_hits)
    except ValueError as exc:
        msg = f"{location}: invalid line entry number={raw_number!r} hits={raw_hits!r}"
        raise MalformedReportError(msg) from exc
    if number < 1 or hits < 0:
        msg = f"{location}: invalid line entry number={number} hits={hits}"
        raise MalformedReportError(msg)
    return number, hits


__all__ = ["read_cobertura_report", "read_root", "source_root"]
