from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

LinesSpec = Mapping[int, int] | Iterable[int]


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def json_report_file(tmp_path: Path) -> Callable[..., Path]:
    def write(data: Any, *, filename: str = "coverage.json") -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return write


@pytest.fixture
def coverage_xml_content() -> Callable[..., str]:
    """Build Cobertura XML: ``{package: {filename: lines}}``.

    Lines are either ``{number: hits}`` or an iterable of uncovered numbers.
    """

    def build(packages: Mapping[str, Mapping[str, LinesSpec]], *, sources: Path | None = None) -> str:
        packages_xml: list[str] = []
        for package, files in packages.items():
            classes: list[str] = []
            for file, lines in files.items():
                items = lines.items() if isinstance(lines, Mapping) else ((ln, 0) for ln in lines)
                lines_xml = "".join(f'<line number="{ln}" hits="{hits}"/>' for ln, hits in items)
                classes.append(f'<class filename="{file}"><lines>{lines_xml}</lines></class>')
            packages_xml.append(f'<package name="{package}"><classes>{"".join(classes)}</classes></package>')
        sources_xml = f"<sources><source>{sources}</source></sources>" if sources else ""
        return f"<coverage>{sources_xml}<packages>{''.join(packages_xml)}</packages></coverage>"

    return build


@pytest.fixture
def coverage_xml_file(
    tmp_path: Path,
    coverage_xml_content: Callable[..., str],
) -> Callable[..., Path]:
    def write(
        packages: Mapping[str, Mapping[str, LinesSpec]],
        *,
        sources: Path | None = None,
        filename: str = "coverage.xml",
    ) -> Path:
        xml_file = tmp_path / filename
        xml_file.write_text(coverage_xml_content(packages, sources=sources), encoding="utf-8")
        return xml_file

    return write
