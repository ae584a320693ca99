from __future__ import annotations

import logging
import shlex
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from changecov._meta import logger
from changecov.adapters.channel import ConsoleChannel
from changecov.adapters.git import GitChangeSet, StaticChangeSet
from changecov.adapters.tool import CommandCoverageTool, ReportFileTool
from changecov.cli.exit_codes import (
    EXIT_CANTCREAT,
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
    EXIT_THRESHOLD,
    EXIT_UNAVAILABLE,
)
from changecov.core.config import (
    AVERAGE_TITLE,
    DISPLAY_ONLY_AVERAGE,
    FILE_IGNORE_LIST,
    FILE_MINIMUM_COVERAGE,
    LOG_FORMAT,
    MINIMUM_COVERAGE,
    GateConfig,
    load_pyproject_options,
)
from changecov.core.pipeline import GateResult, run_gate
from changecov.errors import (
    ChangeSetError,
    ChangecovError,
    ConfigError,
    MalformedReportError,
    OutputError,
    ToolUnavailableError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from changecov.adapters.base import ChangeSource, CoverageTool

DEFAULT_BASE_REF = "origin/main"
DEFAULT_REPORTS = (Path("coverage.json"), Path("coverage.xml"))


def _configure_runtime(*, quiet: bool, verbose: bool) -> None:
    """Configure logging based on *quiet*/*verbose*."""
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_option_pairs(pairs: Sequence[str]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` strings into options.

    Values are read as TOML scalars/arrays when they parse (``true``, ``90``,
    ``["a", "b"]``) and kept as plain strings otherwise.
    """
    options: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"expected KEY=VALUE, got {pair!r}"
            raise ConfigError(msg)
        try:
            options[key] = tomllib.loads(f"value = {raw}")["value"]
        except tomllib.TOMLDecodeError:
            options[key] = raw
    return options


def collect_options(
    config_file: Path,
    overrides: dict[str, Any],
    pairs: Sequence[str],
) -> dict[str, Any]:
    """pyproject table, then ``--option`` pairs, then explicit flags."""
    options = load_pyproject_options(config_file)
    options.update(parse_option_pairs(pairs))
    options.update({key: value for key, value in overrides.items() if value is not None})
    return options


def resolve_report_path(report: Path | None, options: dict[str, Any]) -> Path:
    if report is not None:
        return report
    configured = options.get("report_path")
    if configured:
        return Path(str(configured))
    for candidate in DEFAULT_REPORTS:
        if candidate.exists():
            return candidate
    return DEFAULT_REPORTS[-1]


def resolve_tool(report_path: Path, options: dict[str, Any]) -> CoverageTool:
    command = options.get("tool_command")
    if not command:
        return ReportFileTool(report_path)
    if isinstance(command, str):
        command = shlex.split(command)
    if not isinstance(command, list) or not command or not all(isinstance(p, str) for p in command):
        msg = f"tool_command: expected a command string or list of strings, got {command!r}"
        raise ConfigError(msg)
    return CommandCoverageTool(command, report_path)


def resolve_changes(changed: Sequence[Path], options: dict[str, Any]) -> ChangeSource:
    if changed:
        return StaticChangeSet(modified=[str(p) for p in changed])
    return GitChangeSet(str(options.get("base_ref") or DEFAULT_BASE_REF))


def _fatal(message: str, code: int) -> typer.Exit:
    typer.echo(f"ERROR: {message}", err=True)
    return typer.Exit(code=code)


def _run(
    *,
    report: Path | None,
    changed: Sequence[Path],
    config_file: Path,
    overrides: dict[str, Any],
    pairs: Sequence[str],
    output: Path | None,
) -> GateResult:
    try:
        options = collect_options(config_file, overrides, pairs)
        config = GateConfig.from_options(options)
        report_path = resolve_report_path(report, options)
        tool = resolve_tool(report_path, options)
        if isinstance(tool, ReportFileTool) and not tool.is_available():
            msg = f"coverage report not found: {report_path}"
            raise FileNotFoundError(msg)
        return run_gate(
            config,
            tool=tool,
            changes=resolve_changes(changed, options),
            channel=ConsoleChannel(output),
        )
    except ConfigError as exc:
        raise _fatal(f"invalid configuration: {exc}", EXIT_CONFIG) from exc
    except ToolUnavailableError as exc:
        raise _fatal(str(exc), EXIT_UNAVAILABLE) from exc
    except MalformedReportError as exc:
        raise _fatal(f"malformed coverage report: {exc}", EXIT_DATAERR) from exc
    except ChangeSetError as exc:
        raise _fatal(str(exc), EXIT_SOFTWARE) from exc
    except OutputError as exc:
        raise _fatal(str(exc), EXIT_CANTCREAT) from exc
    except OSError as exc:
        raise _fatal(str(exc), EXIT_NOINPUT) from exc
    except ChangecovError as exc:
        raise _fatal(str(exc), EXIT_GENERIC) from exc


def gate_cmd(
    report: Annotated[
        Path | None,
        typer.Argument(help="Coverage report (JSON or Cobertura XML). Defaults to coverage.json/coverage.xml."),
    ] = None,
    tool_command: Annotated[
        str | None,
        typer.Option("--tool-command", help="Coverage command to run first; it must write REPORT."),
    ] = None,
    base: Annotated[
        str | None,
        typer.Option("--base", help=f"Git ref the change is compared against (default {DEFAULT_BASE_REF})."),
    ] = None,
    changed: Annotated[
        list[Path] | None,
        typer.Option("--changed", help="Changed file (repeatable). Skips git when given."),
    ] = None,
    minimum: Annotated[
        float | None,
        typer.Option("--minimum-coverage-percentage", help="Fail if changed-file coverage % is below this."),
    ] = None,
    file_minimum: Annotated[
        float | None,
        typer.Option(
            "--minimum-coverage-percentage-for-changed-files",
            help="Fail if any changed file's coverage % is below this (0 disables).",
        ),
    ] = None,
    ignore: Annotated[
        list[str] | None,
        typer.Option("--ignore", help="File-name substring exempt from the per-file check (repeatable)."),
    ] = None,
    average_only: Annotated[
        bool | None,
        typer.Option(
            "--display-only-average-coverage/--no-display-only-average-coverage",
            help="Show a single aggregate for --average-coverage-target-title.",
        ),
    ] = None,
    average_title: Annotated[
        str | None,
        typer.Option("--average-coverage-target-title", help="Target shown in average-only mode."),
    ] = None,
    option: Annotated[
        list[str] | None,
        typer.Option("-o", "--option", help="KEY=VALUE passed through to the coverage tool (repeatable)."),
    ] = None,
    config_file: Annotated[
        Path,
        typer.Option("--config", help="pyproject.toml holding the tool.changecov table."),
    ] = Path("pyproject.toml"),
    output: Annotated[
        Path | None,
        typer.Option("--output", help="Write the markdown summary to PATH (use '-' for stdout)."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Emit diagnostic logging"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="Suppress INFO logs, emit only errors"),
    ] = False,
) -> None:
    """Filter the coverage report to the changed files and enforce thresholds."""
    _configure_runtime(quiet=quiet, verbose=verbose)

    overrides: dict[str, Any] = {
        "tool_command": tool_command,
        "base_ref": base,
        MINIMUM_COVERAGE: minimum,
        FILE_MINIMUM_COVERAGE: file_minimum,
        FILE_IGNORE_LIST: ignore or None,
        DISPLAY_ONLY_AVERAGE: average_only,
        AVERAGE_TITLE: average_title,
    }
    result = _run(
        report=report,
        changed=changed or [],
        config_file=config_file,
        overrides=overrides,
        pairs=option or [],
        output=output,
    )

    if not result.passed:
        logger.debug("%d threshold failure(s)", len(result.failures))
        raise typer.Exit(code=EXIT_THRESHOLD)
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("gate")(gate_cmd)


__all__ = ["collect_options", "parse_option_pairs", "register", "resolve_report_path", "resolve_tool"]
