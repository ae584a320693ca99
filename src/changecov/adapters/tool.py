"""Coverage tool collaborators."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any

from changecov._meta import logger
from changecov.errors import ToolUnavailableError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


class ReportFileTool:
    """A report the build already produced; nothing is run."""

    def __init__(self, report_path: Path) -> None:
        self.report_path = report_path

    def is_available(self) -> bool:
        return self.report_path.is_file()

    def produce(self, options: Mapping[str, Any]) -> Path:
        if options:
            logger.debug("ignoring tool options for pre-built report: %s", ", ".join(options))
        if not self.is_available():
            msg = f"coverage report not found: {self.report_path}"
            raise ToolUnavailableError(msg)
        return self.report_path


class CommandCoverageTool:
    """Run an external coverage command that writes *report_path*.

    Pass-through options become command-line flags, see :func:`option_flags`.
    """

    def __init__(self, command: Sequence[str], report_path: Path) -> None:
        if not command:
            msg = "coverage tool command must not be empty"
            raise ValueError(msg)
        self.command = tuple(command)
        self.report_path = report_path

    def executable(self) -> str | None:
        return shutil.which(self.command[0])

    def is_available(self) -> bool:
        return self.executable() is not None

    def produce(self, options: Mapping[str, Any]) -> Path:
        executable = self.executable()
        if executable is None:
            msg = f"coverage tool {self.command[0]!r} is not available on this machine"
            raise ToolUnavailableError(msg)

        cmd = [executable, *self.command[1:], *option_flags(options)]
        logger.info("running coverage tool: %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)  # noqa: S603
        except OSError as exc:
            msg = f"failed to run {self.command[0]!r}: {exc}"
            raise ToolUnavailableError(msg) from exc

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip()
            msg = f"coverage tool exited with status {proc.returncode}" + (f": {detail}" if detail else "")
            raise ToolUnavailableError(msg)
        if not self.report_path.is_file():
            msg = f"coverage tool finished but did not write {self.report_path}"
            raise ToolUnavailableError(msg)
        return self.report_path


def option_flags(options: Mapping[str, Any]) -> list[str]:
    """Render tool options as ``--key value`` flags.

    ``True`` becomes a bare flag, ``False``/``None`` are dropped and
    sequences are comma-joined.
    """
    flags: list[str] = []
    for key, value in options.items():
        flag = f"--{key}"
        if value is None or value is False:
            continue
        if value is True:
            flags.append(flag)
        elif isinstance(value, list | tuple):
            flags.extend([flag, ",".join(str(item) for item in value)])
        else:
            flags.extend([flag, str(value)])
    return flags


__all__ = ["CommandCoverageTool", "ReportFileTool", "option_flags"]
