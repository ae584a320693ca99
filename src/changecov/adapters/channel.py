"""Review channel that reports to the terminal or a file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markdown import Markdown
from rich.text import Text

from changecov._meta import logger
from changecov.errors import OutputError
from changecov.io import is_stdout, write_output

if TYPE_CHECKING:
    from pathlib import Path


class ConsoleChannel:
    """Collects the summary and failures of a gate run.

    The markdown goes to *output* (stdout when ``None`` or ``-``). On a
    terminal it is rendered with Rich; otherwise the raw text is written so
    it can be piped into a pull-request comment. Failures go to stderr.
    """

    def __init__(
        self,
        output: Path | None = None,
        *,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.output = output
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.messages: list[str] = []
        self.failures: list[str] = []

    def markdown(self, text: str) -> None:
        self.messages.append(text)
        if is_stdout(self.output) and self.console.is_terminal:
            self.console.print(Markdown(text))
            return
        try:
            write_output(text, self.output)
        except OSError as exc:
            msg = f"cannot write markdown summary to {self.output}: {exc}"
            raise OutputError(msg) from exc

    def fail(self, message: str) -> None:
        self.failures.append(message)
        logger.debug("failure recorded: %s", message)
        self.err_console.print(Text.assemble(("✗ ", "bold red"), message), soft_wrap=True)

    @property
    def failed(self) -> bool:
        return bool(self.failures)


__all__ = ["ConsoleChannel"]
