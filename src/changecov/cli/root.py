from __future__ import annotations

from typing import Annotated

import typer
from typer.main import get_command

from changecov import __version__
from changecov.cli import gate


def create_app() -> typer.Typer:
    """Build the changecov app; `gate` is its only command."""
    app = typer.Typer(
        help=(
            "Coverage gate for pull requests: restrict a coverage report to the changed files, "
            "post a markdown summary and fail when the minimums are not met."
        ),
    )

    @app.callback(invoke_without_command=True)
    def _root(
        ctx: typer.Context,
        *,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit"),
        ] = False,
    ) -> None:
        """Gate pull requests on the coverage of the files they change."""
        if version:
            typer.echo(f"changecov {__version__}")
            raise typer.Exit
        if ctx.invoked_subcommand is None:
            typer.echo(ctx.get_help())
            raise typer.Exit

    gate.register(app)

    return app


def main() -> None:
    """Console-script entry point for `changecov`."""
    get_command(create_app())()


# Click-compatible object for tooling that imports it
cli = get_command(create_app())

__all__ = ["cli", "create_app", "main"]
