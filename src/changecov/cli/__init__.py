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
from changecov.cli.root import cli, create_app, main

__all__ = [
    "EXIT_CANTCREAT",
    "EXIT_CONFIG",
    "EXIT_DATAERR",
    "EXIT_GENERIC",
    "EXIT_NOINPUT",
    "EXIT_OK",
    "EXIT_SOFTWARE",
    "EXIT_THRESHOLD",
    "EXIT_UNAVAILABLE",
    "cli",
    "create_app",
    "main",
]
