"""Change-set collaborators: git and explicit lists."""

from __future__ import annotations

import shutil
import subprocess
from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING

from changecov._meta import logger
from changecov.adapters.base import change_set_paths
from changecov.errors import ChangeSetError

if TYPE_CHECKING:
    from collections.abc import Sequence


def _git_executable() -> str:
    """Resolve the full path to the ``git`` executable."""
    executable = shutil.which("git")
    if executable is None:
        msg = "git is not available on this machine"
        raise ChangeSetError(msg)
    return executable


class StaticChangeSet:
    """Change set given explicitly, e.g. on the command line."""

    def __init__(self, modified: Sequence[str] = (), added: Sequence[str] = ()) -> None:
        self._modified = tuple(str(p) for p in modified)
        self._added = tuple(str(p) for p in added)

    def modified_files(self) -> Sequence[str]:
        return self._modified

    def added_files(self) -> Sequence[str]:
        return self._added

    def paths(self, base: Path | None = None) -> frozenset[str]:
        return change_set_paths(self, base)


class GitChangeSet:
    """Files modified/added between *base_ref* and ``HEAD``.

    Paths come back relative to the repository top level, which is also the
    default base for normalising them. Rename detection is off, so a renamed
    file is listed under its new path as added.
    """

    def __init__(self, base_ref: str = "origin/main", *, cwd: Path | None = None) -> None:
        self.base_ref = base_ref
        self.cwd = cwd

    def _git(self, *args: str) -> str:
        cmd = [_git_executable(), *args]
        logger.debug("git: %s", " ".join(args))
        try:
            proc = subprocess.run(cmd, cwd=self.cwd, capture_output=True, text=True, check=False)  # noqa: S603
        except OSError as exc:
            msg = f"failed to run git: {exc}"
            raise ChangeSetError(msg) from exc
        if proc.returncode != 0:
            msg = f"git {' '.join(args)} failed: {proc.stderr.strip()}"
            raise ChangeSetError(msg)
        return proc.stdout

    @cached_property
    def toplevel(self) -> Path:
        return Path(self._git("rev-parse", "--show-toplevel").strip())

    def _diff(self, diff_filter: str) -> list[str]:
        out = self._git(
            "diff", "--name-only", "--no-renames", f"--diff-filter={diff_filter}", f"{self.base_ref}...HEAD"
        )
        return [line for line in out.splitlines() if line.strip()]

    def modified_files(self) -> Sequence[str]:
        return self._diff("M")

    def added_files(self) -> Sequence[str]:
        return self._diff("A")

    def paths(self, base: Path | None = None) -> frozenset[str]:
        return change_set_paths(self, base or self.toplevel)


__all__ = ["GitChangeSet", "StaticChangeSet"]
