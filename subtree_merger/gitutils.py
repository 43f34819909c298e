from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import SubtreeMergerError


class GitRunner:
    """Runs git with the caller's stdio and reports its exit code."""

    def __init__(self, repo: Optional[Path] = None, *, executable: str = "git") -> None:
        self.repo = repo
        self.executable = executable

    def command(self, args: Sequence[str]) -> List[str]:
        cmd = [self.executable]
        if self.repo is not None:
            cmd += ["-C", str(self.repo)]
        return cmd + list(args)

    def run(self, args: Sequence[str]) -> int:
        cmd = self.command(args)
        logging.debug("Running: %s", shlex.join(cmd))
        try:
            result = subprocess.run(cmd, check=False)
        except FileNotFoundError as exc:
            raise SubtreeMergerError(f"git executable not found: {self.executable}") from exc
        if result.returncode != 0:
            logging.debug("%s exited with %d", shlex.join(cmd), result.returncode)
        return exit_status(result.returncode)


def exit_status(returncode: int) -> int:
    # killed by signal N: report 128 + N like a shell does
    if returncode < 0:
        return 128 - returncode
    return returncode


def remote_name(path: str) -> str:
    return path.rstrip("/")


def default_path(repository: str) -> str:
    base = repository.rstrip("/")
    # scp-style urls: git@host:owner/repo.git
    base = base.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if base.endswith(".git"):
        base = base[: -len(".git")]
    return base
