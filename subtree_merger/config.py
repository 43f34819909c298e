from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_COMMAND = "help"
DEFAULT_BRANCH = "master"
DEFAULT_GIT = "git"


@dataclass(frozen=True)
class Settings:
    default_command: str = DEFAULT_COMMAND
    default_branch: str = DEFAULT_BRANCH
    git_executable: str = DEFAULT_GIT


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        default_command=_read(env, "DEFAULT_COMMAND", DEFAULT_COMMAND),
        default_branch=_read(env, "SUBTREE_MERGER_BRANCH", DEFAULT_BRANCH),
        git_executable=_read(env, "SUBTREE_MERGER_GIT", DEFAULT_GIT),
    )


def _read(env: Mapping[str, str], key: str, fallback: str) -> str:
    value = env.get(key, "").strip()
    return value or fallback
