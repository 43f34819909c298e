from __future__ import annotations

from typing import Dict, List, Sequence

import pytest

from subtree_merger.commands import build_registry
from subtree_merger.config import Settings
from subtree_merger.gitutils import GitRunner
from subtree_merger.registry import CommandContext


class RecordingRunner(GitRunner):
    def __init__(self, exit_codes: Dict[str, int] | None = None) -> None:
        super().__init__()
        self.calls: List[List[str]] = []
        self.exit_codes = exit_codes or {}

    def run(self, args: Sequence[str]) -> int:
        self.calls.append(list(args))
        return self.exit_codes.get(args[0], 0)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def context(runner: RecordingRunner) -> CommandContext:
    return CommandContext(registry=build_registry(), runner=runner, settings=Settings())


@pytest.fixture
def make_context():
    def factory(
        runner: GitRunner | None = None, settings: Settings | None = None
    ) -> CommandContext:
        return CommandContext(
            registry=build_registry(),
            runner=runner or RecordingRunner(),
            settings=settings or Settings(),
        )

    return factory


@pytest.fixture
def failing_runner():
    def factory(**exit_codes: int) -> RecordingRunner:
        return RecordingRunner(exit_codes=exit_codes)

    return factory
