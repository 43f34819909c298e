from __future__ import annotations

import io
from typing import Sequence

import pytest

from subtree_merger.commands import build_registry
from subtree_merger.config import Settings
from subtree_merger.errors import UsageError
from subtree_merger.registry import CommandContext, CommandRegistry, CommandResult


def _context(registry: CommandRegistry, runner) -> CommandContext:
    return CommandContext(registry=registry, runner=runner, settings=Settings())


def test_register_rejects_duplicates() -> None:
    registry = CommandRegistry()
    registry.register("sample", lambda ctx, args: CommandResult())
    with pytest.raises(ValueError):
        registry.register("sample", lambda ctx, args: CommandResult())


def test_names_keep_registration_order() -> None:
    registry = build_registry()
    assert registry.names() == [
        "add",
        "pull",
        "fetch",
        "merge",
        "deinit",
        "rm",
        "help",
        "commands",
        "version",
    ]
    assert "help" in registry
    assert "frobnicate" not in registry


def test_get_description_falls_back() -> None:
    registry = CommandRegistry()
    assert registry.get_description("nothing") == "No additional information for `nothing`"


def test_set_description_direct_text() -> None:
    registry = CommandRegistry()
    registry.register("sample", lambda ctx, args: CommandResult())
    registry.set_description("sample", "Sample text")
    assert registry.get_description("sample") == "Sample text"
    assert registry.get("sample").description == "Sample text"


def test_set_description_from_stream_stops_at_terminator() -> None:
    registry = CommandRegistry()
    stream = io.StringIO("first line\nsecond line\n.\nignored\n")
    text = registry.set_description("piped", stream=stream)
    assert text == "first line\nsecond line"
    assert registry.get_description("piped") == text


def test_set_description_from_stream_reads_to_eof() -> None:
    registry = CommandRegistry()
    registry.set_description("piped", stream=io.StringIO("only line\n"))
    assert registry.get_description("piped") == "only line"


def test_set_description_requires_name() -> None:
    registry = CommandRegistry()
    with pytest.raises(UsageError, match="Command name required."):
        registry.set_description("", "text")


def test_dispatch_unknown_command(runner) -> None:
    registry = build_registry()
    result = registry.dispatch("frobnicate", [], _context(registry, runner))
    assert result.exit_code == 1
    assert result.message == "Unknown command: frobnicate"
    assert runner.calls == []


def test_dispatch_is_exact_match(runner) -> None:
    registry = build_registry()
    context = _context(registry, runner)
    assert registry.dispatch("ADD", ["x"], context).exit_code == 1
    assert registry.dispatch("ad", ["x"], context).exit_code == 1
    assert runner.calls == []


def test_dispatch_passes_arguments(runner) -> None:
    seen: list[Sequence[str]] = []

    def handler(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
        seen.append(arguments)
        return CommandResult(exit_code=3)

    registry = CommandRegistry()
    registry.register("probe", handler)
    result = registry.dispatch("probe", ("a", "b"), _context(registry, runner))
    assert result.exit_code == 3
    assert seen == [["a", "b"]]


def test_dispatch_turns_usage_error_into_result(runner) -> None:
    def handler(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
        raise UsageError("Thing required.")

    registry = CommandRegistry()
    registry.register("probe", handler)
    result = registry.dispatch("probe", [], _context(registry, runner))
    assert result == CommandResult(exit_code=1, message="Thing required.")


def test_set_description_reads_stdin_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    registry = CommandRegistry()
    monkeypatch.setattr("sys.stdin", io.StringIO("from stdin\n.\n"))

    assert registry.set_description("piped") == "from stdin"
    assert registry.get_description("piped") == "from stdin"


def test_description_set_before_register_moves_to_entry() -> None:
    registry = CommandRegistry()
    registry.set_description("late", "Early text")
    entry = registry.register("late", lambda ctx, args: CommandResult())

    assert entry.description == "Early text"
    assert registry.get_description("late") == "Early text"

    entry.description = "Changed"
    assert registry.get_description("late") == "Changed"
