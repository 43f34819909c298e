from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, TextIO

from .errors import UsageError

if TYPE_CHECKING:
    from .config import Settings
    from .gitutils import GitRunner

DESCRIPTION_TERMINATOR = "."


@dataclass(frozen=True)
class CommandResult:
    exit_code: int = 0
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class CommandContext:
    registry: "CommandRegistry"
    runner: "GitRunner"
    settings: "Settings"


Handler = Callable[[CommandContext, Sequence[str]], CommandResult]


@dataclass
class CommandEntry:
    name: str
    handler: Handler
    description: Optional[str] = None


class CommandRegistry:
    def __init__(self) -> None:
        self._commands: Dict[str, CommandEntry] = {}
        self._descriptions: Dict[str, str] = {}

    # Public API -----------------------------------------------------------
    def register(
        self, name: str, handler: Handler, description: Optional[str] = None
    ) -> CommandEntry:
        if not name:
            raise ValueError("Command name must not be empty.")
        if name in self._commands:
            raise ValueError(f"Command '{name}' already registered.")
        entry = CommandEntry(
            name=name, handler=handler, description=self._descriptions.pop(name, None)
        )
        self._commands[name] = entry
        if description is not None:
            self.set_description(name, description)
        return entry

    def get(self, name: str) -> CommandEntry | None:
        return self._commands.get(name)

    def names(self) -> List[str]:
        return list(self._commands)

    def list_commands(self) -> List[CommandEntry]:
        return list(self._commands.values())

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def set_description(
        self,
        name: str,
        text: Optional[str] = None,
        *,
        stream: Optional[TextIO] = None,
    ) -> str:
        if not name:
            raise UsageError("Command name required.")
        if text is None:
            text = _read_description(stream if stream is not None else sys.stdin)
        entry = self._commands.get(name)
        if entry is not None:
            entry.description = text
        else:
            # held until the command is registered
            self._descriptions[name] = text
        return text

    def get_description(self, name: str) -> str:
        entry = self._commands.get(name)
        text = entry.description if entry is not None else self._descriptions.get(name)
        if text is None:
            return f"No additional information for `{name}`"
        return text

    def dispatch(
        self, name: str, arguments: Sequence[str], context: CommandContext
    ) -> CommandResult:
        entry = self._commands.get(name)
        if entry is None:
            return CommandResult(exit_code=1, message=f"Unknown command: {name}")
        logging.debug("Dispatching %s with arguments %s", name, list(arguments))
        try:
            return entry.handler(context, list(arguments))
        except UsageError as exc:
            return CommandResult(exit_code=exc.exit_code, message=str(exc))


def _read_description(stream: TextIO) -> str:
    lines: List[str] = []
    for line in stream:
        if line.rstrip("\r\n") == DESCRIPTION_TERMINATOR:
            break
        lines.append(line)
    return "".join(lines).rstrip("\n")
