from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, List, Optional, Sequence, Tuple

HELP_FLAGS = ("-h", "--help")
VERSION_FLAG = "--version"
DEBUG_FLAG = "--debug"
END_OF_OPTIONS = "--"


@dataclass(frozen=True)
class ParsedInvocation:
    command: Optional[str]
    arguments: Tuple[str, ...] = ()
    debug: bool = False


def normalize_options(
    tokens: Sequence[str],
    value_options: Collection[str] = (),
) -> List[str]:
    """Split combined short options and ``--name=value`` pairs.

    ``value_options`` holds the letters of short options that take a value;
    when one of them is followed by more characters inside a combined token,
    the rest of the token becomes its value. Everything after a literal
    ``--`` is passed through untouched.
    """
    normalized: List[str] = []
    remaining = list(tokens)
    while remaining:
        token = remaining.pop(0)
        if token == END_OF_OPTIONS:
            normalized.append(token)
            normalized.extend(remaining)
            break
        if token.startswith("--"):
            name, sep, value = token.partition("=")
            if sep and len(name) > 2:
                normalized.extend([name, value])
            else:
                normalized.append(token)
            continue
        if len(token) > 2 and token[0] == "-" and token[1].isalpha():
            normalized.extend(_split_short_options(token[1:], value_options))
            continue
        normalized.append(token)
    return normalized


def _split_short_options(letters: str, value_options: Collection[str]) -> List[str]:
    split: List[str] = []
    for index, letter in enumerate(letters):
        split.append(f"-{letter}")
        rest = letters[index + 1 :]
        if letter in value_options and rest:
            split.append(rest)
            break
    return split


def classify(tokens: Sequence[str]) -> ParsedInvocation:
    command: Optional[str] = None
    arguments: List[str] = []
    debug = False
    builtin_chosen = False
    options_ended = False

    for token in tokens:
        if not options_ended:
            if token == END_OF_OPTIONS:
                options_ended = True
                continue
            if token == DEBUG_FLAG:
                debug = True
                continue
            if token in HELP_FLAGS or token == VERSION_FLAG:
                # `add -h` reads as `help add`
                if command is not None and not builtin_chosen:
                    arguments.insert(0, command)
                command = "help" if token in HELP_FLAGS else "version"
                builtin_chosen = True
                continue
        if command is None:
            command = token
        else:
            arguments.append(token)

    return ParsedInvocation(command=command, arguments=tuple(arguments), debug=debug)


def parse_argv(
    argv: Sequence[str],
    value_options: Collection[str] = (),
) -> ParsedInvocation:
    return classify(normalize_options(argv, value_options))
