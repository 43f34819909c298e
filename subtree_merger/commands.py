from __future__ import annotations

from typing import List, Sequence

from . import __version__
from .errors import UsageError
from .gitutils import default_path, exit_status, remote_name
from .registry import CommandContext, CommandRegistry, CommandResult

PROG = "subtree-merger"

USAGE = f"""\
usage: {PROG} [--debug] <command> [<args>]
       {PROG} -h | --help
       {PROG} --version

Manage vendored repositories with git's subtree merge strategy."""

ADD_DESCRIPTION = f"""\
Add a repository as a subtree.

usage: {PROG} add <repository> [<path>]

Registers <repository> as a remote named after <path>, merges its history
with the `ours` strategy and reads its tree into <path>. When <path> is
omitted the repository name is used, without any `.git` suffix.
Commit the result to finish the import."""

PULL_DESCRIPTION = f"""\
Pull upstream changes into a subtree.

usage: {PROG} pull <path> <branch>

Runs `git pull -s subtree` against the remote registered for <path>."""

FETCH_DESCRIPTION = f"""\
Fetch a subtree remote.

usage: {PROG} fetch <remote> [<branch>]"""

MERGE_DESCRIPTION = f"""\
Merge a fetched branch with the subtree strategy.

usage: {PROG} merge <remote/branch>"""

DEINIT_DESCRIPTION = f"""\
Forget the remote registered for a subtree.

usage: {PROG} deinit <path>

The files under <path> are left in place."""

RM_DESCRIPTION = f"""\
Remove a subtree.

usage: {PROG} rm <path>

Removes the remote registered for <path>, then removes <path> from the
working tree and the index."""

HELP_DESCRIPTION = f"""\
Show usage, or the description of a command.

usage: {PROG} help [<command>]"""

COMMANDS_DESCRIPTION = f"""\
List available commands.

usage: {PROG} commands [--raw]"""

VERSION_DESCRIPTION = f"""\
Print the version.

usage: {PROG} version"""


def _require(arguments: Sequence[str], index: int, message: str) -> str:
    if len(arguments) <= index or not arguments[index]:
        raise UsageError(message)
    return arguments[index]


def _optional(arguments: Sequence[str], index: int) -> str | None:
    if len(arguments) <= index or not arguments[index]:
        return None
    return arguments[index]


def _require_path(arguments: Sequence[str], index: int, message: str) -> str:
    path = remote_name(_require(arguments, index, message))
    if not path:
        raise UsageError(message)
    return path


def _git(context: CommandContext, *steps: List[str]) -> CommandResult:
    for step in steps:
        code = exit_status(context.runner.run(step))
        if code != 0:
            return CommandResult(
                exit_code=code, message=f"git {step[0]} failed with exit code {code}"
            )
    return CommandResult()


# Subtree commands ---------------------------------------------------------
def handle_add(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    repository = _require(arguments, 0, "Repository required.")
    path = _optional(arguments, 1) or default_path(repository)
    name = remote_name(path)
    if not name:
        raise UsageError("Path required.")
    ref = f"{name}/{context.settings.default_branch}"
    return _git(
        context,
        ["remote", "add", "-f", name, repository],
        ["merge", "-s", "ours", "--no-commit", "--allow-unrelated-histories", ref],
        ["read-tree", f"--prefix={name}/", "-u", ref],
    )


def handle_pull(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    name = _require_path(arguments, 0, "Remote name required.")
    branch = _require(arguments, 1, "Branch name required.")
    return _git(context, ["pull", "-s", "subtree", name, branch])


def handle_fetch(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    remote = _require_path(arguments, 0, "Remote name required.")
    branch = _optional(arguments, 1)
    step = ["fetch", remote]
    if branch:
        step.append(branch)
    return _git(context, step)


def handle_merge(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    ref = _require(arguments, 0, "Remote branch required.")
    return _git(context, ["merge", "-s", "subtree", ref])


def handle_deinit(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    name = _require_path(arguments, 0, "Path required.")
    return _git(context, ["remote", "rm", name])


def handle_rm(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    path = _require_path(arguments, 0, "Path required.")
    return _git(context, ["remote", "rm", path], ["rm", "-r", path])


# Informational commands ---------------------------------------------------
def handle_help(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    topic = _optional(arguments, 0)
    if topic:
        print(context.registry.get_description(topic))
        return CommandResult()
    print(USAGE)
    print()
    print("Commands:")
    print(format_commands(context.registry))
    print()
    print(f"See '{PROG} help <command>' for more information on a command.")
    return CommandResult()


def handle_commands(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    if "--raw" in arguments:
        for name in context.registry.names():
            print(name)
    else:
        print(format_commands(context.registry))
    return CommandResult()


def handle_version(context: CommandContext, arguments: Sequence[str]) -> CommandResult:
    print(f"{PROG} version {__version__}")
    return CommandResult()


def format_commands(registry: CommandRegistry) -> str:
    entries = registry.list_commands()
    if not entries:
        return ""
    width = max(len(entry.name) for entry in entries)
    lines = []
    for entry in entries:
        summary = (registry.get_description(entry.name).splitlines() or [""])[0]
        lines.append(f"  {entry.name:<{width}}  {summary}")
    return "\n".join(lines)


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register("add", handle_add, ADD_DESCRIPTION)
    registry.register("pull", handle_pull, PULL_DESCRIPTION)
    registry.register("fetch", handle_fetch, FETCH_DESCRIPTION)
    registry.register("merge", handle_merge, MERGE_DESCRIPTION)
    registry.register("deinit", handle_deinit, DEINIT_DESCRIPTION)
    registry.register("rm", handle_rm, RM_DESCRIPTION)
    registry.register("help", handle_help, HELP_DESCRIPTION)
    registry.register("commands", handle_commands, COMMANDS_DESCRIPTION)
    registry.register("version", handle_version, VERSION_DESCRIPTION)
    return registry
