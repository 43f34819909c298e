from __future__ import annotations

import logging
import sys
from typing import Mapping, Optional, Sequence

from .commands import build_registry
from .config import Settings, load_settings
from .errors import SubtreeMergerError
from .gitutils import GitRunner
from .options import ParsedInvocation, parse_argv
from .registry import CommandContext, CommandRegistry, CommandResult


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger().setLevel(level)


def run(
    invocation: ParsedInvocation,
    registry: CommandRegistry,
    runner: GitRunner,
    settings: Settings,
) -> int:
    configure_logging(invocation.debug)
    logging.debug("Invocation: %s", invocation)

    command = invocation.command or settings.default_command
    context = CommandContext(registry=registry, runner=runner, settings=settings)
    result: CommandResult = registry.dispatch(command, invocation.arguments, context)
    if not result.ok and result.message:
        logging.error("%s", result.message)
    return result.exit_code


def main(
    argv: Sequence[str] | None = None,
    *,
    runner: Optional[GitRunner] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    settings = load_settings(environ)
    invocation = parse_argv(sys.argv[1:] if argv is None else argv)
    if runner is None:
        runner = GitRunner(executable=settings.git_executable)
    try:
        return run(invocation, build_registry(), runner, settings)
    except SubtreeMergerError as exc:
        logging.error("%s", exc)
        return exc.exit_code
    except KeyboardInterrupt:
        logging.error("Interrupted")
        return 130


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
