"""
Command-line entry point.

Usage:
    elsewhere [options] -c "npm run dev"
    elsewhere [options] -- npm run dev
    echo "npm run dev" | elsewhere [options]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import NoReturn, Sequence

from . import __version__
from .backends import valid_backend_names
from .command import resolve_command
from .config import apply_config
from .detect import detect_environment
from .errors import ElsewhereError, ExitCode
from .executor import execute_plan
from .models import Direction, Options, Target
from .planner import create_plan, create_plan_interactive

logger = logging.getLogger("elsewhere")

EPILOG = """\
Examples:
  elsewhere -c "npm run dev"          Run in a new pane/tab/window
  elsewhere -p -d -- tail -f app.log  Split a pane below
  elsewhere -T iTerm2 -t -c htop      Open a new iTerm2 tab
  elsewhere --dry-run -c "make test"  Print the plan as JSON

Environment:
  ELSEWHERE_TERMINAL   Default backend when --terminal is not given
  ELSEWHERE_HOME       Config directory (default ~/.elsewhere)
"""


class ElsewhereArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 64."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(ExitCode.USAGE_ERROR, f"Error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = ElsewhereArgumentParser(
        prog="elsewhere",
        description="Run a command in a new terminal pane, tab, or window.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--command", help="Command to run")
    parser.add_argument(
        "-T",
        "--terminal",
        metavar="NAME",
        help=f"Backend to use: {', '.join(valid_backend_names())}",
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "-p", "--pane", dest="target", action="store_const", const=Target.PANE,
        help="Open a split pane (tmux, zellij)",
    )
    target.add_argument(
        "-t", "--tab", dest="target", action="store_const", const=Target.TAB,
        help="Open a new tab",
    )
    target.add_argument(
        "-w", "--window", dest="target", action="store_const", const=Target.WINDOW,
        help="Open a new window",
    )

    direction = parser.add_mutually_exclusive_group()
    for direction_value in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
        name = direction_value.value
        direction.add_argument(
            f"-{name[0]}", f"--{name}", dest="direction", action="store_const",
            const=direction_value, help=f"Split the pane {name}",
        )

    parser.add_argument(
        "-y", "--yes", "--no-tty", dest="yes", action="store_true",
        help="Never prompt; use the first viable backend",
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Always ask which backend to use"
    )
    parser.add_argument(
        "--no", "--strict", dest="strict", action="store_true",
        help="Fail instead of degrading to a different target",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the plan as JSON and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def split_command_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split argv at the first `--` into (options, command words)."""
    argv = list(argv)
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1 :]
    return argv, []


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_error(message: str, hint: str | None = None) -> None:
    print(f"Error: {message}", file=sys.stderr)
    if hint:
        print(f"Hint: {hint}", file=sys.stderr)


def _stdin_is_tty() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, plan, then print or execute. Returns the exit status."""
    options_argv, command_words = split_command_args(
        sys.argv[1:] if argv is None else argv
    )
    args = build_parser().parse_args(options_argv)
    configure_logging(args.verbose)

    stdin_is_tty = _stdin_is_tty()
    command = resolve_command(
        args.command,
        command_words,
        None if stdin_is_tty else sys.stdin,
    )

    options = apply_config(
        Options(
            terminal=args.terminal,
            target=args.target,
            direction=args.direction,
            strict=args.strict,
            # A piped stdin leaves nothing to answer the prompt with.
            auto_select=args.yes or not stdin_is_tty,
            interactive=args.interactive,
            dry_run=args.dry_run,
        )
    )
    env = detect_environment()

    if options.dry_run and not options.interactive:
        plan = create_plan(command, options, env)
    else:
        plan = asyncio.run(create_plan_interactive(command, options, env))

    if options.dry_run:
        print(json.dumps(plan.to_dict(), indent=2))
        return ExitCode.SUCCESS if plan.ok else plan.exit_code

    if not plan.ok:
        _print_error(plan.message, plan.hint)
        return plan.exit_code

    for warning in plan.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    try:
        asyncio.run(execute_plan(plan, env))
    except ElsewhereError as exc:
        _print_error(exc.message, exc.hint)
        return exc.exit_code
    return ExitCode.SUCCESS


def main(argv: Sequence[str] | None = None) -> NoReturn:
    """Console script entry point."""
    try:
        status = run(argv)
    except KeyboardInterrupt:
        status = ExitCode.GENERIC_ERROR
    sys.exit(int(status))


if __name__ == "__main__":
    main()
