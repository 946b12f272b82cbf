#!/usr/bin/env python3
"""
ego  ──  command line tools for developers
==========================================

Usage:
  ego COMMAND [options]
  ego help COMMAND

'ego' without a command prints the list of commands.
Unknown commands run '<ego home>/COMMAND.sh' ('.cmd' on Windows) if present.
"""
import argparse
import difflib
import sys
from typing import Optional, Sequence

from . import __version__
from . import config as _cfg
from .commands import COMMANDS, REGEX_COMMAND_NAME, configure_parser, get_command
from .config import AppConfig
from .core.context import CommandContext
from .core.plugins import shell_command
from .core.queue import ExecutionQueue
from .utils.logging import colorize, err, set_verbose, warn, write_line
from .utils.process import spawn_interactive

EXIT_NO_COMMAND = 2
EXIT_UNKNOWN_COMMAND = 3
EXIT_INTERRUPTED = 130


# ── help screen ──────────────────────────────────────────────────────────────

def show_help():
    write_line(f"{colorize('ego')} (ego-cli) - Version {__version__}")
    write_line()
    write_line("Syntax:    ego COMMAND [options]")
    write_line()
    write_line("General options:")
    write_line(" -h, --help     # Prints this info and help screen.")
    write_line(" -v, --version  # Prints the version of that app.")
    write_line()
    write_line("Examples:    ego -v")
    write_line("             ego backup")
    write_line("             ego help git-sync")
    write_line()
    write_line("Available commands:")
    width = max(len(name) for name in COMMANDS)
    for name in sorted(COMMANDS):
        write_line(f" {name.ljust(width)}  # {COMMANDS[name].DESCRIPTION}")


def suggest_command(name: str) -> Optional[str]:
    """Closest known command name."""
    matches = difflib.get_close_matches(name.lower().strip(), list(COMMANDS), n=1, cutoff=0.0)
    return matches[0] if matches else None


# ── unknown commands ─────────────────────────────────────────────────────────

def run_custom_script(config: AppConfig, name: str, args: Sequence[str]) -> Optional[int]:
    """Run ``<ego home>/<name>.sh``; None when there is no such script."""
    if not REGEX_COMMAND_NAME.match(name):
        return None
    script = config.home / f"{name}{_cfg.SHELL_SCRIPT_EXT}"
    if not script.is_file():
        return None
    program, lead = shell_command(script)
    return spawn_interactive(program, [*lead, *args], cwd=config.cwd)


def handle_unknown_command(config: AppConfig, name: str, args: Sequence[str]) -> int:
    code = run_custom_script(config, name.lower().strip(), args)
    if code is not None:
        return code
    nearest = suggest_command(name)
    warn(f"Command {colorize(name)} not found! Did you mean {colorize(nearest)}?")
    return EXIT_UNKNOWN_COMMAND


# ── parser ───────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ego",
        description="Command line tools for developers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    for name, module in COMMANDS.items():
        sub = subparsers.add_parser(name, help=module.DESCRIPTION,
                                    usage=f"ego {name} {module.SYNTAX}")
        configure_parser(sub, module)
    return parser


# ── dispatch ─────────────────────────────────────────────────────────────────

def run_command(args: argparse.Namespace, config: AppConfig) -> int:
    module = args.command_module
    set_verbose(args.verbose)

    queue = ExecutionQueue()
    ctx = CommandContext(module.NAME, args, config, queue)
    try:
        result = module.execute(ctx)
        queue.join()
    finally:
        queue.shutdown(wait=False)

    if result is None:
        return 0
    try:
        return int(str(result).strip())
    except ValueError:
        return 0


def dispatch(argv: Sequence[str], config: AppConfig) -> int:
    argv = list(argv)
    if not argv:
        show_help()
        return EXIT_NO_COMMAND

    first = argv[0]
    if first in ("-h", "--help"):
        show_help()
        return 0

    if not first.startswith("-"):
        module = get_command(first)
        if module is None:
            return handle_unknown_command(config, first, argv[1:])
        argv[0] = module.NAME

    args = build_parser().parse_args(argv)
    return run_command(args, config)


def main(argv: Optional[Sequence[str]] = None):
    """CLI entry point for ego"""
    argv = sys.argv[1:] if argv is None else argv
    config = AppConfig.from_environment(version=__version__)
    try:
        code = dispatch(argv, config)
    except KeyboardInterrupt:
        err()
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        err(f"{type(e).__name__}: {e}")
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
