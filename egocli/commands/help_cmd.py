"""
ego help  ──  help screen of a single command
"""
from ..utils.logging import colorize, warn, write_line

NAME = "help"
DESCRIPTION = "Shows the help screen for a command."
SYNTAX = "[COMMAND]"
EXAMPLES = ["ego help git-sync", "ego help"]


def add_arguments(parser):
    parser.add_argument("command_name", nargs="?", metavar="COMMAND",
                        help="The command to describe")


def show_command_help(module):
    from . import build_command_parser

    write_line(colorize(module.DESCRIPTION))
    write_line()
    write_line(build_command_parser(module).format_help().rstrip())


def execute(ctx):
    from . import REGEX_COMMAND_NAME, get_command

    if ctx.args.command_name is None:
        show_command_help(get_command(NAME))
        return 0

    name = ctx.args.command_name.lower().strip()
    if not name:
        warn("No command defined!")
        ctx.exit(2)
    if not REGEX_COMMAND_NAME.match(name):
        warn(f"Invalid command name ('{name}')!")
        ctx.exit(3)

    module = get_command(name)
    if module is None:
        warn(f"Unknown command '{name}'!")
        ctx.exit(4)

    show_command_help(module)
    return 0
