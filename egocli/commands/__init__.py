"""
Command registry

Every command module exposes
  NAME, DESCRIPTION, SYNTAX, EXAMPLES   help screen data
  add_arguments(parser)                 options and positionals
  execute(ctx) -> Optional[int]         the handler (int = exit code)
"""
import argparse
import re

from . import (
    api_cmd, aptdate_cmd, backup_cmd, build_cmd, clock_cmd, csv_split_cmd, docker_stop_cmd,
    docker_up_cmd, get_cmd, git_checkout_cmd, git_delete_cmd, git_export_cmd, git_push_cmd,
    git_sync_cmd, help_cmd, init_cmd, job_cmd, node_install_cmd, public_ip_cmd,
    qr_cmd, run_cmd, serve_cmd, set_cmd, slack_post_cmd, ssl_new_cmd, watch_cmd,
)

REGEX_COMMAND_NAME = re.compile(r"^[a-z0-9\-_]+$")

_MODULES = (
    api_cmd, aptdate_cmd, backup_cmd, build_cmd, clock_cmd, csv_split_cmd, docker_stop_cmd,
    docker_up_cmd, get_cmd, git_checkout_cmd, git_delete_cmd, git_export_cmd, git_push_cmd,
    git_sync_cmd, help_cmd, init_cmd, job_cmd, node_install_cmd, public_ip_cmd,
    qr_cmd, run_cmd, serve_cmd, set_cmd, slack_post_cmd, ssl_new_cmd, watch_cmd,
)

COMMANDS = {m.NAME: m for m in sorted(_MODULES, key=lambda m: m.NAME)}


def get_command(name: str):
    return COMMANDS.get((name or "").lower().strip())


def format_examples(module) -> str:
    lines = list(module.EXAMPLES)
    if not lines:
        return ""
    out = [f"Examples:    {lines[0]}"]
    out += [f"             {line}" for line in lines[1:]]
    return "\n".join(out)


def configure_parser(parser: argparse.ArgumentParser, module):
    """Options shared by all commands plus the command's own."""
    parser.description = module.DESCRIPTION
    parser.epilog = format_examples(module)
    parser.formatter_class = argparse.RawDescriptionHelpFormatter
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    module.add_arguments(parser)
    parser.set_defaults(command_module=module)
    return parser


def build_command_parser(module, prog: str = "ego") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=f"{prog} {module.NAME}",
                                     usage=f"{prog} {module.NAME} {module.SYNTAX}")
    return configure_parser(parser, module)
