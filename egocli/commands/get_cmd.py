"""
ego get  ──  list config values
"""
import json
import re

from ..utils.logging import write_line

NAME = "get"
DESCRIPTION = "Lists one or more config value(s)."
SYNTAX = "[REGEX_FILTER*] [options]"
EXAMPLES = ["ego get", "ego get email", "ego get username email -tl"]


def add_arguments(parser):
    parser.add_argument("filters", nargs="*", metavar="REGEX_FILTER",
                        help="Case-insensitive regular expressions for the names")
    parser.add_argument("-g", "--global", dest="use_global", action="store_true",
                        help="List only global values, if possible")
    parser.add_argument("-l", "--local", action="store_true",
                        help="List only local values, if possible")
    parser.add_argument("-t", "--table", action="store_true",
                        help="Outputs value(s) in a simple list")


def collect_values(storage, filters, use_global=False, local=False) -> dict:
    """Merged values (global, then local), filtered by name."""
    sources = []
    if use_global or not local:
        sources.append(storage.global_values())
    if local or not use_global:
        sources.append(storage.local_values())

    patterns = [re.compile(f, re.IGNORECASE) for f in filters if str(f).strip()]

    found = {}
    for values in sources:
        for key, value in values.items():
            if not patterns or any(p.search(key) for p in patterns):
                found[key] = value
    return {k: found[k] for k in sorted(found)}


def _print(ctx):
    args = ctx.args
    values = collect_values(ctx.storage, args.filters, args.use_global, args.local)
    if args.table:
        for key, value in values.items():
            write_line(f"{key}\t{json.dumps(value)}")
    elif values:
        write_line(json.dumps(values, indent=2))


def execute(ctx):
    ctx.queue.run(_print, ctx)
