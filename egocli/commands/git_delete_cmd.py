"""
ego git-delete  ──  delete local branches except 'master' and the current one
"""
import re

from ..operations.git import get_branches, get_current_branch
from ..utils.logging import spinner, write_line
from ..utils.process import spawn

NAME = "git-delete"
DESCRIPTION = "Deletes local branches, except 'master' and the current one."
SYNTAX = "[options]"
EXAMPLES = ["ego git-delete", "ego git-delete -y", 'ego git-delete --filter="^(feature/)"']

PROTECTED = ("master",)


def add_arguments(parser):
    parser.add_argument("-f", "--filter", default="", metavar="REGEX",
                        help="Regular expression (case-insensitive) which filters the branches by name")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Do not ask to confirm the operation")


def deletable_branches(branches, current, pattern=""):
    regex = re.compile(pattern, re.IGNORECASE) if pattern.strip() else None
    result = {
        b for b in branches
        if b not in PROTECTED and b != current and (regex is None or regex.search(b))
    }
    return sorted(result, key=lambda b: b.lower().strip())


def confirm(branches) -> list:
    """Ask for every branch; ENTER keeps the default (delete)."""
    write_line("Please select the branches, you would like to delete:")
    selected = []
    for b in branches:
        answer = input(f"  delete '{b}'? [Y/n] ").strip().lower()
        if answer in ("", "y", "yes"):
            selected.append(b)
    return selected


def execute(ctx):
    with spinner("Detecting current branch ...") as sp:
        current = get_current_branch(ctx.cwd)
        sp.text = f"Branch: '{current}'"

    with spinner("Loading branches ...") as sp:
        branches = get_branches(ctx.cwd)
        sp.text = f"{len(branches)} branch(es) found"

    candidates = deletable_branches(branches, current, ctx.args.filter)
    if not candidates:
        return

    selected = candidates if ctx.args.yes else confirm(candidates)
    for b in selected:
        with spinner(f"Deleting branch '{b}' ...") as sp:
            spawn("git", ["branch", "-D", b], cwd=ctx.cwd)
            sp.text = f"Branch '{b}' deleted"
