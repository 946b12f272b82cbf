"""
ego git-sync  ──  pull and push the current branch with every remote
"""
from ..operations.git import get_current_branch, get_remotes
from ..utils.logging import spinner
from ..utils.process import spawn

NAME = "git-sync"
DESCRIPTION = "Syncs the current branch with all remotes."
SYNTAX = "[options]"
EXAMPLES = ["ego git-sync"]


def add_arguments(parser):
    pass


def execute(ctx):
    with spinner("Detecting current branch ...") as sp:
        branch = get_current_branch(ctx.cwd)
        sp.text = f"Branch: '{branch}'"

    with spinner("Loading remotes ...") as sp:
        remotes = get_remotes(ctx.cwd)
        sp.text = f"{len(remotes)} remote(s) found"

    total = len(remotes)
    for i, remote in enumerate(remotes, 1):
        with spinner(f"Syncing with '{remote}' ({i} / {total}) ...") as sp:
            spawn("git", ["pull", remote, branch], cwd=ctx.cwd)
            spawn("git", ["push", remote, branch], cwd=ctx.cwd)
            sp.text = f"Synced with '{remote}' ({i} / {total})"
