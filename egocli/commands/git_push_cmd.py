"""
ego git-push  ──  push to every remote
"""
from ..operations.git import get_remotes
from ..utils.logging import spinner
from ..utils.process import spawn

NAME = "git-push"
DESCRIPTION = "Pushes the current branch to all remotes."
SYNTAX = "[options]"
EXAMPLES = ["ego git-push"]


def add_arguments(parser):
    pass


def execute(ctx):
    with spinner("Loading remotes ...") as sp:
        remotes = get_remotes(ctx.cwd)
        sp.succeed(f"{len(remotes)} remote(s) found")

    total = len(remotes)
    for i, remote in enumerate(remotes, 1):
        with spinner(f"Pushing to '{remote}' ({i} / {total}) ...") as sp:
            spawn("git", ["push", remote], cwd=ctx.cwd)
            sp.succeed(f"Pushed to '{remote}' ({i} / {total})")
