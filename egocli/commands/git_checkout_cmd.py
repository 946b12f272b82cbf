"""
ego git-checkout  ──  checkout a branch, optionally merging the previous one
"""
from ..operations.git import get_current_branch
from ..utils.logging import spinner, warn
from ..utils.process import spawn

NAME = "git-checkout"
DESCRIPTION = "Checks out (to) a branch."
SYNTAX = "BRANCH [options]"
EXAMPLES = ["ego git-checkout dev", "ego git-checkout dev --merge"]


def add_arguments(parser):
    parser.add_argument("branch", nargs="?", default="", metavar="BRANCH",
                        help="The branch to checkout")
    parser.add_argument("-m", "--merge", action="store_true",
                        help="After checkout, merge the previous branch into the new one")


def execute(ctx):
    target = ctx.args.branch.strip()
    if not target:
        warn("Please define the branch, which you would like to checkout!")
        ctx.exit(1)

    previous = None
    if ctx.args.merge:
        with spinner("Detecting current branch ...") as sp:
            previous = get_current_branch(ctx.cwd)
            sp.text = f"Branch: '{previous}'"

    with spinner(f"Checking out branch '{target}' ...") as sp:
        spawn("git", ["checkout", target], cwd=ctx.cwd)
        sp.text = f"Branch '{target}' checked out"

    if previous is not None:
        with spinner(f"Merging with branch '{previous}' ...") as sp:
            spawn("git", ["merge", previous], cwd=ctx.cwd)
            sp.text = f"Merged with branch '{previous}'"
