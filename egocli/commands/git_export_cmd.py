"""
ego git-export  ──  clone a repository without its '.git' folder
"""
from ..utils.file_utils import remove_path
from ..utils.logging import spinner, warn
from ..utils.process import spawn

NAME = "git-export"
DESCRIPTION = "Clones a repository to the working directory and removes the '.git' subfolder."
SYNTAX = "URL [options]"
EXAMPLES = ["ego git-export https://github.com/egodigital/generator-ego"]


def add_arguments(parser):
    parser.add_argument("url", nargs="?", default="", metavar="URL",
                        help="URL of the repository")


def execute(ctx):
    url = ctx.args.url.strip()
    if not url:
        warn("Please define the URL of the repository, that should be exported!")
        ctx.exit(1)

    with spinner(f"Cloning repository '{url}' ...") as sp:
        spawn("git", ["clone", url, "."], cwd=ctx.cwd)
        sp.text = f"Repository '{url}' cloned"

    with spinner("Removing '.git' folder ...") as sp:
        git_folder = ctx.cwd / ".git"
        if git_folder.exists() or git_folder.is_symlink():
            remove_path(git_folder)
        sp.text = "'.git' folder removed"
