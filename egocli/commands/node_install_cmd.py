"""
ego node-install  ──  fresh 'npm install'
"""
from ..utils.file_utils import remove_path
from ..utils.logging import spinner, warn
from ..utils.process import spawn

NAME = "node-install"
DESCRIPTION = "Removes the 'node_modules' subfolder and executes 'npm install'."
SYNTAX = "[options]"
EXAMPLES = ["ego node-install", "ego node-install --audit", "ego node-install --update -a"]


def add_arguments(parser):
    parser.add_argument("-a", "--audit", action="store_true",
                        help="Runs 'npm audit fix' after successful execution")
    parser.add_argument("-u", "--update", action="store_true",
                        help="Runs 'npm update' after successful execution")


def _npm(ctx, *args):
    label = " ".join(("npm",) + args)
    with spinner(f"Executing '{label}' ...") as sp:
        spawn("npm", list(args), cwd=ctx.cwd)
        sp.succeed(f"'{label}' executed")


def execute(ctx):
    if not (ctx.cwd / "package.json").is_file():
        warn("'package.json' file not found!")
        ctx.exit(1)

    with spinner("Removing 'node_modules' folder ...") as sp:
        node_modules = ctx.cwd / "node_modules"
        if node_modules.exists() or node_modules.is_symlink():
            remove_path(node_modules)
        sp.succeed("'node_modules' folder removed")

    _npm(ctx, "install")
    if ctx.args.update:
        _npm(ctx, "update")
    if ctx.args.audit:
        _npm(ctx, "audit", "fix")
