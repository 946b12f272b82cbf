"""
ego build  ──  run the 'build' script of package.json
"""
import json

from ..utils.logging import spinner, warn
from ..utils.process import spawn

NAME = "build"
DESCRIPTION = "Builds the current project."
SYNTAX = "[options]"
EXAMPLES = ["ego build", "ego build --yarn"]


def add_arguments(parser):
    parser.add_argument("-y", "--yarn", action="store_true", help="Use yarn instead of npm")
    parser.epilog = (parser.epilog or "") + "\n\nConfig:\n yarn  Use yarn instead of npm."


def execute(ctx):
    package_json = ctx.cwd / "package.json"
    if not package_json.is_file():
        warn("'package.json' file not found!")
        ctx.exit(1)

    package = json.loads(package_json.read_text("utf-8"))
    scripts = package.get("scripts") if isinstance(package, dict) else None
    if not isinstance(scripts, dict):
        warn("No scripts defined in 'package.json'!")
        ctx.exit(2)
    if scripts.get("build") is None:
        warn("No 'build' script defined in 'package.json'!")
        ctx.exit(3)

    tool = "yarn" if ctx.args.yarn or ctx.get("yarn") else "npm"
    with spinner(f"Executing '{tool} run build' ...") as sp:
        spawn(tool, ["run", "build"], cwd=ctx.cwd)
        sp.text = f"'{tool} run build' executed"
