"""
ego run  ──  run one or more user scripts
"""
from ..core.plugins import resolve_script, run_command_script
from ..utils.logging import vlog, warn

NAME = "run"
DESCRIPTION = "Runs one or more Python based script file(s)."
SYNTAX = "SCRIPT_FILE+"
EXAMPLES = ["ego run my-script.py", "ego run my-script"]

EXAMPLE_SCRIPT = '''
    def execute(context):
        print("Hello, from", __file__, "in", context.cwd)
        # return an int to set the exit code
'''


def add_arguments(parser):
    parser.add_argument("scripts", nargs="*", metavar="SCRIPT_FILE",
                        help="Script file(s); '.py' may be left out")
    parser.epilog = (parser.epilog or "") + (
        "\n\nRelative paths are mapped to the current working directory or the ego home folder."
        "\nShell scripts (.sh, .cmd on Windows) are run as they are."
        "\n\nExample script:\n" + EXAMPLE_SCRIPT
    )


def execute(ctx):
    scripts = [s for s in ctx.args.scripts if str(s).strip()]
    if not scripts:
        warn("Define at least one script file, which should be executed!")
        ctx.exit(1)

    for name in scripts:
        path = resolve_script(name, ctx.cwd, ctx.config.home)
        vlog(f"[run] {path}")
        exit_code = run_command_script(path, ctx)
        if exit_code is not None:
            ctx.exit(exit_code)
