"""
ego watch  ──  run scripts on file changes in the working directory
"""
from ..core.plugins import make_watch_action, resolve_script
from ..core.scheduler import FileWatcher
from ..utils.logging import colorize, log, wait_for_enter, warn

NAME = "watch"
DESCRIPTION = "Runs one or more scripts for file changes."
SYNTAX = "WATCHER_FILE+"
EXAMPLES = ["ego watch my-watcher.py", "ego watch my-watcher"]


def add_arguments(parser):
    parser.add_argument("scripts", nargs="*", metavar="WATCHER_FILE",
                        help="Script file(s); '.py' may be left out")
    parser.epilog = (parser.epilog or "") + (
        "\n\nEvents: file:add, file:change, file:unlink, dir:add, dir:unlink"
        "\nRelative paths are mapped to the current working directory or the ego home folder."
        "\nShell scripts (.sh, .cmd on Windows) get the path and the event as arguments."
        "\n\nExample script:\n"
        "\n    def execute(path, event, context):"
        "\n        print(f\"'{path}' raised the '{event}' event.\")\n"
    )


def execute(ctx):
    scripts = [str(s) for s in ctx.args.scripts if str(s) != ""]
    if not scripts:
        warn("Define at least one script file, which should be executed!")
        ctx.exit(1)

    actions = [make_watch_action(resolve_script(name, ctx.cwd, ctx.config.home), ctx)
               for name in scripts]

    watcher = FileWatcher(ctx.cwd, actions, ctx.queue)
    watcher.start()
    log(f"Watching {colorize(ctx.cwd)} ...")
    try:
        wait_for_enter("Press <ENTER> to stop ...\n")
    finally:
        watcher.stop()
