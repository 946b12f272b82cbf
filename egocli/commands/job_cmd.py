"""
ego job  ──  run scripts periodically (cron expression)
"""
from ..core.plugins import make_job_action, resolve_script
from ..core.scheduler import DEFAULT_CRON, CronJob
from ..utils.logging import colorize, log, wait_for_enter, warn

NAME = "job"
DESCRIPTION = "Executes one or more scripts periodically."
SYNTAX = "JOB_FILE+ CRON_TAB"
EXAMPLES = [
    'ego job my-job.py "0 * * * * *"',
    'ego job my-job "*/15 * * * *"',
]


def add_arguments(parser):
    parser.add_argument("items", nargs="*", metavar="JOB_FILE+ CRON_TAB",
                        help="Script file(s), followed by the cron expression")
    parser.epilog = (parser.epilog or "") + (
        "\n\nCron expressions have 5 fields, or 6 with seconds first."
        "\nA run is skipped while the previous one of the same script is still busy."
        "\nRelative paths are mapped to the current working directory or the ego home folder."
        "\nShell scripts (.sh, .cmd on Windows) are run without arguments."
        "\n\nExample script:\n"
        "\n    def execute(context):"
        "\n        print('Hello, from', __file__)\n"
    )


def execute(ctx):
    items = [str(i) for i in ctx.args.items if str(i) != ""]
    if len(items) < 1:
        warn("Define at least one script file, which should be executed!")
        ctx.exit(1)
    if len(items) < 2:
        warn("Define the period (cron tab), the script(s) should be executed in!")
        ctx.exit(2)

    expression = items[-1].strip() or DEFAULT_CRON
    jobs = []
    for name in items[:-1]:
        path = resolve_script(name, ctx.cwd, ctx.config.home)
        jobs.append(CronJob(expression, make_job_action(path, ctx)))
        log(f"Job {colorize(path.name)} scheduled ('{expression}')")

    for job in jobs:
        job.start()
    try:
        wait_for_enter("Press <ENTER> to stop ...\n")
    finally:
        for job in jobs:
            if job.running:
                job.stop()
