"""
ego set  ──  store a config value
"""
from ..state.storage import normalize_storage_key
from ..utils.logging import vlog, warn

NAME = "set"
DESCRIPTION = "Sets a config value."
SYNTAX = "NAME [VALUE*] [options]"
EXAMPLES = [
    "ego set email tanja.m@example.com",
    "ego set email marcel.k@example.com --global",
    "ego set email",
]


def add_arguments(parser):
    parser.add_argument("name", nargs="?", default="", metavar="NAME",
                        help="Name of the value (normalized: 'My Key' -> 'my_key')")
    parser.add_argument("values", nargs="*", metavar="VALUE",
                        help="One value, a list of values, or nothing to delete the entry")
    parser.add_argument("-g", "--global", dest="use_global", action="store_true",
                        help="Sets the value globally")


def _store(ctx):
    name = normalize_storage_key(ctx.args.name)
    if not name:
        warn("No config name defined!")
        ctx.exit(1)

    values = list(ctx.args.values)
    if not values:
        value = None
    elif len(values) == 1:
        value = values[0]
    else:
        value = values

    path = ctx.storage.set(name, value, use_global=ctx.args.use_global)
    vlog(f"[set] {name} -> {path}")


def execute(ctx):
    ctx.queue.run(_store, ctx)
