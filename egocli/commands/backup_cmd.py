"""
ego backup  ──  mirror the working directory into the backup folder
"""
from contextlib import contextmanager
from pathlib import Path

from .. import config as _cfg
from ..core.mirror import mirror_folder
from ..utils.logging import colorize, spinner, warn

NAME = "backup"
DESCRIPTION = "Backups the current directory."
SYNTAX = "[options]"
EXAMPLES = ["ego backup", "ego backup --dot"]

_NARRATION = {
    "mkdir": ("📁 Creating directory {} ...", "📁 Directory {} created"),
    "remove": ("🗑  Removing {} ...", "🗑  {} removed"),
    "copy": ("📄 Copying {} ...", "📄 {} copied"),
    "update": ("♻️  Updating {} ...", "♻️  {} updated"),
}


def add_arguments(parser):
    parser.add_argument("-d", "--dot", action="store_true",
                        help="Also backup files and folders with leading dots")
    parser.epilog = (parser.epilog or "") + (
        "\n\nConfig:\n"
        " backup_dir   The path to the target directory. Relative paths are mapped\n"
        "              to the '.backups' subfolder of the ego home folder.\n"
        " backup_dots  Also handle files and folders with leading dots (true/false)."
    )


def resolve_backup_dir(ctx) -> Path:
    """Target folder for the working directory; exits 1/2 on bad setup."""
    backup_dir = str(ctx.get("backup_dir") or "").strip()
    if not backup_dir:
        hint = colorize('ego set backup_dir "/target/path/for/backuped/files"')
        warn(f"Please setup {colorize('backup_dir')} config value, by executing {hint}")
        ctx.exit(1)

    subfolder = ctx.cwd.name.strip()
    if not subfolder:
        warn("Cannot backup root folder!")
        ctx.exit(2)

    base = Path(backup_dir).expanduser()
    if not base.is_absolute():
        base = ctx.config.home / _cfg.BACKUPS_FOLDER
    return (base / subfolder).resolve()


def _is_true(value) -> bool:
    if isinstance(value, str):
        return value.lower().strip() in ("1", "true", "yes", "y", "on")
    return bool(value)


def make_narrator(ctx):
    root = ctx.cwd

    @contextmanager
    def narrate(kind, path):
        if not ctx.verbose:
            yield
            return
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        start, done = _NARRATION[kind]
        with spinner(start.format(colorize(shown))) as sp:
            yield
            sp.text = done.format(colorize(shown))

    return narrate


def execute(ctx):
    target = resolve_backup_dir(ctx)

    if not target.exists():
        with spinner(f"📁 Creating backup folder {colorize(target)} ...") as sp:
            target.mkdir(parents=True)
            sp.text = f"📁 Backup folder {colorize(target)} created"

    if not target.is_dir():
        warn("Target is no directory!")
        ctx.exit(3)

    include_dots = ctx.args.dot or _is_true(ctx.get("backup_dots"))
    stats = mirror_folder(ctx.cwd, target, include_dots=include_dots,
                          narrate=make_narrator(ctx))

    with spinner("💯 Finishing ...") as sp:
        sp.text = (f"💯 All files have been copied to {colorize(target)} "
                   f"({stats.copied} copied, {stats.updated} updated, {stats.removed} removed)")
