"""
ego init  ──  create a local '.ego' folder for project based settings
"""
from .. import config as _cfg
from ..state.storage import save_storage
from ..utils.file_utils import remove_path
from ..utils.logging import spinner, warn

NAME = "init"
DESCRIPTION = "Initializes an '.ego' subfolder in the current directory for local based settings and data."
SYNTAX = "[options]"
EXAMPLES = ["ego init", "ego init --force"]


def add_arguments(parser):
    parser.add_argument("-f", "--force", action="store_true",
                        help="Remove existing folder, if needed")


def execute(ctx):
    folder = ctx.cwd / _cfg.EGO_FOLDER

    if folder.exists() or folder.is_symlink():
        if not ctx.args.force:
            warn(f"'{_cfg.EGO_FOLDER}' folder already exists!")
            ctx.exit(1)
        with spinner(f"Removing existing '{_cfg.EGO_FOLDER}' folder ...") as sp:
            remove_path(folder)
            sp.text = f"Existing '{_cfg.EGO_FOLDER}' folder removed"

    with spinner(f"Creating '{_cfg.EGO_FOLDER}' folder ...") as sp:
        folder.mkdir(parents=True)
        sp.text = f"'{_cfg.EGO_FOLDER}' folder created"

    with spinner("Creating storage file ...") as sp:
        save_storage(folder / _cfg.STORAGE_FILE, {})
        sp.text = "Storage file created"

    ctx.config.local_folder = folder
