"""
Configuration constants and paths for ego
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# ══════════════════════════════════════════════════════════════════════════════
#  DEFAULTS
# ══════════════════════════════════════════════════════════════════════════════

EGO_FOLDER = ".ego"
STORAGE_FILE = "settings.json"
BACKUPS_FOLDER = ".backups"

SERVE_PORT = 5979
API_PORT = 8080

CERT_FILE = "server.cert"
KEY_FILE = "server.key"

# Script extension for shell based commands, jobs and watchers
SHELL_SCRIPT_EXT = ".cmd" if os.name == "nt" else ".sh"
PYTHON_SCRIPT_EXT = ".py"

# Overrides the per-user folder (default: ~/.ego)
EGO_HOME_ENV = "EGO_HOME"


# ══════════════════════════════════════════════════════════════════════════════
#  APP CONFIG  ── constructed once per invocation, passed to every command
# ══════════════════════════════════════════════════════════════════════════════

def get_ego_home(environ: Optional[dict] = None) -> Path:
    """Return the per-user ego folder (``$EGO_HOME`` or ``~/.ego``)."""
    environ = os.environ if environ is None else environ
    custom = environ.get(EGO_HOME_ENV, "").strip()
    if custom:
        return Path(custom).expanduser().resolve()
    return Path.home() / EGO_FOLDER


def find_local_ego_folder(start: Optional[Path] = None) -> Optional[Path]:
    """Return ``<start>/.ego`` when it is a directory, else None."""
    candidate = (start or Path.cwd()).resolve() / EGO_FOLDER
    if candidate.is_dir():
        return candidate
    return None


@dataclass
class AppConfig:
    """Paths an invocation works with."""
    home: Path
    cwd: Path
    local_folder: Optional[Path] = None
    version: str = ""
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_environment(cls, cwd: Optional[Path] = None, version: str = "") -> "AppConfig":
        cwd = (cwd or Path.cwd()).resolve()
        return cls(home=get_ego_home(), cwd=cwd,
                   local_folder=find_local_ego_folder(cwd), version=version)

    def ensure_home(self) -> Path:
        self.home.mkdir(parents=True, exist_ok=True)
        return self.home

    @property
    def global_storage_file(self) -> Path:
        return self.home / STORAGE_FILE

    @property
    def local_storage_file(self) -> Optional[Path]:
        if self.local_folder is None:
            return None
        return self.local_folder / STORAGE_FILE

    @property
    def cert_file(self) -> Path:
        return self.home / CERT_FILE

    @property
    def key_file(self) -> Path:
        return self.home / KEY_FILE


# ══════════════════════════════════════════════════════════════════════════════
#  BACKUP
# ══════════════════════════════════════════════════════════════════════════════

# mtime tolerance (seconds) when comparing a source file with its backup copy;
# 2s covers FAT timestamp granularity
MTIME_TOLERANCE = 2.0
