"""
Per-invocation command context
"""
import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from ..config import AppConfig
from ..state.storage import Storage
from .queue import ExecutionQueue


class CommandContext:
    """
    What a command handler (and a user script) gets to work with.

    args      parsed argparse namespace
    cwd       working directory
    config    AppConfig of this invocation
    queue     single-concurrency ExecutionQueue
    values    free key/value dict living as long as the invocation
    verbose   -v / --verbose given
    """

    def __init__(self, name: str, args: argparse.Namespace, config: AppConfig,
                 queue: Optional[ExecutionQueue] = None):
        self.name = name
        self.args = args
        self.config = config
        self.queue = queue or ExecutionQueue()
        self.values: dict = {}
        self.storage = Storage(config)

    @property
    def cwd(self) -> Path:
        return self.config.cwd

    @property
    def verbose(self) -> bool:
        return bool(getattr(self.args, "verbose", False))

    def arg(self, name: str, default: Any = None) -> Any:
        value = getattr(self.args, name, None)
        return default if value is None else value

    def get(self, key, default: Any = None) -> Any:
        """Config value from local/global storage."""
        return self.storage.get(key, default)

    def get_full_path(self, path) -> Path:
        p = Path(str(path)).expanduser()
        if not p.is_absolute():
            p = self.cwd / p
        return p.resolve()

    def exit(self, code: int = 0):
        sys.exit(code)
