"""Core components (mirror, queue, scheduler, plugins, http)"""
from .queue import ExecutionQueue
from .context import CommandContext
from .mirror import mirror_folder, list_entries, files_equal, MirrorStats, DirectoryEntry
from .plugins import resolve_script, load_module, ScriptNotFoundError

__all__ = [
    "ExecutionQueue", "CommandContext",
    "mirror_folder", "list_entries", "files_equal", "MirrorStats", "DirectoryEntry",
    "resolve_script", "load_module", "ScriptNotFoundError",
]
