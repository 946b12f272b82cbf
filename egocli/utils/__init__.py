"""Utilities (logging, processes, files)"""
from .logging import log, vlog, warn, err, write_line, colorize, spinner, set_verbose, wait_for_enter
from .process import spawn, spawn_interactive, ProcessError
from .file_utils import human_size, get_mime_type, next_free_path, remove_path, copy_times

__all__ = [
    "log", "vlog", "warn", "err", "write_line", "colorize", "spinner", "set_verbose", "wait_for_enter",
    "spawn", "spawn_interactive", "ProcessError",
    "human_size", "get_mime_type", "next_free_path", "remove_path", "copy_times",
]
