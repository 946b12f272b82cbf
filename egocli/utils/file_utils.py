"""
File utilities (sizes, mime types, free file names)
"""
import mimetypes
import os
import shutil
from pathlib import Path
from typing import Callable, Optional

_UNITS = ["B", "KB", "MB", "GB", "TB"]


def human_size(size: int) -> str:
    """Format a byte count the way directory listings show it: ``1.5 KB``."""
    value = float(size)
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.2f} {unit}".replace(".00 ", " ")
        value /= 1024
    return f"{size} B"


def get_mime_type(path) -> str:
    mime, _ = mimetypes.guess_type(str(path))
    return mime or "application/octet-stream"


def next_free_path(directory: Path, base_name: str, ext: str,
                   exists: Optional[Callable[[Path], bool]] = None) -> Path:
    """
    Return ``directory/base_name + ext``, or ``base_name-N + ext`` for the
    first N >= 1 that is not taken.
    """
    exists = exists or (lambda p: p.exists())
    candidate = directory / f"{base_name}{ext}"
    i = 0
    while exists(candidate):
        i += 1
        candidate = directory / f"{base_name}-{i}{ext}"
    return candidate


def remove_path(path: Path):
    """Remove a file, symlink or directory tree."""
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        shutil.rmtree(path)


def copy_times(src_stat: os.stat_result, dest: Path) -> bool:
    """Copy atime/mtime onto dest; False when the platform refuses."""
    try:
        os.utime(dest, ns=(src_stat.st_atime_ns, src_stat.st_mtime_ns))
    except OSError:
        return False
    return True
