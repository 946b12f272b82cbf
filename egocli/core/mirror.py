"""
Recursive one-way folder mirroring (used by ``ego backup``)

The destination tree is made to match the source tree:
  ① entries only present in the destination are removed,
  ② new or changed files are copied (size + mtime comparison, no hashing),
  ③ subdirectories are handled recursively,
  ④ atime/mtime of every copied file and every directory are taken over from
    the source, after the children of a directory have been processed.
"""
import os
import shutil
import stat as _stat
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, ContextManager, Optional

from .. import config as _cfg
from ..utils.file_utils import copy_times, remove_path

# narrate(kind, path) -> context manager wrapped around every filesystem write.
# kind is one of "mkdir", "remove", "copy", "update".
Narrator = Callable[[str, Path], ContextManager]


@dataclass
class DirectoryEntry:
    name: str
    path: Path
    stat: os.stat_result

    @property
    def is_file(self) -> bool:
        return _stat.S_ISREG(self.stat.st_mode)

    @property
    def is_dir(self) -> bool:
        return _stat.S_ISDIR(self.stat.st_mode)

    @property
    def size(self) -> int:
        return self.stat.st_size

    @property
    def mtime(self) -> float:
        return self.stat.st_mtime

    @property
    def atime(self) -> float:
        return self.stat.st_atime


@dataclass
class MirrorStats:
    copied: int = 0
    updated: int = 0
    removed: int = 0
    dirs_created: int = 0

    @property
    def writes(self) -> int:
        return self.copied + self.updated + self.removed + self.dirs_created


def list_entries(directory: Path, include_dots: bool = False) -> list[DirectoryEntry]:
    """Immediate children of *directory*, dot entries skipped unless asked for."""
    entries = []
    for name in sorted(os.listdir(directory)):
        if name.strip().startswith(".") and not include_dots:
            continue
        full = Path(directory) / name
        entries.append(DirectoryEntry(name=name, path=full, stat=full.stat()))
    return entries


def files_equal(src: os.stat_result, dest: os.stat_result) -> bool:
    """True if *dest* looks like an up-to-date copy of *src*."""
    if src.st_size != dest.st_size:
        return False
    return abs(src.st_mtime - dest.st_mtime) <= _cfg.MTIME_TOLERANCE


def _fs_name(name: str) -> str:
    # case-folds on case-insensitive platforms (Windows)
    return os.path.normcase(name)


def mirror_folder(src: Path, dest: Path, include_dots: bool = False,
                  narrate: Optional[Narrator] = None,
                  stats: Optional[MirrorStats] = None) -> MirrorStats:
    """
    Make *dest* a mirror of *src*. Filesystem errors propagate and abort the
    whole operation.
    """
    narrate = narrate or (lambda kind, path: nullcontext())
    stats = stats if stats is not None else MirrorStats()

    src = Path(src).resolve()
    dest = Path(dest).resolve()

    if not dest.exists():
        with narrate("mkdir", dest):
            dest.mkdir(parents=True)
        stats.dirs_created += 1

    src_entries = list_entries(src, include_dots)
    dest_entries = list_entries(dest, include_dots)

    src_by_name = {_fs_name(e.name): e for e in src_entries}

    # ── extra (or type-changed) entries in destination ──────────────────────
    for de in dest_entries:
        se = src_by_name.get(_fs_name(de.name))
        if se is not None and se.is_dir == de.is_dir:
            continue
        with narrate("remove", de.path):
            remove_path(de.path)
        stats.removed += 1

    # ── files ───────────────────────────────────────────────────────────────
    for se in (e for e in src_entries if e.is_file):
        target = dest / se.name
        kind = "copy"
        if target.is_file():
            if files_equal(se.stat, target.stat()):
                continue
            kind = "update"
        with narrate(kind, se.path):
            shutil.copyfile(se.path, target)
            copy_times(se.stat, target)
        if kind == "copy":
            stats.copied += 1
        else:
            stats.updated += 1

    # ── sub directories ─────────────────────────────────────────────────────
    for se in (e for e in src_entries if e.is_dir):
        mirror_folder(se.path, dest / se.name, include_dots, narrate, stats)

    copy_times(src.stat(), dest)
    return stats
