"""
Subprocess helpers
"""
import os
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from .logging import vlog, is_verbose


class ProcessError(subprocess.CalledProcessError):
    """A spawned program exited with a non-zero status."""

    def __str__(self):
        cmd = " ".join(str(c) for c in self.cmd) if isinstance(self.cmd, (list, tuple)) else self.cmd
        return f"'{cmd}' exited with status {self.returncode}"


def spawn(command: str, args: Sequence = (), cwd: Optional[Path] = None,
          capture: bool = False, verbose: Optional[bool] = None,
          env: Optional[dict] = None) -> str:
    """
    Run *command* with *args* and wait for it.

    The process inherits the environment. With ``capture`` the stdout text is
    returned; otherwise output is shown only in verbose mode.
    Raises ProcessError on a non-zero exit code. Spawn failures
    (FileNotFoundError, PermissionError) propagate unchanged.
    """
    if verbose is None:
        verbose = is_verbose()
    cmd = [str(command)] + [str(a) for a in args]
    vlog(f"[exec] {' '.join(cmd)}")

    kwargs: dict = dict(cwd=str(cwd) if cwd else None, env=env or os.environ.copy())
    if capture:
        kwargs.update(stdout=subprocess.PIPE, stderr=None if verbose else subprocess.PIPE, text=True)
    elif not verbose:
        kwargs.update(stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)

    result = subprocess.run(cmd, **kwargs)
    if result.returncode != 0:
        raise ProcessError(result.returncode, cmd,
                           output=result.stdout if capture else None,
                           stderr=result.stderr if capture else None)
    return result.stdout if capture else ""


def spawn_interactive(command: str, args: Sequence = (), cwd: Optional[Path] = None) -> int:
    """Run a program attached to the terminal and return its exit code."""
    cmd = [str(command)] + [str(a) for a in args]
    vlog(f"[exec] {' '.join(cmd)}")
    return subprocess.run(cmd, cwd=str(cwd) if cwd else None).returncode
