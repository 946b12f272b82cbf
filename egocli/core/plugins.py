"""
User script loading for ``run``, ``job``, ``watch`` and ``api``

A script is either
  - a Python file, loaded fresh with importlib on every use, that exposes a
    plain function (the contract depends on the command), or
  - a shell script (``.sh``, ``.cmd`` on Windows) run as a subprocess.

Function contracts:
  run     execute(context) -> Optional[int]     (int becomes the exit code)
  job     execute(context)
  watch   execute(path, event, context)
  api     GET / POST / PUT / ... (request, context), ``request`` as fallback
"""
import importlib.util
import os
import uuid
from pathlib import Path
from types import ModuleType
from typing import Callable, Optional, Sequence

from .. import config as _cfg
from ..utils.process import spawn


class ScriptNotFoundError(FileNotFoundError):
    """No script file could be resolved for a name."""


def is_shell_script(path) -> bool:
    return Path(path).suffix.lower() == _cfg.SHELL_SCRIPT_EXT


def _with_extension(path: Path) -> Path:
    if path.suffix.lower() in (_cfg.PYTHON_SCRIPT_EXT, _cfg.SHELL_SCRIPT_EXT):
        return path
    return path.with_name(path.name + _cfg.PYTHON_SCRIPT_EXT)


def resolve_script(name: str, cwd: Path, home: Path) -> Path:
    """
    Find the file for *name*. Relative names are tried in *cwd* first, then
    in the ego home folder; ``.py`` is appended when no script extension is
    given.
    """
    p = Path(str(name).strip()).expanduser()
    if p.is_absolute():
        candidates = [p, _with_extension(p)]
    else:
        candidates = [_with_extension(cwd / p), cwd / p,
                      _with_extension(home / p), home / p]
    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()
    raise ScriptNotFoundError(f"Script '{name}' not found")


def load_module(path: Path) -> ModuleType:
    """Import *path* as a new module object (never cached in sys.modules)."""
    module_name = f"ego_script_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(module_name, str(path))
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load script '{path}'")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def get_function(module: ModuleType, *names: str) -> Optional[Callable]:
    """First callable attribute of *module* among *names*."""
    for name in names:
        value = getattr(module, name, None)
        if callable(value):
            return value
    return None


def shell_command(path: Path) -> tuple[str, list]:
    """(program, leading args) to run a shell script."""
    if os.name == "nt":
        return "cmd", ["/c", str(path)]
    if os.access(path, os.X_OK):
        return str(path), []
    return "sh", [str(path)]


def run_shell_script(path: Path, args: Sequence = (), cwd: Optional[Path] = None):
    program, lead = shell_command(path)
    spawn(program, [*lead, *args], cwd=cwd, verbose=True)


# ── command specific runners ─────────────────────────────────────────────────

def run_command_script(path: Path, context) -> Optional[int]:
    """``ego run``: returns the exit code the script asked for, if any."""
    if is_shell_script(path):
        run_shell_script(path, cwd=context.cwd)
        return None
    execute = get_function(load_module(path), "execute")
    if execute is None:
        return None
    result = execute(context)
    if result is None:
        return None
    try:
        return int(str(result).strip())
    except ValueError:
        return None


def make_job_action(path: Path, context) -> Callable[[], None]:
    if is_shell_script(path):
        return lambda: run_shell_script(path, cwd=context.cwd)

    def action():
        execute = get_function(load_module(path), "execute")
        if execute is not None:
            execute(context)

    return action


def make_watch_action(path: Path, context) -> Callable[[str, str], None]:
    if is_shell_script(path):
        return lambda event, rel: run_shell_script(path, [rel, event], cwd=context.cwd)

    def action(event: str, rel: str):
        execute = get_function(load_module(path), "execute")
        if execute is not None:
            execute(rel, event, context)

    return action
