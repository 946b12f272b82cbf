"""
Key/value storage (global ~/.ego/settings.json and local ./.ego/settings.json)
"""
import json
import re
from pathlib import Path
from typing import Any, Optional

from ..config import AppConfig

_KEY_SEPARATORS = re.compile(r"[\s\-_]+")


def normalize_storage_key(key) -> str:
    """
    Lowercase, trim and collapse whitespace/hyphen runs to one underscore.
    Leading and trailing underscores are dropped, so ``"My Key"``,
    ``"my-key"`` and ``" my_key "`` all become ``"my_key"``.
    """
    if key is None:
        return ""
    text = str(key).strip().lower()
    return _KEY_SEPARATORS.sub("_", text).strip("_")


class StorageError(ValueError):
    """A settings file exists but does not hold a JSON object."""


def load_storage(path: Optional[Path], strict: bool = False) -> dict:
    """
    Load a storage file; a missing file yields ``{}``. A broken or non-object
    file yields ``{}`` too, unless *strict*, then StorageError is raised.
    """
    if path is None or not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text("utf-8") or "{}")
    except ValueError as e:
        if strict:
            raise StorageError(f"'{path}' is no valid JSON ({e})") from e
        return {}
    if not isinstance(data, dict):
        if strict:
            raise StorageError(f"'{path}' does not contain a JSON object")
        return {}
    return {k: data[k] for k in sorted(data)}


def save_storage(path: Path, data: dict):
    """Write storage as pretty JSON with sorted keys."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True), "utf-8")


def get_storage_file(config: AppConfig, use_global: bool = False, create: bool = True) -> Path:
    """
    Return the file ``set`` writes to: the local one when ``./.ego`` exists
    and *use_global* is False, else the global one (created on demand).
    """
    if not use_global and config.local_storage_file is not None:
        return config.local_storage_file
    path = config.global_storage_file
    if create and not path.is_file():
        save_storage(path, {})
    return path


class Storage:
    """Read access to merged settings; local values win over global ones."""

    def __init__(self, config: AppConfig):
        self.config = config

    def global_values(self) -> dict:
        return _normalized(load_storage(self.config.global_storage_file))

    def local_values(self) -> dict:
        return _normalized(load_storage(self.config.local_storage_file))

    def all(self) -> dict:
        merged = self.global_values()
        merged.update(self.local_values())
        return {k: merged[k] for k in sorted(merged)}

    def get(self, key, default: Any = None) -> Any:
        name = normalize_storage_key(key)
        local = self.local_values()
        if name in local:
            return local[name]
        return self.global_values().get(name, default)

    def set(self, key, value: Any = None, use_global: bool = False) -> Path:
        """
        Store *value* under the normalized key; ``None`` removes it.
        Raises StorageError, leaving the file alone, when it is broken.
        """
        name = normalize_storage_key(key)
        if not name:
            raise ValueError("empty storage key")
        path = get_storage_file(self.config, use_global=use_global)
        # never overwrite a file that could not be read
        data = load_storage(path, strict=True)
        if value is None:
            data.pop(name, None)
        else:
            data[name] = value
        save_storage(path, data)
        return path


def _normalized(data: dict) -> dict:
    return {normalize_storage_key(k): v for k, v in data.items()}
