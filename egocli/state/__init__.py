"""State management (settings storage)"""
from .storage import normalize_storage_key, load_storage, save_storage, get_storage_file, Storage, StorageError

__all__ = [
    "normalize_storage_key", "load_storage", "save_storage", "get_storage_file", "Storage", "StorageError",
]
