"""
Tests for settings storage: key normalization, local/global files, merging.
"""
import json
import tempfile
import unittest
from pathlib import Path


class TestNormalizeStorageKey(unittest.TestCase):

    def test_spaces_and_hyphens_become_one_underscore(self):
        """Runs of whitespace and hyphens collapse to a single underscore."""
        from egocli.state.storage import normalize_storage_key
        self.assertEqual(normalize_storage_key("My Key"), "my_key")
        self.assertEqual(normalize_storage_key("  backup -- dir "), "backup_dir")
        self.assertEqual(normalize_storage_key("slack\t token"), "slack_token")

    def test_no_leading_or_trailing_underscore(self):
        """Leading and trailing separators are dropped."""
        from egocli.state.storage import normalize_storage_key
        self.assertEqual(normalize_storage_key("__yarn__"), "yarn")
        self.assertEqual(normalize_storage_key("- x -"), "x")

    def test_empty_values(self):
        """None and blank strings normalize to an empty key."""
        from egocli.state.storage import normalize_storage_key
        self.assertEqual(normalize_storage_key(None), "")
        self.assertEqual(normalize_storage_key("   "), "")

    def test_idempotent(self):
        """Normalizing twice gives the same result as normalizing once."""
        from egocli.state.storage import normalize_storage_key
        for key in ["My Key", " a-b_c  d ", "__X__", "already_normal", "UPPER-case"]:
            once = normalize_storage_key(key)
            self.assertEqual(normalize_storage_key(once), once)


class TestStorageFiles(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        root = Path(self.tmpdir.name)
        self.home = root / "home"
        self.cwd = root / "project"
        self.cwd.mkdir()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _config(self, local=False):
        from egocli.config import AppConfig
        local_folder = None
        if local:
            local_folder = self.cwd / ".ego"
            local_folder.mkdir(exist_ok=True)
        return AppConfig(home=self.home, cwd=self.cwd, local_folder=local_folder)

    def test_load_missing_or_invalid(self):
        """load_storage returns {} for missing, broken or non-object files."""
        from egocli.state.storage import load_storage
        self.assertEqual(load_storage(self.cwd / "nope.json"), {})
        broken = self.cwd / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        self.assertEqual(load_storage(broken), {})
        array = self.cwd / "array.json"
        array.write_text("[1, 2]", encoding="utf-8")
        self.assertEqual(load_storage(array), {})

    def test_global_file_created_on_demand(self):
        """get_storage_file creates an empty global settings file."""
        from egocli.state.storage import get_storage_file
        config = self._config()
        path = get_storage_file(config)
        self.assertEqual(path, self.home / "settings.json")
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), {})

    def test_local_file_preferred_when_folder_exists(self):
        """With ./.ego present, values go to the local file unless global is asked for."""
        from egocli.state.storage import get_storage_file
        config = self._config(local=True)
        self.assertEqual(get_storage_file(config), self.cwd / ".ego" / "settings.json")
        self.assertEqual(get_storage_file(config, use_global=True), self.home / "settings.json")

    def test_set_then_get_with_normalized_key(self):
        """set('My Key', v) can be read back as 'my_key'."""
        from egocli.state.storage import Storage
        storage = Storage(self._config())
        storage.set("My Key", "v")
        self.assertEqual(storage.get("my_key"), "v")
        self.assertEqual(storage.get("MY-KEY"), "v")
        data = json.loads((self.home / "settings.json").read_text(encoding="utf-8"))
        self.assertEqual(data, {"my_key": "v"})

    def test_local_overrides_global(self):
        """Local values win over global ones."""
        from egocli.state.storage import Storage
        storage = Storage(self._config(local=True))
        storage.set("email", "global@example.com", use_global=True)
        storage.set("email", "local@example.com")
        storage.set("name", "tanja", use_global=True)
        self.assertEqual(storage.get("email"), "local@example.com")
        self.assertEqual(storage.all(), {"email": "local@example.com", "name": "tanja"})

    def test_set_none_deletes(self):
        """Setting None removes the entry."""
        from egocli.state.storage import Storage
        storage = Storage(self._config())
        storage.set("yarn", "true")
        storage.set("yarn", None)
        self.assertIsNone(storage.get("yarn"))
        self.assertEqual(storage.get("yarn", "default"), "default")

    def test_set_empty_key_raises(self):
        """An empty key is rejected."""
        from egocli.state.storage import Storage
        storage = Storage(self._config())
        with self.assertRaises(ValueError):
            storage.set("  --  ", "x")

    def test_set_keeps_broken_file(self):
        """A settings file that cannot be parsed is reported, not overwritten."""
        from egocli.state.storage import Storage, StorageError
        self.home.mkdir()
        settings = self.home / "settings.json"
        settings.write_text('{"email": "x@example.com",', encoding="utf-8")
        storage = Storage(self._config())
        with self.assertRaises(StorageError):
            storage.set("name", "tanja")
        self.assertEqual(settings.read_text(encoding="utf-8"), '{"email": "x@example.com",')

        settings.write_text("[1, 2]", encoding="utf-8")
        with self.assertRaises(StorageError):
            storage.set("name", "tanja")
        self.assertEqual(settings.read_text(encoding="utf-8"), "[1, 2]")


if __name__ == "__main__":
    unittest.main()
