"""
Tests for the folder mirror used by 'ego backup'.
"""
import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace


def _write(path: Path, size: int, char: bytes = b"x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(char * size)


def _names(directory: Path):
    return sorted(os.listdir(directory))


class TestFilesEqual(unittest.TestCase):

    def test_size_difference(self):
        """Different sizes are never equal."""
        from egocli.core.mirror import files_equal
        a = SimpleNamespace(st_size=10, st_mtime=1000.0)
        b = SimpleNamespace(st_size=11, st_mtime=1000.0)
        self.assertFalse(files_equal(a, b))

    def test_mtime_tolerance(self):
        """Same size and mtime within the tolerance are equal; same day is not enough."""
        from egocli.core.mirror import files_equal
        a = SimpleNamespace(st_size=10, st_mtime=1000.0)
        self.assertTrue(files_equal(a, SimpleNamespace(st_size=10, st_mtime=1001.5)))
        self.assertFalse(files_equal(a, SimpleNamespace(st_size=10, st_mtime=1000.0 + 3600)))


class TestMirrorFolder(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        root = Path(self.tmpdir.name).resolve()
        self.src = root / "src"
        self.dest = root / "backup" / "src"
        self.src.mkdir()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_backup_scenario(self):
        """a.txt (100 bytes) + .hidden into an empty target: only a.txt is copied, rerun writes nothing."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / "a.txt", 100)
        _write(self.src / ".hidden", 5)

        stats = mirror_folder(self.src, self.dest)
        self.assertEqual(_names(self.dest), ["a.txt"])
        self.assertEqual(stats.copied, 1)

        s, d = (self.src / "a.txt").stat(), (self.dest / "a.txt").stat()
        self.assertEqual(d.st_size, 100)
        self.assertAlmostEqual(s.st_mtime, d.st_mtime, delta=1.0)

        again = mirror_folder(self.src, self.dest)
        self.assertEqual(again.writes, 0)

    def test_tree_is_mirrored(self):
        """Nested folders are created and files copied recursively."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / "one.txt", 3)
        _write(self.src / "sub" / "two.txt", 4)
        _write(self.src / "sub" / "deeper" / "three.txt", 5)

        mirror_folder(self.src, self.dest)
        self.assertEqual(_names(self.dest), ["one.txt", "sub"])
        self.assertEqual(_names(self.dest / "sub"), ["deeper", "two.txt"])
        self.assertEqual((self.dest / "sub" / "deeper" / "three.txt").read_bytes(), b"xxxxx")
        self.assertEqual(mirror_folder(self.src, self.dest).writes, 0)

    def test_extra_entries_are_removed(self):
        """Files and folders only present in the target are deleted."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / "keep.txt", 1)
        _write(self.dest / "old.txt", 1)
        _write(self.dest / "olddir" / "x.txt", 1)

        stats = mirror_folder(self.src, self.dest)
        self.assertEqual(_names(self.dest), ["keep.txt"])
        self.assertEqual(stats.removed, 2)

    def test_changed_file_is_updated(self):
        """A source file with a new size replaces its copy."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / "a.txt", 10)
        mirror_folder(self.src, self.dest)

        _write(self.src / "a.txt", 20, b"y")
        stats = mirror_folder(self.src, self.dest)
        self.assertEqual(stats.updated, 1)
        self.assertEqual((self.dest / "a.txt").read_bytes(), b"y" * 20)

    def test_type_change_is_replaced(self):
        """A target file where the source has a folder is replaced by the folder."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / "thing" / "inner.txt", 2)
        _write(self.dest / "thing", 2)

        mirror_folder(self.src, self.dest)
        self.assertTrue((self.dest / "thing").is_dir())
        self.assertEqual(_names(self.dest / "thing"), ["inner.txt"])

    def test_include_dots(self):
        """Dot entries are handled when asked for."""
        from egocli.core.mirror import mirror_folder
        _write(self.src / ".env", 2)
        _write(self.src / ".config" / "x", 2)

        mirror_folder(self.src, self.dest, include_dots=True)
        self.assertEqual(_names(self.dest), [".config", ".env"])

    def test_hidden_target_entries_untouched_without_dots(self):
        """Without the dot flag, dot entries in the target are left alone."""
        from egocli.core.mirror import mirror_folder
        _write(self.dest / ".keep", 1)
        mirror_folder(self.src, self.dest)
        self.assertEqual(_names(self.dest), [".keep"])

    def test_narrator_sees_every_write(self):
        """The narrate callback wraps each filesystem write."""
        from contextlib import nullcontext
        from egocli.core.mirror import mirror_folder
        _write(self.src / "a.txt", 1)
        _write(self.dest / "gone.txt", 1)

        seen = []

        def narrate(kind, path):
            seen.append((kind, path.name))
            return nullcontext()

        mirror_folder(self.src, self.dest, narrate=narrate)
        self.assertIn(("remove", "gone.txt"), seen)
        self.assertIn(("copy", "a.txt"), seen)


if __name__ == "__main__":
    unittest.main()
