#!/usr/bin/env python3
"""
Test suite for locating and loading ignore files
"""

import unittest
import tempfile
from pathlib import Path
from unittest.mock import patch
import sys

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ignorematch import (
    IgnoreConfig,
    IgnoreFileReadError,
    IgnoreFileTooLargeError,
    PatternCompileError,
    load_file,
    load_rule_set,
    locate,
    locate_and_load,
)

# Unlikely to exist anywhere above the temp directory
UNIQUE_NAME = ".ignorematch-test-ignore"


class TestLocate(unittest.TestCase):
    """Test the upward ignore file scan"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.config = IgnoreConfig(ignore_filename=UNIQUE_NAME, repo_marker=".git")
        self.nested = self.root / "repo" / "a" / "b"
        self.nested.mkdir(parents=True)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_finds_file_in_start_directory(self):
        ignore_file = self.nested / UNIQUE_NAME
        ignore_file.write_text("x\n")

        self.assertEqual(locate(self.nested, self.config), ignore_file)

    def test_finds_nearest_file_walking_upward(self):
        (self.root / "repo" / UNIQUE_NAME).write_text("outer\n")
        inner = self.root / "repo" / "a" / UNIQUE_NAME
        inner.write_text("inner\n")

        self.assertEqual(locate(self.nested, self.config), inner)

    def test_file_beside_repo_marker_is_found(self):
        (self.root / "repo" / ".git").mkdir()
        ignore_file = self.root / "repo" / UNIQUE_NAME
        ignore_file.write_text("x\n")

        self.assertEqual(locate(self.nested, self.config), ignore_file)

    def test_stops_at_repo_marker(self):
        (self.root / "repo" / ".git").mkdir()
        (self.root / UNIQUE_NAME).write_text("above the repository\n")

        self.assertIsNone(locate(self.nested, self.config))

    def test_marker_must_be_a_directory(self):
        (self.root / "repo" / ".git").write_text("gitdir: elsewhere\n")
        ignore_file = self.root / UNIQUE_NAME
        ignore_file.write_text("x\n")

        self.assertEqual(locate(self.nested, self.config), ignore_file)

    def test_returns_none_at_filesystem_root(self):
        self.assertIsNone(locate(self.nested, self.config))

    def test_directory_named_like_ignore_file_is_skipped(self):
        (self.nested / UNIQUE_NAME).mkdir()
        ignore_file = self.root / "repo" / UNIQUE_NAME
        ignore_file.write_text("x\n")

        self.assertEqual(locate(self.nested, self.config), ignore_file)


class TestLoadFile(unittest.TestCase):
    """Test reading and compiling ignore files"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.ignore_file = self.root / ".gitignore"
        self.config = IgnoreConfig()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load_file_uses_parent_as_root(self):
        self.ignore_file.write_text("# build\ntarget/\n\n!target/keep\n")

        info = load_file(self.ignore_file, self.config)

        self.assertEqual(info.root, self.root)
        self.assertEqual(info.rule_set.source, self.ignore_file)
        self.assertEqual(info.patterns, ["target/", "!target/keep"])
        self.assertEqual(info.stats, {
            'total_lines': 4,
            'empty_lines': 1,
            'comment_lines': 1,
            'pattern_lines': 2,
        })
        self.assertTrue(info.rule_set.is_excluded(self.root / "target" / "app"))
        self.assertFalse(info.rule_set.is_excluded(self.root / "target" / "keep"))

    def test_crlf_and_missing_trailing_newline(self):
        self.ignore_file.write_bytes(b"*.log\r\n!keep.log")

        rule_set = load_rule_set(self.ignore_file, self.config)

        self.assertEqual([rule.text for rule in rule_set], ["*.log", "keep.log"])
        self.assertTrue(rule_set.is_excluded(self.root / "debug.log"))
        self.assertFalse(rule_set.is_excluded(self.root / "keep.log"))

    def test_utf8_byte_order_mark_is_ignored(self):
        self.ignore_file.write_bytes(b"\xef\xbb\xbfnotes.txt\n")

        rule_set = load_rule_set(self.ignore_file, self.config)

        self.assertTrue(rule_set.is_excluded(self.root / "notes.txt"))

    def test_missing_file_raises_read_error(self):
        with self.assertRaises(IgnoreFileReadError) as ctx:
            load_file(self.root / "missing", self.config)
        self.assertEqual(ctx.exception.path, self.root / "missing")

    def test_invalid_utf8_raises_read_error(self):
        self.ignore_file.write_bytes(b"target\n\xff\xfe\n")

        with self.assertRaises(IgnoreFileReadError):
            load_file(self.ignore_file, self.config)

    def test_unreadable_file_raises_read_error(self):
        self.ignore_file.write_text("target\n")

        with patch("builtins.open", side_effect=PermissionError("denied")):
            with self.assertRaises(IgnoreFileReadError) as ctx:
                load_file(self.ignore_file, self.config)

        self.assertIn("denied", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_file_size_limit(self):
        self.ignore_file.write_text("a-rather-long-pattern\n")

        with self.assertRaises(IgnoreFileTooLargeError):
            load_file(self.ignore_file, IgnoreConfig(max_file_size=8))

    def test_pattern_count_limit(self):
        self.ignore_file.write_text("# only rule lines count\none\ntwo\nthree\n")

        with self.assertRaises(IgnoreFileTooLargeError):
            load_file(self.ignore_file, IgnoreConfig(max_patterns=2))

    def test_invalid_pattern_aborts_load(self):
        self.ignore_file.write_text("target\nbroken[z-a]\n")

        with self.assertRaises(PatternCompileError) as ctx:
            load_file(self.ignore_file, self.config)
        self.assertEqual(ctx.exception.line, 2)


class TestLocateAndLoad(unittest.TestCase):
    """Test the locate + load convenience"""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)
        self.config = IgnoreConfig(ignore_filename=UNIQUE_NAME)
        self.work = self.root / "project" / "src"
        self.work.mkdir(parents=True)
        (self.root / "project" / ".git").mkdir()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_loads_governing_file(self):
        (self.root / "project" / UNIQUE_NAME).write_text("*.pyc\n")

        rule_set = locate_and_load(self.work, self.config)

        self.assertIsNotNone(rule_set)
        self.assertEqual(rule_set.root, self.root / "project")
        self.assertTrue(rule_set.is_excluded(self.work / "module.pyc"))
        self.assertFalse(rule_set.is_excluded(self.work / "module.py"))

    def test_none_when_no_file(self):
        self.assertIsNone(locate_and_load(self.work, self.config))

    def test_none_when_file_does_not_compile(self):
        (self.root / "project" / UNIQUE_NAME).write_text("ok\ntrailing\\\n")

        with self.assertLogs("ignorematch.file_loader", level="WARNING"):
            self.assertIsNone(locate_and_load(self.work, self.config))

    def test_none_when_file_is_too_large(self):
        (self.root / "project" / UNIQUE_NAME).write_text("x" * 64)
        config = IgnoreConfig(ignore_filename=UNIQUE_NAME, max_file_size=16)

        self.assertIsNone(locate_and_load(self.work, config))


if __name__ == '__main__':
    unittest.main()
