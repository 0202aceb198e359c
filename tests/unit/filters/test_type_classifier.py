"""Tests for matching entries against extension, group, and special tokens."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from srctree.file_tree_model import EntryKind, EntryMeta
from srctree.filters import SpecialKind, TypeClassifier, TypeToken


def _entry(
    name: str,
    kind: EntryKind = EntryKind.FILE,
    *,
    parent: Path = Path("/project"),
    size: int = 10,
    mode: int = 0o644,
    hidden: bool = False,
    is_empty: bool = False,
) -> EntryMeta:
    return EntryMeta(
        path=parent / name,
        relative_path=Path(name),
        name=name,
        kind=kind,
        size=size,
        mode=mode,
        hidden=hidden,
        is_empty=is_empty,
    )


def _special(kind: SpecialKind) -> TypeToken:
    return TypeToken.of_special(kind)


class ExtensionAndGroupTests(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = TypeClassifier()

    def test_extension_match_is_case_insensitive(self) -> None:
        self.assertTrue(self.classifier.matches(_entry("MAIN.PY"), TypeToken.extension("py")))
        self.assertFalse(self.classifier.matches(_entry("main.pyc"), TypeToken.extension("py")))

    def test_extension_never_matches_directories_or_extensionless_files(self) -> None:
        self.assertFalse(self.classifier.matches(_entry("pkg.py", EntryKind.DIRECTORY), TypeToken.extension("py")))
        self.assertFalse(self.classifier.matches(_entry("Makefile"), TypeToken.extension("makefile")))
        self.assertFalse(self.classifier.matches(_entry(".py"), TypeToken.extension("py")))

    def test_group_matches_registered_extensions(self) -> None:
        web = TypeToken.group("web")
        self.assertTrue(self.classifier.matches(_entry("index.html"), web))
        self.assertTrue(self.classifier.matches(_entry("app.TSX"), web))
        self.assertFalse(self.classifier.matches(_entry("notes.txt"), web))
        self.assertTrue(self.classifier.matches(_entry("notes.txt"), TypeToken.group("docs")))
        self.assertTrue(self.classifier.matches(_entry("lib.rs"), TypeToken.group("code")))

    def test_extension_and_group_match_symlinks_by_name(self) -> None:
        link = _entry("link.py", EntryKind.SYMLINK)
        self.assertTrue(self.classifier.matches(link, TypeToken.extension("py")))
        self.assertTrue(self.classifier.matches(link, TypeToken.group("code")))

    def test_unknown_group_matches_nothing(self) -> None:
        self.assertFalse(self.classifier.matches(_entry("index.html"), TypeToken.group("nope")))


class SpecialKindTests(unittest.TestCase):
    def setUp(self) -> None:
        self.classifier = TypeClassifier()

    def test_binary_and_text_use_byte_probe(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            binary = root / "blob.bin"
            binary.write_bytes(b"abc\x00def")
            text = root / "notes.txt"
            text.write_text("hello\n", encoding="utf-8")

            binary_entry = _entry("blob.bin", parent=root)
            text_entry = _entry("notes.txt", parent=root)

            self.assertTrue(self.classifier.matches(binary_entry, _special(SpecialKind.BINARY)))
            self.assertFalse(self.classifier.matches(binary_entry, _special(SpecialKind.TEXT)))
            self.assertTrue(self.classifier.matches(text_entry, _special(SpecialKind.TEXT)))
            self.assertFalse(self.classifier.matches(text_entry, _special(SpecialKind.BINARY)))

    def test_binary_and_text_are_false_for_non_files_and_unreadable_files(self) -> None:
        directory = _entry("src", EntryKind.DIRECTORY)
        missing = _entry("missing.txt", parent=Path("/definitely/not/here"))
        for entry in (directory, missing):
            with self.subTest(entry=entry.name):
                self.assertFalse(self.classifier.matches(entry, _special(SpecialKind.BINARY)))
                self.assertFalse(self.classifier.matches(entry, _special(SpecialKind.TEXT)))

    def test_read_failures_are_recorded_per_path(self) -> None:
        entry = _entry("secret.txt")
        failure = PermissionError(13, "Permission denied")
        with mock.patch("srctree.filters.classify.is_binary_file", side_effect=failure):
            self.assertFalse(self.classifier.matches(entry, _special(SpecialKind.TEXT)))
        self.assertIs(self.classifier.read_error(entry.path), failure)
        self.assertIsNone(self.classifier.read_error(Path("/project/other.txt")))

    def test_binary_probe_is_memoized_per_path(self) -> None:
        entry = _entry("blob.bin")
        with mock.patch("srctree.filters.classify.is_binary_file", return_value=True) as probe:
            self.assertTrue(self.classifier.matches(entry, _special(SpecialKind.BINARY)))
            self.assertFalse(self.classifier.matches(entry, _special(SpecialKind.TEXT)))
            self.assertTrue(self.classifier.is_binary(entry.path))
        probe.assert_called_once_with(entry.path)

    def test_kind_specials_match_exact_kind(self) -> None:
        pairs = {
            SpecialKind.DIR: EntryKind.DIRECTORY,
            SpecialKind.SYMLINK: EntryKind.SYMLINK,
            SpecialKind.SOCKET: EntryKind.SOCKET,
            SpecialKind.PIPE: EntryKind.PIPE,
            SpecialKind.DEVICE: EntryKind.DEVICE,
        }
        for special, kind in pairs.items():
            for candidate in EntryKind:
                with self.subTest(special=special, candidate=candidate):
                    result = self.classifier.matches(_entry("x", candidate), _special(special))
                    self.assertEqual(result, candidate is kind)

    @unittest.skipUnless(os.name == "posix", "POSIX permission bits")
    def test_executable_uses_permission_bits(self) -> None:
        token = _special(SpecialKind.EXECUTABLE)
        self.assertTrue(self.classifier.matches(_entry("run.sh", mode=0o755), token))
        self.assertTrue(self.classifier.matches(_entry("run", mode=0o701), token))
        self.assertFalse(self.classifier.matches(_entry("run.sh", mode=0o644), token))
        self.assertFalse(self.classifier.matches(_entry("bin", EntryKind.DIRECTORY, mode=0o755), token))

    def test_hidden_and_empty_use_snapshot_flags(self) -> None:
        self.assertTrue(self.classifier.matches(_entry(".env", hidden=True), _special(SpecialKind.HIDDEN)))
        self.assertFalse(self.classifier.matches(_entry("env"), _special(SpecialKind.HIDDEN)))

        empty = _special(SpecialKind.EMPTY)
        self.assertTrue(self.classifier.matches(_entry("blank.txt", size=0, is_empty=True), empty))
        self.assertTrue(self.classifier.matches(_entry("emptydir", EntryKind.DIRECTORY, is_empty=True), empty))
        self.assertFalse(self.classifier.matches(_entry("full", EntryKind.DIRECTORY), empty))
        self.assertFalse(self.classifier.matches(_entry("link", EntryKind.SYMLINK, is_empty=True), empty))

    def test_archive_uses_final_extension(self) -> None:
        token = _special(SpecialKind.ARCHIVE)
        self.assertTrue(self.classifier.matches(_entry("bundle.tar.gz"), token))
        self.assertTrue(self.classifier.matches(_entry("dist.ZIP"), token))
        self.assertFalse(self.classifier.matches(_entry("notes.txt"), token))

    def test_all_matches_everything(self) -> None:
        for kind in EntryKind:
            with self.subTest(kind=kind):
                self.assertTrue(self.classifier.matches(_entry("x", kind), _special(SpecialKind.ALL)))


if __name__ == "__main__":
    unittest.main()
