"""Tests for the parallel size-tree walker."""

from __future__ import annotations

import errno
import os
import tempfile
import threading
import unittest
from pathlib import Path
from unittest import mock

from lazydu.size_tree import CANCELLED_ERROR, ScanRootError, SizeNode, list_directory, verify_aggregates, walk
from lazydu.size_tree import walker


def _child(node: SizeNode, name: str) -> SizeNode:
    return next(child for child in node.children if child.name == name)


def _aggregates_by_path(node: SizeNode) -> dict[Path, int]:
    sizes = {node.path: node.aggregate_size}
    for child in node.children:
        sizes.update(_aggregates_by_path(child))
    return sizes


def _write_nested_tree(root: Path) -> None:
    (root / "top.bin").write_bytes(b"t" * 100)
    for idx in range(4):
        level = root / f"d{idx}" / "inner" / "deep"
        level.mkdir(parents=True)
        (level / "leaf.bin").write_bytes(b"l" * (idx + 1) * 10)
        (root / f"d{idx}" / "side.bin").write_bytes(b"s" * 5)


class ListDirectoryTests(unittest.TestCase):
    def test_list_directory_reports_children_with_sizes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "a.txt").write_bytes(b"a" * 3)
            (root / "sub").mkdir()

            listing = list_directory(root)

            self.assertIsNone(listing.error)
            by_name = {entry.name: entry for entry in listing.entries}
            self.assertEqual(by_name["a.txt"].own_size, 3)
            self.assertTrue(by_name["sub"].is_dir)
            self.assertEqual(by_name["sub"].path, root / "sub")

    def test_list_directory_captures_open_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            listing = list_directory(Path(tmp) / "missing")

            self.assertEqual(listing.entries, ())
            self.assertIsNotNone(listing.error)

    def test_unstatable_entry_is_annotated_with_zero_size(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "good.txt").write_bytes(b"g" * 8)
            (root / "bad.txt").write_bytes(b"b" * 8)
            real_entry_own_size = walker.entry_own_size

            def flaky(entry: os.DirEntry[str]) -> tuple[int, bool, bool]:
                if entry.name == "bad.txt":
                    raise OSError(errno.EIO, "Input/output error", entry.path)
                return real_entry_own_size(entry)

            with mock.patch("lazydu.size_tree.walker.entry_own_size", side_effect=flaky):
                listing = list_directory(root)

            by_name = {entry.name: entry for entry in listing.entries}
            self.assertEqual(by_name["bad.txt"].own_size, 0)
            self.assertEqual(by_name["bad.txt"].error, "Input/output error")
            self.assertIsNone(by_name["good.txt"].error)


class WalkTests(unittest.TestCase):
    def test_walk_builds_consistent_tree_with_depths(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write_nested_tree(root)

            tree = walk(root, max_workers=4)

            self.assertTrue(verify_aggregates(tree))
            self.assertEqual(tree.depth, 0)
            self.assertEqual(tree.own_size, 0)
            self.assertEqual(tree.aggregate_size, 100 + 4 * 5 + 10 + 20 + 30 + 40)
            deep = _child(_child(_child(tree, "d2"), "inner"), "deep")
            self.assertEqual(deep.depth, 3)
            self.assertEqual(_child(deep, "leaf.bin").depth, 4)
            self.assertEqual(deep.aggregate_size, 30)

    def test_walk_is_idempotent_across_worker_counts(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _write_nested_tree(root)

            serial = walk(root, max_workers=1)
            parallel = walk(root, max_workers=8)

            self.assertEqual(_aggregates_by_path(serial), _aggregates_by_path(parallel))

    def test_walk_does_not_recurse_into_symlinked_directories(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            real = root / "real"
            real.mkdir()
            (real / "payload.bin").write_bytes(b"p" * 64)
            os.symlink(real, root / "alias")
            os.symlink(root, real / "loop")

            tree = walk(root)

            alias = _child(tree, "alias")
            self.assertTrue(alias.is_symlink)
            self.assertFalse(alias.is_dir)
            self.assertEqual(alias.children, ())
            self.assertEqual(tree.aggregate_size, 64)

    def test_symlinked_file_is_counted_once_at_link_position(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "data.bin").write_bytes(b"d" * 30)
            os.symlink(root / "data.bin", root / "link.bin")

            tree = walk(root)

            self.assertEqual(_child(tree, "link.bin").aggregate_size, 30)
            self.assertEqual(tree.aggregate_size, 60)

    def test_walk_on_regular_file_returns_single_leaf(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).resolve() / "solo.bin"
            target.write_bytes(b"s" * 12)

            tree = walk(target)

            self.assertFalse(tree.is_dir)
            self.assertEqual(tree.own_size, 12)
            self.assertEqual(tree.aggregate_size, 12)
            self.assertEqual(tree.children, ())

    def test_missing_root_raises_scan_root_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(ScanRootError) as ctx:
                walk(missing)

            self.assertEqual(ctx.exception.errno, errno.ENOENT)
            self.assertEqual(ctx.exception.filename, str(missing))

    def test_unreadable_root_directory_raises_scan_root_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()

            def denied(directory: Path) -> tuple:
                raise PermissionError(errno.EACCES, "Permission denied", str(directory))

            with mock.patch("lazydu.size_tree.walker._scan_entries", side_effect=denied):
                with self.assertRaises(ScanRootError) as ctx:
                    walk(root)

            self.assertEqual(ctx.exception.errno, errno.EACCES)

    def test_unreadable_subdirectory_is_annotated_and_scan_continues(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            locked = root / "locked"
            locked.mkdir()
            (locked / "hidden.bin").write_bytes(b"h" * 500)
            (root / "open.bin").write_bytes(b"o" * 25)
            real_scan_entries = walker._scan_entries

            def flaky(directory: Path) -> tuple:
                if Path(directory) == locked:
                    raise PermissionError(errno.EACCES, "Permission denied", str(directory))
                return real_scan_entries(directory)

            with mock.patch("lazydu.size_tree.walker._scan_entries", side_effect=flaky):
                tree = walk(root)

            locked_node = _child(tree, "locked")
            self.assertEqual(locked_node.error, "Permission denied")
            self.assertEqual(locked_node.aggregate_size, 0)
            self.assertEqual(tree.aggregate_size, 25)
            self.assertTrue(verify_aggregates(tree))

    def test_preset_cancel_event_skips_subdirectory_listings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "sub" / "inner.bin").write_bytes(b"i" * 10)
            (root / "top.bin").write_bytes(b"t" * 4)
            cancel = threading.Event()
            cancel.set()

            tree = walk(root, cancel_event=cancel)

            self.assertEqual(_child(tree, "sub").error, CANCELLED_ERROR)
            self.assertEqual(tree.aggregate_size, 4)


if __name__ == "__main__":
    unittest.main()
