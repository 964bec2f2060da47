"""Per-entry sizing and bottom-up aggregation.

Sizes are logical byte lengths (``st_size``), not allocated blocks, so totals
differ from block-counting ``du`` on sparse or compressed files. Directories
own nothing themselves; their totals come only from children.
"""

from __future__ import annotations

import errno
import os
import stat
from collections.abc import Iterable
from pathlib import Path

from .types import SizeNode


def describe_os_error(exc: OSError) -> str:
    """Return a short annotation for ``exc`` without the repeated path."""
    return exc.strerror or exc.__class__.__name__


def entry_own_size(entry: os.DirEntry[str]) -> tuple[int, bool, bool]:
    """Return ``(own_size, is_dir, is_symlink)`` for one listed entry.

    Symlinks are never treated as directories. A link that resolves to a
    regular file is sized by its target; every other link sizes to ``0``.
    Raises ``OSError`` when the entry cannot be stat'ed.
    """
    if entry.is_symlink():
        try:
            target = entry.stat(follow_symlinks=True)
        except (FileNotFoundError, NotADirectoryError):
            return 0, False, True
        except OSError as exc:
            if exc.errno != errno.ELOOP:
                raise
            return 0, False, True
        if stat.S_ISREG(target.st_mode):
            return int(target.st_size), False, True
        return 0, False, True

    info = entry.stat(follow_symlinks=False)
    if stat.S_ISDIR(info.st_mode):
        return 0, True, False
    if stat.S_ISREG(info.st_mode):
        return int(info.st_size), False, False
    return 0, False, False


def path_own_size(path: Path) -> tuple[int, bool]:
    """Return ``(own_size, is_dir)`` for a root path, following symlinks."""
    info = os.stat(path)
    if stat.S_ISDIR(info.st_mode):
        return 0, True
    if stat.S_ISREG(info.st_mode):
        return int(info.st_size), False
    return 0, False


def fold_aggregate(own_size: int, children: Iterable[SizeNode]) -> int:
    """Fold finalized child aggregates into a parent's aggregate size."""
    return own_size + sum(child.aggregate_size for child in children)


def verify_aggregates(node: SizeNode) -> bool:
    """Return whether every node under ``node`` satisfies the aggregate invariant."""
    stack = [node]
    while stack:
        current = stack.pop()
        if current.aggregate_size != fold_aggregate(current.own_size, current.children):
            return False
        stack.extend(current.children)
    return True


__all__ = [
    "describe_os_error",
    "entry_own_size",
    "path_own_size",
    "fold_aggregate",
    "verify_aggregates",
]
