"""Domain datatypes for scanned size trees."""

from __future__ import annotations

import errno
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SizeNode:
    """One scanned filesystem entry with its own and aggregate byte sizes.

    Nodes are built bottom-up and never change afterwards: ``children`` is a
    tuple owned by this node and already carries final aggregates.
    """

    name: str
    path: Path
    own_size: int
    aggregate_size: int
    depth: int
    is_dir: bool = False
    is_symlink: bool = False
    children: tuple["SizeNode", ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class ScannedEntry:
    """One directory child observed by a listing task."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool
    own_size: int
    error: str | None = None


@dataclass(frozen=True)
class DirectoryListing:
    """Result of listing one directory: children in listing order or an error."""

    path: Path
    entries: tuple[ScannedEntry, ...] = ()
    error: str | None = None


class ScanRootError(OSError):
    """Raised when the scan root itself cannot be opened or read."""

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> "ScanRootError":
        code = exc.errno if exc.errno is not None else errno.EIO
        return cls(code, exc.strerror or str(exc), str(path))


__all__ = [
    "SizeNode",
    "ScannedEntry",
    "DirectoryListing",
    "ScanRootError",
]
