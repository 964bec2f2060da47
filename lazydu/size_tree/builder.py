"""Single-pass assembly of directory listings into a finalized size tree.

The builder keeps one pending record per directory whose listing has been
requested. Each record holds a slot per child in listing order. Leaves are
finalized immediately; a directory is finalized once its last slot fills, and
its node is then placed into the parent's slot. Finalization therefore runs in
post-order without a second traversal.

All methods must be called from one coordinating thread.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .sizes import fold_aggregate
from .types import DirectoryListing, ScannedEntry, SizeNode

CANCELLED_ERROR = "scan cancelled"


@dataclass(eq=False)
class PendingDirectory:
    """A directory awaiting its listing and the finalization of its children."""

    name: str
    path: Path
    depth: int
    parent: "PendingDirectory | None" = None
    parent_slot: int = 0
    slots: list[SizeNode | None] = field(default_factory=list)
    remaining: int = 0
    error: str | None = None


class SizeTreeBuilder:
    """Merge listings and sizes into ``SizeNode`` trees, bottom-up."""

    def __init__(self) -> None:
        self._root: SizeNode | None = None
        self.entry_count = 0
        self.error_count = 0

    @property
    def finished(self) -> bool:
        return self._root is not None

    def result(self) -> SizeNode:
        """Return the finalized root node."""
        if self._root is None:
            raise RuntimeError("size tree is not finalized yet")
        return self._root

    def start_file_root(self, name: str, path: Path, own_size: int) -> SizeNode:
        """Finalize a scan whose root is not a directory."""
        self.entry_count += 1
        self._root = SizeNode(name=name, path=path, own_size=own_size, aggregate_size=own_size, depth=0)
        return self._root

    def start_directory_root(self, name: str, path: Path) -> PendingDirectory:
        """Register the root directory; its listing must be requested next."""
        self.entry_count += 1
        return PendingDirectory(name=name, path=path, depth=0)

    def add_listing(self, pending: PendingDirectory, listing: DirectoryListing) -> list[PendingDirectory]:
        """Attach ``listing`` to ``pending`` and return subdirectories to list.

        Files become finalized leaves at once. When the listing failed, or has
        no subdirectories, ``pending`` is finalized before returning.
        """
        if listing.error is not None:
            pending.error = listing.error
            self.error_count += 1
            self._finalize(pending)
            return []

        pending.slots = [None] * len(listing.entries)
        to_list: list[PendingDirectory] = []
        for slot, entry in enumerate(listing.entries):
            self.entry_count += 1
            if entry.error is not None:
                self.error_count += 1
            if entry.is_dir and entry.error is None:
                to_list.append(
                    PendingDirectory(
                        name=entry.name,
                        path=entry.path,
                        depth=pending.depth + 1,
                        parent=pending,
                        parent_slot=slot,
                    )
                )
                continue
            pending.slots[slot] = self._leaf(entry, pending.depth + 1)

        pending.remaining = len(to_list)
        if pending.remaining == 0:
            self._finalize(pending)
        return to_list

    def cancel(self, pending: PendingDirectory) -> None:
        """Finalize a directory that will never be listed."""
        pending.error = CANCELLED_ERROR
        self._finalize(pending)

    @staticmethod
    def _leaf(entry: ScannedEntry, depth: int) -> SizeNode:
        return SizeNode(
            name=entry.name,
            path=entry.path,
            own_size=entry.own_size,
            aggregate_size=entry.own_size,
            depth=depth,
            is_dir=entry.is_dir,
            is_symlink=entry.is_symlink,
            error=entry.error,
        )

    def _finalize(self, pending: PendingDirectory) -> None:
        current: PendingDirectory | None = pending
        while current is not None:
            children = tuple(child for child in current.slots if child is not None)
            node = SizeNode(
                name=current.name,
                path=current.path,
                own_size=0,
                aggregate_size=fold_aggregate(0, children),
                depth=current.depth,
                is_dir=True,
                children=children,
                error=current.error,
            )
            parent = current.parent
            if parent is None:
                self._root = node
                return
            parent.slots[current.parent_slot] = node
            parent.remaining -= 1
            current = parent if parent.remaining == 0 else None


__all__ = [
    "CANCELLED_ERROR",
    "PendingDirectory",
    "SizeTreeBuilder",
]
