"""Domain model and scanner for filesystem size trees.

This package contains the non-UI scan primitives:
- size-node datatypes with nested, finalized children
- per-entry sizing and bottom-up aggregation helpers
- single-pass tree assembly from directory listings
- the parallel walker that drives listings on a worker pool
"""

from __future__ import annotations

from .types import DirectoryListing, ScannedEntry, ScanRootError, SizeNode
from .sizes import entry_own_size, fold_aggregate, path_own_size, verify_aggregates
from .builder import CANCELLED_ERROR, PendingDirectory, SizeTreeBuilder
from .walker import default_worker_count, list_directory, walk

__all__ = [
    "SizeNode",
    "ScannedEntry",
    "DirectoryListing",
    "ScanRootError",
    "entry_own_size",
    "path_own_size",
    "fold_aggregate",
    "verify_aggregates",
    "CANCELLED_ERROR",
    "PendingDirectory",
    "SizeTreeBuilder",
    "default_worker_count",
    "list_directory",
    "walk",
]
