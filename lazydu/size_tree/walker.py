"""Parallel directory walker producing finalized size trees.

Each directory listing is one task on a fixed ``ThreadPoolExecutor``. The
calling thread coordinates: it waits for any listing to complete, hands it to
``SizeTreeBuilder`` and submits the subdirectories it reveals. The root itself
is listed on the calling thread so that its failure can raise ``ScanRootError``
directly; only descendants go through the pool. Completion order
does not affect totals. Sibling order follows the platform's ``scandir``
order, which is not stable across filesystems or runs.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path

from .builder import PendingDirectory, SizeTreeBuilder
from .sizes import describe_os_error, entry_own_size, path_own_size
from .types import DirectoryListing, ScannedEntry, ScanRootError, SizeNode

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    """Return worker-pool size bounded by available hardware concurrency."""
    return max(1, os.cpu_count() or 1)


def _scan_entries(directory: Path) -> tuple[ScannedEntry, ...]:
    """Size every child of ``directory``; raises ``OSError`` if it cannot be read."""
    entries: list[ScannedEntry] = []
    with os.scandir(directory) as scanned:
        for child in scanned:
            child_path = Path(child.path)
            try:
                own_size, is_dir, is_symlink = entry_own_size(child)
            except OSError as exc:
                logger.debug("cannot stat %s: %s", child_path, exc)
                entries.append(
                    ScannedEntry(
                        name=child.name,
                        path=child_path,
                        is_dir=False,
                        is_symlink=False,
                        own_size=0,
                        error=describe_os_error(exc),
                    )
                )
                continue
            entries.append(
                ScannedEntry(
                    name=child.name,
                    path=child_path,
                    is_dir=is_dir,
                    is_symlink=is_symlink,
                    own_size=own_size,
                )
            )
    return tuple(entries)


def list_directory(directory: Path) -> DirectoryListing:
    """List one directory, capturing failures instead of raising.

    A directory that cannot be read yields a listing with ``error`` set; a
    child that cannot be stat'ed yields an entry with ``own_size = 0`` and
    ``error`` set.
    """
    try:
        entries = _scan_entries(directory)
    except OSError as exc:
        logger.debug("cannot list %s: %s", directory, exc)
        return DirectoryListing(path=directory, error=describe_os_error(exc))
    return DirectoryListing(path=directory, entries=entries)


def walk(
    root: Path | str,
    *,
    max_workers: int | None = None,
    cancel_event: threading.Event | None = None,
) -> SizeNode:
    """Scan ``root`` and return its finalized size tree.

    Raises ``ScanRootError`` when the root cannot be stat'ed or, for a
    directory root, listed. Failures below the root are annotated on the
    affected nodes instead. Setting ``cancel_event`` stops new listings from
    being scheduled; directories not yet listed are marked cancelled.
    """
    root_path = Path(root)
    builder = SizeTreeBuilder()
    try:
        own_size, is_dir = path_own_size(root_path)
        if not is_dir:
            return builder.start_file_root(str(root_path), root_path, own_size)
        root_listing = DirectoryListing(path=root_path, entries=_scan_entries(root_path))
    except OSError as exc:
        raise ScanRootError.from_os_error(root_path, exc) from exc

    workers = max_workers if max_workers is not None else default_worker_count()
    pending_root = builder.start_directory_root(str(root_path), root_path)
    queued = builder.add_listing(pending_root, root_listing)

    with ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="lazydu-scan") as executor:
        in_flight: dict[Future[DirectoryListing], PendingDirectory] = {}

        def submit(directories: list[PendingDirectory]) -> None:
            for directory in directories:
                if cancel_event is not None and cancel_event.is_set():
                    builder.cancel(directory)
                    continue
                in_flight[executor.submit(list_directory, directory.path)] = directory

        submit(queued)
        while in_flight:
            done, _not_done = wait(in_flight, return_when=FIRST_COMPLETED)
            for future in done:
                directory = in_flight.pop(future)
                submit(builder.add_listing(directory, future.result()))

    logger.info(
        "scanned %s: %d entries, %d errors",
        root_path,
        builder.entry_count,
        builder.error_count,
    )
    return builder.result()


__all__ = [
    "default_worker_count",
    "list_directory",
    "walk",
]
