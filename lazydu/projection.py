"""Project a finalized size tree into ordered display rows.

The projection is a fixed pre-order pipeline applied per node: depth cut,
threshold filter, child ordering, then percentage of the parent. Hidden nodes
stay counted in their ancestors' aggregates; nothing is recomputed and the
tree is never mutated, so one tree can be projected any number of times.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from .size_tree import SizeNode


@dataclass(frozen=True)
class ViewOptions:
    """Display configuration for one projection run."""

    sort_by_size: bool = False
    ascending: bool = False
    threshold: int = 0
    max_depth: int | None = None


@dataclass(frozen=True)
class DisplayRow:
    """One output row: node, its depth, and its share of the parent's size."""

    node: SizeNode
    depth: int
    percentage: float


def percentage_of_parent(size: int, parent_size: int | None) -> float:
    """Return ``size`` as a percentage of ``parent_size``.

    ``None`` means the node has no parent and is the whole scan (100%). A
    zero-sized parent yields ``0.0``.
    """
    if parent_size is None:
        return 100.0
    if parent_size <= 0:
        return 0.0
    return min(100.0, max(0.0, size / parent_size * 100.0))


def _within_depth(node: SizeNode, options: ViewOptions) -> bool:
    return options.max_depth is None or node.depth <= options.max_depth


def _passes_threshold(node: SizeNode, options: ViewOptions) -> bool:
    return node.aggregate_size >= options.threshold


def ordered_children(node: SizeNode, options: ViewOptions) -> list[SizeNode]:
    """Return ``node``'s children that survive filtering, in display order."""
    visible = [child for child in node.children if _within_depth(child, options) and _passes_threshold(child, options)]
    if not options.sort_by_size:
        return visible
    # Name ascending is the tie-break in both directions.
    visible.sort(key=lambda child: child.name)
    visible.sort(key=lambda child: child.aggregate_size, reverse=not options.ascending)
    return visible


def project(tree: SizeNode, options: ViewOptions | None = None) -> Iterator[DisplayRow]:
    """Yield display rows for ``tree`` in pre-order.

    The returned generator is lazy and can be consumed only once. Rows whose
    node lies deeper than ``max_depth`` or whose aggregate is below
    ``threshold`` are omitted together with their subtrees.
    """
    active = options or ViewOptions()
    if not (_within_depth(tree, active) and _passes_threshold(tree, active)):
        return
    stack: list[tuple[SizeNode, int | None]] = [(tree, None)]
    while stack:
        node, parent_size = stack.pop()
        yield DisplayRow(
            node=node,
            depth=node.depth,
            percentage=percentage_of_parent(node.aggregate_size, parent_size),
        )
        children = ordered_children(node, active)
        stack.extend((child, node.aggregate_size) for child in reversed(children))


__all__ = [
    "ViewOptions",
    "DisplayRow",
    "percentage_of_parent",
    "ordered_children",
    "project",
]
