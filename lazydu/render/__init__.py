"""Text rendering of projected size rows as a tree or a flat list."""

from __future__ import annotations

from .rows import TREE_GUIDE, format_list_row, format_tree_row, render_rows, size_label

__all__ = [
    "TREE_GUIDE",
    "size_label",
    "format_tree_row",
    "format_list_row",
    "render_rows",
]
