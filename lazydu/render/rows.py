"""Formatting helpers for size-tree display rows."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator

from ..projection import DisplayRow
from ..size_format import format_size
from ..size_tree import SizeNode
from ..ui_theme import DEFAULT_THEME, UITheme

TREE_GUIDE = "│ "


def size_label(size: int, machine: bool = False) -> str:
    """Return raw byte count in machine mode, otherwise a human label."""
    return str(size) if machine else format_size(size)


def _name_color(node: SizeNode, theme: UITheme, is_root: bool) -> str:
    if is_root:
        return theme.tree_root
    if node.is_dir:
        return theme.tree_dir
    if node.is_symlink:
        return theme.tree_symlink
    return theme.tree_file


def _row_suffix(row: DisplayRow, theme: UITheme, machine: bool) -> str:
    node = row.node
    reset = theme.reset
    text = f" {theme.tree_size}{size_label(node.aggregate_size, machine)}{reset}"
    text += f" {theme.tree_percent}{row.percentage:.1f}%{reset}"
    if node.error is not None:
        text += f" {theme.tree_error}<error: {node.error}>{reset}"
    return text


def format_tree_row(row: DisplayRow, theme: UITheme | None = None, machine: bool = False) -> str:
    """Render one row indented by depth, labelled with its path segment."""
    active_theme = theme or DEFAULT_THEME
    node = row.node
    is_root = row.depth == 0
    name = node.name
    if node.is_dir and not name.endswith(os.sep):
        name += os.sep
    guides = f"{active_theme.tree_guide}{TREE_GUIDE * row.depth}{active_theme.reset}" if row.depth else ""
    color = _name_color(node, active_theme, is_root)
    return f"{guides}{color}{name}{active_theme.reset}{_row_suffix(row, active_theme, machine)}"


def format_list_row(row: DisplayRow, theme: UITheme | None = None, machine: bool = False) -> str:
    """Render one row labelled with its full path and no indentation."""
    active_theme = theme or DEFAULT_THEME
    node = row.node
    color = _name_color(node, active_theme, row.depth == 0)
    return f"{color}{node.path}{active_theme.reset}{_row_suffix(row, active_theme, machine)}"


def render_rows(
    rows: Iterable[DisplayRow],
    *,
    list_output: bool = False,
    files_only: bool = False,
    machine: bool = False,
    theme: UITheme | None = None,
) -> Iterator[str]:
    """Yield one text line per row, in tree or flat-list form.

    ``files_only`` applies to list output only; tree output keeps directory
    rows so that indentation stays meaningful.
    """
    for row in rows:
        if list_output:
            if files_only and row.node.is_dir:
                continue
            yield format_list_row(row, theme, machine)
        else:
            yield format_tree_row(row, theme, machine)


__all__ = [
    "TREE_GUIDE",
    "size_label",
    "format_tree_row",
    "format_list_row",
    "render_rows",
]
