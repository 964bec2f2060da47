"""UI theme definitions and selection helpers.

Themes are ANSI palettes for size rows: names, size labels, percentages,
indent guides and error notes.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    tree_guide: str
    tree_root: str
    tree_dir: str
    tree_file: str
    tree_symlink: str
    tree_size: str
    tree_percent: str
    tree_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    tree_guide="\033[2;38;5;245m",
    tree_root="\033[1;34m",
    tree_dir="\033[1;34m",
    tree_file="\033[36m",
    tree_symlink="\033[38;5;176m",
    tree_size="\033[32m",
    tree_percent="\033[2;38;5;250m",
    tree_error="\033[38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    tree_guide="\033[2;38;5;31m",
    tree_root="\033[1;38;5;39m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;117m",
    tree_symlink="\033[38;5;153m",
    tree_size="\033[38;5;73m",
    tree_percent="\033[2;38;5;110m",
    tree_error="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    tree_guide="",
    tree_root="",
    tree_dir="",
    tree_file="",
    tree_symlink="",
    tree_size="",
    tree_percent="",
    tree_error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
