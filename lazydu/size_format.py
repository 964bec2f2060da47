"""Human-readable byte labels and size-argument parsing.

Units are decimal (1 KB = 1000 B), matching what storage vendors print.
"""

from __future__ import annotations

import re
from decimal import Decimal

_UNIT_EXPONENTS: dict[str, int] = {
    "": 0,
    "B": 0,
    "K": 1,
    "KB": 1,
    "M": 2,
    "MB": 2,
    "G": 3,
    "GB": 3,
}
_SIZE_RE = re.compile(r"^\s*(?P<value>\d+(?:\.\d*)?|\.\d+)\s*(?P<unit>[A-Za-z]*)\s*$")


def format_size(size: int) -> str:
    """Return ``size`` as ``123B``, ``4.5KB``, ``6.7MB`` or ``8.9GB``."""
    if size < 1_000:
        return f"{size}B"
    if size < 1_000_000:
        return f"{size / 1_000:.1f}KB"
    if size < 1_000_000_000:
        return f"{size / 1_000_000:.1f}MB"
    return f"{size / 1_000_000_000:.1f}GB"


def parse_size(text: str) -> int:
    """Parse ``"150"``, ``"10K"``, ``"2.5MB"`` or ``"1gb"`` into bytes.

    Raises ``ValueError`` for malformed numbers or unknown units.
    """
    match = _SIZE_RE.match(text)
    if match is None:
        raise ValueError(f"failed to parse size: {text!r}")
    unit = match.group("unit").upper()
    exponent = _UNIT_EXPONENTS.get(unit)
    if exponent is None:
        raise ValueError(f"invalid size unit: {match.group('unit')!r} (supported: B, KB, MB, GB)")
    return int(Decimal(match.group("value")) * 1_000**exponent)


__all__ = [
    "format_size",
    "parse_size",
]
