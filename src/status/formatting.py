# src/status/formatting.py - v1
"""Human-readable byte sizes for list rows and download descriptors."""

from __future__ import annotations

_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Format a byte count with base-1024 units and at most two decimals.

    >>> format_file_size(0)
    '0 B'
    >>> format_file_size(1536)
    '1.5 KB'
    """
    if size_bytes <= 0:
        return "0 B"
    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_UNITS[unit]}"
