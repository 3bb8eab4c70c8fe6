# src/core/natural_sort.py - v1
"""Natural sort key for display names.

Case-insensitive, accent-insensitive (base letters only), numeric-aware
so that "file2" sorts before "file10". Text runs go through the current
locale's collation via locale.strxfrm.
"""

from __future__ import annotations

import locale
import re
import unicodedata

_DIGITS_RE = re.compile(r"(\d+)")


def _base_letters(text: str) -> str:
    """Strip accents and case: 'Éte' -> 'ete'."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def natural_sort_key(name: str) -> list[str | int]:
    """Build a sort key alternating text runs and integer runs.

    re.split with a capturing group always yields text at even indices and
    digits at odd indices, so two keys never compare str against int.
    """
    key: list[str | int] = []
    for i, part in enumerate(_DIGITS_RE.split(name)):
        if i % 2:
            key.append(int(part))
        else:
            key.append(locale.strxfrm(_base_letters(part)))
    return key
