"""Deterministic bucket key to color mapping for renderers."""

import hashlib
from typing import Dict, Iterable, Optional, Sequence

from ..config import DEFAULT_PALETTE


def color_for_key(key: str, palette: Optional[Sequence[str]] = None) -> str:
    """Pick a palette color for ``key`` from a SHA-256 digest of the key.

    The same key always maps to the same color, across calls and processes.
    """
    palette = palette or DEFAULT_PALETTE
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return palette[int.from_bytes(digest[:8], "big") % len(palette)]


def assign_colors(keys: Iterable[str], palette: Optional[Sequence[str]] = None) -> Dict[str, str]:
    """Map each key to its color, preserving the order of ``keys``."""
    return {key: color_for_key(key, palette) for key in keys}
