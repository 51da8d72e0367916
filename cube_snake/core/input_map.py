"""
Input Mapping
=============

Key identifiers delivered by input collaborators, mapped to (axis, sign).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

KEY_BINDINGS: Dict[str, Tuple[str, int]] = {
    "w": ("y", 1),
    "ArrowUp": ("y", 1),
    "s": ("y", -1),
    "ArrowDown": ("y", -1),
    "a": ("x", -1),
    "ArrowLeft": ("x", -1),
    "d": ("x", 1),
    "ArrowRight": ("x", 1),
    "q": ("z", 1),
    "e": ("z", -1),
}


def resolve_key(key: str) -> Optional[Tuple[str, int]]:
    """Return (axis, sign) for a bound key, None for anything else."""
    return KEY_BINDINGS.get(key)
