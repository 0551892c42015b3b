"""Identifier helpers for custom roles."""

from __future__ import annotations

import secrets
import time
from collections.abc import Callable, Collection

__all__ = ["generate_role_id"]

_MAX_ATTEMPTS = 32


def generate_role_id(
    existing: Collection[str],
    *,
    prefix: str = "role",
    entropy_bytes: int = 4,
    clock: Callable[[], float] = time.time,
) -> str:
    """Return ``<prefix>_<epoch-ms>_<hex>`` not present in ``existing``.

    Candidates are regenerated until one misses ``existing``, so the id is
    unique within the supplied snapshot rather than merely unlikely to clash.
    """

    taken = set(existing)
    for _ in range(_MAX_ATTEMPTS):
        candidate = f"{prefix}_{int(clock() * 1000)}_{secrets.token_hex(entropy_bytes)}"
        if candidate not in taken:
            return candidate
    # Only reachable with a frozen clock and a near-exhausted suffix space.
    raise RuntimeError("Unable to generate a unique role identifier")
