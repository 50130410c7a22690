"""
Seed derivation for the simulation's random generators.

The ship and every service own an independent random.Random. When a single
voyage seed is given, each component's seed is derived from it with SHA256
over hierarchical components, so adding or reordering services never shifts
another component's draws.
"""
from __future__ import annotations

import hashlib
import random
from typing import Any


def make_seed(*components: Any) -> int:
    """
    Generate a deterministic 64-bit seed from hierarchical components.

    Example:
        liner_seed = make_seed(voyage_seed, "liner")
        service_seed = make_seed(voyage_seed, "service", 0, "security")
    """
    hash_input = ":".join(str(c) for c in components)
    hash_bytes = hashlib.sha256(hash_input.encode("utf-8")).digest()
    return int.from_bytes(hash_bytes[:8], byteorder="big")


def make_rng(seed: int | None, *components: Any) -> random.Random:
    """
    Return a generator for one component.

    seed=None gives an OS-seeded generator (non-reproducible runs).
    """
    if seed is None:
        return random.Random()
    return random.Random(make_seed(seed, *components))
