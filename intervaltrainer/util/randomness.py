from __future__ import annotations

"""Randomness helpers.

The trainer threads one `random.Random` through its components instead of
seeding the module-level generator, so several engines never interfere.
"""

import os
import random
from typing import Optional


def resolve_seed(seed: Optional[int] = None) -> Optional[int]:
    """Return seed, or the SEED env var when seed is None and it is an integer."""
    if seed is not None:
        return int(seed)
    env = os.environ.get("SEED")
    if env is None:
        return None
    try:
        return int(env)
    except ValueError:
        return None


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Create the randomness source for one trainer session."""
    return random.Random(resolve_seed(seed))


def choose(rng: random.Random, choices):
    """Uniformly pick one element of a non-empty collection."""
    items = list(choices)
    return items[rng.randrange(len(items))]
