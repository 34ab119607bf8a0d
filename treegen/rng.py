"""
Deterministic random source for tree generation.

Values are a pure function of a key: abs(cos(k + k^2)). Callers either
pass a key derived from their position in the tree (traversal-order
independent) or draw from the internal counter, which advances by one per
keyless draw.
"""

import math


class RandomState:
    """Counter-based pseudo-random source seeded from TreeParams.seed."""

    def __init__(self, seed: int = 0) -> None:
        self.counter = seed

    def reset(self, seed: int) -> None:
        """Restart the keyless sequence at `seed`."""
        self.counter = seed

    def random(self, key: float | None = None) -> float:
        """
        Return a value in [0, 1].

        Args:
            key: Explicit key. When omitted the current counter is used as
                the key and then incremented.
        """
        if key is None:
            key = self.counter
            self.counter += 1
        fix = float(key)
        x = fix + fix * fix
        # Huge keys overflow to inf, where cos is undefined
        if not math.isfinite(x):
            return math.nan
        return abs(math.cos(x))
