"""
Configuration for procedural tree generation.

TreeParams holds every shape coefficient consumed by the generator passes:

    Topology:   levels, tree_steps, segments
    Lengths:    trunk_length, initial_branch_length,
                length_falloff_factor, length_falloff_power, taper_rate
    Direction:  branch_factor, clump_min, clump_max, drop_amount,
                grow_amount, sweep_amount, climb_rate, trunk_kink, twist_rate
    Thickness:  max_radius, radius_falloff_rate
    Unused by the position/face output: v_multiplier, twig_scale (twigs only)

Falloff and rate coefficients are applied multiplicatively per level or
per trunk step. Degenerate values (zero, negative) are accepted: they make
ugly trees, not errors.
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

from treegen.rng import RandomState


@dataclass
class TreeParams:
    """
    Shape parameters and seed for one tree.

    Edits take effect on the next call to `generate`; a run never reads
    the parameters after they change mid-generation.
    """

    seed: int = 262
    segments: int = 6  # Vertices per cross-section ring
    levels: int = 5  # Depth of true (dichotomous) branching
    v_multiplier: float = 0.36
    twig_scale: float = 0.39
    initial_branch_length: float = 0.49
    length_falloff_factor: float = 0.85
    length_falloff_power: float = 0.99
    clump_max: float = 0.454
    clump_min: float = 0.404
    branch_factor: float = 2.45  # Mirror-branch asymmetry
    drop_amount: float = -0.1
    grow_amount: float = 0.235
    sweep_amount: float = 0.01
    max_radius: float = 0.139
    climb_rate: float = 0.371
    trunk_kink: float = 0.093
    tree_steps: int = 5  # Trunk-extension steps before branching
    taper_rate: float = 0.947
    radius_falloff_rate: float = 0.73
    twist_rate: float = 3.02
    trunk_length: float = 2.4

    @classmethod
    def default(cls) -> "TreeParams":
        """The reference preset."""
        return cls()

    @classmethod
    def sapling(cls) -> "TreeParams":
        """A young tree: short trunk, few branching levels."""
        return cls(
            levels=3,
            tree_steps=2,
            trunk_length=1.2,
            initial_branch_length=0.35,
            max_radius=0.07,
        )

    @classmethod
    def windswept(cls) -> "TreeParams":
        """Branches swept sideways and drooping with depth."""
        return cls(
            sweep_amount=0.15,
            drop_amount=-0.25,
            grow_amount=0.1,
            trunk_kink=0.2,
        )

    def random_state(self) -> RandomState:
        """Fresh random source seeded from this parameter set."""
        return RandomState(self.seed)

    def reseed(self, rng: np.random.Generator | None = None) -> int:
        """Pick a new seed in [0, 1000) and return it."""
        if rng is None:
            rng = np.random.default_rng()
        self.seed = int(rng.integers(0, 1000))
        return self.seed

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "TreeParams":
        """Build from a mapping; missing keys keep their defaults."""
        return cls(**values)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    # -------------------------------------------------------------------------
    # Incremental editing
    # -------------------------------------------------------------------------

    def set_seed(self, value: int) -> None:
        self.seed = int(value)

    def set_segments(self, value: int) -> None:
        self.segments = int(value)

    def set_tree_steps(self, value: int) -> None:
        self.tree_steps = int(value)

    def set_drop_amount(self, value: float) -> None:
        self.drop_amount = value

    def set_climb_rate(self, value: float) -> None:
        self.climb_rate = value

    def set_max_radius(self, value: float) -> None:
        self.max_radius = value

    def set_initial_branch_length(self, value: float) -> None:
        self.initial_branch_length = value

    def set_branch_factor(self, value: float) -> None:
        self.branch_factor = value

    def set_trunk_length(self, value: float) -> None:
        self.trunk_length = value

    def set_trunk_kink(self, value: float) -> None:
        self.trunk_kink = value

    def set_sweep_amount(self, value: float) -> None:
        self.sweep_amount = value

    def set_levels(self, value: float) -> None:
        """Levels come from a continuous slider; the fraction is dropped."""
        self.levels = int(math.floor(value))

    def set_length_falloff_power(self, value: float) -> None:
        self.length_falloff_power = value

    def set_length_falloff_factor(self, value: float) -> None:
        self.length_falloff_factor = value

    def set_twist_rate(self, value: float) -> None:
        self.twist_rate = value

    def set_clump_max(self, value: float) -> None:
        self.clump_max = value

    def set_clump_min(self, value: float) -> None:
        self.clump_min = value
