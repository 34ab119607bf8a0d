"""
Tests for tree parameters, presets and incremental editing.
"""

import numpy as np
import pytest

from treegen.config import TreeParams


class TestDefaults:
    """Tests for the reference preset."""

    def test_default_values(self) -> None:
        """Defaults match the documented preset."""
        params = TreeParams.default()
        expected = {
            "segments": 6,
            "levels": 5,
            "v_multiplier": 0.36,
            "twig_scale": 0.39,
            "initial_branch_length": 0.49,
            "length_falloff_factor": 0.85,
            "length_falloff_power": 0.99,
            "clump_max": 0.454,
            "clump_min": 0.404,
            "branch_factor": 2.45,
            "drop_amount": -0.1,
            "grow_amount": 0.235,
            "sweep_amount": 0.01,
            "max_radius": 0.139,
            "climb_rate": 0.371,
            "trunk_kink": 0.093,
            "tree_steps": 5,
            "taper_rate": 0.947,
            "radius_falloff_rate": 0.73,
            "twist_rate": 3.02,
            "trunk_length": 2.4,
            "seed": 262,
        }
        assert params.to_dict() == expected

    def test_default_equals_constructor(self) -> None:
        assert TreeParams.default() == TreeParams()

    def test_presets_differ_from_default(self) -> None:
        """Named presets are variations of the default."""
        default = TreeParams.default()
        assert TreeParams.sapling() != default
        assert TreeParams.windswept() != default
        assert TreeParams.sapling().levels < default.levels


class TestSerialization:
    """Tests for dict conversion."""

    def test_round_trip(self) -> None:
        params = TreeParams(seed=7, levels=3, trunk_kink=0.5)
        assert TreeParams.from_dict(params.to_dict()) == params

    def test_partial_dict_keeps_defaults(self) -> None:
        params = TreeParams.from_dict({"seed": 9})
        assert params.seed == 9
        assert params.levels == TreeParams().levels

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(TypeError):
            TreeParams.from_dict({"not_a_field": 1.0})

    def test_field_names(self) -> None:
        names = TreeParams.field_names()
        assert "seed" in names
        assert len(names) == 22


class TestEditing:
    """Tests for setter-style mutators."""

    def test_setters_update_fields(self) -> None:
        params = TreeParams()
        params.set_drop_amount(-0.3)
        params.set_climb_rate(0.5)
        params.set_max_radius(0.2)
        params.set_initial_branch_length(0.6)
        params.set_branch_factor(1.0)
        params.set_trunk_length(3.0)
        params.set_trunk_kink(0.01)
        params.set_sweep_amount(0.02)
        params.set_length_falloff_power(0.9)
        params.set_length_falloff_factor(0.8)
        params.set_twist_rate(1.5)
        params.set_clump_max(0.6)
        params.set_clump_min(0.5)

        assert params.drop_amount == -0.3
        assert params.climb_rate == 0.5
        assert params.max_radius == 0.2
        assert params.initial_branch_length == 0.6
        assert params.branch_factor == 1.0
        assert params.trunk_length == 3.0
        assert params.trunk_kink == 0.01
        assert params.sweep_amount == 0.02
        assert params.length_falloff_power == 0.9
        assert params.length_falloff_factor == 0.8
        assert params.twist_rate == 1.5
        assert params.clump_max == 0.6
        assert params.clump_min == 0.5

    def test_topology_setters_coerce_to_int(self) -> None:
        params = TreeParams()
        params.set_seed(17)
        params.set_segments(8)
        params.set_tree_steps(2)
        assert (params.seed, params.segments, params.tree_steps) == (17, 8, 2)
        assert all(isinstance(v, int) for v in (params.seed, params.segments, params.tree_steps))

    def test_set_levels_floors(self) -> None:
        """Levels from a slider drop the fractional part."""
        params = TreeParams()
        params.set_levels(4.7)
        assert params.levels == 4
        assert isinstance(params.levels, int)

    def test_reseed_range(self) -> None:
        """Reseeding picks a seed in [0, 1000)."""
        params = TreeParams()
        rng = np.random.default_rng(0)
        for _ in range(50):
            seed = params.reseed(rng)
            assert 0 <= seed < 1000
            assert params.seed == seed

    def test_reseed_reproducible_with_generator(self) -> None:
        a = TreeParams().reseed(np.random.default_rng(3))
        b = TreeParams().reseed(np.random.default_rng(3))
        assert a == b
