"""
Tests for 3D vector helpers.
"""

import math

import numpy as np

from treegen.vectors import (
    mirror_branch,
    safe_divide,
    safe_power,
    scale_in_direction,
    vec3,
    vec_axis_angle,
    vec_cross,
    vec_dot,
    vec_length,
    vec_normalize,
)


class TestBasics:
    """Tests for elementary operations."""

    def test_normalize_unit_length(self) -> None:
        v = vec_normalize(vec3(3.0, 4.0, 12.0))
        assert math.isclose(vec_length(v), 1.0)

    def test_normalize_zero_passes_through(self) -> None:
        """A zero vector is returned as-is rather than dividing by zero."""
        v = vec_normalize(vec3(0.0, 0.0, 0.0))
        assert np.array_equal(v, np.zeros(3))

    def test_cross_right_handed(self) -> None:
        x = vec3(1.0, 0.0, 0.0)
        y = vec3(0.0, 1.0, 0.0)
        assert np.allclose(vec_cross(x, y), [0.0, 0.0, 1.0])

    def test_dot(self) -> None:
        assert vec_dot(vec3(1.0, 2.0, 3.0), vec3(4.0, -5.0, 6.0)) == 12.0

    def test_safe_divide(self) -> None:
        assert safe_divide(1.0, 0.0) == math.inf
        assert math.isnan(safe_divide(0.0, 0.0))
        assert safe_divide(3.0, 2.0) == 1.5

    def test_safe_power_negative_base(self) -> None:
        """Fractional powers of negative numbers are NaN, not complex."""
        assert math.isnan(safe_power(-1.0, 0.99))
        assert math.isclose(safe_power(0.49, 0.99), 0.49 ** 0.99)


class TestRotation:
    """Tests for axis-angle rotation and projections."""

    def test_quarter_turn_about_y(self) -> None:
        """Rotating +X by 90 degrees about +Y gives -Z."""
        v = vec_axis_angle(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0), math.pi / 2)
        assert np.allclose(v, [0.0, 0.0, -1.0], atol=1e-12)

    def test_rotation_preserves_length(self) -> None:
        axis = vec_normalize(vec3(1.0, 2.0, 3.0))
        v = vec3(0.3, -0.7, 2.0)
        for angle in np.linspace(0, 2 * math.pi, 9):
            assert math.isclose(vec_length(vec_axis_angle(v, axis, angle)), vec_length(v))

    def test_scale_in_direction_zero_projects(self) -> None:
        """Scale 0 removes the component along the direction."""
        v = scale_in_direction(vec3(1.0, 2.0, 3.0), vec3(0.0, 1.0, 0.0), 0)
        assert np.allclose(v, [1.0, 0.0, 3.0])

    def test_scale_in_direction_doubles(self) -> None:
        v = scale_in_direction(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, 1.0), 2.0)
        assert np.allclose(v, [1.0, 2.0, 6.0])


class TestMirrorBranch:
    """Tests for sibling direction mirroring."""

    def test_zero_factor_is_identity(self) -> None:
        v = vec_normalize(vec3(0.3, 0.9, 0.1))
        assert np.allclose(mirror_branch(v, vec3(0.0, 1.0, 0.0), 0.0), v)

    def test_parallel_vector_unchanged(self) -> None:
        """A direction along the axis has nothing to mirror."""
        axis = vec3(0.0, 1.0, 0.0)
        assert np.allclose(mirror_branch(axis * 2.0, axis, 2.45), axis * 2.0)

    def test_pushes_across_axis(self) -> None:
        """v = (a, b, 0) about +Y loses 2*a^3 of its x component at factor 2."""
        a = 1 / math.sqrt(2)
        v = vec3(a, a, 0.0)
        result = mirror_branch(v, vec3(0.0, 1.0, 0.0), 2.0)
        assert np.allclose(result, [a - 2 * a ** 3, a, 0.0])
