"""
3D vector helpers used by the generator passes.

Vectors are plain numpy arrays of shape (3,). Every helper accepts
degenerate input (zero vectors, NaN) and returns a value instead of
raising, so pathological tree parameters only degrade the geometry.
"""

import math

import numpy as np


def vec3(x: float, y: float, z: float) -> np.ndarray:
    """Create a 3D vector."""
    return np.array([x, y, z], dtype=float)


def vec_length(v: np.ndarray) -> float:
    """Euclidean length of a vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def vec_normalize(v: np.ndarray) -> np.ndarray:
    """Normalize a vector. A zero vector is returned unchanged."""
    length = vec_length(v)
    if length != 0:
        return v * (1.0 / length)
    return v


def vec_dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def vec_cross(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return vec3(
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def safe_divide(numerator: float, denominator: float) -> float:
    """IEEE division: x/0 gives +-inf and 0/0 gives NaN instead of raising."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.true_divide(numerator, denominator))


def safe_power(base: float, exponent: float) -> float:
    """Real power; a negative base with a fractional exponent gives NaN."""
    with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
        return float(np.power(np.float64(base), exponent))


def scale_in_direction(
    vector: np.ndarray, direction: np.ndarray, scale: float
) -> np.ndarray:
    """
    Scale the component of `vector` along `direction` by `scale`.

    With scale=0 this projects the vector onto the plane orthogonal to
    `direction` (assumed unit length).
    """
    current = vec_dot(vector, direction)
    return vector + direction * (current * scale - current)


def vec_axis_angle(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate `v` about a unit `axis` by `angle` radians (Rodrigues).

        v cos(t) + (axis x v) sin(t) + axis (axis . v)(1 - cos(t))
    """
    cos_t = math.cos(angle)
    sin_t = math.sin(angle)
    return (
        v * cos_t
        + vec_cross(axis, v) * sin_t
        + axis * (vec_dot(axis, v) * (1 - cos_t))
    )


def mirror_branch(
    v: np.ndarray, normal: np.ndarray, branch_factor: float
) -> np.ndarray:
    """
    Reflect a branch direction across the parent axis.

    The component of `v` orthogonal to `normal` is subtracted, scaled by
    `branch_factor` and by its own projection onto `v`. A factor of 0
    returns `v` unchanged; larger factors swing the sibling further across
    the parent axis.
    """
    orthogonal = vec_cross(normal, vec_cross(v, normal))
    s = branch_factor * vec_dot(orthogonal, v)
    return v - orthogonal * s
