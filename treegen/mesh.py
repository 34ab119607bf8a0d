"""
Mesh consumption helpers.

The generator emits shared vertices and index triples without normals.
Renderers shade the tree flat: every triangle gets its own three vertices
and a single normal computed from two of its edges. These helpers do that
expansion in batch with jax.numpy, plus bounds and OBJ export.
"""

from pathlib import Path

import jax.numpy as jnp
import numpy as np
from jax import Array

from treegen.tree import TreeMesh


def face_normal(p1: Array, p2: Array, p3: Array) -> Array:
    """Unit normal of triangle (p1, p2, p3): normalize((p2-p1) x (p3-p1))."""
    n = jnp.cross(jnp.asarray(p2) - jnp.asarray(p1), jnp.asarray(p3) - jnp.asarray(p1))
    norm = jnp.linalg.norm(n)
    return jnp.where(norm > 0, n / jnp.where(norm > 0, norm, 1.0), 0.0)


def compute_face_normals(vertices: np.ndarray, faces: np.ndarray) -> Array:
    """
    Per-face unit normals.

    Args:
        vertices: [n, 3] vertex positions
        faces: [m, 3] vertex indices

    Returns:
        [m, 3] normals; degenerate triangles get the zero vector
    """
    v = jnp.asarray(vertices, dtype=jnp.float32).reshape(-1, 3)
    f = jnp.asarray(faces, dtype=jnp.int32).reshape(-1, 3)
    p1, p2, p3 = v[f[:, 0]], v[f[:, 1]], v[f[:, 2]]
    n = jnp.cross(p2 - p1, p3 - p1)
    norm = jnp.linalg.norm(n, axis=1, keepdims=True)
    safe = jnp.where(norm > 0, norm, 1.0)
    return jnp.where(norm > 0, n / safe, 0.0)


def expand_flat_shaded(
    vertices: np.ndarray, faces: np.ndarray
) -> tuple[Array, Array, Array]:
    """
    Unshare vertices so each triangle can carry its own normal.

    Returns:
        points: [3m, 3] triangle corners in face order
        normals: [3m, 3] the face normal repeated on each corner
        indices: [3m] running index 0..3m-1
    """
    v = jnp.asarray(vertices, dtype=jnp.float32).reshape(-1, 3)
    f = jnp.asarray(faces, dtype=jnp.int32).reshape(-1, 3)
    points = v[f.reshape(-1)]
    normals = jnp.repeat(compute_face_normals(vertices, faces), 3, axis=0)
    indices = jnp.arange(points.shape[0], dtype=jnp.int32)
    return points, normals, indices


def mesh_bounds(vertices: np.ndarray) -> tuple[Array, Array]:
    """Axis-aligned bounding box (min corner, max corner)."""
    v = jnp.asarray(vertices, dtype=jnp.float32).reshape(-1, 3)
    return jnp.min(v, axis=0), jnp.max(v, axis=0)


def surface_area(vertices: np.ndarray, faces: np.ndarray) -> float:
    """Total triangle area."""
    v = jnp.asarray(vertices, dtype=jnp.float32).reshape(-1, 3)
    f = jnp.asarray(faces, dtype=jnp.int32).reshape(-1, 3)
    p1, p2, p3 = v[f[:, 0]], v[f[:, 1]], v[f[:, 2]]
    return float(0.5 * jnp.sum(jnp.linalg.norm(jnp.cross(p2 - p1, p3 - p1), axis=1)))


def to_obj(mesh: TreeMesh) -> str:
    """
    Wavefront OBJ text for a mesh (1-based indices).

    Twig geometry, when present, is written as a second object whose
    indices continue after the trunk vertices.
    """
    lines = ["o tree"]
    lines += [f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.vertices]
    lines += [f"f {a + 1} {b + 1} {c + 1}" for a, b, c in mesh.faces]
    if len(mesh.twig_faces):
        base = mesh.num_vertices + 1
        lines.append("o twigs")
        lines += [f"v {x:.6f} {y:.6f} {z:.6f}" for x, y, z in mesh.twig_vertices]
        lines += [
            f"f {a + base} {b + base} {c + base}" for a, b, c in mesh.twig_faces
        ]
    return "\n".join(lines) + "\n"


def write_obj(mesh: TreeMesh, filepath: str | Path) -> None:
    """Save a mesh as a Wavefront OBJ file."""
    Path(filepath).write_text(to_obj(mesh), encoding="utf-8")
    print(f"Saved to {filepath}")
