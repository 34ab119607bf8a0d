"""
Matplotlib preview of generated tree meshes.

Draws the trunk/branch triangles (and optional twig quads) on a 3D axes
with flat per-face shading from a fixed light direction. This is a quick
look at the geometry, not a renderer.
"""

from __future__ import annotations
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgb
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

from treegen.config import TreeParams
from treegen.mesh import compute_face_normals
from treegen.tree import TreeMesh, generate


# =============================================================================
# STYLE CONFIGURATION
# =============================================================================

@dataclass
class MeshStyle:
    """Style configuration for mesh previews."""
    bark_color: str = '#8c5537'
    twig_color: str = '#3ca05a'
    edge_color: str = '#1e1914'
    edge_width: float = 0.1
    background: str = '#f5f0e6'
    light_dir: tuple = (0.4, 0.8, 0.45)
    ambient: float = 0.35
    elev: float = 10.0
    azim: float = -60.0


def shade_faces(normals: np.ndarray, color: str, style: MeshStyle) -> np.ndarray:
    """Lambert-shaded RGB per face."""
    light = np.asarray(style.light_dir, dtype=float)
    light = light / np.linalg.norm(light)
    # Faces are not consistently wound, so shade both sides alike
    intensity = np.abs(np.asarray(normals) @ light)
    intensity = style.ambient + (1 - style.ambient) * intensity
    return np.clip(np.outer(intensity, to_rgb(color)), 0.0, 1.0)


def _add_triangles(ax, vertices: np.ndarray, faces: np.ndarray, color: str,
                   style: MeshStyle) -> None:
    if len(faces) == 0:
        return
    triangles = vertices[faces]
    normals = np.asarray(compute_face_normals(vertices, faces))
    collection = Poly3DCollection(
        triangles,
        facecolors=shade_faces(normals, color, style),
        edgecolors=style.edge_color,
        linewidths=style.edge_width,
    )
    ax.add_collection3d(collection)


def _set_equal_limits(ax, vertices: np.ndarray) -> None:
    """Cube limits around the mesh so the tree is not distorted."""
    low = vertices.min(axis=0)
    high = vertices.max(axis=0)
    center = (low + high) / 2
    half = max(float(np.max(high - low)) / 2, 1e-3)
    ax.set_xlim(center[0] - half, center[0] + half)
    ax.set_ylim(center[1] - half, center[1] + half)
    ax.set_zlim(center[2] - half, center[2] + half)


def _y_up(vertices: np.ndarray) -> np.ndarray:
    """Swap y and z: the tree grows along y, matplotlib's up axis is z."""
    return vertices[:, [0, 2, 1]] if len(vertices) else vertices.reshape(0, 3)


def render_mesh(
    mesh: TreeMesh,
    style: MeshStyle = None,
    show_twigs: bool = True,
    figsize: tuple = (8, 8),
) -> tuple[plt.Figure, plt.Axes]:
    """
    Render a tree mesh.

    Args:
        mesh: Generated mesh
        style: Visual style configuration
        show_twigs: Draw twig quads when the mesh has them
        figsize: Figure size in inches

    Returns:
        (figure, axes) tuple
    """
    if style is None:
        style = MeshStyle()

    fig = plt.figure(figsize=figsize)
    ax = fig.add_subplot(111, projection='3d')
    fig.patch.set_facecolor(style.background)
    ax.set_facecolor(style.background)
    ax.view_init(elev=style.elev, azim=style.azim)
    ax.axis('off')

    vertices = _y_up(mesh.vertices)
    _add_triangles(ax, vertices, mesh.faces, style.bark_color, style)

    all_vertices = vertices
    if show_twigs and len(mesh.twig_faces):
        twig_vertices = _y_up(mesh.twig_vertices)
        _add_triangles(ax, twig_vertices, mesh.twig_faces, style.twig_color, style)
        all_vertices = np.vstack([vertices, twig_vertices])

    if len(all_vertices):
        _set_equal_limits(ax, all_vertices)

    return fig, ax


def render_tree(
    params: TreeParams = None,
    style: MeshStyle = None,
    twigs: bool = False,
    figsize: tuple = (8, 8),
) -> tuple[plt.Figure, plt.Axes]:
    """Generate a tree and render it."""
    mesh = generate(params, twigs=twigs)
    return render_mesh(mesh, style, show_twigs=twigs, figsize=figsize)


def save_mesh_render(
    mesh: TreeMesh,
    filepath: str,
    style: MeshStyle = None,
    dpi: int = 150,
    show_twigs: bool = True,
    figsize: tuple = (8, 8),
):
    """Render a mesh and save it to file."""
    fig, ax = render_mesh(mesh, style, show_twigs, figsize)
    fig.savefig(filepath, dpi=dpi, bbox_inches='tight', pad_inches=0.1)
    plt.close(fig)
    print(f"Saved to {filepath}")


def save_tree(
    filepath: str,
    params: TreeParams = None,
    style: MeshStyle = None,
    twigs: bool = False,
    dpi: int = 150,
    figsize: tuple = (8, 8),
):
    """Generate, render and save a tree to file."""
    mesh = generate(params, twigs=twigs)
    save_mesh_render(mesh, filepath, style, dpi, twigs, figsize)
