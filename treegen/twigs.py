"""
Twig quads at branch tips.

Each leaf of the skeleton gets a double-sided quad (front and back faces
with their own vertices) hanging back along the final branch segment.
The quads live in their own vertex/face buffers, independent of the
trunk mesh. This pass is optional and not part of the default pipeline.
"""

import logging

import numpy as np

from treegen.config import TreeParams
from treegen.faces import Face
from treegen.skeleton import ROOT, BranchArena
from treegen.vectors import vec_cross, vec_normalize

logger = logging.getLogger(__name__)


def create_twig(
    arena: BranchArena,
    handle: int,
    params: TreeParams,
    twig_vertices: list[np.ndarray],
    twig_faces: list[Face],
) -> None:
    """Append the 8 vertices and 4 triangles of one tip's twig."""
    branch = arena[handle]
    parent = arena.get_parent(handle)
    if parent is None:
        return
    sibling0 = arena[parent.child0]
    sibling1 = arena[parent.child1]

    tangent = vec_normalize(
        vec_cross(sibling0.head - parent.head, sibling1.head - parent.head)
    )
    binormal = vec_normalize(branch.head - parent.head)

    width = tangent * params.twig_scale
    top = binormal * (params.twig_scale * 2 - branch.length)
    bottom = binormal * -branch.length

    corners = [
        branch.head + width + top,
        branch.head - width + top,
        branch.head - width + bottom,
        branch.head + width + bottom,
    ]

    # Front side
    v1 = len(twig_vertices)
    v2, v3, v4 = v1 + 1, v1 + 2, v1 + 3
    twig_vertices.extend(c.copy() for c in corners)
    # Back side, same corners
    v8 = len(twig_vertices)
    v7, v6, v5 = v8 + 1, v8 + 2, v8 + 3
    twig_vertices.extend(c.copy() for c in corners)

    twig_faces.append((v1, v2, v3))
    twig_faces.append((v4, v1, v3))
    twig_faces.append((v6, v7, v8))
    twig_faces.append((v6, v8, v5))


def create_twigs(
    arena: BranchArena,
    params: TreeParams,
    twig_vertices: list[np.ndarray],
    twig_faces: list[Face],
) -> None:
    """
    Emit a twig quad at every leaf, in depth-first order.

    Args:
        arena: Finished skeleton
        params: Shape parameters (twig_scale)
        twig_vertices: Twig vertex buffer, appended to in place
        twig_faces: Twig face buffer, appended to in place
    """
    for handle in arena.depth_first(ROOT):
        if arena[handle].is_leaf:
            create_twig(arena, handle, params, twig_vertices, twig_faces)
    logger.debug("Twig pass appended %d triangles", len(twig_faces))
