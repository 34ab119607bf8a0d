"""
Triangle stitching between rings.

Second depth-first pass over the skeleton. Each consecutive pair of rings
is joined with two triangles per segment; before joining, the rotational
offset between the rings is chosen so that matching vertices point the
same way, which keeps the tube from twisting at branch unions.

    root:        root_ring  <-> root.ring0         (2 * segments faces)
    fork:        ring1 <-> child0.ring0,
                 ring2 <-> child1.ring0            (4 * segments faces)
    leaf fork:   ring1 -> child0.end,
                 ring2 -> child1.end               (2 * segments faces)
"""

import logging
import math

import numpy as np

from treegen.config import TreeParams
from treegen.skeleton import ROOT, BranchArena
from treegen.vectors import (
    scale_in_direction,
    vec3,
    vec_cross,
    vec_dot,
    vec_normalize,
)

logger = logging.getLogger(__name__)

Face = tuple[int, int, int]

LEFT = vec3(-1.0, 0.0, 0.0)


def root_segment_offset(arena: BranchArena, segments: int) -> int:
    """
    Rotation between the root ring and the first fork ring.

    The root ring starts at -X; the fork ring starts along the fork
    tangent. The angle between the two, measured around the trunk, is
    rounded to a whole number of segments.
    """
    root = arena[ROOT]
    child0 = arena[root.child0]
    child1 = arena[root.child1]

    tangent = vec_normalize(vec_cross(child0.head - root.head, child1.head - root.head))
    normal = vec_normalize(root.head)
    cos_angle = vec_dot(tangent, LEFT)
    if not math.isfinite(cos_angle):
        return 0

    angle = math.acos(max(-1.0, min(1.0, cos_angle)))
    if vec_dot(vec_cross(LEFT, tangent), normal) > 0:
        angle = 2 * math.pi - angle
    return int(math.floor(0.5 + angle / math.pi / 2 * segments))


def best_ring_offset(
    vertices: list[np.ndarray],
    ring: list[int],
    center: np.ndarray,
    reference: np.ndarray,
    segments: int,
) -> tuple[int, float]:
    """
    Find the rotation of `ring` that best lines up with `reference`.

    Every ring vertex direction (from `center`) is scored by its dot
    product with the reference direction; the highest score wins and the
    first candidate wins ties.

    Returns:
        (offset, score) where offset = segments - best_index, or (-1, 0.0)
        for an empty ring
    """
    offset = -1
    best = 0.0
    for i in range(segments):
        d = vec_normalize(vertices[ring[i]] - center)
        score = vec_dot(d, reference)
        if offset == -1 or score > best:
            best = score
            offset = segments - i
    return offset, best


def seam_reference(
    vertices: list[np.ndarray],
    ring_start: int,
    head: np.ndarray,
    child_head: np.ndarray,
) -> np.ndarray:
    """Direction of a ring's first vertex, flattened against the child's axis."""
    v = vec_normalize(vertices[ring_start] - head)
    return scale_in_direction(v, vec_normalize(child_head - head), 0)


def stitch_root(arena: BranchArena, segments: int, faces: list[Face]) -> None:
    root = arena[ROOT]
    offset = root_segment_offset(arena, segments)
    for i in range(segments):
        v1 = root.ring0[i]
        v2 = root.root_ring[(i + offset + 1) % segments]
        v3 = root.root_ring[(i + offset) % segments]
        v4 = root.ring0[(i + 1) % segments]
        faces.append((v1, v4, v3))
        faces.append((v4, v2, v3))


def _stitch_fork(
    arena: BranchArena,
    handle: int,
    params: TreeParams,
    vertices: list[np.ndarray],
    faces: list[Face],
) -> None:
    branch = arena[handle]
    if branch.is_leaf:
        return
    segments = params.segments

    if branch.is_root:
        stitch_root(arena, segments, faces)

    child0 = arena[branch.child0]
    child1 = arena[branch.child1]

    if child0.ring0 is None:
        # Children are tips: close each side with a cone
        for i in range(segments):
            faces.append((child0.end, branch.ring1[(i + 1) % segments], branch.ring1[i]))
            faces.append((child1.end, branch.ring2[(i + 1) % segments], branch.ring2[i]))
        return

    v1 = seam_reference(vertices, branch.ring1[0], branch.head, child0.head)
    v2 = seam_reference(vertices, branch.ring2[0], branch.head, child1.head)
    offset0, _ = best_ring_offset(vertices, child0.ring0, child0.head, v1, segments)
    offset1, _ = best_ring_offset(vertices, child1.ring0, child1.head, v2, segments)

    for i in range(segments):
        a = child0.ring0[i]
        b = branch.ring1[(i + offset0 + 1) % segments]
        c = branch.ring1[(i + offset0) % segments]
        d = child0.ring0[(i + 1) % segments]
        faces.append((a, d, c))
        faces.append((d, b, c))

        a = child1.ring0[i]
        b = branch.ring2[(i + offset1 + 1) % segments]
        c = branch.ring2[(i + offset1) % segments]
        d = child1.ring0[(i + 1) % segments]
        faces.append((a, b, c))
        faces.append((a, d, b))


def do_faces(
    arena: BranchArena,
    params: TreeParams,
    vertices: list[np.ndarray],
    faces: list[Face],
) -> None:
    """
    Emit every triangle of the trunk and branch tubes.

    Forks are stitched in depth-first order, child0 subtree before child1.

    Args:
        arena: Skeleton with rings already allocated by `create_forks`
        params: Shape parameters (segments)
        vertices: Vertex buffer, read only
        faces: Face buffer, appended to in place
    """
    first = len(faces)
    for handle in arena.depth_first(ROOT):
        _stitch_fork(arena, handle, params, vertices, faces)
    logger.debug("Face pass appended %d triangles", len(faces) - first)
