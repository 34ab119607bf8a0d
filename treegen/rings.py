"""
Cross-section ring construction.

A depth-first pass over the finished skeleton that appends ring vertices
to the shared vertex buffer and records their indices on each branch:

- the root gets a horizontal base ring (root_ring)
- every fork gets its own cross-section (ring0) plus the two
  cross-sections facing its children (ring1 towards child0, ring2 towards
  child1). ring1 and ring2 share the two "linchpin" vertices on the
  tangent axis with ring0 and a set of seam vertices with each other.
- every leaf gets a single tip vertex (end)

Index bookkeeping relies on append order, so child0 is always processed
before child1.
"""

import logging
import math

import numpy as np

from treegen.config import TreeParams
from treegen.skeleton import ROOT, BranchArena
from treegen.vectors import (
    safe_divide,
    scale_in_direction,
    vec3,
    vec_axis_angle,
    vec_cross,
    vec_dot,
    vec_normalize,
)

logger = logging.getLogger(__name__)

LEFT = vec3(-1.0, 0.0, 0.0)
UP = vec3(0.0, 1.0, 0.0)

# Quarter turn used to find the squash direction of the first half-ring
QUARTER_TURN = 1.57


def segment_angle(segments: int) -> float:
    return 2 * math.pi / segments if segments != 0 else 0.0


def fit_ring(indices: list[int], segments: int) -> list[int]:
    """
    Size a ring to exactly `segments` entries.

    Slots the emission order leaves unfilled (odd segment counts) hold
    index 0; surplus entries (segments < 3) are dropped.
    """
    size = max(segments, 0)
    return (indices + [0] * size)[:size]


def create_root_ring(radius: float, params: TreeParams, vertices: list[np.ndarray]) -> list[int]:
    """Append the base ring of the trunk and return its indices."""
    angle = segment_angle(params.segments)
    ring_radius = safe_divide(radius, params.radius_falloff_rate)
    ring = []
    for i in range(params.segments):
        vec = vec_axis_angle(LEFT, UP, -angle * i)
        ring.append(len(vertices))
        vertices.append(vec * ring_radius)
    return ring


def create_fork_rings(
    arena: BranchArena,
    handle: int,
    radius: float,
    params: TreeParams,
    vertices: list[np.ndarray],
) -> None:
    """Append the vertices of a fork and fill its ring0/ring1/ring2."""
    branch = arena[handle]
    child0 = arena[branch.child0]
    child1 = arena[branch.child1]
    segments = params.segments
    half = segments // 2
    angle = segment_angle(segments)

    parent = arena.get_parent(handle)
    if parent is not None:
        axis = vec_normalize(branch.head - parent.head)
    else:
        axis = vec_normalize(branch.head)

    axis1 = vec_normalize(branch.head - child0.head)
    axis2 = vec_normalize(branch.head - child1.head)
    tangent = vec_normalize(vec_cross(axis1, axis2))
    branch.tangent = tangent

    axis3 = vec_normalize(vec_cross(tangent, vec_normalize(axis1 * -1 + axis2 * -1)))
    offset = vec3(axis2[0], 0.0, axis2[2])
    center = branch.head + offset * (-params.max_radius / 2)

    scale = params.radius_falloff_rate
    if child0.trunk or branch.trunk:
        scale = safe_divide(1.0, params.taper_rate)
    extent = radius * scale

    ring0: list[int] = []
    ring1: list[int] = []
    ring2: list[int] = []

    # First linchpin, shared by ring0 and ring2
    linch0 = len(vertices)
    ring0.append(linch0)
    ring2.append(linch0)
    vertices.append(center + tangent * extent)

    # Half-ring towards child1, squashed onto the plane through the parent axis
    start = len(vertices) - 1
    d1 = vec_axis_angle(tangent, axis2, QUARTER_TURN)
    d2 = vec_normalize(vec_cross(tangent, axis))
    squash = safe_divide(1.0, vec_dot(d1, d2))
    for i in range(1, half):
        vec = vec_axis_angle(tangent, axis2, angle * i)
        ring0.append(start + i)
        ring2.append(start + i)
        vec = scale_in_direction(vec, d2, squash)
        vertices.append(center + vec * extent)

    # Second linchpin, shared by ring0 and ring1
    linch1 = len(vertices)
    ring0.append(linch1)
    ring1.append(linch1)
    vertices.append(center + tangent * -extent)

    # Half-ring towards child0
    for i in range(half + 1, segments):
        vec = vec_axis_angle(tangent, axis1, angle * i)
        ring0.append(len(vertices))
        ring1.append(len(vertices))
        vertices.append(center + vec * extent)

    # Seam between the children; ring2 walks it in reverse
    ring1.append(linch0)
    ring2.append(linch1)
    start = len(vertices) - 1
    for i in range(1, half):
        vec = vec_axis_angle(tangent, axis3, angle * i)
        ring1.append(start + i)
        ring2.append(start + (half - i))
        vertices.append(center + vec * extent)

    branch.ring0 = fit_ring(ring0, segments)
    branch.ring1 = fit_ring(ring1, segments)
    branch.ring2 = fit_ring(ring2, segments)


def _create_branch(
    arena: BranchArena,
    handle: int,
    radius: float,
    params: TreeParams,
    vertices: list[np.ndarray],
) -> list[tuple[int, float]]:
    """Allocate one branch's vertices; return (child, radius) pairs, child0 first."""
    branch = arena[handle]
    if radius > branch.length:
        radius = branch.length
    branch.radius = radius

    if branch.is_root:
        branch.root_ring = create_root_ring(radius, params, vertices)

    if branch.is_leaf:
        branch.end = len(vertices)
        vertices.append(branch.head.copy())
        return []

    create_fork_rings(arena, handle, radius, params, vertices)

    radius0 = radius * params.radius_falloff_rate
    radius1 = radius * params.radius_falloff_rate
    if arena[branch.child0].trunk:
        radius0 = radius * params.taper_rate
    return [(branch.child0, radius0), (branch.child1, radius1)]


def create_forks(
    arena: BranchArena,
    params: TreeParams,
    vertices: list[np.ndarray],
) -> None:
    """
    Allocate every ring and tip vertex of the skeleton.

    Branches are visited depth-first (child0 subtree before child1) from
    an explicit stack.

    Args:
        arena: Finished skeleton; ring indices are written onto its branches
        params: Shape parameters (segments, radii, taper)
        vertices: Shared vertex buffer, appended to in place
    """
    first = len(vertices)
    stack = [(ROOT, params.max_radius)]
    while stack:
        handle, radius = stack.pop()
        stack.extend(reversed(_create_branch(arena, handle, radius, params, vertices)))
    logger.debug("Ring pass appended %d vertices", len(vertices) - first)
