"""
Branch growth.

Starting from a single root branch, every split creates exactly two
children. While trunk-extension steps remain, child0 continues the trunk
along a kinked, climbing path and keeps the current level; child1 (and
every child once the steps run out) consumes one level. Splitting stops
at level 0, whose children become the leaves.

Shape variation comes from one random draw per split, keyed by the
split's position in the tree:

    key = (levels - level) * 10 + l1 * 5 + l2 + seed

so a node's geometry does not depend on traversal order.
"""

import logging
import math

import numpy as np

from treegen.config import TreeParams
from treegen.rng import RandomState
from treegen.skeleton import BranchArena
from treegen.vectors import (
    mirror_branch,
    safe_power,
    vec3,
    vec_cross,
    vec_normalize,
)

logger = logging.getLogger(__name__)


def child_length(length: float, params: TreeParams) -> float:
    """Length of a child branch: length^power * factor."""
    return safe_power(length, params.length_falloff_power) * params.length_falloff_factor


def directional_bias(level: int, params: TreeParams) -> np.ndarray:
    """
    Depth-dependent pull added to both child directions.

    grow fades out with depth (strongest at the trunk), while drop and
    sweep grow linearly with the number of levels already consumed.
    """
    r_level = params.levels - level
    if params.levels != 0:
        grow = level * level / (params.levels * params.levels) * params.grow_amount
    else:
        grow = 0.0
    drop = r_level * params.drop_amount
    sweep = r_level * params.sweep_amount
    return vec3(sweep, drop + grow, 0.0)


def _split_branch(
    arena: BranchArena,
    handle: int,
    level: int,
    steps: int,
    params: TreeParams,
    rng: RandomState,
    l1: int,
    l2: int,
) -> list[tuple[int, int, int, int, int]]:
    """
    Split one branch into two children.

    Returns:
        Pending splits (handle, level, steps, l1, l2) for the children,
        child0 first; empty when the children are leaves
    """
    branch = arena[handle]
    r_level = params.levels - level

    if branch.parent is not None:
        origin = arena[branch.parent].head
    else:
        origin = np.zeros(3)
        branch.trunk = True

    head = branch.head
    direction = vec_normalize(head - origin)

    # Local frame (not orthonormal)
    a = vec3(direction[2], direction[0], direction[1])
    normal = vec_cross(direction, a)
    tangent = vec_cross(direction, normal)

    r = rng.random(r_level * 10.0 + l1 * 5.0 + l2 + params.seed)

    adj = normal * r + tangent * (1 - r)
    if r > 0.5:
        adj = adj * -1

    clump = (params.clump_max - params.clump_min) * r + params.clump_min
    newdir = vec_normalize(adj * (1 - clump) + direction * clump)
    newdir2 = mirror_branch(newdir, direction, params.branch_factor)
    if r > 0.5:
        newdir, newdir2 = newdir2, newdir

    if steps > 0:
        # Helical trunk: one full turn per tree_steps, scaled by twist_rate
        angle = steps / params.tree_steps * 2 * math.pi * params.twist_rate
        newdir2 = vec_normalize(vec3(math.sin(angle), r, math.cos(angle)))

    bias = directional_bias(level, params)
    newdir = vec_normalize(newdir + bias)
    newdir2 = vec_normalize(newdir2 + bias)

    c0 = arena.add(head + newdir * branch.length, parent=handle)
    c1 = arena.add(head + newdir2 * branch.length, parent=handle)
    branch.child0, branch.child1 = c0, c1
    child0, child1 = arena[c0], arena[c1]
    child0.length = child_length(branch.length, params)
    child1.length = child_length(branch.length, params)

    if level <= 0:
        return []

    if steps > 0:
        kink = (r - 0.5) * 2 * params.trunk_kink
        child0.head = head + vec3(kink, params.climb_rate, kink)
        child0.trunk = True
        child0.length = branch.length * params.taper_rate
        pending0 = (c0, level, steps - 1, l1 + 1, l2)
    else:
        pending0 = (c0, level - 1, 0, l1 + 1, l2)
    return [pending0, (c1, level - 1, 0, l1, l2 + 1)]


def split(
    arena: BranchArena,
    handle: int,
    level: int,
    steps: int,
    params: TreeParams,
    rng: RandomState,
    l1: int = 1,
    l2: int = 1,
) -> None:
    """
    Split a branch and every branch grown below it.

    Branches are appended in the order a depth-first recursion would
    create them: each split appends its two children, then the whole
    child0 subtree is grown before child1. Pending splits live on an
    explicit stack, not the Python call stack.

    Args:
        arena: Skeleton storage, appended to in depth-first order
        handle: Branch to split
        level: Remaining branching levels (0 = children are leaves)
        steps: Remaining trunk-extension steps
        params: Shape parameters
        rng: Random source for this run
        l1, l2: Position counters along child0 / child1 links
    """
    stack = [(handle, level, steps, l1, l2)]
    while stack:
        current, level, steps, l1, l2 = stack.pop()
        pending = _split_branch(arena, current, level, steps, params, rng, l1, l2)
        # child0 is popped first
        stack.extend(reversed(pending))


def grow_skeleton(params: TreeParams, rng: RandomState | None = None) -> BranchArena:
    """
    Build the full branch skeleton for a parameter set.

    The root sits at (0, trunk_length, 0); its direction is taken from the
    origin, so the first segment points straight up.
    """
    if rng is None:
        rng = params.random_state()

    arena = BranchArena()
    root = arena.add(vec3(0.0, params.trunk_length, 0.0))
    arena[root].length = params.initial_branch_length
    split(arena, root, params.levels, params.tree_steps, params, rng)

    logger.debug(
        "Grew skeleton: %d branches, %d leaves (levels=%d, tree_steps=%d)",
        len(arena),
        len(arena.leaves()),
        params.levels,
        params.tree_steps,
    )
    return arena
