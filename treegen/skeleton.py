"""
Branch skeleton representation.

The skeleton is a binary tree stored as an arena: a flat list of Branch
records addressed by integer handle. Handle 0 is the root. Each record
holds handles to its two children (both set or both None) and a
non-owning handle to its parent, used only to look up the parent's head
and trunk flag. The whole arena is dropped once the mesh is extracted.

Ring bookkeeping written by the Ring Builder lives on the records:
    root_ring: cross-section at the base of the trunk (root only)
    ring0:     the fork's own cross-section, seen by its parent's stitch
    ring1/2:   the fork's cross-sections facing child0 / child1
    end:       tip vertex index (leaves only)
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np

ROOT = 0


@dataclass
class Branch:
    """One skeleton segment, spanning from its parent's head to its own."""

    head: np.ndarray
    parent: int | None = None
    child0: int | None = None
    child1: int | None = None
    length: float = 1.0
    radius: float = 0.0
    trunk: bool = False
    tangent: np.ndarray = field(default_factory=lambda: np.zeros(3))
    root_ring: list[int] = field(default_factory=list)
    ring0: list[int] | None = None
    ring1: list[int] | None = None
    ring2: list[int] | None = None
    end: int = 0

    @property
    def is_leaf(self) -> bool:
        return self.child0 is None

    @property
    def is_root(self) -> bool:
        return self.parent is None


class BranchArena:
    """Flat storage for the branches of one tree."""

    def __init__(self) -> None:
        self.branches: list[Branch] = []

    def add(self, head: np.ndarray, parent: int | None = None) -> int:
        """Append a branch and return its handle."""
        self.branches.append(Branch(head=np.asarray(head, dtype=float), parent=parent))
        return len(self.branches) - 1

    def __getitem__(self, handle: int) -> Branch:
        return self.branches[handle]

    def __len__(self) -> int:
        return len(self.branches)

    @property
    def root(self) -> Branch:
        return self.branches[ROOT]

    def get_parent(self, handle: int) -> Branch | None:
        parent = self.branches[handle].parent
        return None if parent is None else self.branches[parent]

    def get_children(self, handle: int) -> tuple[int, int] | None:
        """Child handles (child0, child1), or None for a leaf."""
        branch = self.branches[handle]
        if branch.child0 is None:
            return None
        return branch.child0, branch.child1

    def depth_first(self, handle: int = ROOT) -> Iterator[int]:
        """Yield handles in pre-order, child0 subtree before child1."""
        stack = [handle]
        while stack:
            current = stack.pop()
            yield current
            children = self.get_children(current)
            if children is not None:
                stack.append(children[1])
                stack.append(children[0])

    def leaves(self) -> list[int]:
        """Leaf handles in depth-first order."""
        return [h for h in self.depth_first() if self.branches[h].is_leaf]

    def forks(self) -> list[int]:
        """Fork (two-child) handles in depth-first order."""
        return [h for h in self.depth_first() if not self.branches[h].is_leaf]

    def path_to_root(self, handle: int) -> list[int]:
        """Handles from `handle` up to and including the root."""
        path = [handle]
        while self.branches[path[-1]].parent is not None:
            path.append(self.branches[path[-1]].parent)
        return path
