"""
Treegen - seeded procedural tree meshes

Builds the triangle mesh of a tree (trunk, branches and optional twig
quads) from a small set of shape parameters and an integer seed. The same
parameters always give the same vertices and faces in the same order.

Modules:
    config: TreeParams shape parameters and presets
    rng: Deterministic random source
    skeleton: Branch records and arena storage
    growth: Recursive branch splitting
    rings: Cross-section ring vertices
    faces: Triangle stitching with seam alignment
    twigs: Optional twig quads at branch tips
    tree: The generate() pipeline and TreeMesh output
    mesh: Face normals, flat-shaded expansion, OBJ export
    api: Validated dict-in / dict-out entry point
    visualization: Matplotlib previews
"""

from treegen.config import TreeParams
from treegen.faces import best_ring_offset, do_faces, root_segment_offset
from treegen.growth import grow_skeleton, split
from treegen.logging_config import setup_logging
from treegen.mesh import (
    compute_face_normals,
    expand_flat_shaded,
    face_normal,
    mesh_bounds,
    surface_area,
    to_obj,
    write_obj,
)
from treegen.rings import create_forks
from treegen.rng import RandomState
from treegen.skeleton import Branch, BranchArena
from treegen.tree import TreeMesh, generate
from treegen.twigs import create_twigs

__all__ = [
    # Config
    "TreeParams",
    "RandomState",
    "setup_logging",
    # Skeleton
    "Branch",
    "BranchArena",
    "grow_skeleton",
    "split",
    # Mesh passes
    "create_forks",
    "do_faces",
    "create_twigs",
    "best_ring_offset",
    "root_segment_offset",
    # Pipeline
    "TreeMesh",
    "generate",
    # Consumption
    "compute_face_normals",
    "expand_flat_shaded",
    "face_normal",
    "mesh_bounds",
    "surface_area",
    "to_obj",
    "write_obj",
]
