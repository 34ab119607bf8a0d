"""
Tree generation pipeline.

generate() runs the three passes in strict sequence on fresh state:

    grow_skeleton   params -> branch skeleton
    create_forks    skeleton -> ring / tip vertices
    do_faces        skeleton + vertices -> triangles

and optionally create_twigs for foliage quads. The skeleton is dropped
afterwards; only the buffers are returned.
"""

import logging
from dataclasses import dataclass

import numpy as np

from treegen.config import TreeParams
from treegen.faces import Face, do_faces
from treegen.growth import grow_skeleton
from treegen.rings import create_forks
from treegen.twigs import create_twigs

logger = logging.getLogger(__name__)


def _vertex_array(vertices: list[np.ndarray]) -> np.ndarray:
    if not vertices:
        return np.zeros((0, 3), dtype=float)
    return np.array(vertices, dtype=float)


def _face_array(faces: list[Face]) -> np.ndarray:
    if not faces:
        return np.zeros((0, 3), dtype=np.int64)
    return np.array(faces, dtype=np.int64)


@dataclass
class TreeMesh:
    """
    Output of one generation run.

    vertices/twig_vertices are float arrays of shape [n, 3] in insertion
    order; faces/twig_faces are int arrays of shape [m, 3] indexing into
    the matching vertex array.
    """

    vertices: np.ndarray
    faces: np.ndarray
    twig_vertices: np.ndarray
    twig_faces: np.ndarray

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_faces(self) -> int:
        return len(self.faces)

    def is_valid(self) -> bool:
        """Check that all vertices are finite and every index is in range."""
        for verts, faces in (
            (self.vertices, self.faces),
            (self.twig_vertices, self.twig_faces),
        ):
            if not np.all(np.isfinite(verts)):
                return False
            if len(faces) and (faces.min() < 0 or faces.max() >= len(verts)):
                return False
        return True

    def get_summary(self) -> dict[str, float]:
        """Scalar summary for quick inspection."""
        summary: dict[str, float] = {
            "Vertices": self.num_vertices,
            "Faces": self.num_faces,
            "TwigVertices": len(self.twig_vertices),
            "TwigFaces": len(self.twig_faces),
            "Valid": self.is_valid(),
        }
        if self.num_vertices and np.all(np.isfinite(self.vertices)):
            low = self.vertices.min(axis=0)
            high = self.vertices.max(axis=0)
            summary["Height"] = float(high[1] - low[1])
            summary["Width"] = float(max(high[0] - low[0], high[2] - low[2]))
        return summary

    def print_summary(self) -> None:
        """Print a formatted summary table to stdout."""
        summary = self.get_summary()
        print("\n" + "=" * 40)
        print("TREE MESH SUMMARY")
        print("=" * 40)
        for key, value in summary.items():
            if isinstance(value, float):
                print(f"  {key:<14} {value:>10.3f}")
            else:
                print(f"  {key:<14} {value!s:>10}")
        print("=" * 40)


def generate(params: TreeParams | None = None, twigs: bool = False) -> TreeMesh:
    """
    Generate the mesh of a tree.

    Identical parameters give identical buffers: same vertices, same
    faces, same order.

    Args:
        params: Shape parameters (defaults to the reference preset)
        twigs: Also emit twig quads at the branch tips

    Returns:
        TreeMesh with trunk/branch buffers and (possibly empty) twig buffers
    """
    if params is None:
        params = TreeParams.default()

    rng = params.random_state()
    skeleton = grow_skeleton(params, rng)

    vertices: list[np.ndarray] = []
    faces: list[Face] = []
    create_forks(skeleton, params, vertices)
    do_faces(skeleton, params, vertices, faces)

    twig_vertices: list[np.ndarray] = []
    twig_faces: list[Face] = []
    if twigs:
        create_twigs(skeleton, params, twig_vertices, twig_faces)

    mesh = TreeMesh(
        vertices=_vertex_array(vertices),
        faces=_face_array(faces),
        twig_vertices=_vertex_array(twig_vertices),
        twig_faces=_face_array(twig_faces),
    )
    logger.info(
        "Generated tree (seed=%d): %d vertices, %d faces",
        params.seed,
        mesh.num_vertices,
        mesh.num_faces,
    )
    return mesh
