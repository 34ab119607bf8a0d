# Dict-in / dict-out entry point for tree generation
# Validated with pydantic so parameters can come from JSON files or services

from typing import Any

from pydantic import BaseModel, Field

from treegen.config import TreeParams
from treegen.tree import TreeMesh, generate

_DEFAULTS = TreeParams.default()

#
# Schemata
#


class TreeParamsSchema(BaseModel):
    """Shape parameters and seed (defaults are the reference preset)."""

    seed: int = Field(default=_DEFAULTS.seed, description="Random seed")
    segments: int = Field(
        default=_DEFAULTS.segments, description="Vertices per cross-section ring"
    )
    levels: int = Field(
        default=_DEFAULTS.levels, description="Branching recursion depth"
    )
    v_multiplier: float = Field(
        default=_DEFAULTS.v_multiplier, description="Texture V scale (unused)"
    )
    twig_scale: float = Field(
        default=_DEFAULTS.twig_scale, description="Twig quad half-width"
    )
    initial_branch_length: float = Field(
        default=_DEFAULTS.initial_branch_length, description="Root branch length"
    )
    length_falloff_factor: float = Field(
        default=_DEFAULTS.length_falloff_factor, description="Child length factor"
    )
    length_falloff_power: float = Field(
        default=_DEFAULTS.length_falloff_power, description="Child length exponent"
    )
    clump_max: float = Field(
        default=_DEFAULTS.clump_max, description="Max pull towards parent direction"
    )
    clump_min: float = Field(
        default=_DEFAULTS.clump_min, description="Min pull towards parent direction"
    )
    branch_factor: float = Field(
        default=_DEFAULTS.branch_factor, description="Mirror-branch asymmetry"
    )
    drop_amount: float = Field(
        default=_DEFAULTS.drop_amount, description="Vertical drop per level"
    )
    grow_amount: float = Field(
        default=_DEFAULTS.grow_amount, description="Upward growth near the trunk"
    )
    sweep_amount: float = Field(
        default=_DEFAULTS.sweep_amount, description="Sideways sweep per level"
    )
    max_radius: float = Field(default=_DEFAULTS.max_radius, description="Trunk radius")
    climb_rate: float = Field(
        default=_DEFAULTS.climb_rate, description="Trunk rise per extension step"
    )
    trunk_kink: float = Field(
        default=_DEFAULTS.trunk_kink, description="Trunk jitter per extension step"
    )
    tree_steps: int = Field(
        default=_DEFAULTS.tree_steps, description="Trunk-extension steps"
    )
    taper_rate: float = Field(
        default=_DEFAULTS.taper_rate, description="Trunk taper per step"
    )
    radius_falloff_rate: float = Field(
        default=_DEFAULTS.radius_falloff_rate, description="Radius decay per level"
    )
    twist_rate: float = Field(
        default=_DEFAULTS.twist_rate, description="Helical trunk twist"
    )
    trunk_length: float = Field(
        default=_DEFAULTS.trunk_length, description="Height of the first fork"
    )

    def to_params(self) -> TreeParams:
        return TreeParams.from_dict(self.model_dump())

    @classmethod
    def from_params(cls, params: TreeParams) -> "TreeParamsSchema":
        return cls(**params.to_dict())


class InputSchema(BaseModel):
    """Input schema for tree generation."""

    params: TreeParamsSchema = Field(
        default_factory=TreeParamsSchema, description="Tree shape parameters"
    )
    twigs: bool = Field(default=False, description="Also emit twig quads")


class OutputSchema(BaseModel):
    """Output schema for tree generation."""

    vertices: list[tuple[float, float, float]] = Field(description="Vertex positions")
    faces: list[tuple[int, int, int]] = Field(description="Triangle vertex indices")
    twig_vertices: list[tuple[float, float, float]] = Field(
        default_factory=list, description="Twig vertex positions"
    )
    twig_faces: list[tuple[int, int, int]] = Field(
        default_factory=list, description="Twig triangle vertex indices"
    )


#
# Conversions
#


def mesh_to_output(mesh: TreeMesh) -> OutputSchema:
    """Convert a TreeMesh to the output schema."""
    return OutputSchema(
        vertices=[tuple(v) for v in mesh.vertices.tolist()],
        faces=[tuple(f) for f in mesh.faces.tolist()],
        twig_vertices=[tuple(v) for v in mesh.twig_vertices.tolist()],
        twig_faces=[tuple(f) for f in mesh.twig_faces.tolist()],
    )


def load_params(data: dict[str, Any]) -> TreeParams:
    """Validate a parameter mapping (e.g. parsed JSON) into TreeParams."""
    return TreeParamsSchema.model_validate(data).to_params()


#
# Required endpoints
#


def apply(inputs: InputSchema | dict[str, Any]) -> OutputSchema:
    """Generate a tree mesh from validated inputs."""
    if not isinstance(inputs, InputSchema):
        inputs = InputSchema.model_validate(inputs)
    mesh = generate(inputs.params.to_params(), twigs=inputs.twigs)
    return mesh_to_output(mesh)
