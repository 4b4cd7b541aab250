"""
TCon (Terrain Constructor) Package.

Procedural terrain meshes built by replaying an ordered pipeline of
geometric operations: primitives, subdivision, displacement, smoothing and
fractal refinement.
"""

__version__ = "0.2.0"

# Import the main exception classes for easy access
from tcon.exceptions import TConException, OperationError, PipelineError, ConfigError, ExportError

from tcon.mesh import MeshBuffer, RandomSource, calculate_normals, wireframe_indices
from tcon.operations import (
    Operation,
    AddTriangle,
    AddTriSquare,
    AddTriangleGrid,
    AddTriSquareGrid,
    Subdivide,
    DisplaceRandom,
    DisplaceSmooth,
    Smooth,
    FractalTerrain,
    DEFAULTS,
    create_operation,
)
from tcon.pipeline import Pipeline, GeneratedMesh, generate, run_operations
from tcon.render import DisplayMode
from tcon.config import load_pipeline, save_pipeline
from tcon.export import write_obj, export_obj
