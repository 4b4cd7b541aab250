"""Mesh buffers and the geometric operations that transform them."""
from .buffer import MeshBuffer, MeshValidationError
from .random import RandomSource, fresh_seed
from .generators import add_triangle, add_tri_square, add_triangle_grid, add_tri_square_grid
from .subdivision import subdivide, fractal_terrain, edge_key
from .displace import displace_random, displace_smooth
from .smoothing import smooth
from .normals import calculate_normals
from .wireframe import wireframe_indices

__all__ = [
    'MeshBuffer',
    'MeshValidationError',
    'RandomSource',
    'fresh_seed',
    'add_triangle',
    'add_tri_square',
    'add_triangle_grid',
    'add_tri_square_grid',
    'subdivide',
    'fractal_terrain',
    'edge_key',
    'displace_random',
    'displace_smooth',
    'smooth',
    'calculate_normals',
    'wireframe_indices',
]
