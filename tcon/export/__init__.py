"""Mesh export for TCon."""
from .obj import dump_obj, write_obj, export_obj, format_float, default_filename

__all__ = [
    'dump_obj',
    'write_obj',
    'export_obj',
    'format_float',
    'default_filename',
]
