"""
OBJ exporter implementation for TCon.

Writes positions, normals and faces as three commented blocks. Normals share
the vertex numbering, so every face corner is written as ``i//i`` with
1-based indices, which is what external mesh viewers expect.
"""

import os
import logging
from typing import Optional, TextIO

import numpy as np

from tcon.exceptions import ExportError
from tcon.mesh import MeshBuffer

# Set up logging
logger = logging.getLogger(__name__)


def format_float(value: np.float32) -> str:
    """Shortest text that reads back as the same float32 ("1", "-0.5", "nan")."""
    return np.format_float_positional(np.float32(value), unique=True, trim='-')


def default_filename(seed: int) -> str:
    """Exports are named after the seed that produced the mesh."""
    return f"{seed}.obj"


def ensure_directory_exists(filepath: str) -> None:
    """
    Create the parent directory of a file if needed.

    Raises:
        ExportError: If the directory cannot be created
    """
    directory = os.path.dirname(os.path.abspath(filepath))
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create directory {directory}: {e}") from e


def dump_obj(mesh: MeshBuffer, f: TextIO) -> None:
    """Write mesh data in OBJ layout to an open text stream."""
    f.write("# vertices\n")
    for p in mesh.positions:
        f.write(f"v {format_float(p[0])} {format_float(p[1])} {format_float(p[2])}\n")

    f.write("\n# normals\n")
    for n in mesh.normals:
        f.write(f"vn {format_float(n[0])} {format_float(n[1])} {format_float(n[2])}\n")

    f.write("\n# faces\n")
    for face in mesh.triangles.astype(np.int64) + 1:  # OBJ indices start at 1
        i1, i2, i3 = face
        f.write(f"f {i1}//{i1} {i2}//{i2} {i3}//{i3}\n")


def write_obj(mesh: MeshBuffer, filename: str) -> str:
    """
    Write mesh data to an OBJ file.

    Args:
        mesh: Finalized buffer (normals already accumulated)
        filename: Output filename

    Returns:
        Path of the written file

    Raises:
        ExportError: If the file cannot be written
    """
    filename = str(filename)
    ensure_directory_exists(filename)
    try:
        with open(filename, 'w') as f:
            dump_obj(mesh, f)
    except OSError as e:
        raise ExportError(f"Cannot write OBJ file {filename}: {e}") from e

    logger.info(f"Exported OBJ file to {filename}: {mesh.vertex_count} vertices, {mesh.triangle_count} faces")
    return filename


def export_obj(generated, output_dir: str = ".", filename: Optional[str] = None) -> str:
    """
    Export a generated mesh, naming the file after its seed unless told otherwise.

    Args:
        generated: GeneratedMesh from a pipeline build
        output_dir: Directory for the default file name
        filename: Explicit output path, overrides output_dir

    Returns:
        Path of the written file
    """
    if filename is None:
        filename = os.path.join(output_dir, default_filename(generated.seed))
    return write_obj(generated.mesh, filename)
