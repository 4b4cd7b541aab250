"""Vertex/index buffer shared by every mesh operation."""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple
import logging

from tcon.exceptions import TConException

logger = logging.getLogger(__name__)

POSITION_DTYPE = np.float32
INDEX_DTYPE = np.uint32


class MeshValidationError(TConException):
    """Raised when mesh buffer data fails validation."""
    pass


def homogeneous(xyz: np.ndarray, w: float = 1.0) -> np.ndarray:
    """Extend an Nx3 array to Nx4 with a constant fourth component."""
    xyz = np.asarray(xyz, dtype=POSITION_DTYPE).reshape(-1, 3)
    column = np.full((len(xyz), 1), w, dtype=POSITION_DTYPE)
    return np.hstack([xyz, column])


def midpoints(positions: np.ndarray, first: np.ndarray, second: np.ndarray) -> np.ndarray:
    """
    Interpolate halfway between pairs of homogeneous positions.

    Every component is interpolated, so the result keeps w == 1.0 whenever
    both endpoints do.

    Args:
        positions: Nx4 position array
        first: Indices of the first endpoints
        second: Indices of the second endpoints

    Returns:
        Kx4 array of midpoint positions
    """
    half = POSITION_DTYPE(0.5)
    return positions[first] * half + positions[second] * half


@dataclass
class MeshBuffer:
    """
    Mesh representation passed between pipeline stages.

    positions and normals are Nx4 float32 arrays. Positions are homogeneous
    with w == 1.0. The fourth normal component is an accumulation weight:
    1.0 on freshly created vertices, the incidence count while normals are
    being accumulated. indices is a flat uint32 triangle list.
    """
    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    def __post_init__(self):
        self.positions = np.asarray(self.positions, dtype=POSITION_DTYPE).reshape(-1, 4)
        self.normals = np.asarray(self.normals, dtype=POSITION_DTYPE).reshape(-1, 4)
        self.indices = np.asarray(self.indices, dtype=INDEX_DTYPE).reshape(-1)

        if self.normals.shape != self.positions.shape:
            raise MeshValidationError(
                f"Normal array shape {self.normals.shape} doesn't match positions {self.positions.shape}"
            )

    @classmethod
    def empty(cls) -> 'MeshBuffer':
        """Create the buffer every pipeline starts from."""
        return cls(
            positions=np.zeros((0, 4), dtype=POSITION_DTYPE),
            normals=np.zeros((0, 4), dtype=POSITION_DTYPE),
            indices=np.zeros(0, dtype=INDEX_DTYPE),
        )

    @classmethod
    def from_vertices(cls, vertices: Iterable[Sequence[float]], indices: Iterable[int]) -> 'MeshBuffer':
        """
        Create a buffer from xyz positions and a flat index list.

        Normals start at zero with unit weight.

        Args:
            vertices: Sequence of (x, y, z) positions
            indices: Flat triangle index list

        Returns:
            New MeshBuffer
        """
        positions = homogeneous(np.asarray(list(vertices), dtype=POSITION_DTYPE))
        normals = homogeneous(np.zeros((len(positions), 3), dtype=POSITION_DTYPE))
        return cls(positions=positions, normals=normals, indices=np.asarray(list(indices), dtype=INDEX_DTYPE))

    @property
    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.positions)

    @property
    def triangle_count(self) -> int:
        """Get number of triangles."""
        return len(self.indices) // 3

    @property
    def triangles(self) -> np.ndarray:
        """Index buffer viewed as an Mx3 array."""
        return self.indices.reshape(-1, 3)

    def copy(self) -> 'MeshBuffer':
        """Create a copy that shares no memory with this buffer."""
        return MeshBuffer(
            positions=self.positions.copy(),
            normals=self.normals.copy(),
            indices=self.indices.copy(),
        )

    def is_finite(self) -> bool:
        """Check whether all positions and normals are finite numbers."""
        return bool(np.all(np.isfinite(self.positions)) and np.all(np.isfinite(self.normals)))

    def validate(self) -> None:
        """
        Check structural integrity of the buffer.

        Operations never call this; it is meant for callers that receive
        buffers from outside the pipeline.

        Raises:
            MeshValidationError: If the index list is malformed
        """
        if len(self.indices) % 3 != 0:
            raise MeshValidationError(f"Index count {len(self.indices)} is not a multiple of 3")
        if len(self.indices) and int(self.indices.max()) >= self.vertex_count:
            raise MeshValidationError(
                f"Index {int(self.indices.max())} out of range for {self.vertex_count} vertices"
            )

    def get_bounding_box(self) -> Tuple[np.ndarray, np.ndarray]:
        """Get mesh bounding box over xyz."""
        if self.vertex_count == 0:
            zero = np.zeros(3, dtype=POSITION_DTYPE)
            return zero, zero
        xyz = self.positions[:, :3]
        return np.min(xyz, axis=0), np.max(xyz, axis=0)

    def get_statistics(self) -> Dict[str, Any]:
        """Get mesh statistics."""
        min_bounds, max_bounds = self.get_bounding_box()
        size = max_bounds - min_bounds

        return {
            "vertex_count": self.vertex_count,
            "triangle_count": self.triangle_count,
            "bounding_box": {
                "min": min_bounds.tolist(),
                "max": max_bounds.tolist(),
                "size": size.tolist()
            },
            "finite": self.is_finite(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MeshBuffer):
            return NotImplemented
        return (
            np.array_equal(self.positions, other.positions, equal_nan=True)
            and np.array_equal(self.normals, other.normals, equal_nan=True)
            and np.array_equal(self.indices, other.indices)
        )

    def __repr__(self) -> str:
        return f"MeshBuffer(vertices={self.vertex_count}, triangles={self.triangle_count})"
