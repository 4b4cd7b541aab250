"""
Pipeline executor.

A pipeline is an ordered list of stages, each an operation plus the time it
took on the last build. Building replays the stages from an empty buffer
with one shared random stream, then runs the normal pass once over the
result.
"""

import logging
import time
from dataclasses import dataclass, field
from functools import cached_property, singledispatch
from typing import List, Optional, Sequence, Tuple

import numpy as np

from tcon.exceptions import PipelineError
from tcon.mesh import (
    MeshBuffer,
    RandomSource,
    fresh_seed,
    add_triangle,
    add_tri_square,
    add_triangle_grid,
    add_tri_square_grid,
    subdivide,
    fractal_terrain,
    displace_random,
    displace_smooth,
    smooth,
    calculate_normals,
    wireframe_indices,
)
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
    default_operation,
)
from tcon.render import DisplayMode

logger = logging.getLogger(__name__)

RANDOM_SEED = -1


@singledispatch
def execute(operation: Operation, mesh: MeshBuffer, random: RandomSource) -> MeshBuffer:
    """
    Run one operation on the current buffer.

    Kinds without an implementation pass the buffer through unchanged.
    """
    logger.warning(f"{operation.caption} is not implemented, passing mesh through unchanged")
    return mesh.copy()


@execute.register
def _(operation: AddTriangle, mesh, random):
    return add_triangle(operation.size)


@execute.register
def _(operation: AddTriSquare, mesh, random):
    return add_tri_square(operation.size)


@execute.register
def _(operation: AddTriangleGrid, mesh, random):
    return add_triangle_grid(operation.size, operation.subdivisions)


@execute.register
def _(operation: AddTriSquareGrid, mesh, random):
    return add_tri_square_grid(operation.size, operation.subdivisions)


@execute.register
def _(operation: Subdivide, mesh, random):
    return subdivide(mesh, operation.iterations)


@execute.register
def _(operation: DisplaceRandom, mesh, random):
    return displace_random(mesh, operation.amount, operation.axes, random)


@execute.register
def _(operation: DisplaceSmooth, mesh, random):
    return displace_smooth(mesh, operation.amount, operation.scale, operation.octaves, operation.axes, random)


@execute.register
def _(operation: Smooth, mesh, random):
    return smooth(mesh, operation.amount, operation.iterations)


@execute.register
def _(operation: FractalTerrain, mesh, random):
    return fractal_terrain(
        mesh,
        operation.iterations,
        operation.displacement_start,
        operation.displacement_decay,
        random,
    )


def resolve_seed(seed: int) -> int:
    """
    Turn a seed policy into a concrete seed.

    Raises:
        PipelineError: If the seed is below -1
    """
    if seed == RANDOM_SEED:
        return fresh_seed()
    if seed < 0:
        raise PipelineError(f"Seed must be -1 (random) or non-negative, got {seed}")
    return int(seed)


def run_operations(operations: Sequence[Operation], seed: int) -> Tuple[MeshBuffer, List[float]]:
    """
    Execute operations in order from an empty buffer.

    Args:
        operations: Operations to run
        seed: Concrete non-negative seed for the shared random stream

    Returns:
        Tuple of (final buffer without normals, elapsed seconds per operation)
    """
    random = RandomSource(seed)
    mesh = MeshBuffer.empty()
    times = []

    for operation in operations:
        start = time.perf_counter()
        mesh = execute(operation, mesh, random)
        elapsed = time.perf_counter() - start
        times.append(elapsed)
        logger.info(f"{operation.caption}: {mesh.vertex_count} vertices, {mesh.triangle_count} triangles in {elapsed:.2f}s")

    return mesh, times


@dataclass
class GeneratedMesh:
    """Finalized output of one build."""
    mesh: MeshBuffer
    seed: int
    stage_times: List[float] = field(default_factory=list)
    normals_time: float = 0.0

    @cached_property
    def wireframe(self) -> np.ndarray:
        """Line list, computed at most once per generated mesh."""
        return wireframe_indices(self.mesh.indices)

    def render_indices(self, mode: DisplayMode) -> np.ndarray:
        """Index list the renderer should draw for a display mode."""
        if DisplayMode(mode) is DisplayMode.WIREFRAME:
            return self.wireframe
        return self.mesh.indices


def generate(operations: Sequence[Operation], seed: int) -> GeneratedMesh:
    """Run operations and the normal pass with a concrete seed."""
    mesh, times = run_operations(operations, seed)

    start = time.perf_counter()
    mesh = calculate_normals(mesh)
    normals_time = time.perf_counter() - start
    logger.info(f"Normals calculated in {normals_time:.2f}s")

    return GeneratedMesh(mesh=mesh, seed=seed, stage_times=times, normals_time=normals_time)


@dataclass
class Stage:
    """One operation in a pipeline and its last recorded run time."""
    operation: Operation
    elapsed: float = 0.0


class Pipeline:
    """
    Editable, replayable list of stages.

    seed is the policy for the next build: -1 draws a fresh seed, any other
    value reproduces a previous build. last_seed is the seed the last build
    actually used.
    """

    def __init__(self, operations: Optional[Sequence[Operation]] = None, seed: int = RANDOM_SEED):
        self.stages: List[Stage] = [Stage(op) for op in (operations or [])]
        self.seed = seed
        self.last_seed = RANDOM_SEED
        self.normals_time = 0.0
        self.result: Optional[GeneratedMesh] = None

    @property
    def operations(self) -> List[Operation]:
        return [stage.operation for stage in self.stages]

    def __len__(self) -> int:
        return len(self.stages)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.stages):
            raise PipelineError(f"Stage index {index} out of range for {len(self.stages)} stages")

    def add(self, operation: Operation) -> None:
        self.stages.append(Stage(operation))

    def add_default(self, kind: str) -> Operation:
        """Append the default instance of an operation kind."""
        operation = default_operation(kind)
        self.add(operation)
        return operation

    def replace(self, index: int, operation: Operation) -> None:
        """Swap in edited parameters for a stage."""
        self._check_index(index)
        self.stages[index] = Stage(operation, self.stages[index].elapsed)

    def delete(self, index: int) -> Operation:
        self._check_index(index)
        return self.stages.pop(index).operation

    def move_up(self, index: int) -> None:
        """Swap a stage with the one before it; the first stage stays put."""
        self._check_index(index)
        if index == 0:
            return
        self.stages[index - 1], self.stages[index] = self.stages[index], self.stages[index - 1]

    def move_down(self, index: int) -> None:
        """Swap a stage with the one after it; the last stage stays put."""
        self._check_index(index)
        if index + 1 == len(self.stages):
            return
        self.stages[index + 1], self.stages[index] = self.stages[index], self.stages[index + 1]

    def retrieve_seed(self) -> int:
        """Pin the seed of the last build so the next build reproduces it."""
        self.seed = self.last_seed
        return self.seed

    def reset_seed(self) -> None:
        self.seed = RANDOM_SEED

    def build(self, upto: Optional[int] = None) -> GeneratedMesh:
        """
        Replay the stages and compute normals.

        Args:
            upto: Index of the last stage to run; all stages when None.
                Recorded times of later stages are reset to zero.

        Returns:
            The generated mesh, also kept as self.result

        Raises:
            PipelineError: If upto is out of range or the seed is invalid
        """
        if upto is None:
            count = len(self.stages)
        else:
            self._check_index(upto)
            count = upto + 1

        seed = resolve_seed(self.seed)
        self.last_seed = seed
        logger.info(f"Building {count} of {len(self.stages)} stages with seed {seed}")

        result = generate(self.operations[:count], seed)

        for stage, elapsed in zip(self.stages, result.stage_times):
            stage.elapsed = elapsed
        for stage in self.stages[count:]:
            stage.elapsed = 0.0

        self.normals_time = result.normals_time
        self.result = result
        return result

    def __repr__(self) -> str:
        return f"Pipeline(stages={len(self.stages)}, seed={self.seed})"
