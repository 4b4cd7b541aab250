#!/usr/bin/env python3
"""
Tests for the pipeline executor and editing actions.
"""

import logging
from unittest import mock

import numpy as np
import pytest

from tcon.exceptions import PipelineError
from tcon.mesh import MeshBuffer, RandomSource, calculate_normals, add_tri_square
from tcon.operations import (
    AddTriangle,
    AddTriSquare,
    AddTriSquareGrid,
    DisplaceRandom,
    FractalTerrain,
    MergeCleanup,
    Smooth,
    Subdivide,
    SubdivideSmooth,
)
from tcon.pipeline import (
    RANDOM_SEED,
    GeneratedMesh,
    Pipeline,
    execute,
    generate,
    resolve_seed,
    run_operations,
)
from tcon.render import DisplayMode, needs_index_rebuild


def terrain_pipeline(seed=RANDOM_SEED):
    return Pipeline(
        [AddTriSquareGrid(4.0, 3), FractalTerrain(3, 1.0, 2.0), DisplaceRandom(0.1), Smooth(0.5, 1)],
        seed=seed,
    )


class TestExecution:
    """Replaying operations from an empty buffer."""

    def test_empty_pipeline(self):
        mesh, times = run_operations([], 1)
        assert mesh == MeshBuffer.empty()
        assert times == []

    def test_generators_discard_input(self):
        mesh, _ = run_operations([AddTriangle(5.0), AddTriSquare(2.0)], 1)
        assert mesh == add_tri_square(2.0)

    def test_same_seed_same_mesh(self):
        a = terrain_pipeline(1234).build()
        b = terrain_pipeline(1234).build()
        assert a.mesh == b.mesh

    def test_different_seed_different_mesh(self):
        a = terrain_pipeline(1).build()
        b = terrain_pipeline(2).build()
        assert not np.array_equal(a.mesh.positions, b.mesh.positions)

    def test_single_random_stream(self):
        operations = [AddTriSquare(2.0), DisplaceRandom(1.0), DisplaceRandom(1.0)]
        mesh, _ = run_operations(operations, 9)

        random = RandomSource(9)
        first = random.uniforms(4)
        second = random.uniforms(4)
        expected = add_tri_square(2.0).positions[:, 1] + first + second
        np.testing.assert_allclose(mesh.positions[:, 1], expected, rtol=1e-6)

    def test_one_time_per_operation(self):
        _, times = run_operations([AddTriangle(5.0), Subdivide(2)], 3)
        assert len(times) == 2
        assert all(t >= 0.0 for t in times)

    @pytest.mark.parametrize("legacy", [SubdivideSmooth(), MergeCleanup()])
    def test_legacy_kinds_pass_through(self, legacy, caplog):
        with caplog.at_level(logging.WARNING, logger="tcon.pipeline"):
            mesh, _ = run_operations([AddTriSquare(2.0), legacy], 1)

        assert mesh == add_tri_square(2.0)
        assert "not implemented" in caplog.text

    def test_execute_dispatches_on_kind(self, square):
        result = execute(Subdivide(1), square, RandomSource(0))
        assert result.triangle_count == 8


class TestGenerate:

    def test_single_triangle(self):
        generated = generate([AddTriangle(5.0)], 7)

        assert isinstance(generated, GeneratedMesh)
        assert generated.seed == 7
        assert generated.mesh.vertex_count == 3
        assert generated.mesh.triangle_count == 1
        np.testing.assert_allclose(generated.mesh.normals[0], generated.mesh.normals[1])
        np.testing.assert_allclose(generated.mesh.normals[0], generated.mesh.normals[2])

    def test_normals_computed_once(self):
        with mock.patch("tcon.pipeline.calculate_normals", wraps=calculate_normals) as spy:
            terrain_pipeline(5).build()
        assert spy.call_count == 1

    def test_render_indices(self):
        generated = generate([AddTriSquare(2.0)], 1)

        assert generated.render_indices(DisplayMode.SMOOTH) is generated.mesh.indices
        assert generated.render_indices(DisplayMode.FLAT) is generated.mesh.indices
        assert generated.render_indices(DisplayMode.WIREFRAME).tolist() == [1, 2, 2, 3, 1, 3, 3, 0, 1, 0]


class TestSeeds:

    def test_resolve_fixed_seed(self):
        assert resolve_seed(0) == 0
        assert resolve_seed(42) == 42

    def test_resolve_random_seed(self):
        assert resolve_seed(RANDOM_SEED) >= 0

    def test_resolve_invalid_seed(self):
        with pytest.raises(PipelineError):
            resolve_seed(-2)

    def test_retrieve_seed_reproduces_build(self):
        pipeline = terrain_pipeline()
        first = pipeline.build()

        assert pipeline.retrieve_seed() == first.seed
        assert pipeline.seed == first.seed
        assert pipeline.build().mesh == first.mesh

    def test_reset_seed(self):
        pipeline = terrain_pipeline(12)
        pipeline.reset_seed()
        assert pipeline.seed == RANDOM_SEED


class TestBuild:

    def test_upto_runs_prefix(self):
        pipeline = terrain_pipeline(3)
        partial = pipeline.build(upto=0)

        assert partial.mesh.vertex_count == 16
        assert pipeline.stages[0].elapsed > 0.0
        assert all(stage.elapsed == 0.0 for stage in pipeline.stages[1:])

    def test_full_build_records_times(self):
        pipeline = terrain_pipeline(3)
        pipeline.build()

        assert all(stage.elapsed > 0.0 for stage in pipeline.stages)
        assert pipeline.normals_time > 0.0
        assert pipeline.result is not None

    @pytest.mark.parametrize("upto", [-1, 4, 10])
    def test_upto_out_of_range(self, upto):
        with pytest.raises(PipelineError):
            terrain_pipeline(3).build(upto=upto)

    def test_last_seed(self):
        pipeline = terrain_pipeline(77)
        assert pipeline.last_seed == RANDOM_SEED
        pipeline.build()
        assert pipeline.last_seed == 77


class TestEditing:
    """Stage controls: add, replace, delete and reorder."""

    def test_add_default(self):
        pipeline = Pipeline()
        op = pipeline.add_default("Subdivide")

        assert op == Subdivide(1)
        assert pipeline.operations == [Subdivide(1)]

    def test_delete(self):
        pipeline = terrain_pipeline()
        removed = pipeline.delete(1)

        assert removed == FractalTerrain(3, 1.0, 2.0)
        assert len(pipeline) == 3
        with pytest.raises(PipelineError):
            pipeline.delete(3)

    def test_move_up(self):
        pipeline = Pipeline([AddTriangle(5.0), Subdivide(1), Smooth(0.5, 1)])
        pipeline.move_up(2)
        assert [op.kind for op in pipeline.operations] == ["AddTriangle", "Smooth", "Subdivide"]

        pipeline.move_up(0)
        assert [op.kind for op in pipeline.operations] == ["AddTriangle", "Smooth", "Subdivide"]

    def test_move_down(self):
        pipeline = Pipeline([AddTriangle(5.0), Subdivide(1), Smooth(0.5, 1)])
        pipeline.move_down(0)
        assert [op.kind for op in pipeline.operations] == ["Subdivide", "AddTriangle", "Smooth"]

        pipeline.move_down(2)
        assert [op.kind for op in pipeline.operations] == ["Subdivide", "AddTriangle", "Smooth"]

    def test_move_keeps_times_with_stage(self):
        pipeline = Pipeline([AddTriangle(5.0), Subdivide(1)])
        pipeline.stages[1].elapsed = 0.5
        pipeline.move_up(1)
        assert pipeline.stages[0].elapsed == 0.5

    def test_replace(self):
        pipeline = Pipeline([AddTriangle(5.0)])
        pipeline.replace(0, AddTriangle(8.0))

        assert pipeline.operations == [AddTriangle(8.0)]
        with pytest.raises(PipelineError):
            pipeline.replace(1, AddTriangle(8.0))


@pytest.mark.parametrize("previous, current, expected", [
    (DisplayMode.WIREFRAME, DisplayMode.FLAT, True),
    (DisplayMode.SMOOTH, DisplayMode.WIREFRAME, True),
    (DisplayMode.FLAT, DisplayMode.SMOOTH, False),
    (DisplayMode.WIREFRAME, DisplayMode.WIREFRAME, False),
    (DisplayMode.SMOOTH, DisplayMode.SMOOTH, False),
])
def test_needs_index_rebuild(previous, current, expected):
    assert needs_index_rebuild(previous, current) is expected


def test_display_mode_from_name():
    assert DisplayMode.from_name("Wireframe") is DisplayMode.WIREFRAME
    assert int(DisplayMode.from_name("smooth")) == 2
    with pytest.raises(ValueError):
        DisplayMode.from_name("shaded")
