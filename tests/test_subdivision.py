#!/usr/bin/env python3
"""
Tests for subdivision and fractal terrain.
"""

import numpy as np
import pytest

from tcon.mesh import (
    RandomSource,
    subdivide,
    fractal_terrain,
    wireframe_indices,
    edge_key,
)
from tcon.mesh.subdivision import split_triangles


def half_sum(mesh, a, b):
    return mesh.positions[a] * np.float32(0.5) + mesh.positions[b] * np.float32(0.5)


class TestSubdivide:
    """Plain 1-to-4 subdivision."""

    def test_single_triangle(self, triangle):
        result = subdivide(triangle, 1)

        assert result.triangle_count == 4
        assert result.vertex_count == 6
        np.testing.assert_array_equal(result.positions[:3], triangle.positions)

        # New vertices in edge order ab, bc, ca
        np.testing.assert_array_equal(result.positions[3], half_sum(triangle, 0, 1))
        np.testing.assert_array_equal(result.positions[4], half_sum(triangle, 1, 2))
        np.testing.assert_array_equal(result.positions[5], half_sum(triangle, 2, 0))

    def test_child_triangle_layout(self, triangle):
        result = subdivide(triangle, 1)
        np.testing.assert_array_equal(
            result.indices,
            [0, 3, 5,
             3, 1, 4,
             5, 3, 4,
             5, 4, 2],
        )

    def test_shared_edge_gets_one_midpoint(self, square):
        result = subdivide(square, 1)

        assert result.vertex_count == 4 + 5
        assert result.triangle_count == 8
        # Disk topology: V - E + F == 1
        edges = len(wireframe_indices(result.indices)) // 2
        assert result.vertex_count - edges + result.triangle_count == 1

    def test_no_coincident_vertices(self, grid):
        result = subdivide(grid, 2)
        unique = np.unique(result.positions[:, :3], axis=0)
        assert len(unique) == result.vertex_count

    @pytest.mark.parametrize("iterations, vertices", [(0, 3), (1, 6), (2, 15), (3, 45)])
    def test_iteration_counts(self, triangle, iterations, vertices):
        result = subdivide(triangle, iterations)

        assert result.triangle_count == 4 ** iterations
        assert result.vertex_count == vertices
        result.validate()

    def test_input_untouched(self, square):
        before = square.copy()
        result = subdivide(square, 2)

        assert square == before
        assert result is not square

    def test_new_normals_copied_from_first_endpoint(self, triangle):
        triangle.normals[:, :3] = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
        result = subdivide(triangle, 1)

        np.testing.assert_array_equal(result.normals[3], triangle.normals[0])
        np.testing.assert_array_equal(result.normals[4], triangle.normals[1])
        np.testing.assert_array_equal(result.normals[5], triangle.normals[2])

    def test_split_triangles_endpoints(self):
        indices = np.array([0, 1, 2, 2, 1, 3], dtype=np.uint32)
        new_indices, endpoints = split_triangles(indices, 4)

        # Edge 1-2 is met as (1, 2) in the first triangle and reused by the second
        np.testing.assert_array_equal(endpoints, [[0, 1], [1, 2], [2, 0], [1, 3], [3, 2]])
        assert new_indices[12:15].tolist() == [2, 5, 8]

    def test_edge_key(self):
        assert edge_key(7, 2) == (2, 7)
        assert edge_key(2, 7) == (2, 7)


class TestFractalTerrain:
    """Subdivision with vertical midpoint displacement."""

    def test_zero_displacement_matches_subdivide(self, grid):
        fractal = fractal_terrain(grid, 3, 0.0, 2.0, RandomSource(11))
        plain = subdivide(grid, 3)

        assert fractal == plain

    def test_one_draw_per_new_vertex(self, square):
        random = RandomSource(5)
        result = fractal_terrain(square, 2, 1.0, 2.0, random)

        created = result.vertex_count - square.vertex_count
        reference = RandomSource(5)
        reference.uniforms(created)
        assert random.next_u32() == reference.next_u32()

    def test_only_height_changes(self, square):
        fractal = fractal_terrain(square, 2, 3.0, 2.0, RandomSource(1))
        plain = subdivide(square, 2)

        np.testing.assert_array_equal(fractal.indices, plain.indices)
        np.testing.assert_array_equal(fractal.positions[:4], plain.positions[:4])
        np.testing.assert_array_equal(fractal.positions[:, [0, 2]], plain.positions[:, [0, 2]])
        assert np.any(fractal.positions[:, 1] != 0.0)
        np.testing.assert_array_equal(fractal.positions[:, 3], 1.0)

    def test_first_iteration_displacement(self, triangle):
        random = RandomSource(3)
        draws = RandomSource(3).uniforms(3)

        result = fractal_terrain(triangle, 1, 2.0, 2.0, random)

        expected = half_sum(triangle, [0, 1, 2], [1, 2, 0])[:, 1] + (draws - np.float32(0.5)) * np.float32(2.0)
        np.testing.assert_allclose(result.positions[3:, 1], expected, rtol=1e-6)

    def test_decay_shrinks_later_iterations(self, triangle):
        random = RandomSource(9)
        result = fractal_terrain(triangle, 2, 1.0, 4.0, random)
        first_pass = fractal_terrain(triangle, 1, 1.0, 4.0, RandomSource(9))
        plain = subdivide(first_pass, 1)

        # Second iteration offsets are bounded by start * decay^-1 / 2
        offsets = result.positions[6:, 1] - plain.positions[6:, 1]
        assert np.all(np.abs(offsets) <= 0.125 + 1e-6)

    def test_small_decay_is_accepted(self, triangle):
        result = fractal_terrain(triangle, 3, 1.0, 0.5, RandomSource(2))
        assert result.triangle_count == 64
        assert result.is_finite()

    def test_deterministic(self, grid):
        a = fractal_terrain(grid, 3, 2.0, 2.0, RandomSource(42))
        b = fractal_terrain(grid, 3, 2.0, 2.0, RandomSource(42))
        assert a == b
