#!/usr/bin/env python3
"""
Tests for wireframe line extraction.
"""

import numpy as np
from unittest import mock

from tcon.mesh import wireframe_indices, subdivide
from tcon.operations import AddTriSquare
from tcon.pipeline import generate


def test_triangle_edges():
    assert wireframe_indices(np.array([0, 1, 2], dtype=np.uint32)).tolist() == [0, 1, 1, 2, 0, 2]


def test_shared_edge_listed_once(square):
    lines = wireframe_indices(square.indices)
    assert lines.tolist() == [1, 2, 2, 3, 1, 3, 3, 0, 1, 0]
    assert lines.dtype == np.uint32


def test_empty_list():
    assert len(wireframe_indices(np.zeros(0, dtype=np.uint32))) == 0


def test_every_edge_unique(grid):
    mesh = subdivide(grid, 1)
    pairs = wireframe_indices(mesh.indices).reshape(-1, 2)
    keys = {tuple(sorted(p)) for p in pairs.tolist()}

    assert len(keys) == len(pairs)
    # V - E + F == 1 for a disk
    assert mesh.vertex_count - len(pairs) + mesh.triangle_count == 1


def test_generated_mesh_caches_wireframe():
    generated = generate([AddTriSquare(2.0)], 1)

    with mock.patch("tcon.pipeline.wireframe_indices", wraps=wireframe_indices) as spy:
        first = generated.wireframe
        second = generated.wireframe

    assert spy.call_count == 1
    assert first is second
