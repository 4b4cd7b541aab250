"""
Pytest fixtures shared across test modules.
"""
import numpy as np
import pytest

from tcon.mesh import MeshBuffer, add_triangle, add_tri_square, add_tri_square_grid


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep CLI settings out of the real home directory."""
    monkeypatch.setattr("tcon.cli.core.config.get_config_path", lambda: tmp_path / "tcon_config.json")


@pytest.fixture
def triangle():
    return add_triangle(5.0)


@pytest.fixture
def square():
    """Two triangles sharing the 1-3 edge."""
    return add_tri_square(2.0)


@pytest.fixture
def grid():
    return add_tri_square_grid(4.0, 4)


@pytest.fixture
def tilted_mesh():
    """Two triangles on different planes sharing the edge 1-2."""
    return MeshBuffer.from_vertices(
        [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 0.0, 1.0), (1.0, 1.0, 1.0)],
        [0, 2, 1, 1, 2, 3],
    )
