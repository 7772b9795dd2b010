"""Tests for the triangle-soup Mesh container."""
import numpy as np
import pytest

from skyline import Triangle
from skyline.mesh import Mesh
from skyline.solids import build_box


class TestTriangles:
    """Per-facet iteration."""

    def test_iteration_matches_arrays(self):
        mesh = build_box(1.0, 2.0, 3.0, 1.0, 2.0, 3.0)
        triangles = list(mesh)
        assert len(triangles) == 12
        for i, tri in enumerate(triangles):
            assert isinstance(tri, Triangle)
            assert np.array_equal(tri.normal, mesh.normals[i])
            assert np.array_equal(tri.v0, mesh.vertices[i][0])
            assert np.array_equal(tri.v1, mesh.vertices[i][1])
            assert np.array_equal(tri.v2, mesh.vertices[i][2])

    def test_winding_agrees_with_normal(self):
        for normal, v0, v1, v2 in build_box(0, 0, 0, 2, 1, 1).triangles():
            cross = np.cross(v1 - v0, v2 - v0)
            assert np.allclose(cross / np.linalg.norm(cross), normal)

    def test_empty_mesh_yields_nothing(self):
        assert list(Mesh.empty()) == []


class TestMeshOperations:

    def test_arrays_read_only(self):
        mesh = build_box(0, 0, 0, 1, 1, 1)
        with pytest.raises(ValueError):
            mesh.vertices[0, 0, 0] = 5.0

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            Mesh(np.zeros((2, 3)), np.zeros((1, 3, 3)))

    def test_concatenate_keeps_order(self):
        a = build_box(0, 0, 0, 1, 1, 1)
        b = build_box(5, 0, 0, 1, 1, 1)
        joined = Mesh.concatenate([a, Mesh.empty(), b])
        assert len(joined) == 24
        assert np.array_equal(joined.vertices[:12], a.vertices)
        assert np.array_equal(joined.vertices[12:], b.vertices)

    def test_translated(self):
        mesh = build_box(0, 0, 0, 1, 2, 3).translated([1.0, -1.0, 0.5])
        assert np.allclose(mesh.bounds, [[1.0, -1.0, 0.5], [2.0, 1.0, 3.5]])
        assert np.allclose(mesh.extents, [1.0, 2.0, 3.0])

    def test_empty_bounds(self):
        empty = Mesh.empty()
        assert empty.is_empty
        assert empty.bounds is None
        assert np.array_equal(empty.extents, np.zeros(3))

    def test_summary(self):
        summary = build_box(0, 0, 0, 1, 2, 3).summary()
        assert summary["triangles"] == 12
        assert summary["area"] == pytest.approx(2 * (2 + 3 + 6))
        assert Mesh.empty().summary()["triangles"] == 0
