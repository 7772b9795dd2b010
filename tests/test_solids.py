"""Tests for the box primitive."""
import numpy as np
import pytest

from conftest import assert_outward_unit_normals
from skyline.errors import ConfigError
from skyline.solids import TRIANGLES_PER_BOX, build_box, build_boxes


class TestBuildBox:
    """Single box geometry."""

    def test_triangle_count(self):
        mesh = build_box(0, 0, 0, 1, 2, 3)
        assert len(mesh) == TRIANGLES_PER_BOX == 12

    def test_bounds(self):
        mesh = build_box(1.0, -2.0, 0.5, 4.0, 3.0, 2.0)
        assert np.allclose(mesh.bounds, [[1.0, -2.0, 0.5], [5.0, 1.0, 2.5]])

    def test_normals_unit_outward_and_match_winding(self):
        assert_outward_unit_normals(build_box(3, 4, 5, 0.5, 1.5, 7.0))

    def test_two_triangles_per_axis_direction(self):
        mesh = build_box(0, 0, 0, 1, 1, 1)
        directions = [tuple(n) for n in mesh.normals.astype(int)]
        for axis in range(3):
            for sign in (-1, 1):
                expected = [0, 0, 0]
                expected[axis] = sign
                assert directions.count(tuple(expected)) == 2

    def test_watertight_with_positive_volume(self):
        tm = build_box(0, 0, 0, 2.0, 3.0, 4.0).to_trimesh()
        tm.merge_vertices()
        assert tm.is_watertight
        assert tm.is_winding_consistent
        assert tm.volume == pytest.approx(24.0)

    def test_no_degenerate_triangles(self):
        mesh = build_box(0, 0, 0, 0.01, 0.02, 0.03)
        v = mesh.vertices
        areas = np.linalg.norm(np.cross(v[:, 1] - v[:, 0], v[:, 2] - v[:, 0]), axis=1)
        assert np.all(areas > 0)

    @pytest.mark.parametrize("dims", [
        (0, 1, 1), (1, 0, 1), (1, 1, 0), (-1, 1, 1), (1, 1, -0.5),
    ])
    def test_degenerate_dimensions_rejected(self, dims):
        with pytest.raises(ConfigError):
            build_box(0, 0, 0, *dims)


class TestBuildBoxes:
    """Vectorised box construction."""

    def test_matches_single_boxes_in_order(self):
        origins = [[0, 0, 0], [5, 5, 1]]
        sizes = [[1, 1, 1], [2, 3, 4]]
        mesh = build_boxes(origins, sizes)
        assert len(mesh) == 24
        first = build_box(0, 0, 0, 1, 1, 1)
        second = build_box(5, 5, 1, 2, 3, 4)
        assert np.allclose(mesh.vertices[:12], first.vertices)
        assert np.allclose(mesh.vertices[12:], second.vertices)
        assert np.allclose(mesh.normals[12:], second.normals)

    def test_empty_input(self):
        assert len(build_boxes(np.zeros((0, 3)), np.zeros((0, 3)))) == 0

    def test_shape_mismatch_rejected(self):
        with pytest.raises(ConfigError):
            build_boxes([[0, 0, 0]], [[1, 1, 1], [1, 1, 1]])

    def test_any_zero_size_rejected(self):
        with pytest.raises(ConfigError):
            build_boxes([[0, 0, 0], [1, 1, 1]], [[1, 1, 1], [1, 0, 1]])
