"""
Shared test fixtures for the skyline geometry pipeline tests.
"""
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from skyline.contracts import ActivityCell, LayoutPolicy


def cells(*counts, future_from=None):
    """Column of ActivityCells; indices >= future_from are future days."""
    return [
        ActivityCell(count=c, is_future=future_from is not None and i >= future_from)
        for i, c in enumerate(counts)
    ]


def box_groups(mesh):
    """Split a box-built mesh into (12, 3, 3) vertex groups, one per box."""
    assert len(mesh) % 12 == 0
    return mesh.vertices.reshape(-1, 12, 3, 3)


def assert_outward_unit_normals(mesh):
    """Every normal is unit length, matches the winding and points out of its box."""
    normals = mesh.normals.reshape(-1, 12, 3)
    for group, group_normals in zip(box_groups(mesh), normals):
        flat = group.reshape(-1, 3)
        center = (flat.min(axis=0) + flat.max(axis=0)) / 2.0
        for tri, normal in zip(group, group_normals):
            assert np.linalg.norm(normal) == pytest.approx(1.0, abs=1e-6)
            cross = np.cross(tri[1] - tri[0], tri[2] - tri[0])
            assert np.linalg.norm(cross) > 0
            assert np.allclose(cross / np.linalg.norm(cross), normal, atol=1e-6)
            assert np.dot(normal, tri.mean(axis=0) - center) > 0


@pytest.fixture
def layout():
    """Default layout with round numbers for position checks."""
    return LayoutPolicy(voxel_scale=2.0, max_height=20.0, base_height=3.0, padding=1.0)


@pytest.fixture
def sample_grid():
    """Three weeks: a busy week, a quiet week and a partial future week."""
    return [
        cells(0, 2, 4, 6, 8, 10, 1),
        cells(0, 0, 0, 3, 0, 0, 0),
        cells(5, 1, 7, future_from=1),
    ]


@pytest.fixture
def calendar_payload():
    """Contribution-calendar response with two weeks."""
    return {
        "data": {
            "user": {
                "contributionsCollection": {
                    "contributionCalendar": {
                        "totalContributions": 17,
                        "weeks": [
                            {"contributionDays": [
                                {"contributionCount": 0, "date": "2024-12-22"},
                                {"contributionCount": 4, "date": "2024-12-23"},
                                {"contributionCount": 9, "date": "2024-12-24"},
                                {"contributionCount": 1, "date": "2024-12-25"},
                                {"contributionCount": 0, "date": "2024-12-26"},
                                {"contributionCount": 3, "date": "2024-12-27"},
                                {"contributionCount": 0, "date": "2024-12-28"},
                            ]},
                            {"contributionDays": [
                                {"contributionCount": 0, "date": "2024-12-29"},
                                {"contributionCount": 0, "date": "2024-12-30"},
                                {"contributionCount": 0, "date": "2024-12-31"},
                            ]},
                        ],
                    }
                }
            }
        }
    }


@pytest.fixture
def png_factory(tmp_path):
    """Write an RGBA array (rows, cols, 4) of 0-255 values to a PNG file."""
    def _make(pixels, name="image.png"):
        path = tmp_path / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
        return path
    return _make
