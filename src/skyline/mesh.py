"""
Triangle-soup mesh container shared by every generator.

A Mesh is two parallel numpy arrays: one unit normal per triangle and the
triangle's three vertices in counter-clockwise order seen from outside.
Arrays are made read-only on construction; every operation returns a new
Mesh.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, NamedTuple, Optional, Sequence

import numpy as np
import trimesh


class Triangle(NamedTuple):
    """One facet: outward normal followed by its three vertices."""
    normal: np.ndarray
    v0: np.ndarray
    v1: np.ndarray
    v2: np.ndarray


@dataclass(frozen=True, eq=False)
class Mesh:
    """Immutable triangle soup."""
    normals: np.ndarray   # (N, 3)
    vertices: np.ndarray  # (N, 3, 3)

    def __post_init__(self):
        normals = np.array(self.normals, dtype=np.float64).reshape(-1, 3)
        vertices = np.array(self.vertices, dtype=np.float64).reshape(-1, 3, 3)
        if len(normals) != len(vertices):
            raise ValueError(
                f"Normal count {len(normals)} does not match triangle count {len(vertices)}"
            )
        normals.setflags(write=False)
        vertices.setflags(write=False)
        object.__setattr__(self, "normals", normals)
        object.__setattr__(self, "vertices", vertices)

    @classmethod
    def empty(cls) -> "Mesh":
        return cls(np.zeros((0, 3)), np.zeros((0, 3, 3)))

    @classmethod
    def concatenate(cls, meshes: Iterable["Mesh"]) -> "Mesh":
        """Join meshes in the given order."""
        parts = [m for m in meshes if len(m)]
        if not parts:
            return cls.empty()
        return cls(
            np.concatenate([m.normals for m in parts]),
            np.concatenate([m.vertices for m in parts]),
        )

    def __len__(self) -> int:
        return int(self.normals.shape[0])

    def __iter__(self) -> Iterator[Triangle]:
        return self.triangles()

    def triangles(self) -> Iterator[Triangle]:
        for normal, tri in zip(self.normals, self.vertices):
            yield Triangle(normal, tri[0], tri[1], tri[2])

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def bounds(self) -> Optional[np.ndarray]:
        """(2, 3) array of [min, max] corners, or None for an empty mesh."""
        if self.is_empty:
            return None
        flat = self.vertices.reshape(-1, 3)
        return np.array([flat.min(axis=0), flat.max(axis=0)])

    @property
    def extents(self) -> np.ndarray:
        bounds = self.bounds
        if bounds is None:
            return np.zeros(3)
        return bounds[1] - bounds[0]

    def translated(self, offset: Sequence[float]) -> "Mesh":
        """Copy of this mesh moved by *offset*; normals are unchanged."""
        delta = np.asarray(offset, dtype=np.float64).reshape(1, 1, 3)
        return Mesh(self.normals, self.vertices + delta)

    def to_trimesh(self) -> trimesh.Trimesh:
        """Unwelded trimesh view (three vertices per face, no processing)."""
        vertices = self.vertices.reshape(-1, 3)
        faces = np.arange(len(vertices)).reshape(-1, 3)
        return trimesh.Trimesh(
            vertices=vertices,
            faces=faces,
            face_normals=self.normals,
            process=False,
        )

    def summary(self) -> Dict[str, object]:
        """Triangle count, bounds and surface area for logging and reports."""
        if self.is_empty:
            return {"triangles": 0, "bounds": None, "extents": [0.0, 0.0, 0.0], "area": 0.0}
        tm = self.to_trimesh()
        return {
            "triangles": len(self),
            "bounds": self.bounds.tolist(),
            "extents": self.extents.tolist(),
            "area": float(tm.area),
        }
