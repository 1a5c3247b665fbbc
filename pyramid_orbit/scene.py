import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .config import Color, SceneConfig
from .vecmath import Vec3


# ============================================================
#  Mesh
# ============================================================

@dataclass(frozen=True)
class Face:
    """
    Planar polygon face, indices into Mesh.vertices.

    Winding matters: the camera-space normal is built from the first three
    indices and decides back-face culling.
    """
    indices: Tuple[int, ...]
    color: Color


@dataclass(frozen=True)
class Mesh:
    vertices: Tuple[Vec3, ...]
    faces: Tuple[Face, ...]

    def __post_init__(self):
        n = len(self.vertices)
        for face in self.faces:
            if len(face.indices) < 3:
                raise ValueError(f"face needs at least 3 vertices: {face.indices}")
            for i in face.indices:
                if not 0 <= i < n:
                    raise ValueError(f"face index {i} out of range for {n} vertices")


def build_pyramid(half: float = 0.5, apex_height: float = 1.0) -> Mesh:
    """
    Square pyramid standing on y=0: four base corners plus apex.

    Faces:
      0: base quad      (blue)
      1..4: side tris   (red, yellow, green, purple)
    """
    vertices = (
        Vec3(-half, 0.0, -half),
        Vec3(half, 0.0, -half),
        Vec3(half, 0.0, half),
        Vec3(-half, 0.0, half),
        Vec3(0.0, apex_height, 0.0),
    )
    faces = (
        Face((0, 1, 2, 3), (52, 152, 219)),
        Face((0, 1, 4), (231, 76, 60)),
        Face((1, 2, 4), (241, 196, 15)),
        Face((2, 3, 4), (46, 204, 113)),
        Face((3, 0, 4), (155, 89, 182)),
    )
    return Mesh(vertices, faces)


# ============================================================
#  Line sets (grid + ring)
# ============================================================

def grid_segments(size: float, step: float) -> np.ndarray:
    """
    Floor grid on y=0 covering [-size, size] in x and z.

    Returns float64 array of shape (N, 2, 3): first the lines of constant x
    (running along z), then the lines of constant z (running along x).
    """
    count = int(math.floor(2.0 * size / step + 1e-9)) + 1
    coords = -size + step * np.arange(count, dtype=np.float64)

    along_z = np.zeros((count, 2, 3), dtype=np.float64)
    along_z[:, :, 0] = coords[:, None]
    along_z[:, 0, 2] = -size
    along_z[:, 1, 2] = size

    along_x = np.zeros((count, 2, 3), dtype=np.float64)
    along_x[:, :, 2] = coords[:, None]
    along_x[:, 0, 0] = -size
    along_x[:, 1, 0] = size

    return np.concatenate([along_z, along_x])


def ring_segments(center: Vec3, radius: float, segments: int) -> np.ndarray:
    """
    Closed circle in the horizontal plane through center, as a polyline of
    `segments` chords. Shape (segments, 2, 3); the last chord ends where the
    first one starts.
    """
    theta = 2.0 * math.pi * np.arange(segments + 1, dtype=np.float64) / segments
    pts = np.empty((segments + 1, 3), dtype=np.float64)
    pts[:, 0] = center.x + np.cos(theta) * radius
    pts[:, 1] = center.y
    pts[:, 2] = center.z + np.sin(theta) * radius
    pts[-1] = pts[0]
    return np.stack([pts[:-1], pts[1:]], axis=1)


@dataclass(frozen=True, eq=False)
class Scene:
    """Static world: floor grid, orbit ring and the pyramid."""
    grid: np.ndarray
    ring: np.ndarray
    pyramid: Mesh

    @classmethod
    def from_config(cls, config: SceneConfig):
        grid = grid_segments(config.grid_size, config.grid_step)
        ring = ring_segments(Vec3(0.0, 0.0, 0.0), config.orbit_radius, config.ring_segments)
        grid.setflags(write=False)
        ring.setflags(write=False)
        return cls(grid, ring, build_pyramid())
