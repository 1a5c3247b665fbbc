from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numba import njit

from .vecmath import Vec3, WORLD_UP


# Used as `right` when forward is parallel to world-up and the cross product
# vanishes (camera straight above or below the target).
FALLBACK_RIGHT = Vec3(1.0, 0.0, 0.0)


# ============================================================
#  View basis
# ============================================================

@dataclass(frozen=True)
class ViewBasis:
    """
    Orthonormal camera frame, rebuilt every frame.

    Camera space convention:
      - x along right, y along up, z along forward (depth)
      - points in front of the camera have z > 0
    """
    forward: Vec3
    right: Vec3
    up: Vec3

    def matrix(self) -> np.ndarray:
        """3x3 world->camera rotation, rows = (right, up, forward)."""
        return np.array([self.right.as_tuple(),
                         self.up.as_tuple(),
                         self.forward.as_tuple()], dtype=np.float64)


def build_view_basis(camera_pos: Vec3, target: Vec3) -> ViewBasis:
    """
    forward = normalize(target - camera)
    right   = normalize(forward x world_up)
    up      = right x forward   (unit, since right ⟂ forward)

    If camera and target coincide, forward is the zero vector and the frame
    is degenerate (nothing projects in front of the near plane).
    """
    forward = (target - camera_pos).normalize()
    right = forward.cross(WORLD_UP).normalize()
    if right.norm() == 0.0:
        right = FALLBACK_RIGHT
    up = right.cross(forward)
    return ViewBasis(forward, right, up)


# ============================================================
#  Camera space + projection
# ============================================================

def to_camera_space(basis: ViewBasis, camera_pos: Vec3, p: Vec3) -> Vec3:
    """World point -> camera space (x_cam, y_cam, z_cam)."""
    rel = p - camera_pos
    return Vec3(rel.dot(basis.right), rel.dot(basis.up), rel.dot(basis.forward))


def to_camera_space_array(basis: ViewBasis, camera_pos: Vec3, pts: np.ndarray) -> np.ndarray:
    """Vectorized to_camera_space for any array of shape (..., 3)."""
    rel = pts - np.array(camera_pos.as_tuple(), dtype=np.float64)
    return rel @ basis.matrix().T


@dataclass(frozen=True)
class Viewport:
    """Pixel size of the drawing area plus the pinhole mapping derived from it."""
    width: int
    height: int

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def center(self) -> Tuple[int, int]:
        return self.width // 2, self.height // 2

    def scale(self, factor: float) -> float:
        return min(self.width, self.height) * factor


def project(p_cam: Vec3, center: Tuple[float, float], scale: float) -> Tuple[float, float]:
    """
    Pinhole projection of a camera-space point to screen pixels.

    Requires p_cam.z > 0: callers clip against the near plane first.
    Screen y grows downward, so camera-space up maps to smaller y.
    """
    cx, cy = center
    return (cx + (p_cam.x / p_cam.z) * scale,
            cy - (p_cam.y / p_cam.z) * scale)


# ============================================================
#  Near-plane clipping
# ============================================================

@njit(cache=True)
def _clip_segment(x1, y1, z1, x2, y2, z2, near):
    """
    Clip one camera-space segment against z = near.

    Returns (keep, x1, y1, z1, x2, y2, z2). The endpoint behind the plane is
    replaced with the intersection, whose z is set to exactly `near` so a
    second clip leaves the segment untouched.
    """
    if z1 < near and z2 < near:
        return False, x1, y1, z1, x2, y2, z2
    if z1 < near or z2 < near:
        t = (near - z1) / (z2 - z1)
        ix = x1 + t * (x2 - x1)
        iy = y1 + t * (y2 - y1)
        if z1 < near:
            return True, ix, iy, near, x2, y2, z2
        return True, x1, y1, z1, ix, iy, near
    return True, x1, y1, z1, x2, y2, z2


def clip_segment_to_near_plane(p1: Vec3, p2: Vec3, near: float) -> Optional[Tuple[Vec3, Vec3]]:
    """
    Clip a camera-space segment against the near plane.

    Returns None when both endpoints are behind the plane, otherwise the
    (possibly shortened) segment.
    """
    keep, x1, y1, z1, x2, y2, z2 = _clip_segment(
        float(p1.x), float(p1.y), float(p1.z),
        float(p2.x), float(p2.y), float(p2.z),
        float(near))
    if not keep:
        return None
    return Vec3(x1, y1, z1), Vec3(x2, y2, z2)


@njit(cache=True)
def clip_project_segments(cam, near, cx, cy, scale):
    """
    Clip and project a batch of camera-space segments.

    cam:   float64 array (N, 2, 3)
    Returns:
      out  - float64 (N, 4): sx1, sy1, sx2, sy2 (only valid where keep)
      keep - bool (N,): False for segments fully behind the near plane
    """
    n = cam.shape[0]
    out = np.zeros((n, 4), dtype=np.float64)
    keep = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        ok, x1, y1, z1, x2, y2, z2 = _clip_segment(
            cam[i, 0, 0], cam[i, 0, 1], cam[i, 0, 2],
            cam[i, 1, 0], cam[i, 1, 1], cam[i, 1, 2],
            near)
        if not ok:
            continue
        keep[i] = True
        out[i, 0] = cx + (x1 / z1) * scale
        out[i, 1] = cy - (y1 / z1) * scale
        out[i, 2] = cx + (x2 / z2) * scale
        out[i, 3] = cy - (y2 / z2) * scale
    return out, keep
