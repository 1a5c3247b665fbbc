import numpy as np

from .config import Color
from .projection import ViewBasis, Viewport, clip_project_segments, to_camera_space_array
from .surface import DrawingSurface
from .vecmath import Vec3


def project_segments(segments: np.ndarray, basis: ViewBasis, camera_pos: Vec3,
                     viewport: Viewport, near: float, scale_factor: float) -> np.ndarray:
    """
    World segments (N, 2, 3) -> integer screen segments (M, 4), M <= N.

    Segments entirely behind the near plane are dropped; segments crossing
    it are shortened to the plane before projection.
    """
    if len(segments) == 0:
        return np.zeros((0, 4), dtype=np.int64)
    cam = np.ascontiguousarray(to_camera_space_array(basis, camera_pos, segments))
    cx, cy = viewport.center()
    out, keep = clip_project_segments(cam, float(near), float(cx), float(cy),
                                      float(viewport.scale(scale_factor)))
    # truncate toward zero, like int() on each coordinate
    return out[keep].astype(np.int64)


def draw_segments(surface: DrawingSurface, segments: np.ndarray, basis: ViewBasis,
                  camera_pos: Vec3, viewport: Viewport, near: float, scale_factor: float,
                  color: Color) -> int:
    """Draw every visible segment as a line; returns the number of lines drawn."""
    lines = project_segments(segments, basis, camera_pos, viewport, near, scale_factor)
    for x1, y1, x2, y2 in lines.tolist():
        surface.draw_line((x1, y1), (x2, y2), color)
    return len(lines)
