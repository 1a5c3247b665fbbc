from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .config import Color
from .projection import ViewBasis, Viewport, project, to_camera_space
from .scene import Face, Mesh
from .surface import DrawingSurface
from .vecmath import Vec3

# Normal given to faces whose first three vertices are collinear; its z >= 0
# so such a face is always culled.
DEGENERATE_NORMAL = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class FaceSample:
    """
    Per-frame view of one face in camera space.

    depth   - mean camera-space z of the face's vertices
    normal  - unit normal from (v1-v0) x (v2-v0), camera space
    visible - every vertex lies beyond the near distance
    """
    face: Face
    depth: float
    normal: Vec3
    points: Tuple[Vec3, ...]
    visible: bool

    @property
    def front_facing(self) -> bool:
        return self.normal.z < 0.0


def face_normal(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    n = (b - a).cross(c - a)
    if n.norm() == 0.0:
        return DEGENERATE_NORMAL
    return n.normalize()


def sample_faces(mesh: Mesh, basis: ViewBasis, camera_pos: Vec3, near: float) -> List[FaceSample]:
    """Transform the mesh once and build a FaceSample per face, in mesh order."""
    view = [to_camera_space(basis, camera_pos, v) for v in mesh.vertices]
    visible = [v.z > near for v in view]

    samples = []
    for face in mesh.faces:
        pts = tuple(view[i] for i in face.indices)
        depth = sum(p.z for p in pts) / len(pts)
        normal = face_normal(pts[0], pts[1], pts[2])
        samples.append(FaceSample(face, depth, normal, pts,
                                  all(visible[i] for i in face.indices)))
    return samples


def sort_back_to_front(samples: Sequence[FaceSample]) -> List[FaceSample]:
    """
    Painter's order: farthest first. sorted() is stable, so equal depths
    keep mesh order.
    """
    return sorted(samples, key=lambda s: s.depth, reverse=True)


def visible_faces(mesh: Mesh, basis: ViewBasis, camera_pos: Vec3, near: float) -> List[FaceSample]:
    """Front-facing faces with every vertex in front of the near plane, back to front."""
    samples = sample_faces(mesh, basis, camera_pos, near)
    return sort_back_to_front([s for s in samples if s.front_facing and s.visible])


def _offscreen(points, viewport: Viewport) -> bool:
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return (max(xs) < 0 or min(xs) > viewport.width - 1 or
            max(ys) < 0 or min(ys) > viewport.height - 1)


def draw_pyramid(surface: DrawingSurface, mesh: Mesh, basis: ViewBasis, camera_pos: Vec3,
                 viewport: Viewport, near: float, scale_factor: float,
                 outline_color: Color) -> List[FaceSample]:
    """
    Draw the mesh with the painter's algorithm: fill, then outline, for each
    surviving face from farthest to nearest.

    Only correct for a convex mesh without interpenetrating faces, which the
    pyramid is. Returns the faces actually drawn, in draw order.
    """
    center = viewport.center()
    scale = viewport.scale(scale_factor)

    drawn = []
    for sample in visible_faces(mesh, basis, camera_pos, near):
        screen = []
        for p in sample.points:
            sx, sy = project(p, center, scale)
            screen.append((int(sx), int(sy)))

        # trivial reject if the face's bbox is fully off-screen
        if _offscreen(screen, viewport):
            continue

        surface.fill_polygon(screen, sample.face.color)
        surface.draw_polygon_outline(screen, outline_color)
        drawn.append(sample)
    return drawn
