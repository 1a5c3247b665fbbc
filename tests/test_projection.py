from __future__ import annotations

import math

import numpy as np
import pytest

from pyramid_orbit.projection import (
    FALLBACK_RIGHT,
    Viewport,
    build_view_basis,
    clip_project_segments,
    clip_segment_to_near_plane,
    project,
    to_camera_space,
    to_camera_space_array,
)
from pyramid_orbit.vecmath import Vec3

ORIGIN = Vec3(0.0, 0.0, 0.0)


def _assert_orthonormal(basis) -> None:
    f, r, u = basis.forward, basis.right, basis.up
    assert abs(f.dot(r)) < 1e-9
    assert abs(f.dot(u)) < 1e-9
    assert abs(r.dot(u)) < 1e-9
    for v in (f, r, u):
        assert v.norm() == pytest.approx(1.0, abs=1e-6)


@pytest.mark.parametrize("radius", [0.5, 4.0, 25.0])
@pytest.mark.parametrize("height", [-3.0, -0.5, 0.001, 1.0, 7.0])
def test_basis_orthonormal_on_orbit(radius: float, height: float) -> None:
    for angle in np.linspace(0.0, 2.0 * math.pi, 37):
        cam = Vec3(math.cos(angle) * radius, height, math.sin(angle) * radius)
        _assert_orthonormal(build_view_basis(cam, ORIGIN))


@pytest.mark.parametrize("cam", [Vec3(0.0, 5.0, 0.0), Vec3(0.0, -2.0, 0.0)])
def test_basis_on_vertical_axis_uses_fallback_right(cam: Vec3) -> None:
    basis = build_view_basis(cam, ORIGIN)
    assert basis.right == FALLBACK_RIGHT
    _assert_orthonormal(basis)


def test_basis_camera_at_target_is_degenerate_but_finite() -> None:
    basis = build_view_basis(ORIGIN, ORIGIN)
    assert basis.forward == Vec3(0.0, 0.0, 0.0)
    p = to_camera_space(basis, ORIGIN, Vec3(1.0, 2.0, 3.0))
    # depth 0 is behind any positive near distance, so nothing gets projected
    assert p.z == 0.0
    assert clip_segment_to_near_plane(p, p, 0.2) is None


def test_basis_at_angle_zero() -> None:
    cam = Vec3(4.0, 1.0, 0.0)
    basis = build_view_basis(cam, ORIGIN)
    s = math.sqrt(17.0)
    assert basis.forward.as_tuple() == pytest.approx((-4.0 / s, -1.0 / s, 0.0))
    assert basis.right.as_tuple() == pytest.approx((0.0, 0.0, -1.0))
    assert basis.up.as_tuple() == pytest.approx((-1.0 / s, 4.0 / s, 0.0))

    target_cam = to_camera_space(basis, cam, ORIGIN)
    assert target_cam.as_tuple() == pytest.approx((0.0, 0.0, s))


def test_to_camera_space_array_matches_scalar() -> None:
    cam = Vec3(2.0, 1.5, -3.0)
    basis = build_view_basis(cam, ORIGIN)
    pts = np.array([[1.0, 0.0, 0.0], [0.5, -2.0, 4.0], [-3.0, 1.0, 2.0]])
    out = to_camera_space_array(basis, cam, pts)
    for row, p in zip(out, pts):
        expected = to_camera_space(basis, cam, Vec3(*p))
        assert tuple(row) == pytest.approx(expected.as_tuple())


def test_project_and_invert_round_trip() -> None:
    center = (400, 300)
    scale = 330.0
    for p in [Vec3(1.0, 2.0, 4.0), Vec3(-0.3, 0.7, 0.25), Vec3(12.0, -5.0, 30.0)]:
        sx, sy = project(p, center, scale)
        x = (sx - center[0]) * p.z / scale
        y = (center[1] - sy) * p.z / scale
        assert (x, y) == pytest.approx((p.x, p.y))


def test_project_known_values() -> None:
    assert project(Vec3(1.0, 2.0, 4.0), (100, 50), 10.0) == pytest.approx((102.5, 45.0))


def test_viewport_mapping() -> None:
    vp = Viewport(800, 600)
    assert vp.center() == (400, 300)
    assert vp.scale(0.55) == pytest.approx(330.0)
    assert not vp.empty
    assert Viewport(0, 10).empty
    assert Viewport(10, -1).empty


def test_clip_discards_segment_behind_camera() -> None:
    assert clip_segment_to_near_plane(Vec3(0.0, 0.0, -1.0), Vec3(1.0, 1.0, 0.1), 0.2) is None


def test_clip_passes_segment_in_front_unchanged() -> None:
    p1, p2 = Vec3(1.0, 2.0, 3.0), Vec3(-1.0, 0.5, 0.2)
    assert clip_segment_to_near_plane(p1, p2, 0.2) == (p1, p2)


@pytest.mark.parametrize("flip", [False, True])
def test_clip_replaces_endpoint_behind_plane(flip: bool) -> None:
    behind, front = Vec3(0.0, 0.0, -1.0), Vec3(2.0, 4.0, 1.0)
    p1, p2 = (front, behind) if flip else (behind, front)
    a, b = clip_segment_to_near_plane(p1, p2, 0.2)
    clipped, kept = (b, a) if flip else (a, b)
    assert kept == front
    assert clipped.as_tuple() == pytest.approx((1.2, 2.4, 0.2))
    assert clipped.z == 0.2


def test_clip_is_idempotent() -> None:
    segs = [
        (Vec3(0.0, 0.0, -1.0), Vec3(2.0, 4.0, 1.0)),
        (Vec3(3.0, -1.0, 5.0), Vec3(-2.0, 1.0, -7.0)),
        (Vec3(1.0, 1.0, 1.0), Vec3(2.0, 2.0, 2.0)),
    ]
    for p1, p2 in segs:
        once = clip_segment_to_near_plane(p1, p2, 0.2)
        assert once is not None
        assert clip_segment_to_near_plane(*once, 0.2) == once


def test_batch_kernel_matches_scalar_pipeline() -> None:
    rng = np.random.default_rng(7)
    cam = rng.uniform(-3.0, 3.0, size=(200, 2, 3))
    near, cx, cy, scale = 0.2, 320.0, 240.0, 264.0
    out, keep = clip_project_segments(cam, near, cx, cy, scale)

    for i in range(len(cam)):
        seg = clip_segment_to_near_plane(Vec3(*cam[i, 0]), Vec3(*cam[i, 1]), near)
        assert keep[i] == (seg is not None)
        if seg is None:
            continue
        a = project(seg[0], (cx, cy), scale)
        b = project(seg[1], (cx, cy), scale)
        assert tuple(out[i]) == pytest.approx((*a, *b))
