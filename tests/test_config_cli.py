from __future__ import annotations

import math

import pytest

from pyramid_orbit.cli import main, parse_args
from pyramid_orbit.config import ConfigError, SceneConfig
from pyramid_orbit.state import CameraState, SpeedControl
from pyramid_orbit.vecmath import Vec3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"orbit_radius": 0.0},
        {"ring_segments": 2},
        {"grid_step": 0.0},
        {"near": -0.1},
        {"tick_period": 0.0},
        {"speed_default": 200},
        {"orbit_radius": float("nan")},
        {"orbit_height": float("inf")},
        {"grid_size": float("inf")},
        {"grid_step": float("nan")},
        {"near": float("nan")},
        {"scale_factor": float("-inf")},
        {"scale_factor": 0.0},
        {"base_step": float("nan")},
    ],
)
def test_invalid_config_raises(kwargs) -> None:
    with pytest.raises(ConfigError):
        SceneConfig(**kwargs)


def test_config_error_is_value_error() -> None:
    assert issubclass(ConfigError, ValueError)


def test_speed_control_clamps_to_range() -> None:
    speed = SpeedControl(35, lo=1, hi=101)
    speed.set(500)
    assert speed.get() == 101
    speed.set(-3)
    assert speed.get() == 1
    assert speed.add(-10) == 1
    assert SpeedControl(0).get() == 1


def test_camera_position_on_orbit(config) -> None:
    camera = CameraState.from_config(config)
    p = camera.position()
    assert p.as_tuple() == pytest.approx((4.0, 1.0, 0.0))
    camera.angle.set(math.pi / 2)
    assert camera.position().as_tuple() == pytest.approx((0.0, 1.0, 4.0))


def test_parse_args_defaults() -> None:
    args = parse_args([])
    assert (args.width, args.height) == (800, 600)
    assert args.speed is None
    assert args.snapshot is None
    assert args.ring_segments == 120


def test_main_snapshot(tmp_path, capsys) -> None:
    out = tmp_path / "shot.png"
    code = main(["--snapshot", str(out), "--width", "64", "--height", "48", "--frames", "5"])
    assert code == 0
    assert out.exists()
    assert str(out) in capsys.readouterr().out


def test_main_rejects_bad_config(capsys) -> None:
    assert main(["--ring-segments", "2", "--snapshot", "unused.png"]) == 2
    assert "ring_segments" in capsys.readouterr().err


def test_non_finite_target_raises() -> None:
    with pytest.raises(ConfigError, match="target"):
        SceneConfig(target=Vec3(0.0, float("nan"), 0.0))


@pytest.mark.parametrize(
    "flags",
    [
        ["--radius", "nan"],
        ["--radius", "inf"],
        ["--orbit-height", "inf"],
    ],
)
def test_main_rejects_non_finite_geometry(tmp_path, capsys, flags) -> None:
    out = tmp_path / "x.png"
    code = main(flags + ["--snapshot", str(out), "--width", "64", "--height", "48"])
    assert code == 2
    assert "must be finite" in capsys.readouterr().err
    assert not out.exists()
