"""Shared fixtures: headless SDL, default config/scene/camera and a recording surface."""

from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from pyramid_orbit.config import SceneConfig
from pyramid_orbit.scene import Scene
from pyramid_orbit.state import CameraState
from tests._utils.surfaces import RecordingSurface


@pytest.fixture()
def config() -> SceneConfig:
    return SceneConfig()


@pytest.fixture()
def scene(config: SceneConfig) -> Scene:
    return Scene.from_config(config)


@pytest.fixture()
def camera(config: SceneConfig) -> CameraState:
    return CameraState.from_config(config)


@pytest.fixture()
def recorder() -> RecordingSurface:
    return RecordingSurface()
