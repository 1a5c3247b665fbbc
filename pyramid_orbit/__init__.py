"""Orbiting-camera software renderer: grid floor, orbit ring and a flat-shaded pyramid."""

from .animator import OrbitAnimator
from .compositor import FrameCompositor
from .config import ConfigError, SceneConfig
from .scene import Scene, build_pyramid
from .state import CameraState, SharedScalar, SpeedControl
from .surface import DrawingSurface, PygameSurface, SurfaceError
from .vecmath import Vec3

__all__ = [
    "CameraState",
    "ConfigError",
    "DrawingSurface",
    "FrameCompositor",
    "OrbitAnimator",
    "PygameSurface",
    "Scene",
    "SceneConfig",
    "SharedScalar",
    "SpeedControl",
    "SurfaceError",
    "Vec3",
    "build_pyramid",
]
