import math
from dataclasses import dataclass, field
from typing import Tuple

from .vecmath import Vec3

Color = Tuple[int, int, int]

_FLOAT_FIELDS = (
    "grid_size", "grid_step", "orbit_radius", "orbit_height", "near",
    "scale_factor", "tick_period", "base_step", "reference_speed",
)


class ConfigError(ValueError):
    """Raised when a SceneConfig field is out of its valid range."""


@dataclass(frozen=True)
class SceneConfig:
    """
    Every tunable constant of the orbit scene.

    Defaults:
      - 20x20 floor grid with 1.0 spacing on y=0
      - camera orbiting at radius 4.0, height 1.0, looking at the origin
      - 120-segment orbit ring
      - 16 ms ticks, angle step 0.01 * speed / 60
    """
    grid_size: float = 10.0
    grid_step: float = 1.0
    orbit_radius: float = 4.0
    orbit_height: float = 1.0
    target: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    ring_segments: int = 120

    near: float = 0.2              # camera-space near distance
    scale_factor: float = 0.55     # projection scale = min(w, h) * scale_factor

    tick_period: float = 0.016     # seconds between animator ticks
    base_step: float = 0.01        # radians per tick at reference speed
    reference_speed: float = 60.0
    speed_min: int = 1
    speed_max: int = 101
    speed_default: int = 35

    background_color: Color = (18, 18, 22)
    grid_color: Color = (70, 78, 90)
    ring_color: Color = (230, 126, 34)
    outline_color: Color = (12, 12, 12)

    def __post_init__(self):
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value}")
        if not all(math.isfinite(c) for c in self.target.as_tuple()):
            raise ConfigError(f"target must be finite, got {self.target}")
        if self.orbit_radius <= 0.0:
            raise ConfigError(f"orbit_radius must be positive, got {self.orbit_radius}")
        if self.grid_step <= 0.0:
            raise ConfigError(f"grid_step must be positive, got {self.grid_step}")
        if self.grid_size < 0.0:
            raise ConfigError(f"grid_size must be non-negative, got {self.grid_size}")
        if self.ring_segments < 3:
            raise ConfigError(f"ring_segments must be >= 3, got {self.ring_segments}")
        if self.near <= 0.0:
            raise ConfigError(f"near must be positive, got {self.near}")
        if self.scale_factor <= 0.0:
            raise ConfigError(f"scale_factor must be positive, got {self.scale_factor}")
        if self.tick_period <= 0.0:
            raise ConfigError(f"tick_period must be positive, got {self.tick_period}")
        if self.reference_speed <= 0.0:
            raise ConfigError(f"reference_speed must be positive, got {self.reference_speed}")
        if not self.speed_min <= self.speed_default <= self.speed_max:
            raise ConfigError(
                f"speed_default {self.speed_default} outside "
                f"[{self.speed_min}, {self.speed_max}]"
            )
