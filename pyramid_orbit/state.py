import math
import threading
from typing import Optional

from .config import SceneConfig
from .vecmath import Vec3


class SharedScalar:
    """
    A single float shared between the animator thread and the draw path.

    Reads and writes go through a lock so no reader ever sees a torn value.
    No multi-field invariant spans threads, so one lock per scalar is enough.
    """

    def __init__(self, value: float = 0.0):
        self._value = float(value)
        self._lock = threading.Lock()

    def get(self) -> float:
        with self._lock:
            return self._value

    def set(self, value: float) -> None:
        with self._lock:
            self._value = float(value)

    def add(self, delta: float) -> float:
        """Atomically add delta and return the new value."""
        with self._lock:
            self._value += delta
            return self._value


class SpeedControl(SharedScalar):
    """
    Externally owned speed value in [lo, hi].

    The host (scrollbar, keys, CLI) writes it; the animator reads it once
    per tick. Writes outside the range are clamped.
    """

    def __init__(self, value: float = 35, lo: int = 1, hi: int = 101):
        self.lo = lo
        self.hi = hi
        super().__init__(self._clamp(value))

    def _clamp(self, value: float) -> float:
        return max(self.lo, min(self.hi, value))

    def set(self, value: float) -> None:
        super().set(self._clamp(value))

    def add(self, delta: float) -> float:
        with self._lock:
            self._value = self._clamp(self._value + delta)
            return self._value

    @classmethod
    def from_config(cls, config: SceneConfig):
        return cls(config.speed_default, config.speed_min, config.speed_max)


class CameraState:
    """
    Orbiting camera: fixed radius, height and look-at target.

    The orbit angle is the only mutable field. The animator owns writes;
    the compositor reads one snapshot per frame via position().
    """
    __slots__ = ('angle', 'radius', 'height', 'target')

    def __init__(self, radius: float = 4.0, height: float = 1.0,
                 target: Vec3 = Vec3(0.0, 0.0, 0.0), angle: float = 0.0):
        self.angle = SharedScalar(angle)
        self.radius = radius
        self.height = height
        self.target = target

    @classmethod
    def from_config(cls, config: SceneConfig, angle: float = 0.0):
        return cls(config.orbit_radius, config.orbit_height, config.target, angle)

    def position(self, angle: Optional[float] = None) -> Vec3:
        """Camera position for the given angle (current angle if omitted)."""
        if angle is None:
            angle = self.angle.get()
        return Vec3(math.cos(angle) * self.radius,
                    self.height,
                    math.sin(angle) * self.radius)
