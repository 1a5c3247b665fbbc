import math
from dataclasses import dataclass


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions, directions and normals.

    Used in:
      - scene geometry (pyramid vertices, orbit target)
      - view basis (forward / right / up)
      - camera-space points for clipping and projection

    Note:
      - Immutable (frozen): every operation returns a new Vec3.
    """
    x: float
    y: float
    z: float

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)

    def dot(self, o) -> float:
        """Dot product (scalar product)."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Cross product (vector product)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """
        Return normalized vector (length=1).

        A zero-length vector normalizes to the zero vector instead of
        raising; callers treat that as a degenerate frame, not an error.
        """
        n = self.norm()
        if n == 0.0:
            return ZERO
        return self * (1.0 / n)

    def lerp(self, o, t: float):
        """Linear interpolation: t=0 gives self, t=1 gives o."""
        return Vec3(
            self.x + (o.x - self.x) * t,
            self.y + (o.y - self.y) * t,
            self.z + (o.z - self.z) * t
        )

    def as_tuple(self):
        return (self.x, self.y, self.z)


ZERO = Vec3(0.0, 0.0, 0.0)
WORLD_UP = Vec3(0.0, 1.0, 0.0)


def dot(a: Vec3, b: Vec3) -> float:
    return a.dot(b)


def cross(a: Vec3, b: Vec3) -> Vec3:
    return a.cross(b)


def normalize(v: Vec3) -> Vec3:
    return v.normalize()


def lerp(a: Vec3, b: Vec3, t: float) -> Vec3:
    return a.lerp(b, t)
