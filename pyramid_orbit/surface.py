from typing import Protocol, Sequence, Tuple

import pygame

from .config import Color

Point = Tuple[int, int]

_DRAW_ERRORS = (pygame.error, TypeError, ValueError)


class SurfaceError(RuntimeError):
    """A drawing surface rejected a draw call."""


class DrawingSurface(Protocol):
    """
    2D raster target the renderer draws onto.

    The core only talks to this interface; PygameSurface is the concrete
    implementation, tests use a recording fake.
    """

    @property
    def size(self) -> Tuple[int, int]: ...

    def fill_rect(self, rect: Tuple[int, int, int, int], color: Color) -> None: ...

    def draw_line(self, p1: Point, p2: Point, color: Color) -> None: ...

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None: ...

    def draw_polygon_outline(self, points: Sequence[Point], color: Color) -> None: ...

    def create_offscreen_buffer(self, width: int, height: int) -> "DrawingSurface": ...

    def present_buffer(self, buffer: "DrawingSurface") -> None: ...


class PygameSurface:
    """
    DrawingSurface backed by a pygame.Surface.

    Wraps either the display surface (visible) or a plain pygame.Surface
    (offscreen buffer). Rejected draw calls (pygame.error, or the TypeError
    and ValueError pygame.draw raises for bad arguments) are re-raised as
    SurfaceError so the compositor can drop just the failing frame.
    """

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def fill_rect(self, rect, color):
        try:
            self.surface.fill(color, pygame.Rect(rect))
        except _DRAW_ERRORS as e:
            raise SurfaceError(f"fill_rect failed: {e}") from e

    def draw_line(self, p1, p2, color):
        try:
            pygame.draw.line(self.surface, color, p1, p2)
        except _DRAW_ERRORS as e:
            raise SurfaceError(f"draw_line failed: {e}") from e

    def fill_polygon(self, points, color):
        try:
            pygame.draw.polygon(self.surface, color, points)
        except _DRAW_ERRORS as e:
            raise SurfaceError(f"fill_polygon failed: {e}") from e

    def draw_polygon_outline(self, points, color):
        try:
            pygame.draw.polygon(self.surface, color, points, 1)
        except _DRAW_ERRORS as e:
            raise SurfaceError(f"draw_polygon_outline failed: {e}") from e

    def create_offscreen_buffer(self, width, height):
        return PygameSurface(pygame.Surface((width, height)))

    def present_buffer(self, buffer):
        try:
            self.surface.blit(buffer.surface, (0, 0))
        except _DRAW_ERRORS as e:
            raise SurfaceError(f"present failed: {e}") from e
