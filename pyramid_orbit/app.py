import logging
from pathlib import Path
from typing import Optional

import pygame

from .animator import OrbitAnimator
from .compositor import FrameCompositor
from .config import SceneConfig
from .export import save_snapshot
from .scene import Scene
from .state import CameraState, SpeedControl
from .surface import PygameSurface

logger = logging.getLogger(__name__)

CONTROL_HEIGHT = 28
SCROLLBAR_WIDTH = 300
SCROLLBAR_HEIGHT = 16


# ============================================================
#  Speed scrollbar (host-side control)
# ============================================================

class SpeedScrollbar:
    """
    Horizontal scrollbar bound to a SpeedControl.

    Lives in the control strip under the viewport. Mouse drag or click sets
    the value; Left/Right keys step it by one.
    """

    def __init__(self, speed: SpeedControl):
        self.speed = speed
        self.rect = pygame.Rect(0, 0, SCROLLBAR_WIDTH, SCROLLBAR_HEIGHT)
        self.dragging = False

    def layout(self, viewport_height: int):
        top = viewport_height + (CONTROL_HEIGHT - SCROLLBAR_HEIGHT) // 2
        self.rect = pygame.Rect(8, top, SCROLLBAR_WIDTH, SCROLLBAR_HEIGHT)

    def value_at(self, x: int) -> float:
        """Map a mouse x coordinate onto [lo, hi]."""
        frac = (x - self.rect.left) / max(1, self.rect.width - 1)
        frac = max(0.0, min(1.0, frac))
        return round(self.speed.lo + frac * (self.speed.hi - self.speed.lo))

    def handle_event(self, event) -> bool:
        """Returns True if the event changed the speed."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.dragging = True
                self.speed.set(self.value_at(event.pos[0]))
                return True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.speed.set(self.value_at(event.pos[0]))
            return True
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_LEFT:
                self.speed.add(-1)
                return True
            if event.key == pygame.K_RIGHT:
                self.speed.add(1)
                return True
        return False

    def draw(self, screen: pygame.Surface):
        value = self.speed.get()
        frac = (value - self.speed.lo) / max(1, self.speed.hi - self.speed.lo)
        pygame.draw.rect(screen, (60, 60, 70), self.rect)
        thumb_x = self.rect.left + int(frac * (self.rect.width - 12))
        pygame.draw.rect(screen, (200, 200, 215), pygame.Rect(thumb_x, self.rect.top, 12, self.rect.height))
        pygame.draw.rect(screen, (20, 20, 24), self.rect, 1)


# ============================================================
#  Interactive window
# ============================================================

def run_window(config: SceneConfig, width: int, height: int,
               speed_value: Optional[float] = None, fps: int = 120) -> None:
    """
    Main interactive loop:
      - animator thread advances the orbit and requests redraws
      - this thread handles input and presents pending frames
    """
    pygame.init()
    screen = pygame.display.set_mode((width, height + CONTROL_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Pyramid orbit: drag the bar or use Left/Right to change speed")
    pygame.key.set_repeat(250, 30)
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas", 16)

    speed = SpeedControl.from_config(config)
    if speed_value is not None:
        speed.set(speed_value)
    camera = CameraState.from_config(config)
    visible = PygameSurface(screen)
    compositor = FrameCompositor(visible, Scene.from_config(config), camera, config)
    compositor.on_viewport_changed(width, height)
    animator = OrbitAnimator.from_config(config, camera.angle, speed, compositor.request_redraw)

    scrollbar = SpeedScrollbar(speed)
    scrollbar.layout(height)

    animator.start()
    try:
        running = True
        while running:
            clock.tick(fps)
            controls_changed = False

            # ====================================================
            #  Input handling
            # ====================================================
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    visible.surface = pygame.display.get_surface()
                    vh = max(0, event.h - CONTROL_HEIGHT)
                    compositor.on_viewport_changed(event.w, vh)
                    scrollbar.layout(vh)
                    logger.debug("viewport resized to %dx%d", event.w, vh)
                elif scrollbar.handle_event(event):
                    controls_changed = True

            # ====================================================
            #  Present frame
            # ====================================================
            presented = compositor.present_pending()
            if not (presented or controls_changed):
                continue

            strip = pygame.Rect(0, compositor.viewport.height,
                                visible.surface.get_width(), CONTROL_HEIGHT)
            visible.surface.fill((32, 32, 38), strip)
            scrollbar.draw(visible.surface)
            hud = f"Speed: {int(speed.get()):3d} | FPS: {clock.get_fps():.1f}"
            visible.surface.blit(font.render(hud, True, (235, 235, 235)),
                                 (scrollbar.rect.right + 12, scrollbar.rect.top))
            pygame.display.flip()
    finally:
        animator.stop()
        pygame.quit()


# ============================================================
#  Headless snapshot
# ============================================================

def render_snapshot(config: SceneConfig, width: int, height: int, path,
                    frames: int = 0, angle: float = 0.0,
                    speed_value: Optional[float] = None) -> Path:
    """
    Render one frame without opening a window and save it as an image.

    The animator is ticked `frames` times from `angle` (no thread), so the
    result is deterministic.
    """
    speed = SpeedControl.from_config(config)
    if speed_value is not None:
        speed.set(speed_value)
    camera = CameraState.from_config(config, angle)
    target = PygameSurface(pygame.Surface((width, height)))
    compositor = FrameCompositor(target, Scene.from_config(config), camera, config)
    animator = OrbitAnimator.from_config(config, camera.angle, speed, compositor.request_redraw)

    for _ in range(frames):
        animator.tick()
    compositor.request_redraw()
    if not compositor.present_pending():
        raise RuntimeError(f"nothing rendered for a {width}x{height} viewport")
    return save_snapshot(target.surface, path)
