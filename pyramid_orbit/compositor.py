import logging
import threading
from typing import Optional

from .config import SceneConfig
from .faces import draw_pyramid
from .projection import Viewport, build_view_basis
from .scene import Scene
from .state import CameraState
from .surface import DrawingSurface, SurfaceError
from .wireframe import draw_segments

logger = logging.getLogger(__name__)


class FrameCompositor:
    """
    Double-buffered frame composition.

    Every frame is drawn into an offscreen buffer sized to the viewport and
    then presented to the visible surface in one blit, so a half-drawn
    frame is never visible.

    Threading:
      - request_redraw() may be called from any thread (the animator)
      - present_pending() / redraw() / on_viewport_changed() run on the
        host thread only
    """

    def __init__(self, surface: DrawingSurface, scene: Scene, camera: CameraState,
                 config: Optional[SceneConfig] = None):
        self.surface = surface
        self.scene = scene
        self.camera = camera
        self.config = config or SceneConfig()

        width, height = surface.size
        self.viewport = Viewport(width, height)
        self.buffer: Optional[DrawingSurface] = None
        self.frames = 0
        self._dirty = threading.Event()

    def on_viewport_changed(self, width: int, height: int) -> None:
        """Record the new viewport size; the buffer is rebuilt on the next redraw."""
        self.viewport = Viewport(width, height)
        self._dirty.set()

    def request_redraw(self) -> None:
        """Idempotent: any number of requests before the next present collapse into one."""
        self._dirty.set()

    def present_pending(self) -> bool:
        """Redraw if a request is pending. Returns True when a frame was presented."""
        if not self._dirty.is_set():
            return False
        self._dirty.clear()
        return self.redraw()

    def _ensure_buffer(self) -> DrawingSurface:
        size = (self.viewport.width, self.viewport.height)
        if self.buffer is None or self.buffer.size != size:
            logger.debug("creating offscreen buffer %dx%d", *size)
            self.buffer = self.surface.create_offscreen_buffer(*size)
        return self.buffer

    def render(self, target: DrawingSurface, angle: float) -> None:
        """Draw the full scene for the given orbit angle onto target."""
        cfg = self.config
        vp = self.viewport
        cam = self.camera.position(angle)
        basis = build_view_basis(cam, self.camera.target)

        target.fill_rect((0, 0, vp.width, vp.height), cfg.background_color)
        draw_segments(target, self.scene.grid, basis, cam, vp,
                      cfg.near, cfg.scale_factor, cfg.grid_color)
        draw_segments(target, self.scene.ring, basis, cam, vp,
                      cfg.near, cfg.scale_factor, cfg.ring_color)
        draw_pyramid(target, self.scene.pyramid, basis, cam, vp,
                     cfg.near, cfg.scale_factor, cfg.outline_color)

    def redraw(self) -> bool:
        """
        Compose and present one frame.

        Non-positive viewports are skipped silently. A surface error aborts
        only this frame: it is logged and the next request draws again.
        """
        if self.viewport.empty:
            return False

        # one angle snapshot per frame
        angle = self.camera.angle.get()
        try:
            buffer = self._ensure_buffer()
            self.render(buffer, angle)
            self.surface.present_buffer(buffer)
        except SurfaceError:
            logger.exception("frame skipped at angle %.4f", angle)
            return False
        self.frames += 1
        return True
