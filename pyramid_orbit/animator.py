import logging
import threading
import time
from typing import Callable, Optional

from .config import SceneConfig
from .state import SharedScalar

logger = logging.getLogger(__name__)

STOPPED = "stopped"
RUNNING = "running"


class OrbitAnimator:
    """
    Advances the camera orbit angle on a fixed-period background thread.

    States:
      STOPPED (initial) --start()--> RUNNING --stop()--> STOPPED

    Each tick reads the speed once, adds
        base_step * speed / reference_speed
    to the angle and calls request_redraw(). stop() joins the thread, so
    no tick runs after it returns.
    """

    def __init__(self, angle: SharedScalar, speed: SharedScalar,
                 request_redraw: Callable[[], None],
                 period: float = 0.016, base_step: float = 0.01,
                 reference_speed: float = 60.0):
        self.angle = angle
        self.speed = speed
        self.request_redraw = request_redraw
        self.period = period
        self.base_step = base_step
        self.reference_speed = reference_speed

        self.ticks = 0
        self._state = STOPPED
        self._lifecycle = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config: SceneConfig, angle: SharedScalar, speed: SharedScalar,
                    request_redraw: Callable[[], None]):
        return cls(angle, speed, request_redraw,
                   period=config.tick_period,
                   base_step=config.base_step,
                   reference_speed=config.reference_speed)

    @property
    def state(self) -> str:
        return self._state

    def angular_step(self, speed: float) -> float:
        return self.base_step * (speed / self.reference_speed)

    def tick(self) -> float:
        """One animation step. Returns the new angle."""
        new_angle = self.angle.add(self.angular_step(self.speed.get()))
        self.ticks += 1
        try:
            self.request_redraw()
        except Exception:
            # a broken redraw hook must not kill the animation thread
            logger.exception("redraw request failed on tick %d", self.ticks)
        return new_angle

    def start(self) -> None:
        with self._lifecycle:
            if self._state == RUNNING:
                return
            # each thread gets its own event so a restart cannot revive a
            # thread that is still winding down
            stop_event = threading.Event()
            self._stop_event = stop_event
            self._thread = threading.Thread(target=self._run, args=(stop_event,),
                                            name="OrbitAnimator", daemon=True)
            self._state = RUNNING
            self._thread.start()
        logger.debug("animator started (period=%.3fs)", self.period)

    def stop(self) -> None:
        with self._lifecycle:
            if self._state == STOPPED:
                return
            self._stop_event.set()
            thread, self._thread = self._thread, None
            self._state = STOPPED
        # join outside the lock: the redraw hook may call start()/stop()
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        logger.debug("animator stopped after %d ticks", self.ticks)

    def _run(self, stop_event: threading.Event) -> None:
        next_tick = time.perf_counter()
        while not stop_event.is_set():
            self.tick()
            next_tick += self.period
            delay = next_tick - time.perf_counter()
            if delay < 0.0:
                # fell behind (slow redraw or suspended process): resync
                next_tick = time.perf_counter()
                delay = 0.0
            if stop_event.wait(delay):
                break
