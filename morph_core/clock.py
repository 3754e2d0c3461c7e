"""
Frame-driven update source for the orchestrator.

The surrounding application calls `tick` once per display frame. Each tick
advances the orchestrator by the real time elapsed since the previous tick,
then runs the per-frame hooks (viewport controls and similar collaborators)
in registration order. `advance` and `run_until_idle` drive the same sequence
from a simulated clock for headless use.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from .orchestrator import TransitionOrchestrator

logger = logging.getLogger(__name__)

FrameHook = Callable[[float], None]

DEFAULT_FRAME_MS = 1000.0 / 60.0


def _perf_ms() -> float:
    return time.perf_counter() * 1000.0


class AnimationClock:
    """
    Ticks a `TransitionOrchestrator` once per frame.

    Attributes:
        orchestrator: Receiver of the per-frame time deltas
        frames: Number of ticks performed
        now: Timestamp of the last tick in milliseconds, None before the first
    """

    def __init__(self, orchestrator: TransitionOrchestrator, time_source: Optional[Callable[[], float]] = None):
        self.orchestrator = orchestrator
        self.time_source = time_source or _perf_ms
        self.frames = 0
        self.now: Optional[float] = None
        self._hooks: List[FrameHook] = []

    def add_hook(self, hook: FrameHook) -> None:
        """Register a callable run after the orchestrator on every tick."""
        self._hooks.append(hook)

    def remove_hook(self, hook: FrameHook) -> None:
        self._hooks.remove(hook)

    def tick(self, now_ms: float | None = None) -> float:
        """
        Run one frame.

        Args:
            now_ms: Current timestamp; read from the time source when omitted

        Returns:
            float: Time delta applied, 0 on the first tick
        """
        now = self.time_source() if now_ms is None else float(now_ms)
        dt = 0.0 if self.now is None else max(0.0, now - self.now)
        self.now = now
        return self._frame(dt)

    def advance(self, dt_ms: float) -> float:
        """Run one frame with an explicit time delta."""
        dt = max(0.0, float(dt_ms))
        self.now = (self.now or 0.0) + dt
        return self._frame(dt)

    def _frame(self, dt: float) -> float:
        self.orchestrator.update(dt)
        for hook in list(self._hooks):
            hook(dt)
        self.frames += 1
        return dt

    def run_until_idle(self, frame_ms: float = DEFAULT_FRAME_MS, max_ms: float = 60_000.0) -> float:
        """
        Advance in fixed frames until the orchestrator has nothing in flight.

        Returns:
            float: Simulated milliseconds spent

        Raises:
            RuntimeError: The orchestrator is still busy after `max_ms`
        """
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        spent = 0.0
        while not self.orchestrator.is_idle:
            if spent >= max_ms:
                raise RuntimeError(f"Transition still running after {max_ms:.0f} ms")
            self.advance(frame_ms)
            spent += frame_ms
        logger.debug("Idle after %.1f ms (%d frames total)", spent, self.frames)
        return spent
