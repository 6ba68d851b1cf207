"""Frame pacing for the simulation loop."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Protocol


class TickClock(Protocol):
    def tick(self, framerate: int = 0) -> int: ...


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)
    start_time: float = field(default_factory=time.perf_counter)

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt

    def elapsed(self) -> float:
        return time.perf_counter() - self.start_time


class FrameScheduler:
    """Runs one requested callback per frame, like a display refresh hook.

    A callback that wants another frame must request it again; not asking is
    how a loop stops.
    """

    def __init__(self, fps: int = 60, clock: TickClock | None = None) -> None:
        self.fps = fps
        self._clock = clock
        self._pending: Callable[[], None] | None = None
        self.frames = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._pending = callback

    def cancel(self) -> None:
        self._pending = None

    def run(self, max_frames: int | None = None) -> int:
        """Drive frames until nobody asks for another one. Returns frames run."""

        ran = 0
        while self._pending is not None:
            if max_frames is not None and ran >= max_frames:
                break
            callback = self._pending
            self._pending = None
            callback()
            ran += 1
            self.frames += 1
            if self._clock is not None:
                self._clock.tick(self.fps)
        return ran


__all__ = ["FrameScheduler", "FrameTimer", "TickClock"]
