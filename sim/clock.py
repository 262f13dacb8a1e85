"""Frame pacing for the host loop.

The loop polls ``tick()``; it hands back the elapsed time once a full frame
interval has passed at the target rate, otherwise None.
"""

import time

from billiards import table


def clamp_fps(fps: int) -> int:
    return max(table.MIN_FPS, min(fps, table.MAX_FPS))


class FrameClock:
    def __init__(self, target_fps: int = table.MAX_FPS, time_source=time.perf_counter):
        self._now = time_source
        self.target_fps = clamp_fps(target_fps)
        self._last = self._now()

    def set_target_fps(self, fps: int) -> None:
        self.target_fps = clamp_fps(fps)

    @property
    def interval(self) -> float:
        return 1.0 / self.target_fps

    def tick(self):
        """Return seconds since the last frame if a frame is due, else None."""
        now = self._now()
        elapsed = now - self._last
        if elapsed < self.interval:
            return None
        self._last = now
        return elapsed

    def wait(self) -> float:
        """Block until the next frame is due and return its dt."""
        while True:
            dt = self.tick()
            if dt is not None:
                return dt
            remaining = self.interval - (self._now() - self._last)
            if remaining > 0.002:
                time.sleep(remaining - 0.001)
