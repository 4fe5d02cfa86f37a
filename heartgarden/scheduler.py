"""Frame scheduler: one clock for rendering and any throttled side steps."""

from typing import Callable

# Side step: called with no arguments, returns False to unregister itself
StepFn = Callable[[], bool]
RenderFn = Callable[[float], object]


class _Step:
    __slots__ = ("interval_ms", "fn", "last")

    def __init__(self, interval_ms: float, fn: StepFn):
        self.interval_ms = interval_ms
        self.fn = fn
        self.last: float | None = None


class FrameScheduler:
    """Drives `render(now)` each tick, plus side steps at their own cadence.

    The render callback does its own frame-rate limiting (Garden.render drops
    early frames), so the scheduler simply forwards every tick. Side steps run
    at most once per tick and never catch up on missed intervals.
    """

    def __init__(self, render: RenderFn):
        self.render = render
        self.running = False
        self._steps: list[_Step] = []

    def every(self, interval_ms: float, fn: StepFn) -> None:
        """Run `fn` roughly every `interval_ms` until it returns False."""
        self._steps.append(_Step(interval_ms, fn))

    def start(self) -> None:
        self.running = True

    def pause(self) -> None:
        self.running = False

    def resume(self) -> None:
        self.running = True

    def tick(self, now: float) -> bool:
        """Advance to clock value `now` (ms). Returns False while paused."""
        if not self.running:
            return False
        for step in list(self._steps):
            if step.last is not None and now - step.last < step.interval_ms:
                continue
            step.last = now
            if step.fn() is False:
                self._steps.remove(step)
        self.render(now)
        return True

    def run_for(self, duration_ms: float, step_ms: float, start: float = 0.0,
                on_frame: Callable[[int, float], None] | None = None) -> int:
        """Tick a synthetic clock from `start` for `duration_ms`.

        Used for headless rendering. `on_frame(frame, now)` is called after
        every tick. Returns the number of ticks performed.
        """
        if step_ms <= 0:
            raise ValueError("step_ms must be positive")
        self.start()
        frame = 0
        now = start
        end = start + duration_ms
        while now < end:
            self.tick(now)
            if on_frame is not None:
                on_frame(frame, now)
            frame += 1
            now = start + frame * step_ms
        return frame
