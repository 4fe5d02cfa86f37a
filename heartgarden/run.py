"""Main run loop - ties together Canvas, Garden, HeartSeeder, FrameScheduler and Simulator."""

import os
import time
from typing import Callable

from heartgarden.canvas import Canvas
from heartgarden.garden import Garden
from heartgarden.heart import HeartSeeder
from heartgarden.options import GardenOptions, surface_size
from heartgarden.scheduler import FrameScheduler
from heartgarden.simulator import Simulator

DEFAULT_WINDOW = (1024, 760)
RESIZE_DEBOUNCE = 0.15  # seconds of quiet before a resize is applied
SEED_DELAY = 1.0  # seconds before heart seeding starts


def window_from_env(default: tuple[int, int] = DEFAULT_WINDOW) -> tuple[int, int]:
    """Read HEARTGARDEN_WINDOW="WxH", falling back to `default`."""
    value = os.environ.get("HEARTGARDEN_WINDOW", "")
    if not value:
        return default
    try:
        w, h = (int(part) for part in value.lower().split("x"))
    except ValueError:
        print(f"[garden] Ignoring malformed HEARTGARDEN_WINDOW={value!r}, expected WxH")
        return default
    return (w, h)


class ResizeDebounce:
    """Collapses a burst of window resizes into one, applied after `delay` seconds of quiet."""

    def __init__(self, delay: float = RESIZE_DEBOUNCE):
        self.delay = delay
        self.size: tuple[int, int] | None = None
        self.at = 0.0

    def request(self, w: int, h: int, now: float) -> None:
        self.size = (w, h)
        self.at = now

    def due(self, now: float) -> tuple[int, int] | None:
        """Return the latest requested size once it has settled, else None."""
        if self.size is None or now - self.at < self.delay:
            return None
        size, self.size = self.size, None
        return size


def pause_when_hidden(scheduler: FrameScheduler) -> Callable[[bool], None]:
    """Visibility callback that stops the scheduler while the window is hidden."""

    def on_visibility(visible: bool) -> None:
        if visible:
            scheduler.resume()
        else:
            scheduler.pause()

    return on_visibility


def run(seed_heart: bool = True, fps: int = 60, window: tuple[int, int] | None = None,
        title: str = "Heart Garden", options: GardenOptions | None = None,
        seed_delay: float = SEED_DELAY) -> None:
    """Main entry point. Opens the preview window and runs the garden until closed.

    Args:
        seed_heart: Plant blooms along the heart curve after `seed_delay` seconds.
        fps: Window refresh rate (the garden itself renders at most every
             `options.frame_interval_ms`).
        window: Initial window size; defaults to HEARTGARDEN_WINDOW or 1024x760.
        title: Window title.
        options: Garden tunables.
        seed_delay: Seconds before heart seeding begins.
    """
    options = options or GardenOptions()
    window = window or window_from_env()
    canvas = Canvas(*surface_size(*window, options))
    garden = Garden(canvas, options, viewport_width=window[0])
    scheduler = FrameScheduler(garden.render)

    debounce = ResizeDebounce()

    def on_resize(w: int, h: int) -> None:
        debounce.request(w, h, time.monotonic())

    def on_complete() -> None:
        print(f"[garden] Heart complete ({len(seeder.accepted)} blooms)")

    seeder = HeartSeeder(garden, on_complete=on_complete)
    sim = Simulator(canvas, size=window, title=title,
                    on_pointer=garden.create_random_bloom,
                    on_resize=on_resize, on_visibility=pause_when_hidden(scheduler))

    print(f"[garden] Surface {canvas.width}x{canvas.height} ({garden.viewport})")
    start = time.monotonic()
    seeding = False
    scheduler.start()

    try:
        while True:
            now = time.monotonic()

            size = debounce.due(now)
            if size is not None:
                garden.resize(*surface_size(*size, options), viewport_width=size[0])
                print(f"[garden] Resized to {canvas.width}x{canvas.height} ({garden.viewport})")

            if seed_heart and not seeding and now - start >= seed_delay:
                seeding = True
                scheduler.every(garden.profile.seed_interval_ms, seeder.step)

            scheduler.tick((now - start) * 1000)

            if not sim.update():
                break
            sim.tick(fps)
    except KeyboardInterrupt:
        pass
    finally:
        sim.close()
