#!/usr/bin/env python3
"""Record an animated GIF of the heart garden by rendering frames headlessly.

Usage: python record_gif.py [viewport_width]
Output: media/heart-garden.gif
"""

import os
import random
import sys

# heartgarden pulls in pygame for its preview window; keep it quiet
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "1"

from pathlib import Path

from PIL import Image

from heartgarden import Canvas, FrameScheduler, Garden, GardenOptions, HeartSeeder
from heartgarden.options import surface_size

ROOT = Path(__file__).parent
MEDIA_DIR = ROOT / "media"

# GIF settings
GIF_FPS = 20       # Frames per second in the GIF
TAIL_S = 3.0       # Seconds recorded after seeding finishes
TICK_MS = 1000 / 60


def canvas_to_image(canvas: Canvas) -> Image.Image:
    """Convert a Canvas buffer to a PIL Image."""
    return Image.frombytes("RGB", (canvas.width, canvas.height), canvas.get_buffer())


def record(viewport_width: int = 1024, viewport_height: int = 760,
           out_path: Path | None = None, seed: int | None = None) -> Path:
    """Render one full heart seeding plus a tail and save it as a GIF."""
    options = GardenOptions()
    canvas = Canvas(*surface_size(viewport_width, viewport_height, options))
    garden = Garden(canvas, options, viewport_width=viewport_width,
                    rng=random.Random(seed))
    seeder = HeartSeeder(garden)
    scheduler = FrameScheduler(garden.render)
    scheduler.every(garden.profile.seed_interval_ms, seeder.step)

    sweep = options.heart
    samples = int(round((sweep.end_angle - sweep.start_angle) / sweep.step)) + 1
    duration_ms = samples * garden.profile.seed_interval_ms + TAIL_S * 1000

    frames = []
    every = max(1, round(1000 / GIF_FPS / TICK_MS))

    def grab(frame: int, now: float) -> None:
        if frame % every == 0:
            frames.append(canvas_to_image(canvas))

    scheduler.run_for(duration_ms, TICK_MS, on_frame=grab)

    out_path = out_path or MEDIA_DIR / "heart-garden.gif"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    frames[0].save(
        out_path,
        save_all=True,
        append_images=frames[1:],
        duration=int(1000 / GIF_FPS),
        loop=0,
        optimize=True,
    )
    print(f"  Saved {out_path} ({len(frames)} frames, {duration_ms / 1000:.1f}s, "
          f"{len(seeder.accepted)} blooms)")
    return out_path


if __name__ == "__main__":
    width = int(sys.argv[1]) if len(sys.argv) > 1 else 1024
    print(f"\nRecording heart garden ({width}px viewport) to {MEDIA_DIR}/\n")
    record(width)
