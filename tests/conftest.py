import os
import random

# heartgarden imports pygame for its preview window
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
# Headless SDL so the window tests run without a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from heartgarden.canvas import Canvas
from heartgarden.garden import Garden
from heartgarden.options import GardenOptions


@pytest.fixture
def make_garden():
    """Build a garden on a fresh canvas with a seeded random source."""

    def _make(width=670, height=625, viewport_width=1024, seed=7, options=None):
        canvas = Canvas(width, height)
        return Garden(canvas, options or GardenOptions(),
                      viewport_width=viewport_width, rng=random.Random(seed))

    return _make


@pytest.fixture
def garden(make_garden):
    return make_garden()
