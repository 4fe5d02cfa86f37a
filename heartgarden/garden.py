"""The garden scene: active blooms, the per-frame render pass, bloom factory."""

import logging
import random

from heartgarden.bloom import Bloom
from heartgarden.canvas import RGBA, Canvas
from heartgarden.options import GardenOptions, Range
from heartgarden.vector import Vector2

logger = logging.getLogger(__name__)

# All-channel difference at or below this counts as near-gray
GRAY_LIMIT = 5
FALLBACK_COLOR = (240, 80, 110)


class NoSurfaceError(RuntimeError):
    """Raised when a garden is set up without a usable drawing surface."""


def random_color(r: Range, g: Range, b: Range, alpha: float,
                 rng: random.Random | None = None, max_retries: int = 100,
                 limit: int = GRAY_LIMIT) -> RGBA:
    """Sample an RGBA color, resampling anything close to gray.

    A sample is rejected when every pairwise channel difference is within
    `limit`. After `max_retries` rejections the fallback color is returned
    with the requested alpha.
    """
    rng = rng or random
    for _ in range(max_retries):
        red = round(rng.uniform(r.min, r.max))
        green = round(rng.uniform(g.min, g.max))
        blue = round(rng.uniform(b.min, b.max))
        if (abs(red - green) <= limit and abs(green - blue) <= limit
                and abs(blue - red) <= limit):
            continue
        return (red, green, blue, alpha)
    logger.warning(
        "No non-gray color after %d samples (r=%s g=%s b=%s), using fallback",
        max_retries, r, g, b,
    )
    return (*FALLBACK_COLOR, alpha)


class Garden:
    """Scene container for one drawing surface.

    Args:
        canvas: The drawing surface. Required.
        options: Tunables; defaults to GardenOptions().
        viewport_width: Width used for the mobile/tablet/desktop breakpoints.
            Defaults to the canvas width.
        rng: Random source shared by all blooms and petals.
    """

    def __init__(self, canvas: Canvas | None, options: GardenOptions | None = None,
                 viewport_width: float | None = None,
                 rng: random.Random | None = None):
        if canvas is None or canvas.width <= 0 or canvas.height <= 0:
            raise NoSurfaceError("no drawing surface available for the garden")
        self.canvas = canvas
        self.options = options or GardenOptions()
        self.rng = rng or random.Random()
        self.blooms: list[Bloom] = []
        self.last_render_timestamp: float | None = None
        self._pending_removals: list[Bloom] | None = None
        self.setup_responsive(canvas.width if viewport_width is None else viewport_width)

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    # --- Viewport ---

    def setup_responsive(self, viewport_width: float) -> None:
        """Re-derive density parameters for a viewport width."""
        viewport = self.options.viewport_class(viewport_width)
        # Profiles are immutable; swapping the reference is the whole update
        self.viewport, self.profile = viewport, self.options.profiles[viewport]
        logger.debug("Viewport %s (width=%s)", viewport, viewport_width)

    def resize(self, width: int, height: int, viewport_width: float | None = None) -> None:
        """Resize the surface and re-derive parameters. Active blooms are kept."""
        if width <= 0 or height <= 0:
            raise NoSurfaceError(f"cannot resize surface to {width}x{height}")
        self.canvas.resize(width, height)
        self.setup_responsive(width if viewport_width is None else viewport_width)

    # --- Frame ---

    def render(self, now: float) -> bool:
        """Draw one frame if at least one frame interval has passed.

        Returns True when a frame was drawn, False when it was dropped.
        """
        last = self.last_render_timestamp
        if last is not None and now - last < self.options.frame_interval_ms:
            return False

        self.canvas.clear()
        self._pending_removals = []
        try:
            for bloom in list(self.blooms):
                bloom.draw()
        finally:
            pending, self._pending_removals = self._pending_removals, None
            for bloom in pending:
                self._discard(bloom)
        self.last_render_timestamp = now
        return True

    # --- Collection ---

    def add_bloom(self, bloom: Bloom) -> None:
        self.blooms.append(bloom)

    def remove_bloom(self, bloom: Bloom) -> None:
        """Remove a bloom. During a render pass removal waits for the pass to end."""
        if bloom.removed:
            return
        bloom.removed = True
        if self._pending_removals is not None:
            self._pending_removals.append(bloom)
        else:
            self._discard(bloom)

    def _discard(self, bloom: Bloom) -> None:
        if bloom in self.blooms:
            self.blooms.remove(bloom)

    def clear(self) -> None:
        """Drop every bloom and blank the surface."""
        for bloom in self.blooms:
            bloom.removed = True
        self.blooms = []
        self.canvas.clear()

    # --- Factories ---

    def create_bloom(self, x: float, y: float, radius: float, color: RGBA,
                     petal_count: int) -> Bloom:
        return Bloom(Vector2(x, y), radius, color, petal_count, self)

    def random_color(self) -> RGBA:
        color = self.options.color
        return random_color(color.r, color.g, color.b, self.profile.opacity,
                            rng=self.rng, max_retries=self.options.color_retries)

    def create_random_bloom(self, x: float, y: float) -> Bloom:
        """Create a bloom at (x, y), clamped to the surface, with random looks."""
        x = max(0, min(x, self.width))
        y = max(0, min(y, self.height))
        profile = self.profile
        return self.create_bloom(
            x, y,
            self.rng.randint(int(profile.bloom_radius.min), int(profile.bloom_radius.max)),
            self.random_color(),
            self.rng.randint(int(profile.petal_count.min), int(profile.petal_count.max)),
        )
