"""Heart seeding: walk a parametric heart curve and plant blooms along it."""

import logging
import math
from typing import Callable

from heartgarden.garden import Garden

logger = logging.getLogger(__name__)

Point = tuple[float, float]


class HeartSeeder:
    """Places blooms at spaced points along a heart curve, one sample per step.

    The sweep parameters come from `garden.options.heart`; the curve scale,
    origin correction and spacing come from the garden's current profile.

    A resize mid-sweep carries on at the new size with a fresh spacing set:
    `accepted` only holds points planted on the current surface. Blooms
    planted before the resize stay in the garden.
    """

    def __init__(self, garden: Garden, on_complete: Callable[[], None] | None = None):
        self.garden = garden
        self.on_complete = on_complete
        self.index = 0
        self.accepted: list[Point] = []
        self.done = False
        self._surface: tuple | None = None

    @property
    def angle(self) -> float:
        heart = self.garden.options.heart
        return heart.start_angle + self.index * heart.step

    def heart_point(self, angle: float) -> Point:
        """Surface coordinates of the heart curve at a sweep angle."""
        heart = self.garden.options.heart
        profile = self.garden.profile
        t = angle / math.pi
        k = profile.scale
        x = heart.x_scale * k * (16 * math.sin(t) ** 3)
        y = -heart.y_scale * k * (13 * math.cos(t) - 5 * math.cos(2 * t)
                                  - 2 * math.cos(3 * t) - math.cos(4 * t))
        origin_x = self.garden.width / 2
        origin_y = self.garden.height / 2 - profile.heart_offset_y
        return (origin_x + x, origin_y + y)

    def _accepts(self, point: Point) -> bool:
        x, y = point
        if x < 0 or x > self.garden.width or y < 0 or y > self.garden.height:
            return False
        min_dist = self.garden.options.heart.spacing * self.garden.profile.bloom_radius.max
        for px, py in self.accepted:
            if math.hypot(px - x, py - y) < min_dist:
                return False
        return True

    def step(self) -> bool:
        """Sample one point. Returns False once the sweep is complete."""
        if self.done:
            return False
        surface = (self.garden.width, self.garden.height, self.garden.profile)
        if surface != self._surface:
            if self.accepted:
                logger.debug("Surface changed mid-sweep, spacing restarts at %dx%d",
                             self.garden.width, self.garden.height)
            self.accepted = []
            self._surface = surface
        point = self.heart_point(self.angle)
        if self._accepts(point):
            self.accepted.append(point)
            self.garden.create_random_bloom(*point)

        heart = self.garden.options.heart
        # Tolerance keeps float drift from adding a sample past the end
        if self.angle >= heart.end_angle - heart.step * 1e-6:
            self.done = True
            logger.debug("Heart seeding complete: %d blooms", len(self.accepted))
            if self.on_complete is not None:
                self.on_complete()
            return False
        self.index += 1
        return True

    def run(self) -> list[Point]:
        """Perform the whole sweep at once and return the accepted points."""
        while self.step():
            pass
        return self.accepted
