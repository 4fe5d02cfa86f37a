"""A flower: a ring of petals sharing a centre, colour and growth scale."""

from typing import TYPE_CHECKING

from heartgarden.canvas import RGBA
from heartgarden.petal import PetalCurve
from heartgarden.vector import Vector2

if TYPE_CHECKING:
    from heartgarden.garden import Garden

SCALE_STEP = 0.02


class Bloom:
    """One flower with a one-shot lifecycle: grow, bloom, vanish.

    Registers itself with the garden on construction and asks to be removed
    the first time it draws with every petal finished.
    """

    def __init__(self, position: Vector2, radius: float, color: RGBA,
                 petal_count: int, garden: "Garden"):
        if petal_count < 1:
            raise ValueError(f"petal_count must be at least 1, got {petal_count}")
        self.position = position
        self.radius = radius
        self.color = color
        self.petal_count = petal_count
        self.garden = garden
        self.petals: list[PetalCurve] = []
        self.scale = 1.0
        self.max_scale = garden.profile.scale
        self.removed = False
        self._init_petals()
        garden.add_bloom(self)

    def _init_petals(self) -> None:
        options = self.garden.options
        rng = self.garden.rng
        angle = 360 / self.petal_count
        start_angle = rng.randrange(0, 90)
        max_opacity = self.color[3]
        for i in range(self.petal_count):
            self.petals.append(PetalCurve(
                rng.uniform(options.petal_stretch.min, options.petal_stretch.max),
                rng.uniform(options.petal_stretch.min, options.petal_stretch.max),
                start_angle + i * angle,
                angle,
                rng.uniform(options.grow_factor.min, options.grow_factor.max),
                self,
                max_opacity,
            ))

    @property
    def finished(self) -> bool:
        return all(p.finished for p in self.petals)

    def _step_scale(self) -> None:
        # Move toward max_scale from either side; mobile profiles shrink from 1.
        if self.scale < self.max_scale:
            self.scale = min(self.max_scale, self.scale + SCALE_STEP)
        elif self.scale > self.max_scale:
            self.scale = max(self.max_scale, self.scale - SCALE_STEP)

    def draw(self) -> None:
        if self.removed:
            return
        canvas = self.garden.canvas
        canvas.save()
        canvas.translate(self.position.x, self.position.y)
        self._step_scale()
        canvas.scale(self.scale)
        for petal in self.petals:
            petal.render()
        canvas.restore()

        if self.finished:
            self.garden.remove_bloom(self)
