"""A single petal: a bezier curve that grows outward from the bloom centre."""

from typing import TYPE_CHECKING

from heartgarden.canvas import RadialGradient
from heartgarden.vector import Vector2, radians

if TYPE_CHECKING:
    from heartgarden.bloom import Bloom

# Opacity reaches its cap after this many draws
OPACITY_STEPS = 20


class PetalCurve:
    """One petal's growth-and-draw state.

    The petal is GROWING while its radius is within the bloom's radius and
    FINISHED afterwards. Once finished it neither grows nor draws again.
    """

    def __init__(self, stretch_a: float, stretch_b: float, start_angle: float,
                 angle: float, grow_factor: float, bloom: "Bloom",
                 max_opacity: float):
        self.stretch_a = stretch_a
        self.stretch_b = stretch_b
        self.start_angle = start_angle
        self.angle = angle
        self.grow_factor = grow_factor
        self.bloom = bloom
        self.max_opacity = max_opacity
        self.r = 1.0
        self.opacity = 0.0
        self.finished = False

    def control_points(self) -> tuple[Vector2, Vector2, Vector2, Vector2]:
        """Return (start, end, control A, control B) in bloom-local space."""
        v1 = Vector2(0, self.r).rotate(radians(self.start_angle))
        v2 = v1.clone().rotate(radians(self.angle))
        v3 = v1.clone().scale(self.stretch_a)
        v4 = v2.clone().scale(self.stretch_b)
        return v1, v2, v3, v4

    def render(self) -> None:
        if self.finished:
            return
        if self.r <= self.bloom.radius:
            self.r += self.grow_factor
            self.draw()
        else:
            self.finished = True

    def draw(self) -> None:
        v1, v2, v3, v4 = self.control_points()
        if self.opacity < self.max_opacity:
            self.opacity = min(self.max_opacity,
                               self.opacity + self.max_opacity / OPACITY_STEPS)

        profile = self.bloom.garden.profile
        r, g, b, _ = self.bloom.color
        gradient = RadialGradient(v1.x, v1.y, v2.x, v2.y, self.r)
        self.bloom.garden.canvas.stroke_bezier(
            v1.as_tuple(), v3.as_tuple(), v4.as_tuple(), v2.as_tuple(),
            (r, g, b, self.opacity),
            width=profile.stroke_width,
            glow=profile.glow_blur,
            gradient=gradient,
        )
