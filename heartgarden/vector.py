"""Minimal mutable 2D vector used by the petal geometry."""

import math

CIRCLE = 2 * math.pi


def radians(angle: float) -> float:
    """Degrees to radians."""
    return CIRCLE / 360 * angle


def degrees(angle: float) -> float:
    """Radians to degrees."""
    return angle / CIRCLE * 360


class Vector2:
    """2D vector. Geometric ops mutate in place and return self for chaining."""

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def rotate(self, theta: float) -> "Vector2":
        """Rotate by theta radians around the origin."""
        x, y = self.x, self.y
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        self.x = cos_t * x - sin_t * y
        self.y = sin_t * x + cos_t * y
        return self

    def scale(self, factor: float) -> "Vector2":
        self.x *= factor
        self.y *= factor
        return self

    def clone(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def subtract(self, other: "Vector2") -> "Vector2":
        self.x -= other.x
        self.y -= other.y
        return self

    def set(self, x: float, y: float) -> "Vector2":
        self.x = x
        self.y = y
        return self

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Vector2({self.x:.3f}, {self.y:.3f})"
