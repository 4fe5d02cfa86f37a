"""RGB pixel buffer with the few drawing primitives the garden needs.

Pixels live in a float32 numpy array of shape (height, width, 3), values 0-255.
Drawing is additive (the "lighter" composite mode): overlapping petals brighten
each other, and the buffer is clamped only when read back as bytes.
"""

import math
from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageDraw, ImageFilter

# Type aliases for colors
Color = tuple[int, int, int]
RGBA = tuple[int, int, int, float]
Point = tuple[float, float]

# A stroke is flattened into this many line segments at most
MIN_SEGMENTS = 4
MAX_SEGMENTS = 24
_PX_PER_SEGMENT = 3.0

# Stroke masks are drawn at this multiple of device resolution, then reduced
SUPERSAMPLE = 2


@dataclass(frozen=True)
class RadialGradient:
    """Two-circle radial gradient, starting circle has radius 0.

    Follows the canvas gradient model: a point's offset t is the largest t >= 0
    such that the point lies on the circle centred at lerp(start, end, t) with
    radius t * radius. Color stops are full at t=0 and transparent at t>=1.
    """

    x0: float
    y0: float
    x1: float
    y1: float
    radius: float

    def alpha(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Opacity factor (0..1) at local coordinates xs, ys."""
        if self.radius <= 0:
            return np.zeros(np.broadcast(xs, ys).shape, dtype=np.float32)
        qx = xs - self.x0
        qy = ys - self.y0
        dx = self.x1 - self.x0
        dy = self.y1 - self.y0
        a = dx * dx + dy * dy - self.radius * self.radius
        b = qx * dx + qy * dy
        c = qx * qx + qy * qy
        if abs(a) < 1e-9:
            with np.errstate(divide="ignore", invalid="ignore"):
                t = np.where(b > 0, c / (2 * b), np.inf)
        else:
            disc = b * b - a * c
            root = np.sqrt(np.maximum(disc, 0.0))
            t = np.maximum((b + root) / a, (b - root) / a)
            t = np.where((disc < 0) | (t < 0), np.inf, t)
        return np.clip(1.0 - t, 0.0, 1.0).astype(np.float32)


def bezier_points(p0: Point, c1: Point, c2: Point, p1: Point, n: int) -> np.ndarray:
    """Sample a cubic bezier at n evenly spaced parameters, shape (n, 2)."""
    t = np.linspace(0.0, 1.0, n)[:, None]
    mt = 1.0 - t
    pts = np.array([p0, c1, c2, p1], dtype=np.float64)
    return (mt ** 3 * pts[0] + 3 * mt ** 2 * t * pts[1]
            + 3 * mt * t ** 2 * pts[2] + t ** 3 * pts[3])


def segment_count(length_px: float) -> int:
    """Line segments used to flatten a curve of the given device length."""
    n = math.ceil(length_px / _PX_PER_SEGMENT)
    return int(min(MAX_SEGMENTS, max(MIN_SEGMENTS, n)))


def stroke_mask(pts: np.ndarray, width: int, height: int,
                line_width: float) -> Image.Image:
    """Rasterise a polyline with round joins and caps into an 8-bit mask.

    Points are in device pixels relative to the mask origin. The line is drawn
    at SUPERSAMPLE resolution and box-reduced for antialiased edges.
    """
    ss = SUPERSAMPLE
    mask = Image.new("L", (width * ss, height * ss), 0)
    draw = ImageDraw.Draw(mask)
    # Pixel i covers [i, i+1); PIL addresses pixel centres
    xy = [(float(x) * ss - 0.5, float(y) * ss - 0.5) for x, y in pts]
    lw = max(1, int(round(line_width * ss)))
    draw.line(xy, fill=255, width=lw, joint="curve")
    if lw > 2:
        rad = lw / 2
        for x, y in (xy[0], xy[-1]):
            draw.ellipse((x - rad, y - rad, x + rad, y + rad), fill=255)
    return mask.reduce(ss)


class Canvas:
    """Float RGB pixel buffer with a save/restore transform stack.

    The transform is a uniform scale plus translation:
    device = (tx, ty) + scale * local.
    """

    def __init__(self, width: int = 670, height: int = 625):
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width, 3), dtype=np.float32)
        self._transform = (1.0, 0.0, 0.0)
        self._stack: list[tuple[float, float, float]] = []

    def resize(self, width: int, height: int) -> None:
        """Reallocate the buffer. Contents and transform are reset."""
        self.width = width
        self.height = height
        self.buffer = np.zeros((height, width, 3), dtype=np.float32)
        self._transform = (1.0, 0.0, 0.0)
        self._stack.clear()

    def clear(self, color: Color = (0, 0, 0)) -> None:
        """Fill entire canvas with a color (default black)."""
        self.buffer[:] = color

    # --- Transform stack ---

    def save(self) -> None:
        self._stack.append(self._transform)

    def restore(self) -> None:
        if self._stack:
            self._transform = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        s, tx, ty = self._transform
        self._transform = (s, tx + s * dx, ty + s * dy)

    def scale(self, factor: float) -> None:
        s, tx, ty = self._transform
        self._transform = (s * factor, tx, ty)

    def to_device(self, x: float, y: float) -> Point:
        s, tx, ty = self._transform
        return (tx + s * x, ty + s * y)

    # --- Drawing ---

    def stroke_bezier(self, p0: Point, c1: Point, c2: Point, p1: Point,
                      color: RGBA, width: float = 1.0, glow: float = 0.0,
                      gradient: RadialGradient | None = None) -> None:
        """Stroke a cubic bezier with round caps, additive blending.

        Args:
            p0, c1, c2, p1: Start, two control points, end (local coordinates).
            color: (r, g, b, alpha) with alpha 0-1.
            width: Line width in local units (scaled by the transform).
            glow: Shadow blur radius in device pixels, drawn in the same color.
            gradient: Optional fade applied along the stroke, in local coordinates.
        """
        r, g, b, alpha = color
        if alpha <= 0:
            return
        s, tx, ty = self._transform

        ctrl = np.array([p0, c1, c2, p1], dtype=np.float64)
        poly_len = float(np.sum(np.hypot(*np.diff(ctrl, axis=0).T))) * s
        pts = bezier_points(p0, c1, c2, p1, segment_count(poly_len) + 1) * s + (tx, ty)

        line_width = max(width * s, 0.0)
        sigma = glow / 2
        reach = line_width / 2 + 3 * sigma + 1
        x0 = max(0, int(math.floor(pts[:, 0].min() - reach)))
        y0 = max(0, int(math.floor(pts[:, 1].min() - reach)))
        x1 = min(self.width, int(math.ceil(pts[:, 0].max() + reach)) + 1)
        y1 = min(self.height, int(math.ceil(pts[:, 1].max() + reach)) + 1)
        if x0 >= x1 or y0 >= y1:
            return

        mask = stroke_mask(pts - (x0, y0), x1 - x0, y1 - y0, line_width)
        coverage = np.asarray(mask, dtype=np.float32) / 255
        if sigma > 0:
            # Shadow is the blurred stroke, added under "lighter" compositing
            shadow = mask.filter(ImageFilter.GaussianBlur(sigma))
            coverage = coverage + np.asarray(shadow, dtype=np.float32) / 255
        if gradient is not None:
            ys, xs = np.mgrid[y0:y1, x0:x1].astype(np.float64) + 0.5
            coverage = coverage * gradient.alpha((xs - tx) / s, (ys - ty) / s)

        weight = (coverage * alpha).astype(np.float32)
        self.buffer[y0:y1, x0:x1] += weight[..., None] * np.array((r, g, b), dtype=np.float32)

    # --- Readback ---

    def get(self, x: int, y: int) -> Color:
        """Get a pixel's color (clamped). Returns (0,0,0) for out-of-bounds."""
        if 0 <= x < self.width and 0 <= y < self.height:
            px = np.clip(self.buffer[y, x], 0, 255).astype(np.uint8)
            return (int(px[0]), int(px[1]), int(px[2]))
        return (0, 0, 0)

    def to_array(self) -> np.ndarray:
        """Clamped uint8 copy of the buffer, shape (height, width, 3)."""
        return np.clip(self.buffer, 0, 255).astype(np.uint8)

    def get_buffer(self) -> bytes:
        """Get the entire pixel buffer as packed RGB bytes."""
        return self.to_array().tobytes()
