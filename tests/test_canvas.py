import numpy as np
import pytest

import heartgarden.canvas as canvas_module
from heartgarden.canvas import (
    MAX_SEGMENTS, MIN_SEGMENTS, Canvas, RadialGradient, bezier_points, segment_count,
)


def test_clear_and_readback():
    canvas = Canvas(4, 3)
    canvas.clear((10, 20, 30))
    assert canvas.get(0, 0) == (10, 20, 30)
    assert canvas.get(3, 2) == (10, 20, 30)
    assert canvas.get(4, 0) == (0, 0, 0)
    assert len(canvas.get_buffer()) == 4 * 3 * 3


def test_readback_clamps_additive_overflow():
    canvas = Canvas(2, 2)
    canvas.buffer[:] = 400
    assert canvas.get(1, 1) == (255, 255, 255)
    assert canvas.to_array().dtype == np.uint8


def test_transform_stack():
    canvas = Canvas(10, 10)
    canvas.save()
    canvas.translate(5, 5)
    canvas.scale(2)
    canvas.translate(1, 0)
    assert canvas.to_device(1, 1) == (9, 7)
    canvas.restore()
    assert canvas.to_device(1, 1) == (1, 1)


def test_restore_without_save_is_harmless():
    canvas = Canvas(10, 10)
    canvas.restore()
    assert canvas.to_device(3, 4) == (3, 4)


def test_resize_resets_buffer():
    canvas = Canvas(10, 10)
    canvas.translate(3, 3)
    canvas.resize(20, 5)
    assert canvas.buffer.shape == (5, 20, 3)
    assert canvas.to_device(0, 0) == (0, 0)


def test_bezier_endpoints():
    pts = bezier_points((0, 0), (1, 5), (4, 5), (5, 0), 11)
    assert pts.shape == (11, 2)
    assert tuple(pts[0]) == (0, 0)
    assert tuple(pts[-1]) == pytest.approx((5, 0))


def test_radial_gradient_fades_from_start():
    grad = RadialGradient(0, 0, 1, 0, 2)
    xs = np.array([0.0, 0.5, 10.0])
    ys = np.zeros(3)
    alpha = grad.alpha(xs, ys)
    assert alpha[0] == pytest.approx(1.0)
    assert alpha[1] == pytest.approx(1 - 1 / 6)
    assert alpha[2] == 0.0


def test_radial_gradient_zero_radius_is_transparent():
    grad = RadialGradient(0, 0, 1, 0, 0)
    assert not grad.alpha(np.array([0.0]), np.array([0.0])).any()


def test_stroke_paints_along_curve_only():
    canvas = Canvas(40, 40)
    canvas.stroke_bezier((5, 20), (15, 20), (25, 20), (35, 20), (200, 100, 50, 1.0), width=2)
    assert canvas.get(20, 20) != (0, 0, 0)
    assert canvas.get(20, 5) == (0, 0, 0)
    r, g, b = canvas.get(20, 20)
    assert r > g > b


def test_stroke_is_additive():
    canvas = Canvas(20, 20)
    args = ((2, 10), (8, 10), (12, 10), (18, 10), (100, 0, 0, 0.2))
    canvas.stroke_bezier(*args, width=2)
    once = float(canvas.buffer[10, 10, 0])
    canvas.stroke_bezier(*args, width=2)
    assert once > 0
    assert float(canvas.buffer[10, 10, 0]) == pytest.approx(2 * once, rel=1e-5)


def test_glow_spreads_beyond_stroke():
    plain = Canvas(40, 40)
    glowing = Canvas(40, 40)
    args = ((5, 20), (15, 20), (25, 20), (35, 20), (255, 0, 0, 0.5))
    plain.stroke_bezier(*args, width=1)
    glowing.stroke_bezier(*args, width=1, glow=6)
    assert plain.buffer[24, 20, 0] == 0
    assert glowing.buffer[24, 20, 0] > 0


def test_stroke_respects_transform():
    canvas = Canvas(40, 40)
    canvas.translate(30, 30)
    canvas.stroke_bezier((0, 0), (1, 0), (2, 0), (3, 0), (255, 255, 255, 1.0), width=2)
    assert canvas.get(31, 30) != (0, 0, 0)
    assert canvas.get(1, 0) == (0, 0, 0)


def test_stroke_off_canvas_is_ignored():
    canvas = Canvas(10, 10)
    canvas.stroke_bezier((100, 100), (110, 100), (120, 100), (130, 100), (255, 0, 0, 1.0))
    assert not canvas.buffer.any()


def test_transparent_stroke_draws_nothing():
    canvas = Canvas(10, 10)
    canvas.stroke_bezier((1, 5), (3, 5), (6, 5), (9, 5), (255, 0, 0, 0.0), width=3)
    assert not canvas.buffer.any()


def test_segment_count_is_bounded():
    assert segment_count(0) == MIN_SEGMENTS
    assert segment_count(30) == 10
    assert segment_count(10_000) == MAX_SEGMENTS


def test_long_stroke_is_flattened_to_capped_segments(monkeypatch):
    calls = []

    def recording(*args):
        calls.append(args[-1])
        return bezier_points(*args)

    monkeypatch.setattr(canvas_module, "bezier_points", recording)
    canvas = Canvas(670, 625)
    canvas.stroke_bezier((10, 300), (200, 10), (450, 600), (660, 300),
                         (255, 0, 0, 0.5), width=3, glow=6)
    assert calls == [MAX_SEGMENTS + 1]
    assert canvas.buffer[:, :, 0].any()


def test_garden_frame_strokes_stay_within_segment_cap(monkeypatch, make_garden):
    calls = []

    def recording(*args):
        calls.append(args[-1])
        return bezier_points(*args)

    monkeypatch.setattr(canvas_module, "bezier_points", recording)
    garden = make_garden()
    for x in range(100, 600, 50):
        garden.create_random_bloom(x, 300)
    for frame in range(40):
        garden.render(frame * 20.0)
    assert calls
    assert max(calls) - 1 <= MAX_SEGMENTS
