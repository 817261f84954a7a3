import pytest

from openui.bitmap import Bitmap, BitmapFormat
from openui.colors import color_flags
from openui.shapes import (
    Slope,
    draw_annulus_sector,
    draw_circle,
    fill_circle,
    fill_triangle,
)

RED = 0xF800
FLAGS = color_flags(RED)


def make(w=20, h=20):
    return Bitmap(BitmapFormat.RGB565, w, h)


def lit(dc):
    return {
        (i % dc.width, i // dc.width)
        for i, value in enumerate(dc.data)
        if value == RED
    }


# --- Slope --------------------------------------------------------------


def test_slope_zero_and_full_turn_are_sentinels():
    assert Slope.from_angle(0) == Slope(False, 100000)
    assert Slope.from_angle(360) == Slope(True, 100000)


def test_slope_right_angle_is_flat():
    assert Slope.from_angle(90) == Slope(False, 0)


@pytest.mark.parametrize("angle", [10, 45, 90, 135, 200, 270, 300])
def test_negative_angle_wraps(angle):
    assert Slope.from_angle(angle - 360) == Slope.from_angle(angle)


@pytest.mark.parametrize("angle", [10, 45, 90, 135, 200, 270])
def test_large_angle_wraps(angle):
    assert Slope.from_angle(angle + 360) == Slope.from_angle(angle)


@pytest.mark.parametrize("angle", [30, 120, 200, 330])
def test_side_of_slope(angle):
    assert Slope.from_angle(angle).left == (angle >= 180)


def test_inversions_are_involutions():
    s = Slope(False, 42)
    assert s.inverted_vertical().inverted_vertical() == s
    assert s.inverted_horizontal().inverted_horizontal() == s
    assert s.inverted_vertical() == Slope(False, -42)
    assert s.inverted_horizontal() == Slope(True, 42)


@pytest.mark.parametrize("value", [-99000, -100, 0, 100, 99000])
@pytest.mark.parametrize("left", [False, True])
def test_full_turn_contains_everything(left, value):
    start = Slope.from_angle(0)
    end = Slope.from_angle(360)
    assert Slope(left, value).is_between(start, end)


def test_right_half_excludes_left_side():
    start = Slope.from_angle(0)
    end = Slope.from_angle(180)
    assert Slope(False, 50).is_between(start, end)
    assert not Slope(True, 50).is_between(start, end)


# --- triangle -----------------------------------------------------------


def test_fill_right_triangle():
    dc = make()
    fill_triangle(dc, 0, 0, 4, 0, 0, 4, FLAGS)
    expected = {(x, y) for y in range(5) for x in range(5) if x + y <= 4}
    assert lit(dc) == expected


def test_fill_triangle_vertex_order_irrelevant():
    a = make()
    b = make()
    fill_triangle(a, 2, 3, 15, 8, 6, 17, FLAGS)
    fill_triangle(b, 6, 17, 2, 3, 15, 8, FLAGS)
    assert a.data == b.data


def test_fill_flat_triangle_is_a_line():
    dc = make()
    fill_triangle(dc, 5, 7, 2, 7, 9, 7, FLAGS)
    assert lit(dc) == {(x, 7) for x in range(2, 10)}


def test_fill_triangle_contains_vertices():
    dc = make()
    fill_triangle(dc, 2, 3, 15, 8, 6, 17, FLAGS)
    pixels = lit(dc)
    assert {(2, 3), (6, 17)} <= pixels
    assert (19, 0) not in pixels


def test_transparent_triangle_draws_nothing():
    dc = make()
    fill_triangle(dc, 0, 0, 10, 0, 0, 10, FLAGS, 15)
    assert lit(dc) == set()


# --- circles ------------------------------------------------------------


def test_circle_radius_zero_is_a_point():
    dc = make()
    draw_circle(dc, 5, 6, 0, FLAGS)
    assert lit(dc) == {(5, 6)}


def test_circle_outline():
    dc = make()
    draw_circle(dc, 10, 10, 5, FLAGS)
    pixels = lit(dc)
    assert {(15, 10), (5, 10), (10, 15), (10, 5)} <= pixels
    assert (10, 10) not in pixels
    assert pixels == {(20 - x, y) for x, y in pixels}
    assert pixels == {(x, 20 - y) for x, y in pixels}
    assert pixels == {(y, x) for x, y in pixels}


def test_circle_is_clipped():
    dc = make(10, 10)
    draw_circle(dc, 0, 0, 4, FLAGS)
    pixels = lit(dc)
    assert (4, 0) in pixels
    assert all(0 <= x < 10 and 0 <= y < 10 for x, y in pixels)


def test_filled_circle_stays_inside():
    dc = make()
    fill_circle(dc, 10, 10, 6, FLAGS)
    pixels = lit(dc)
    assert (10, 10) in pixels
    assert (9, 9) in pixels
    assert all((x - 10) ** 2 + (y - 10) ** 2 <= 7 * 7 for x, y in pixels)
    assert pixels == {(x, 20 - y) for x, y in pixels}


# --- annulus ------------------------------------------------------------


def test_full_annulus():
    dc = make()
    draw_annulus_sector(dc, 10, 10, 3, 6, 0, 360, FLAGS)
    pixels = lit(dc)
    assert (10, 10) not in pixels
    assert {(16, 10), (4, 10), (10, 4), (10, 16)} <= pixels
    assert all(9 <= (x - 10) ** 2 + (y - 10) ** 2 <= 36 for x, y in pixels)
    assert pixels == {(20 - x, y) for x, y in pixels}


def test_annulus_right_half():
    dc = make()
    draw_annulus_sector(dc, 10, 10, 2, 6, 0, 180, FLAGS)
    pixels = lit(dc)
    assert (16, 10) in pixels
    assert (4, 10) not in pixels
    assert all(x >= 10 for x, _ in pixels)


def test_annulus_honours_offset():
    plain = make()
    shifted = make()
    draw_annulus_sector(plain, 12, 11, 1, 4, 0, 360, FLAGS)
    shifted.set_offset(2, 1)
    draw_annulus_sector(shifted, 10, 10, 1, 4, 0, 360, FLAGS)
    assert plain.data == shifted.data