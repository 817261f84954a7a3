import pytest

from openui.bitmap import DOTTED, SOLID, Bitmap, BitmapFormat
from openui.colors import color_flags, rgb

WHITE = rgb(255, 255, 255)
RED = rgb(255, 0, 0)


def make(width=10, height=10):
    return Bitmap(BitmapFormat.RGB565, width, height)


def set_pixels(bmp):
    return {
        (x, y)
        for y in range(bmp.height)
        for x in range(bmp.width)
        if bmp.data[y * bmp.width + x]
    }


def test_new_bitmap_is_blank_and_unclipped():
    bmp = make(4, 3)
    assert bmp.data == [0] * 12
    assert bmp.clipping_rect == (0, 4, 0, 3)


def test_data_length_mismatch_raises():
    with pytest.raises(ValueError):
        Bitmap(BitmapFormat.RGB565, 2, 2, [1, 2, 3])


def test_negative_size_raises():
    with pytest.raises(ValueError):
        Bitmap(BitmapFormat.RGB565, -1, 2)


def test_format_from_int():
    assert Bitmap(1, 1, 1).fmt is BitmapFormat.ARGB4444


def test_clip_inside_and_outside():
    bmp = make()
    assert bmp.clip(2, 3, 4, 5) == (2, 3, 4, 5)
    assert bmp.clip(10, 0, 1, 1) is None
    assert bmp.clip(-5, 0, 3, 1) is None


def test_clip_trims_edges_and_negative_sizes():
    bmp = make()
    assert bmp.clip(-2, -3, 5, 5) == (0, 0, 3, 2)
    assert bmp.clip(8, 8, 5, 5) == (8, 8, 2, 2)
    assert bmp.clip(5, 5, -2, -2) == (3, 3, 2, 2)


def test_clip_line_outside_is_rejected():
    bmp = make()
    assert bmp.clip_line(-5, -1, 15, -1) is None


def test_clip_line_crossing_is_cut_to_bounds():
    bmp = make()
    assert bmp.clip_line(-5, 5, 15, 5) == (0, 5, 10, 5)


def test_clip_line_inside_is_unchanged():
    bmp = make()
    assert bmp.clip_line(1, 2, 7, 8) == (1, 2, 7, 8)


def test_draw_and_get_pixel_with_offset():
    bmp = make()
    bmp.set_offset(2, 3)
    bmp.draw_pixel(1, 1, RED)
    assert bmp.get_pixel(1, 1) == RED
    bmp.clear_offset()
    assert bmp.get_pixel(3, 4) == RED


def test_pixel_outside_clip_is_ignored():
    bmp = make()
    bmp.set_clipping_rect(2, 5, 2, 5)
    bmp.draw_pixel(0, 0, RED)
    assert bmp.get_pixel(0, 0) is None
    assert set_pixels(bmp) == set()
    bmp.reset()
    assert bmp.get_pixel(0, 0) == 0


def test_alpha_pixel_extremes():
    bmp = make()
    bmp.draw_alpha_pixel(1, 1, 15, RED)
    bmp.draw_alpha_pixel(2, 2, 0, RED)
    assert bmp.get_pixel(1, 1) == RED
    assert bmp.get_pixel(2, 2) == 0


def test_solid_horizontal_line():
    bmp = make()
    bmp.draw_horizontal_line(2, 4, 5, SOLID, color_flags(RED))
    assert set_pixels(bmp) == {(x, 4) for x in range(2, 7)}
    assert bmp.get_pixel(2, 4) == RED


def test_transparent_line_draws_nothing():
    bmp = make()
    bmp.draw_horizontal_line(0, 0, 10, SOLID, color_flags(RED), 15)
    assert set_pixels(bmp) == set()


def test_dotted_horizontal_line_alternates():
    bmp = make()
    bmp.draw_horizontal_line(0, 0, 10, DOTTED, color_flags(WHITE))
    assert set_pixels(bmp) == {(x, 0) for x in range(0, 10, 2)}


def test_dotted_vertical_line_uses_odd_rows():
    for start in (0, 1, 2):
        bmp = make()
        bmp.draw_vertical_line(3, start, 6, DOTTED, color_flags(WHITE))
        rows = {y for (_, y) in set_pixels(bmp)}
        assert rows
        assert all(y % 2 == 1 for y in rows)


def test_horizontal_line_clipped():
    bmp = make()
    bmp.draw_horizontal_line(-3, 1, 20, SOLID, color_flags(WHITE))
    assert set_pixels(bmp) == {(x, 1) for x in range(10)}


def test_draw_line_horizontal_and_diagonal():
    bmp = make()
    bmp.draw_line(0, 0, 4, 0, SOLID, color_flags(WHITE))
    bmp.draw_line(0, 2, 3, 5, SOLID, color_flags(WHITE))
    expected = {(x, 0) for x in range(5)} | {(i, 2 + i) for i in range(4)}
    assert set_pixels(bmp) == expected


def test_draw_line_reverse_direction_matches():
    a = make()
    b = make()
    a.draw_line(1, 1, 8, 1, SOLID, color_flags(WHITE))
    b.draw_line(8, 1, 1, 1, SOLID, color_flags(WHITE))
    assert a.data == b.data


def test_draw_line_past_edge_stays_in_buffer():
    bmp = make()
    bmp.draw_line(-5, 5, 15, 5, SOLID, color_flags(WHITE))
    assert set_pixels(bmp) == {(x, 5) for x in range(10)}


def test_draw_rect_outline_leaves_inside():
    bmp = make()
    bmp.draw_rect(1, 1, 5, 4, flags=color_flags(WHITE))
    pixels = set_pixels(bmp)
    assert (1, 1) in pixels and (5, 4) in pixels
    assert (3, 2) not in pixels
    assert len(pixels) == 2 * 5 + 2 * 2


def test_draw_solid_rect_matches_draw_rect():
    a = make()
    b = make()
    a.draw_rect(2, 2, 6, 5, 2, SOLID, color_flags(RED))
    b.draw_solid_rect(2, 2, 6, 5, 2, color_flags(RED))
    assert a.data == b.data


def test_solid_filled_rect():
    bmp = make()
    bmp.draw_solid_filled_rect(1, 2, 3, 2, color_flags(RED))
    assert set_pixels(bmp) == {(x, y) for x in range(1, 4) for y in range(2, 4)}


def test_filled_rect_opaque_white():
    bmp = make()
    bmp.draw_filled_rect(0, 0, 3, 3, SOLID, color_flags(WHITE), 0)
    assert bmp.get_pixel(2, 2) == WHITE
    assert bmp.get_pixel(3, 3) == 0


def test_filled_rect_fully_transparent():
    bmp = make()
    bmp.draw_filled_rect(0, 0, 10, 10, SOLID, color_flags(WHITE), 15)
    assert set_pixels(bmp) == set()


def test_filled_rect_pattern_matches_lines():
    a = make()
    b = make()
    a.draw_filled_rect(1, 1, 6, 3, DOTTED, color_flags(WHITE))
    for y in range(1, 4):
        b.draw_horizontal_line(1, y, 6, DOTTED, color_flags(WHITE))
    assert a.data == b.data


def test_invert_rect_twice_restores():
    bmp = make()
    bmp.draw_solid_filled_rect(0, 0, 5, 5, color_flags(RED))
    before = list(bmp.data)
    bmp.invert_rect(0, 0, 10, 10)
    assert bmp.data != before
    bmp.invert_rect(0, 0, 10, 10)
    assert bmp.data == before


def test_invert_black_gives_white():
    bmp = make(2, 2)
    bmp.invert_rect(0, 0, 2, 2)
    assert bmp.data == [WHITE] * 4