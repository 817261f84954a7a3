"""Filled triangles, circles and annulus sectors drawn onto a Bitmap."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from .bitmap import SOLID, Bitmap
from .colors import color_val

_VERTICAL_SLOPE = 99000
_INFINITE_SLOPE = 100000


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


@dataclass(frozen=True)
class Slope:
    """A direction from a centre, as a half plane side and a scaled slope.

    ``left`` tells whether the direction points to the left half, ``value``
    is ``100 * dy / dx`` (or a large sentinel for vertical directions).
    """

    left: bool
    value: int

    @classmethod
    def from_angle(cls, angle: int) -> Slope:
        """Slope of a direction given in degrees, 0 pointing straight up."""
        if angle < 0:
            angle += 360
        if angle > 360:
            angle %= 360
        if angle == 0:
            return cls(False, _INFINITE_SLOPE)
        if angle == 360:
            return cls(True, _INFINITE_SLOPE)
        radians = _f32(angle * (math.pi / 180.0))
        ratio = _f32(_f32(_f32(math.cos(radians)) * 100) / _f32(math.sin(radians)))
        if angle >= 180:
            return cls(True, int(-ratio))
        return cls(False, int(ratio))

    def is_between(self, start: Slope, end: Slope) -> bool:
        """Tell whether this direction lies in the sector from ``start`` to ``end``."""
        value = self.value
        if self.left:
            if start.left:
                if end.left:
                    if end.value > start.value:
                        return start.value <= value <= end.value
                    return value <= end.value or value >= start.value
                return value >= start.value
            if end.left:
                return value <= end.value
            return end.value > start.value
        if start.left:
            if end.left:
                return start.value > end.value
            return value >= end.value
        if end.left:
            return value <= start.value
        if end.value < start.value:
            return end.value <= value <= start.value
        return value <= start.value or value >= end.value

    def inverted_vertical(self) -> Slope:
        """The same direction mirrored across the horizontal axis."""
        return Slope(self.left, -self.value)

    def inverted_horizontal(self) -> Slope:
        """The same direction mirrored across the vertical axis."""
        return Slope(not self.left, self.value)


def fill_triangle(
    dc: Bitmap,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    flags: int = 0,
    opacity: int = 0,
) -> None:
    """Fill the triangle with the given corners, scanline by scanline."""
    (x0, y0), (x1, y1), (x2, y2) = sorted(
        [(x0, y0), (x1, y1), (x2, y2)], key=lambda point: point[1]
    )

    if y0 == y2:
        a = min(x0, x1, x2)
        b = max(x0, x1, x2)
        dc.draw_horizontal_line(a, y0, b - a + 1, SOLID, flags, opacity)
        return

    dx01, dy01 = x1 - x0, y1 - y0
    dx02, dy02 = x2 - x0, y2 - y0
    dx12, dy12 = x2 - x1, y2 - y1
    sa = sb = 0
    last = y1 if y1 == y2 else y1 - 1

    y = y0
    while y <= last:
        a = x0 + _trunc_div(sa, dy01)
        b = x0 + _trunc_div(sb, dy02)
        sa += dx01
        sb += dx02
        if a > b:
            a, b = b, a
        dc.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1

    sa = dx12 * (y - y1)
    sb = dx02 * (y - y0)
    while y <= y2:
        a = x1 + _trunc_div(sa, dy12)
        b = x0 + _trunc_div(sb, dy02)
        sa += dx12
        sb += dx02
        if a > b:
            a, b = b, a
        dc.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1


def draw_circle(dc: Bitmap, x: int, y: int, radius: int, flags: int = 0) -> None:
    """Draw a circle outline with the midpoint algorithm."""
    color = color_val(flags)
    x1 = radius
    y1 = 0
    decision = 1 - x1
    while y1 <= x1:
        for px, py in (
            (x1, y1),
            (y1, x1),
            (-x1, y1),
            (-y1, x1),
            (-x1, -y1),
            (-y1, -x1),
            (x1, -y1),
            (y1, -x1),
        ):
            dc.draw_pixel(x + px, y + py, color)
        y1 += 1
        if decision <= 0:
            decision += 2 * y1 + 1
        else:
            x1 -= 1
            decision += 2 * (y1 - x1) + 1


def fill_circle(dc: Bitmap, x: int, y: int, radius: int, flags: int = 0) -> None:
    """Fill a disc with horizontal spans."""
    imax = _trunc_div(radius * 707, 1000) + 1
    sqmax = radius * radius + _trunc_div(radius, 2)
    x1 = radius
    dc.draw_solid_filled_rect(x - radius, y, radius * 2, 1, flags)
    for i in range(1, imax + 1):
        if i * i + x1 * x1 > sqmax:
            if x1 > imax:
                dc.draw_solid_filled_rect(x - i + 1, y + x1, (i - 1) * 2, 1, flags)
                dc.draw_solid_filled_rect(x - i + 1, y - x1, (i - 1) * 2, 1, flags)
            x1 -= 1
        dc.draw_solid_filled_rect(x - x1, y + i, x1 * 2, 1, flags)
        dc.draw_solid_filled_rect(x - x1, y - i, x1 * 2, 1, flags)


def _put(dc: Bitmap, x: int, y: int, color: int) -> None:
    if 0 <= x < dc.width and 0 <= y < dc.height:
        dc.data[y * dc.width + x] = color & 0xFFFF


def draw_annulus_sector(
    dc: Bitmap,
    x: int,
    y: int,
    internal_radius: int,
    external_radius: int,
    start_angle: int,
    end_angle: int,
    flags: int = 0,
) -> None:
    """Draw the part of a ring between two angles, in degrees clockwise from up."""
    if end_angle == start_angle:
        end_angle += 1
    start = Slope.from_angle(start_angle)
    end = Slope.from_angle(end_angle)
    color = color_val(flags)
    x += dc.offset_x
    y += dc.offset_y

    internal_dist = internal_radius * internal_radius
    external_dist = external_radius * external_radius

    for y1 in range(external_radius + 1):
        for x1 in range(external_radius + 1):
            dist = x1 * x1 + y1 * y1
            if not internal_dist <= dist <= external_dist:
                continue
            slope = Slope(False, _VERTICAL_SLOPE if x1 == 0 else y1 * 100 // x1)
            if slope.is_between(start, end):
                _put(dc, x + x1, y - y1, color)
            slope = slope.inverted_vertical()
            if slope.is_between(start, end):
                _put(dc, x + x1, y + y1, color)
            slope = slope.inverted_horizontal()
            if slope.is_between(start, end):
                _put(dc, x - x1, y + y1, color)
            slope = slope.inverted_vertical()
            if slope.is_between(start, end):
                _put(dc, x - x1, y - y1, color)