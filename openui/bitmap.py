"""In-memory 16-bit pixel buffers with clipping, offsets and basic drawing."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from .colors import (
    OPACITY_MAX,
    argb,
    argb_split,
    blend,
    color_val,
    rgb,
    rgb_join,
    rgb_split,
)
from .helpers import sgn

SOLID = 0xFF
"""Line pattern drawing every pixel."""
DOTTED = 0x55
"""Line pattern drawing every other pixel."""
STASHED = 0x33
"""Line pattern drawing two pixels out of four."""


class BitmapFormat(IntEnum):
    """Pixel layout of a buffer."""

    RGB565 = 0
    ARGB4444 = 1


class Bitmap:
    """A width x height grid of 16-bit pixels, stored row by row.

    Drawing calls take coordinates relative to the current offset and are
    clipped against the clipping rectangle, which starts as the whole buffer.
    """

    def __init__(
        self,
        fmt: BitmapFormat | int,
        width: int,
        height: int,
        data: Iterable[int] | None = None,
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("bitmap dimensions must not be negative")
        self.fmt = BitmapFormat(fmt)
        self.width = width
        self.height = height
        if data is None:
            self.data = [0] * (width * height)
        else:
            self.data = [value & 0xFFFF for value in data]
            if len(self.data) != width * height:
                raise ValueError(
                    f"expected {width * height} pixels, got {len(self.data)}"
                )
        self.xmin = 0
        self.xmax = width
        self.ymin = 0
        self.ymax = height
        self.offset_x = 0
        self.offset_y = 0

    def __repr__(self) -> str:
        return f"Bitmap({self.fmt.name}, {self.width}x{self.height})"

    # --- clipping and offsets -------------------------------------------

    def set_clipping_rect(self, xmin: int, xmax: int, ymin: int, ymax: int) -> None:
        """Restrict drawing to ``xmin <= x < xmax`` and ``ymin <= y < ymax``."""
        self.xmin, self.xmax, self.ymin, self.ymax = xmin, xmax, ymin, ymax

    def clear_clipping_rect(self) -> None:
        """Allow drawing over the whole buffer again."""
        self.set_clipping_rect(0, self.width, 0, self.height)

    @property
    def clipping_rect(self) -> tuple[int, int, int, int]:
        """The clipping rectangle as ``(xmin, xmax, ymin, ymax)``."""
        return self.xmin, self.xmax, self.ymin, self.ymax

    def set_offset(self, x: int, y: int) -> None:
        """Shift every later drawing call by ``(x, y)``."""
        self.offset_x, self.offset_y = x, y

    def clear_offset(self) -> None:
        """Drop the drawing offset."""
        self.set_offset(0, 0)

    def reset(self) -> None:
        """Drop the offset and the clipping rectangle."""
        self.clear_offset()
        self.clear_clipping_rect()

    def clip(
        self, x: int, y: int, w: int, h: int
    ) -> tuple[int, int, int, int] | None:
        """Clip an absolute rectangle; None when nothing of it is visible.

        Negative sizes extend the rectangle to the left or upwards.
        """
        if h < 0:
            y += h
            h = -h
        if w < 0:
            x += w
            w = -w
        if x >= self.xmax or y >= self.ymax:
            return None
        if y < self.ymin:
            h += y - self.ymin
            y = self.ymin
        if x < self.xmin:
            w += x - self.xmin
            x = self.xmin
        if y + h > self.ymax:
            h = self.ymax - y
        if x + w > self.xmax:
            w = self.xmax - x
        if h > 0 and w > 0:
            return x, y, w, h
        return None

    def clip_line(
        self, x1: int, y1: int, x2: int, y2: int
    ) -> tuple[int, int, int, int] | None:
        """Clip an absolute segment to the clipping rectangle (Liang-Barsky).

        Returns the clipped end points, or None when the segment is outside.
        """
        p1 = -float(x2 - x1)
        p2 = -p1
        p3 = -float(y2 - y1)
        p4 = -p3
        q1 = float(x1 - self.xmin)
        q2 = float(self.xmax - x1)
        q3 = float(y1 - self.ymin)
        q4 = float(self.ymax - y1)

        if (
            (p1 == 0 and q1 < 0)
            or (p2 == 0 and q2 < 0)
            or (p3 == 0 and q3 < 0)
            or (p4 == 0 and q4 < 0)
        ):
            return None

        positives = [1.0]
        negatives = [0.0]
        for p_low, q_low, p_high, q_high in ((p1, q1, p2, q2), (p3, q3, p4, q4)):
            if p_low != 0:
                r_low = q_low / p_low
                r_high = q_high / p_high
                if p_low < 0:
                    negatives.append(r_low)
                    positives.append(r_high)
                else:
                    negatives.append(r_high)
                    positives.append(r_low)

        rn1 = max(0.0, *negatives)
        rn2 = min(1.0, *positives)
        if rn1 > rn2:
            return None

        return (
            int(x1 + p2 * rn1),
            int(y1 + p4 * rn1),
            int(x1 + p2 * rn2),
            int(y1 + p4 * rn2),
        )

    # --- absolute pixel access --------------------------------------------

    def _index(self, x: int, y: int) -> int | None:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return None

    def _set_abs(self, x: int, y: int, value: int) -> None:
        index = self._index(x, y)
        if index is not None:
            self.data[index] = value & 0xFFFF

    def _alpha_abs(self, x: int, y: int, opacity: int, color: int) -> None:
        index = self._index(x, y)
        if index is not None:
            self.data[index] = blend(self.data[index], opacity, color) & 0xFFFF

    def _hline_abs(
        self, x: int, y: int, w: int, pat: int, flags: int, opacity: int
    ) -> None:
        color = color_val(flags)
        opacity = (0x0F - opacity) & 0xFF
        pat &= 0xFF
        for px in range(x, x + w):
            if pat == SOLID:
                self._alpha_abs(px, y, opacity, color)
            elif pat & 1:
                self._alpha_abs(px, y, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1

    # --- pixels -------------------------------------------------------------

    def get_pixel(self, x: int, y: int) -> int | None:
        """Value of a pixel, or None when it lies outside the clipping rect."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, 1, 1)
        if clipped is None:
            return None
        return self.data[clipped[1] * self.width + clipped[0]]

    def draw_pixel(self, x: int, y: int, value: int) -> None:
        """Set one pixel to ``value``."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, 1, 1)
        if clipped is not None:
            self._set_abs(clipped[0], clipped[1], value)

    def draw_alpha_pixel(self, x: int, y: int, opacity: int, color: int) -> None:
        """Blend ``color`` over one pixel at a 0..15 opacity."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, 1, 1)
        if clipped is not None:
            self._alpha_abs(clipped[0], clipped[1], opacity, color)

    # --- lines --------------------------------------------------------------

    def draw_horizontal_line(
        self,
        x: int,
        y: int,
        w: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        """Draw a horizontal line; ``opacity`` 0 is opaque, 15 invisible."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, w, 1)
        if clipped is None:
            return
        x, y, w, _ = clipped
        self._hline_abs(x, y, w, pat, flags, opacity)

    def draw_vertical_line(
        self,
        x: int,
        y: int,
        h: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        """Draw a vertical line; dotted lines always land on odd rows."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, 1, h)
        if clipped is None:
            return
        x, y, _, h = clipped
        opacity = (0x0F - opacity) & 0xFF
        color = color_val(flags)
        pat &= 0xFF
        if pat == SOLID:
            for py in range(y, y + h):
                self._alpha_abs(x, py, opacity, color)
            return
        if pat == DOTTED and y % 2 == 0:
            pat = ~pat & 0xFF
        for py in range(y, y + h):
            if pat & 1:
                self._alpha_abs(x, py, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1

    def draw_line(
        self, x1: int, y1: int, x2: int, y2: int, pat: int = SOLID, flags: int = 0
    ) -> None:
        """Draw a straight line between two points (Bresenham)."""
        clipped = self.clip_line(
            x1 + self.offset_x,
            y1 + self.offset_y,
            x2 + self.offset_x,
            y2 + self.offset_y,
        )
        if clipped is None:
            return
        x1, y1, x2, y2 = clipped
        color = color_val(flags)
        dx = x2 - x1
        dy = y2 - y1
        dxabs = abs(dx)
        dyabs = abs(dy)
        sdx = sgn(dx)
        sdy = sgn(dy)
        ex = dyabs >> 1
        ey = dxabs >> 1
        px, py = x1, y1

        if dxabs >= dyabs:
            for _ in range(dxabs + 1):
                if (1 << (px % 8)) & pat:
                    self._set_abs(px, py, color)
                ey += dyabs
                if ey >= dxabs:
                    ey -= dxabs
                    py += sdy
                px += sdx
        else:
            for _ in range(dyabs + 1):
                if (1 << (py % 8)) & pat:
                    self._set_abs(px, py, color)
                ex += dxabs
                if ex >= dyabs:
                    ex -= dyabs
                    px += sdx
                py += sdy

    # --- rectangles ---------------------------------------------------------

    def draw_rect(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        thickness: int = 1,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        """Draw a rectangle outline ``thickness`` pixels wide."""
        for i in range(thickness):
            self.draw_vertical_line(x + i, y, h, pat, flags, opacity)
            self.draw_vertical_line(x + w - 1 - i, y, h, pat, flags, opacity)
            self.draw_horizontal_line(x, y + h - 1 - i, w, pat, flags, opacity)
            self.draw_horizontal_line(x, y + i, w, pat, flags, opacity)

    def draw_solid_rect(
        self, x: int, y: int, w: int, h: int, thickness: int = 1, flags: int = 0
    ) -> None:
        """Draw an opaque rectangle outline ``thickness`` pixels wide."""
        self.draw_solid_filled_rect(x, y, thickness, h, flags)
        self.draw_solid_filled_rect(x + w - thickness, y, thickness, h, flags)
        self.draw_solid_filled_rect(x, y, w, thickness, flags)
        self.draw_solid_filled_rect(x, y + h - thickness, w, thickness, flags)

    def draw_solid_filled_rect(
        self, x: int, y: int, w: int, h: int, flags: int = 0
    ) -> None:
        """Fill a rectangle with the colour carried by ``flags``."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        color = color_val(flags)
        for row in range(y, y + h):
            start = row * self.width + x
            self.data[start:start + w] = [color] * w

    def draw_filled_rect(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        pat: int = SOLID,
        flags: int = 0,
        opacity: int = 0,
    ) -> None:
        """Fill a rectangle, patterned or blended; ``opacity`` 0 is opaque."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped

        if pat != SOLID:
            for row in range(y, y + h):
                self._hline_abs(x, row, w, pat, flags, opacity)
            return

        # The colour goes through a 4-bit-per-channel overlay, as on the device.
        r, g, b = rgb_split(color_val(flags))
        overlay = argb((OPACITY_MAX - opacity) << 4, r << 3, g << 2, b << 3)
        alpha, r4, g4, b4 = argb_split(overlay)
        color = rgb(r4 * 17, g4 * 17, b4 * 17)
        for row in range(y, y + h):
            for col in range(x, x + w):
                self._alpha_abs(col, row, alpha, color)

    def invert_rect(self, x: int, y: int, w: int, h: int, flags: int = 0) -> None:
        """Invert the pixels of a rectangle relative to the colour in ``flags``."""
        x += self.offset_x
        y += self.offset_y
        clipped = self.clip(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        red, green, blue = rgb_split(color_val(flags))
        for row in range(y, y + h):
            for col in range(x, x + w):
                index = row * self.width + col
                bg_red, bg_green, bg_blue = rgb_split(self.data[index])
                self.data[index] = rgb_join(
                    0x1F + red - bg_red,
                    0x3F + green - bg_green,
                    0x1F + blue - bg_blue,
                )

    def clear(self, flags: int = 0) -> None:
        """Fill the whole buffer with the colour in ``flags``."""
        self.draw_solid_filled_rect(
            0, 0, self.width - self.offset_x, self.height - self.offset_y, flags
        )