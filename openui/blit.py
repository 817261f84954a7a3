"""Copying bitmaps, alpha masks and glyph patterns onto a Bitmap."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .bitmap import Bitmap, BitmapFormat
from .colors import OPACITY_MAX, argb_split, blend, color_val, rgb_join, rgb_split
from .shapes import Slope

_VERTICAL_SLOPE = 99000
_HEADER = struct.Struct("<HH")


@dataclass(frozen=True)
class AlphaMask:
    """A width x height grid of 8-bit alpha values, stored row by row."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("mask dimensions must not be negative")
        data = bytes(self.data)
        if len(data) != self.width * self.height:
            raise ValueError(
                f"expected {self.width * self.height} alpha values, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    @classmethod
    def from_bytes(cls, raw: bytes) -> AlphaMask:
        """Parse a mask stored as little-endian 16-bit width and height, then alphas."""
        if len(raw) < _HEADER.size:
            raise ValueError("mask header is truncated")
        width, height = _HEADER.unpack_from(raw)
        body = raw[_HEADER.size:_HEADER.size + width * height]
        return cls(width, height, body)

    def to_bytes(self) -> bytes:
        """Serialise the mask with its width and height header."""
        return _HEADER.pack(self.width, self.height) + self.data


def rle_decode(src: bytes, dest_size: int) -> bytes:
    """Expand run-length encoded bytes into exactly ``dest_size`` bytes.

    Two equal bytes in a row are followed by a count of further repeats.
    """
    out = bytearray()
    source = iter(src)
    prev: int | None = None
    while len(out) < dest_size:
        byte = next(source, None)
        if byte is None:
            raise ValueError("run-length data ends early")
        out.append(byte)
        if prev is not None and byte == prev:
            count = next(source, None)
            if count is None:
                raise ValueError("run-length data ends early")
            if len(out) + count > dest_size:
                raise ValueError("run-length data overflows the destination")
            out.extend([byte] * count)
            prev = None
        else:
            prev = byte
    return bytes(out)


def rle_bitmap(fmt: BitmapFormat | int, rle_data: bytes) -> Bitmap:
    """Build a bitmap from a width/height header followed by run-length pixels."""
    if len(rle_data) < _HEADER.size:
        raise ValueError("bitmap header is truncated")
    width, height = _HEADER.unpack_from(rle_data)
    count = width * height
    decoded = rle_decode(rle_data[_HEADER.size:], count * 2)
    pixels = struct.unpack(f"<{count}H", decoded)
    return Bitmap(fmt, width, height, pixels)


def _inside(dc: Bitmap, x: int, y: int) -> bool:
    return 0 <= x < dc.width and 0 <= y < dc.height


def _put(dc: Bitmap, x: int, y: int, value: int) -> None:
    if _inside(dc, x, y):
        dc.data[y * dc.width + x] = value & 0xFFFF


def _blend_at(dc: Bitmap, x: int, y: int, opacity: int, color: int) -> None:
    if _inside(dc, x, y):
        index = y * dc.width + x
        dc.data[index] = blend(dc.data[index], opacity, color) & 0xFFFF


def _paint(dc: Bitmap, x: int, y: int, value: int, has_alpha: bool) -> None:
    if has_alpha:
        a, r, g, b = argb_split(value)
        _blend_at(dc, x, y, a, rgb_join(r << 1, g << 2, b << 1))
    else:
        _put(dc, x, y, value)


def _linear(bmp: Bitmap, x: int, y: int) -> int | None:
    index = y * bmp.width + x
    if 0 <= index < len(bmp.data):
        return bmp.data[index]
    return None


def _draw_bitmap_abs(
    dc: Bitmap,
    x: int,
    y: int,
    bmp: Bitmap,
    srcx: int,
    srcy: int,
    srcw: int,
    srch: int,
    scale: float,
) -> None:
    bmpw, bmph = bmp.width, bmp.height
    if srcw == 0:
        srcw = bmpw
    if srch == 0:
        srch = bmph
    if srcx + srcw > bmpw:
        srcw = bmpw - srcx
    if srcy + srch > bmph:
        srch = bmph - srcy

    if scale == 0:
        if x < dc.xmin:
            srcw += x - dc.xmin
            srcx -= x - dc.xmin
            x = dc.xmin
        if y < dc.ymin:
            srch += y - dc.ymin
            srcy -= y - dc.ymin
            y = dc.ymin
        if x + srcw > dc.xmax:
            srcw = dc.xmax - x
        if y + srch > dc.ymax:
            srch = dc.ymax - y
    else:
        if x < dc.xmin:
            shift = (x - dc.xmin) / scale
            srcw = int(srcw + shift)
            srcx = int(srcx - shift)
            x = dc.xmin
        if y < dc.ymin:
            shift = (y - dc.ymin) / scale
            srch = int(srch + shift)
            srcy = int(srcy - shift)
            y = dc.ymin
        if x + srcw * scale > dc.xmax:
            srcw = int((dc.xmax - x) / scale)
        if y + srch * scale > dc.ymax:
            srch = int((dc.ymax - y) / scale)

    if srcw <= 0 or srch <= 0:
        return

    has_alpha = bmp.fmt == BitmapFormat.ARGB4444

    if scale == 0:
        for row in range(srch):
            sy = srcy + row
            if not 0 <= sy < bmph:
                continue
            for col in range(srcw):
                sx = srcx + col
                if 0 <= sx < bmpw:
                    _paint(dc, x + col, y + row, bmp.data[sy * bmpw + sx], has_alpha)
        return

    scaledw = int(srcw * scale)
    scaledh = int(srch * scale)
    if x + scaledw > dc.width:
        scaledw = dc.width - x
    if y + scaledh > dc.height:
        scaledh = dc.height - y

    for i in range(scaledh):
        sy = srcy + int(i / scale)
        for j in range(scaledw):
            value = _linear(bmp, srcx + int(j / scale), sy)
            if value is not None:
                _paint(dc, x + j, y + i, value, has_alpha)


def draw_bitmap(
    dc: Bitmap,
    x: int,
    y: int,
    bmp: Bitmap | None,
    srcx: int = 0,
    srcy: int = 0,
    srcw: int = 0,
    srch: int = 0,
    scale: float = 0,
) -> None:
    """Copy part of ``bmp`` onto ``dc``, blending ARGB4444 sources.

    A zero source width or height means the whole bitmap; a non-zero
    ``scale`` resizes the copy by that factor.
    """
    if bmp is None:
        return
    x += dc.offset_x
    y += dc.offset_y
    if x >= dc.xmax or y >= dc.ymax:
        return
    _draw_bitmap_abs(dc, x, y, bmp, srcx, srcy, srcw, srch, scale)


def draw_scaled_bitmap(
    dc: Bitmap, bmp: Bitmap | None, x: int, y: int, w: int, h: int
) -> None:
    """Fit ``bmp`` into the box, keeping its aspect ratio, and centre it."""
    if bmp is None or bmp.width == 0 or bmp.height == 0:
        return
    vscale = h / bmp.height
    hscale = w / bmp.width
    scale = min(vscale, hscale)
    xshift = int((w - bmp.width * scale) / 2)
    yshift = int((h - bmp.height * scale) / 2)
    draw_bitmap(dc, x + xshift, y + yshift, bmp, 0, 0, 0, 0, scale)


def draw_mask(
    dc: Bitmap,
    x: int,
    y: int,
    mask: Bitmap | None,
    flags: int = 0,
    offset_x: int = 0,
    width: int = 0,
) -> None:
    """Paint the colour in ``flags`` through a mask of 0..15 opacities."""
    if mask is None:
        return
    x += dc.offset_x
    y += dc.offset_y

    height = mask.height
    if not width or width > mask.width:
        width = mask.width
    if x + width > dc.xmax:
        width = dc.xmax - x
    if x < dc.xmin:
        width += x - dc.xmin
        offset_x -= x - dc.xmin
        x = dc.xmin
    if (
        y >= dc.ymax
        or x >= dc.xmax
        or width <= 0
        or x + width < dc.xmin
        or y + height < dc.ymin
    ):
        return

    color = color_val(flags)
    for row in range(height):
        if not dc.ymin <= y + row < dc.ymax:
            continue
        for col in range(width):
            value = _linear(mask, offset_x + col, row)
            if value is not None:
                _blend_at(dc, x + col, y + row, value & 0xFF, color)


def draw_mask_from_source(
    dc: Bitmap,
    x: int,
    y: int,
    mask: Bitmap | None,
    source: Bitmap | None,
    offset_x: int = 0,
    offset_y: int = 0,
    width: int = 0,
    height: int = 0,
) -> None:
    """Paint pixels of ``source`` through a mask of 0..15 opacities.

    The source pixel for mask row ``r`` and column ``c`` is read at
    ``(r, c)``, that is with its axes swapped.
    """
    if mask is None or source is None:
        return
    x += dc.offset_x
    y += dc.offset_y

    if not width or width > mask.width:
        width = mask.width
    if not height or height > mask.height:
        height = mask.height
    if x + width > dc.xmax:
        width = dc.xmax - x
    if x < dc.xmin:
        width += x - dc.xmin
        offset_x -= x - dc.xmin
        x = dc.xmin
    if (
        y >= dc.ymax
        or x >= dc.xmax
        or width <= 0
        or x + width < dc.xmin
        or y + height < dc.ymin
    ):
        return

    for row in range(height):
        if not dc.ymin <= y + row < dc.ymax:
            continue
        for col in range(width):
            opacity = _linear(mask, offset_x + col, offset_y + row)
            color = _linear(source, row, col)
            if opacity is not None and color is not None:
                _blend_at(dc, x + col, y + row, opacity & 0xFF, color)


def draw_bitmap_pattern(
    dc: Bitmap,
    x: int,
    y: int,
    pattern: AlphaMask,
    flags: int = 0,
    offset: int = 0,
    width: int = 0,
) -> None:
    """Paint the colour in ``flags`` through columns of an 8-bit alpha pattern.

    ``offset`` and ``width`` select the columns used (all when width is 0).
    """
    x += dc.offset_x
    y += dc.offset_y

    bmpw, bmph = pattern.width, pattern.height
    srcx = offset
    srcy = 0
    srcw = width if width != 0 else bmpw
    srch = bmph
    if srcx + srcw > bmpw:
        srcw = bmpw - srcx
    if srcy + srch > bmph:
        srch = bmph - srcy

    if x < dc.xmin:
        srcw += x - dc.xmin
        srcx -= x - dc.xmin
        x = dc.xmin
    if y < dc.ymin:
        srch += y - dc.ymin
        srcy -= y - dc.ymin
        y = dc.ymin
    if x + srcw > dc.xmax:
        srcw = dc.xmax - x
    if y + srch > dc.ymax:
        srch = dc.ymax - y

    if srcw <= 0 or srch <= 0:
        return

    color = color_val(flags)
    for row in range(srch):
        sy = srcy + row
        if not 0 <= sy < bmph:
            continue
        for col in range(srcw):
            sx = srcx + col
            if 0 <= sx < bmpw:
                alpha = pattern.data[sy * bmpw + sx] >> 4
                _blend_at(dc, x + col, y + row, alpha, color)


def draw_bitmap_pattern_pie(
    dc: Bitmap,
    x: int,
    y: int,
    pattern: AlphaMask,
    flags: int,
    start_angle: int,
    end_angle: int,
) -> None:
    """Paint the part of a pattern lying between two angles around its centre."""
    if end_angle == start_angle:
        end_angle += 1
    start = Slope.from_angle(start_angle)
    end = Slope.from_angle(end_angle)
    color = color_val(flags)

    width, height = pattern.width, pattern.height
    q = pattern.data
    w2 = width // 2
    h2 = height // 2

    for y1 in range(h2 - 1, -1, -1):
        for x1 in range(w2 - 1, -1, -1):
            slope = Slope(False, _VERTICAL_SLOPE if x1 == 0 else y1 * 100 // x1)
            if slope.is_between(start, end):
                dc.draw_alpha_pixel(
                    x + w2 + x1, y + h2 - y1, q[(h2 - y1) * width + w2 + x1] >> 4, color
                )
            slope = slope.inverted_vertical()
            if slope.is_between(start, end):
                dc.draw_alpha_pixel(
                    x + w2 + x1, y + h2 + y1, q[(h2 + y1) * width + w2 + x1] >> 4, color
                )
            slope = slope.inverted_horizontal()
            if slope.is_between(start, end):
                dc.draw_alpha_pixel(
                    x + w2 - x1, y + h2 + y1, q[(h2 + y1) * width + w2 - x1] >> 4, color
                )
            slope = slope.inverted_vertical()
            if slope.is_between(start, end):
                dc.draw_alpha_pixel(
                    x + w2 - x1, y + h2 - y1, q[(h2 - y1) * width + w2 - x1] >> 4, color
                )


def _rows(bmp: Bitmap) -> list[list[int]]:
    w = bmp.width
    return [bmp.data[row * w:(row + 1) * w] for row in range(bmp.height)]


def horizontal_flip(bmp: Bitmap) -> Bitmap:
    """A new bitmap mirrored left to right."""
    pixels = [value for row in _rows(bmp) for value in reversed(row)]
    return Bitmap(bmp.fmt, bmp.width, bmp.height, pixels)


def vertical_flip(bmp: Bitmap) -> Bitmap:
    """A new bitmap mirrored top to bottom."""
    pixels = [value for row in reversed(_rows(bmp)) for value in row]
    return Bitmap(bmp.fmt, bmp.width, bmp.height, pixels)


def invert_mask(bmp: Bitmap) -> Bitmap:
    """A new mask whose opacities are ``15 - opacity``."""
    pixels = [OPACITY_MAX - (value & 0xFF) for value in bmp.data]
    return Bitmap(bmp.fmt, bmp.width, bmp.height, pixels)


def mask_from_bitmap(bmp: Bitmap) -> Bitmap:
    """Turn an image into a mask: dark pixels become opaque, light ones clear.

    The opacity goes into the low byte of each pixel.
    """
    pixels = []
    for value in bmp.data:
        if bmp.fmt == BitmapFormat.ARGB4444:
            _, r, g, b = argb_split(value)
            opacity = OPACITY_MAX - (r + g + b) // 3
        else:
            r, g, b = rgb_split(value)
            opacity = OPACITY_MAX - ((r >> 1) + (g >> 2) + (b >> 1)) // 3
        pixels.append((value & 0xFF00) | (opacity & 0xFF))
    return Bitmap(bmp.fmt, bmp.width, bmp.height, pixels)


def load_8bit_mask(lbm: bytes) -> Bitmap:
    """Read a mask stored as one width byte, one height byte, then 8-bit alphas."""
    if len(lbm) < 2:
        raise ValueError("mask header is truncated")
    width, height = lbm[0], lbm[1]
    body = lbm[2:2 + width * height]
    if len(body) != width * height:
        raise ValueError("mask data is truncated")
    return Bitmap(BitmapFormat.RGB565, width, height, [value >> 4 for value in body])


def mask_on_background(mask: Bitmap, foreground: int, background: int) -> Bitmap:
    """Render a mask in the ``foreground`` colour over a ``background`` fill."""
    result = Bitmap(BitmapFormat.RGB565, mask.width, mask.height)
    result.clear(background)
    draw_mask(result, 0, 0, mask, foreground)
    return result