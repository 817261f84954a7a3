"""Reading Windows and OS/2 BMP images into RGB565 or ARGB4444 bitmaps."""

from __future__ import annotations

import os
import struct
from pathlib import Path

from .bitmap import Bitmap, BitmapFormat
from .colors import argb, rgb
from .helpers import limit

_FILE_HEADER_SIZE = 14
_WINDOWS_HEADER_SIZES = frozenset({40, 56, 64, 108, 124})
_OS2_V1_HEADER_SIZE = 12
_PALETTE_BYTES = 64


class BmpError(ValueError):
    """Raised when BMP data cannot be decoded."""


def _read(data: bytes, offset: int, size: int) -> bytes:
    if offset < 0 or offset + size > len(data):
        raise BmpError("BMP data is truncated")
    return data[offset:offset + size]


def _u32(buf: bytes, offset: int) -> int:
    if offset + 4 > len(buf):
        raise BmpError("BMP header is truncated")
    return struct.unpack_from("<I", buf, offset)[0]


def _u16(buf: bytes, offset: int) -> int:
    if offset + 2 > len(buf):
        raise BmpError("BMP header is truncated")
    return struct.unpack_from("<H", buf, offset)[0]


def _rgb565_to_argb4444(value: int) -> int:
    """Reduce an RGB565 pixel to ARGB4444 with a zero alpha channel."""
    return (
        ((value >> 1) & 0x0F)
        + (((value >> 7) & 0x0F) << 4)
        + (((value >> 12) & 0x0F) << 8)
    )


def _decode_16(bmp: Bitmap, data: bytes, pos: int) -> None:
    w, h = bmp.width, bmp.height
    for row in range(h - 1, -1, -1):
        raw = _read(data, pos, 2 * w)
        pos += 2 * w
        bmp.data[row * w:(row + 1) * w] = list(struct.unpack(f"<{w}H", raw))


def _decode_32(bmp: Bitmap, data: bytes, pos: int) -> None:
    w, h = bmp.width, bmp.height
    has_alpha = False
    for row in range(h - 1, -1, -1):
        raw = _read(data, pos, 4 * w)
        pos += 4 * w
        for col, (pixel,) in enumerate(struct.iter_unpack("<I", raw)):
            alpha = pixel & 0xFF
            red = (pixel >> 24) & 0xFF
            green = (pixel >> 16) & 0xFF
            blue = (pixel >> 8) & 0xFF
            index = row * w + col
            if not has_alpha and alpha == 0xFF:
                bmp.data[index] = rgb(red, green, blue)
                continue
            if not has_alpha:
                # Switch to ARGB4444; pixels from here to the end of the
                # buffer (the rows already read) are converted in place.
                has_alpha = True
                bmp.fmt = BitmapFormat.ARGB4444
                bmp.data[index:] = [
                    _rgb565_to_argb4444(value) for value in bmp.data[index:]
                ]
            bmp.data[index] = argb(alpha, red, green, blue)


def _decode_4(bmp: Bitmap, data: bytes, pos: int, palette: bytes) -> None:
    w, h = bmp.width, bmp.height
    row_size = ((4 * w + 31) // 32) * 4
    for row in range(h - 1, -1, -1):
        raw = _read(data, pos, row_size)
        pos += row_size
        for col in range(w):
            shift = 0 if col & 1 else 4
            val = palette[(raw[col // 2] >> shift) & 0x0F]
            bmp.data[row * w + col] = rgb(val, val, val)


def decode_bmp(data: bytes) -> Bitmap:
    """Decode BMP file contents of depth 1, 4, 16 or 32 into a Bitmap.

    Depth 1 images yield a blank bitmap of the right size. 32-bit images
    with any pixel that is not fully opaque come out as ARGB4444.
    """
    data = bytes(data)
    header = _read(data, 0, _FILE_HEADER_SIZE)
    if header[:2] != b"BM":
        raise BmpError("not a BMP file")
    fsize = _u32(header, 2)
    hsize = _u32(header, 10)

    info_len = limit(4, (hsize - _FILE_HEADER_SIZE) & 0xFFFFFFFF, 32)
    info = _read(data, _FILE_HEADER_SIZE, info_len)
    ihsize = _u32(info, 0)

    if ihsize + _FILE_HEADER_SIZE > hsize:
        raise BmpError("invalid info header size")

    # Some writers put a header size in the file size field.
    if fsize in (_FILE_HEADER_SIZE, ihsize + _FILE_HEADER_SIZE):
        fsize = len(data) - 2
    if fsize <= hsize:
        raise BmpError("declared file size is smaller than the headers")

    if ihsize in _WINDOWS_HEADER_SIZES:
        width, height = _u32(info, 4), _u32(info, 8)
        rest = info[12:]
    elif ihsize == _OS2_V1_HEADER_SIZE:
        width, height = _u16(info, 4), _u16(info, 6)
        rest = info[8:]
    else:
        raise BmpError(f"unsupported info header size {ihsize}")

    if _u16(rest, 0) != 1:
        raise BmpError("BMP must have exactly one plane")
    depth = _u16(rest, 2)

    palette = b""
    if depth == 4:
        palette = _read(data, hsize - _PALETTE_BYTES, _PALETTE_BYTES)[0::4]
    if depth not in (1, 4, 16, 32):
        raise BmpError(f"unsupported colour depth {depth}")
    if width > 0xFFFF or height > 0xFFFF:
        raise BmpError("BMP dimensions are too large")

    bmp = Bitmap(BitmapFormat.RGB565, width, height)
    if depth == 16:
        _decode_16(bmp, data, hsize)
    elif depth == 32:
        _decode_32(bmp, data, hsize)
    elif depth == 4:
        _decode_4(bmp, data, hsize, palette)
    return bmp


def load_bmp(path: str | os.PathLike[str]) -> Bitmap:
    """Read and decode a BMP file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise BmpError(f"cannot read {path}: {exc}") from exc
    return decode_bmp(data)