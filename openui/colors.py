"""Pixel colour packing for RGB565 and ARGB4444 buffers."""

from __future__ import annotations

OPACITY_MAX = 0x0F
"""Fully opaque value on the 4-bit opacity scale."""


def rgb_join(r: int, g: int, b: int) -> int:
    """Pack 5-bit red, 6-bit green and 5-bit blue into an RGB565 value."""
    return ((r & 0x1F) << 11) | ((g & 0x3F) << 5) | (b & 0x1F)


def rgb(r: int, g: int, b: int) -> int:
    """Build an RGB565 value from 8-bit channels."""
    return rgb_join((r & 0xFF) >> 3, (g & 0xFF) >> 2, (b & 0xFF) >> 3)


def argb(a: int, r: int, g: int, b: int) -> int:
    """Build an ARGB4444 value from 8-bit channels."""
    return (
        (((a & 0xFF) >> 4) << 12)
        | (((r & 0xFF) >> 4) << 8)
        | (((g & 0xFF) >> 4) << 4)
        | ((b & 0xFF) >> 4)
    )


def rgb_split(color: int) -> tuple[int, int, int]:
    """Split an RGB565 value into its 5, 6 and 5-bit channels."""
    return (color >> 11) & 0x1F, (color >> 5) & 0x3F, color & 0x1F


def argb_split(color: int) -> tuple[int, int, int, int]:
    """Split an ARGB4444 value into its four 4-bit channels."""
    return (color >> 12) & 0x0F, (color >> 8) & 0x0F, (color >> 4) & 0x0F, color & 0x0F


def color_flags(color: int) -> int:
    """Place a 16-bit colour in the colour field of drawing flags."""
    return (color & 0xFFFF) << 16


def color_val(flags: int) -> int:
    """Extract the 16-bit colour carried by drawing flags."""
    return (flags >> 16) & 0xFFFF


def blend(background: int, opacity: int, color: int) -> int:
    """Blend ``color`` over an RGB565 ``background`` at a 0..15 opacity."""
    if opacity == OPACITY_MAX:
        return color
    if opacity == 0:
        return background
    bg_weight = OPACITY_MAX - opacity
    red, green, blue = rgb_split(color)
    bg_red, bg_green, bg_blue = rgb_split(background)
    r = (bg_red * bg_weight + red * opacity) // OPACITY_MAX
    g = (bg_green * bg_weight + green * opacity) // OPACITY_MAX
    b = (bg_blue * bg_weight + blue * opacity) // OPACITY_MAX
    return rgb_join(r, g, b)