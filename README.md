# openui

A small pure-Python rendering library for 16-bit frame buffers. It works the
way an embedded display driver does: pixels are stored as RGB565 or ARGB4444
values in a plain list, and drawing calls respect a clipping rectangle and a
drawing offset. It has no dependencies outside the standard library.

## Installation

```
pip install .
```

The tests need the `test` extra:

```
pip install ".[test]"
pytest
```

## Modules

- `openui.colors`: pack and unpack colours (`rgb`, `argb`, `rgb_join`,
  `rgb_split`, `argb_split`), put a colour into drawing flags and take it
  back out (`color_flags`, `color_val`), and blend a colour over an RGB565
  value with a 0..15 opacity (`blend`). `OPACITY_MAX` is 15.
- `openui.bitmap`: the `Bitmap` drawing surface and `BitmapFormat`
  (`RGB565`, `ARGB4444`). A `Bitmap` has `fmt`, `width`, `height` and
  `data`, and offers pixels (`get_pixel`, `draw_pixel`, `draw_alpha_pixel`),
  horizontal, vertical and arbitrary lines with 8-bit dash patterns
  (`SOLID`, `DOTTED`, `STASHED`), rectangle outlines and fills
  (`draw_rect`, `draw_solid_rect`, `draw_solid_filled_rect`,
  `draw_filled_rect`), `invert_rect`, `clear`, clipping (`set_clipping_rect`,
  `clear_clipping_rect`, `clipping_rect`, `clip`, `clip_line`) and offsets
  (`set_offset`, `clear_offset`, `reset`). For lines and rectangles an
  `opacity` of 0 is opaque and 15 is invisible.
- `openui.shapes`: `fill_triangle`, `draw_circle`, `fill_circle` and
  `draw_annulus_sector`, plus the `Slope` helper used to test whether a
  direction lies between two angles.
- `openui.blit`: copying between bitmaps with or without scaling
  (`draw_bitmap`, `draw_scaled_bitmap`), painting through masks
  (`draw_mask`, `draw_mask_from_source`), 8-bit alpha patterns (`AlphaMask`,
  `draw_bitmap_pattern`, `draw_bitmap_pattern_pie`), `horizontal_flip`,
  `vertical_flip`, `invert_mask`, `mask_from_bitmap`, `load_8bit_mask`,
  `mask_on_background`, and run-length decoding (`rle_decode`,
  `rle_bitmap`).
- `openui.bmpfile`: a BMP reader (`decode_bmp` for bytes, `load_bmp` for a
  path) for 4-, 16- and 32-bit images; a 1-bit image gives a blank bitmap
  of the right size. 32-bit images with transparency come out as
  ARGB4444. Bad input raises `BmpError`, a `ValueError`.
- `openui.numbers`: `format_number` renders an integer as fixed-point text
  with optional leading zeros, prefix and suffix.
- `openui.helpers` and `openui.files`: integer helpers (`limit`,
  `div_round_closest`, `mult_div_round_closest`, `mod`, `align32`, `sgn`),
  text helpers (`text_at_index`, `find_next_line`) and file-extension
  matching (`get_file_extension`, `is_extension_matching`, `nocase_key`).

## Example

```python
from openui.bitmap import Bitmap, BitmapFormat, SOLID
from openui.colors import rgb, color_flags
from openui.shapes import fill_circle

dc = Bitmap(BitmapFormat.RGB565, 64, 64, None)
dc.clear(color_flags(rgb(255, 255, 255)))
dc.draw_rect(4, 4, 56, 56, 2, SOLID, color_flags(rgb(0, 0, 0)), 0)
fill_circle(dc, 32, 32, 12, color_flags(rgb(255, 0, 0)))
print(hex(dc.get_pixel(32, 32)))
```

Loading an image from disk:

```python
from openui.bmpfile import load_bmp

image = load_bmp("icon.bmp")
print(image.width, image.height, image.fmt.name)
```

Formatting a value for display:

```python
from openui.numbers import format_number

format_number(1234, precision=2, suffix="V")  # "12.34V"
```

## What it does not do

The package draws into memory only: it does not show anything on a screen
and has no windows or widgets. It has no fonts, so there is no text
drawing; `format_number` returns a string for you to render. The only image
format it reads is BMP; PNG, JPEG and GIF files are not decoded.