"""Small integer and text helpers used across the drawing code."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T", int, float)


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _c_rem(a: int, b: int) -> int:
    """Remainder whose sign follows the dividend."""
    return a - b * _c_div(a, b)


def limit(vmin: T, x: T, vmax: T) -> T:
    """Clamp ``x`` into ``[vmin, vmax]``; ``vmax`` wins if the bounds cross."""
    return min(max(vmin, x), vmax)


def div_round_closest(n: int, d: int) -> int:
    """Divide rounding to the nearest integer, halves away from zero.

    A zero divisor yields 0.
    """
    if d == 0:
        return 0
    half = _c_div(d, 2)
    if (n < 0) != (d < 0):
        return _c_div(n - half, d)
    return _c_div(n + half, d)


def mult_div_round_closest(v: int, n: int, d: int) -> int:
    """Return ``v * n / d`` rounded to the closest integer."""
    if n == d:
        return v
    return div_round_closest(v * n, d)


def mod(k: int, n: int) -> int:
    """Remainder of ``k / n`` brought back into range when negative."""
    r = _c_rem(k, n)
    return r + n if r < 0 else r


def align32(n: int) -> int:
    """Round ``n`` up to the next multiple of four."""
    rest = n & 3
    return n + 4 - rest if rest else n


def sgn(a: T) -> int:
    """Return 1, -1 or 0 according to the sign of ``a``."""
    if a > 0:
        return 1
    if a < 0:
        return -1
    return 0


def text_at_index(val: str, idx: int) -> str:
    """Return entry ``idx`` of a length-prefixed table of fixed-width strings.

    The first character's code is the width of every entry; an entry ends
    early at a NUL character.
    """
    if not val:
        raise ValueError("empty string table")
    width = ord(val[0])
    rest = val[1 + idx * width:]
    rest = rest.split("\0", 1)[0]
    return rest[:width]


def find_next_line(text: str) -> int | None:
    """Index of the next line break, skipping breaks that form a wide glyph.

    A newline directly preceded by a character of code 0xFE or above is the
    second half of a two-byte glyph and does not end the line.
    """
    start = 0
    while True:
        pos = text.find("\n", start)
        if pos < 0:
            return None
        if pos == start or ord(text[pos - 1]) < 0xFE:
            return pos
        start = pos + 1