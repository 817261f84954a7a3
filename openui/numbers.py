"""Formatting of integers as fixed-point decimal text."""

from __future__ import annotations

_MAX_AFFIX = 16


def format_number(
    value: int,
    precision: int = 0,
    length: int = 0,
    leading_zeros: bool = False,
    prefix: str | None = None,
    suffix: str | None = None,
) -> str:
    """Render ``value`` with ``precision`` implied decimal places.

    With ``leading_zeros`` the digits are padded with zeros to ``length``.
    A prefix longer than 16 characters is dropped and a suffix is cut to
    16 characters.
    """
    neg = value < 0
    value = abs(value)
    parts: list[str] = []
    digits = 0
    mode = precision
    while True:
        value, digit = divmod(value, 10)
        parts.append(str(digit))
        digits += 1
        if mode != 0 and digits == mode:
            mode = 0
            parts.append(".")
            if value == 0:
                parts.append("0")
        if not (value != 0 or mode > 0 or (leading_zeros and digits < length)):
            break
    if neg:
        parts.append("-")
    text = "".join(reversed(parts))
    if prefix and len(prefix) <= _MAX_AFFIX:
        text = prefix + text
    if suffix:
        text += suffix[:_MAX_AFFIX]
    return text