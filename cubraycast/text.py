"""Number formatting used by the on-screen statistics."""

from __future__ import annotations

import struct


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def itoa(n: float) -> str:
    """Format a number as a decimal integer, truncating toward zero."""
    return str(int(n))


def ftoa(n: float, precision: int) -> str:
    """Format a number with a fixed count of truncated decimals.

    Arithmetic is done in single precision; the decimal point is always
    written, even when precision is zero.
    """
    value = _f32(n)
    negative = value < 0
    value = abs(value)
    int_part = int(value)
    fraction = _f32(value - int_part)
    digits = []
    for _ in range(precision):
        fraction = _f32(fraction * 10)
        digit = int(fraction)
        digits.append(str(digit))
        fraction = _f32(fraction - digit)
    sign = "-" if negative else ""
    return f"{sign}{int_part}.{''.join(digits)}"