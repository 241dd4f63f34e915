"""Angle, colour and numeric helpers shared by the renderer and the parser."""

from __future__ import annotations

import math
from typing import Optional

MAX_RAY_DISTANCE = 300
_TWO_PI = 2 * math.pi
_DIGITS = "0123456789"


def determine_quad(angle: float) -> Optional[int]:
    """Return the quadrant (1-4) an angle points into, or None if undetermined.

    Quadrants follow screen conventions used by the caster: 1 is right/up,
    2 is left/up, 3 is left/down and 4 is right/down.
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    if cos_a > 0 and sin_a > 0:
        return 1
    if cos_a < 0 and sin_a > 0:
        return 2
    if cos_a < 0 and sin_a < 0:
        return 3
    if cos_a > 0 and sin_a < 0:
        return 4
    if cos_a == 1 and sin_a == 0:
        return 1
    if cos_a == 0 and sin_a == 1:
        return 2
    if cos_a == -1 and sin_a == 0:
        return 3
    if cos_a == 0 and sin_a == -1:
        return 4
    return None


def normalize_angle(angle: float) -> float:
    """Bring an angle that is at most one turn out of range back into [0, 2*pi]."""
    if angle < 0:
        angle += _TWO_PI
    if angle > _TWO_PI:
        angle -= _TWO_PI
    return angle


def convert_to_mlx42_endian(color: int) -> int:
    """Reverse the byte order of a 32-bit colour value."""
    color &= 0xFFFFFFFF
    return int.from_bytes(color.to_bytes(4, "little"), "big")


def distance_to_color(distance: int) -> int:
    """Map a distance to a colour that fades out as the distance grows."""
    normalized = distance / MAX_RAY_DISTANCE
    if normalized > 1.0:
        normalized = 1.0
    level = int((1.0 - normalized) * 255)
    red = blue = alpha = level
    return ((blue << 24) | (255 << 16) | (red << 8) | alpha) & 0xFFFFFFFF


def parse_channel(text: str) -> int:
    """Parse a decimal colour channel in the range 0-255.

    Raises ValueError if the text holds a non-digit or exceeds 255.
    """
    value = 0
    for char in text:
        if value > 255:
            break
        if char not in _DIGITS:
            raise ValueError(f"not a decimal number: {text!r}")
        value = 10 * value + int(char)
    if value > 255:
        raise ValueError(f"colour channel out of range: {text!r}")
    return value