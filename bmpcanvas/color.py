"""
Packed 32-bit ARGB colors.

A color is a plain `int` laid out as 0xAARRGGBB: alpha in bits 24-31,
red 16-23, green 8-15 and blue 0-7.
"""

from typing import Final

WHITE: Final = 0xFFFFFFFF
BLACK: Final = 0xFF000000
RED: Final = 0xFFFF0000
GREEN: Final = 0xFF00FF00
BLUE: Final = 0xFF0000FF
TRANSPARENT: Final = 0x00000000

NAMED_COLORS: Final = {
    "white": WHITE,
    "black": BLACK,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "transparent": TRANSPARENT,
}


def from_argb(alpha: int, red: int, green: int, blue: int) -> int:
    """Pack four channels into a color. Only the low 8 bits of each are used."""
    return (alpha & 0xFF) << 24 | (red & 0xFF) << 16 | (green & 0xFF) << 8 | (blue & 0xFF)


def from_rgb(red: int, green: int, blue: int) -> int:
    return from_argb(255, red, green, blue)


def channels(color: int) -> tuple[int, int, int, int]:
    """Split a color into (alpha, red, green, blue)."""
    return (color >> 24 & 0xFF, color >> 16 & 0xFF, color >> 8 & 0xFF, color & 0xFF)


def parse_color(text: object) -> int:
    """Parse a color given as an int literal, '#RRGGBB', '#AARRGGBB' or a name.

    '#RRGGBB' is fully opaque. Raises ValueError for anything else.
    """
    if isinstance(text, int):
        if not 0 <= text <= 0xFFFFFFFF:
            raise ValueError(f"color out of range: {text:#x}")
        return text
    if not isinstance(text, str):
        raise ValueError(f"bad color {text!r}")

    s = text.strip()
    if s.lower() in NAMED_COLORS:
        return NAMED_COLORS[s.lower()]
    if s.startswith("#"):
        digits = s[1:]
        if len(digits) == 6:
            return 0xFF000000 | int(digits, 16)
        if len(digits) == 8:
            return int(digits, 16)
        raise ValueError(f"bad color '{text}'")
    try:
        value = int(s, 0)
    except ValueError:
        raise ValueError(f"bad color '{text}'") from None
    return parse_color(value)
