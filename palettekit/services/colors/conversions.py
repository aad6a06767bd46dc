"""
Colorspace conversion for palette colors.

Colors travel through the engine as canonical hex strings (``#RRGGBB``,
uppercase). This module parses them (3- or 6-digit form), converts between
hex, 8-bit RGB and HSL, and refuses malformed input with
``InvalidColorFormat`` instead of guessing.

HSL here uses degrees for hue, wrapped into [0, 360), and percentages for
saturation and lightness. All three components are rounded to one decimal,
which keeps hex -> HSL -> hex within one unit per channel.
"""

import math
import re
from dataclasses import dataclass
from typing import Tuple

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


class InvalidColorFormat(ValueError):
    """Raised when a value is not a ``#RGB`` or ``#RRGGBB`` hex string."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid hex color format: {value!r}")


@dataclass(frozen=True)
class HSL:
    """Hue in degrees [0, 360); saturation and lightness in percent [0, 100]."""
    h: float
    s: float
    l: float  # noqa: E741


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def is_valid_hex(hex_color) -> bool:
    """True if ``hex_color`` is a recognized 4- or 7-character hex string."""
    return isinstance(hex_color, str) and bool(_HEX_RE.match(hex_color))


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Parse a hex color into an 8-bit RGB tuple.

    The 3-digit form duplicates each nibble (``#F80`` -> ``#FF8800``).

    Raises:
        InvalidColorFormat: if the value is not a 4- or 7-character hex string
    """
    if not is_valid_hex(hex_color):
        raise InvalidColorFormat(hex_color)

    digits = hex_color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)

    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def rgb_to_hex(rgb: RGB) -> str:
    """Encode an RGB triple as canonical uppercase ``#RRGGBB``."""
    r, g, b = (int(c) for c in rgb)
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise InvalidColorFormat(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def normalize_hex(hex_color: str) -> str:
    """Return the canonical 7-character uppercase form of a hex color."""
    return rgb_to_hex(hex_to_rgb(hex_color))


def rgb_to_hsl(rgb: RGB) -> HSL:
    """Convert 8-bit RGB to HSL using the min/max/delta method."""
    r, g, b = (c / 255.0 for c in rgb)
    cmax = max(r, g, b)
    cmin = min(r, g, b)
    delta = cmax - cmin

    if delta == 0:
        h = 0.0
    elif cmax == r:
        h = ((g - b) / delta) % 6
    elif cmax == g:
        h = (b - r) / delta + 2
    else:
        h = (r - g) / delta + 4

    l = (cmax + cmin) / 2  # noqa: E741
    s = 0.0 if delta == 0 else delta / (1 - abs(2 * l - 1))

    return HSL(
        h=round(h * 60, 1) % 360,
        s=round(s * 100, 1),
        l=round(l * 100, 1),
    )


def hex_to_hsl(hex_color: str) -> HSL:
    """
    Convert a hex color to HSL.

    Args:
        hex_color: Color in format #RGB or #RRGGBB

    Returns:
        HSL with hue in [0, 360) and saturation/lightness in [0, 100]

    Raises:
        InvalidColorFormat: for malformed input
    """
    return rgb_to_hsl(hex_to_rgb(hex_color))


def hsl_to_rgb(hsl: HSL) -> RGB:
    """
    Convert HSL to 8-bit RGB using the chroma/intermediate/match method.

    Hue wraps; saturation and lightness are clamped to [0, 100].
    """
    h = hsl.h % 360
    s = _clamp(hsl.s, 0.0, 100.0) / 100
    l = _clamp(hsl.l, 0.0, 100.0) / 100  # noqa: E741

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((h / 60) % 2 - 1))
    m = l - c / 2

    if h < 60:
        r, g, b = c, x, 0.0
    elif h < 120:
        r, g, b = x, c, 0.0
    elif h < 180:
        r, g, b = 0.0, c, x
    elif h < 240:
        r, g, b = 0.0, x, c
    elif h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return tuple(int(_clamp(_round_half_up((v + m) * 255), 0, 255)) for v in (r, g, b))


def hsl_to_hex(hsl: HSL) -> str:
    """Convert HSL to canonical uppercase ``#RRGGBB``."""
    return rgb_to_hex(hsl_to_rgb(hsl))


def rotate_hue(h: float, degrees: float) -> float:
    """Rotate a hue in degrees, wrapping into [0, 360)."""
    return (h + degrees) % 360
