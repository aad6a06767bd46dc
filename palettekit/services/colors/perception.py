"""
Perceptual metrics for palette colors.

``luminance`` is the HSL lightness percentage, a fast brightness proxy. It is
NOT CIE relative luminance; analytics averages and the monochromatic sort
order are defined on this number.
"""

import math
from enum import Enum
from itertools import combinations
from typing import Any, Dict, List, Sequence, Union

from .conversions import RGB, hex_to_hsl, hex_to_rgb, normalize_hex
from .naming import name_for

ColorLike = Union[str, RGB]

MAX_RGB_DISTANCE = math.sqrt(3 * 255 ** 2)


class ContrastColor(str, Enum):
    """Foreground color for text or icons drawn over a background."""
    BLACK = "black"
    WHITE = "white"

    @property
    def hex(self) -> str:
        return "#000000" if self is ContrastColor.BLACK else "#FFFFFF"


def _as_rgb(color: ColorLike) -> RGB:
    if isinstance(color, str):
        return hex_to_rgb(color)
    return tuple(int(c) for c in color)


def luminance(hex_color: str) -> float:
    """Brightness proxy in [0, 100]: the HSL lightness of the color."""
    return hex_to_hsl(hex_color).l


def yiq_brightness(hex_color: str) -> float:
    """YIQ-weighted brightness in [0, 255]."""
    r, g, b = hex_to_rgb(hex_color)
    return (299 * r + 587 * g + 114 * b) / 1000


def contrast_text_color(hex_color: str) -> ContrastColor:
    """Black on bright backgrounds (YIQ >= 128), white otherwise."""
    if yiq_brightness(hex_color) >= 128:
        return ContrastColor.BLACK
    return ContrastColor.WHITE


def rgb_distance(c1: ColorLike, c2: ColorLike) -> float:
    """
    Euclidean distance in raw RGB space.

    Accepts hex strings or RGB triples. Range is [0, ~441.7]; this is a
    distinctness heuristic, not a perceptual difference.
    """
    r1, g1, b1 = _as_rgb(c1)
    r2, g2, b2 = _as_rgb(c2)
    return math.sqrt((r1 - r2) ** 2 + (g1 - g2) ** 2 + (b1 - b2) ** 2)


def analyze_palette(hex_colors: Sequence[str]) -> Dict[str, Any]:
    """
    Summarize a palette's perceptual properties.

    Args:
        hex_colors: Ordered palette colors

    Returns:
        Dictionary with per-color entries (hex, rounded luminance, contrast
        text color, name) and aggregate luminance/distinctness statistics
    """
    entries: List[Dict[str, Any]] = []
    for hex_color in hex_colors:
        entries.append({
            "hex": normalize_hex(hex_color),
            "luminance": int(math.floor(luminance(hex_color) + 0.5)),
            "contrast": contrast_text_color(hex_color).value,
            "name": name_for(hex_color),
        })

    values = [luminance(c) for c in hex_colors]
    distances = [rgb_distance(a, b) for a, b in combinations(hex_colors, 2)]

    return {
        "colors": entries,
        "count": len(entries),
        "mean_luminance": round(sum(values) / len(values), 1) if values else None,
        "min_luminance": min(values) if values else None,
        "max_luminance": max(values) if values else None,
        "min_pairwise_distance": round(min(distances), 1) if distances else None,
    }


def describe_color(hex_color: str) -> Dict[str, Any]:
    """All derived properties of a single color."""
    hsl = hex_to_hsl(hex_color)
    return {
        "hex": normalize_hex(hex_color),
        "name": name_for(hex_color),
        "rgb": list(hex_to_rgb(hex_color)),
        "hsl": {"h": hsl.h, "s": hsl.s, "l": hsl.l},
        "luminance": hsl.l,
        "contrast": contrast_text_color(hex_color).value,
    }
