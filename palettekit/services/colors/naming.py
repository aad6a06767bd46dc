"""
Human-readable color names from HSL.

Decision order: very dark, very light, low saturation, then one of nine hue
buckets. Buckets are half-open ``[start, end)`` and together cover [0, 360).
"""

from typing import List, Tuple

from .conversions import HSL, hex_to_hsl

VERY_DARK = "Void Black"
VERY_LIGHT = "Pure White"
NEUTRAL = "Neutral Grey"

DARK_LIGHTNESS_LT = 10
LIGHT_LIGHTNESS_GT = 90
NEUTRAL_SATURATION_LT = 10

# (exclusive upper bound in degrees, name)
HUE_BUCKETS: List[Tuple[float, str]] = [
    (15, "Crimson Red"),
    (45, "Sunset Orange"),
    (70, "Golden Yellow"),
    (150, "Forest Green"),
    (190, "Teal Ocean"),
    (250, "Royal Blue"),
    (290, "Deep Purple"),
    (330, "Hot Pink"),
    (360, "Wild Berry"),
]

ALL_NAMES = [VERY_DARK, VERY_LIGHT, NEUTRAL] + [name for _, name in HUE_BUCKETS]


def hue_to_name(h_deg: float) -> str:
    """Map a hue in degrees to its bucket name."""
    h = h_deg % 360
    for upper, name in HUE_BUCKETS:
        if h < upper:
            return name
    return HUE_BUCKETS[-1][1]


def name_for_hsl(hsl: HSL) -> str:
    if hsl.l < DARK_LIGHTNESS_LT:
        return VERY_DARK
    if hsl.l > LIGHT_LIGHTNESS_GT:
        return VERY_LIGHT
    if hsl.s < NEUTRAL_SATURATION_LT:
        return NEUTRAL
    return hue_to_name(hsl.h)


def name_for(hex_color: str) -> str:
    """
    Deterministic category name for a hex color.

    Raises:
        InvalidColorFormat: for malformed input
    """
    return name_for_hsl(hex_to_hsl(hex_color))
