"""
palettekit Colors Module

Colorspace conversion, perceptual metrics, naming, harmony generation and
image palette extraction.
"""

from .conversions import (
    HSL, InvalidColorFormat, hex_to_hsl, hex_to_rgb, hsl_to_hex, normalize_hex, rgb_to_hex
)
from .harmony import HarmonyMode, generate, random_hex
from .naming import name_for
from .perception import ContrastColor, contrast_text_color, luminance, rgb_distance

__version__ = "1.0.0"

__all__ = [
    "HSL",
    "InvalidColorFormat",
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_hex",
    "normalize_hex",
    "rgb_to_hex",
    "HarmonyMode",
    "generate",
    "random_hex",
    "name_for",
    "ContrastColor",
    "contrast_text_color",
    "luminance",
    "rgb_distance",
]
