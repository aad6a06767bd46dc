"""
Swatch Rendering Module

Renders palettes as PNG strips for previews and exports.
"""

import base64
from typing import List, Optional, Tuple

import cv2
import numpy as np
from loguru import logger

from .conversions import hex_to_rgb
from .perception import contrast_text_color


def hex_to_bgr(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to BGR tuple for OpenCV."""
    r, g, b = hex_to_rgb(hex_color)
    return (b, g, r)


def validate_swatch_params(hex_colors: List[str], chip_size: int, highlight_index: Optional[int]) -> None:
    """
    Validate swatch rendering parameters.

    Raises:
        ValueError: for empty input, bad sizes or an out-of-range highlight
        InvalidColorFormat: for a malformed color
    """
    if not hex_colors:
        raise ValueError("hex_colors cannot be empty")

    if chip_size <= 0:
        raise ValueError("chip_size must be positive")

    if highlight_index is not None and not 0 <= highlight_index < len(hex_colors):
        raise ValueError(f"highlight_index {highlight_index} out of range [0, {len(hex_colors)})")

    for hex_color in hex_colors:
        hex_to_rgb(hex_color)


def render_swatch_strip(hex_colors: List[str],
                        chip_size: int = 40,
                        highlight_index: Optional[int] = None,
                        border_width: int = 2,
                        show_labels: bool = False) -> str:
    """
    Render a horizontal strip of color swatches.

    Args:
        hex_colors: List of hex color strings
        chip_size: Size of each color chip in pixels
        highlight_index: Index of a chip to outline (e.g. a locked base color)
        border_width: Width of the highlight border in pixels
        show_labels: Draw each hex code in its readable text color

    Returns:
        Base64-encoded PNG image string
    """
    validate_swatch_params(hex_colors, chip_size, highlight_index)

    k = len(hex_colors)
    logger.debug(f"Rendering swatch strip with {k} colors, chip_size={chip_size}")

    img = np.zeros((chip_size, chip_size * k, 3), dtype=np.uint8)

    for i, hex_color in enumerate(hex_colors):
        x_start = i * chip_size
        x_end = (i + 1) * chip_size
        img[:, x_start:x_end, :] = hex_to_bgr(hex_color)

        if show_labels:
            text_bgr = hex_to_bgr(contrast_text_color(hex_color).hex)
            font_scale = chip_size / 160
            label = hex_color.upper().lstrip('#')
            text_w, text_h = cv2.getTextSize(label, cv2.FONT_HERSHEY_SIMPLEX, font_scale, 1)[0]
            cv2.putText(
                img, label,
                (x_start + (chip_size - text_w) // 2, (chip_size + text_h) // 2),
                cv2.FONT_HERSHEY_SIMPLEX, font_scale, text_bgr, 1
            )

    if highlight_index is not None:
        x_start = highlight_index * chip_size
        border_bgr = hex_to_bgr(contrast_text_color(hex_colors[highlight_index]).hex)
        cv2.rectangle(
            img,
            (x_start, 0),
            (x_start + chip_size - 1, chip_size - 1),
            border_bgr,
            border_width
        )

    success, buffer = cv2.imencode('.png', img)
    if not success:
        raise RuntimeError("Failed to encode swatch strip as PNG")

    b64_string = base64.b64encode(buffer.tobytes()).decode('ascii')
    logger.debug(f"Encoded swatch strip: {chip_size * k}x{chip_size} -> {len(b64_string)} chars")
    return b64_string
