"""
Image palette extraction.

This module implements the extraction pipeline used for image imports:
sampling onto a fixed grid, per-channel quantization, frequency counting
and greedy selection of mutually distinct dominant colors.

The selection is a heuristic stand-in for k-means or median cut. Its
threshold policy (start at 45, halve after each pass, at most 3 passes,
then fill with the most frequent remaining buckets) is fixed so results are
reproducible.
"""

import time
from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np
from loguru import logger
from PIL import Image

from palettekit.services.imaging import ImageSource, load_image
from .conversions import RGB, rgb_to_hex
from .perception import rgb_distance

SAMPLE_EDGE = 150
QUANTIZATION_STEP = 5
ALPHA_THRESHOLD = 128
MIN_DISTANCE = 45.0
MAX_PASSES = 3
MAX_COLORS = 5


@dataclass
class ExtractionResult:
    """Extracted palette plus the counts that produced it."""
    colors: List[str] = field(default_factory=list)
    sampled_pixels: int = 0
    opaque_pixels: int = 0
    bucket_count: int = 0
    duration_ms: float = 0.0


def sample_pixels(image: Image.Image, edge: int = SAMPLE_EDGE) -> np.ndarray:
    """
    Resample an image onto an ``edge`` x ``edge`` grid.

    Aspect ratio is not preserved. Nearest-neighbour sampling means every
    sampled pixel is a pixel of the source image.

    Returns:
        (edge*edge, 4) uint8 RGBA array
    """
    grid = image.convert("RGBA").resize((edge, edge), Image.Resampling.NEAREST)
    return np.asarray(grid, dtype=np.uint8).reshape(-1, 4)


def quantize_pixels(pixels_rgba: np.ndarray, step: int = QUANTIZATION_STEP,
                    alpha_threshold: int = ALPHA_THRESHOLD) -> np.ndarray:
    """
    Drop transparent pixels and snap each channel to the nearest multiple of ``step``.

    Args:
        pixels_rgba: (N, 4) uint8 RGBA pixels
        step: Bucket width per channel
        alpha_threshold: Pixels with alpha below this are skipped

    Returns:
        (M, 3) int array of quantized RGB values for the opaque pixels
    """
    opaque = pixels_rgba[pixels_rgba[:, 3] >= alpha_threshold, :3].astype(np.float64)
    quantized = np.floor(opaque / step + 0.5) * step
    return np.clip(quantized, 0, 255).astype(np.int64)


def rank_buckets(quantized_rgb: np.ndarray) -> List[Tuple[RGB, int]]:
    """
    Count quantized colors and order them by descending frequency.

    Ties keep the order in which the buckets were first seen while scanning
    the sample grid row by row.
    """
    if len(quantized_rgb) == 0:
        return []

    keys = (quantized_rgb[:, 0] << 16) | (quantized_rgb[:, 1] << 8) | quantized_rgb[:, 2]
    unique_keys, first_seen, counts = np.unique(keys, return_index=True, return_counts=True)
    order = np.lexsort((first_seen, -counts))

    ranked = []
    for idx in order:
        key = int(unique_keys[idx])
        ranked.append((((key >> 16) & 0xFF, (key >> 8) & 0xFF, key & 0xFF), int(counts[idx])))
    return ranked


def select_distinct_colors(ranked: List[RGB], max_colors: int = MAX_COLORS,
                           min_distance: float = MIN_DISTANCE,
                           max_passes: int = MAX_PASSES) -> List[RGB]:
    """
    Greedily pick up to ``max_colors`` mutually distinct colors.

    The most frequent color is always taken. Each pass scans the ranked
    list and appends colors farther than the current threshold from every
    selected color; the threshold halves after each pass. Remaining slots
    are then filled with the next most frequent colors regardless of
    distance.

    Args:
        ranked: Colors ordered by descending frequency
        max_colors: Output cap
        min_distance: Initial RGB distance threshold
        max_passes: Number of distinctness passes

    Returns:
        Selected colors in selection order
    """
    if not ranked:
        return []

    palette = [ranked[0]]
    selected = {ranked[0]}
    threshold = min_distance
    passes = 0

    while len(palette) < max_colors and passes < max_passes:
        for color in ranked:
            if len(palette) >= max_colors:
                break
            if color in selected:
                continue
            if all(rgb_distance(color, chosen) > threshold for chosen in palette):
                palette.append(color)
                selected.add(color)
        logger.debug(f"Pass {passes + 1} at threshold {threshold:.2f}: {len(palette)} colors")
        threshold /= 2
        passes += 1

    if len(palette) < max_colors:
        for color in ranked:
            if len(palette) >= max_colors:
                break
            if color not in selected:
                palette.append(color)
                selected.add(color)

    return palette[:max_colors]


def extract_from_image(image: Image.Image, max_colors: int = MAX_COLORS,
                       edge: int = SAMPLE_EDGE, step: int = QUANTIZATION_STEP,
                       alpha_threshold: int = ALPHA_THRESHOLD,
                       min_distance: float = MIN_DISTANCE,
                       max_passes: int = MAX_PASSES) -> ExtractionResult:
    """
    Run the synchronous extraction pipeline on a decoded image.

    A fully transparent image yields an empty palette, not an error.
    """
    start_time = time.time()

    pixels = sample_pixels(image, edge)
    quantized = quantize_pixels(pixels, step, alpha_threshold)
    ranked = rank_buckets(quantized)
    chosen = select_distinct_colors(
        [rgb for rgb, _ in ranked], max_colors, min_distance, max_passes
    )

    result = ExtractionResult(
        colors=[rgb_to_hex(rgb) for rgb in chosen],
        sampled_pixels=len(pixels),
        opaque_pixels=len(quantized),
        bucket_count=len(ranked),
        duration_ms=(time.time() - start_time) * 1000,
    )

    if len(result.colors) < max_colors:
        logger.warning(
            f"Image yielded {len(result.colors)} of {max_colors} colors "
            f"({result.bucket_count} buckets, {result.opaque_pixels} opaque pixels)"
        )
    logger.info(f"Extraction complete: {result.colors} in {result.duration_ms:.1f}ms")
    return result


async def extract_palette(source: ImageSource, **params) -> ExtractionResult:
    """
    Load an image resource and extract its palette.

    Raises:
        ImageLoadFailure: if the resource cannot be read or decoded
    """
    image = await load_image(source)
    return extract_from_image(image, **params)
