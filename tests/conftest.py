"""
Test configuration and fixtures for palettekit tests.
"""
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from palettekit.main import app


def image_to_png_bytes(image: Image.Image) -> bytes:
    """Encode a Pillow image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def checkerboard(size: int = 150, square: int = 10,
                 dark=(0, 0, 0), light=(255, 255, 255)) -> Image.Image:
    """RGBA checkerboard whose top-left square is ``dark``."""
    yy, xx = np.mgrid[0:size, 0:size]
    is_dark = ((xx // square) + (yy // square)) % 2 == 0
    pixels = np.zeros((size, size, 4), dtype=np.uint8)
    pixels[is_dark, :3] = dark
    pixels[~is_dark, :3] = light
    pixels[..., 3] = 255
    return Image.fromarray(pixels)


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from palettekit.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def checkerboard_png() -> bytes:
    """150x150 black/white checkerboard as PNG bytes."""
    return image_to_png_bytes(checkerboard())


@pytest.fixture
def transparent_png() -> bytes:
    """Fully transparent 64x64 PNG."""
    return image_to_png_bytes(Image.new("RGBA", (64, 64), (255, 0, 0, 0)))


@pytest.fixture
def noise_image() -> Image.Image:
    """Deterministic high-entropy RGB image."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(200, 200, 3), dtype=np.uint8)
    return Image.fromarray(pixels)
