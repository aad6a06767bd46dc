"""
Unit tests for perceptual metrics and palette analytics.
"""

import math

import pytest

from palettekit.services.colors.conversions import InvalidColorFormat, hex_to_hsl
from palettekit.services.colors.perception import (
    MAX_RGB_DISTANCE, ContrastColor, analyze_palette, contrast_text_color,
    describe_color, luminance, rgb_distance, yiq_brightness
)


class TestLuminance:
    """Luminance is the HSL lightness proxy, not CIE relative luminance."""

    def test_extremes(self):
        assert luminance("#000000") == 0.0
        assert luminance("#FFFFFF") == 100.0

    def test_equals_hsl_lightness(self):
        for hex_color in ["#FF5733", "#1F4E79", "#D3B58F", "#00FF00"]:
            assert luminance(hex_color) == hex_to_hsl(hex_color).l

    def test_saturated_primaries_share_lightness(self):
        # true relative luminance would rank green far above blue
        assert luminance("#00FF00") == luminance("#0000FF") == 50.0

    def test_invalid_input(self):
        with pytest.raises(InvalidColorFormat):
            luminance("not-a-color")


class TestContrastTextColor:
    """Test the YIQ black/white text decision."""

    def test_black_background_gets_white_text(self):
        assert contrast_text_color("#000000") is ContrastColor.WHITE

    def test_white_background_gets_black_text(self):
        assert contrast_text_color("#FFFFFF") is ContrastColor.BLACK

    def test_threshold_is_inclusive(self):
        assert yiq_brightness("#808080") == pytest.approx(128.0)
        assert contrast_text_color("#808080") is ContrastColor.BLACK
        assert contrast_text_color("#7F7F7F") is ContrastColor.WHITE

    def test_weighted_channels(self):
        assert contrast_text_color("#FFFF00") is ContrastColor.BLACK  # Y = 225.9
        assert contrast_text_color("#0000FF") is ContrastColor.WHITE  # Y = 29.07

    def test_enum_values(self):
        assert ContrastColor.BLACK.value == "black"
        assert ContrastColor.WHITE.hex == "#FFFFFF"
        assert ContrastColor.BLACK.hex == "#000000"


class TestRgbDistance:
    """Test Euclidean RGB distance."""

    def test_identical_colors(self):
        assert rgb_distance("#123456", "#123456") == 0.0

    def test_black_white_is_maximum(self):
        assert rgb_distance("#000000", "#FFFFFF") == pytest.approx(MAX_RGB_DISTANCE)
        assert MAX_RGB_DISTANCE == pytest.approx(441.67, abs=0.01)

    def test_accepts_tuples_and_is_symmetric(self):
        a, b = (10, 20, 30), (13, 24, 30)
        assert rgb_distance(a, b) == pytest.approx(5.0)
        assert rgb_distance(b, a) == rgb_distance(a, b)
        assert rgb_distance("#0A141E", b) == pytest.approx(5.0)

    def test_single_channel(self):
        assert rgb_distance("#000000", "#2D0000") == pytest.approx(45.0)
        assert rgb_distance("#000000", "#010101") == pytest.approx(math.sqrt(3))


class TestAnalyzePalette:
    """Test palette-level analytics."""

    def test_black_and_white(self):
        summary = analyze_palette(["#000000", "#ffffff"])

        assert summary["count"] == 2
        assert summary["mean_luminance"] == 50.0
        assert summary["min_luminance"] == 0.0
        assert summary["max_luminance"] == 100.0
        assert summary["min_pairwise_distance"] == pytest.approx(441.7)

        first, second = summary["colors"]
        assert first == {"hex": "#000000", "luminance": 0, "contrast": "white", "name": "Void Black"}
        assert second["hex"] == "#FFFFFF"
        assert second["contrast"] == "black"

    def test_luminance_rounds_half_up(self):
        # #808080 has lightness 50.2; #FF5733 has lightness 60.0
        summary = analyze_palette(["#808080", "#FF5733"])
        assert [c["luminance"] for c in summary["colors"]] == [50, 60]

    def test_single_color_has_no_distance(self):
        summary = analyze_palette(["#FF0000"])
        assert summary["min_pairwise_distance"] is None
        assert summary["mean_luminance"] == 50.0

    def test_empty_palette(self):
        summary = analyze_palette([])
        assert summary["count"] == 0
        assert summary["mean_luminance"] is None


class TestDescribeColor:

    def test_all_fields(self):
        info = describe_color("#f53")
        assert info["hex"] == "#FF5533"
        assert info["rgb"] == [255, 85, 51]
        assert set(info["hsl"]) == {"h", "s", "l"}
        assert info["luminance"] == info["hsl"]["l"]
        assert info["contrast"] in ("black", "white")
        assert info["name"] == "Crimson Red"
