"""
Tests for configuration, identifiers and metrics.
"""

import re

from palettekit.config import Config, config
from palettekit.utils.ids import (
    extract_timestamp_from_request_id, generate_color_id, generate_request_id
)
from palettekit.utils.logging import get_logger
from palettekit.utils.metrics import MetricsCollector, get_metrics


class TestConfig:

    def test_defaults(self):
        assert config.DEFAULT_PALETTE_SIZE == 5
        assert config.MIN_PALETTE_SIZE == 3
        assert config.MAX_PALETTE_SIZE == 8
        assert config.SAMPLE_EDGE == 150
        assert config.QUANTIZATION_STEP == 5
        assert config.MIN_DISTANCE == 45.0

    def test_palette_size_bounds(self):
        assert Config.validate_palette_size(3)
        assert Config.validate_palette_size(8)
        assert not Config.validate_palette_size(2)
        assert not Config.validate_palette_size(9)

    def test_count_bounds(self):
        assert Config.validate_count(1)
        assert Config.validate_count(11)
        assert not Config.validate_count(0)
        assert not Config.validate_count(12)

    def test_allowed_origins(self, monkeypatch):
        monkeypatch.setattr(Config, "ALLOWED_ORIGINS", "")
        assert Config.allowed_origins() == ["*"]
        monkeypatch.setattr(Config, "ALLOWED_ORIGINS", "https://a.example, https://b.example,")
        assert Config.allowed_origins() == ["https://a.example", "https://b.example"]


class TestIds:

    def test_request_id_format(self):
        request_id = generate_request_id("gen")
        assert re.match(r"^gen-\d{14}-[0-9a-f]{8}$", request_id)
        assert extract_timestamp_from_request_id(request_id) == request_id.split("-")[1]

    def test_timestamp_missing(self):
        assert extract_timestamp_from_request_id("not-a-request-id") == ""

    def test_color_ids_are_unique_and_opaque(self):
        ids = {generate_color_id("col") for _ in range(200)}
        assert len(ids) == 200
        assert all(re.match(r"^col-[0-9a-f]{12}$", i) for i in ids)


class TestMetrics:

    def test_counters(self):
        metrics = MetricsCollector()
        metrics.increment_generation_count("Triadic")
        metrics.increment_generation_count("Triadic")
        metrics.increment_extraction_count()
        metrics.increment_failure_count("image_load")

        counters = metrics.get_counters()
        assert counters["generate_requests_total"] == 2
        assert counters["generate_mode_total_triadic"] == 2
        assert counters["extract_requests_total"] == 1
        assert counters["failed_total_image_load"] == 1

    def test_timing_stats(self):
        metrics = MetricsCollector()
        for value in (10.0, 20.0, 30.0):
            metrics.record_timing("extract", value)
        stats = metrics.get_timing_stats()["extract_duration_ms"]
        assert stats["count"] == 3
        assert stats["mean"] == 20.0
        assert stats["p50"] == 20.0
        assert stats["min"] == 10.0
        assert stats["max"] == 30.0

    def test_palette_sizes(self):
        metrics = MetricsCollector()
        metrics.record_palette_size(2)
        metrics.record_palette_size(5)
        assert metrics.get_palette_size_stats() == {"count": 2, "mean": 3.5, "min": 2, "max": 5}

    def test_disabled_collector_records_nothing(self):
        metrics = MetricsCollector(enabled=False)
        metrics.increment("anything")
        metrics.record_timing("generate", 1.0)
        assert metrics.get_counters() == {}
        assert metrics.get_timing_stats() == {}

    def test_reset(self):
        metrics = get_metrics()
        metrics.increment("x")
        metrics.reset()
        summary = metrics.get_summary()
        assert summary["counters"] == {}
        assert summary["palette_size_stats"] == {}


class TestLogging:

    def test_logger_methods(self):
        log = get_logger()
        log.info("palette event", extra={"mode": "Triadic"})
        log.debug("debug event")
        log.warning("warning event")
