"""Tests for per-call telemetry: CallSpan, annotate, @traced."""

from __future__ import annotations

import time

import pytest

from agecalc.services.age import AgeService
from agecalc.services.result import ServiceResult
from agecalc.services.telemetry import (
    CallSpan,
    annotate,
    disable_telemetry,
    enable_telemetry,
    traced,
)


class TestCallSpan:
    def test_duration_before_end_is_zero(self) -> None:
        span = CallSpan(name="test")
        assert span.duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = CallSpan(name="test")
        time.sleep(0.005)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = CallSpan(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert "duration_ms" in d
        assert "annotations" not in d


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        @traced
        def op() -> ServiceResult:
            annotate(zone="UTC")
            return ServiceResult(ok=True, op="noop")

        disable_telemetry()
        assert op().meta is None

    def test_enabled_injects_span_with_annotations(self) -> None:
        @traced
        def op() -> ServiceResult:
            annotate(zone="UTC")
            annotate(normalized=True)
            return ServiceResult(ok=True, op="noop", meta={"keep": 1})

        enable_telemetry()
        result = op()
        assert result.meta is not None
        assert result.meta["keep"] == 1
        span = result.meta["telemetry"]
        assert span["name"].endswith("op")
        assert span["annotations"] == {"zone": "UTC", "normalized": True}

    def test_annotate_outside_a_call_is_ignored(self) -> None:
        enable_telemetry()
        annotate(zone="UTC")

    def test_exception_propagates(self) -> None:
        @traced
        def op() -> ServiceResult:
            raise RuntimeError("boom")

        enable_telemetry()
        with pytest.raises(RuntimeError, match="boom"):
            op()


class TestServiceSpans:
    def test_difference_records_instants_and_zone(self, service: AgeService) -> None:
        enable_telemetry()
        result = service.difference("2020-01-01", "2020-01-02")
        assert result.meta is not None
        span = result.meta["telemetry"]
        assert span["name"] == "AgeService.difference"
        assert span["annotations"] == {
            "start": "2020-01-01T00:00:00",
            "end": "2020-01-02T00:00:00",
            "zone": "UTC",
            "normalized": True,
        }

    def test_age_records_unnormalized_cascade(self, service: AgeService) -> None:
        enable_telemetry()
        result = service.age("2025-01-31T00:00", "2025-03-01T00:00")
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"]["normalized"] is False

    def test_inverted_interval_has_no_normalized_flag(self, service: AgeService) -> None:
        enable_telemetry()
        result = service.difference("2021-01-01", "2020-01-01")
        assert result.ok is False
        assert result.meta is not None
        assert "normalized" not in result.meta["telemetry"]["annotations"]

    def test_adjust_records_clock_fallback(self, service: AgeService) -> None:
        enable_telemetry()
        result = service.adjust(None, ["+1d"])
        assert result.meta is not None
        assert result.meta["telemetry"]["annotations"] == {"from_now": True, "zone": "UTC"}
