"""Tests for data models."""

import dataclasses
import time

import pytest

from latency.models import Backend, ChainProgress, ChartData, Series, TimingSample, now_ms


class TestBackend:
    """Tests for Backend enum."""

    def test_identifiers(self):
        """Test the identifiers written to the store."""
        assert [b.value for b in Backend] == ["s3", "sns", "sqs", "table"]

    def test_from_string(self):
        assert Backend("sqs") is Backend.QUEUE

    def test_unknown_identifier(self):
        with pytest.raises(ValueError):
            Backend("kinesis")


class TestTimingSample:
    """Tests for TimingSample model."""

    def test_create_sample(self):
        """Test creating a TimingSample."""
        sample = TimingSample(
            backend=Backend.TABLE,
            sequence=12,
            dispatch_timestamp=1_700_000_000_000,
            delivery_timestamp=1_700_000_000_001,
        )
        assert sample.backend is Backend.TABLE
        assert sample.sequence == 12

    def test_sample_is_immutable(self):
        """Test that samples cannot be mutated after creation."""
        sample = TimingSample(Backend.QUEUE, 0, 1, 2)

        with pytest.raises(dataclasses.FrozenInstanceError):
            sample.sequence = 1  # type: ignore[misc]


class TestNowMs:
    """Tests for now_ms()."""

    def test_epoch_milliseconds(self):
        before = int(time.time() * 1000)
        value = now_ms()
        after = int(time.time() * 1000)

        assert before - 1 <= value <= after + 1


class TestChartModels:
    """Tests for chart models."""

    def test_series_to_chart(self):
        series = Series(label="sns (5ms)", values=[1, None, 3], latency_ms=5.5)
        assert series.to_chart() == {"text": "sns (5ms)", "values": [1, None, 3]}

    def test_chart_data_defaults(self):
        chart = ChartData(min_timestamp=1, max_timestamp=2)
        assert chart.series == []

    def test_chain_progress_defaults(self):
        progress = ChainProgress(backend="s3")
        assert progress.samples == 0
        assert progress.highest_sequence is None
