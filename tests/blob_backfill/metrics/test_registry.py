"""Tests for the Prometheus metrics registry and progress reporting."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from blob_backfill.containers import Slot
from blob_backfill.metrics import (
    REGISTRY,
    fetch_retries,
    generate_metrics,
    last_committed_slot,
    progress_percent,
    sidecars_stored,
    slots_processed,
    window_duration,
    write_metrics,
)
from blob_backfill.sync import ProgressReporter, SlotRange
from tests.blob_backfill.helpers import make_record


class TestRegistry:
    """Tests for registry output."""

    def test_metrics_are_exported(self) -> None:
        output = generate_metrics().decode()
        for name in (
            "blob_backfill_progress_percent",
            "blob_backfill_last_committed_slot",
            "blob_backfill_slots_processed_total",
            "blob_backfill_sidecars_stored_total",
            "blob_backfill_windows_committed_total",
            "blob_backfill_window_seconds",
        ):
            assert name in output

    def test_labelled_counter(self) -> None:
        initial = REGISTRY.get_sample_value(
            "blob_backfill_fetch_retries_total", {"resource": "test"}
        )
        fetch_retries.labels(resource="test").inc()
        after = REGISTRY.get_sample_value(
            "blob_backfill_fetch_retries_total", {"resource": "test"}
        )
        assert after == (initial or 0.0) + 1.0

    def test_histogram_counts_observations(self) -> None:
        initial = REGISTRY.get_sample_value("blob_backfill_window_seconds_count") or 0.0
        window_duration.observe(0.3)
        assert REGISTRY.get_sample_value("blob_backfill_window_seconds_count") == initial + 1.0

    def test_write_textfile(self, tmp_path: Path) -> None:
        path = tmp_path / "backfill.prom"
        write_metrics(path)
        assert "blob_backfill_slots_processed_total" in path.read_text()


class TestProgressReporter:
    """Tests for the per-window progress report."""

    def test_report_updates_metrics(self) -> None:
        reporter = ProgressReporter(SlotRange(Slot(100), Slot(200)))
        records = [make_record(150, blob_count=2), make_record(151, has_block=False)]
        slots_before = slots_processed._value.get()
        sidecars_before = sidecars_stored._value.get()

        percent = reporter.report(SlotRange(Slot(150), Slot(151)), records)

        assert percent == 50.0
        assert progress_percent._value.get() == 50.0
        assert last_committed_slot._value.get() == 151
        assert slots_processed._value.get() == slots_before + 2
        assert sidecars_stored._value.get() == sidecars_before + 2

    def test_report_logs_window(self, caplog: pytest.LogCaptureFixture) -> None:
        reporter = ProgressReporter(SlotRange(Slot(0), Slot(9)))

        with caplog.at_level(logging.INFO, logger="blob_backfill.sync.progress"):
            reporter.report(SlotRange(Slot(0), Slot(4)), [make_record(s) for s in range(5)])

        assert "Blobs downloaded for 0..4 [0.00%]" in caplog.text
