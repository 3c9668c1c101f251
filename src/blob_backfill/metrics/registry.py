"""
Metric registry using prometheus_client.

Provides pre-defined metrics for a backfill run.
A batch job has no scrape endpoint, so the registry is written to a text
file in Prometheus exposition format when the run ends.
"""

from __future__ import annotations

from pathlib import Path

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    write_to_textfile,
)

# Backfill metrics only; no default process collectors.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Progress
# -----------------------------------------------------------------------------

progress_percent = Gauge(
    "blob_backfill_progress_percent",
    "Share of the requested slot range already committed",
    registry=REGISTRY,
)

last_committed_slot = Gauge(
    "blob_backfill_last_committed_slot",
    "Highest slot committed to storage",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Window Processing
# -----------------------------------------------------------------------------

slots_processed = Counter(
    "blob_backfill_slots_processed_total",
    "Slots committed to storage",
    registry=REGISTRY,
)

sidecars_stored = Counter(
    "blob_backfill_sidecars_stored_total",
    "Blob sidecars committed to storage",
    registry=REGISTRY,
)

windows_committed = Counter(
    "blob_backfill_windows_committed_total",
    "Windows committed to storage",
    registry=REGISTRY,
)

window_duration = Histogram(
    "blob_backfill_window_seconds",
    "Time to fetch, correlate and commit one window",
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Fetching
# -----------------------------------------------------------------------------

fetch_retries = Counter(
    "blob_backfill_fetch_retries_total",
    "Failed request attempts that were retried",
    ["resource"],
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)


def write_metrics(path: Path) -> None:
    """Write the registry to `path` for the node-exporter textfile collector."""
    write_to_textfile(str(path), REGISTRY)
