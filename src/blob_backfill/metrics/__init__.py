"""
Metrics module for observability.

Provides counters, gauges, and histograms for tracking backfill progress.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    fetch_retries,
    generate_metrics,
    last_committed_slot,
    progress_percent,
    sidecars_stored,
    slots_processed,
    window_duration,
    windows_committed,
    write_metrics,
)

__all__ = [
    "REGISTRY",
    "fetch_retries",
    "generate_metrics",
    "last_committed_slot",
    "progress_percent",
    "sidecars_stored",
    "slots_processed",
    "window_duration",
    "windows_committed",
    "write_metrics",
]
