"""
Sync service configuration constants.

Operational parameters for the backfill: window size and output file names.
"""

from __future__ import annotations

from typing import Final

DEFAULT_CONCURRENCY: Final[int] = 20
"""Slots per window. Each slot issues two concurrent requests."""

STORE_FILE_NAME: Final[str] = "blobs.sqlite"
"""File name of the keyed store inside the data directory."""

JSONL_FILE_NAME: Final[str] = "blobs-data.jsonl"
"""File name of the append log inside the data directory."""
