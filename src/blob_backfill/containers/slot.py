"""Slot container."""

from __future__ import annotations

from blob_backfill.types import Uint64


class Slot(Uint64):
    """Represents a slot number as a 64-bit unsigned integer."""
