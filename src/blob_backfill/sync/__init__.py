"""
Sync module: backfill of blob sidecars over a slot range.

What Is Backfill?
-----------------
A node that started from a recent checkpoint has no blob sidecars for the
slots before it. Backfill downloads them from another node's Beacon API and
stores them locally, together with the canonical block root of every slot.

How It Works
------------
- The range planner clamps the start to the blob activation slot and resolves
  an open end to the current head
- The service walks the range in fixed-size windows
- Within a window, every slot's sidecars and root are fetched concurrently
- Results are joined per slot and committed as one batch per window
"""

from __future__ import annotations

__all__ = [
    # Main service
    "BackfillService",
    "BackfillProgress",
    # Range planning
    "SlotRange",
    "clamp_start",
    "plan_range",
    "resolve_end",
    # Correlation
    "correlate",
    "parse_root",
    # Progress
    "ProgressReporter",
    # Configuration constants
    "DEFAULT_CONCURRENCY",
    "JSONL_FILE_NAME",
    "STORE_FILE_NAME",
]

from .config import DEFAULT_CONCURRENCY, JSONL_FILE_NAME, STORE_FILE_NAME
from .correlate import correlate, parse_root
from .progress import ProgressReporter
from .range import SlotRange, clamp_start, plan_range, resolve_end
from .service import BackfillProgress, BackfillService
