"""
Backfill service: the window loop.

How It Works
------------
1. Split the planned range into windows of `concurrency` slots
2. For every slot of a window, fetch sidecars and the block root concurrently
3. Wait for every fetch of the window
4. Join the results into one record per slot
5. Commit the window to the sink
6. Report progress and move to the next window

Windows run strictly one after another. The sink therefore never sees two
windows at once, and records reach it in ascending slot order.

Failure Model
-------------
The run is fail-stop. When a fetch fails for good (its retry budget is spent,
or its body cannot be decoded), the other fetches of the window are
cancelled, nothing of that window is committed, and the error propagates.
Windows committed earlier stay committed.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from blob_backfill import metrics
from blob_backfill.api import BeaconApiClient
from blob_backfill.containers import SlotWriteRecord
from blob_backfill.storage import SidecarSink

from .config import DEFAULT_CONCURRENCY
from .correlate import correlate
from .progress import ProgressReporter
from .range import SlotRange

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BackfillProgress:
    """Totals of a backfill run."""

    windows: int = 0
    """Windows committed."""

    slots: int = 0
    """Slots committed."""

    sidecars: int = 0
    """Sidecars committed."""

    last_percent: float = 0.0
    """Percentage reported after the most recent window."""


@dataclass(slots=True)
class BackfillService:
    """
    Drives the backfill of a slot range.

    The service owns neither the client nor the sink; the caller opens and
    closes them around `run`.
    """

    client: BeaconApiClient
    """Retrying Beacon API client."""

    sink: SidecarSink
    """Destination of committed windows."""

    concurrency: int = DEFAULT_CONCURRENCY
    """Slots per window."""

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")

    async def run(self, slot_range: SlotRange) -> BackfillProgress:
        """
        Backfill every slot of `slot_range`.

        Returns:
            Totals of the run.

        Raises:
            BackfillError: On the first fatal error. Earlier windows stay committed.
        """
        reporter = ProgressReporter(slot_range)
        progress = BackfillProgress()

        logger.info(
            "Backfilling slots %d..%d (%d slots, %d per window)",
            slot_range.start,
            slot_range.end,
            len(slot_range),
            self.concurrency,
        )

        for window in slot_range.windows(self.concurrency):
            with metrics.window_duration.time():
                records = await self.fetch_window(window)
                self.sink.commit(records)

            progress.windows += 1
            progress.slots += len(records)
            progress.sidecars += sum(len(record.sidecars) for record in records)
            progress.last_percent = reporter.report(window, records)

        logger.info(
            "Backfill complete: %d slots, %d sidecars in %d windows",
            progress.slots,
            progress.sidecars,
            progress.windows,
        )
        return progress

    async def fetch_window(self, window: SlotRange) -> list[SlotWriteRecord]:
        """
        Fetch and correlate every slot of one window.

        Issues `2 * len(window)` requests at once: one sidecar request and one
        header request per slot.

        Raises:
            BackfillError: The first fatal fetch or root parse error. Sibling
                requests are cancelled and their results discarded.
        """
        slots = list(window)
        logger.debug("Fetching window %d..%d", window.start, window.end)

        try:
            async with asyncio.TaskGroup() as tg:
                sidecar_tasks = [
                    tg.create_task(self.client.get_blob_sidecars(slot)) for slot in slots
                ]
                root_tasks = [tg.create_task(self.client.get_block_root(slot)) for slot in slots]
        except ExceptionGroup as group:
            # The task group already cancelled the siblings.
            raise group.exceptions[0] from None

        return correlate(
            slots,
            [task.result() for task in root_tasks],
            [task.result() for task in sidecar_tasks],
        )
