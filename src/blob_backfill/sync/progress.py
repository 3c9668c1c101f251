"""Progress reporting after each committed window."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from blob_backfill import metrics
from blob_backfill.containers import SlotWriteRecord

from .range import SlotRange

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProgressReporter:
    """Logs and records completion after every window."""

    slot_range: SlotRange
    """The full range of the run."""

    def report(self, window: SlotRange, records: Sequence[SlotWriteRecord]) -> float:
        """
        Report one committed window.

        Returns:
            Completion percentage, measured at the start of the window.
        """
        percent = self.slot_range.progress(window.start)
        sidecar_count = sum(len(record.sidecars) for record in records)

        metrics.progress_percent.set(percent)
        metrics.last_committed_slot.set(int(window.end))
        metrics.slots_processed.inc(len(records))
        metrics.sidecars_stored.inc(sidecar_count)
        metrics.windows_committed.inc()

        logger.info(
            "Blobs downloaded for %d..%d [%.2f%%] (%d sidecars)",
            window.start,
            window.end,
            percent,
            sidecar_count,
        )
        return percent
