"""
Slot range planning.

Turns the operator's request (a start slot and an optional end slot) into the
concrete inclusive range to backfill:

1. The start is clamped to the activation slot: blob sidecars do not exist
   before it, so earlier slots would only produce empty records.
2. A missing end is resolved to the current head slot.
3. The range is split into windows of a fixed size, the last one clamped to
   the end slot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from blob_backfill.api import BeaconApiClient
from blob_backfill.containers import Slot
from blob_backfill.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SlotRange:
    """An inclusive range of slots."""

    start: Slot
    """First slot of the range."""

    end: Slot
    """Last slot of the range (inclusive)."""

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise InvalidRangeError(int(self.start), int(self.end))

    def __len__(self) -> int:
        return int(self.end) - int(self.start) + 1

    def __iter__(self) -> Iterator[Slot]:
        return (Slot(slot) for slot in range(int(self.start), int(self.end) + 1))

    def windows(self, size: int) -> Iterator[SlotRange]:
        """
        Split the range into consecutive windows of `size` slots.

        The last window is clamped to `end`, so no slot outside the range is
        ever part of a window.
        """
        if size < 1:
            raise ValueError(f"window size must be at least 1, got {size}")
        for window_start in range(int(self.start), int(self.end) + 1, size):
            window_end = min(window_start + size - 1, int(self.end))
            yield SlotRange(Slot(window_start), Slot(window_end))

    def progress(self, slot: Slot) -> float:
        """
        Percentage of the range that lies before `slot`.

        Measured against the distance from `start` to `end`, so the first
        window reports 0% and a single-slot range always reports 0%.
        """
        span = int(self.end) - int(self.start)
        if span == 0:
            return 0.0
        return (int(slot) - int(self.start)) / span * 100.0


def clamp_start(start: Slot, floor: Slot) -> Slot:
    """
    Clamp the requested start slot to the activation floor.

    Logs a warning when the requested slot is raised.
    """
    if start < floor:
        logger.warning(
            "Using %d instead of %d since blobs didn't exist before that slot",
            floor,
            start,
        )
        return Slot(floor)
    return Slot(start)


async def resolve_end(client: BeaconApiClient, end: Slot | None) -> Slot:
    """
    Return `end`, or the current head slot when no end was requested.

    Raises:
        HeadNotFoundError: If the head headers resource is empty.
    """
    if end is not None:
        return Slot(end)
    head_slot = await client.get_head_slot()
    logger.info("Head slot: %d", head_slot)
    return Slot(head_slot)


async def plan_range(
    client: BeaconApiClient,
    start: Slot,
    end: Slot | None,
    floor: Slot,
) -> SlotRange:
    """
    Resolve the concrete inclusive range to backfill.

    Args:
        client: API client, used only when `end` is None.
        start: Requested first slot.
        end: Requested last slot, or None for the current head.
        floor: Activation slot of the network.

    Raises:
        HeadNotFoundError: If `end` is None and the head cannot be found.
        InvalidRangeError: If the resolved end is before the clamped start.
    """
    effective_start = clamp_start(start, floor)
    effective_end = await resolve_end(client, end)
    return SlotRange(effective_start, effective_end)
