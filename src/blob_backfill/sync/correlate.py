"""
Per-slot correlation of fetch results.

A window yields two independent result lists: sidecars per slot and block
root strings per slot. This module joins them into write records.
"""

from __future__ import annotations

from typing import Sequence

from blob_backfill.api import EMPTY_ROOT
from blob_backfill.containers import BlobSidecar, Slot, SlotWriteRecord
from blob_backfill.exceptions import RootParseError
from blob_backfill.types import Bytes32


def parse_root(value: str, slot: Slot) -> Bytes32 | None:
    """
    Parse a root string as sent by the API.

    Returns:
        The root, or None for the empty root of a slot without a block.

    Raises:
        RootParseError: If the string is not 32 bytes of hex.
    """
    if value == EMPTY_ROOT:
        return None
    try:
        return Bytes32(value)
    except ValueError as exc:
        raise RootParseError(value, str(exc), slot=int(slot)) from exc


def correlate(
    slots: Sequence[Slot],
    roots: Sequence[str],
    sidecars: Sequence[list[BlobSidecar]],
) -> list[SlotWriteRecord]:
    """
    Join per-slot roots and sidecars into one record per slot.

    All three sequences are indexed by position within the window, in
    ascending slot order; the records keep that order. Any unparsable root
    fails the whole window.
    """
    if not len(slots) == len(roots) == len(sidecars):
        raise ValueError(
            f"Mismatched window results: {len(slots)} slots, "
            f"{len(roots)} roots, {len(sidecars)} sidecar lists"
        )
    return [
        SlotWriteRecord(slot=slot, root=parse_root(root, slot), sidecars=slot_sidecars)
        for slot, root, slot_sidecars in zip(slots, roots, sidecars, strict=True)
    ]
