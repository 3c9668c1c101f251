"""Per-slot write record."""

from __future__ import annotations

import json

from blob_backfill.types import Bytes32, StrictBaseModel

from .sidecar import BlobSidecar
from .slot import Slot


class SlotWriteRecord(StrictBaseModel):
    """
    Everything fetched for one slot, ready to be committed.

    Records are built per window and discarded once committed.
    """

    slot: Slot
    """The slot the record describes."""

    root: Bytes32 | None
    """Root of the canonical block at `slot`, or None when the slot has no block."""

    sidecars: list[BlobSidecar]
    """Sidecars of the block, in index order. Empty when the slot has no blobs."""

    def to_json_line(self) -> str:
        """
        Serialize the record as one JSON line (without the trailing newline).

        Sidecars keep the Beacon API JSON form so that lines can be fed back
        into the same response models that parsed them.
        """
        return json.dumps(
            {
                "slot": int(self.slot),
                "root": self.root.to_0x_hex() if self.root is not None else "",
                "data": [sidecar.model_dump(mode="json") for sidecar in self.sidecars],
            },
            separators=(",", ":"),
        )
