"""Containers exchanged with the Beacon API and committed to storage."""

from .header import BeaconBlockHeader, SignedBeaconBlockHeader
from .record import SlotWriteRecord
from .sidecar import Blob, BlobSidecar
from .slot import Slot

__all__ = [
    "BeaconBlockHeader",
    "Blob",
    "BlobSidecar",
    "SignedBeaconBlockHeader",
    "Slot",
    "SlotWriteRecord",
]
