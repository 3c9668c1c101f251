"""
Storage interfaces.

Defines the Protocols that storage backends and record sinks must follow.
Uses structural subtyping for flexibility.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from blob_backfill.containers import SlotWriteRecord


@dataclass(frozen=True, slots=True)
class KeyValueStoreOp:
    """A single put into a key-value namespace."""

    namespace: str
    """Table the value is written to."""

    key: bytes
    """Primary key of the value."""

    value: bytes
    """Encoded value."""


class KeyValueStore(Protocol):
    """
    Protocol for a key-value store with atomic batches.

    Any class with matching methods satisfies the protocol.
    """

    def blobs_as_kv_store_ops(self, record: SlotWriteRecord) -> list[KeyValueStoreOp]:
        """
        Convert a record into the puts that store it.

        Args:
            record: One slot of a committed window.
        """
        ...

    def do_atomically(self, ops: Sequence[KeyValueStoreOp]) -> None:
        """
        Apply every operation, or none of them.

        Args:
            ops: Puts to apply, in order.
        """
        ...

    def close(self) -> None:
        """Close the store and release resources."""
        ...


class SidecarSink(Protocol):
    """
    Protocol for the destination of committed records.

    A sink receives one window of records at a time, in ascending slot
    order. Windows arrive sequentially, so implementations need no locking.
    """

    def commit(self, records: Sequence[SlotWriteRecord]) -> None:
        """
        Persist one window of records.

        Raises:
            SinkCommitError: If the records could not be persisted.
        """
        ...

    def close(self) -> None:
        """Flush and release the underlying storage."""
        ...
