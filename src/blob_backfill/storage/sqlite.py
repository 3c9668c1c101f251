"""
SQLite key-value store for blob sidecars.

This module provides persistent storage for backfilled data:

- Blob sidecar lists indexed by the root of their block
- Slot-to-root mappings for historical queries

Values are stored as fixed-size container encodings in BLOB columns.
Writes go through `do_atomically`, which applies a whole batch inside one
transaction: after a crash either every put of the batch is visible or none.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Sequence

from blob_backfill.containers import BlobSidecar, Slot, SlotWriteRecord
from blob_backfill.types import Bytes32

from .database import KeyValueStoreOp
from .namespaces import ALL_NAMESPACES, BLOB_SIDECARS, BLOCK_ROOTS

logger = logging.getLogger(__name__)


class SQLiteBlobStore:
    """
    SQLite implementation of the KeyValueStore protocol.

    Stores all namespaces in a single SQLite file.
    Encoding happens on write, decoding on read.
    """

    def __init__(self, path: Path | str) -> None:
        """
        Initialize SQLite store.

        Creates the database file and tables if they don't exist.

        Args:
            path: Path to SQLite database file.
                  Use ":memory:" for in-memory database.
        """
        self._path = Path(path) if isinstance(path, str) else path

        # The store is driven from a single event loop thread.
        self._conn = sqlite3.connect(str(self._path))

        # Row factory enables dict-like access: row["column_name"].
        self._conn.row_factory = sqlite3.Row

        self._init_schema()

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        cursor = self._conn.cursor()
        for namespace in ALL_NAMESPACES:
            cursor.execute(namespace.create_table_sql())
        self._conn.commit()

    # -------------------------------------------------------------------------
    # Key-Value Operations
    # -------------------------------------------------------------------------

    def do_atomically(self, ops: Sequence[KeyValueStoreOp]) -> None:
        """
        Apply every put in one transaction.

        The connection context manager commits on success and rolls back if
        any statement fails, so a partially applied batch is never visible.

        Raises:
            sqlite3.Error: If the batch could not be applied.
        """
        with self._conn:
            for op in ops:
                # INSERT OR REPLACE keeps repeated runs idempotent per key.
                self._conn.execute(
                    f"INSERT OR REPLACE INTO {op.namespace} (key, value) VALUES (?, ?)",
                    (op.key, op.value),
                )

    def get(self, namespace: str, key: bytes) -> bytes | None:
        """Retrieve a raw value, or None if the key is absent."""
        cursor = self._conn.cursor()
        cursor.execute(f"SELECT value FROM {namespace} WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            return None
        return row["value"]

    # -------------------------------------------------------------------------
    # Blob Sidecar Operations
    # -------------------------------------------------------------------------

    def blobs_as_kv_store_ops(self, record: SlotWriteRecord) -> list[KeyValueStoreOp]:
        """
        Convert a record into the puts that store it.

        A slot without a block (no root) produces no operation. A block
        produces a slot index entry, plus its sidecar list when it has blobs.
        """
        if record.root is None:
            if record.sidecars:
                logger.warning(
                    "Dropping %d sidecars for slot %d: the slot has no block root",
                    len(record.sidecars),
                    int(record.slot),
                )
            return []

        root = bytes(record.root)
        ops = [
            KeyValueStoreOp(
                namespace=BLOCK_ROOTS.TABLE_NAME,
                key=record.slot.encode_bytes(),
                value=root,
            )
        ]
        if record.sidecars:
            ops.append(
                KeyValueStoreOp(
                    namespace=BLOB_SIDECARS.TABLE_NAME,
                    key=root,
                    value=BlobSidecar.encode_list(record.sidecars),
                )
            )
        return ops

    def get_blob_sidecars(self, root: Bytes32) -> list[BlobSidecar] | None:
        """Retrieve the sidecars of a block, or None if none were stored."""
        data = self.get(BLOB_SIDECARS.TABLE_NAME, bytes(root))
        if data is None:
            return None
        return BlobSidecar.decode_list(data)

    def get_block_root_by_slot(self, slot: Slot) -> Bytes32 | None:
        """Retrieve the block root indexed for a slot, or None if the slot has no block."""
        data = self.get(BLOCK_ROOTS.TABLE_NAME, Slot(slot).encode_bytes())
        if data is None:
            return None
        return Bytes32(data)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close database connection."""
        self._conn.close()

    def __enter__(self) -> SQLiteBlobStore:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()
