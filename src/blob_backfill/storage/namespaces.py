"""
Database namespace definitions for storage tables.

Every namespace is a plain key-value table: a BLOB primary key and a BLOB
value. Keys and values are produced by the store's encoding helpers, so the
schema never needs to know what it holds.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class KeyValueNamespace:
    """A key-value table."""

    TABLE_NAME: str
    """Table name for the namespace."""

    def create_table_sql(self) -> str:
        """SQL to create the table."""
        return f"""
            CREATE TABLE IF NOT EXISTS {self.TABLE_NAME} (
                key BLOB PRIMARY KEY,
                value BLOB NOT NULL
            )
        """


BLOB_SIDECARS = KeyValueNamespace(TABLE_NAME="blob_sidecars")
"""
Blob sidecar lists, keyed by the 32-byte root of their block.

The value is the concatenated encoding of every sidecar of the block.
"""

BLOCK_ROOTS = KeyValueNamespace(TABLE_NAME="block_roots")
"""
Slot-to-root index, keyed by the 8-byte little-endian slot.

Enables lookups like "what block was at slot N?". Slots without a block
have no entry.
"""

ALL_NAMESPACES = [BLOB_SIDECARS, BLOCK_ROOTS]
"""All namespace definitions for schema initialization."""
