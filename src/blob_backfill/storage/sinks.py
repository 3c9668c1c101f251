"""
Record sinks.

Two interchangeable destinations for committed windows:

- `JsonlSink` appends one JSON line per slot to a growing file. Existing
  lines are never rewritten. A crash in the middle of a write may leave a
  truncated last line.
- `KeyValueSink` turns records into key-value puts and applies a whole
  window as one atomic batch.

Neither retries: a failed commit aborts the run.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Sequence

from blob_backfill.containers import SlotWriteRecord
from blob_backfill.exceptions import SinkCommitError

from .database import KeyValueStore

logger = logging.getLogger(__name__)


class JsonlSink:
    """Append-only JSON-lines log of records."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open("a", encoding="utf-8")

    def commit(self, records: Sequence[SlotWriteRecord]) -> None:
        """Append one line per record, in order, and flush."""
        if not records:
            return
        payload = "".join(record.to_json_line() + "\n" for record in records)
        try:
            self._file.write(payload)
            self._file.flush()
        except OSError as exc:
            raise SinkCommitError(
                f"Failed to append {len(records)} records to {self.path}: {exc}",
                slot=int(records[0].slot),
            ) from exc
        logger.debug("Appended %d records to %s", len(records), self.path)

    def close(self) -> None:
        self._file.close()


class KeyValueSink:
    """Atomic batch writer into a key-value store."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def commit(self, records: Sequence[SlotWriteRecord]) -> None:
        """Write every record of the window in a single atomic batch."""
        ops = [op for record in records for op in self.store.blobs_as_kv_store_ops(record)]
        if not ops:
            return
        try:
            self.store.do_atomically(ops)
        except sqlite3.Error as exc:
            raise SinkCommitError(
                f"Failed to write batch of {len(ops)} operations: {exc}",
                slot=int(records[0].slot),
            ) from exc
        logger.debug("Wrote batch of %d operations for %d slots", len(ops), len(records))

    def close(self) -> None:
        self.store.close()
