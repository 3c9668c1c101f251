"""Tests for the SQLite blob store."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from blob_backfill.containers import BlobSidecar, Slot, SlotWriteRecord
from blob_backfill.storage import BLOB_SIDECARS, BLOCK_ROOTS, KeyValueStoreOp, SQLiteBlobStore
from blob_backfill.types import Bytes32
from tests.blob_backfill.helpers import make_record, root_of


@pytest.fixture
def store() -> Generator[SQLiteBlobStore, None, None]:
    """Create an in-memory store for testing."""
    blob_store = SQLiteBlobStore(":memory:")
    yield blob_store
    blob_store.close()


class TestKeyValueOps:
    """Tests for raw batch writes."""

    def test_do_atomically_and_get(self, store: SQLiteBlobStore) -> None:
        store.do_atomically(
            [
                KeyValueStoreOp(BLOCK_ROOTS.TABLE_NAME, b"k1", b"v1"),
                KeyValueStoreOp(BLOCK_ROOTS.TABLE_NAME, b"k2", b"v2"),
            ]
        )
        assert store.get(BLOCK_ROOTS.TABLE_NAME, b"k1") == b"v1"
        assert store.get(BLOCK_ROOTS.TABLE_NAME, b"k2") == b"v2"
        assert store.get(BLOCK_ROOTS.TABLE_NAME, b"k3") is None

    def test_put_overwrites(self, store: SQLiteBlobStore) -> None:
        store.do_atomically([KeyValueStoreOp(BLOCK_ROOTS.TABLE_NAME, b"k", b"old")])
        store.do_atomically([KeyValueStoreOp(BLOCK_ROOTS.TABLE_NAME, b"k", b"new")])
        assert store.get(BLOCK_ROOTS.TABLE_NAME, b"k") == b"new"

    def test_failed_batch_applies_nothing(self, store: SQLiteBlobStore) -> None:
        """A batch that fails midway leaves no trace of its earlier puts."""
        with pytest.raises(sqlite3.Error):
            store.do_atomically(
                [
                    KeyValueStoreOp(BLOCK_ROOTS.TABLE_NAME, b"k", b"v"),
                    KeyValueStoreOp("no_such_table", b"k", b"v"),
                ]
            )
        assert store.get(BLOCK_ROOTS.TABLE_NAME, b"k") is None


class TestRecordOps:
    """Tests for turning records into puts."""

    def test_block_with_blobs(self, store: SQLiteBlobStore) -> None:
        record = make_record(slot=50, blob_count=2)
        ops = store.blobs_as_kv_store_ops(record)

        assert [op.namespace for op in ops] == [BLOCK_ROOTS.TABLE_NAME, BLOB_SIDECARS.TABLE_NAME]
        assert ops[0].key == (50).to_bytes(8, "little")
        assert ops[0].value == bytes(root_of(50))
        assert ops[1].key == bytes(root_of(50))
        assert ops[1].value == BlobSidecar.encode_list(record.sidecars)

    def test_block_without_blobs(self, store: SQLiteBlobStore) -> None:
        ops = store.blobs_as_kv_store_ops(make_record(slot=51, blob_count=0))
        assert [op.namespace for op in ops] == [BLOCK_ROOTS.TABLE_NAME]

    def test_slot_without_block(self, store: SQLiteBlobStore) -> None:
        assert store.blobs_as_kv_store_ops(make_record(slot=52, has_block=False)) == []

    def test_sidecars_without_root_are_dropped_with_warning(
        self, store: SQLiteBlobStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        sidecars = make_record(slot=55, blob_count=2).sidecars
        record = SlotWriteRecord(slot=Slot(55), root=None, sidecars=sidecars)

        with caplog.at_level(logging.WARNING, logger="blob_backfill.storage.sqlite"):
            ops = store.blobs_as_kv_store_ops(record)

        assert ops == []
        assert "Dropping 2 sidecars for slot 55" in caplog.text

    def test_slot_without_block_logs_nothing(
        self, store: SQLiteBlobStore, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="blob_backfill.storage.sqlite"):
            store.blobs_as_kv_store_ops(make_record(slot=56, has_block=False))
        assert caplog.records == []

    def test_read_back(self, store: SQLiteBlobStore) -> None:
        record = make_record(slot=53, blob_count=3)
        store.do_atomically(store.blobs_as_kv_store_ops(record))

        assert store.get_block_root_by_slot(Slot(53)) == root_of(53)
        assert store.get_blob_sidecars(root_of(53)) == record.sidecars

    def test_read_missing(self, store: SQLiteBlobStore) -> None:
        assert store.get_block_root_by_slot(Slot(54)) is None
        assert store.get_blob_sidecars(Bytes32(b"\x01" * 32)) is None


def test_store_persists_across_reopen(tmp_path: Path) -> None:
    path = tmp_path / "blobs.sqlite"
    record = make_record(slot=60, blob_count=1)

    with SQLiteBlobStore(path) as store:
        store.do_atomically(store.blobs_as_kv_store_ops(record))

    with SQLiteBlobStore(path) as store:
        assert store.get_block_root_by_slot(Slot(60)) == root_of(60)
        assert store.get_blob_sidecars(root_of(60)) == record.sidecars
