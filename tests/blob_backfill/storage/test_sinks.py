"""Tests for the record sinks."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Sequence

import pytest

from blob_backfill.containers import Slot, SlotWriteRecord
from blob_backfill.exceptions import SinkCommitError
from blob_backfill.storage import JsonlSink, KeyValueSink, KeyValueStoreOp, SQLiteBlobStore
from tests.blob_backfill.helpers import make_record, root_hex, root_of


class FailingFile:
    """File stand-in whose writes fail like a full disk."""

    def write(self, data: str) -> int:
        raise OSError(28, "No space left on device")

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class DictStore:
    """In-memory store keyed by (namespace, key), one put per slot."""

    def __init__(self) -> None:
        self.data: dict[tuple[str, bytes], bytes] = {}
        self.batches: list[int] = []
        self.closed = False

    def blobs_as_kv_store_ops(self, record: SlotWriteRecord) -> list[KeyValueStoreOp]:
        if record.root is None:
            return []
        return [KeyValueStoreOp("roots", record.slot.encode_bytes(), bytes(record.root))]

    def do_atomically(self, ops: Sequence[KeyValueStoreOp]) -> None:
        self.batches.append(len(ops))
        for op in ops:
            self.data[(op.namespace, op.key)] = op.value

    def close(self) -> None:
        self.closed = True


class TestJsonlSink:
    """Append-only JSON-lines sink."""

    def test_one_line_per_record(self, tmp_path: Path) -> None:
        path = tmp_path / "blobs-data.jsonl"
        sink = JsonlSink(path)
        sink.commit([make_record(1, blob_count=1), make_record(2, has_block=False)])
        sink.close()

        text = path.read_text()
        assert text.endswith("\n")
        lines = text.splitlines()
        assert [json.loads(line)["slot"] for line in lines] == [1, 2]
        assert json.loads(lines[0])["root"] == root_hex(1)
        assert json.loads(lines[1]) == {"slot": 2, "root": "", "data": []}

    def test_appends_across_commits_and_reopen(self, tmp_path: Path) -> None:
        path = tmp_path / "blobs-data.jsonl"
        sink = JsonlSink(path)
        sink.commit([make_record(1)])
        sink.commit([make_record(2)])
        sink.close()

        reopened = JsonlSink(path)
        reopened.commit([make_record(3)])
        reopened.close()

        slots = [json.loads(line)["slot"] for line in path.read_text().splitlines()]
        assert slots == [1, 2, 3]

    def test_empty_window_writes_nothing(self, tmp_path: Path) -> None:
        path = tmp_path / "blobs-data.jsonl"
        sink = JsonlSink(path)
        sink.commit([])
        sink.close()
        assert path.read_text() == ""

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "out.jsonl"
        JsonlSink(path).close()
        assert path.exists()

    def test_write_failure(self, tmp_path: Path) -> None:
        sink = JsonlSink(tmp_path / "blobs-data.jsonl")
        sink.close()
        sink._file = FailingFile()  # type: ignore[assignment]

        with pytest.raises(SinkCommitError) as exc_info:
            sink.commit([make_record(9)])
        assert exc_info.value.slot == 9


class TestKeyValueSink:
    """Atomic batch sink over the SQLite store."""

    def test_window_is_stored(self) -> None:
        sink = KeyValueSink(SQLiteBlobStore(":memory:"))
        records = [
            make_record(10, blob_count=2),
            make_record(11, has_block=False),
            make_record(12, blob_count=0),
        ]
        sink.commit(records)

        store = sink.store
        assert store.get_block_root_by_slot(Slot(10)) == root_of(10)
        assert store.get_blob_sidecars(root_of(10)) == records[0].sidecars
        assert store.get_block_root_by_slot(Slot(11)) is None
        assert store.get_block_root_by_slot(Slot(12)) == root_of(12)
        assert store.get_blob_sidecars(root_of(12)) is None
        sink.close()

    def test_recommit_is_idempotent(self) -> None:
        sink = KeyValueSink(SQLiteBlobStore(":memory:"))
        records = [make_record(20, blob_count=1)]
        sink.commit(records)
        sink.commit(records)

        assert sink.store.get_blob_sidecars(root_of(20)) == records[0].sidecars
        sink.close()

    def test_commit_after_close_fails(self) -> None:
        sink = KeyValueSink(SQLiteBlobStore(":memory:"))
        sink.close()

        with pytest.raises(SinkCommitError) as exc_info:
            sink.commit([make_record(30)])
        assert exc_info.value.slot == 30

    def test_any_key_value_store_is_accepted(self) -> None:
        store = DictStore()
        sink = KeyValueSink(store)
        sink.commit([make_record(40), make_record(41, has_block=False), make_record(42)])
        sink.close()

        assert store.batches == [2]
        assert store.data == {
            ("roots", Slot(40).encode_bytes()): bytes(root_of(40)),
            ("roots", Slot(42).encode_bytes()): bytes(root_of(42)),
        }
        assert store.closed

    def test_window_without_blocks_skips_the_batch(self) -> None:
        store = DictStore()
        KeyValueSink(store).commit([make_record(50, has_block=False)])
        assert store.batches == []
