"""
Storage module for persistent blob sidecar storage.

Provides the key-value store abstraction and the record sinks.
Uses SQLite for the keyed store and plain files for the append log.
"""

from .database import KeyValueStore, KeyValueStoreOp, SidecarSink
from .namespaces import BLOB_SIDECARS, BLOCK_ROOTS, KeyValueNamespace
from .sinks import JsonlSink, KeyValueSink
from .sqlite import SQLiteBlobStore

__all__ = [
    "BLOB_SIDECARS",
    "BLOCK_ROOTS",
    "JsonlSink",
    "KeyValueNamespace",
    "KeyValueSink",
    "KeyValueStore",
    "KeyValueStoreOp",
    "SQLiteBlobStore",
    "SidecarSink",
]
