"""Shared test helpers."""

from .builders import (
    make_header_entry_json,
    make_header_json,
    make_record,
    make_sidecar,
    make_sidecar_json,
    root_hex,
    root_of,
)
from .mocks import (
    BASE_URL,
    FakeBeaconApi,
    InFlightServer,
    RecordingSleep,
    header_path,
    sidecars_path,
)

__all__ = [
    "BASE_URL",
    "FakeBeaconApi",
    "InFlightServer",
    "RecordingSleep",
    "header_path",
    "make_header_entry_json",
    "make_header_json",
    "make_record",
    "make_sidecar",
    "make_sidecar_json",
    "root_hex",
    "root_of",
    "sidecars_path",
]
