"""Beacon API endpoint paths used by the backfill."""

from __future__ import annotations

BLOB_SIDECARS_ENDPOINT = "eth/v1/beacon/blob_sidecars/{slot}"
"""Blob sidecars of the canonical block at a slot. 404 when the slot has no block."""

HEADERS_ENDPOINT = "eth/v1/beacon/headers"
"""Headers of the current head. The first entry carries the head slot."""

HEADER_ENDPOINT = "eth/v1/beacon/headers/{slot}"
"""Canonical header at a slot. 404 when the slot has no block."""


def get_url(base_url: str, path: str) -> str:
    """Join a base URL and an endpoint path, with or without a trailing slash on the base."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"
