"""
Response envelopes of the Beacon API endpoints used by the backfill.

Envelopes ignore fields they do not model (`execution_optimistic`,
`finalized`, ...) so newer servers stay readable. The containers they wrap
are strict.
"""

from __future__ import annotations

from blob_backfill.containers import BlobSidecar, SignedBeaconBlockHeader
from blob_backfill.types import ApiModel


class BlobSidecarsResponse(ApiModel):
    """Body of `GET /eth/v1/beacon/blob_sidecars/{slot}`."""

    data: list[BlobSidecar]


class BlockHeaderData(ApiModel):
    """One header entry of the headers endpoints."""

    root: str
    """
    Block root as sent by the server.

    Kept as text here; it is parsed into a fixed-size root when records are built.
    """

    canonical: bool
    header: SignedBeaconBlockHeader


class BlockHeadersResponse(ApiModel):
    """Body of `GET /eth/v1/beacon/headers`."""

    execution_optimistic: bool = False
    finalized: bool = False
    data: list[BlockHeaderData]


class BlockHeaderResponse(ApiModel):
    """Body of `GET /eth/v1/beacon/headers/{slot}`."""

    execution_optimistic: bool = False
    finalized: bool = False
    data: BlockHeaderData
