"""Blob sidecar containers."""

from __future__ import annotations

from pydantic import Field

from blob_backfill.chain.config import BYTES_PER_BLOB, KZG_COMMITMENT_INCLUSION_PROOF_DEPTH
from blob_backfill.types import BaseBytes, Bytes32, Bytes48, Container, Uint64

from .header import SignedBeaconBlockHeader
from .slot import Slot


class Blob(BaseBytes):
    """Opaque blob payload of exactly `BYTES_PER_BLOB` bytes."""

    LENGTH = BYTES_PER_BLOB

    def __repr__(self) -> str:
        """Blobs are large; show only the size and a short prefix."""
        return f"Blob({len(self)} bytes, {self[:8].hex()}...)"


class BlobSidecar(Container):
    """
    One blob and the data needed to tie it to its block.

    The commitment is proven to be part of the block body through
    `kzg_commitment_inclusion_proof`, a Merkle branch ending at the body root
    of `signed_block_header`. Proofs are stored as received, never verified.
    """

    index: Uint64
    """Position of the blob within the block."""

    blob: Blob
    """The blob payload."""

    kzg_commitment: Bytes48
    """KZG commitment to the blob."""

    kzg_proof: Bytes48
    """KZG proof for the commitment."""

    signed_block_header: SignedBeaconBlockHeader
    """Header of the block the blob belongs to."""

    kzg_commitment_inclusion_proof: list[Bytes32] = Field(
        min_length=KZG_COMMITMENT_INCLUSION_PROOF_DEPTH,
        max_length=KZG_COMMITMENT_INCLUSION_PROOF_DEPTH,
    )
    """Merkle branch from the commitment to the block body root."""

    @property
    def slot(self) -> Slot:
        """Slot of the block this sidecar belongs to."""
        return self.signed_block_header.message.slot
