"""
Chain Configuration Specification

This file defines the protocol constants and network presets the backfill
depends on: blob sizing, header inclusion proof depth and the slot at which
blob sidecars first exist on each supported network.
"""

from typing_extensions import Final

from blob_backfill.config import BLOB_BACKFILL_ENV
from blob_backfill.types import StrictBaseModel, Uint64

# --- Time Parameters ---

SLOTS_PER_EPOCH: Final = Uint64(32)
"""Number of slots in an epoch."""

# --- Blob Parameters ---

BYTES_PER_FIELD_ELEMENT: Final = 32
"""Size of a single BLS field element in bytes."""

FIELD_ELEMENTS_PER_BLOB: Final = 4096 if BLOB_BACKFILL_ENV == "prod" else 4
"""
Number of field elements in a blob.

The test environment shrinks blobs so fixtures stay small; everything that
depends on blob size reads it from here.
"""

BYTES_PER_BLOB: Final = BYTES_PER_FIELD_ELEMENT * FIELD_ELEMENTS_PER_BLOB
"""Size of a blob in bytes (131072 on real networks)."""

KZG_COMMITMENT_INCLUSION_PROOF_DEPTH: Final = 17
"""Number of branch nodes proving a commitment's inclusion in the block body."""


class NetworkConfig(StrictBaseModel):
    """
    A model holding the immutable configuration of one network.

    Only the values needed to locate the blob activation boundary are kept.
    """

    name: str
    deneb_fork_epoch: Uint64
    slots_per_epoch: Uint64 = SLOTS_PER_EPOCH

    @property
    def activation_slot(self) -> Uint64:
        """First slot at which blob sidecars exist (start of the Deneb fork)."""
        return Uint64(self.deneb_fork_epoch * self.slots_per_epoch)


MAINNET_CONFIG: Final = NetworkConfig(name="mainnet", deneb_fork_epoch=Uint64(269568))
SEPOLIA_CONFIG: Final = NetworkConfig(name="sepolia", deneb_fork_epoch=Uint64(132608))
HOLESKY_CONFIG: Final = NetworkConfig(name="holesky", deneb_fork_epoch=Uint64(29696))
HOODI_CONFIG: Final = NetworkConfig(name="hoodi", deneb_fork_epoch=Uint64(0))

NETWORKS: Final[dict[str, NetworkConfig]] = {
    config.name: config
    for config in (MAINNET_CONFIG, SEPOLIA_CONFIG, HOLESKY_CONFIG, HOODI_CONFIG)
}
"""Supported networks, keyed by name."""

DENEB_ACTIVATION_SLOT: Final = MAINNET_CONFIG.activation_slot
"""Mainnet activation floor: slot 8626176."""
