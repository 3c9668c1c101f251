"""Chain constants and network presets."""

from .config import (
    BYTES_PER_BLOB,
    DENEB_ACTIVATION_SLOT,
    KZG_COMMITMENT_INCLUSION_PROOF_DEPTH,
    MAINNET_CONFIG,
    NETWORKS,
    NetworkConfig,
)

__all__ = [
    "BYTES_PER_BLOB",
    "DENEB_ACTIVATION_SLOT",
    "KZG_COMMITMENT_INCLUSION_PROOF_DEPTH",
    "MAINNET_CONFIG",
    "NETWORKS",
    "NetworkConfig",
]
