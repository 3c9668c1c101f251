"""Block header containers."""

from __future__ import annotations

from blob_backfill.types import Bytes32, Bytes96, Container, Uint64

from .slot import Slot


class BeaconBlockHeader(Container):
    """
    The header of a beacon block.

    Carries the roots that commit to the parent, the post-state and the body.
    """

    slot: Slot
    """The slot in which the block was proposed."""

    proposer_index: Uint64
    """The index of the validator that proposed the block."""

    parent_root: Bytes32
    """The root of the parent block."""

    state_root: Bytes32
    """The root of the post-state."""

    body_root: Bytes32
    """The root of the block body."""


class SignedBeaconBlockHeader(Container):
    """A block header together with the proposer's signature over it."""

    message: BeaconBlockHeader
    """The signed header."""

    signature: Bytes96
    """The proposer's BLS signature."""
