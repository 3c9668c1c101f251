"""Reusable type definitions for Beacon API data."""

from .base import ApiModel, StrictBaseModel
from .byte_arrays import BaseBytes, Bytes32, Bytes48, Bytes96
from .container import Container
from .exceptions import ByteDecodeError
from .uint import BaseUint, Uint64

__all__ = [
    # Core types
    "BaseUint",
    "Uint64",
    "BaseBytes",
    "Bytes32",
    "Bytes48",
    "Bytes96",
    "ApiModel",
    "StrictBaseModel",
    "Container",
    # Exceptions
    "ByteDecodeError",
]
