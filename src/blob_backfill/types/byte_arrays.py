"""
Fixed-length byte array types.

The Beacon API exchanges every fixed-size value (roots, commitments, proofs,
signatures, blobs) as a 0x-prefixed hex string. The types here are the
explicit, fallible parse targets for those strings.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .exceptions import ByteDecodeError


def parse_hex(value: str) -> bytes:
    """
    Parse a hex string as sent by the Beacon API.

    The 0x prefix is optional and digits may be upper or lower case.

    Raises:
        ValueError: If the string holds a non-hex character or an odd number of digits.
    """
    return bytes.fromhex(value.removeprefix("0x"))


class BaseBytes(bytes):
    """
    Immutable byte string of exactly `LENGTH` bytes.

    Built from raw bytes or from hex text. Anything else, or anything of the
    wrong length, is rejected with ValueError.
    """

    LENGTH: ClassVar[int]
    """Exact number of bytes, set by each subclass."""

    def __new__(cls, value: str | bytes | bytearray = b"") -> Self:
        if isinstance(value, str):
            raw = parse_hex(value)
        elif isinstance(value, (bytes, bytearray)):
            raw = bytes(value)
        else:
            raise ValueError(f"{cls.__name__} cannot be built from {type(value).__name__}")

        if len(raw) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(raw)}")
        return super().__new__(cls, raw)

    @classmethod
    def get_byte_length(cls) -> int:
        """Encoded size in bytes."""
        return cls.LENGTH

    def encode_bytes(self) -> bytes:
        """Raw bytes, unchanged."""
        return bytes(self)

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Rebuild a value from exactly `LENGTH` raw bytes."""
        if len(data) != cls.LENGTH:
            raise ByteDecodeError(cls.__name__, f"expected {cls.LENGTH} bytes, got {len(data)}")
        return cls(data)

    def to_0x_hex(self) -> str:
        """Return the 0x-prefixed lowercase hex form used by the Beacon API."""
        return "0x" + bytes(self).hex()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Validate hex text or raw bytes; serialize to 0x hex in JSON mode.

        Values that already have the right type pass through untouched.
        """

        def validate(value: Any) -> BaseBytes:
            if isinstance(value, cls):
                return value
            return cls(value)

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_0x_hex(), when_used="json"
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_0x_hex()})"


class Bytes32(BaseBytes):
    """Roots and Merkle branch nodes."""

    LENGTH = 32


class Bytes48(BaseBytes):
    """KZG commitments and proofs."""

    LENGTH = 48


class Bytes96(BaseBytes):
    """BLS signatures."""

    LENGTH = 96

