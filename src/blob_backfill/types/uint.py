"""
Unsigned integer types.

The Beacon API sends every unsigned integer as a decimal string (for
example `"8626176"`). Validation accepts both `int` and such strings, and
JSON serialization writes strings back.
"""

from __future__ import annotations

from typing import Any, ClassVar, SupportsInt

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self

from .exceptions import ByteDecodeError


class BaseUint(int):
    """An `int` restricted to `[0, 2**BITS)`, encoded as `BITS // 8` little-endian bytes."""

    BITS: ClassVar[int]

    def __new__(cls, value: SupportsInt | str) -> Self:
        """
        Build a checked value.

        Raises:
            TypeError: If `value` is a bool.
            ValueError: If `value` is a string that is not a decimal integer.
            OverflowError: If `value` does not fit in `BITS` bits.
        """
        if isinstance(value, bool):
            raise TypeError(f"{cls.__name__} cannot be built from a bool")
        number = int(value)
        if number < 0 or number.bit_length() > cls.BITS:
            raise OverflowError(f"{number} is out of range for {cls.__name__}")
        return super().__new__(cls, number)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        return core_schema.no_info_plain_validator_function(
            validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: str(int(value)), when_used="json"
            ),
        )

    @classmethod
    def get_byte_length(cls) -> int:
        """Encoded size in bytes."""
        return cls.BITS // 8

    def encode_bytes(self) -> bytes:
        """Little-endian encoding of exactly `get_byte_length()` bytes."""
        return int(self).to_bytes(self.get_byte_length(), "little")

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Parse exactly `get_byte_length()` little-endian bytes."""
        if len(data) != cls.get_byte_length():
            raise ByteDecodeError(
                cls.__name__,
                f"expected {cls.get_byte_length()} bytes, got {len(data)}",
            )
        return cls(int.from_bytes(data, "little"))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


class Uint64(BaseUint):
    """64-bit unsigned integer."""

    BITS = 64
