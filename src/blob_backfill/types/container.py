"""
Fixed-size container base class.

A container is an ordered collection of named, fixed-size fields. Its
encoding is the concatenation of its field encodings in declaration order,
which matches SSZ for containers made exclusively of fixed-size parts.

Supported field types:

- Any type exposing `get_byte_length`, `encode_bytes` and `decode_bytes`
  (unsigned integers, byte vectors, nested containers).
- `list[T]` of such a type with an exact length, declared as
  `Field(min_length=N, max_length=N)`. This is an SSZ vector.
"""

from __future__ import annotations

from typing import Any, Sequence, get_args, get_origin

from typing_extensions import Self

from .base import StrictBaseModel
from .exceptions import ByteDecodeError


def _vector_length(cls_name: str, field_name: str, metadata: list[Any]) -> int:
    """Read the exact element count of a vector field from its pydantic metadata."""
    lengths = {getattr(m, "max_length", None) for m in metadata} - {None}
    minimums = {getattr(m, "min_length", None) for m in metadata} - {None}
    if len(lengths) != 1 or lengths != minimums:
        raise TypeError(f"{cls_name}.{field_name} must declare an exact vector length")
    return lengths.pop()


class Container(StrictBaseModel):
    """Base class for fixed-size containers."""

    @classmethod
    def _layout(cls) -> list[tuple[str, Any, int | None]]:
        """Return `(field name, element type, vector length or None)` in encoding order."""
        layout: list[tuple[str, Any, int | None]] = []
        for name, info in cls.model_fields.items():
            annotation = info.annotation
            if get_origin(annotation) is list:
                (element_type,) = get_args(annotation)
                count = _vector_length(cls.__name__, name, info.metadata)
                layout.append((name, element_type, count))
            else:
                layout.append((name, annotation, None))
        return layout

    @classmethod
    def get_byte_length(cls) -> int:
        """Total encoded size of the container."""
        total = 0
        for _, field_type, count in cls._layout():
            total += field_type.get_byte_length() * (1 if count is None else count)
        return total

    def encode_bytes(self) -> bytes:
        """Concatenate the field encodings in declaration order."""
        parts: list[bytes] = []
        for name, _, count in self._layout():
            value = getattr(self, name)
            if count is None:
                parts.append(value.encode_bytes())
            else:
                parts.extend(item.encode_bytes() for item in value)
        return b"".join(parts)

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Split `data` field by field and rebuild the container."""
        expected = cls.get_byte_length()
        if len(data) != expected:
            raise ByteDecodeError(cls.__name__, f"expected {expected} bytes, got {len(data)}")

        offset = 0
        values: dict[str, Any] = {}
        for name, field_type, count in cls._layout():
            size = field_type.get_byte_length()
            if count is None:
                values[name] = field_type.decode_bytes(data[offset : offset + size])
                offset += size
            else:
                items = []
                for _ in range(count):
                    items.append(field_type.decode_bytes(data[offset : offset + size]))
                    offset += size
                values[name] = items
        return cls(**values)

    @classmethod
    def encode_list(cls, items: Sequence[Self]) -> bytes:
        """Encode a list of containers as the concatenation of their encodings."""
        return b"".join(item.encode_bytes() for item in items)

    @classmethod
    def decode_list(cls, data: bytes) -> list[Self]:
        """Decode a concatenation produced by `encode_list`."""
        size = cls.get_byte_length()
        if len(data) % size != 0:
            raise ByteDecodeError(
                f"list[{cls.__name__}]",
                f"length {len(data)} is not a multiple of {size}",
            )
        return [cls.decode_bytes(data[i : i + size]) for i in range(0, len(data), size)]
