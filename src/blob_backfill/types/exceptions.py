"""Errors raised by the fixed-size types."""

from __future__ import annotations


class ByteDecodeError(Exception):
    """
    Raw bytes do not decode into the requested type.

    Attributes:
        type_name: Name of the type being decoded.
        detail: What went wrong.
    """

    def __init__(self, type_name: str, detail: str) -> None:
        self.type_name = type_name
        self.detail = detail
        super().__init__(f"Failed to decode {type_name}: {detail}")
