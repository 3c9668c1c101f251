import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import BaseModel, ValidationError

from blob_backfill.types import BaseUint, ByteDecodeError, Uint64


class SlotModel(BaseModel):
    slot: Uint64


def test_uint64_is_int() -> None:
    assert issubclass(Uint64, BaseUint)
    v = Uint64(5)
    assert isinstance(v, int)
    assert v == 5
    assert repr(v) == "Uint64(5)"
    assert str(v) == "5"


@pytest.mark.parametrize("value", [-1, 2**64])
def test_out_of_range_raises(value: int) -> None:
    with pytest.raises(OverflowError):
        Uint64(value)


def test_bool_is_rejected() -> None:
    with pytest.raises(TypeError):
        Uint64(True)


def test_decimal_string_is_accepted() -> None:
    assert Uint64("8626176") == 8626176


def test_encode_is_little_endian() -> None:
    assert Uint64(1).encode_bytes() == b"\x01" + b"\x00" * 7
    assert Uint64(0x0102).encode_bytes() == b"\x02\x01" + b"\x00" * 6


def test_decode_bytes_checks_length() -> None:
    with pytest.raises(ByteDecodeError):
        Uint64.decode_bytes(b"\x00" * 4)


@given(st.integers(min_value=0, max_value=2**64 - 1))
def test_encode_decode_bytes(value: int) -> None:
    encoded = Uint64(value).encode_bytes()
    assert len(encoded) == Uint64.get_byte_length() == 8
    assert Uint64.decode_bytes(encoded) == value


def test_pydantic_accepts_api_strings_and_serializes_strings() -> None:
    model = SlotModel.model_validate({"slot": "42"})
    assert isinstance(model.slot, Uint64)
    assert model.slot == 42
    assert model.model_dump(mode="json") == {"slot": "42"}


@pytest.mark.parametrize("value", ["-1", "abc", str(2**64), True])
def test_pydantic_rejects_invalid(value: object) -> None:
    with pytest.raises(ValidationError):
        SlotModel.model_validate({"slot": value})
