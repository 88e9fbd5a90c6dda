from __future__ import annotations

import struct

import pytest

from ggjson.exceptions import ValueConversionError
from ggjson.numbers import Float32, Int32, Int64, UInt32, UInt64, convert_number


def test_convert_number_defaults_to_double() -> None:
    value = convert_number("42")
    assert value == 42.0
    assert type(value) is float
    assert convert_number("-42.42") == -42.42
    assert type(convert_number("1", str)) is float


def test_convert_number_integer_kinds() -> None:
    assert convert_number("7", int) == 7
    assert type(convert_number("7", int)) is int
    value = convert_number("-1", Int32)
    assert isinstance(value, Int32)
    assert value == -1
    assert convert_number(str(2**63 - 1), Int64) == 2**63 - 1
    assert convert_number(str(2**64 - 1), UInt64) == 2**64 - 1


def test_convert_number_rejects_out_of_range_and_fractions() -> None:
    with pytest.raises(ValueConversionError):
        convert_number(str(2**31), Int32)
    with pytest.raises(ValueConversionError):
        convert_number("-1", UInt32)
    with pytest.raises(ValueConversionError):
        convert_number("1.5", Int32)
    with pytest.raises(ValueConversionError):
        convert_number("1e3", int)


def test_convert_number_single_precision() -> None:
    value = convert_number("0.42", Float32)
    assert isinstance(value, Float32)
    (expected,) = struct.unpack("<f", struct.pack("<f", 0.42))
    assert float(value) == expected
    assert abs(value - 0.42) < 1e-6
    with pytest.raises(ValueConversionError):
        Float32(1e300)


def test_fixed_width_repr() -> None:
    assert repr(Int32(3)) == "Int32(3)"
    assert repr(Float32(0.5)) == "Float32(0.5)"
