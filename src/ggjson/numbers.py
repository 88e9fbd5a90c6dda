"""Fixed-width numeric kinds and number lexeme conversion."""

from __future__ import annotations

import re
import struct
from typing import ClassVar

from ggjson.exceptions import ValueConversionError

_INTEGER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)\Z")


class FixedWidthInt(int):
    """An int restricted to the range of a fixed-width machine integer."""

    minimum: ClassVar[int]
    maximum: ClassVar[int]

    def __new__(cls, value: object = 0) -> FixedWidthInt:
        number = int.__new__(cls, value)
        if not cls.minimum <= number <= cls.maximum:
            raise ValueConversionError(
                f"{int(number)} is outside the range of {cls.__name__} "
                f"[{cls.minimum}, {cls.maximum}]"
            )
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Int32(FixedWidthInt):
    minimum = -(2**31)
    maximum = 2**31 - 1


class UInt32(FixedWidthInt):
    minimum = 0
    maximum = 2**32 - 1


class Int64(FixedWidthInt):
    minimum = -(2**63)
    maximum = 2**63 - 1


class UInt64(FixedWidthInt):
    minimum = 0
    maximum = 2**64 - 1


class Float32(float):
    """A float rounded to IEEE-754 single precision."""

    def __new__(cls, value: object = 0.0) -> Float32:
        try:
            (single,) = struct.unpack("<f", struct.pack("<f", float(value)))
        except (OverflowError, struct.error) as exc:
            raise ValueConversionError(f"{value!r} does not fit in {cls.__name__}") from exc
        return float.__new__(cls, single)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({float(self)!r})"


def is_integer_kind(hint: object) -> bool:
    return isinstance(hint, type) and issubclass(hint, int) and not issubclass(hint, bool)


def is_float_kind(hint: object) -> bool:
    return isinstance(hint, type) and issubclass(hint, float)


def convert_number(lexeme: str, hint: object = None) -> int | float:
    """Convert a JSON number lexeme into the representation `hint` asks for.

    Integer kinds (int and the fixed-width ints) require an integral lexeme,
    float kinds are built from the parsed double, anything else yields a
    plain double.
    """
    if is_integer_kind(hint):
        if not _INTEGER_RE.match(lexeme):
            raise ValueConversionError(
                f"Cannot convert number {lexeme} to {hint.__name__}: not an integer literal"
            )
        return hint(int(lexeme))
    try:
        value = float(lexeme)
    except ValueError as exc:
        raise ValueConversionError(f"Invalid number literal: {lexeme}") from exc
    if is_float_kind(hint) and hint is not float:
        return hint(value)
    return value
