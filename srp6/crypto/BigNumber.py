#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
BigNumber – unsigned arbitrary precision integer used by the SRP6 math.

Python ints already are arbitrary precision; this wrapper pins down the
byte-level conventions the protocol depends on:

    * hex constants are parsed big-endian
    * the canonical byte form is little-endian
    * fixed-width encodings are zero padded on the most significant end
    * values are unsigned, subtraction never wraps silently
"""

import os
import string
from functools import total_ordering
from typing import Callable, Union

BYTEORDERS = ("little", "big")


class BigNumberError(ValueError):
    """Malformed textual input or a negative result."""


def _value_of(other) -> int:
    if isinstance(other, BigNumber):
        return other._value
    if isinstance(other, int) and not isinstance(other, bool):
        return other
    return NotImplemented


@total_ordering
class BigNumber:
    __slots__ = ("_value",)

    def __init__(self, value: int = 0) -> None:
        if value < 0:
            raise BigNumberError(f"BigNumber is unsigned, got {value}")
        self._value = int(value)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_bytes_be(cls, raw: bytes) -> "BigNumber":
        """`raw` is expected to be big-endian."""
        return cls(int.from_bytes(raw, "big"))

    @classmethod
    def from_bytes_le(cls, raw: bytes) -> "BigNumber":
        """`raw` is expected to be little-endian."""
        return cls(int.from_bytes(raw, "little"))

    @classmethod
    def from_bytes(cls, raw: bytes, byteorder: str = "little") -> "BigNumber":
        return cls(int.from_bytes(raw, byteorder))

    @classmethod
    def from_hex_str_be(cls, text: str) -> "BigNumber":
        """
        Parse a hex string. Hex strings are always big-endian:

            "123acab"  (high -> low)

        Whitespace is ignored so RFC style grouped constants can be pasted
        as they are. An odd digit count gets one leading zero.
        """
        digits = "".join(text.split())
        if digits[:2].lower() == "0x":
            digits = digits[2:]
        if not digits or any(c not in string.hexdigits for c in digits):
            raise BigNumberError("Invalid hex string.")
        if len(digits) % 2:
            digits = "0" + digits
        return cls.from_bytes_be(bytes.fromhex(digits))

    @classmethod
    def new_rand(cls, n_bytes: int, rand: Callable[[int], bytes] = os.urandom) -> "BigNumber":
        """
        New random number with exactly `n_bytes * 8` bits of entropy.

        The result is not reduced by any modulus.
        """
        raw = rand(n_bytes)
        if len(raw) != n_bytes:
            raise BigNumberError(f"random source returned {len(raw)} bytes, wanted {n_bytes}")
        return cls.from_bytes_le(raw)

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def num_bytes(self) -> int:
        return (self._value.bit_length() + 7) // 8

    def to_vec(self) -> bytes:
        """Minimal byte string in little-endian order."""
        return self._value.to_bytes(self.num_bytes(), "little")

    def to_bytes_be(self) -> bytes:
        """Minimal byte string in big-endian order."""
        return self._value.to_bytes(self.num_bytes(), "big")

    def to_minimal_bytes(self, byteorder: str = "little") -> bytes:
        return self._value.to_bytes(self.num_bytes(), byteorder)

    def to_array_pad_zero(self, length: int, byteorder: str = "little") -> bytes:
        """
        Exactly `length` bytes, zero padded on the high-order end.

        A value wider than `length` keeps its low-order `length` bytes.
        """
        value = self._value & ((1 << (8 * length)) - 1)
        return value.to_bytes(length, byteorder)

    def to_hex(self) -> str:
        return format(self._value, "X")

    def is_zero(self) -> bool:
        return self._value == 0

    def modpow(self, exponent: "BigNumber", modulus: "BigNumber") -> "BigNumber":
        return BigNumber(pow(self._value, _value_of(exponent), _value_of(modulus)))

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def __add__(self, other: Union["BigNumber", int]) -> "BigNumber":
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        return BigNumber(self._value + rhs)

    __radd__ = __add__

    def __sub__(self, other: Union["BigNumber", int]) -> "BigNumber":
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        if rhs > self._value:
            raise BigNumberError("unsigned subtraction underflow")
        return BigNumber(self._value - rhs)

    def __mul__(self, other: Union["BigNumber", int]) -> "BigNumber":
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        return BigNumber(self._value * rhs)

    __rmul__ = __mul__

    def __mod__(self, other: Union["BigNumber", int]) -> "BigNumber":
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        return BigNumber(self._value % rhs)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._value == rhs

    def __lt__(self, other) -> bool:
        rhs = _value_of(other)
        if rhs is NotImplemented:
            return NotImplemented
        return self._value < rhs

    def __hash__(self) -> int:
        return hash(self._value)

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f'BigNumber("{self.to_hex()}")'
