"""Scalars modulo the order of the Ed25519 prime-order subgroup."""

from __future__ import annotations

from typing import Protocol

SCALAR_LENGTH = 32
WIDE_LENGTH = 64

BASEPOINT_ORDER = 2**252 + 27742317777372353535851937790883648493


class _Finalizable(Protocol):
    def finalize(self) -> bytes: ...


def _to_i8(value: int) -> int:
    return ((value + 128) & 0xFF) - 128


def _check_length(data: bytes, length: int) -> bytes:
    data = bytes(data)
    if len(data) != length:
        raise ValueError(f"scalar input must be {length} bytes, got {len(data)}")
    return data


class Scalar:
    """An element of the scalar field, kept as 32 little-endian bytes."""

    __slots__ = ("_bytes",)

    def __init__(self, data: bytes) -> None:
        self._bytes = _check_length(data, SCALAR_LENGTH)

    @classmethod
    def _from_int(cls, value: int) -> Scalar:
        return cls((value % BASEPOINT_ORDER).to_bytes(SCALAR_LENGTH, "little"))

    @property
    def _value(self) -> int:
        return int.from_bytes(self._bytes, "little")

    @classmethod
    def from_bytes_mod_order(cls, data: bytes) -> Scalar:
        """Reduce a 32-byte little-endian integer modulo the group order."""
        return cls._from_int(int.from_bytes(_check_length(data, SCALAR_LENGTH), "little"))

    @classmethod
    def from_bytes_mod_order_wide(cls, data: bytes) -> Scalar:
        """Reduce a 64-byte little-endian integer modulo the group order."""
        return cls._from_int(int.from_bytes(_check_length(data, WIDE_LENGTH), "little"))

    @classmethod
    def from_canonical_bytes(cls, data: bytes) -> Scalar | None:
        """Return the scalar if ``data`` is already reduced, else ``None``."""
        data = _check_length(data, SCALAR_LENGTH)
        if data[31] >> 7 or int.from_bytes(data, "little") >= BASEPOINT_ORDER:
            return None
        return cls(data)

    @classmethod
    def from_hash(cls, hasher: _Finalizable) -> Scalar:
        """Finalize a 64-byte hash and reduce its output modulo the group order."""
        return cls.from_bytes_mod_order_wide(hasher.finalize())

    def __bytes__(self) -> bytes:
        return self._bytes

    def __getitem__(self, index: int) -> int:
        return self._bytes[index]

    def __add__(self, other: Scalar) -> Scalar:
        if not isinstance(other, Scalar):
            return NotImplemented
        return Scalar._from_int(self._value + other._value)

    def __mul__(self, other: Scalar) -> Scalar:
        if not isinstance(other, Scalar):
            return NotImplemented
        return Scalar._from_int(self._value * other._value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scalar):
            return NotImplemented
        return self._bytes == other._bytes

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return f"Scalar{{ bytes: {list(self._bytes)} }}"

    def as_radix_16(self) -> list[int]:
        """Return 64 signed digits in [-8, 8) with sum(d_i * 16**i) equal to the scalar."""
        if self._bytes[31] > 127:
            raise ValueError("scalar must be below 2**255 for radix-16 recoding")
        digits: list[int] = []
        for byte in self._bytes:
            digits.extend((byte & 15, (byte >> 4) & 15))
        for i in range(63):
            carry = (digits[i] + 8) >> 4
            digits[i] -= carry << 4
            digits[i + 1] += carry
        return digits

    def as_radix_2w(self, w: int) -> list[int]:
        """Return 64 signed radix-2**w digits for a window width 4 <= w <= 8."""
        if not 4 <= w <= 8:
            raise ValueError("window width must be between 4 and 8")
        if w == 4:
            return self.as_radix_16()
        value = self._value
        radix = 1 << w
        window_mask = radix - 1
        digits_count = (256 + w - 1) // w
        digits = [0] * 64
        carry = 0
        for i in range(digits_count):
            coef = carry + ((value >> (i * w)) & window_mask)
            carry = (coef + radix // 2) >> w
            digits[i] = _to_i8(coef - (carry << w))
        if w == 8:
            digits[digits_count] = _to_i8(digits[digits_count] + carry)
        else:
            digits[digits_count - 1] = _to_i8(digits[digits_count - 1] + _to_i8(carry << w))
        return digits

    def non_adjacent_form(self, w: int) -> list[int]:
        """Return the 256-digit width-w non-adjacent form, 2 <= w <= 8."""
        if not 2 <= w <= 8:
            raise ValueError("window width must be between 2 and 8")
        value = self._value
        width = 1 << w
        window_mask = width - 1
        naf = [0] * 256
        pos = 0
        carry = 0
        while pos < 256:
            window = carry + ((value >> pos) & window_mask)
            if window & 1 == 0:
                pos += 1
                continue
            if window < width // 2:
                carry = 0
                naf[pos] = window
            else:
                carry = 1
                naf[pos] = window - width
            pos += w
        return naf


def clamp_integer(data: bytes) -> bytes:
    """Clear the low three bits and the top bit, and set bit 254."""
    clamped = bytearray(_check_length(data, SCALAR_LENGTH))
    clamped[0] &= 0b1111_1000
    clamped[31] &= 0b0111_1111
    clamped[31] |= 0b0100_0000
    return bytes(clamped)