"""Points on the Edwards form of Curve25519 and their compressed encoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from klip.scalar import Scalar

P = 2**255 - 19
_Y_MASK = (1 << 255) - 1

EDWARDS_D = (-121665 * pow(121666, P - 2, P)) % P
EDWARDS_D2 = (2 * EDWARDS_D) % P
SQRT_M1 = pow(2, (P - 1) // 4, P)

COMPRESSED_LENGTH = 32


def _invert(value: int) -> int:
    return pow(value, P - 2, P)


def _is_negative(value: int) -> bool:
    return bool((value % P) & 1)


def _field_from_bytes(data: bytes) -> int:
    # The top bit is ignored, as in the usual field decoding.
    return (int.from_bytes(data, "little") & _Y_MASK) % P


def _sqrt_ratio_i(u: int, v: int) -> tuple[bool, int]:
    """Return (was_square, r) with r the non-negative square root of u/v or of i*u/v."""
    v3 = v * v % P * v % P
    v7 = v3 * v3 % P * v % P
    r = u * v3 % P * pow(u * v7 % P, (P - 5) // 8, P) % P
    check = v * r % P * r % P
    minus_u = -u % P
    correct_sign = check == u % P
    flipped_sign = check == minus_u
    flipped_sign_i = check == minus_u * SQRT_M1 % P
    if flipped_sign or flipped_sign_i:
        r = r * SQRT_M1 % P
    if _is_negative(r):
        r = -r % P
    return correct_sign or flipped_sign, r


class EdwardsPoint:
    """A point in extended twisted Edwards coordinates (X : Y : Z : T)."""

    __slots__ = ("_x", "_y", "_z", "_t")

    def __init__(self, x: int, y: int, z: int, t: int) -> None:
        self._x = x % P
        self._y = y % P
        self._z = z % P
        self._t = t % P

    @classmethod
    def identity(cls) -> EdwardsPoint:
        """Return the neutral element."""
        return cls(0, 1, 1, 0)

    @classmethod
    def mul_base(cls, scalar: Scalar) -> EdwardsPoint:
        """Multiply the Ed25519 basepoint by ``scalar`` using the radix-16 table."""
        digits = scalar.as_radix_16()
        tables = _basepoint_tables()
        point = cls.identity()
        for i in range(1, 64, 2):
            point = point + tables[i // 2].select(digits[i])
        point = point._mul_by_pow_2(4)
        for i in range(0, 64, 2):
            point = point + tables[i // 2].select(digits[i])
        return point

    @classmethod
    def vartime_double_scalar_mul_basepoint(
        cls, a: Scalar, big_a: EdwardsPoint, b: Scalar
    ) -> EdwardsPoint:
        """Compute a*A + b*B in variable time, B being the basepoint."""
        a_naf = a.non_adjacent_form(5)
        b_naf = b.non_adjacent_form(8)
        top = next(
            (i for i in range(255, -1, -1) if a_naf[i] != 0 or b_naf[i] != 0), 0
        )
        table_a = _NafLookupTable.odd_multiples(big_a, 8)
        table_b = _basepoint_odd_table()
        q = cls.identity()
        for i in range(top, -1, -1):
            q = q.double()
            for digit, table in ((a_naf[i], table_a), (b_naf[i], table_b)):
                if digit > 0:
                    q = q + table.select(digit)
                elif digit < 0:
                    q = q + -table.select(-digit)
        return q

    def compress(self) -> CompressedEdwardsY:
        """Encode as the y coordinate with the sign of x in the top bit."""
        recip = _invert(self._z)
        x = self._x * recip % P
        y = self._y * recip % P
        encoded = bytearray(y.to_bytes(COMPRESSED_LENGTH, "little"))
        encoded[31] ^= (x & 1) << 7
        return CompressedEdwardsY(bytes(encoded))

    def is_small_order(self) -> bool:
        """Return whether the point lies in the torsion subgroup of order 8."""
        return self._mul_by_pow_2(3) == EdwardsPoint.identity()

    def double(self) -> EdwardsPoint:
        """Return 2 * self."""
        x1, y1, z1 = self._x, self._y, self._z
        a = x1 * x1 % P
        b = y1 * y1 % P
        c = 2 * z1 * z1 % P
        d = -a % P
        e = ((x1 + y1) * (x1 + y1) - a - b) % P
        g = (d + b) % P
        f = (g - c) % P
        h = (d - b) % P
        return EdwardsPoint(e * f, g * h, f * g, e * h)

    def _mul_by_pow_2(self, k: int) -> EdwardsPoint:
        if k <= 0:
            raise ValueError("k must be positive")
        point = self
        for _ in range(k):
            point = point.double()
        return point

    def __add__(self, other: EdwardsPoint) -> EdwardsPoint:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        a = (self._y - self._x) * (other._y - other._x) % P
        b = (self._y + self._x) * (other._y + other._x) % P
        c = self._t * EDWARDS_D2 % P * other._t % P
        d = 2 * self._z * other._z % P
        e = (b - a) % P
        f = (d - c) % P
        g = (d + c) % P
        h = (b + a) % P
        return EdwardsPoint(e * f, g * h, f * g, e * h)

    def __neg__(self) -> EdwardsPoint:
        return EdwardsPoint(-self._x, self._y, self._z, -self._t)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EdwardsPoint):
            return NotImplemented
        return (self._x * other._z - other._x * self._z) % P == 0 and (
            self._y * other._z - other._y * self._z
        ) % P == 0

    def __hash__(self) -> int:
        return hash(bytes(self.compress()))

    def __repr__(self) -> str:
        return (
            f"EdwardsPoint{{ X: {self._x}, Y: {self._y}, Z: {self._z}, T: {self._t} }}"
        )


def _default_compressed() -> bytes:
    return b"\x01" + bytes(COMPRESSED_LENGTH - 1)


@dataclass(frozen=True)
class CompressedEdwardsY:
    """The 32-byte encoding of an Edwards point."""

    data: bytes = field(default_factory=_default_compressed)

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != COMPRESSED_LENGTH:
            raise ValueError(
                f"compressed point must be {COMPRESSED_LENGTH} bytes, got {len(data)}"
            )
        object.__setattr__(self, "data", data)

    def __bytes__(self) -> bytes:
        return self.data

    def decompress(self) -> EdwardsPoint | None:
        """Return the encoded point, or ``None`` if y is not on the curve."""
        y = _field_from_bytes(self.data)
        yy = y * y % P
        u = (yy - 1) % P
        v = (yy * EDWARDS_D + 1) % P
        is_valid, x = _sqrt_ratio_i(u, v)
        if not is_valid:
            return None
        if self.data[31] >> 7:
            x = -x % P
        return EdwardsPoint(x, y, 1, x * y)

    def __repr__(self) -> str:
        return f"CompressedEdwardsY: {list(self.data)}"


class _LookupTable:
    """Multiples 1P..8P of a point, selectable by a signed digit in [-8, 8]."""

    __slots__ = ("_points",)

    def __init__(self, point: EdwardsPoint) -> None:
        points = [point]
        for _ in range(7):
            points.append(point + points[-1])
        self._points = tuple(points)

    def select(self, digit: int) -> EdwardsPoint:
        if not -8 <= digit <= 8:
            raise ValueError("lookup digit must be in [-8, 8]")
        if digit == 0:
            return EdwardsPoint.identity()
        chosen = self._points[abs(digit) - 1]
        return -chosen if digit < 0 else chosen


class _NafLookupTable:
    """Odd multiples P, 3P, 5P, ... of a point for NAF scalar multiplication."""

    __slots__ = ("_points",)

    def __init__(self, points: tuple[EdwardsPoint, ...]) -> None:
        self._points = points

    @classmethod
    def odd_multiples(cls, point: EdwardsPoint, count: int) -> _NafLookupTable:
        doubled = point.double()
        points = [point]
        for _ in range(count - 1):
            points.append(doubled + points[-1])
        return cls(tuple(points))

    def select(self, digit: int) -> EdwardsPoint:
        if digit & 1 != 1 or digit // 2 >= len(self._points):
            raise ValueError("NAF digit must be odd and within the table")
        return self._points[digit // 2]


_BASEPOINT_COMPRESSED = bytes([0x58]) + bytes([0x66]) * 31


def _basepoint() -> EdwardsPoint:
    point = CompressedEdwardsY(_BASEPOINT_COMPRESSED).decompress()
    assert point is not None
    return point


ED25519_BASEPOINT = _basepoint()


@lru_cache(maxsize=None)
def _basepoint_tables() -> tuple[_LookupTable, ...]:
    tables = []
    point = ED25519_BASEPOINT
    for _ in range(32):
        tables.append(_LookupTable(point))
        point = point._mul_by_pow_2(8)
    return tuple(tables)


@lru_cache(maxsize=None)
def _basepoint_odd_table() -> _NafLookupTable:
    return _NafLookupTable.odd_multiples(ED25519_BASEPOINT, 64)