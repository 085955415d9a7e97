import pytest

from klip.edwards import CompressedEdwardsY, EdwardsPoint
from klip.scalar import BASEPOINT_ORDER, Scalar
from klip.sha512 import sha512

BASEPOINT_BYTES = bytes([0x58]) + bytes([0x66]) * 31
IDENTITY_BYTES = b"\x01" + bytes(31)
ORDER_TWO_BYTES = (2**255 - 20).to_bytes(32, "little")


def _scalar(n):
    return Scalar.from_bytes_mod_order(n.to_bytes(32, "little"))


def _wide(label):
    return Scalar.from_bytes_mod_order_wide(sha512(label))


def _basepoint():
    return CompressedEdwardsY(BASEPOINT_BYTES).decompress()


def test_identity_compresses_to_default_encoding():
    assert bytes(EdwardsPoint.identity().compress()) == IDENTITY_BYTES
    assert bytes(CompressedEdwardsY()) == IDENTITY_BYTES


def test_mul_base_by_one_is_basepoint():
    assert bytes(EdwardsPoint.mul_base(_scalar(1)).compress()) == BASEPOINT_BYTES


def test_mul_base_by_zero_is_identity():
    assert EdwardsPoint.mul_base(_scalar(0)) == EdwardsPoint.identity()


def test_mul_base_order_minus_one_is_negated_basepoint():
    s = Scalar.from_canonical_bytes((BASEPOINT_ORDER - 1).to_bytes(32, "little"))
    assert EdwardsPoint.mul_base(s) == -_basepoint()


def test_mul_base_is_additive():
    a = _wide(b"first")
    b = _wide(b"second")
    lhs = EdwardsPoint.mul_base(a + b)
    rhs = EdwardsPoint.mul_base(a) + EdwardsPoint.mul_base(b)
    assert lhs == rhs


def test_double_matches_addition_and_small_multiples():
    base = _basepoint()
    assert base.double() == base + base
    assert base.double().double() == EdwardsPoint.mul_base(_scalar(4))
    assert base.double() + base == EdwardsPoint.mul_base(_scalar(3))


def test_negation_cancels():
    base = _basepoint()
    assert base + (-base) == EdwardsPoint.identity()


def test_negation_flips_sign_bit():
    encoded = bytes((-_basepoint()).compress())
    assert encoded[:31] == BASEPOINT_BYTES[:31]
    assert encoded[31] == BASEPOINT_BYTES[31] ^ 0x80


def test_decompress_with_sign_bit_gives_negated_point():
    data = bytearray(BASEPOINT_BYTES)
    data[31] |= 0x80
    assert CompressedEdwardsY(bytes(data)).decompress() == -_basepoint()


def test_compress_decompress_round_trip():
    point = EdwardsPoint.mul_base(_wide(b"round trip"))
    compressed = point.compress()
    assert compressed.decompress() == point
    assert compressed.decompress().compress() == compressed


def test_decompress_rejects_some_y_and_round_trips_the_rest():
    results = [
        CompressedEdwardsY(y.to_bytes(32, "little")).decompress() for y in range(2, 40)
    ]
    assert any(point is None for point in results)
    valid = [(y, p) for y, p in zip(range(2, 40), results) if p is not None]
    assert valid
    for y, point in valid:
        assert bytes(point.compress()) == y.to_bytes(32, "little")


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        CompressedEdwardsY(bytes(31))


def test_small_order_points():
    order_two = CompressedEdwardsY(ORDER_TWO_BYTES).decompress()
    assert order_two is not None
    assert order_two.double() == EdwardsPoint.identity()
    assert order_two.is_small_order() is True
    assert EdwardsPoint.identity().is_small_order() is True
    assert _basepoint().is_small_order() is False
    assert (_basepoint() + order_two).is_small_order() is False


def test_vartime_double_scalar_mul_matches_constant_time():
    a = _wide(b"a")
    b = _wide(b"b")
    k = _wide(b"k")
    big_a = EdwardsPoint.mul_base(k)
    result = EdwardsPoint.vartime_double_scalar_mul_basepoint(a, big_a, b)
    assert result == EdwardsPoint.mul_base(a * k + b)


def test_vartime_double_scalar_mul_small_values():
    big_a = EdwardsPoint.mul_base(_scalar(999))
    result = EdwardsPoint.vartime_double_scalar_mul_basepoint(
        _scalar(12345), big_a, _scalar(678)
    )
    assert result == EdwardsPoint.mul_base(_scalar(12345 * 999 + 678))


def test_vartime_double_scalar_mul_zero_scalars_give_identity():
    big_a = _basepoint()
    result = EdwardsPoint.vartime_double_scalar_mul_basepoint(
        _scalar(0), big_a, _scalar(0)
    )
    assert result == EdwardsPoint.identity()


def test_equality_and_hash():
    base = _basepoint()
    same = base + EdwardsPoint.identity()
    assert base == same
    assert hash(base) == hash(same)
    assert (base == 5) is False