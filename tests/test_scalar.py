import pytest

from klip.scalar import BASEPOINT_ORDER, Scalar, clamp_integer
from klip.sha512 import Sha512, sha512


def _le(value, length=32):
    return value.to_bytes(length, "little")


def _small(value):
    return Scalar.from_bytes_mod_order(_le(value))


SAMPLES = [
    _small(0),
    _small(1),
    _small(BASEPOINT_ORDER - 1),
    Scalar.from_bytes_mod_order(bytes(range(32))),
    Scalar.from_bytes_mod_order(b"\xff" * 32),
    Scalar.from_bytes_mod_order_wide(sha512(b"sample scalar")),
]


def test_order_reduces_to_zero():
    assert Scalar.from_bytes_mod_order(_le(BASEPOINT_ORDER)) == _small(0)


def test_order_plus_one_reduces_to_one():
    assert bytes(Scalar.from_bytes_mod_order(_le(BASEPOINT_ORDER + 1))) == _le(1)


def test_wide_agrees_with_narrow_for_small_inputs():
    data = bytes(range(100, 132))
    assert Scalar.from_bytes_mod_order_wide(data + bytes(32)) == Scalar.from_bytes_mod_order(data)


def test_wide_reduces_order_multiple():
    assert Scalar.from_bytes_mod_order_wide(_le(BASEPOINT_ORDER * 5, 64)) == _small(0)


def test_canonical_accepts_order_minus_one():
    result = Scalar.from_canonical_bytes(_le(BASEPOINT_ORDER - 1))
    assert result is not None and bytes(result) == _le(BASEPOINT_ORDER - 1)


def test_canonical_rejects_order():
    assert Scalar.from_canonical_bytes(_le(BASEPOINT_ORDER)) is None


def test_canonical_rejects_high_bit():
    assert Scalar.from_canonical_bytes(b"\x00" * 31 + b"\x80") is None


@pytest.mark.parametrize("length", [0, 31, 33])
def test_wrong_length_raises(length):
    with pytest.raises(ValueError):
        Scalar.from_bytes_mod_order(bytes(length))


def test_from_hash_matches_wide_reduction():
    hasher = Sha512()
    hasher.update(b"message")
    assert Scalar.from_hash(hasher) == Scalar.from_bytes_mod_order_wide(sha512(b"message"))


def test_small_addition_and_multiplication():
    assert _small(2) + _small(3) == _small(5)
    assert _small(2) * _small(3) == _small(6)


def test_addition_wraps_at_order():
    assert _small(BASEPOINT_ORDER - 1) + _small(1) == _small(0)


@pytest.mark.parametrize("a", SAMPLES)
@pytest.mark.parametrize("b", SAMPLES[3:])
def test_ring_laws(a, b):
    c = SAMPLES[5]
    assert a + b == b + a
    assert a * b == b * a
    assert a * (b + c) == a * b + a * c
    assert a * _small(1) == a


def test_indexing_returns_bytes():
    s = Scalar.from_bytes_mod_order(bytes(range(32)))
    assert [s[i] for i in range(32)] == list(bytes(s))


@pytest.mark.parametrize("scalar", SAMPLES)
def test_radix_16_reconstructs(scalar):
    digits = scalar.as_radix_16()
    assert len(digits) == 64
    assert all(-8 <= d <= 8 for d in digits)
    assert all(-8 <= d < 8 for d in digits[:63])
    assert sum(d * 16**i for i, d in enumerate(digits)) == int.from_bytes(bytes(scalar), "little")


@pytest.mark.parametrize("w", [4, 5, 6, 7, 8])
@pytest.mark.parametrize("scalar", SAMPLES)
def test_radix_2w_reconstructs(scalar, w):
    digits = scalar.as_radix_2w(w)
    assert len(digits) == 64
    assert sum(d * 2 ** (w * i) for i, d in enumerate(digits)) == int.from_bytes(bytes(scalar), "little")


@pytest.mark.parametrize("w", [3, 9])
def test_radix_2w_rejects_bad_width(w):
    with pytest.raises(ValueError):
        _small(1).as_radix_2w(w)


@pytest.mark.parametrize("w", [2, 3, 5, 8])
@pytest.mark.parametrize("scalar", SAMPLES)
def test_naf_properties(scalar, w):
    naf = scalar.non_adjacent_form(w)
    assert len(naf) == 256
    assert sum(d * 2**i for i, d in enumerate(naf)) == int.from_bytes(bytes(scalar), "little")
    nonzero = [i for i, d in enumerate(naf) if d]
    assert all(naf[i] % 2 == 1 and abs(naf[i]) < 2 ** (w - 1) for i in nonzero)
    assert all(b - a >= w for a, b in zip(nonzero, nonzero[1:]))


def test_naf_rejects_bad_width():
    with pytest.raises(ValueError):
        _small(1).non_adjacent_form(1)


def test_clamp_sets_and_clears_bits():
    clamped = clamp_integer(b"\xff" * 32)
    assert clamped[0] == 0b1111_1000
    assert clamped[31] == 0b0111_1111
    assert clamped[1:31] == b"\xff" * 30


def test_clamp_of_zero_sets_bit_254():
    assert clamp_integer(bytes(32)) == bytes(31) + b"\x40"