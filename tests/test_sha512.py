import hashlib

import pytest

from klip.sha512 import Sha512, sha512


def test_empty_digest_known_prefix():
    assert sha512(b"").hex().startswith("cf83e1357eefb8bdf1542850d66d8007")


@pytest.mark.parametrize("length", [0, 1, 3, 55, 56, 63, 64, 111, 112, 113, 127, 128, 129, 255, 256, 1000])
def test_matches_standard_library(length):
    data = bytes((i * 7 + 3) % 256 for i in range(length))
    assert sha512(data) == hashlib.sha512(data).digest()


def test_abc_matches_standard_library():
    assert sha512(b"abc") == hashlib.sha512(b"abc").digest()


def test_digest_length():
    assert len(sha512(b"hello")) == 64


@pytest.mark.parametrize("chunk", [1, 5, 127, 128, 200])
def test_incremental_equals_one_shot(chunk):
    data = bytes(range(256)) * 3
    hasher = Sha512()
    for start in range(0, len(data), chunk):
        hasher.update(data[start:start + chunk])
    assert hasher.finalize() == sha512(data)


def test_finalize_leaves_hasher_usable():
    hasher = Sha512()
    hasher.update(b"part one ")
    first = hasher.finalize()
    assert first == sha512(b"part one ")
    hasher.update(b"part two")
    assert hasher.finalize() == sha512(b"part one part two")


def test_copy_is_independent():
    hasher = Sha512()
    hasher.update(b"common prefix")
    clone = hasher.copy()
    clone.update(b" and more")
    assert hasher.finalize() == sha512(b"common prefix")
    assert clone.finalize() == sha512(b"common prefix and more")


def test_repr_hides_state():
    assert repr(Sha512()) == "Sha512 { ... }"