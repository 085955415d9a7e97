import pytest

from klip.salsa import salsa20_8


def test_published_core_vector():
    block = bytes.fromhex(
        "7e879a214f3ec9867ca940e641718f26"
        "baee555b8c61c1b50df846116dcd3b1d"
        "ee24f319df9b3d8514121e4b5ac5aa32"
        "76021d2909c74829edebc68db8b8c25e"
    )
    assert salsa20_8(block).hex() == (
        "a41f859c6608cc993b81cacb020cef05"
        "044b2181a2fd337dfd7b1c6396682f29"
        "b4393168e3c9e6bcfe6bc5b7a06d96ba"
        "e424cc102c91745c24ad673dc7618f81"
    )


def test_zero_block_is_fixed_point():
    assert salsa20_8(bytes(64)) == bytes(64)


def test_output_length_and_determinism():
    block = bytes(range(64))
    out = salsa20_8(block)
    assert len(out) == 64
    assert salsa20_8(block) == out
    assert out != block


def test_single_bit_change_diffuses():
    block = bytearray(range(64))
    first = salsa20_8(bytes(block))
    block[0] ^= 1
    second = salsa20_8(bytes(block))
    differing = sum(a != b for a, b in zip(first, second))
    assert differing > 32


@pytest.mark.parametrize("length", [0, 63, 65, 128])
def test_rejects_wrong_length(length):
    with pytest.raises(ValueError):
        salsa20_8(bytes(length))