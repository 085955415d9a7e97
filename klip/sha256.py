"""SHA-256 message digest (FIPS 180-4)."""

from __future__ import annotations

import struct

DIGEST_SIZE = 32
BLOCK_SIZE = 64

_MASK = 0xFFFFFFFF
_LENGTH_MASK = (1 << 64) - 1

_K = (
    0x428A2F98, 0x71374491, 0xB5C0FBCF, 0xE9B5DBA5,
    0x3956C25B, 0x59F111F1, 0x923F82A4, 0xAB1C5ED5,
    0xD807AA98, 0x12835B01, 0x243185BE, 0x550C7DC3,
    0x72BE5D74, 0x80DEB1FE, 0x9BDC06A7, 0xC19BF174,
    0xE49B69C1, 0xEFBE4786, 0x0FC19DC6, 0x240CA1CC,
    0x2DE92C6F, 0x4A7484AA, 0x5CB0A9DC, 0x76F988DA,
    0x983E5152, 0xA831C66D, 0xB00327C8, 0xBF597FC7,
    0xC6E00BF3, 0xD5A79147, 0x06CA6351, 0x14292967,
    0x27B70A85, 0x2E1B2138, 0x4D2C6DFC, 0x53380D13,
    0x650A7354, 0x766A0ABB, 0x81C2C92E, 0x92722C85,
    0xA2BFE8A1, 0xA81A664B, 0xC24B8B70, 0xC76C51A3,
    0xD192E819, 0xD6990624, 0xF40E3585, 0x106AA070,
    0x19A4C116, 0x1E376C08, 0x2748774C, 0x34B0BCB5,
    0x391C0CB3, 0x4ED8AA4A, 0x5B9CCA4F, 0x682E6FF3,
    0x748F82EE, 0x78A5636F, 0x84C87814, 0x8CC70208,
    0x90BEFFFA, 0xA4506CEB, 0xBEF9A3F7, 0xC67178F2,
)

_H = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)


def _rotr(value: int, count: int) -> int:
    return ((value >> count) | (value << (32 - count))) & _MASK


def _compress(state: tuple[int, ...], words: tuple[int, ...]) -> tuple[int, ...]:
    """Run the compression function over one block given as 16 big-endian words."""
    w = list(words)
    for t in range(16, 64):
        w15 = w[t - 15]
        w2 = w[t - 2]
        s0 = _rotr(w15, 7) ^ _rotr(w15, 18) ^ (w15 >> 3)
        s1 = _rotr(w2, 17) ^ _rotr(w2, 19) ^ (w2 >> 10)
        w.append((w[t - 16] + s0 + w[t - 7] + s1) & _MASK)

    a, b, c, d, e, f, g, h = state
    for k, wt in zip(_K, w):
        big_s1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
        choose = (e & f) ^ (~e & g)
        t1 = (h + big_s1 + choose + k + wt) & _MASK
        big_s0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
        majority = (a & b) ^ (a & c) ^ (b & c)
        t2 = (big_s0 + majority) & _MASK
        h, g, f, e = g, f, e, (d + t1) & _MASK
        d, c, b, a = c, b, a, (t1 + t2) & _MASK

    return tuple(
        (old + new) & _MASK for old, new in zip(state, (a, b, c, d, e, f, g, h))
    )


def _absorb(state: tuple[int, ...], data: bytes) -> tuple[int, ...]:
    for words in struct.iter_unpack(">16I", data):
        state = _compress(state, words)
    return state


class Sha256:
    """Incremental SHA-256 hasher."""

    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self) -> None:
        self._state = _H
        self._block_count = 0
        self._buffer = b""

    def update(self, data: bytes) -> None:
        """Feed more input into the hash."""
        buffered = self._buffer + bytes(data)
        full = len(buffered) - len(buffered) % BLOCK_SIZE
        self._state = _absorb(self._state, buffered[:full])
        self._block_count += full // BLOCK_SIZE
        self._buffer = buffered[full:]

    def finalize(self) -> bytes:
        """Return the digest of everything fed so far; the hasher is left intact."""
        bit_len = (8 * (self._block_count * BLOCK_SIZE + len(self._buffer))) & _LENGTH_MASK
        zeros = (55 - len(self._buffer)) % BLOCK_SIZE
        tail = self._buffer + b"\x80" + bytes(zeros) + struct.pack(">Q", bit_len)
        state = _absorb(self._state, tail)
        return struct.pack(">8I", *state)

    def copy(self) -> Sha256:
        """Return an independent hasher with the same state."""
        clone = Sha256()
        clone._state = self._state
        clone._block_count = self._block_count
        clone._buffer = self._buffer
        return clone

    def __repr__(self) -> str:
        return "Sha256 { ... }"


def sha256(data: bytes) -> bytes:
    """Return the SHA-256 digest of ``data``."""
    hasher = Sha256()
    hasher.update(data)
    return hasher.finalize()