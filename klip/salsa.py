"""The Salsa20/8 core used by scrypt's block mixing."""

from __future__ import annotations

import struct

BLOCK_SIZE = 64

_MASK = 0xFFFFFFFF
_DOUBLE_ROUNDS = 4
_QUARTER_ROUNDS = (
    (0, 4, 8, 12),
    (5, 9, 13, 1),
    (10, 14, 2, 6),
    (15, 3, 7, 11),
    (0, 1, 2, 3),
    (5, 6, 7, 4),
    (10, 11, 8, 9),
    (15, 12, 13, 14),
)


def _rotl(value: int, count: int) -> int:
    value &= _MASK
    return ((value << count) | (value >> (32 - count))) & _MASK


def salsa20_8(block: bytes) -> bytes:
    """Apply the Salsa20/8 core to a 64-byte block and return the result."""
    data = bytes(block)
    if len(data) != BLOCK_SIZE:
        raise ValueError(f"Salsa20/8 block must be {BLOCK_SIZE} bytes, got {len(data)}")
    state = struct.unpack("<16I", data)
    x = list(state)
    for _ in range(_DOUBLE_ROUNDS):
        for a, b, c, d in _QUARTER_ROUNDS:
            x[b] ^= _rotl(x[a] + x[d], 7)
            x[c] ^= _rotl(x[b] + x[a], 9)
            x[d] ^= _rotl(x[c] + x[b], 13)
            x[a] ^= _rotl(x[d] + x[c], 18)
    return struct.pack("<16I", *((mixed + orig) & _MASK for mixed, orig in zip(x, state)))