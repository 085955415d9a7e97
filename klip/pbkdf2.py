"""PBKDF2 with HMAC-SHA-256 as the pseudorandom function."""

from __future__ import annotations

from itertools import count

from klip.hmac_sha256 import HmacSha256

_CHUNK = 32


def pbkdf2_hmac_sha256(password: bytes, salt: bytes, rounds: int, length: int) -> bytes:
    """Derive ``length`` bytes from ``password`` and ``salt``.

    A round count of zero behaves like one round.
    """
    if length < 0:
        raise ValueError("length must not be negative")
    if rounds < 0:
        raise ValueError("rounds must not be negative")
    keyed = HmacSha256(password)
    salt = bytes(salt)
    output = bytearray()
    for index in count(1):
        if len(output) >= length:
            break
        mac = keyed.copy()
        mac.update(salt)
        mac.update(index.to_bytes(4, "big"))
        block = mac.finalize()
        accumulated = int.from_bytes(block, "big")
        for _ in range(1, rounds):
            mac = keyed.copy()
            mac.update(block)
            block = mac.finalize()
            accumulated ^= int.from_bytes(block, "big")
        output += accumulated.to_bytes(_CHUNK, "big")
    return bytes(output[:length])