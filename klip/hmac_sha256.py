"""HMAC keyed with SHA-256."""

from __future__ import annotations

from klip.sha256 import BLOCK_SIZE, DIGEST_SIZE, Sha256, sha256

_IPAD = 0x36
_OPAD = 0x5C


def _derive_key(key: bytes) -> bytes:
    # Keys of a full block or longer are hashed first (including exactly 64 bytes).
    if len(key) >= BLOCK_SIZE:
        key = sha256(key)
    return key.ljust(BLOCK_SIZE, b"\x00")


class HmacSha256:
    """Incremental HMAC-SHA-256."""

    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, key: bytes) -> None:
        padded = _derive_key(bytes(key))
        self._inner = Sha256()
        self._inner.update(bytes(b ^ _IPAD for b in padded))
        self._outer = Sha256()
        self._outer.update(bytes(b ^ _OPAD for b in padded))

    def update(self, data: bytes) -> None:
        """Feed more message data."""
        self._inner.update(data)

    def finalize(self) -> bytes:
        """Return the 32-byte tag for everything fed so far."""
        outer = self._outer.copy()
        outer.update(self._inner.finalize())
        return outer.finalize()

    def copy(self) -> HmacSha256:
        """Return an independent MAC with the same key and state."""
        clone = object.__new__(HmacSha256)
        clone._inner = self._inner.copy()
        clone._outer = self._outer.copy()
        return clone

    def __repr__(self) -> str:
        return "Hmac { ... }"