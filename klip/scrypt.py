"""The scrypt password-based key derivation function."""

from __future__ import annotations

from dataclasses import dataclass

from klip.pbkdf2 import pbkdf2_hmac_sha256
from klip.salsa import BLOCK_SIZE, salsa20_8

_USIZE_MAX = (1 << 64) - 1
_U32_MAX = 0xFFFF_FFFF
_U8_MAX = 0xFF


def _xor(left: bytes, right: bytes) -> bytes:
    return (int.from_bytes(left, "little") ^ int.from_bytes(right, "little")).to_bytes(
        len(left), "little"
    )


@dataclass(frozen=True)
class Params:
    """Validated scrypt cost parameters: N = 2**log_n, block size r, parallelism p."""

    log_n: int
    r: int
    p: int

    def __post_init__(self) -> None:
        if not self._is_valid():
            raise ValueError("invalid parameters")

    def _is_valid(self) -> bool:
        log_n, r, p = self.log_n, self.r, self.p
        if not (0 <= log_n <= _U8_MAX and 0 < r <= _U32_MAX and 0 < p <= _U32_MAX):
            return False
        if log_n >= 64:
            return False
        r128 = r * 128
        if r128 > _USIZE_MAX or r128 * p > _USIZE_MAX or r128 * (1 << log_n) > _USIZE_MAX:
            return False
        if log_n >= r * 16:
            return False
        return r * p < 0x4000_0000

    @property
    def n(self) -> int:
        """The CPU/memory cost, 2**log_n."""
        return 1 << self.log_n


def block_mix(data: bytes) -> bytes:
    """Apply scrypt's BlockMix (Salsa20/8) to a block of 128*r bytes."""
    data = bytes(data)
    if not data or len(data) % (2 * BLOCK_SIZE):
        raise ValueError("block length must be a positive multiple of 128")
    chunks = [data[start:start + BLOCK_SIZE] for start in range(0, len(data), BLOCK_SIZE)]
    x = chunks[-1]
    evens: list[bytes] = []
    odds: list[bytes] = []
    for position, chunk in enumerate(chunks):
        x = salsa20_8(_xor(x, chunk))
        (odds if position % 2 else evens).append(x)
    return b"".join(evens + odds)


def _integerify(block: bytes, n: int) -> int:
    offset = len(block) - BLOCK_SIZE
    return int.from_bytes(block[offset:offset + 4], "little") & (n - 1)


def ro_mix(block: bytes, n: int) -> bytes:
    """Apply scrypt's ROMix with cost ``n`` (a power of two) to one block."""
    if n <= 0 or n & (n - 1):
        raise ValueError("n must be a positive power of two")
    x = bytes(block)
    table: list[bytes] = []
    for _ in range(n):
        table.append(x)
        x = block_mix(x)
    for _ in range(n):
        x = block_mix(_xor(x, table[_integerify(x, n)]))
    return x


def scrypt(password: bytes, salt: bytes, params: Params, length: int) -> bytes:
    """Derive ``length`` bytes from ``password`` and ``salt`` with scrypt."""
    if length <= 0 or length // 32 > _U32_MAX:
        raise ValueError("invalid length")
    r128 = params.r * 128
    mixed = pbkdf2_hmac_sha256(password, salt, 1, params.p * r128)
    mixed = b"".join(
        ro_mix(mixed[start:start + r128], params.n) for start in range(0, len(mixed), r128)
    )
    return pbkdf2_hmac_sha256(password, mixed, 1, length)