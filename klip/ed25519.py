"""Ed25519 signatures: keys, signing and strict verification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from klip.edwards import CompressedEdwardsY, EdwardsPoint
from klip.scalar import Scalar, clamp_integer
from klip.sha512 import Sha512

SIGNATURE_LENGTH = 64
SECRET_KEY_LENGTH = 32
PUBLIC_KEY_LENGTH = 32
KEYPAIR_LENGTH = SECRET_KEY_LENGTH + PUBLIC_KEY_LENGTH
EXPANDED_SECRET_KEY_LENGTH = 64


class ErrorKind(Enum):
    """The kinds of failure an Ed25519 operation can report."""

    POINT_DECOMPRESSION = auto()
    SCALAR_FORMAT = auto()
    BYTES_LENGTH = auto()
    VERIFY = auto()
    MISMATCHED_KEYPAIR = auto()


@dataclass(frozen=True)
class InternalError:
    """The detail behind a :class:`SignatureError`."""

    kind: ErrorKind
    name: str | None = None
    length: int | None = None

    @classmethod
    def bytes_length(cls, name: str, length: int) -> InternalError:
        return cls(ErrorKind.BYTES_LENGTH, name, length)

    def __str__(self) -> str:
        match self.kind:
            case ErrorKind.POINT_DECOMPRESSION:
                return "cannot decompress Edwards point"
            case ErrorKind.SCALAR_FORMAT:
                return "cannot use scalar with high-bit set"
            case ErrorKind.BYTES_LENGTH:
                return f"{self.name} must be {self.length} bytes in length"
            case ErrorKind.VERIFY:
                return "verification equation was not satisfied"
            case ErrorKind.MISMATCHED_KEYPAIR:
                return "mismatched keypair detected"
        raise AssertionError(f"unknown error kind {self.kind!r}")


class SignatureError(Exception):
    """Raised when a key or signature is malformed or does not verify."""

    def __init__(self, error: InternalError | ErrorKind) -> None:
        if isinstance(error, ErrorKind):
            error = InternalError(error)
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def __str__(self) -> str:
        return str(self.error)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SignatureError):
            return NotImplemented
        return self.error == other.error

    def __hash__(self) -> int:
        return hash(self.error)


def _require_length(data: bytes, length: int, name: str) -> bytes:
    data = bytes(data)
    if len(data) != length:
        raise SignatureError(InternalError.bytes_length(name, length))
    return data


@dataclass(frozen=True)
class Signature:
    """An Ed25519 signature: the point R and the scalar s."""

    r: CompressedEdwardsY
    s: Scalar

    def to_bytes(self) -> bytes:
        """Return the 64-byte encoding R || s."""
        return bytes(self.r) + bytes(self.s)

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        """Parse a 64-byte signature; s must be canonical."""
        data = _require_length(data, SIGNATURE_LENGTH, "Signature")
        s = Scalar.from_canonical_bytes(data[32:])
        if s is None:
            raise SignatureError(ErrorKind.SCALAR_FORMAT)
        return cls(CompressedEdwardsY(data[:32]), s)

    def __repr__(self) -> str:
        return f"Signature( R: {self.r!r}, s: {self.s!r} )"


def _compute_challenge(r: CompressedEdwardsY, a: CompressedEdwardsY, message: bytes) -> Scalar:
    hasher = Sha512()
    hasher.update(bytes(r))
    hasher.update(bytes(a))
    hasher.update(message)
    return Scalar.from_hash(hasher)


class VerifyingKey:
    """An Ed25519 public key."""

    __slots__ = ("_compressed", "_point")

    def __init__(self, compressed: CompressedEdwardsY, point: EdwardsPoint) -> None:
        self._compressed = compressed
        self._point = point

    @classmethod
    def from_bytes(cls, data: bytes) -> VerifyingKey:
        """Decode a 32-byte public key."""
        data = _require_length(data, PUBLIC_KEY_LENGTH, "VerifyingKey")
        compressed = CompressedEdwardsY(data)
        point = compressed.decompress()
        if point is None:
            raise SignatureError(ErrorKind.POINT_DECOMPRESSION)
        return cls(compressed, point)

    @classmethod
    def from_expanded(cls, expanded: ExpandedSecretKey) -> VerifyingKey:
        """Derive the public key belonging to an expanded secret key."""
        point = EdwardsPoint.mul_base(expanded.scalar)
        return cls(point.compress(), point)

    def to_bytes(self) -> bytes:
        """Return the 32-byte encoding."""
        return bytes(self._compressed)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def _recompute_r(self, signature: Signature, message: bytes) -> CompressedEdwardsY:
        k = _compute_challenge(signature.r, self._compressed, message)
        minus_a = -self._point
        return EdwardsPoint.vartime_double_scalar_mul_basepoint(
            k, minus_a, signature.s
        ).compress()

    def verify_strict(self, message: bytes, signature: Signature) -> None:
        """Raise :class:`SignatureError` unless ``signature`` is valid for ``message``.

        Signatures whose R, or keys whose point, has small order are rejected.
        """
        message = bytes(message)
        signature_r = signature.r.decompress()
        if signature_r is None:
            raise SignatureError(ErrorKind.VERIFY)
        if signature_r.is_small_order() or self._point.is_small_order():
            raise SignatureError(ErrorKind.VERIFY)
        if self._recompute_r(signature, message) != signature.r:
            raise SignatureError(ErrorKind.VERIFY)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VerifyingKey):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"VerifyingKey({self._compressed!r}, {self._point!r})"


@dataclass(frozen=True)
class ExpandedSecretKey:
    """A secret scalar together with the nonce-derivation prefix."""

    scalar: Scalar
    hash_prefix: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> ExpandedSecretKey:
        """Split 64 bytes into a clamped scalar and a 32-byte hash prefix."""
        data = _require_length(data, EXPANDED_SECRET_KEY_LENGTH, "ExpandedSecretKey")
        scalar = Scalar.from_bytes_mod_order(clamp_integer(data[:32]))
        return cls(scalar, data[32:])

    def raw_sign(self, message: bytes, verifying_key: VerifyingKey) -> Signature:
        """Sign ``message`` deterministically."""
        message = bytes(message)
        hasher = Sha512()
        hasher.update(self.hash_prefix)
        hasher.update(message)
        r = Scalar.from_hash(hasher)
        big_r = EdwardsPoint.mul_base(r).compress()
        k = _compute_challenge(big_r, CompressedEdwardsY(verifying_key.to_bytes()), message)
        s = (k * self.scalar) + r
        return Signature(big_r, s)

    def __repr__(self) -> str:
        return "ExpandedSecretKey { ... }"