# klip

Cryptographic primitives written in plain Python, with no dependencies
beyond the standard library.

## What is in the package

- `klip.sha256`: the streaming hasher `Sha256` (`update`, `finalize`,
  `copy`) and the one-shot `sha256(data)`. `finalize` leaves the hasher
  usable, so more data can be fed afterwards.
- `klip.sha512`: the same for SHA-512, with `Sha512` and `sha512(data)`.
- `klip.hmac_sha256`: `HmacSha256(key)` with `update`, `finalize` and `copy`.
- `klip.pbkdf2`: `pbkdf2_hmac_sha256(password, salt, rounds, length)`.
  A round count of zero behaves like one round; a negative length or round
  count raises `ValueError`.
- `klip.salsa`: `salsa20_8(block)`, the Salsa20/8 core applied to a 64-byte
  block.
- `klip.scrypt`: `Params(log_n, r, p)`, which raises `ValueError` for
  parameters scrypt does not accept (for example `log_n >= 16 * r` or
  `r * p >= 2**30`); `block_mix(data)`, `ro_mix(block, n)` and
  `scrypt(password, salt, params, length)`.
- `klip.scalar`: `Scalar`, integers modulo the order of the Ed25519
  subgroup, with `from_bytes_mod_order`, `from_bytes_mod_order_wide`,
  `from_canonical_bytes` (returns `None` for unreduced input), `from_hash`,
  addition, multiplication, `as_radix_16`, `as_radix_2w` and
  `non_adjacent_form`; and `clamp_integer(data)`.
- `klip.edwards`: `EdwardsPoint` (`identity`, `mul_base`,
  `vartime_double_scalar_mul_basepoint`, `compress`, `is_small_order`,
  `double`, `+`, unary `-`, `==`) and `CompressedEdwardsY` with
  `decompress`, which returns `None` when the encoding is not a curve point.
- `klip.ed25519`: `ExpandedSecretKey` (`from_bytes`, `raw_sign`),
  `VerifyingKey` (`from_bytes`, `from_expanded`, `to_bytes`,
  `verify_strict`), `Signature` (`from_bytes`, `to_bytes`) and the
  `SignatureError` exception, whose `kind` is an `ErrorKind` member.

The code aims at clarity and correctness, not speed, and makes no
constant-time guarantees.

## What the package does not do

It holds only the primitives above. There is no command-line tool, no
clipboard handling and no network client or server, and no way to
generate or store keys: callers supply the key bytes themselves.

## Install

```
pip install .
```

## Examples

Hashing:

```python
from klip.sha256 import Sha256, sha256

digest = sha256(b"abc")

hasher = Sha256()
hasher.update(b"ab")
hasher.update(b"c")
assert hasher.finalize() == digest
```

Deriving a key with scrypt (small cost parameters keep this quick):

```python
from klip.scrypt import Params, scrypt

password = b"password"
params = Params(log_n=4, r=1, p=1)
key = scrypt(password, b"salt", params, 32)
assert len(key) == 32
```

Signing and verifying with Ed25519:

```python
from klip.ed25519 import ExpandedSecretKey, Signature, SignatureError, VerifyingKey

expanded = ExpandedSecretKey.from_bytes(bytes(range(64)))
public = VerifyingKey.from_expanded(expanded)
signature = expanded.raw_sign(b"message", public)

public.verify_strict(b"message", signature)  # returns None when valid

encoded = signature.to_bytes()
assert Signature.from_bytes(encoded) == signature

try:
    public.verify_strict(b"other message", signature)
except SignatureError as error:
    print(error)  # verification equation was not satisfied
```

`verify_strict` also rejects signatures whose R, or keys whose point, has
small order.

## Tests

```
pip install .[test]
pytest
```