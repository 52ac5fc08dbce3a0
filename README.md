# spxdgt

Pure-Python primitives for a SPHINCS+-style hash-based signature scheme:
SHA-2 with resumable chaining states, Haraka with round constants tweaked by
a public seed, the bitsliced AES rounds Haraka is built on, and random byte
sources (operating system and a deterministic AES-256 CTR DRBG).

## Modules

- `spxdgt.context`
  - `Context`: dataclass holding `pub_seed` and `sk_seed` (stored as bytes)
    and optional hash-specific state: `state_seeded`, `state_seeded_512`,
    `tweaked512_rc64`, `tweaked256_rc32`.
  - `MessageDigest`: frozen dataclass of `digest`, `tree` and `leaf_idx`;
    raises `ValueError` if `tree` or `leaf_idx` is negative, and unpacks as
    `digest, tree, leaf_idx = md`.
- `spxdgt.sha256` and `spxdgt.sha512`
  - `Sha256State` / `Sha512State`: `absorb_blocks(data)` takes whole blocks
    (64 / 128 bytes) and returns the state; `finalize(data=b"")` returns the
    digest of everything absorbed followed by `data` without changing the
    state; `copy()`; `to_bytes()` (40 / 72 bytes: chaining value and an
    8-byte byte count) and the classmethod `from_bytes()`.
  - `sha256(data)`, `sha512(data)`, `mgf1_256(seed, outlen)`,
    `mgf1_512(seed, outlen)`.
  - `sha512.seed_state(pub_seed, with_sha512)`: absorbs the zero-padded
    public seed as one block and returns the serialised SHA-256 state and,
    if asked, the serialised SHA-512 state (otherwise `None`).
- `spxdgt.bitslice`: `sbox64`, `sbox32`, `ortho64`, `ortho32`,
  `aes_round64`, `aes_round32`, `interleave_in`, `interleave_out`,
  `interleave_constant`, `interleave_constant32`. A bitsliced state is a
  list of eight integers of 64 or 32 bits; wrong sizes raise `ValueError`.
- `spxdgt.haraka`
  - `Haraka(pub_seed)`: derives tweaked round constants from the public
    seed. `perm512(data)` (64 bytes to 64), `haraka512(data)` (64 to 32),
    `haraka256(data)` (32 to 32), `sponge(data, outlen)` (rate 32), and
    `sponge_hasher()` returning a `HarakaSponge`.
  - `HarakaSponge`: `absorb(data)`, `finalize()`, `squeeze(n)`. Absorbing
    after finalizing, finalizing twice, or squeezing before finalizing
    raises `RuntimeError`.
- `spxdgt.randombytes.randombytes(n)`: `n` bytes from `os.urandom`.
- `spxdgt.rng`
  - `aes256_ecb(key, block)`: one AES-256 block encryption.
  - `CtrDrbg(entropy_input, personalization_string=None)`: AES-256
    CTR_DRBG without derivation function, seeded from 48 bytes;
    `random_bytes(n)`, `update(provided_data=None)`, `reseed_counter`.
  - `SeedExpander(seed, diversifier, maxlen)`: 32-byte seed, 8-byte
    diversifier, `maxlen` below 2**32; `read(n)` and `length_remaining`.
  - `RngError` (a `ValueError`) for a bad `maxlen` or a request that does
    not fit in what remains.

## Installation

```
pip install .
```

## Example

```python
from spxdgt.context import Context
from spxdgt.haraka import Haraka
from spxdgt.rng import CtrDrbg
from spxdgt.sha256 import Sha256State, mgf1_256
from spxdgt.sha512 import seed_state

drbg = CtrDrbg(bytes(range(48)))
sk_seed = drbg.random_bytes(16)
pub_seed = drbg.random_bytes(16)

state256, state512 = seed_state(pub_seed, with_sha512=True)
ctx = Context(pub_seed=pub_seed, sk_seed=sk_seed,
              state_seeded=state256, state_seeded_512=state512)

# Continue hashing from the precomputed seeded state.
digest = Sha256State.from_bytes(ctx.state_seeded).finalize(b"address" + sk_seed)
mask = mgf1_256(digest, 40)

haraka = Haraka(pub_seed)
node = haraka.haraka256(bytes(32))
sponge = haraka.sponge_hasher().absorb(b"message").finalize()
out = sponge.squeeze(16)
```

## What this package does not do

It provides the primitives only. It has no parameter set, no tweakable
hash or PRF instantiations, no message hashing into tree and leaf indices,
and no key generation, signing or verification. It has no command-line
tool.

## Running the tests

```
pip install .[test]
pytest
```