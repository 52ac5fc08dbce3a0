"""Deterministic AES-256 CTR_DRBG and seed expander used for known-answer tests."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

_MASK128 = (1 << 128) - 1
_MASK32 = (1 << 32) - 1


class RngError(ValueError):
    """Raised when a generator is asked for something it cannot provide."""


def aes256_ecb(key, block):
    """Encrypt one 16-byte block under a 32-byte AES key."""
    key = bytes(key)
    block = bytes(block)
    if len(key) != 32:
        raise ValueError("AES-256 key must be 32 bytes")
    if len(block) != 16:
        raise ValueError("block must be 16 bytes")
    encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
    return encryptor.update(block) + encryptor.finalize()


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


class CtrDrbg:
    """AES-256 CTR_DRBG without derivation function."""

    def __init__(self, entropy_input, personalization_string=None):
        seed_material = bytes(entropy_input)
        if len(seed_material) != 48:
            raise ValueError("entropy input must be 48 bytes")
        if personalization_string is not None:
            personalization = bytes(personalization_string)
            if len(personalization) != 48:
                raise ValueError("personalization string must be 48 bytes")
            seed_material = _xor(seed_material, personalization)
        self._key = bytes(32)
        self._v = 0
        self.update(seed_material)
        self.reseed_counter = 1

    def _next_block(self):
        self._v = (self._v + 1) & _MASK128
        return aes256_ecb(self._key, self._v.to_bytes(16, "big"))

    def update(self, provided_data=None):
        """Refresh key and counter, optionally mixing in 48 bytes of data."""
        temp = b"".join(self._next_block() for _ in range(3))
        if provided_data is not None:
            provided = bytes(provided_data)
            if len(provided) != 48:
                raise ValueError("provided data must be 48 bytes")
            temp = _xor(temp, provided)
        self._key = temp[:32]
        self._v = int.from_bytes(temp[32:], "big")

    def random_bytes(self, n):
        """Return n pseudorandom bytes and advance the generator."""
        if n < 0:
            raise ValueError("length must be non-negative")
        nblocks = -(-n // 16)
        out = b"".join(self._next_block() for _ in range(nblocks))[:n]
        self.update(None)
        self.reseed_counter += 1
        return out


class SeedExpander:
    """AES-256 based extendable output from a seed and diversifier."""

    def __init__(self, seed, diversifier, maxlen):
        if maxlen >= 1 << 32:
            raise RngError("maxlen must be less than 2**32")
        if maxlen < 0:
            raise RngError("maxlen must be non-negative")
        seed = bytes(seed)
        diversifier = bytes(diversifier)
        if len(seed) != 32:
            raise ValueError("seed must be 32 bytes")
        if len(diversifier) != 8:
            raise ValueError("diversifier must be 8 bytes")
        self.length_remaining = maxlen
        self._key = seed
        self._prefix = diversifier + maxlen.to_bytes(4, "big")
        self._counter = 0
        self._buffer = bytes(16)
        self._pos = 16

    def read(self, n):
        """Return the next n bytes of output."""
        if n < 0:
            raise ValueError("length must be non-negative")
        if n >= self.length_remaining:
            raise RngError("requested length exceeds what remains")
        self.length_remaining -= n
        out = bytearray()
        while n > 0:
            available = 16 - self._pos
            if n <= available:
                out += self._buffer[self._pos:self._pos + n]
                self._pos += n
                break
            out += self._buffer[self._pos:]
            n -= available
            ctr = self._prefix + self._counter.to_bytes(4, "big")
            self._buffer = aes256_ecb(self._key, ctr)
            self._pos = 0
            self._counter = (self._counter + 1) & _MASK32
        return bytes(out)