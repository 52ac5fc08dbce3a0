"""SHA-256 with an explicit, resumable chaining state, plus MGF1 over it."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

BLOCK_BYTES = 64
OUTPUT_BYTES = 32
STATE_BYTES = 40

_IV = (
    0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A,
    0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19,
)

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


def _rotr(x, c):
    return ((x >> c) | (x << (32 - c))) & _MASK32


def _compress(words, block):
    w = list(struct.unpack(">16I", block))
    for i in range(16, 64):
        x15 = w[i - 15]
        x2 = w[i - 2]
        s0 = _rotr(x15, 7) ^ _rotr(x15, 18) ^ (x15 >> 3)
        s1 = _rotr(x2, 17) ^ _rotr(x2, 19) ^ (x2 >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK32)

    a, b, c, d, e, f, g, h = words
    for k, wi in zip(_K, w):
        t1 = (h + (_rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25))
              + ((e & f) ^ (~e & g)) + k + wi) & _MASK32
        t2 = ((_rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22))
              + ((a & b) ^ (a & c) ^ (b & c))) & _MASK32
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & _MASK32, c, b, a, (t1 + t2) & _MASK32
    return tuple((x + y) & _MASK32 for x, y in zip(words, (a, b, c, d, e, f, g, h)))


def _compress_all(words, data):
    for start in range(0, len(data), BLOCK_BYTES):
        words = _compress(words, data[start:start + BLOCK_BYTES])
    return words


class Sha256State:
    """Chaining value and byte count of a SHA-256 computation in progress."""

    def __init__(self):
        self._words = _IV
        self._count = 0

    @classmethod
    def from_bytes(cls, data):
        """Restore a state serialised by to_bytes."""
        data = bytes(data)
        if len(data) != STATE_BYTES:
            raise ValueError(f"state must be {STATE_BYTES} bytes")
        state = cls()
        state._words = struct.unpack(">8I", data[:32])
        state._count = int.from_bytes(data[32:], "big")
        return state

    def absorb_blocks(self, data):
        """Process whole 64-byte blocks into the state."""
        data = bytes(data)
        if len(data) % BLOCK_BYTES:
            raise ValueError("data must be a whole number of 64-byte blocks")
        self._words = _compress_all(self._words, data)
        self._count = (self._count + len(data)) & _MASK64
        return self

    def finalize(self, data=b""):
        """Return the digest of everything absorbed followed by data.

        The state itself is left unchanged, so it can be finalized again.
        """
        data = bytes(data)
        total = self._count + len(data)
        split = len(data) - len(data) % BLOCK_BYTES
        words = _compress_all(self._words, data[:split])
        tail = data[split:] + b"\x80"
        tail += bytes((56 - len(tail)) % BLOCK_BYTES)
        tail += ((total * 8) & _MASK64).to_bytes(8, "big")
        words = _compress_all(words, tail)
        return struct.pack(">8I", *words)

    def copy(self):
        """Return an independent copy of this state."""
        other = Sha256State()
        other._words = self._words
        other._count = self._count
        return other

    def to_bytes(self):
        """Serialise as 32 bytes of chaining value and an 8-byte count."""
        return struct.pack(">8I", *self._words) + self._count.to_bytes(8, "big")


def sha256(data):
    """Return the SHA-256 digest of data."""
    return Sha256State().finalize(data)


def mgf1_256(seed, outlen):
    """Mask generation function MGF1 over SHA-256."""
    if outlen < 0:
        raise ValueError("output length must be non-negative")
    seed = bytes(seed)
    nblocks = -(-outlen // OUTPUT_BYTES)
    out = b"".join(sha256(seed + i.to_bytes(4, "big")) for i in range(nblocks))
    return out[:outlen]