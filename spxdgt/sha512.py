"""SHA-512 with an explicit, resumable chaining state, MGF1 over it, and seeded states."""

from __future__ import annotations

import struct

from .sha256 import BLOCK_BYTES as SHA256_BLOCK_BYTES
from .sha256 import Sha256State

_MASK64 = (1 << 64) - 1

BLOCK_BYTES = 128
OUTPUT_BYTES = 64
STATE_BYTES = 72

_IV = (
    0x6A09E667F3BCC908, 0xBB67AE8584CAA73B, 0x3C6EF372FE94F82B, 0xA54FF53A5F1D36F1,
    0x510E527FADE682D1, 0x9B05688C2B3E6C1F, 0x1F83D9ABFB41BD6B, 0x5BE0CD19137E2179,
)

_K = (
    0x428A2F98D728AE22, 0x7137449123EF65CD, 0xB5C0FBCFEC4D3B2F, 0xE9B5DBA58189DBBC,
    0x3956C25BF348B538, 0x59F111F1B605D019, 0x923F82A4AF194F9B, 0xAB1C5ED5DA6D8118,
    0xD807AA98A3030242, 0x12835B0145706FBE, 0x243185BE4EE4B28C, 0x550C7DC3D5FFB4E2,
    0x72BE5D74F27B896F, 0x80DEB1FE3B1696B1, 0x9BDC06A725C71235, 0xC19BF174CF692694,
    0xE49B69C19EF14AD2, 0xEFBE4786384F25E3, 0x0FC19DC68B8CD5B5, 0x240CA1CC77AC9C65,
    0x2DE92C6F592B0275, 0x4A7484AA6EA6E483, 0x5CB0A9DCBD41FBD4, 0x76F988DA831153B5,
    0x983E5152EE66DFAB, 0xA831C66D2DB43210, 0xB00327C898FB213F, 0xBF597FC7BEEF0EE4,
    0xC6E00BF33DA88FC2, 0xD5A79147930AA725, 0x06CA6351E003826F, 0x142929670A0E6E70,
    0x27B70A8546D22FFC, 0x2E1B21385C26C926, 0x4D2C6DFC5AC42AED, 0x53380D139D95B3DF,
    0x650A73548BAF63DE, 0x766A0ABB3C77B2A8, 0x81C2C92E47EDAEE6, 0x92722C851482353B,
    0xA2BFE8A14CF10364, 0xA81A664BBC423001, 0xC24B8B70D0F89791, 0xC76C51A30654BE30,
    0xD192E819D6EF5218, 0xD69906245565A910, 0xF40E35855771202A, 0x106AA07032BBD1B8,
    0x19A4C116B8D2D0C8, 0x1E376C085141AB53, 0x2748774CDF8EEB99, 0x34B0BCB5E19B48A8,
    0x391C0CB3C5C95A63, 0x4ED8AA4AE3418ACB, 0x5B9CCA4F7763E373, 0x682E6FF3D6B2B8A3,
    0x748F82EE5DEFB2FC, 0x78A5636F43172F60, 0x84C87814A1F0AB72, 0x8CC702081A6439EC,
    0x90BEFFFA23631E28, 0xA4506CEBDE82BDE9, 0xBEF9A3F7B2C67915, 0xC67178F2E372532B,
    0xCA273ECEEA26619C, 0xD186B8C721C0C207, 0xEADA7DD6CDE0EB1E, 0xF57D4F7FEE6ED178,
    0x06F067AA72176FBA, 0x0A637DC5A2C898A6, 0x113F9804BEF90DAE, 0x1B710B35131C471B,
    0x28DB77F523047D84, 0x32CAAB7B40C72493, 0x3C9EBE0A15C9BEBC, 0x431D67C49C100D4C,
    0x4CC5D4BECB3E42B6, 0x597F299CFC657E2A, 0x5FCB6FAB3AD6FAEC, 0x6C44198C4A475817,
)


def _rotr(x, c):
    return ((x >> c) | (x << (64 - c))) & _MASK64


def _compress(words, block):
    w = list(struct.unpack(">16Q", block))
    for i in range(16, 80):
        x15 = w[i - 15]
        x2 = w[i - 2]
        s0 = _rotr(x15, 1) ^ _rotr(x15, 8) ^ (x15 >> 7)
        s1 = _rotr(x2, 19) ^ _rotr(x2, 61) ^ (x2 >> 6)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & _MASK64)

    a, b, c, d, e, f, g, h = words
    for k, wi in zip(_K, w):
        t1 = (h + (_rotr(e, 14) ^ _rotr(e, 18) ^ _rotr(e, 41))
              + ((e & f) ^ (~e & g)) + k + wi) & _MASK64
        t2 = ((_rotr(a, 28) ^ _rotr(a, 34) ^ _rotr(a, 39))
              + ((a & b) ^ (a & c) ^ (b & c))) & _MASK64
        h, g, f, e, d, c, b, a = g, f, e, (d + t1) & _MASK64, c, b, a, (t1 + t2) & _MASK64
    return tuple((x + y) & _MASK64 for x, y in zip(words, (a, b, c, d, e, f, g, h)))


def _compress_all(words, data):
    for start in range(0, len(data), BLOCK_BYTES):
        words = _compress(words, data[start:start + BLOCK_BYTES])
    return words


class Sha512State:
    """Chaining value and byte count of a SHA-512 computation in progress."""

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
        state._words = struct.unpack(">8Q", data[:64])
        state._count = int.from_bytes(data[64:], "big")
        return state

    def absorb_blocks(self, data):
        """Process whole 128-byte blocks into the state."""
        data = bytes(data)
        if len(data) % BLOCK_BYTES:
            raise ValueError("data must be a whole number of 128-byte blocks")
        self._words = _compress_all(self._words, data)
        self._count = (self._count + len(data)) & _MASK64
        return self

    def finalize(self, data=b""):
        """Return the digest of everything absorbed followed by data.

        The state itself is left unchanged, so it can be finalized again.
        """
        data = bytes(data)
        total = (self._count + len(data)) & _MASK64
        split = len(data) - len(data) % BLOCK_BYTES
        words = _compress_all(self._words, data[:split])
        tail = data[split:] + b"\x80"
        tail += bytes((112 - len(tail)) % BLOCK_BYTES)
        tail += (total * 8).to_bytes(16, "big")
        words = _compress_all(words, tail)
        return struct.pack(">8Q", *words)

    def copy(self):
        """Return an independent copy of this state."""
        other = Sha512State()
        other._words = self._words
        other._count = self._count
        return other

    def to_bytes(self):
        """Serialise as 64 bytes of chaining value and an 8-byte count."""
        return struct.pack(">8Q", *self._words) + self._count.to_bytes(8, "big")


def sha512(data):
    """Return the SHA-512 digest of data."""
    return Sha512State().finalize(data)


def mgf1_512(seed, outlen):
    """Mask generation function MGF1 over SHA-512."""
    if outlen < 0:
        raise ValueError("output length must be non-negative")
    seed = bytes(seed)
    nblocks = -(-outlen // OUTPUT_BYTES)
    out = b"".join(sha512(seed + i.to_bytes(4, "big")) for i in range(nblocks))
    return out[:outlen]


def seed_state(pub_seed, with_sha512):
    """Absorb the zero-padded public seed as one block.

    Returns the serialised SHA-256 state and, when with_sha512 is true, the
    serialised SHA-512 state (otherwise None).
    """
    pub_seed = bytes(pub_seed)
    if len(pub_seed) > SHA256_BLOCK_BYTES:
        raise ValueError(f"public seed must be at most {SHA256_BLOCK_BYTES} bytes")
    block = pub_seed + bytes(BLOCK_BYTES - len(pub_seed))
    state256 = Sha256State().absorb_blocks(block[:SHA256_BLOCK_BYTES]).to_bytes()
    state512 = None
    if with_sha512:
        state512 = Sha512State().absorb_blocks(block).to_bytes()
    return state256, state512