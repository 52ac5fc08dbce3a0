"""Haraka v2 permutation, Haraka-256/512 and the Haraka sponge with seed-tweaked constants."""

from __future__ import annotations

import struct

from .bitslice import (
    aes_round32,
    aes_round64,
    interleave_constant,
    interleave_constant32,
    interleave_in,
    interleave_out,
    ortho32,
    ortho64,
)

RATE = 32
STATE_BYTES = 64

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1

# Standard Haraka-512 round constants, already in 64-bit bitsliced form.
_HARAKA512_RC64 = (
    (0x24CF0AB9086F628B, 0xBDD6EEECC83B8382, 0xD96FB0306CDAD0A7, 0xAACE082AC8F95F89,
     0x449D8E8870D7041F, 0x49BB2F80B2B3E2F8, 0x0569AE98D93BB258, 0x23DC9691E7D6A4B1),
    (0xD8BA10EDE0FE5B6E, 0x7ECF7DBE424C7B8E, 0x6EA9949C6DF62A31, 0xBF3F3C97EC9C313E,
     0x241D03A196A1861E, 0xEAD3A51116E5A2EA, 0x77D479FCAD9574E3, 0x18657A1AF894B7A0),
    (0x10671E1A7F595522, 0xD9A00FF675D28C7B, 0x2F1EDF0D2B9BA661, 0xB8FF58B8E3DE45F9,
     0xEE29261DA9865C02, 0xD1532AA4B50BDF43, 0x8BF858159B231BB1, 0xDF17439D22D4F599),
    (0xDD4B2F0870B918C0, 0x757A81F3B39B1BB6, 0x7A5C556898952E3F, 0x7DD70A16D915D87A,
     0x3AE61971982B8301, 0xC3AB319E030412BE, 0x17C0033AC094A8CB, 0x5A0630FC1A8DC4EF),
    (0x17708988C1632F73, 0xF92DDAE090B44F4F, 0x11AC0285C43AA314, 0x509059941936B8BA,
     0xD03E152FA2CE9B69, 0x3FBCBCB63A32998B, 0x6204696D692254F7, 0x915542ED93EC59B4),
    (0xF4ED94AA8879236E, 0xFF6CB41CD38E03C0, 0x069B38602368AEAB, 0x669495B820F0DDBA,
     0xF42013B1B8BF9E3D, 0xCF935EFE6439734D, 0xBC1DCF42CA29E3F8, 0x7E6D3ED29F78AD67),
    (0xF3B0F6837FFCDDAA, 0x3A76FAEF934DDF41, 0xCEC7AE583A9C8E35, 0xE4DD18C68F0260AF,
     0x2C0E5DF1AD398EAA, 0x478DF5236AE22E8C, 0xFB944C46FE865F39, 0xAA48F82F028132BA),
    (0x231B9AE2B76ACA77, 0x292A76A712DB0B40, 0x5850625DC8134491, 0x73137DD469810FB5,
     0x8A12A6A202A474FD, 0xD36FD9DAA78BDB80, 0xB34C5E733505706F, 0xBAF1CDCA818D9D96),
    (0x2E99781335E8C641, 0xBDDFE5CCE47D560E, 0xF74E9BF32E5E040C, 0x1D7A709D65996BE9,
     0x670DF36A9CF66CDD, 0xD05EF84A176A2875, 0x0F888E828CB1C44E, 0x1A79E9C9727B052C),
    (0x83497348628D84DE, 0x2E9387D51F22A754, 0xB000068DA2F852D6, 0x378C9E1190FD6FE5,
     0x870027C316DE7293, 0xE51A9D4462E047BB, 0x90ECF7F8C6251195, 0x655953BFBED90A9C),
)


def _lanes16(pattern):
    """Repeat a 16-bit pattern in all four 16-bit lanes of a 64-bit word."""
    return pattern * 0x0001000100010001


# (mask, shift) pairs; positive shifts go left, negative go right.
_MIX512 = (
    (_lanes16(0x0001), 5),
    (_lanes16(0x0002), 12),
    (_lanes16(0x0004), -1),
    (_lanes16(0x0008), 6),
    (_lanes16(0x0020), 9),
    (_lanes16(0x0040), -4),
    (_lanes16(0x0080), 3),
    (_lanes16(0x2100), -5),
    (_lanes16(0x0210), 2),
    (_lanes16(0x0800), 4),
    (_lanes16(0x1000), -12),
    (_lanes16(0x4000), -10),
    (_lanes16(0x8400), -3),
)

_MIX256 = (
    (0x81818181, 0),
    (0x02020202, 1),
    (0x04040404, 2),
    (0x08080808, 3),
    (0x10101010, -3),
    (0x20202020, -2),
    (0x40404040, -1),
)


def _mix(x, table, mask):
    out = 0
    for bits, shift in table:
        y = x & bits
        out |= (y << shift) if shift >= 0 else (y >> -shift)
    return out & mask


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


def _check_len(name, data, length):
    data = bytes(data)
    if len(data) != length:
        raise ValueError(f"{name} must be {length} bytes")
    return data


def _perm512(data, rc64):
    w = struct.unpack("<16I", data)
    q = [0] * 8
    for i in range(4):
        q[i], q[i + 4] = interleave_in(w[4 * i:4 * i + 4])
    q = ortho64(q)

    for i in range(5):
        for j in range(2):
            q = aes_round64(q, rc64[2 * i + j])
        q = [_mix(x, _MIX512, _MASK64) for x in q]

    q = ortho64(q)
    words = []
    for i in range(4):
        words.extend(interleave_out(q[i], q[i + 4]))
    return struct.pack("<16I", *words)


class Haraka:
    """Haraka functions whose round constants are tweaked by a public seed."""

    def __init__(self, pub_seed):
        pub_seed = bytes(pub_seed)
        self.tweaked512_rc64 = [list(row) for row in _HARAKA512_RC64]
        self.tweaked256_rc32 = []
        buf = self.sponge(pub_seed, 40 * 16)
        self.tweaked256_rc32 = [interleave_constant32(buf[32 * i:32 * i + 32]) for i in range(10)]
        self.tweaked512_rc64 = [interleave_constant(buf[64 * i:64 * i + 64]) for i in range(10)]

    def perm512(self, data):
        """Apply the 512-bit Haraka permutation to 64 bytes."""
        data = _check_len("input", data, STATE_BYTES)
        return _perm512(data, self.tweaked512_rc64)

    def haraka512(self, data):
        """Haraka-512: 64 bytes in, 32 bytes out."""
        data = _check_len("input", data, STATE_BYTES)
        buf = _xor(self.perm512(data), data)
        return buf[8:16] + buf[24:32] + buf[32:40] + buf[48:56]

    def haraka256(self, data):
        """Haraka-256: 32 bytes in, 32 bytes out."""
        data = _check_len("input", data, 32)
        q = interleave_constant32(data)
        for i in range(5):
            for j in range(2):
                q = aes_round32(q, self.tweaked256_rc32[2 * i + j])
            q = [_mix(x, _MIX256, _MASK32) for x in q]
        q = ortho32(q)
        out = struct.pack("<8I", *(q[0::2] + q[1::2]))
        return _xor(out, data)

    def sponge(self, data, outlen):
        """Haraka sponge with rate 32: absorb data and squeeze outlen bytes."""
        if outlen < 0:
            raise ValueError("output length must be non-negative")
        data = bytes(data)
        state = bytes(STATE_BYTES)
        full = len(data) - len(data) % RATE
        for start in range(0, full, RATE):
            state = self.perm512(_xor(state[:RATE], data[start:start + RATE]) + state[RATE:])

        rest = data[full:]
        tail = bytearray(RATE)
        tail[:len(rest)] = rest
        tail[len(rest)] = 0x1F
        tail[RATE - 1] |= 0x80
        state = _xor(state[:RATE], tail) + state[RATE:]

        out = bytearray()
        while len(out) < outlen:
            state = self.perm512(state)
            out += state[:RATE]
        return bytes(out[:outlen])

    def sponge_hasher(self):
        """Return a fresh incremental sponge bound to these constants."""
        return HarakaSponge(self)


class HarakaSponge:
    """Incremental Haraka sponge: absorb, finalize once, then squeeze."""

    def __init__(self, haraka):
        if not isinstance(haraka, Haraka):
            raise TypeError("haraka must be a Haraka instance")
        self._haraka = haraka
        self._state = bytearray(STATE_BYTES)
        self._pos = 0
        self._finalized = False

    def _permute(self):
        self._state = bytearray(self._haraka.perm512(self._state))

    def _xor_in(self, offset, data):
        for k, b in enumerate(data):
            self._state[offset + k] ^= b

    def absorb(self, data):
        """XOR data into the rate, permuting whenever a block fills."""
        if self._finalized:
            raise RuntimeError("cannot absorb after finalize")
        data = bytes(data)
        while len(data) + self._pos >= RATE:
            take = RATE - self._pos
            self._xor_in(self._pos, data[:take])
            data = data[take:]
            self._pos = 0
            self._permute()
        self._xor_in(self._pos, data)
        self._pos += len(data)
        return self

    def finalize(self):
        """Apply the padding; the sponge is then ready to squeeze."""
        if self._finalized:
            raise RuntimeError("sponge already finalized")
        self._state[self._pos] ^= 0x1F
        self._state[RATE - 1] ^= 0x80
        self._pos = 0
        self._finalized = True
        return self

    def squeeze(self, n):
        """Return the next n output bytes."""
        if not self._finalized:
            raise RuntimeError("finalize before squeezing")
        if n < 0:
            raise ValueError("length must be non-negative")
        out = bytearray()
        take = min(n, self._pos)
        start = RATE - self._pos
        out += self._state[start:start + take]
        self._pos -= take
        n -= take
        while n > 0:
            self._permute()
            take = min(n, RATE)
            out += self._state[:take]
            n -= take
            self._pos = RATE - take
        return bytes(out)