import random
import struct

import pytest

from spxdgt.bitslice import (
    aes_round32,
    aes_round64,
    interleave_constant,
    interleave_constant32,
    interleave_in,
    interleave_out,
    ortho32,
    ortho64,
    sbox32,
    sbox64,
)

# FIPS-197 Appendix B, round 1.
ROUND1_IN = bytes.fromhex("193de3bea0f4e22b9ac68d2ae9f84808")
ROUND1_KEY = bytes.fromhex("a0fafe1788542cb123a339392a6c7605")
ROUND1_OUT = bytes.fromhex("a49c7ff2689f352b6b5bea43026a5049")


def _bytes32(q):
    w = ortho32(q)
    return struct.pack("<4I", *w[0::2]) + struct.pack("<4I", *w[1::2])


def _bytes64(q):
    q = ortho64(q)
    words = []
    for i in range(4):
        words.extend(interleave_out(q[i], q[i + 4]))
    return struct.pack("<16I", *words)


def _sbox_byte(x):
    q = [0xFFFFFFFF if (x >> i) & 1 else 0 for i in range(8)]
    out = sbox32(q)
    assert all(v in (0, 0xFFFFFFFF) for v in out)
    return sum(1 << i for i, v in enumerate(out) if v)


def test_ortho64_is_involution():
    rng = random.Random(1)
    q = [rng.getrandbits(64) for _ in range(8)]
    assert ortho64(ortho64(q)) == q


def test_ortho32_is_involution():
    rng = random.Random(2)
    q = [rng.getrandbits(32) for _ in range(8)]
    assert ortho32(ortho32(q)) == q


def test_ortho_does_not_modify_input():
    q = [0x01234567] * 8
    ortho32(q)
    assert q == [0x01234567] * 8


def test_interleave_round_trip():
    rng = random.Random(3)
    words = [rng.getrandbits(32) for _ in range(4)]
    q0, q1 = interleave_in(words)
    assert interleave_out(q0, q1) == words


def test_interleave_constant_round_trip():
    data = bytes(range(64))
    assert _bytes64(interleave_constant(data)) == data


def test_interleave_constant32_round_trip():
    data = bytes(range(100, 132))
    assert _bytes32(interleave_constant32(data)) == data


def test_sbox_known_values():
    assert _sbox_byte(0x00) == 0x63
    assert _sbox_byte(0x53) == 0xED


def test_sbox_is_permutation():
    assert sorted(_sbox_byte(x) for x in range(256)) == list(range(256))


def test_sbox64_matches_sbox32_in_both_halves():
    rng = random.Random(4)
    q32 = [rng.getrandbits(32) for _ in range(8)]
    out32 = sbox32(q32)
    out64 = sbox64([v | (v << 32) for v in q32])
    assert [v & 0xFFFFFFFF for v in out64] == out32
    assert [v >> 32 for v in out64] == out32


def test_aes_round32_matches_standard_round():
    q = interleave_constant32(ROUND1_IN + ROUND1_IN)
    key = interleave_constant32(ROUND1_KEY + ROUND1_KEY)
    assert _bytes32(aes_round32(q, key)) == ROUND1_OUT * 2


def test_aes_round64_matches_standard_round():
    q = interleave_constant(ROUND1_IN * 4)
    key = interleave_constant(ROUND1_KEY * 4)
    assert _bytes64(aes_round64(q, key)) == ROUND1_OUT * 4


def test_aes_round64_and_round32_agree():
    states = bytes(range(32))
    key = bytes(range(200, 232))
    r32 = _bytes32(aes_round32(interleave_constant32(states), interleave_constant32(key)))
    r64 = _bytes64(aes_round64(interleave_constant(states * 2), interleave_constant(key * 2)))
    assert r64 == r32 * 2


def test_round_key_enters_linearly():
    rng = random.Random(5)
    q = [rng.getrandbits(64) for _ in range(8)]
    k1 = [rng.getrandbits(64) for _ in range(8)]
    k2 = [rng.getrandbits(64) for _ in range(8)]
    a = aes_round64(q, k1)
    b = aes_round64(q, k2)
    assert [x ^ y for x, y in zip(a, b)] == [x ^ y for x, y in zip(k1, k2)]


@pytest.mark.parametrize("bad", [[0] * 7, [0] * 9, [1 << 32] + [0] * 7, [-1] + [0] * 7])
def test_sbox32_rejects_bad_state(bad):
    with pytest.raises(ValueError):
        sbox32(bad)


def test_interleave_constant_rejects_wrong_length():
    with pytest.raises(ValueError):
        interleave_constant(bytes(63))
    with pytest.raises(ValueError):
        interleave_constant32(bytes(33))


def test_interleave_in_rejects_wrong_word_count():
    with pytest.raises(ValueError):
        interleave_in([0, 0, 0])


def test_interleave_out_rejects_oversized_word():
    with pytest.raises(ValueError):
        interleave_out(1 << 64, 0)


def test_aes_round_rejects_bad_key():
    with pytest.raises(ValueError):
        aes_round32([0] * 8, [0] * 7)