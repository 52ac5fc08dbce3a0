"""Constant-time bitsliced AES round primitives on 32-bit and 64-bit words.

A bitsliced state is a list of eight integers; word ``i`` holds bit ``i`` of
every byte of the AES states it carries. The 64-bit form carries four AES
states, the 32-bit form two.
"""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1


def _words(q, width):
    q = list(q)
    if len(q) != 8:
        raise ValueError("a bitsliced state has exactly 8 words")
    limit = 1 << width
    if any(not 0 <= v < limit for v in q):
        raise ValueError(f"bitsliced words must be {width}-bit unsigned integers")
    return q


def _sbox(q, mask):
    """Boyar-Peralta circuit for the AES S-box; ``mask`` stands in for NOT."""
    x7, x6, x5, x4, x3, x2, x1, x0 = q

    # Top linear transformation.
    y14 = x3 ^ x5
    y13 = x0 ^ x6
    y9 = x0 ^ x3
    y8 = x0 ^ x5
    t0 = x1 ^ x2
    y1 = t0 ^ x7
    y4 = y1 ^ x3
    y12 = y13 ^ y14
    y2 = y1 ^ x0
    y5 = y1 ^ x6
    y3 = y5 ^ y8
    t1 = x4 ^ y12
    y15 = t1 ^ x5
    y20 = t1 ^ x1
    y6 = y15 ^ x7
    y10 = y15 ^ t0
    y11 = y20 ^ y9
    y7 = x7 ^ y11
    y17 = y10 ^ y11
    y19 = y10 ^ y8
    y16 = t0 ^ y11
    y21 = y13 ^ y16
    y18 = x0 ^ y16

    # Non-linear section.
    t2 = y12 & y15
    t3 = y3 & y6
    t4 = t3 ^ t2
    t5 = y4 & x7
    t6 = t5 ^ t2
    t7 = y13 & y16
    t8 = y5 & y1
    t9 = t8 ^ t7
    t10 = y2 & y7
    t11 = t10 ^ t7
    t12 = y9 & y11
    t13 = y14 & y17
    t14 = t13 ^ t12
    t15 = y8 & y10
    t16 = t15 ^ t12
    t17 = t4 ^ t14
    t18 = t6 ^ t16
    t19 = t9 ^ t14
    t20 = t11 ^ t16
    t21 = t17 ^ y20
    t22 = t18 ^ y19
    t23 = t19 ^ y21
    t24 = t20 ^ y18

    t25 = t21 ^ t22
    t26 = t21 & t23
    t27 = t24 ^ t26
    t28 = t25 & t27
    t29 = t28 ^ t22
    t30 = t23 ^ t24
    t31 = t22 ^ t26
    t32 = t31 & t30
    t33 = t32 ^ t24
    t34 = t23 ^ t33
    t35 = t27 ^ t33
    t36 = t24 & t35
    t37 = t36 ^ t34
    t38 = t27 ^ t36
    t39 = t29 & t38
    t40 = t25 ^ t39

    t41 = t40 ^ t37
    t42 = t29 ^ t33
    t43 = t29 ^ t40
    t44 = t33 ^ t37
    t45 = t42 ^ t41
    z0 = t44 & y15
    z1 = t37 & y6
    z2 = t33 & x7
    z3 = t43 & y16
    z4 = t40 & y1
    z5 = t29 & y7
    z6 = t42 & y11
    z7 = t45 & y17
    z8 = t41 & y10
    z9 = t44 & y12
    z10 = t37 & y3
    z11 = t33 & y4
    z12 = t43 & y13
    z13 = t40 & y5
    z14 = t29 & y2
    z15 = t42 & y9
    z16 = t45 & y14
    z17 = t41 & y8

    # Bottom linear transformation.
    t46 = z15 ^ z16
    t47 = z10 ^ z11
    t48 = z5 ^ z13
    t49 = z9 ^ z10
    t50 = z2 ^ z12
    t51 = z2 ^ z5
    t52 = z7 ^ z8
    t53 = z0 ^ z3
    t54 = z6 ^ z7
    t55 = z16 ^ z17
    t56 = z12 ^ t48
    t57 = t50 ^ t53
    t58 = z4 ^ t46
    t59 = z3 ^ t54
    t60 = t46 ^ t57
    t61 = z14 ^ t57
    t62 = t52 ^ t58
    t63 = t49 ^ t58
    t64 = z4 ^ t59
    t65 = t61 ^ t62
    t66 = z1 ^ t63
    s0 = t59 ^ t63
    s6 = t56 ^ t62 ^ mask
    s7 = t48 ^ t60 ^ mask
    t67 = t64 ^ t65
    s3 = t53 ^ t66
    s4 = t51 ^ t66
    s5 = t47 ^ t65
    s1 = t64 ^ s3 ^ mask
    s2 = t55 ^ t67 ^ mask

    return [s7, s6, s5, s4, s3, s2, s1, s0]


def sbox64(q):
    """Apply the AES S-box to every byte of a 64-bit bitsliced state."""
    return _sbox(_words(q, 64), _MASK64)


def sbox32(q):
    """Apply the AES S-box to every byte of a 32-bit bitsliced state."""
    return _sbox(_words(q, 32), _MASK32)


def _ortho(q, nbytes):
    for shift, pattern in ((1, 0x55), (2, 0x33), (4, 0x0F)):
        cl = int.from_bytes(bytes([pattern]) * nbytes, "big")
        ch = cl << shift
        for i in (i for i in range(8) if not i & shift):
            a, b = q[i], q[i + shift]
            q[i] = (a & cl) | ((b & cl) << shift)
            q[i + shift] = ((a & ch) >> shift) | (b & ch)
    return q


def ortho64(q):
    """Transpose between byte-wise and bitsliced form (its own inverse)."""
    return _ortho(_words(q, 64), 8)


def ortho32(q):
    """Transpose between byte-wise and bitsliced form (its own inverse)."""
    return _ortho(_words(q, 32), 4)


def _shift_rows64(x):
    return (
        (x & 0x000000000000FFFF)
        | ((x & 0x00000000FFF00000) >> 4)
        | ((x & 0x00000000000F0000) << 12)
        | ((x & 0x0000FF0000000000) >> 8)
        | ((x & 0x000000FF00000000) << 8)
        | ((x & 0xF000000000000000) >> 12)
        | ((x & 0x0FFF000000000000) << 4)
    )


def _shift_rows32(x):
    return (
        (x & 0x000000FF)
        | ((x & 0x0000FC00) >> 2)
        | ((x & 0x00000300) << 6)
        | ((x & 0x00F00000) >> 4)
        | ((x & 0x000F0000) << 4)
        | ((x & 0xC0000000) >> 6)
        | ((x & 0x3F000000) << 2)
    )


def _mix_columns(q, width):
    mask = (1 << width) - 1
    quarter = width // 4
    half = width // 2

    def rot(x, c):
        return ((x >> c) | (x << (width - c))) & mask

    q0, q1, q2, q3, q4, q5, q6, q7 = q
    r0, r1, r2, r3, r4, r5, r6, r7 = (rot(x, quarter) for x in q)
    return [
        q7 ^ r7 ^ r0 ^ rot(q0 ^ r0, half),
        q0 ^ r0 ^ q7 ^ r7 ^ r1 ^ rot(q1 ^ r1, half),
        q1 ^ r1 ^ r2 ^ rot(q2 ^ r2, half),
        q2 ^ r2 ^ q7 ^ r7 ^ r3 ^ rot(q3 ^ r3, half),
        q3 ^ r3 ^ q7 ^ r7 ^ r4 ^ rot(q4 ^ r4, half),
        q4 ^ r4 ^ r5 ^ rot(q5 ^ r5, half),
        q5 ^ r5 ^ r6 ^ rot(q6 ^ r6, half),
        q6 ^ r6 ^ r7 ^ rot(q7 ^ r7, half),
    ]


def aes_round64(q, round_key):
    """One full AES round (SubBytes, ShiftRows, MixColumns, AddRoundKey)."""
    key = _words(round_key, 64)
    q = [_shift_rows64(x) for x in sbox64(q)]
    return [x ^ k for x, k in zip(_mix_columns(q, 64), key)]


def aes_round32(q, round_key):
    """One full AES round on a 32-bit bitsliced state."""
    key = _words(round_key, 32)
    q = [_shift_rows32(x) for x in sbox32(q)]
    return [x ^ k for x, k in zip(_mix_columns(q, 32), key)]


def interleave_in(words):
    """Spread four 32-bit words of one AES state over two 64-bit words."""
    x0, x1, x2, x3 = _check_four(words)
    xs = []
    for x in (x0, x1, x2, x3):
        x |= x << 16
        x &= 0x0000FFFF0000FFFF
        x |= x << 8
        x &= 0x00FF00FF00FF00FF
        xs.append(x)
    x0, x1, x2, x3 = xs
    return x0 | (x2 << 8), x1 | (x3 << 8)


def _check_four(words):
    words = list(words)
    if len(words) != 4 or any(not 0 <= w <= _MASK32 for w in words):
        raise ValueError("expected four 32-bit unsigned words")
    return words


def interleave_out(q0, q1):
    """Inverse of interleave_in: return the four 32-bit words."""
    if not (0 <= q0 <= _MASK64 and 0 <= q1 <= _MASK64):
        raise ValueError("expected 64-bit unsigned words")
    xs = [
        q0 & 0x00FF00FF00FF00FF,
        q1 & 0x00FF00FF00FF00FF,
        (q0 >> 8) & 0x00FF00FF00FF00FF,
        (q1 >> 8) & 0x00FF00FF00FF00FF,
    ]
    out = []
    for x in xs:
        x |= x >> 8
        x &= 0x0000FFFF0000FFFF
        out.append((x | (x >> 16)) & _MASK32)
    return out


def interleave_constant(data):
    """Bitslice 64 bytes (four AES states) into eight 64-bit words."""
    data = bytes(data)
    if len(data) != 64:
        raise ValueError("data must be 64 bytes")
    w = struct.unpack("<16I", data)
    q = [0] * 8
    for i in range(4):
        q[i], q[i + 4] = interleave_in(w[4 * i:4 * i + 4])
    return ortho64(q)


def interleave_constant32(data):
    """Bitslice 32 bytes (two AES states) into eight 32-bit words."""
    data = bytes(data)
    if len(data) != 32:
        raise ValueError("data must be 32 bytes")
    w = struct.unpack("<8I", data)
    q = [word for pair in zip(w[:4], w[4:]) for word in pair]
    return ortho32(q)