import dataclasses

import pytest

from spxdgt.context import Context, MessageDigest


def test_context_converts_seeds_to_bytes():
    ctx = Context(bytearray(b"\x01" * 16), bytearray(b"\x02" * 16))
    assert ctx.pub_seed == b"\x01" * 16
    assert type(ctx.pub_seed) is bytes
    assert type(ctx.sk_seed) is bytes


def test_context_defaults():
    ctx = Context(b"\x00" * 16)
    assert ctx.sk_seed == b""
    assert ctx.state_seeded is None
    assert ctx.tweaked512_rc64 is None


def test_context_state_can_be_set():
    ctx = Context(b"\x00" * 16)
    ctx.state_seeded = b"\x05" * 40
    assert ctx.state_seeded == b"\x05" * 40


def test_message_digest_unpacks():
    md = MessageDigest(bytearray(b"abc"), 7, 3)
    digest, tree, leaf = md
    assert (digest, tree, leaf) == (b"abc", 7, 3)
    assert type(md.digest) is bytes


def test_message_digest_is_frozen():
    md = MessageDigest(b"x", 0, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        md.tree = 1
    assert md.tree == 0
    assert tuple(md) == (b"x", 0, 0)


@pytest.mark.parametrize("tree,leaf", [(-1, 0), (0, -1)])
def test_message_digest_rejects_negative(tree, leaf):
    with pytest.raises(ValueError):
        MessageDigest(b"", tree, leaf)