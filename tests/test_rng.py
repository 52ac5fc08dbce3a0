import pytest

from spxdgt.rng import CtrDrbg, RngError, SeedExpander, aes256_ecb

ENTROPY = bytes(range(48))


def test_aes256_known_vector():
    key = bytes(range(32))
    block = bytes.fromhex("00112233445566778899aabbccddeeff")
    assert aes256_ecb(key, block) == bytes.fromhex("8ea2b7ca516745bfeafc49904b496089")


@pytest.mark.parametrize("key,block", [(bytes(16), bytes(16)), (bytes(32), bytes(15))])
def test_aes256_rejects_bad_sizes(key, block):
    with pytest.raises(ValueError):
        aes256_ecb(key, block)


def test_drbg_known_answer_seed():
    drbg = CtrDrbg(ENTROPY)
    expected = bytes.fromhex(
        "061550234D158C5EC95595FE04EF7A25767F2E24CC2BC479D09D86DC9ABCFDE7"
        "056A8C266F9EF97ED08541DBD2E1FFA1"
    )
    assert drbg.random_bytes(48) == expected


def test_drbg_is_deterministic():
    a = CtrDrbg(ENTROPY)
    b = CtrDrbg(ENTROPY)
    assert [a.random_bytes(n) for n in (5, 16, 33)] == [
        b.random_bytes(n) for n in (5, 16, 33)
    ]


def test_zero_personalization_is_neutral():
    assert CtrDrbg(ENTROPY, bytes(48)).random_bytes(32) == CtrDrbg(
        ENTROPY
    ).random_bytes(32)


def test_personalization_changes_output():
    plain = CtrDrbg(ENTROPY).random_bytes(32)
    personal = CtrDrbg(ENTROPY, b"\x01" * 48).random_bytes(32)
    assert len(personal) == len(plain) == 32
    assert personal != plain


def test_reseed_counter_and_length():
    drbg = CtrDrbg(ENTROPY)
    assert drbg.reseed_counter == 1
    out = drbg.random_bytes(20)
    assert len(out) == 20
    assert drbg.reseed_counter == 2


def test_empty_request_still_advances_state():
    advanced = CtrDrbg(ENTROPY)
    assert advanced.random_bytes(0) == b""
    assert advanced.random_bytes(16) != CtrDrbg(ENTROPY).random_bytes(16)


def test_drbg_rejects_bad_entropy():
    with pytest.raises(ValueError):
        CtrDrbg(bytes(47))
    with pytest.raises(ValueError):
        CtrDrbg(ENTROPY, bytes(10))
    with pytest.raises(ValueError):
        CtrDrbg(ENTROPY).update(bytes(3))


SEED = bytes(range(32))
DIVERSIFIER = bytes(range(8))


def test_seed_expander_first_block_layout():
    exp = SeedExpander(SEED, DIVERSIFIER, 1000)
    ctr = DIVERSIFIER + (1000).to_bytes(4, "big") + bytes(4)
    assert exp.read(16) == aes256_ecb(SEED, ctr)
    ctr2 = DIVERSIFIER + (1000).to_bytes(4, "big") + (1).to_bytes(4, "big")
    assert exp.read(16) == aes256_ecb(SEED, ctr2)


def test_seed_expander_chunking_invariant():
    whole = SeedExpander(SEED, DIVERSIFIER, 500).read(100)
    parts = SeedExpander(SEED, DIVERSIFIER, 500)
    pieces = parts.read(13) + parts.read(3) + parts.read(40) + parts.read(44)
    assert pieces == whole
    assert len(whole) == 100


def test_seed_expander_tracks_remaining():
    exp = SeedExpander(SEED, DIVERSIFIER, 100)
    exp.read(30)
    assert exp.length_remaining == 70
    with pytest.raises(RngError):
        exp.read(70)


def test_seed_expander_rejects_large_maxlen():
    with pytest.raises(RngError):
        SeedExpander(SEED, DIVERSIFIER, 1 << 32)


def test_seed_expander_rejects_bad_sizes():
    with pytest.raises(ValueError):
        SeedExpander(bytes(31), DIVERSIFIER, 10)
    with pytest.raises(ValueError):
        SeedExpander(SEED, bytes(7), 10)