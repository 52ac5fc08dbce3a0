import pytest

from spxdgt.randombytes import randombytes


@pytest.mark.parametrize("n", [1, 16, 48, 1000])
def test_length(n):
    assert len(randombytes(n)) == n


def test_zero_length():
    assert randombytes(0) == b""


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        randombytes(-1)


def test_outputs_differ():
    a = randombytes(32)
    b = randombytes(32)
    assert len(a) == len(b) == 32
    assert a != b