import pytest
import torch

from mrprime.csprng import Csprng, SecureRandomSource, UrandomSource
from mrprime.csprng.chacha20 import chacha20

# RFC 8439, A.1 test vectors #1 and #2: all zero key and nonce, counters 0 and 1.
ZERO_KEY_BLOCK_0 = (
    "76b8e0ada0f13d90405d6ae55386bd28bdd219b8a08ded1aa836efcc8b770dc7"
    "da41597c5157488d7724e03fb8d84a376a43b8f41518a11cc387b669b2ee6586"
)
ZERO_KEY_BLOCK_1 = (
    "9f07e7be5551387a98ba977c732d080dcb0f29a048e3656912c6533e32ee7aed"
    "29b721769ce64e43d57133b074d839d531ed1f28510afb45ace10a1f4b794d6f"
)


@pytest.fixture()
def seeded_csprng(seed: int = 0x1234_5678_9ABC_DEF0, nonce: int = 42):
    """
        generate a reproducible csprng
    @param seed:
    @param nonce:
    @return:
    """
    return Csprng(seed=seed, nonce=nonce, num_blocks=4)


def test_chacha20_block_function():
    # RFC 8439, section 2.3.2.
    state = [
        0x61707865, 0x3320646E, 0x79622D32, 0x6B206574,
        0x03020100, 0x07060504, 0x0B0A0908, 0x0F0E0D0C,
        0x13121110, 0x17161514, 0x1B1A1918, 0x1F1E1D1C,
        0x00000001, 0x09000000, 0x4A000000, 0x00000000,
    ]
    expected = [
        0xE4E7F110, 0x15593BD1, 0x1FDD0F50, 0xC47120A3,
        0xC7F4D1C7, 0x0368C033, 0x9AAA2204, 0x4E6CD4C3,
        0x466482D2, 0x09AA9F07, 0x05D7C214, 0xA2028BD9,
        0xD19C12B5, 0xB94E16DE, 0xE883D0CB, 0x4E3C50A2,
    ]
    out = chacha20(torch.tensor(state, dtype=torch.int64)[:, None])
    assert out[:, 0].tolist() == expected


@pytest.mark.parametrize("num_blocks", [1, 2, 16])
def test_zero_key_keystream(num_blocks):
    rng = Csprng(seed=0, nonce=0, num_blocks=num_blocks)
    assert rng.randbytes(64).hex() == ZERO_KEY_BLOCK_0
    assert rng.randbytes(64).hex() == ZERO_KEY_BLOCK_1


def test_same_seed_same_stream():
    a = Csprng(seed=7, nonce=3)
    b = Csprng(seed=7, nonce=3)
    assert [a.randbits(127) for _ in range(50)] == [b.randbits(127) for _ in range(50)]


def test_different_seed_different_stream():
    a = Csprng(seed=7, nonce=3)
    b = Csprng(seed=8, nonce=3)
    assert a.randbytes(64) != b.randbytes(64)


def test_refresh_restarts_stream(seeded_csprng):
    first = seeded_csprng.randbytes(100)
    seeded_csprng.refresh(seed=0x1234_5678_9ABC_DEF0, nonce=42)
    assert seeded_csprng.randbytes(100) == first


def test_seed_as_words_matches_int():
    words = [1, 2, 3, 4, 5, 6, 7, 8]
    as_int = sum(w << (32 * i) for i, w in enumerate(words))
    assert Csprng(seed=words, nonce=0).randbytes(32) == Csprng(seed=as_int, nonce=0).randbytes(32)


def test_wrong_seed_length():
    with pytest.raises(ValueError):
        Csprng(seed=[1, 2, 3])


@pytest.mark.parametrize("nbits", [1, 7, 8, 9, 64, 521])
def test_randbits_range(seeded_csprng, nbits):
    draws = [seeded_csprng.randbits(nbits) for _ in range(200)]
    assert all(0 <= x < 2**nbits for x in draws)
    # The top bit shows up.
    assert max(draws).bit_length() == nbits


def test_randbits_zero(seeded_csprng):
    assert seeded_csprng.randbits(0) == 0


def test_spawn_is_reproducible_and_distinct():
    parent_a = Csprng(seed=99, nonce=1)
    parent_b = Csprng(seed=99, nonce=1)
    children_a = [parent_a.spawn() for _ in range(3)]
    children_b = [parent_b.spawn() for _ in range(3)]

    streams_a = [c.randbytes(32) for c in children_a]
    streams_b = [c.randbytes(32) for c in children_b]
    assert streams_a == streams_b
    assert len(set(streams_a)) == 3


def test_sources_follow_the_protocol():
    assert isinstance(Csprng(num_blocks=1), SecureRandomSource)
    assert isinstance(UrandomSource(), SecureRandomSource)
    assert isinstance(UrandomSource().spawn(), UrandomSource)


def test_urandom_source_range():
    rng = UrandomSource()
    assert all(0 <= rng.randbits(13) < 2**13 for _ in range(100))
    assert rng.randbits(0) == 0
