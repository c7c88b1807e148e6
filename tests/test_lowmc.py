import random

import pytest

from proprf.lowmc import BLOCK_SIZE, KEY_SIZE, LowMC


def _bits(rng, count):
    return [bool(rng.getrandbits(1)) for _ in range(count)]


@pytest.fixture(scope="module")
def rng_key():
    return _bits(random.Random(11), KEY_SIZE)


@pytest.fixture(scope="module")
def cipher(rng_key):
    return LowMC(rng_key)


def test_multi_block_matches_blockwise(cipher):
    nblocks = 10
    rng = random.Random(5)
    plaintext = _bits(rng, nblocks * BLOCK_SIZE)
    ciphertext = cipher.encrypt(plaintext)
    assert len(ciphertext) == nblocks * BLOCK_SIZE
    expected = []
    for i in range(nblocks):
        expected.extend(cipher.encrypt_block(plaintext[i * BLOCK_SIZE : (i + 1) * BLOCK_SIZE]))
    assert ciphertext == expected


def test_two_instances_with_same_key_agree(rng_key, cipher):
    block = _bits(random.Random(9), BLOCK_SIZE)
    assert LowMC(rng_key).encrypt_block(block) == cipher.encrypt_block(block)


def test_key_changes_ciphertext(rng_key, cipher):
    other_key = list(rng_key)
    other_key[0] = not other_key[0]
    block = [False] * BLOCK_SIZE
    first = cipher.encrypt_block(block)
    second = LowMC(other_key).encrypt_block(block)
    assert len(first) == len(second) == BLOCK_SIZE
    assert first != second


def test_distinct_plaintexts_give_distinct_ciphertexts(cipher):
    rng = random.Random(21)
    blocks = {tuple(_bits(rng, BLOCK_SIZE)) for _ in range(50)}
    ciphertexts = {tuple(cipher.encrypt_block(list(b))) for b in blocks}
    assert len(ciphertexts) == len(blocks)


def test_cipher_is_not_affine(cipher):
    rng = random.Random(2)
    a = _bits(rng, BLOCK_SIZE)
    b = _bits(rng, BLOCK_SIZE)
    zero = [False] * BLOCK_SIZE
    ab = [x ^ y for x, y in zip(a, b)]
    combined = [
        x ^ y ^ z
        for x, y, z in zip(
            cipher.encrypt_block(a), cipher.encrypt_block(b), cipher.encrypt_block(zero)
        )
    ]
    assert cipher.encrypt_block(ab) != combined
    assert all(isinstance(bit, bool) for bit in combined)


def test_ciphertext_differs_from_plaintext(cipher):
    block = [True] * BLOCK_SIZE
    result = cipher.encrypt_block(block)
    assert result != block
    assert len(result) == BLOCK_SIZE


def test_invalid_sizes(rng_key, cipher):
    with pytest.raises(ValueError):
        LowMC(rng_key[:-1])
    with pytest.raises(ValueError):
        cipher.encrypt_block([False] * (BLOCK_SIZE + 1))
    with pytest.raises(ValueError):
        cipher.encrypt([False] * (BLOCK_SIZE + 3))


def test_empty_message_encrypts_to_empty(cipher):
    assert cipher.encrypt([]) == []