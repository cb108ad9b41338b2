import pytest

from feistel_ecb.analysis import (
    avalanche_percentage,
    ecb_block_repetitions,
    hamming_distance,
    is_bijective,
)
from feistel_ecb.cipher_core import FeistelBlockCipher
from feistel_ecb.ecb_mode import encrypt_message

MASTER_KEY = 0xA3B15C97


def test_hamming_distance_ints():
    assert hamming_distance(0b1010, 0b0101) == 4
    assert hamming_distance(0xFF, 0xFF) == 0


def test_hamming_distance_bytes():
    assert hamming_distance(b"\x00\x0f", b"\x01\x0f") == 1
    with pytest.raises(ValueError):
        hamming_distance(b"\x00", b"\x00\x00")


def test_hamming_distance_block_sequences():
    assert hamming_distance([0x0F, 0xF0], [0x00, 0x00], block_size=8) == 8
    with pytest.raises(ValueError):
        hamming_distance([1], [1])
    with pytest.raises(ValueError):
        hamming_distance([1], [1, 2], block_size=8)


def test_one_character_difference_distance():
    a, _ = encrypt_message("Crypto!!", MASTER_KEY)
    b, _ = encrypt_message("Cryptp!!", MASTER_KEY)
    assert len(a) == len(b) == 1

    expected = bin(a[0] ^ b[0]).count('1')
    assert hamming_distance(a, b, block_size=64) == expected
    assert hamming_distance(a[0], b[0]) == expected
    assert avalanche_percentage(a, b, 64, block_size=64) == pytest.approx(expected * 100 / 64)
    assert expected > 0


def test_avalanche_percentage_bounds():
    assert avalanche_percentage(0x00, 0xFF, 8) == 100.0
    assert avalanche_percentage(0x0F, 0x0F, 8) == 0.0
    with pytest.raises(ValueError):
        avalanche_percentage(0, 1, 0)


def test_is_bijective_rejects_wide_blocks(cipher64):
    with pytest.raises(ValueError):
        is_bijective(cipher64, cipher64.derive_subkeys(MASTER_KEY))


def test_is_bijective_16_bit():
    cipher = FeistelBlockCipher(block_size=16, num_rounds=3, round_function='or')
    assert is_bijective(cipher, (0x12, 0x34, 0x56))


def test_ecb_block_repetitions():
    assert ecb_block_repetitions([1, 2, 1, 3, 1, 2]) == {1: 3, 2: 2}
    assert ecb_block_repetitions([1, 2, 3]) == {}
