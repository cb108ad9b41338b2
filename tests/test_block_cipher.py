import random

import pytest

from feistel_ecb.analysis import is_bijective
from feistel_ecb.cipher_core import FeistelBlockCipher, decrypt_block, encrypt_block
from feistel_ecb.errors import InvalidBlockWidthError, InvalidSubkeyCountError, InvalidSubkeyError
from feistel_ecb.key_schedule import TableCyclingSchedule

MASTER_KEY = 0xA3B15C97


def test_known_toy_vector(toy_cipher, toy_subkeys):
    # "C" = 01000011, keys 1110 0100 1101 0001, F = AND
    assert toy_subkeys == (0b1110, 0b0100, 0b1101, 0b0001)
    ciphertext = toy_cipher.encrypt_block(0b01000011, toy_subkeys)
    assert ciphertext == 0b00110110
    assert toy_cipher.decrypt_block(ciphertext, toy_subkeys) == 0b01000011


def test_trace_matches_round_equations(toy_cipher, toy_subkeys):
    trace = toy_cipher.trace_encrypt(0b01000011, toy_subkeys)
    assert [(s.left, s.right) for s in trace] == [
        (0b0011, 0b0110),
        (0b0110, 0b0111),
        (0b0111, 0b0011),
        (0b0011, 0b0110),
    ]
    assert [s.f_output for s in trace] == [0b0010, 0b0100, 0b0101, 0b0001]
    last = trace[-1]
    assert toy_cipher.join_halves(last.left, last.right) == toy_cipher.encrypt_block(0b01000011, toy_subkeys)


def test_forward_and_inverse_round_cancel(toy_cipher):
    for left in range(16):
        for right in range(16):
            for subkey in range(16):
                l2, r2 = toy_cipher.forward_round(left, right, subkey)
                assert toy_cipher.inverse_round(l2, r2, subkey) == (left, right)


def test_split_and_join(cipher64):
    left, right = cipher64.split_block(0x0123456789ABCDEF)
    assert (left, right) == (0x01234567, 0x89ABCDEF)
    assert cipher64.join_halves(left, right) == 0x0123456789ABCDEF


@pytest.mark.parametrize("rounds", [1, 2, 4, 7])
def test_involution_exhaustive_8_bit(round_function_name, rounds):
    cipher = FeistelBlockCipher(block_size=8, num_rounds=rounds,
                                round_function=round_function_name, key_schedule='table')
    rng = random.Random(rounds)
    for _ in range(5):
        subkeys = tuple(rng.randrange(16) for _ in range(rounds))
        for block in range(256):
            assert cipher.decrypt_block(cipher.encrypt_block(block, subkeys), subkeys) == block


def test_involution_every_toy_subkey_sequence():
    cipher = FeistelBlockCipher(block_size=8, num_rounds=2, round_function='and')
    for k0 in range(16):
        for k1 in range(16):
            subkeys = (k0, k1)
            for block in range(256):
                assert cipher.decrypt_block(cipher.encrypt_block(block, subkeys), subkeys) == block


def test_bijective_per_key(round_function_name, toy_subkeys):
    cipher = FeistelBlockCipher(block_size=8, num_rounds=4, round_function=round_function_name)
    assert is_bijective(cipher, toy_subkeys)


def test_non_injective_custom_round_function_still_inverts():
    def constant(half, subkey, width):
        return 0b1010

    cipher = FeistelBlockCipher(block_size=8, num_rounds=3, round_function=constant)
    subkeys = (1, 2, 3)
    assert is_bijective(cipher, subkeys)
    for block in range(256):
        assert cipher.decrypt_block(cipher.encrypt_block(block, subkeys), subkeys) == block


@pytest.mark.parametrize("schedule", ['arithmetic', 'arx'])
def test_involution_64_bit(round_function_name, schedule):
    cipher = FeistelBlockCipher(block_size=64, num_rounds=4,
                                round_function=round_function_name, key_schedule=schedule)
    subkeys = cipher.derive_subkeys(MASTER_KEY)
    rng = random.Random(0)
    for _ in range(200):
        block = rng.getrandbits(64)
        assert cipher.decrypt_block(cipher.encrypt_block(block, subkeys), subkeys) == block


def test_module_level_helpers():
    subkeys = (0b1110, 0b0100, 0b1101, 0b0001)
    ciphertext = encrypt_block(0b01000011, subkeys, block_size=8)
    assert ciphertext == 0b00110110
    assert decrypt_block(ciphertext, subkeys, block_size=8) == 0b01000011


def test_derive_subkeys_uses_injected_schedule():
    cipher = FeistelBlockCipher(block_size=8, num_rounds=3, key_schedule=TableCyclingSchedule([7, 8]))
    assert cipher.derive_subkeys(0) == (7, 8, 7)


@pytest.mark.parametrize("block_size", [0, 7, 63, -2])
def test_invalid_block_width(block_size):
    with pytest.raises(InvalidBlockWidthError):
        FeistelBlockCipher(block_size=block_size)


def test_block_out_of_range(toy_cipher, toy_subkeys):
    with pytest.raises(InvalidBlockWidthError):
        toy_cipher.encrypt_block(256, toy_subkeys)
    with pytest.raises(InvalidBlockWidthError):
        toy_cipher.decrypt_block(-1, toy_subkeys)


def test_wrong_subkey_count(toy_cipher, toy_subkeys):
    with pytest.raises(InvalidSubkeyCountError):
        toy_cipher.encrypt_block(0x43, toy_subkeys[:3])
    with pytest.raises(InvalidSubkeyCountError):
        toy_cipher.decrypt_block(0x43, toy_subkeys + (1,))


def test_subkey_wider_than_half_block(toy_cipher):
    with pytest.raises(InvalidSubkeyError):
        toy_cipher.encrypt_block(0x43, (1, 2, 3, 16))


def test_invalid_round_count():
    with pytest.raises(ValueError):
        FeistelBlockCipher(num_rounds=0)


def test_errors_are_value_errors(toy_cipher):
    with pytest.raises(ValueError):
        toy_cipher.encrypt_block(0x43, ())
