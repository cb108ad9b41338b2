import pytest

from feistel_ecb.cipher_core import FeistelBlockCipher
from feistel_ecb.round_function import ROUND_FUNCTIONS


@pytest.fixture
def toy_cipher():
    """8-bit cipher with 4-bit halves, AND round function and the static key table."""
    return FeistelBlockCipher(block_size=8, num_rounds=4, round_function='and', key_schedule='table')


@pytest.fixture
def toy_subkeys(toy_cipher):
    return toy_cipher.derive_subkeys(0)


@pytest.fixture
def cipher64():
    return FeistelBlockCipher(block_size=64, num_rounds=4, round_function='and', key_schedule='arithmetic')


@pytest.fixture(params=sorted(ROUND_FUNCTIONS))
def round_function_name(request):
    return request.param
