"""
Diffusion and Leakage Measurements

This module measures properties of the cipher used in teaching:
Hamming distance and avalanche percentage between ciphertexts,
bijectivity of a keyed block permutation, the image size of a round
function, and repeated blocks in ECB output.
"""

import logging
from collections import Counter
from typing import Dict, Optional, Sequence, Union

import numpy as np

from ..bit_packing.packer import blocks_to_bytes
from ..cipher_core.block_cipher import FeistelBlockCipher
from ..round_function.functions import RoundFunction, get_round_function

logger = logging.getLogger(__name__)

# Exhaustive checks enumerate 2**width values
MAX_EXHAUSTIVE_WIDTH = 16

Comparable = Union[int, bytes, bytearray, Sequence[int]]


def _bit_count(a: bytes, b: bytes) -> int:
    xor = np.frombuffer(a, dtype=np.uint8) ^ np.frombuffer(b, dtype=np.uint8)
    return int(np.unpackbits(xor).sum())


def hamming_distance(a: Comparable, b: Comparable, block_size: Optional[int] = None) -> int:
    """
    Count the bit positions in which two values differ.

    Args:
        a: An int, a byte string, or a sequence of blocks
        b: A value of the same kind and length as a
        block_size: Block width in bits, required for block sequences

    Returns:
        The number of differing bits
    """
    if isinstance(a, int) and isinstance(b, int):
        if a < 0 or b < 0:
            raise ValueError("Hamming distance is defined for non-negative integers")
        return bin(a ^ b).count('1')

    if isinstance(a, (bytes, bytearray)) and isinstance(b, (bytes, bytearray)):
        if len(a) != len(b):
            raise ValueError(f"Byte strings differ in length: {len(a)} != {len(b)}")
        return _bit_count(bytes(a), bytes(b))

    if block_size is None:
        raise ValueError("block_size is required to compare block sequences")
    if len(a) != len(b):
        raise ValueError(f"Block sequences differ in length: {len(a)} != {len(b)}")
    return _bit_count(blocks_to_bytes(a, block_size), blocks_to_bytes(b, block_size))


def avalanche_percentage(a: Comparable, b: Comparable, bit_width: int,
                         block_size: Optional[int] = None) -> float:
    """
    Percentage of bits that differ between two ciphertexts.

    Args:
        a: First ciphertext
        b: Second ciphertext
        bit_width: Total number of bits compared
        block_size: Block width in bits, required for block sequences

    Returns:
        Differing bits as a percentage of bit_width
    """
    if bit_width <= 0:
        raise ValueError("Bit width must be positive")
    return hamming_distance(a, b, block_size) * 100.0 / bit_width


def is_bijective(cipher: FeistelBlockCipher, subkeys: Sequence[int]) -> bool:
    """
    Check exhaustively that encrypt_block permutes every block value.

    Only practical for small widths (at most MAX_EXHAUSTIVE_WIDTH bits).
    """
    if cipher.block_size > MAX_EXHAUSTIVE_WIDTH:
        raise ValueError(
            f"Exhaustive check limited to {MAX_EXHAUSTIVE_WIDTH}-bit blocks, got {cipher.block_size}"
        )
    count = 1 << cipher.block_size
    outputs = np.fromiter((cipher.encrypt_block(b, subkeys) for b in range(count)),
                          dtype=np.int64, count=count)
    distinct = len(np.unique(outputs))
    logger.debug("%d distinct outputs over %d inputs", distinct, count)
    return distinct == count


def round_function_image_size(function: Union[str, RoundFunction], subkey: int, width: int) -> int:
    """
    Count the distinct outputs of F(half, subkey) over every half-block value.

    A result below 2**width shows the round function is not injective
    for this subkey.
    """
    if width > MAX_EXHAUSTIVE_WIDTH:
        raise ValueError(f"Exhaustive check limited to {MAX_EXHAUSTIVE_WIDTH}-bit halves, got {width}")
    f = get_round_function(function)
    count = 1 << width
    outputs = np.fromiter((f(h, subkey, width) for h in range(count)), dtype=np.int64, count=count)
    return len(np.unique(outputs))


def ecb_block_repetitions(blocks: Sequence[int]) -> Dict[int, int]:
    """
    Find ciphertext blocks that occur more than once.

    Returns:
        Mapping of repeated block value to its number of occurrences
    """
    counts = Counter(blocks)
    return {block: n for block, n in counts.items() if n > 1}
