"""
Round Function Package

This package implements the interchangeable round functions (F) that
combine a half-block with a round subkey.
"""

from .functions import (
    ROUND_FUNCTIONS,
    and_round,
    get_round_function,
    multiply_round,
    or_round,
    xor_rotate_round,
    xor_round,
)

__all__ = [
    'ROUND_FUNCTIONS', 'get_round_function', 'and_round', 'or_round',
    'xor_round', 'xor_rotate_round', 'multiply_round',
]
