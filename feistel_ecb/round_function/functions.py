"""
Round Functions

Each round function combines a half-block with a subkey into a value of
the same width. None of them needs to be invertible: the Feistel
structure makes the whole cipher invertible regardless.
"""

from typing import Callable, Dict, Union

from ..key_schedule.schedules import rotate_left

RoundFunction = Callable[[int, int, int], int]


def and_round(half: int, subkey: int, width: int) -> int:
    """Bitwise AND of the half-block and the subkey."""
    return half & subkey & ((1 << width) - 1)


def or_round(half: int, subkey: int, width: int) -> int:
    """Bitwise OR of the half-block and the subkey."""
    return (half | subkey) & ((1 << width) - 1)


def xor_round(half: int, subkey: int, width: int) -> int:
    """Bitwise XOR of the half-block and the subkey."""
    return (half ^ subkey) & ((1 << width) - 1)


def xor_rotate_round(half: int, subkey: int, width: int) -> int:
    """
    XOR the half-block with the subkey, then rotate left by a quarter
    of the width (at least one bit).
    """
    return rotate_left((half ^ subkey) & ((1 << width) - 1), max(1, width // 4), width)


def multiply_round(half: int, subkey: int, width: int) -> int:
    """
    Multiply the half-block by the subkey forced odd, modulo 2**width.
    """
    return (half * (subkey | 1)) & ((1 << width) - 1)


ROUND_FUNCTIONS: Dict[str, RoundFunction] = {
    'and': and_round,
    'or': or_round,
    'xor': xor_round,
    'xor_rotate': xor_rotate_round,
    'multiply': multiply_round,
}


def get_round_function(function: Union[str, RoundFunction] = 'and') -> RoundFunction:
    """
    Resolve a round function by name, or pass a callable through.

    Args:
        function: One of the names in ROUND_FUNCTIONS, or any callable
            taking (half, subkey, width) and returning an int

    Returns:
        The round function
    """
    if callable(function):
        return function
    try:
        return ROUND_FUNCTIONS[function]
    except KeyError:
        raise ValueError(
            f"Unknown round function '{function}', expected one of {sorted(ROUND_FUNCTIONS)}"
        ) from None
