"""
Key Schedule Implementation

This module implements the key schedules that expand a master key into
the per-round subkeys of the Feistel cipher. Each schedule is a strategy
object so the cipher can be configured with any of them at construction
time.
"""

import logging
import secrets
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

import argon2

from ..errors import InvalidMasterKeyError

logger = logging.getLogger(__name__)

# Golden ratio constant used for arithmetic mixing (odd, good bit dispersion)
GOLDEN_RATIO_CONSTANT = 0x9E3779B9

# 4-bit key space of the 8-bit teaching variant
DEFAULT_KEY_TABLE = (
    0b1110, 0b0100, 0b1101, 0b0001,
    0b0010, 0b1111, 0b1011, 0b1000,
    0b0011, 0b1010, 0b0110, 0b1100,
    0b0101, 0b1001, 0b0000, 0b0111,
)

# Constants for ARX mixing, fractional parts of irrational numbers
ARX_CONSTANTS = (
    0x9e3779b9, 0x243f6a88, 0xb7e15162, 0x3707344a,
    0xa4093822, 0x299f31d0, 0x082efa98, 0xec4e6c89,
    0x452821e6, 0x38d01377, 0xbe5466cf, 0x34e90c6c,
    0xc0ac29b7, 0xc97c50dd, 0x3f84d5b5, 0xb5470917,
)


def rotate_left(value: int, shift: int, size: int = 32) -> int:
    """
    Rotate a value left by the specified number of bits.

    Args:
        value: The value to rotate
        shift: The number of bits to rotate by
        size: The bit size of the value

    Returns:
        The rotated value
    """
    shift %= size
    return ((value << shift) | (value >> (size - shift))) & ((1 << size) - 1)


def _check_rounds(rounds: int) -> None:
    if rounds <= 0:
        raise ValueError(f"Round count must be positive, got {rounds}")


def _check_master_key(master_key: int, half_width: int) -> None:
    if master_key < 0:
        raise InvalidMasterKeyError("Master key must be a non-negative integer")
    if master_key >> half_width:
        raise InvalidMasterKeyError(
            f"Master key must fit in {half_width} bits, got {master_key.bit_length()} bits"
        )


class TableCyclingSchedule:
    """
    Subkeys taken in order from a fixed table of constants, wrapping
    around when there are more rounds than entries.

    The master key does not select table entries.
    """

    name = 'table'

    def __init__(self, table: Sequence[int] = DEFAULT_KEY_TABLE):
        if not table:
            raise ValueError("Key table must not be empty")
        self.table = tuple(table)

    def derive(self, master_key: int, rounds: int, half_width: int) -> Tuple[int, ...]:
        _check_rounds(rounds)
        for entry in self.table:
            if entry < 0 or entry >> half_width:
                raise ValueError(f"Key table entry {entry:#x} does not fit in {half_width} bits")
        return tuple(self.table[i % len(self.table)] for i in range(rounds))

    def __repr__(self):
        return f"TableCyclingSchedule(entries={len(self.table)})"


class ArithmeticMixingSchedule:
    """
    subkey[i] = master_key XOR (i * constant), truncated to the half-block width.
    """

    name = 'arithmetic'

    def __init__(self, constant: int = GOLDEN_RATIO_CONSTANT):
        if constant % 2 == 0:
            raise ValueError("Mixing constant must be odd")
        self.constant = constant

    def derive(self, master_key: int, rounds: int, half_width: int) -> Tuple[int, ...]:
        _check_rounds(rounds)
        _check_master_key(master_key, half_width)
        mask = (1 << half_width) - 1
        return tuple((master_key ^ (i * self.constant)) & mask for i in range(rounds))

    def __repr__(self):
        return f"ArithmeticMixingSchedule(constant={self.constant:#x})"


class ArxSchedule:
    """
    Add-rotate-xor schedule: a running state is updated once per round
    by adding a round constant, rotating, and folding the master key back in.
    """

    name = 'arx'

    def __init__(self, constants: Sequence[int] = ARX_CONSTANTS):
        if not constants:
            raise ValueError("ARX constant table must not be empty")
        self.constants = tuple(constants)

    def derive(self, master_key: int, rounds: int, half_width: int) -> Tuple[int, ...]:
        _check_rounds(rounds)
        _check_master_key(master_key, half_width)
        mask = (1 << half_width) - 1

        state = master_key
        subkeys = []
        for r in range(rounds):
            # Addition
            state = (state + self.constants[r % len(self.constants)]) & mask
            # Rotation
            state = rotate_left(state, r + 1, half_width)
            # XOR with the master key
            state ^= master_key
            subkeys.append(state)

        return tuple(subkeys)

    def __repr__(self):
        return f"ArxSchedule(constants={len(self.constants)})"


KeySchedule = Union[TableCyclingSchedule, ArithmeticMixingSchedule, ArxSchedule]

KEY_SCHEDULES: Dict[str, Callable[[], KeySchedule]] = {
    'table': TableCyclingSchedule,
    'arithmetic': ArithmeticMixingSchedule,
    'arx': ArxSchedule,
}


def get_key_schedule(schedule: Union[str, KeySchedule, None] = None) -> KeySchedule:
    """
    Resolve a key schedule by name, or pass an existing strategy through.

    Args:
        schedule: 'table', 'arithmetic', 'arx', a schedule instance, or
            None for the default arithmetic mixing schedule

    Returns:
        A key schedule object exposing ``derive``
    """
    if schedule is None:
        return ArithmeticMixingSchedule()
    if isinstance(schedule, str):
        try:
            return KEY_SCHEDULES[schedule]()
        except KeyError:
            raise ValueError(
                f"Unknown key schedule '{schedule}', expected one of {sorted(KEY_SCHEDULES)}"
            ) from None
    if not callable(getattr(schedule, 'derive', None)):
        raise TypeError("Key schedule must provide a derive(master_key, rounds, half_width) method")
    return schedule


def derive_subkeys(master_key: int,
                   rounds: int,
                   schedule: Union[str, KeySchedule, None] = None,
                   half_width: int = 32) -> Tuple[int, ...]:
    """
    Expand a master key into the subkey sequence for all rounds.

    Args:
        master_key: The master key
        rounds: Number of Feistel rounds
        schedule: Key schedule name or instance (default: arithmetic mixing)
        half_width: Width of each subkey in bits (half the block width)

    Returns:
        A tuple of ``rounds`` subkeys
    """
    strategy = get_key_schedule(schedule)
    subkeys = strategy.derive(master_key, rounds, half_width)
    logger.debug("Derived %d subkeys of %d bits with %r", len(subkeys), half_width, strategy)
    return subkeys


def generate_master_key(bits: int = 32) -> int:
    """
    Generate a random master key.

    Args:
        bits: Size of the key in bits (default: 32)

    Returns:
        A random key as an integer
    """
    return secrets.randbits(bits)


def derive_master_key_from_password(password: str,
                                    salt: Optional[bytes] = None,
                                    bits: int = 32) -> Tuple[int, bytes]:
    """
    Derive a master key from a password using Argon2id.

    Args:
        password: The password to derive the key from
        salt: Optional salt (will be generated if not provided)
        bits: Size of the key in bits (default: 32)

    Returns:
        A tuple of (key, salt)
    """
    if bits <= 0:
        raise ValueError("Key size must be positive")

    if salt is None:
        salt = secrets.token_bytes(16)

    hash_len = max(4, (bits + 7) // 8)
    raw = argon2.low_level.hash_secret_raw(
        secret=password.encode('utf-8'),
        salt=salt,
        time_cost=2,
        memory_cost=19456,  # 19 MiB
        parallelism=1,
        hash_len=hash_len,
        type=argon2.low_level.Type.ID
    )

    key = int.from_bytes(raw, byteorder='big') >> (hash_len * 8 - bits)
    return key, salt
