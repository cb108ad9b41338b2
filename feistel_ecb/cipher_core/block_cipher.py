"""
Block Cipher Implementation

This module provides the core implementation of the FeistelBlockCipher,
a balanced Feistel network operating on fixed-width integer blocks with
a pluggable round function and key schedule.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from ..errors import InvalidBlockWidthError, InvalidSubkeyCountError, InvalidSubkeyError
from ..key_schedule.schedules import KeySchedule, get_key_schedule
from ..round_function.functions import RoundFunction, get_round_function

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundState:
    """Halves after one forward round, with the values that produced them."""
    round_index: int
    subkey: int
    f_output: int
    left: int
    right: int


class FeistelBlockCipher:
    """
    Feistel network block cipher with a configurable block width,
    number of rounds, round function and key schedule.
    """

    def __init__(self,
                 block_size: int = 64,
                 num_rounds: int = 4,
                 round_function: Union[str, RoundFunction] = 'and',
                 key_schedule: Union[str, KeySchedule, None] = 'arithmetic'):
        """
        Initialize the block cipher with specified parameters.

        Args:
            block_size: Block size in bits, must be even (default: 64)
            num_rounds: Number of Feistel rounds (default: 4)
            round_function: Round function name or callable (default: 'and')
            key_schedule: Key schedule name or instance (default: 'arithmetic')
        """
        if block_size < 2 or block_size % 2:
            raise InvalidBlockWidthError(f"Block size must be an even number of bits >= 2, got {block_size}")
        if num_rounds <= 0:
            raise ValueError(f"Number of rounds must be positive, got {num_rounds}")

        self.block_size = block_size
        self.num_rounds = num_rounds
        self.half_size = block_size // 2

        self.block_mask = (1 << block_size) - 1
        self.half_mask = (1 << self.half_size) - 1

        self.round_function = get_round_function(round_function)
        self.key_schedule = get_key_schedule(key_schedule)

        logger.debug("Initialized %d-bit Feistel cipher, %d rounds, F=%s, schedule=%r",
                     block_size, num_rounds,
                     getattr(self.round_function, '__name__', self.round_function),
                     self.key_schedule)

    def derive_subkeys(self, master_key: int) -> Tuple[int, ...]:
        """
        Derive the subkey sequence for this cipher from a master key.

        Args:
            master_key: The master key

        Returns:
            A tuple of num_rounds half-block-width subkeys
        """
        subkeys = tuple(self.key_schedule.derive(master_key, self.num_rounds, self.half_size))
        self._check_subkeys(subkeys)
        return subkeys

    def _check_block(self, block: int) -> None:
        if block < 0 or block > self.block_mask:
            raise InvalidBlockWidthError(f"Block {block:#x} does not fit in {self.block_size} bits")

    def _check_subkeys(self, subkeys: Sequence[int]) -> None:
        if len(subkeys) != self.num_rounds:
            raise InvalidSubkeyCountError(
                f"Expected {self.num_rounds} subkeys, got {len(subkeys)}"
            )
        for i, subkey in enumerate(subkeys):
            if subkey < 0 or subkey > self.half_mask:
                raise InvalidSubkeyError(
                    f"Subkey {i} ({subkey:#x}) does not fit in {self.half_size} bits"
                )

    def split_block(self, block: int) -> Tuple[int, int]:
        """Split a block into its (left, right) halves."""
        return block >> self.half_size, block & self.half_mask

    def join_halves(self, left: int, right: int) -> int:
        """Concatenate (left, right) halves into a block."""
        return (left << self.half_size) | right

    def _f(self, half: int, subkey: int) -> int:
        return self.round_function(half, subkey, self.half_size) & self.half_mask

    def forward_round(self, left: int, right: int, subkey: int) -> Tuple[int, int]:
        """
        One encryption round: L' = R, R' = L XOR F(R, K).
        """
        return right, left ^ self._f(right, subkey)

    def inverse_round(self, left: int, right: int, subkey: int) -> Tuple[int, int]:
        """
        Undo one encryption round: R = L', L = R' XOR F(L', K).
        """
        return right ^ self._f(left, subkey), left

    def encrypt_block(self, block: int, subkeys: Sequence[int]) -> int:
        """
        Encrypt a single block.

        Args:
            block: The plaintext block (must fit block_size bits)
            subkeys: Subkey sequence of length num_rounds

        Returns:
            The encrypted ciphertext block
        """
        self._check_block(block)
        self._check_subkeys(subkeys)

        left, right = self.split_block(block)
        for subkey in subkeys:
            left, right = self.forward_round(left, right, subkey)

        # No terminal swap
        return self.join_halves(left, right)

    def decrypt_block(self, block: int, subkeys: Sequence[int]) -> int:
        """
        Decrypt a single block.

        Args:
            block: The ciphertext block (must fit block_size bits)
            subkeys: The subkey sequence used for encryption

        Returns:
            The decrypted plaintext block
        """
        self._check_block(block)
        self._check_subkeys(subkeys)

        left, right = self.split_block(block)
        for subkey in reversed(subkeys):
            left, right = self.inverse_round(left, right, subkey)

        return self.join_halves(left, right)

    def trace_encrypt(self, block: int, subkeys: Sequence[int]) -> List[RoundState]:
        """
        Encrypt a block, recording the halves after every round.

        The last record's halves joined together equal encrypt_block(block, subkeys).
        """
        self._check_block(block)
        self._check_subkeys(subkeys)

        left, right = self.split_block(block)
        trace = []
        for i, subkey in enumerate(subkeys):
            f_output = self._f(right, subkey)
            left, right = self.forward_round(left, right, subkey)
            trace.append(RoundState(i, subkey, f_output, left, right))
            logger.debug("Round %d: K=%s F=%s L=%s R=%s", i,
                         format(subkey, f'0{self.half_size}b'),
                         format(f_output, f'0{self.half_size}b'),
                         format(left, f'0{self.half_size}b'),
                         format(right, f'0{self.half_size}b'))
        return trace


def encrypt_block(block: int, subkeys: Sequence[int],
                  block_size: int = 64,
                  round_function: Union[str, RoundFunction] = 'and') -> int:
    """
    Convenience function to encrypt a single block.

    Args:
        block: The plaintext block
        subkeys: The subkey sequence (its length sets the number of rounds)
        block_size: Block size in bits (default: 64)
        round_function: Round function name or callable (default: 'and')

    Returns:
        The encrypted ciphertext block
    """
    cipher = FeistelBlockCipher(block_size=block_size, num_rounds=len(subkeys),
                                round_function=round_function)
    return cipher.encrypt_block(block, subkeys)


def decrypt_block(block: int, subkeys: Sequence[int],
                  block_size: int = 64,
                  round_function: Union[str, RoundFunction] = 'and') -> int:
    """
    Convenience function to decrypt a single block.

    Args:
        block: The ciphertext block
        subkeys: The subkey sequence (its length sets the number of rounds)
        block_size: Block size in bits (default: 64)
        round_function: Round function name or callable (default: 'and')

    Returns:
        The decrypted plaintext block
    """
    cipher = FeistelBlockCipher(block_size=block_size, num_rounds=len(subkeys),
                                round_function=round_function)
    return cipher.decrypt_block(block, subkeys)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    # 8-bit toy variant: 4-bit halves, table-cycling keys, AND round function
    cipher = FeistelBlockCipher(block_size=8, num_rounds=4, round_function='and', key_schedule='table')
    subkeys = cipher.derive_subkeys(0)
    plaintext = ord('C')

    print(f"Plaintext (binary)  : {plaintext:08b}")
    for state in cipher.trace_encrypt(plaintext, subkeys):
        print(f"Round {state.round_index}: K={state.subkey:04b} F={state.f_output:04b} "
              f"L={state.left:04b} R={state.right:04b}")

    ciphertext = cipher.encrypt_block(plaintext, subkeys)
    print(f"Ciphertext (binary) : {ciphertext:08b}")

    decrypted = cipher.decrypt_block(ciphertext, subkeys)
    print(f"Deciphered (binary) : {decrypted:08b}")
    assert decrypted == plaintext

    print("Block cipher self-test passed!")
