"""
Electronic Code Book (ECB) Mode

This module applies the Feistel block cipher to whole messages in ECB
mode: every block is encrypted independently with the same subkeys, no
IV and no chaining. Identical plaintext blocks therefore always produce
identical ciphertext blocks, which is the weakness this mode exists to
demonstrate. There is no integrity protection.
"""

import concurrent.futures
import logging
from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple

from ..bit_packing.packer import BitPacker
from ..cipher_core.block_cipher import FeistelBlockCipher
from ..errors import InvalidBlockWidthError

logger = logging.getLogger(__name__)


class FeistelECB:
    """
    ECB mode wrapper around a FeistelBlockCipher.
    """

    def __init__(self,
                 master_key: int,
                 cipher: Optional[FeistelBlockCipher] = None,
                 packer: Optional[BitPacker] = None,
                 max_workers: Optional[int] = None):
        """
        Initialize ECB mode with a master key.

        Args:
            master_key: The master key
            cipher: Optional pre-configured block cipher (default: 64-bit, 4 rounds)
            packer: Optional bit packer (default: matching block size, filler padding)
            max_workers: Worker threads for block processing; None or 1
                processes blocks sequentially
        """
        self.cipher = cipher if cipher is not None else FeistelBlockCipher()
        self.packer = packer if packer is not None else BitPacker(block_size=self.cipher.block_size)

        if self.packer.block_size != self.cipher.block_size:
            raise InvalidBlockWidthError(
                f"Packer block size {self.packer.block_size} does not match "
                f"cipher block size {self.cipher.block_size}"
            )

        self.max_workers = max_workers

        # Derived once, shared read-only by every block in both directions
        self.subkeys = self.cipher.derive_subkeys(master_key)

    def _map_blocks(self, func: Callable[[int, Sequence[int]], int], blocks: Sequence[int]) -> List[int]:
        apply = partial(func, subkeys=self.subkeys)
        if self.max_workers is None or self.max_workers <= 1 or len(blocks) < 2:
            return [apply(block) for block in blocks]

        # executor.map yields results in input order, not completion order
        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(apply, blocks))

    def encrypt_blocks(self, blocks: Sequence[int]) -> List[int]:
        """Encrypt each block independently."""
        return self._map_blocks(self.cipher.encrypt_block, blocks)

    def decrypt_blocks(self, blocks: Sequence[int]) -> List[int]:
        """Decrypt each block independently."""
        return self._map_blocks(self.cipher.decrypt_block, blocks)

    def encrypt_bytes(self, data: bytes) -> Tuple[List[int], int]:
        """
        Encrypt a byte string.

        Returns:
            A tuple of (cipher_blocks, original_length)
        """
        blocks, original_length = self.packer.encode_bytes(data)
        return self.encrypt_blocks(blocks), original_length

    def decrypt_bytes(self, cipher_blocks: Sequence[int], original_length: int) -> bytes:
        """Decrypt cipher blocks back into the original byte string."""
        return self.packer.decode_bytes(self.decrypt_blocks(cipher_blocks), original_length)

    def encrypt(self, text: str) -> Tuple[List[int], int]:
        """
        Encrypt a message in ECB mode.

        Args:
            text: The plaintext message

        Returns:
            A tuple of (cipher_blocks, original_length)
        """
        blocks, original_length = self.packer.encode(text)
        cipher_blocks = self.encrypt_blocks(blocks)
        logger.debug("Encrypted %d blocks in ECB mode", len(cipher_blocks))
        return cipher_blocks, original_length

    def decrypt(self, cipher_blocks: Sequence[int], original_length: int) -> str:
        """
        Decrypt a message in ECB mode.

        Args:
            cipher_blocks: The ciphertext blocks
            original_length: The original message length returned by encrypt

        Returns:
            The plaintext message
        """
        blocks = self.decrypt_blocks(cipher_blocks)
        logger.debug("Decrypted %d blocks in ECB mode", len(blocks))
        return self.packer.decode(blocks, original_length)


def encrypt_message(text: str,
                    master_key: int,
                    cipher: Optional[FeistelBlockCipher] = None,
                    packer: Optional[BitPacker] = None) -> Tuple[List[int], int]:
    """
    Encrypt a message using FeistelECB mode.

    Args:
        text: The plaintext to encrypt
        master_key: The master key
        cipher: Optional pre-configured block cipher
        packer: Optional bit packer

    Returns:
        A tuple of (cipher_blocks, original_length)
    """
    ecb = FeistelECB(master_key, cipher=cipher, packer=packer)
    return ecb.encrypt(text)


def decrypt_message(cipher_blocks: Sequence[int],
                    master_key: int,
                    original_length: int,
                    cipher: Optional[FeistelBlockCipher] = None,
                    packer: Optional[BitPacker] = None) -> str:
    """
    Decrypt a message using FeistelECB mode.

    Args:
        cipher_blocks: The ciphertext blocks
        master_key: The master key
        original_length: The original message length returned by encrypt_message
        cipher: Optional pre-configured block cipher
        packer: Optional bit packer

    Returns:
        The decrypted plaintext
    """
    ecb = FeistelECB(master_key, cipher=cipher, packer=packer)
    return ecb.decrypt(cipher_blocks, original_length)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    key = 0xA3B15C97
    plaintext = "Crypto!!Crypto!!Cryptp!!"

    cipher_blocks, original_length = encrypt_message(plaintext, key)

    print(f"Key: {key:#x}")
    print(f"Plaintext: {plaintext}")
    print(f"Ciphertext blocks: {[format(b, '016x') for b in cipher_blocks]}")

    # Repeated plaintext blocks leak as repeated ciphertext blocks
    assert cipher_blocks[0] == cipher_blocks[1]
    assert cipher_blocks[0] != cipher_blocks[2]

    decrypted = decrypt_message(cipher_blocks, key, original_length)
    print(f"Decrypted: {decrypted}")
    assert decrypted == plaintext

    print("ECB mode tests completed successfully!")
