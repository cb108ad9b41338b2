"""
Cipher Core Package

This package implements the Feistel round transform and the block-level
encryption/decryption operations.
"""

from .block_cipher import FeistelBlockCipher, RoundState, encrypt_block, decrypt_block

__all__ = ['FeistelBlockCipher', 'RoundState', 'encrypt_block', 'decrypt_block']
