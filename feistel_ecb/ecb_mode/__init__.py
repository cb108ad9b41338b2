"""
ECB Mode Package

This package implements Electronic Code Book mode on top of the Feistel
block cipher: independent per-block processing with one shared subkey
sequence.
"""

from .ecb import FeistelECB, encrypt_message, decrypt_message

__all__ = ['FeistelECB', 'encrypt_message', 'decrypt_message']
