"""
Bit Packing Package

This package converts messages to and from fixed-width integer blocks,
with configurable padding and original-length tracking.
"""

from .packer import BitPacker, PADDING_POLICIES, bytes_to_blocks, blocks_to_bytes, check_encoding

__all__ = ['BitPacker', 'PADDING_POLICIES', 'check_encoding', 'bytes_to_blocks', 'blocks_to_bytes']
