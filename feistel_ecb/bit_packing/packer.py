"""
Bit Packing

This module converts text and byte strings to and from sequences of
fixed-width integer blocks. Bytes are packed big-endian, so the first
byte of a group becomes the most significant byte of the block.
"""

import codecs
import logging
from typing import List, Sequence, Tuple

from Cryptodome.Util.Padding import pad

from ..errors import FeistelError, InvalidBlockWidthError, UnencodableInputError

logger = logging.getLogger(__name__)

PADDING_POLICIES = ('filler', 'zero', 'pkcs7')


def _block_bytes(block_size: int) -> int:
    if block_size <= 0 or block_size % 8:
        raise InvalidBlockWidthError(
            f"Block size must be a positive multiple of 8 bits for byte packing, got {block_size}"
        )
    return block_size // 8


def check_encoding(encoding: str) -> str:
    """
    Resolve a codec name, raising FeistelError if Python does not know it.

    Returns:
        The canonical codec name
    """
    try:
        return codecs.lookup(encoding).name
    except LookupError:
        raise FeistelError(f"Unknown text encoding '{encoding}'") from None


def bytes_to_blocks(data: bytes, block_size: int = 64) -> List[int]:
    """
    Pack block-aligned bytes into integer blocks (big-endian).

    Args:
        data: Bytes whose length is a multiple of block_size / 8
        block_size: Block size in bits

    Returns:
        List of blocks
    """
    width = _block_bytes(block_size)
    if len(data) % width:
        raise InvalidBlockWidthError(f"Data length {len(data)} is not a multiple of {width} bytes")
    return [int.from_bytes(data[i:i + width], byteorder='big') for i in range(0, len(data), width)]


def blocks_to_bytes(blocks: Sequence[int], block_size: int = 64) -> bytes:
    """
    Unpack integer blocks into bytes (big-endian).

    Args:
        blocks: Blocks, each fitting in block_size bits
        block_size: Block size in bits

    Returns:
        The concatenated block bytes
    """
    width = _block_bytes(block_size)
    out = bytearray()
    for block in blocks:
        if block < 0 or block >> block_size:
            raise InvalidBlockWidthError(f"Block {block:#x} does not fit in {block_size} bits")
        out.extend(block.to_bytes(width, byteorder='big'))
    return bytes(out)


class BitPacker:
    """
    Splits messages into fixed-width blocks and reassembles them.

    Padding policies:
        'filler': pad the tail of the last block with a filler byte
        'zero':   left-pad the whole message with zero bytes
        'pkcs7':  PKCS#7 tail padding
    Decoding always strips padding using the original length, never by
    inspecting the padding bytes.
    """

    def __init__(self,
                 block_size: int = 64,
                 padding: str = 'filler',
                 encoding: str = 'utf-8',
                 filler: bytes = b' '):
        self.block_size = block_size
        self.block_bytes = _block_bytes(block_size)

        if padding not in PADDING_POLICIES:
            raise ValueError(f"Unknown padding policy '{padding}', expected one of {PADDING_POLICIES}")
        if padding == 'pkcs7' and self.block_bytes > 255:
            raise ValueError("PKCS#7 padding requires blocks of at most 255 bytes")
        if len(filler) != 1:
            raise ValueError("Filler must be exactly one byte")
        check_encoding(encoding)

        self.padding = padding
        self.encoding = encoding
        self.filler = filler

    def _pad(self, data: bytes) -> bytes:
        pad_len = -len(data) % self.block_bytes
        if self.padding == 'pkcs7':
            return pad(data, self.block_bytes, style='pkcs7')
        if self.padding == 'zero':
            return bytes(pad_len) + data
        return data + self.filler * pad_len

    def encode_bytes(self, data: bytes) -> Tuple[List[int], int]:
        """
        Split bytes into padded blocks.

        Returns:
            A tuple of (blocks, original_length)
        """
        blocks = bytes_to_blocks(self._pad(data), self.block_size)
        logger.debug("Packed %d bytes into %d blocks (%s padding)", len(data), len(blocks), self.padding)
        return blocks, len(data)

    def decode_bytes(self, blocks: Sequence[int], original_length: int) -> bytes:
        """
        Reassemble blocks into bytes and strip the padding.
        """
        payload = blocks_to_bytes(blocks, self.block_size)
        if original_length < 0 or original_length > len(payload):
            raise ValueError(
                f"Original length {original_length} is outside the {len(payload)} byte payload"
            )
        if self.padding == 'zero':
            return payload[len(payload) - original_length:]
        return payload[:original_length]

    def encode(self, text: str) -> Tuple[List[int], int]:
        """
        Encode text and split it into padded blocks.

        Args:
            text: The message text

        Returns:
            A tuple of (blocks, original_length), where original_length
            counts encoded bytes
        """
        try:
            data = text.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise UnencodableInputError(
                f"Character {text[e.start:e.end]!r} at position {e.start} is not representable in {self.encoding}"
            ) from e
        return self.encode_bytes(data)

    def decode(self, blocks: Sequence[int], original_length: int) -> str:
        """
        Reassemble blocks into text, discarding padding.

        Args:
            blocks: Blocks produced by encode (or recovered by decryption)
            original_length: The encoded byte length returned by encode

        Returns:
            The message text
        """
        data = self.decode_bytes(blocks, original_length)
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise UnencodableInputError(
                f"Bytes at position {e.start} are not valid {self.encoding}"
            ) from e
