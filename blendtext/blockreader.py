"""
Reader for the .blend file header and its length-prefixed block stream.

Layout of a block header, in the byte order declared by the file header::

    char code[4]        # 'TX\\0\\0', 'DATA', 'ENDB', ...
    int32 length        # size of the body that follows the header
    void *old_address   # pointer_width bytes, ignored
    int32 sdna_index    # struct descriptor in the embedded schema, never resolved
    int32 count         # number of structs in the body
"""

import logging

from .blendtext import (
    BLEND_MAGIC, FILE_HEADER_SIZE, POINTER_WIDE_MARKER, LITTLE_ENDIAN_MARKER,
    Block, FileHeader, FormatError,
)
from .utils import MemoryBuffer

logger = logging.getLogger(__name__)


def read_header(data: bytes) -> FileHeader:
    """
    Validate the magic and derive pointer width and byte order.

    Raises:
        FormatError: Magic is not 'BLENDER' or the header is truncated.
    """
    magic = bytes(data[:len(BLEND_MAGIC)])
    if magic != BLEND_MAGIC:
        raise FormatError("Invalid blend magic: " + repr(magic))
    if len(data) < FILE_HEADER_SIZE:
        raise FormatError(f"Truncated blend header: {len(data)} of {FILE_HEADER_SIZE} bytes")

    header = FileHeader(
        pointer_width=8 if data[7] == POINTER_WIDE_MARKER else 4,
        little_endian=data[8] == LITTLE_ENDIAN_MARKER,
        version=bytes(data[9:12]).decode("ascii", errors="replace"),
    )
    logger.debug("Blender version %s, %s, %s endian", header.version, header.architecture,
                 "little" if header.little_endian else "big")
    return header


def read_block(buffer: MemoryBuffer, header: FileHeader) -> Block | None:
    """Read the block at the buffer's cursor, or None at the end of the stream."""
    offset = buffer.tell()
    if buffer.remaining() < header.header_size:
        logger.debug("Block stream ended at %d: %d trailing bytes", offset, buffer.remaining())
        return None

    code = buffer.read_ascii_string(4)
    length = buffer.read_int32()
    buffer.skip(header.pointer_width)
    sdna_index, count = buffer.read_fmt("2i")

    body_offset = offset + header.header_size
    if length < 0 or body_offset + length > buffer.size():
        logger.debug("Block stream ended at %d: invalid length %d for %r", offset, length, code)
        buffer.seek(offset)
        return None

    return Block(
        code=code.rstrip("\0"),
        length=length,
        sdna_index=sdna_index,
        count=count,
        body=buffer.read(length),
        file_offset=offset,
    )


def read_blocks(data: bytes, header: FileHeader) -> list[Block]:
    """
    Walk the block stream that follows the file header.

    A truncated or malformed tail ends the walk; the blocks read so far are
    the result. Each block's position depends on the previous block's length,
    so this is a single forward pass.
    """
    buffer = MemoryBuffer(data, header.byte_order)
    buffer.seek(min(FILE_HEADER_SIZE, buffer.size()))
    blocks: list[Block] = []
    while (block := read_block(buffer, header)) is not None:
        blocks.append(block)
    logger.debug("Total blocks parsed: %d", len(blocks))
    return blocks
