"""
Decompression of gzip and Zstandard wrapped .blend files.
"""

import gzip
import logging
import zlib

import zstandard as zstd

from ..blendtext import CompressionError

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"

def is_gzip(data: bytes) -> bool:
    return data[:2] == GZIP_MAGIC

def is_zstd(data: bytes) -> bool:
    return data[:4] == ZSTD_MAGIC

def zstd_decompress_stream(data: bytes) -> bytes:
    """ZSTD decompression using zstandard library.

    Blender writes multiple seekable frames that don't always record the
    content size, so frames are streamed one at a time and each one must
    reach its end.
    """
    dctx = zstd.ZstdDecompressor()
    chunks = []
    remaining = data
    try:
        while remaining:
            dobj = dctx.decompressobj()
            chunks.append(dobj.decompress(remaining))
            if not dobj.eof:
                raise CompressionError(f"Truncated Zstandard stream: incomplete frame in {len(data)} bytes")
            remaining = dobj.unused_data
    except zstd.ZstdError as error:
        raise CompressionError(f"Invalid Zstandard stream: {error}") from error
    return b"".join(chunks)

def gzip_decompress(data: bytes) -> bytes:
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as error:
        raise CompressionError(f"Invalid gzip stream: {error}") from error

def decompress(data: bytes) -> bytes:
    """Unwrap a compressed container, or return ``data`` unchanged.

    Raises:
        CompressionError: The compression magic matched but the stream is corrupt.
    """
    if is_zstd(data):
        logger.debug("Zstandard compressed container, %d bytes", len(data))
        return zstd_decompress_stream(data)
    if is_gzip(data):
        logger.debug("gzip compressed container, %d bytes", len(data))
        return gzip_decompress(data)
    return data
