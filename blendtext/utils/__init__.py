"""
Utility functions for blendtext.
"""

from .buffer import MemoryBuffer
from .compression import (
    GZIP_MAGIC, ZSTD_MAGIC, is_gzip, is_zstd,
    zstd_decompress_stream, gzip_decompress, decompress
)

__all__ = [
    'MemoryBuffer',
    'GZIP_MAGIC', 'ZSTD_MAGIC', 'is_gzip', 'is_zstd',
    'zstd_decompress_stream', 'gzip_decompress', 'decompress'
]
