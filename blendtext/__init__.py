"""
Extract embedded text datablocks from Blender .blend files and rate their risk
"""

import os, io, typing
from .blendtext import *
from .report import BlendTextReport, AnalyzedText
from .blockreader import read_header, read_blocks
from .textassembler import TEXT_LOOKAHEAD, assemble_text_resources
from .riskanalyzer import analyze_script
from . import utils

__version__ = "0.1"
__all__ = [ "analyze", "read", "analyze_script" ]

class ExtractOptions:
    def __init__(self, lookahead: int = TEXT_LOOKAHEAD, decompress: bool = True):
        if lookahead < 1:
            raise ValueError(f"lookahead must be positive, got {lookahead}")
        self.lookahead = lookahead
        self.decompress = decompress

    def __repr__(self):
        return f"ExtractOptions(lookahead={self.lookahead}, decompress={self.decompress})"

#region: analyze

def analyze(data: bytes | bytearray | memoryview, options: ExtractOptions = ExtractOptions()) -> BlendTextReport:
    """
    Extract and analyze the text datablocks of an in-memory .blend file.

    Raises:
        FormatError: The buffer is not a blend file.
        CompressionError: The buffer is gzip/zstd compressed but corrupt.
    """
    data = bytes(data)
    if options.decompress:
        data = utils.decompress(data)

    header = read_header(data)
    blocks = read_blocks(data, header)
    resources = assemble_text_resources(blocks, options.lookahead)

    return BlendTextReport(
        header,
        total_blocks=len(blocks),
        texts=(AnalyzedText(resource, analyze_script(resource.content)) for resource in resources),
    )

#endregion

#region: read

@typing.overload
def read(binary_stream: typing.BinaryIO, options: ExtractOptions = ...) -> BlendTextReport:
    """Read a .blend file from a binary stream."""

@typing.overload
def read(path: str | os.PathLike, options: ExtractOptions = ...) -> BlendTextReport:
    """
    Read a .blend file from a path.

    Raises:
        FormatError: The file is not a blend file.
    """

def read(path_or_stream: str | os.PathLike | typing.BinaryIO, options: ExtractOptions = ExtractOptions()) -> BlendTextReport:
    match path_or_stream:
        case io.TextIOBase():
            raise TypeError("Cannot read a blend file from a text stream. If this is a file, please open it in binary mode ('rb').")
        case io.IOBase():
            return analyze(path_or_stream.read(), options)
        case str() | os.PathLike():
            with open(path_or_stream, "rb") as fp:
                return analyze(fp.read(), options)
        case _:
            raise TypeError("Argument path_or_stream must be a path or binary stream")

#endregion
