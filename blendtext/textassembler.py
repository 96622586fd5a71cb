"""
Rebuilds embedded text datablocks from the flat block list.

A text datablock is stored as a 'TX' (or 'TEXT') marker block carrying the ID
name, followed by 'DATA' blocks holding the line buffers. Nothing in the block
headers links the two, so payloads are associated by proximity: every 'DATA'
block with sdna index 0 within ``TEXT_LOOKAHEAD`` blocks after a marker, up to
the next marker, belongs to that marker.
"""

import logging
import re
from typing import Sequence

from .blendtext import Block, TextResource

logger = logging.getLogger(__name__)

TEXT_MARKER_CODES = ("TX", "TEXT")
TEXT_PAYLOAD_CODE = "DATA"
TEXT_PAYLOAD_SDNA_INDEX = 0
TEXT_LOOKAHEAD = 100

NAME_OFFSETS = (2, 4, 8, 16)
NAME_PREFIX = "TX"

_RE_NON_PRINTABLE = re.compile(r"[^\x20-\x7E]")
_RE_NAME_CHARS = re.compile(r"[A-Za-z0-9 _-]+")
# Tab, LF and CR are kept so line structure survives.
_RE_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")


def is_text_marker(block: Block) -> bool:
    return block.code in TEXT_MARKER_CODES

def is_text_payload(block: Block) -> bool:
    return block.code == TEXT_PAYLOAD_CODE and block.sdna_index == TEXT_PAYLOAD_SDNA_INDEX


def _printable(raw: bytes) -> str:
    return _RE_NON_PRINTABLE.sub("", raw.decode("utf-8", errors="replace")).strip()

def recover_name(body: bytes) -> str | None:
    """
    Guess the text datablock name from a marker block body.

    First tries a NUL terminated string at each of ``NAME_OFFSETS``, then
    falls back to the first NUL separated segment that looks like an
    identifier. Returns None if nothing usable is found.
    """
    name = None
    for offset in NAME_OFFSETS:
        if offset >= len(body):
            continue
        end = body.find(b"\0", offset)
        if end > offset:
            candidate = _printable(body[offset:end])
            if candidate:
                name = candidate
                break

    if name is None:
        for part in body.split(b"\0"):
            candidate = _printable(part)
            if len(candidate) > 2 and _RE_NAME_CHARS.fullmatch(candidate):
                name = candidate
                break

    if name is not None and name.startswith(NAME_PREFIX):
        name = name[len(NAME_PREFIX):].strip() or None
    return name


def clean_text(text: str) -> str:
    return _RE_CONTROL_CHARS.sub("", text)

def decode_payload(body: bytes) -> str:
    """Decode a payload body leniently; a leading BOM is dropped and undecodable bytes become U+FFFD."""
    if len(body) <= 4:
        return body.decode("utf-8-sig", errors="replace").replace("\0", "")
    return clean_text(body.decode("utf-8-sig", errors="replace"))


def find_text_content(blocks: Sequence[Block], marker_index: int, lookahead: int = TEXT_LOOKAHEAD) -> str | None:
    """Join the payloads that follow the marker at ``marker_index``, or None if there are none."""
    found_lines: list[str] = []
    for block in blocks[marker_index + 1:marker_index + 1 + lookahead]:
        if is_text_marker(block):
            break
        if is_text_payload(block):
            found_lines.append(decode_payload(block.body))
    return "\n".join(found_lines) if found_lines else None


def assemble_text_resources(blocks: Sequence[Block], lookahead: int = TEXT_LOOKAHEAD) -> list[TextResource]:
    resources: list[TextResource] = []
    for index, block in enumerate(blocks):
        if not is_text_marker(block):
            continue
        logger.debug("Found text block at index %d, code: %s", index, block.code)

        name = recover_name(block.body)
        logger.debug("Extracted text name: %r", name)

        content = find_text_content(blocks, index, lookahead)
        if content is None:
            logger.debug("No payload blocks after marker %d, skipping", index)
            continue

        resources.append(TextResource(
            name=name or f"Text Block {len(resources) + 1}",
            content=content,
            origin_index=index,
        ))
        logger.debug("Added text block %r, %d characters", resources[-1].name, len(content))

    logger.debug("Total text blocks extracted: %d", len(resources))
    return resources
