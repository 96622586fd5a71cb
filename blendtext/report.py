import dataclasses
import typing
from collections.abc import Sequence

import blendtext as bt

@dataclasses.dataclass(frozen=True, slots=True)
class AnalyzedText:
    resource: bt.TextResource
    analysis: bt.RiskAssessment

    @property
    def name(self) -> str:
        return self.resource.name

    @property
    def content(self) -> str:
        return self.resource.content

    def as_dict(self) -> dict:
        return {
            "name": self.resource.name,
            "content": self.resource.content,
            "originIndex": self.resource.origin_index,
            "analysis": self.analysis.as_dict(),
        }

class BlendTextReport(Sequence):
    header: bt.FileHeader
    """Header of the container the texts were read from."""
    total_blocks: int
    """Number of blocks in the stream, including non-text blocks."""
    texts: tuple[AnalyzedText, ...]
    """Analyzed text resources, in marker block order."""

    def __init__(self,
            header: bt.FileHeader,
            total_blocks: int = 0,
            texts: typing.Iterable[AnalyzedText] = (),
            ):
        self.header = header
        self.total_blocks = total_blocks
        self.texts = tuple(texts)

    @property
    def version(self) -> str:
        return self.header.version

    @property
    def pointer_width(self) -> int:
        return self.header.pointer_width

    @property
    def architecture(self) -> str:
        return self.header.architecture

    def __repr__(self) -> str:
        names = repr([text.name for text in self.texts])
        if len(names) > 100:
            names = names[:100] + '...'
        return f"BlendTextReport(version={self.version!r}, blocks={self.total_blocks}, texts={names})"

    def __eq__(self, other):
        if not isinstance(other, BlendTextReport):
            return NotImplemented
        return (self.header, self.total_blocks, self.texts) == (other.header, other.total_blocks, other.texts)

    __hash__ = None

    ## Sequence required methods

    def __getitem__(self, index):
        return self.texts[index]

    def __len__(self):
        return len(self.texts)

    def as_dict(self) -> dict:
        return {
            "formatVersion": self.version,
            "pointerWidth": self.pointer_width,
            "totalBlockCount": self.total_blocks,
            "textResources": [text.as_dict() for text in self.texts],
        }
