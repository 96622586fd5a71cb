import dataclasses
import enum

class BlendDecodeError(ValueError): pass
class FormatError(BlendDecodeError): pass
class CompressionError(BlendDecodeError): pass

BLEND_MAGIC = b"BLENDER"
FILE_HEADER_SIZE = 12

POINTER_WIDE_MARKER = ord("-")
LITTLE_ENDIAN_MARKER = ord("v")

@dataclasses.dataclass(frozen=True, slots=True)
class FileHeader:
    """Parse context derived from the 12 byte file header."""
    pointer_width: int = 8
    little_endian: bool = True
    version: str = ""

    def __post_init__(self):
        if self.pointer_width not in (4, 8):
            raise ValueError(f"{self!r}: pointer width must be 4 or 8")

    @property
    def header_size(self) -> int:
        """Size of a block header: code, length, old address, sdna index, count."""
        return 16 + self.pointer_width

    @property
    def byte_order(self) -> str:
        return "<" if self.little_endian else ">"

    @property
    def architecture(self) -> str:
        return f"{self.pointer_width * 8}-bit"

@dataclasses.dataclass(frozen=True, slots=True)
class Block:
    code: str
    length: int
    sdna_index: int
    count: int
    body: bytes = dataclasses.field(repr=False)
    file_offset: int

    def body_offset(self, header: FileHeader) -> int:
        return self.file_offset + header.header_size

@dataclasses.dataclass(frozen=True, slots=True)
class TextResource:
    name: str
    content: str
    origin_index: int
    """Index of the marker block in the block sequence."""

class RiskLevel(enum.IntEnum):
    safe = 0
    low = 1
    medium = 2
    high = 3
    def __str__(self):
        return self.name

@dataclasses.dataclass(frozen=True, slots=True)
class RiskAssessment:
    is_startup: bool = False
    startup_reasons: tuple[str, ...] = ()
    risk_level: RiskLevel = RiskLevel.safe
    warnings: tuple[str, ...] = ()

    def as_dict(self) -> dict:
        return {
            "isStartup": self.is_startup,
            "startupReasons": list(self.startup_reasons),
            "riskLevel": str(self.risk_level),
            "warnings": list(self.warnings),
        }

SAFE_ASSESSMENT = RiskAssessment()
