"""Compile requests, results and pipeline stages."""

from dataclasses import dataclass
from enum import Enum

from glyphpack.domain.charset import CharacterSelection


class PipelineStage(str, Enum):
    """Stages a single compile passes through."""

    START = "start"
    PATH_RESOLVED = "path_resolved"
    CHARS_RESOLVED = "chars_resolved"
    RASTERIZED = "rasterized"
    PACKED = "packed"
    EMITTED = "emitted"
    FAILED = "failed"


@dataclass(frozen=True)
class FontRequest:
    """One font to compile.

    Attributes:
        source_path: Font file path, relative to the project root
        artifact_name: Identifier the packed bytes are bound to
        pixel_size: Rasterization size in pixels
        selection: Characters to include (None selects the tools' default ranges)
    """

    source_path: str
    artifact_name: str
    pixel_size: int
    selection: CharacterSelection | None = None

    def __post_init__(self) -> None:
        if self.pixel_size <= 0:
            raise ValueError(f"Pixel size must be positive, got {self.pixel_size}")
        if not self.artifact_name.isidentifier():
            raise ValueError(f"Artifact name is not an identifier: {self.artifact_name!r}")


@dataclass(frozen=True)
class PackedFontArtifact:
    """Packed font bytes bound to their artifact name.

    Attributes:
        name: Artifact identifier
        data: Raw packed font bytes, opaque to glyphpack
    """

    name: str
    data: bytes

    @property
    def size(self) -> int:
        """Size of the packed data in bytes."""
        return len(self.data)


def derive_artifact_name(name: str, pixel_size: int, weight: str | None = None) -> str:
    """Build a weight- and size-qualified artifact name.

    Converts: ("Inter", 12, "Bold") -> "InterBold12"
              ("Inter", 12, None)   -> "Inter12"
    """
    return f"{name}{weight or ''}{pixel_size}"
