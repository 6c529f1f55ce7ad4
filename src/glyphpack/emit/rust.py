"""Rust bindings for packed fonts.

Each artifact becomes a unit struct implementing ``u8g2_fonts::Font``, whose
only item is the packed data as a byte-string constant:

    pub struct Body12 {}

    impl u8g2_fonts::Font for Body12 {
        const DATA: &'static [u8] = b"...";
    }
"""

import threading

from glyphpack import __version__
from glyphpack.domain import PackedFontArtifact

FONT_TRAIT = "u8g2_fonts::Font"

_SIMPLE_ESCAPES = {
    0x00: "\\0",
    0x09: "\\t",
    0x0A: "\\n",
    0x0D: "\\r",
    0x22: '\\"',
    0x5C: "\\\\",
}


def rust_byte_string(data: bytes) -> str:
    """Render bytes as a Rust byte-string literal."""
    parts = ['b"']
    for byte in data:
        if byte in _SIMPLE_ESCAPES:
            parts.append(_SIMPLE_ESCAPES[byte])
        elif 0x20 <= byte < 0x7F:
            parts.append(chr(byte))
        else:
            parts.append(f"\\x{byte:02x}")
    parts.append('"')
    return "".join(parts)


class FontEmitter:
    """Receives every successfully packed artifact."""

    def emit(self, artifact: PackedFontArtifact) -> None:
        raise NotImplementedError


class RustFontEmitter(FontEmitter):
    """Collects artifacts and renders them as one Rust module.

    Artifacts are rendered sorted by name, so batch builds produce the same
    source regardless of completion order.
    """

    def __init__(self, font_trait: str = FONT_TRAIT) -> None:
        self.font_trait = font_trait
        self._artifacts: dict[str, PackedFontArtifact] = {}
        self._lock = threading.Lock()

    def emit(self, artifact: PackedFontArtifact) -> None:
        """Add an artifact; a later artifact with the same name replaces it."""
        with self._lock:
            self._artifacts[artifact.name] = artifact

    @property
    def artifacts(self) -> list[PackedFontArtifact]:
        with self._lock:
            return [self._artifacts[name] for name in sorted(self._artifacts)]

    def definition(self, artifact: PackedFontArtifact) -> str:
        """Render the struct and trait impl for one artifact."""
        return (
            f"pub struct {artifact.name} {{}}\n"
            "\n"
            f"impl {self.font_trait} for {artifact.name} {{\n"
            f"    const DATA: &'static [u8] = {rust_byte_string(artifact.data)};\n"
            "}\n"
        )

    def render(self) -> str:
        """Render every collected artifact."""
        header = f"// Generated by glyphpack {__version__}. Do not edit.\n"
        return "\n".join([header, *(self.definition(a) for a in self.artifacts)])
