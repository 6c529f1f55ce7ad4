"""Emitters binding packed font bytes into the host build.

Key classes:
- FontEmitter: Interface receiving packed artifacts
- RustFontEmitter: Renders ``u8g2_fonts::Font`` implementations
"""

from glyphpack.emit.rust import FONT_TRAIT, FontEmitter, RustFontEmitter, rust_byte_string

__all__ = [
    "FONT_TRAIT",
    "FontEmitter",
    "RustFontEmitter",
    "rust_byte_string",
]
