"""glyphpack - Compile outline fonts into packed bitmap-glyph resources.

glyphpack is a build-time font asset compiler. Given an outline font, a pixel
size and a character selection, it drives an outline-to-bitmap rasterizer
(otf2bdf) and a bitmap-to-binary packer (bdfconv), then binds the packed bytes
to a named artifact that a u8g2-based renderer can embed.

Example:
    $ glyphpack compile fonts/Inter.ttf --name Body --size 12 --set numbers

This prints a Rust definition of ``Body`` implementing ``u8g2_fonts::Font``
with only the glyphs for '0'-'9'.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
