"""Core compile pipeline for glyphpack.

Key classes:
- ConversionService: Runs an external tool and captures its output
- Rasterizer: otf2bdf stage (outline to BDF bitmap)
- FontPacker: bdfconv stage (BDF to packed binary)
- FontCompiler: Sequences the stages for one or many requests

Key functions:
- build_toolchain / ensure_packer: Build the packer from source
"""

from glyphpack.core.compiler import BatchResult, FontCompiler
from glyphpack.core.packer import FontPacker
from glyphpack.core.rasterizer import Rasterizer
from glyphpack.core.service import ConversionService
from glyphpack.core.toolchain import build_toolchain, ensure_packer

__all__ = [
    "BatchResult",
    "ConversionService",
    "FontCompiler",
    "FontPacker",
    "Rasterizer",
    "build_toolchain",
    "ensure_packer",
]
