"""Filesystem layer for glyphpack.

Key responsibilities:
- Resolve font source paths against the project root
- Manage the transient bitmap file between the two conversion tools
- Read font character maps with fonttools for coverage checks
- Load YAML font manifests

Key members:
- resolve_font_path: Existence-checked absolute font path
- intermediate_file / with_intermediate: Scoped intermediate file
- FontReader / missing_code_points: Character map lookup
- load_manifest / load_requests: Manifest loading
"""

from glyphpack.io.coverage import FontReader, missing_code_points
from glyphpack.io.intermediate import intermediate_file, intermediate_path_for, with_intermediate
from glyphpack.io.manifest import FontEntry, FontManifest, load_manifest, load_requests
from glyphpack.io.paths import resolve_font_path

__all__ = [
    "FontEntry",
    "FontManifest",
    "FontReader",
    "intermediate_file",
    "intermediate_path_for",
    "load_manifest",
    "load_requests",
    "missing_code_points",
    "resolve_font_path",
    "with_intermediate",
]
