"""Domain models for glyphpack.

This module contains the value types that flow through the compile
pipeline. All models are immutable (frozen dataclasses) and independent of
the external conversion tools.

Key classes:
- CharacterSelection: Literal strings and named sets requested by the caller
- CodePointSet: Canonical ascending set of code points
- RangeSelector / ExplicitSelector: Code point filters passed to the tools
- FontRequest: One font to compile
- PackedFontArtifact: Packed bytes bound to an artifact name
"""

from glyphpack.domain.charset import (
    CharacterSelection,
    CodePointSet,
    NamedSet,
    resolve_selection,
)
from glyphpack.domain.request import (
    FontRequest,
    PackedFontArtifact,
    PipelineStage,
    derive_artifact_name,
)
from glyphpack.domain.selector import (
    CodePointSelector,
    ExplicitSelector,
    RangeSelector,
    selector_for,
)

__all__: list[str] = [
    # Enums
    "NamedSet",
    "PipelineStage",
    # Selection
    "CharacterSelection",
    "CodePointSet",
    "resolve_selection",
    # Selectors
    "CodePointSelector",
    "ExplicitSelector",
    "RangeSelector",
    "selector_for",
    # Requests
    "FontRequest",
    "PackedFontArtifact",
    "derive_artifact_name",
]
