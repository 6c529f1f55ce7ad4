"""Font manifest loading.

A manifest lists every font a build compiles:

    fonts:
      - path: fonts/Inter-Regular.ttf
        name: Body
        size: 12
        sets: [numbers, uppercase]
        chars: "°%"
      - path: fonts/Inter-Bold.ttf
        name: Inter
        weight: Bold
        size: 16

Entries without ``chars`` and ``sets`` use the tools' default ranges.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from glyphpack.domain import CharacterSelection, FontRequest, derive_artifact_name
from glyphpack.exceptions import ManifestError, SelectionError


class FontEntry(BaseModel):
    """One font in a manifest."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(min_length=1, description="Font path relative to the project root")
    name: str = Field(
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Artifact name",
    )
    size: int = Field(gt=0, description="Pixel size")
    weight: str | None = Field(
        default=None,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Weight appended to the artifact name together with the size",
    )
    chars: str | list[str] | None = Field(default=None, description="Literal characters")
    sets: list[str] | None = Field(default=None, description="Named character sets")

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if "\x00" in value:
            raise ValueError("font path contains a NUL character")
        return value

    @property
    def artifact_name(self) -> str:
        if self.weight is None:
            return self.name
        return derive_artifact_name(self.name, self.size, self.weight)

    def to_request(self) -> FontRequest:
        """Convert the entry to a compile request.

        Raises:
            UnknownCharacterSetError: If a set name is not recognized
        """
        selection = None
        if self.chars is not None or self.sets is not None:
            chars = [self.chars] if isinstance(self.chars, str) else self.chars or []
            selection = CharacterSelection.from_parts(chars=chars, sets=self.sets or [])

        return FontRequest(
            source_path=self.path,
            artifact_name=self.artifact_name,
            pixel_size=self.size,
            selection=selection,
        )


class FontManifest(BaseModel):
    """A build's list of fonts."""

    model_config = ConfigDict(extra="forbid")

    fonts: list[FontEntry] = Field(min_length=1)

    def to_requests(self) -> list[FontRequest]:
        return [entry.to_request() for entry in self.fonts]


def load_manifest(path: Path) -> FontManifest:
    """Load and validate a YAML font manifest.

    Raises:
        ManifestError: If the file cannot be read, parsed or validated
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(str(path), str(e)) from e
    except yaml.YAMLError as e:
        raise ManifestError(str(path), f"invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(str(path), "expected a mapping with a 'fonts' list")

    try:
        manifest = FontManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(str(path), str(e)) from e

    names = [entry.artifact_name for entry in manifest.fonts]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ManifestError(str(path), f"duplicate artifact names: {', '.join(duplicates)}")

    return manifest


def load_requests(path: Path) -> list[FontRequest]:
    """Load a manifest and convert every entry to a compile request.

    Raises:
        ManifestError: If the manifest is invalid or names an unknown set
    """
    manifest = load_manifest(path)
    try:
        return manifest.to_requests()
    except SelectionError as e:
        raise ManifestError(str(path), str(e)) from e
