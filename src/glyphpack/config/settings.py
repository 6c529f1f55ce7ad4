"""Configuration settings for glyphpack."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

PROJECT_ROOT_ENV = "GLYPHPACK_PROJECT_ROOT"
TOOL_DIR_ENV = "GLYPHPACK_TOOL_DIR"

# tools/bdfconv next to the source tree
DEFAULT_TOOL_DIR = Path(__file__).resolve().parents[3] / "tools" / "bdfconv"


class ToolchainConfig(BaseModel):
    """Configuration for the external conversion tools.

    The rasterizer is looked up on PATH; the packer lives in a fixed tool
    directory that does not depend on the project being compiled.
    """

    rasterizer: str = Field(
        default="otf2bdf",
        description="Outline-to-bitmap rasterizer executable",
    )
    tool_dir: Path = Field(
        default=DEFAULT_TOOL_DIR,
        description="Directory holding the packer sources and executable",
    )
    packer_name: str = Field(
        default="bdfconv",
        description="Packer executable name inside tool_dir",
    )
    format_revision: int = Field(
        default=1,
        ge=0,
        description="Packed output format revision passed to the packer",
    )
    intermediate_suffix: str = Field(
        default=".bdf",
        pattern=r"^\.[A-Za-z0-9]+$",
        description="Extension of the transient bitmap file",
    )
    rasterizer_default_range: tuple[int, int] = Field(
        default=(48, 58),
        description="Rasterizer code point range when no selection is given",
    )
    packer_default_range: tuple[int, int] = Field(
        default=(32, 127),
        description="Packer code point range when no selection is given",
    )
    rasterizer_range_separator: str = Field(
        default="_",
        min_length=1,
        description="Separator between range bounds in rasterizer arguments",
    )
    packer_range_separator: str = Field(
        default="-",
        min_length=1,
        description="Separator between range bounds in packer arguments",
    )

    @field_validator("rasterizer_default_range", "packer_default_range")
    @classmethod
    def _check_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        low, high = value
        if low < 0 or high < low:
            raise ValueError(f"invalid code point range {low}-{high}")
        return value

    @property
    def packer_path(self) -> Path:
        """Full path of the packer executable."""
        return self.tool_dir / self.packer_name


class PathConfig(BaseModel):
    """Where relative font paths are resolved from."""

    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Absolute project root for font source paths",
    )

    @field_validator("project_root")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value.resolve()


class CompileConfig(BaseModel):
    """Configuration for compile runs."""

    check_coverage: bool = Field(
        default=True,
        description="Warn about requested code points missing from the font",
    )
    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker threads for batch compiles (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphpackSettings(BaseModel):
    """Main application settings."""

    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    paths: PathConfig = Field(default_factory=PathConfig)
    compile: CompileConfig = Field(default_factory=CompileConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphpackSettings:
    """Get default application settings."""
    return GlyphpackSettings()


def settings_from_environment(
    environ: dict[str, str] | None = None,
) -> GlyphpackSettings:
    """Build settings from the build environment.

    Reads GLYPHPACK_PROJECT_ROOT (default: current directory) and
    GLYPHPACK_TOOL_DIR (default: tools/bdfconv in the source tree).

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings with paths taken from the environment
    """
    env = os.environ if environ is None else environ

    paths = PathConfig()
    if env.get(PROJECT_ROOT_ENV):
        paths = PathConfig(project_root=Path(env[PROJECT_ROOT_ENV]))

    toolchain = ToolchainConfig()
    if env.get(TOOL_DIR_ENV):
        toolchain = ToolchainConfig(tool_dir=Path(env[TOOL_DIR_ENV]))

    return GlyphpackSettings(toolchain=toolchain, paths=paths)
