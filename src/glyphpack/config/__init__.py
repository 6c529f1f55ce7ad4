"""Configuration management for glyphpack.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, the build environment,
or defaults.

Key classes:
- ToolchainConfig: Conversion tool locations and argument conventions
- PathConfig: Project root for relative font paths
- CompileConfig: Compile run settings
- LoggingConfig: Logging settings
- GlyphpackSettings: Main application settings
"""

from glyphpack.config.settings import (
    DEFAULT_TOOL_DIR,
    PROJECT_ROOT_ENV,
    TOOL_DIR_ENV,
    CompileConfig,
    GlyphpackSettings,
    LoggingConfig,
    PathConfig,
    ToolchainConfig,
    get_default_settings,
    settings_from_environment,
)

__all__ = [
    "DEFAULT_TOOL_DIR",
    "PROJECT_ROOT_ENV",
    "TOOL_DIR_ENV",
    "CompileConfig",
    "GlyphpackSettings",
    "LoggingConfig",
    "PathConfig",
    "ToolchainConfig",
    "get_default_settings",
    "settings_from_environment",
]
