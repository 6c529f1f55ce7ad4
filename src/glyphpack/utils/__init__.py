"""Utility functions for glyphpack.

This module provides utility functions including:

- Logging setup and configuration
- Compile progress and statistics tracking
"""

from glyphpack.utils.logging import (
    CompileLogger,
    CompileStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "CompileLogger",
    "CompileStats",
    "configure_logging",
    "get_logger",
]
