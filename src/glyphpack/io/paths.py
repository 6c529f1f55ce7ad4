"""Font source path resolution."""

import os
from pathlib import Path

from glyphpack.exceptions import FontNotFoundError, FontUnreadableError


def resolve_font_path(root: Path, relative: str | Path) -> Path:
    """Resolve a font path against the project root and check it exists.

    Args:
        root: Absolute project root
        relative: Font path relative to the root (absolute paths are kept)

    Returns:
        Absolute, normalized path of the font file

    Raises:
        FontNotFoundError: If nothing exists at the path, it is not a file, or
            the path cannot name a file (embedded NUL)
        FontUnreadableError: If the file exists but cannot be read
    """
    if "\x00" in str(relative):
        raise FontNotFoundError(str(relative).replace("\x00", "\\x00"), str(root))

    font_path = (Path(root) / relative).resolve()

    if not font_path.is_file():
        raise FontNotFoundError(str(font_path), str(root))

    if not os.access(font_path, os.R_OK):
        raise FontUnreadableError(str(font_path), str(root))

    return font_path
