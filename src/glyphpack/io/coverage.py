"""Glyph coverage lookup for outline fonts.

Reads the character map of a TTF/OTF source with fonttools so that requested
code points the font cannot provide are reported before rasterizing.
"""

from collections.abc import Iterable
from pathlib import Path

from fontTools.ttLib import TTFont


class FontReader:
    """Loads a TTF/OTF font and exposes its character map.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            print(reader.missing([48, 49, 0x2603]))
    """

    def __init__(self, font_path: Path) -> None:
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            Exception: If font file is invalid or cannot be loaded
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        self._font = TTFont(str(self._font_path), lazy=True)

    @property
    def code_points(self) -> frozenset[int]:
        """Code points mapped by the font's best Unicode cmap."""
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        cmap = self._font.getBestCmap() or {}
        return frozenset(cmap)

    def missing(self, code_points: Iterable[int]) -> list[int]:
        """Return the requested code points the font does not map, in order."""
        mapped = self.code_points
        return [value for value in code_points if value not in mapped]

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        self.close()


def missing_code_points(font_path: Path, code_points: Iterable[int]) -> list[int]:
    """Return the code points from ``code_points`` that ``font_path`` lacks.

    Raises:
        Exception: If the font cannot be parsed by fonttools
    """
    with FontReader(font_path) as reader:
        return reader.missing(code_points)
