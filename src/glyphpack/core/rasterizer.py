"""Outline-to-bitmap rasterization stage."""

from pathlib import Path

from glyphpack.config import ToolchainConfig
from glyphpack.core.service import ConversionService
from glyphpack.domain import CodePointSelector


class Rasterizer:
    """Drives otf2bdf to render an outline font into BDF bitmaps.

    Invocation: ``otf2bdf -p <size> -l <selector> <font>``. Explicit code
    points are space-separated; a range uses the tool's ``low_high`` form.
    """

    STAGE = "rasterize"

    def __init__(
        self,
        service: ConversionService,
        list_separator: str = " ",
        range_separator: str = "_",
    ) -> None:
        self.service = service
        self.list_separator = list_separator
        self.range_separator = range_separator

    @classmethod
    def from_config(cls, config: ToolchainConfig) -> "Rasterizer":
        return cls(
            ConversionService(cls.STAGE, config.rasterizer),
            range_separator=config.rasterizer_range_separator,
        )

    def build_args(self, font_path: Path, pixel_size: int, selector: CodePointSelector) -> list[str]:
        """Build the rasterizer argument list."""
        return [
            "-p",
            str(pixel_size),
            "-l",
            selector.render(
                list_separator=self.list_separator,
                range_separator=self.range_separator,
            ),
            str(font_path),
        ]

    def rasterize(self, font_path: Path, pixel_size: int, selector: CodePointSelector) -> bytes:
        """Rasterize the selected code points of a font.

        Args:
            font_path: Absolute path of the outline font
            pixel_size: Target size in pixels
            selector: Code points to render

        Returns:
            BDF bytes written by the tool to stdout

        Raises:
            ConversionServiceUnavailableError: If the tool cannot be started
            ConversionServiceFailedError: If the tool reports failure
        """
        if pixel_size <= 0:
            raise ValueError(f"Pixel size must be positive, got {pixel_size}")
        return self.service.run(self.build_args(font_path, pixel_size, selector))
