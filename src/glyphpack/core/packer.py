"""Bitmap-to-packed-binary stage."""

from pathlib import Path

from glyphpack.config import ToolchainConfig
from glyphpack.core.service import ConversionService
from glyphpack.domain import CodePointSelector


class FontPacker:
    """Drives bdfconv to pack a BDF file into the u8g2 binary font format.

    Invocation: ``bdfconv -f <revision> -m <selector> -binary <bdf>``.
    Explicit code points are comma-separated; a range is ``low-high``. The
    packed bytes are passed through untouched.
    """

    STAGE = "pack"

    def __init__(
        self,
        service: ConversionService,
        format_revision: int = 1,
        list_separator: str = ",",
        range_separator: str = "-",
    ) -> None:
        self.service = service
        self.format_revision = format_revision
        self.list_separator = list_separator
        self.range_separator = range_separator

    @classmethod
    def from_config(cls, config: ToolchainConfig) -> "FontPacker":
        return cls(
            ConversionService(cls.STAGE, config.packer_path),
            format_revision=config.format_revision,
            range_separator=config.packer_range_separator,
        )

    def build_args(self, bitmap_path: Path, selector: CodePointSelector) -> list[str]:
        """Build the packer argument list."""
        return [
            "-f",
            str(self.format_revision),
            "-m",
            selector.render(
                list_separator=self.list_separator,
                range_separator=self.range_separator,
            ),
            "-binary",
            str(bitmap_path),
        ]

    def pack(self, bitmap_path: Path, selector: CodePointSelector) -> bytes:
        """Pack the selected glyphs of a BDF file.

        Args:
            bitmap_path: Path of the BDF file to read
            selector: Code points to keep

        Returns:
            Packed font bytes written by the tool to stdout

        Raises:
            ConversionServiceUnavailableError: If the tool cannot be started
            ConversionServiceFailedError: If the tool reports failure
        """
        return self.service.run(self.build_args(bitmap_path, selector))
