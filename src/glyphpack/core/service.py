"""Process boundary to the external conversion tools."""

import subprocess
from collections.abc import Sequence
from pathlib import Path

import structlog

from glyphpack.exceptions import ConversionServiceFailedError, ConversionServiceUnavailableError

logger = structlog.get_logger("glyphpack.service")


class ConversionService:
    """An external program run as a black box.

    Arguments go in, stdout comes back as bytes. Stderr is only kept for the
    error report. There is no timeout: a hung tool blocks the caller.

    Example:
        service = ConversionService("rasterize", "otf2bdf")
        bitmap = service.run(["-p", "12", "font.ttf"])
    """

    def __init__(self, stage: str, executable: str | Path) -> None:
        """Initialize the service.

        Args:
            stage: Pipeline stage name used in logs and errors
            executable: Program name (looked up on PATH) or path
        """
        self.stage = stage
        self.executable = str(executable)

    def run(self, args: Sequence[str]) -> bytes:
        """Run the tool and return its standard output.

        Args:
            args: Command-line arguments, without the executable

        Returns:
            Captured standard output

        Raises:
            ConversionServiceUnavailableError: If the executable cannot be started
            ConversionServiceFailedError: If the tool exits with a non-zero status
        """
        command = [self.executable, *args]
        logger.debug("Running conversion tool", stage=self.stage, command=command)

        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                check=False,
            )
        except OSError as e:
            raise ConversionServiceUnavailableError(
                self.stage, self.executable, e.strerror or str(e)
            ) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise ConversionServiceFailedError(self.stage, result.returncode, stderr)

        logger.debug(
            "Conversion tool finished",
            stage=self.stage,
            stdout_bytes=len(result.stdout),
        )
        return result.stdout

    def __repr__(self) -> str:
        return f"ConversionService(stage={self.stage!r}, executable={self.executable!r})"
