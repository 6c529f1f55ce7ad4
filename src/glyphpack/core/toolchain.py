"""Building the packer from source."""

import subprocess
from pathlib import Path

import structlog

from glyphpack.config import ToolchainConfig
from glyphpack.exceptions import ToolchainBuildError

logger = structlog.get_logger("glyphpack.toolchain")


def build_toolchain(tool_dir: Path, make: str = "make") -> None:
    """Run ``make`` in the tool directory.

    Raises:
        ToolchainBuildError: If make cannot be started or fails
    """
    if not tool_dir.is_dir():
        raise ToolchainBuildError(str(tool_dir), "tool directory does not exist")

    logger.info("Building tools", tool_dir=str(tool_dir))
    try:
        result = subprocess.run(
            [make],
            cwd=tool_dir,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )
    except OSError as e:
        raise ToolchainBuildError(str(tool_dir), f"could not run {make}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise ToolchainBuildError(
            str(tool_dir), f"{make} exited with code {result.returncode}: {stderr}"
        )


def ensure_packer(config: ToolchainConfig, make: str = "make") -> Path:
    """Build the packer if its executable is missing.

    Returns:
        Path of the packer executable

    Raises:
        ToolchainBuildError: If the build fails or produces no executable
    """
    packer = config.packer_path
    if packer.is_file():
        return packer

    build_toolchain(config.tool_dir, make=make)
    if not packer.is_file():
        raise ToolchainBuildError(str(config.tool_dir), f"build did not produce {packer.name}")
    return packer
