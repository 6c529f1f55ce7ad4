"""Shared fixtures: stub conversion tools and settings pointing at them."""

import stat
from collections.abc import Callable
from pathlib import Path

import pytest

from glyphpack.config import CompileConfig, GlyphpackSettings, PathConfig, ToolchainConfig

# Rasterizer argv: -p <size> -l <selector> <font>
ECHO_SELECTOR_RASTERIZER = 'printf \'%s\' "$4"\n'
# Packer argv: -f <rev> -m <selector> -binary <bdf>
ECHO_SELECTOR_PACKER = 'printf \'%s\' "$4"\n'
CAT_INTERMEDIATE_PACKER = 'cat "$6"\n'


def write_tool(path: Path, body: str, log: Path | None = None) -> Path:
    """Write an executable shell script, optionally logging each call."""
    script = "#!/bin/sh\n"
    if log is not None:
        script += f'printf "%s\\n" "$*" >> "{log}"\n'
    script += body
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(script, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root containing fonts/x.ttf."""
    root = tmp_path / "project"
    fonts = root / "fonts"
    fonts.mkdir(parents=True)
    (fonts / "x.ttf").write_bytes(b"not really a font")
    return root


@pytest.fixture
def tool_dir(tmp_path: Path) -> Path:
    path = tmp_path / "tools" / "bdfconv"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_settings(project_root: Path, tool_dir: Path, tmp_path: Path) -> Callable[..., GlyphpackSettings]:
    """Build settings with stub tools.

    Call with the rasterizer and packer script bodies; returns settings whose
    toolchain points at them. Each call is appended to tmp_path/<tool>.log.
    """

    def factory(
        rasterizer_body: str = ECHO_SELECTOR_RASTERIZER,
        packer_body: str = CAT_INTERMEDIATE_PACKER,
        check_coverage: bool = False,
    ) -> GlyphpackSettings:
        rasterizer = write_tool(
            tmp_path / "bin" / "otf2bdf", rasterizer_body, log=tmp_path / "otf2bdf.log"
        )
        write_tool(tool_dir / "bdfconv", packer_body, log=tmp_path / "bdfconv.log")
        return GlyphpackSettings(
            toolchain=ToolchainConfig(rasterizer=str(rasterizer), tool_dir=tool_dir),
            paths=PathConfig(project_root=project_root),
            compile=CompileConfig(check_coverage=check_coverage),
        )

    return factory


def read_calls(log: Path) -> list[str]:
    """Return the logged argument lines of a stub tool."""
    if not log.exists():
        return []
    return log.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def calls(tmp_path: Path) -> Callable[[str], list[str]]:
    """Read the logged calls of a stub tool by name ("otf2bdf" or "bdfconv")."""

    def reader(tool: str) -> list[str]:
        return read_calls(tmp_path / f"{tool}.log")

    return reader


@pytest.fixture
def tool_writer() -> Callable[..., Path]:
    return write_tool
