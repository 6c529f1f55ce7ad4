"""Tests for settings and environment lookup."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from glyphpack.config import (
    DEFAULT_TOOL_DIR,
    GlyphpackSettings,
    PathConfig,
    ToolchainConfig,
    get_default_settings,
    settings_from_environment,
)


class TestToolchainConfig:
    def test_defaults(self):
        config = ToolchainConfig()

        assert config.rasterizer == "otf2bdf"
        assert config.packer_path == DEFAULT_TOOL_DIR / "bdfconv"
        assert config.format_revision == 1
        assert config.intermediate_suffix == ".bdf"
        assert config.rasterizer_default_range == (48, 58)
        assert config.packer_default_range == (32, 127)

    def test_inverted_range_rejected(self):
        with pytest.raises(ValidationError):
            ToolchainConfig(packer_default_range=(127, 32))

    def test_bad_suffix_rejected(self):
        with pytest.raises(ValidationError):
            ToolchainConfig(intermediate_suffix="bdf")

    def test_tool_dir_independent_of_project_root(self, tmp_path):
        settings = GlyphpackSettings(paths=PathConfig(project_root=tmp_path))
        assert settings.toolchain.tool_dir == DEFAULT_TOOL_DIR


class TestPathConfig:
    def test_root_made_absolute(self):
        assert PathConfig(project_root=Path("relative/dir")).project_root.is_absolute()


class TestEnvironment:
    def test_defaults_without_environment(self):
        settings = settings_from_environment({})

        assert settings.paths.project_root == Path.cwd().resolve()
        assert settings.toolchain.tool_dir == DEFAULT_TOOL_DIR

    def test_environment_values(self, tmp_path):
        settings = settings_from_environment(
            {
                "GLYPHPACK_PROJECT_ROOT": str(tmp_path),
                "GLYPHPACK_TOOL_DIR": str(tmp_path / "tools"),
            }
        )

        assert settings.paths.project_root == tmp_path.resolve()
        assert settings.toolchain.packer_path == tmp_path / "tools" / "bdfconv"

    def test_reads_os_environ(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GLYPHPACK_PROJECT_ROOT", str(tmp_path))
        monkeypatch.delenv("GLYPHPACK_TOOL_DIR", raising=False)

        assert settings_from_environment().paths.project_root == tmp_path.resolve()


def test_default_settings():
    settings = get_default_settings()
    assert settings.compile.check_coverage is True
    assert settings.logging.log_level == "WARNING"
