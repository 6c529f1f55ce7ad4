"""End-to-end compile tests against stub conversion tools."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from glyphpack.core import FontCompiler
from glyphpack.domain import CharacterSelection, FontRequest, NamedSet
from glyphpack.emit import RustFontEmitter
from glyphpack.exceptions import (
    ConversionServiceFailedError,
    ConversionServiceUnavailableError,
    EmptySelectionError,
    FontNotFoundError,
    IntermediateWriteError,
)

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="stub tools are shell scripts")

ECHO_SELECTOR = "printf '%s' \"$4\"\n"
# Fails unless the intermediate file is present when the packer runs
CAT_INTERMEDIATE = 'test -f "$6" || exit 9\ncat "$6"\n'


def numbers_request(**overrides) -> FontRequest:
    values = {
        "source_path": "fonts/x.ttf",
        "artifact_name": "Body12",
        "pixel_size": 12,
        "selection": CharacterSelection.of(NamedSet.NUMBERS),
    }
    values.update(overrides)
    return FontRequest(**values)


class TestScenarios:
    """Tool invocation for the documented request shapes."""

    def test_explicit_selection_arguments(self, make_settings, calls):
        """Numbers go to the rasterizer space-joined and to the packer comma-joined."""
        settings = make_settings(rasterizer_body=ECHO_SELECTOR, packer_body=ECHO_SELECTOR)
        compiler = FontCompiler(settings)

        artifact = compiler.compile(numbers_request())

        assert artifact.name == "Body12"
        assert artifact.data == b"48,49,50,51,52,53,54,55,56,57"
        rasterizer_calls = calls("otf2bdf")
        assert len(rasterizer_calls) == 1
        assert rasterizer_calls[0].startswith("-p 12 -l 48 49 50 51 52 53 54 55 56 57 ")
        assert calls("bdfconv")[0].startswith("-f 1 -m 48,49,50,51,52,53,54,55,56,57 -binary ")

    def test_rasterizer_output_reaches_packer(self, make_settings):
        """The packer reads the rasterizer's stdout from the intermediate file."""
        settings = make_settings(rasterizer_body=ECHO_SELECTOR, packer_body=CAT_INTERMEDIATE)
        compiler = FontCompiler(settings)

        artifact = compiler.compile(numbers_request())

        assert artifact.data == b"48 49 50 51 52 53 54 55 56 57"

    def test_default_ranges_without_selection(self, make_settings, calls):
        """Without a selection both tools get their default ranges."""
        settings = make_settings(rasterizer_body=ECHO_SELECTOR, packer_body=ECHO_SELECTOR)
        compiler = FontCompiler(settings)

        artifact = compiler.compile(numbers_request(selection=None))

        assert artifact.data == b"32-127"
        assert calls("otf2bdf")[0].startswith("-p 12 -l 48_58 ")
        assert calls("bdfconv")[0].startswith("-f 1 -m 32-127 -binary ")

    def test_missing_font_spawns_nothing(self, make_settings, calls):
        """A missing font fails before either tool runs."""
        settings = make_settings()
        compiler = FontCompiler(settings)

        with pytest.raises(FontNotFoundError) as exc_info:
            compiler.compile(numbers_request(source_path="missing/font.ttf"))

        assert exc_info.value.path.endswith("missing/font.ttf")
        assert calls("otf2bdf") == []
        assert calls("bdfconv") == []

    def test_rasterizer_failure(self, make_settings, calls, project_root):
        """Rasterizer stderr and exit code are reported and no intermediate is made."""
        settings = make_settings(rasterizer_body="printf 'bad glyph table' >&2\nexit 1\n")
        compiler = FontCompiler(settings)

        with patch("glyphpack.core.compiler.intermediate_file") as mock_intermediate:
            with pytest.raises(ConversionServiceFailedError) as exc_info:
                compiler.compile(numbers_request())

        assert exc_info.value.exit_code == 1
        assert exc_info.value.stderr == "bad glyph table"
        assert exc_info.value.stage == "rasterize"
        mock_intermediate.assert_not_called()
        assert calls("bdfconv") == []
        assert not (project_root / "fonts" / "x.bdf").exists()


class TestCleanup:
    """The intermediate bitmap never outlives a compile."""

    def test_removed_after_success(self, make_settings, project_root):
        settings = make_settings(packer_body=CAT_INTERMEDIATE)
        FontCompiler(settings).compile(numbers_request())

        assert not (project_root / "fonts" / "x.bdf").exists()

    def test_removed_after_packer_failure(self, make_settings, project_root):
        settings = make_settings(packer_body='test -f "$6" || exit 9\necho broken >&2\nexit 3\n')

        with pytest.raises(ConversionServiceFailedError) as exc_info:
            FontCompiler(settings).compile(numbers_request())

        assert exc_info.value.exit_code == 3
        assert exc_info.value.stage == "pack"
        assert "broken" in exc_info.value.stderr
        assert not (project_root / "fonts" / "x.bdf").exists()

    def test_removed_when_packer_missing(self, make_settings, tool_dir, project_root):
        settings = make_settings()
        (tool_dir / "bdfconv").unlink()

        with pytest.raises(ConversionServiceUnavailableError) as exc_info:
            FontCompiler(settings).compile(numbers_request())

        assert exc_info.value.stage == "pack"
        assert exc_info.value.executable == str(tool_dir / "bdfconv")
        assert not (project_root / "fonts" / "x.bdf").exists()


class TestDeterminism:
    def test_same_request_same_bytes(self, make_settings):
        settings = make_settings(
            rasterizer_body="printf 'SIZE %s CHARS %s' \"$2\" \"$4\"\n",
            packer_body=CAT_INTERMEDIATE,
        )
        compiler = FontCompiler(settings)
        request = numbers_request(
            selection=CharacterSelection.of("zyx", NamedSet.PUNCTUATION, "xyz"),
        )

        first = compiler.compile(request)
        second = compiler.compile(request)

        assert first.data == second.data

    def test_selection_order_does_not_change_output(self, make_settings):
        settings = make_settings(packer_body=ECHO_SELECTOR)
        compiler = FontCompiler(settings)

        first = compiler.compile(numbers_request(selection=CharacterSelection.of("ab", NamedSet.NUMBERS)))
        second = compiler.compile(numbers_request(selection=CharacterSelection.of(NamedSet.NUMBERS, "ab")))

        assert first.data == second.data


class TestEmptySelection:
    def test_rejected_before_tools_run(self, make_settings, calls):
        settings = make_settings()

        with pytest.raises(EmptySelectionError):
            FontCompiler(settings).compile(numbers_request(selection=CharacterSelection.of("")))

        assert calls("otf2bdf") == []


class TestBatch:
    def test_compile_many_isolates_failures(self, make_settings, project_root):
        (project_root / "fonts" / "y.ttf").write_bytes(b"another font")
        settings = make_settings(packer_body=ECHO_SELECTOR)
        emitter = RustFontEmitter()
        compiler = FontCompiler(settings, emitter=emitter)

        requests = [
            numbers_request(artifact_name="First"),
            numbers_request(artifact_name="Missing", source_path="fonts/nope.ttf"),
            numbers_request(artifact_name="Second", source_path="fonts/y.ttf"),
            numbers_request(artifact_name="Third", pixel_size=16),
        ]
        result = compiler.compile_many(requests, max_workers=3)

        assert [a.name for a in result.artifacts] == ["First", "Second", "Third"]
        assert list(result.errors) == ["Missing"]
        assert isinstance(result.errors["Missing"], FontNotFoundError)
        assert not result.ok
        assert result.stats.compiled_count == 3
        assert result.stats.failed_count == 1
        assert [a.name for a in emitter.artifacts] == ["First", "Second", "Third"]
        assert not (project_root / "fonts" / "x.bdf").exists()
        assert not (project_root / "fonts" / "y.bdf").exists()

    def test_same_stem_fonts_keep_their_own_bitmaps(self, make_settings, project_root):
        (project_root / "fonts" / "x.otf").write_bytes(b"otf flavour")
        settings = make_settings(
            rasterizer_body="printf '%s' \"$5\"\n",
            packer_body="sleep 0.3\n" + CAT_INTERMEDIATE,
        )
        compiler = FontCompiler(settings)

        result = compiler.compile_many(
            [
                numbers_request(artifact_name="FromTtf"),
                numbers_request(artifact_name="FromOtf", source_path="fonts/x.otf"),
            ],
            max_workers=2,
        )

        assert result.ok
        ttf, otf = result.artifacts
        assert ttf.data.endswith(b"fonts/x.ttf")
        assert otf.data.endswith(b"fonts/x.otf")
        assert not (project_root / "fonts" / "x.bdf").exists()

    def test_emitted_source(self, make_settings):
        settings = make_settings(packer_body="printf 'A\\001\"'\n")
        emitter = RustFontEmitter()
        FontCompiler(settings, emitter=emitter).compile(numbers_request())

        source = emitter.render()

        assert "pub struct Body12 {}" in source
        assert "impl u8g2_fonts::Font for Body12 {" in source
        assert "const DATA: &'static [u8] = b\"A\\x01\\\"\";" in source


def test_coverage_check_tolerates_non_font(make_settings):
    """An unparseable font only skips the advisory coverage check."""
    settings = make_settings(packer_body=ECHO_SELECTOR, check_coverage=True)

    artifact = FontCompiler(settings).compile(numbers_request())

    assert artifact.data.startswith(b"48,49")


def test_font_path_outside_fonts_dir(make_settings, project_root: Path, calls):
    """Absolute font paths are accepted as-is."""
    other = project_root.parent / "elsewhere.otf"
    other.write_bytes(b"font")
    settings = make_settings()

    FontCompiler(settings).compile(numbers_request(source_path=str(other)))

    assert calls("otf2bdf")[0].endswith(str(other.resolve()))
    assert not other.with_suffix(".bdf").exists()


def test_existing_bitmap_file_is_preserved(make_settings, project_root: Path, calls):
    """A .bdf already next to the font is never overwritten or removed."""
    existing = project_root / "fonts" / "x.bdf"
    existing.write_bytes(b"STARTFONT 2.1 hand-tuned bitmap")
    settings = make_settings()

    with pytest.raises(IntermediateWriteError, match="already exists"):
        FontCompiler(settings).compile(numbers_request())

    assert existing.read_bytes() == b"STARTFONT 2.1 hand-tuned bitmap"
    assert calls("bdfconv") == []
