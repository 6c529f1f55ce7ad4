"""Tests for character map coverage lookup."""

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyphpack.io import FontReader, missing_code_points


def box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((0, 0))
    pen.lineTo((0, 500))
    pen.lineTo((400, 500))
    pen.lineTo((400, 0))
    pen.closePath()
    return pen.glyph()


def build_font(path: Path, cmap: dict[int, str]) -> Path:
    """Save a minimal TrueType font mapping ``cmap``."""
    glyph_order = [".notdef", *sorted(set(cmap.values()))]

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf({name: box_glyph() for name in glyph_order})
    fb.setupHorizontalMetrics({name: (500, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Test", "styleName": "Regular"})
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def digits_font(tmp_path: Path) -> Path:
    names = ["zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine"]
    return build_font(tmp_path / "digits.ttf", {48 + i: name for i, name in enumerate(names)})


class TestFontReader:
    def test_code_points(self, digits_font):
        with FontReader(digits_font) as reader:
            assert reader.code_points == frozenset(range(48, 58))

    def test_missing_preserves_request_order(self, digits_font):
        with FontReader(digits_font) as reader:
            assert reader.missing([65, 48, 49, 97]) == [65, 97]

    def test_not_loaded(self, tmp_path):
        reader = FontReader(tmp_path / "x.ttf")
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.code_points

    def test_nonexistent_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            FontReader(tmp_path / "nope.ttf").load()


def test_missing_code_points(digits_font):
    assert missing_code_points(digits_font, range(47, 59)) == [47, 58]


def test_fully_covered(digits_font):
    assert missing_code_points(digits_font, [48, 57]) == []


def test_invalid_font_raises(tmp_path):
    junk = tmp_path / "junk.ttf"
    junk.write_bytes(b"definitely not a font")

    with pytest.raises(Exception):
        missing_code_points(junk, [48])
