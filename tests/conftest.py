"""Shared fixtures: a generated test font and raster helpers."""

from pathlib import Path

import numpy as np
import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from typefill.domain import Raster

UNITS_PER_EM = 1000

# Advance widths in font units for every character the test font maps
TEST_FONT_ADVANCES = {
    "a": 500,
    "b": 500,
    "c": 500,
    "d": 500,
    "i": 250,
    "m": 800,
    " ": 500,
}


def _glyph_name(char: str) -> str:
    return "space" if char == " " else f"uni{ord(char):04X}"


def build_test_font(path: Path, advances: dict[str, int]) -> Path:
    """Build a minimal TrueType font with rectangular glyphs."""
    names = {char: _glyph_name(char) for char in advances}
    glyph_order = [".notdef", *names.values()]

    fb = FontBuilder(UNITS_PER_EM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(char): name for char, name in names.items()})

    glyphs = {}
    metrics = {".notdef": (500, 0)}
    glyphs[".notdef"] = TTGlyphPen(None).glyph()
    for char, name in names.items():
        advance = advances[char]
        pen = TTGlyphPen(None)
        if char != " ":
            # Clockwise outer contour
            pen.moveTo((50, 0))
            pen.lineTo((50, 700))
            pen.lineTo((advance - 50, 700))
            pen.lineTo((advance - 50, 0))
            pen.closePath()
        glyphs[name] = pen.glyph()
        metrics[name] = (advance, 50 if char != " " else 0)

    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Typefill Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def test_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    """Path to a generated TrueType font covering TEST_FONT_ADVANCES."""
    return build_test_font(tmp_path_factory.mktemp("fonts") / "TypefillTest.ttf", TEST_FONT_ADVANCES)


@pytest.fixture
def unit_measure():
    """Measurement capability giving every character a width of 1."""
    return lambda char: 1.0


@pytest.fixture
def make_raster():
    """Factory building a raster from tone rows (first row is the top of the image)."""

    def _make(rows: list[list[float]], cell_size: float = 1.0) -> Raster:
        tones = np.array(rows, dtype=float)
        return Raster.from_array(tones, tones.shape[1] * cell_size, tones.shape[0] * cell_size)

    return _make
