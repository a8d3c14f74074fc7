"""Unit tests for the I/O layer.

Tests for ImageReader, FontMetrics, LayoutRenderer and the JSON writer.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import numpy as np
import pytest
from PIL import Image

from typefill.config import RenderConfig
from typefill.domain import PackResult, Placement, Slot
from typefill.exceptions import (
    ConfigurationError,
    FontLoadError,
    ImageLoadError,
    UnmeasurableCharacterError,
)
from typefill.io import (
    FontMetrics,
    ImageReader,
    LayoutRenderer,
    grid_shape,
    read_layout_json,
    write_layout_json,
)


@pytest.fixture
def half_black_png(tmp_path: Path) -> Path:
    """8x4 image, left half black, right half white."""
    image = Image.new("L", (8, 4), 255)
    image.paste(0, (0, 0, 4, 4))
    path = tmp_path / "half.png"
    image.save(path)
    return path


class TestGridShape:
    """Tests for grid_shape."""

    def test_shape(self):
        """Rows and columns cover the output at the cell size."""
        assert grid_shape(800.0, 600.0, 4.0) == (150, 200)

    def test_at_least_one_cell(self):
        """Tiny outputs still get one cell."""
        assert grid_shape(1.0, 1.0, 10.0) == (1, 1)

    def test_invalid_cell_size(self):
        """Non-positive cell sizes are rejected."""
        with pytest.raises(ConfigurationError, match="cell_size"):
            grid_shape(10.0, 10.0, 0.0)


class TestImageReader:
    """Tests for ImageReader class."""

    def test_init(self):
        """Test ImageReader initialization."""
        path = Path("test.png")
        reader = ImageReader(path)
        assert reader._image_path == path
        assert reader._image is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = ImageReader(Path("nonexistent.png"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_size_before_load(self):
        """Test accessing size before loading raises RuntimeError."""
        reader = ImageReader(Path("test.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            _ = reader.size

    def test_raster_before_load(self):
        """Test sampling before loading raises RuntimeError."""
        reader = ImageReader(Path("test.png"))
        with pytest.raises(RuntimeError, match="Image not loaded"):
            reader.to_raster(10.0, 10.0, 1.0)

    def test_corrupt_file(self, tmp_path: Path):
        """Test that undecodable files raise ImageLoadError."""
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not an image")
        reader = ImageReader(path)
        with pytest.raises(ImageLoadError) as exc_info:
            reader.load()
        assert exc_info.value.path == str(path)

    def test_to_raster(self, half_black_png: Path):
        """Test sampling onto a coarser grid."""
        with ImageReader(half_black_png) as reader:
            assert reader.size == (8, 4)
            raster = reader.to_raster(width=8.0, height=4.0, cell_size=2.0)

        assert (raster.rows, raster.columns) == (2, 4)
        assert raster.width == 8.0
        assert raster.height == 4.0
        assert np.all(raster.tones[:, :2] < 0.2)
        assert np.all(raster.tones[:, 2:] > 0.8)

    def test_to_raster_scales_to_output(self, half_black_png: Path):
        """Test that the output size, not the image size, sets the geometry."""
        with ImageReader(half_black_png) as reader:
            raster = reader.to_raster(width=80.0, height=40.0, cell_size=10.0)
        assert raster.cell_width == pytest.approx(10.0)
        assert raster.cell_height == pytest.approx(10.0)

    def test_transparent_pixels_read_as_white(self, tmp_path: Path):
        """Test that transparency is composited over white."""
        image = Image.new("RGBA", (2, 2), (0, 0, 0, 0))
        image.putpixel((0, 0), (0, 0, 0, 255))
        path = tmp_path / "alpha.png"
        image.save(path)

        with ImageReader(path) as reader:
            raster = reader.to_raster(width=2.0, height=2.0, cell_size=1.0)

        assert raster.tones[0, 0] == pytest.approx(0.0)
        assert raster.tones[1, 1] == pytest.approx(1.0)

    def test_close(self, half_black_png: Path):
        """Test that close releases the image."""
        reader = ImageReader(half_black_png)
        reader.load()
        reader.close()
        assert reader._image is None


class TestFontMetrics:
    """Tests for FontMetrics class."""

    def test_measure(self, test_font_path: Path):
        """Test advance widths scaled to the font size."""
        with FontMetrics(test_font_path, size=10.0) as metrics:
            assert metrics.units_per_em == 1000
            assert metrics.measure("a") == pytest.approx(5.0)
            assert metrics.measure("i") == pytest.approx(2.5)
            assert metrics.measure("m") == pytest.approx(8.0)
            assert metrics.measure(" ") == pytest.approx(5.0)

    def test_callable(self, test_font_path: Path):
        """Test that instances work as a measurement function."""
        with FontMetrics(test_font_path, size=20.0) as metrics:
            assert metrics("a") == pytest.approx(10.0)

    def test_unmapped_character(self, test_font_path: Path):
        """Test that characters without a glyph are unmeasurable."""
        with FontMetrics(test_font_path, size=10.0) as metrics:
            with pytest.raises(UnmeasurableCharacterError) as exc_info:
                metrics.measure("z")
        assert exc_info.value.char == "z"

    def test_measure_before_load(self, test_font_path: Path):
        """Test measuring before loading raises RuntimeError."""
        metrics = FontMetrics(test_font_path, size=10.0)
        with pytest.raises(RuntimeError, match="Font not loaded"):
            metrics.measure("a")

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            FontMetrics(Path("nonexistent.ttf"), size=10.0).load()

    def test_invalid_font(self, tmp_path: Path):
        """Test that a file that is not a font raises FontLoadError."""
        path = tmp_path / "bad.ttf"
        path.write_bytes(b"\x00" * 64)
        with pytest.raises(FontLoadError):
            FontMetrics(path, size=10.0).load()

    def test_font_closed_without_cmap(self, test_font_path: Path):
        """Test that the font file is released when it has no character map."""
        font = MagicMock()
        font.getBestCmap.return_value = None
        with patch("typefill.io.fonts.TTFont", return_value=font):
            with pytest.raises(FontLoadError, match="character map"):
                FontMetrics(test_font_path, size=10.0).load()
        font.close.assert_called_once()

    def test_font_closed_without_metrics(self, test_font_path: Path):
        """Test that the font file is released when a metrics table is missing."""
        font = MagicMock()
        font.getBestCmap.return_value = {97: "a"}
        font.__getitem__.side_effect = KeyError("hmtx")
        with patch("typefill.io.fonts.TTFont", return_value=font):
            with pytest.raises(FontLoadError):
                FontMetrics(test_font_path, size=10.0).load()
        font.close.assert_called_once()

    @pytest.mark.parametrize("size", [0.0, -12.0])
    def test_invalid_size(self, test_font_path: Path, size: float):
        """Test that non-positive sizes are rejected."""
        with pytest.raises(ConfigurationError, match="font_size"):
            FontMetrics(test_font_path, size=size)


class TestLayoutRenderer:
    """Tests for LayoutRenderer class."""

    def test_render_size_and_background(self, test_font_path: Path):
        """Test that an empty plan renders a blank canvas."""
        renderer = LayoutRenderer(test_font_path, font_size=10.0, width=40.0, height=20.0)
        image = renderer.render([])
        assert image.size == (40, 20)
        assert image.getextrema() == ((255, 255), (255, 255), (255, 255))

    def test_render_draws_glyphs(self, test_font_path: Path):
        """Test that placements produce dark pixels above their baseline."""
        renderer = LayoutRenderer(test_font_path, font_size=20.0, width=40.0, height=40.0)
        image = renderer.render([Placement(slot_index=0, char="m", x=5.0, y=10.0)]).convert("L")

        # Baseline y=10 is image row 30; the glyph box spans 14 units upward
        assert image.getpixel((12, 25)) < 128
        assert image.getpixel((12, 35)) > 128

    def test_render_slot_outlines(self, test_font_path: Path):
        """Test that slots are outlined only when enabled."""
        slot = Slot(left=2.0, bottom=2.0, right=30.0, top=12.0, index=0)
        plain = LayoutRenderer(test_font_path, 10.0, 40.0, 20.0).render([], [slot])
        outlined = LayoutRenderer(
            test_font_path, 10.0, 40.0, 20.0, RenderConfig(show_slots=True)
        ).render([], [slot])

        assert plain.getpixel((2, 10)) == (255, 255, 255)
        assert outlined.getpixel((2, 10)) != (255, 255, 255)

    def test_fractional_font_size_kept(self, test_font_path: Path):
        """Test that glyphs are drawn at the same size they are measured at."""
        renderer = LayoutRenderer(test_font_path, font_size=12.5, width=40.0, height=20.0)
        assert renderer.font_size == pytest.approx(12.5)

    def test_save(self, test_font_path: Path, tmp_path: Path):
        """Test saving to a PNG file."""
        output = tmp_path / "out.png"
        LayoutRenderer(test_font_path, 10.0, 30.0, 30.0).save(output, [Placement(0, "a", 1.0, 5.0)])
        assert output.exists()
        with Image.open(output) as image:
            assert image.size == (30, 30)

    def test_invalid_font(self, tmp_path: Path):
        """Test that an unreadable font raises FontLoadError."""
        path = tmp_path / "bad.ttf"
        path.write_bytes(b"\x00" * 64)
        with pytest.raises(FontLoadError):
            LayoutRenderer(path, 10.0, 10.0, 10.0)


class TestLayoutJson:
    """Tests for the JSON writer."""

    def test_write_and_read(self, tmp_path: Path):
        """Test writing a layout and reading it back."""
        slots = [Slot(0.0, 0.0, 4.0, 1.0, index=0)]
        result = PackResult(
            placements=[Placement(0, "a", 0.0, 0.0), Placement(0, "é", 2.0, 0.0)],
            consumed=2,
            remaining="rest",
            filled_slots=[0],
        )
        path = tmp_path / "layout.json"
        write_layout_json(path, slots, result, width=4.0, height=1.0)

        read_slots, read_placements = read_layout_json(path)
        assert read_slots == slots
        assert read_placements == result.placements
        assert '"remaining": "rest"' in path.read_text(encoding="utf-8")
