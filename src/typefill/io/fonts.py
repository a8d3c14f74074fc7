"""Character width measurement from font files.

This module provides FontMetrics, which reads advance widths from a
TrueType/OpenType font with fonttools and scales them to a font size.
"""

from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from typefill.exceptions import ConfigurationError, FontLoadError, UnmeasurableCharacterError


class FontMetrics:
    """Measures character advance widths at a fixed font size.

    Instances are callable, so they can be handed to MetricsCache as the
    measurement capability directly.

    Example:
        with FontMetrics(Path("font.ttf"), size=12) as metrics:
            width = metrics.measure("A")
    """

    def __init__(self, font_path: Path, size: float) -> None:
        """Initialize font metrics.

        Args:
            font_path: Path to the TTF or OTF font file
            size: Font size in output units (one em)

        Raises:
            ConfigurationError: If size is not positive
        """
        if not size > 0:
            raise ConfigurationError("font_size", size, "must be positive")

        self._font_path = font_path
        self._size = size
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._advances: dict[str, tuple[int, int]] = {}
        self._units_per_em = 1000

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the font cannot be parsed or lacks metrics
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        try:
            cmap = font.getBestCmap()
            if cmap is None:
                raise FontLoadError(str(self._font_path), "font has no usable character map")
            self._cmap = dict(cmap)
            self._advances = dict(font["hmtx"].metrics)
            self._units_per_em = font["head"].unitsPerEm  # type: ignore[attr-defined]
        except FontLoadError:
            font.close()
            raise
        except (TTLibError, KeyError, OSError) as e:
            font.close()
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._font = font

    @property
    def size(self) -> float:
        """Font size in output units."""
        return self._size

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")

        return self._units_per_em

    def measure(self, char: str) -> float:
        """Advance width of a character at the configured size.

        Args:
            char: A single character

        Returns:
            Width in output units

        Raises:
            RuntimeError: If font has not been loaded yet
            UnmeasurableCharacterError: If the font has no glyph for char
        """
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")

        glyph_name = self._cmap.get(ord(char))
        if glyph_name is None:
            raise UnmeasurableCharacterError(char, f"no glyph in {self._font_path.name}")

        advance, _lsb = self._advances[glyph_name]
        return advance * self._size / self._units_per_em

    def __call__(self, char: str) -> float:
        return self.measure(char)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontMetrics":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
