"""Image reader producing rasters.

This module provides the ImageReader class for loading image files and
sampling them into a Raster of greyscale tones on the layout grid.
"""

from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from typefill.domain import Raster
from typefill.exceptions import ConfigurationError, ImageLoadError


def grid_shape(width: float, height: float, cell_size: float) -> tuple[int, int]:
    """Number of (rows, columns) needed to cover the output at a cell size.

    Raises:
        ConfigurationError: If any dimension is not positive
    """
    if not cell_size > 0:
        raise ConfigurationError("cell_size", cell_size, "must be positive")
    if not width > 0:
        raise ConfigurationError("width", width, "must be positive")
    if not height > 0:
        raise ConfigurationError("height", height, "must be positive")
    return max(1, round(height / cell_size)), max(1, round(width / cell_size))


class ImageReader:
    """Loads an image and samples it into a Raster.

    Transparent pixels are composited over white before conversion to
    greyscale, so empty areas read as light.

    Example:
        with ImageReader(Path("portrait.png")) as reader:
            raster = reader.to_raster(width=800, height=600, cell_size=4)
    """

    def __init__(self, image_path: Path) -> None:
        """Initialize the image reader.

        Args:
            image_path: Path to any image format Pillow can decode
        """
        self._image_path = image_path
        self._image: Image.Image | None = None

    def load(self) -> None:
        """Load the image file.

        Raises:
            FileNotFoundError: If image file does not exist
            ImageLoadError: If the file cannot be decoded
        """
        if not self._image_path.exists():
            raise FileNotFoundError(f"Image file not found: {self._image_path}")

        try:
            with Image.open(self._image_path) as image:
                image.load()
                self._image = image.copy()
        except (UnidentifiedImageError, OSError) as e:
            raise ImageLoadError(str(self._image_path), str(e)) from e

    @property
    def size(self) -> tuple[int, int]:
        """Return the image size in pixels as (width, height).

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")

        return self._image.size

    def greyscale(self) -> Image.Image:
        """Return the image flattened onto white and converted to mode "L".

        Raises:
            RuntimeError: If image has not been loaded yet
        """
        if self._image is None:
            raise RuntimeError("Image not loaded. Call load() first.")

        image = self._image
        if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
            rgba = image.convert("RGBA")
            background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
            image = Image.alpha_composite(background, rgba)
        return image.convert("L")

    def to_raster(self, width: float, height: float, cell_size: float) -> Raster:
        """Sample the image onto the layout grid.

        The image is stretched to the output size; one pixel of the resized
        image becomes one raster cell.

        Args:
            width: Output width in output units
            height: Output height in output units
            cell_size: Cell size in output units

        Returns:
            Raster with tones in [0, 1]

        Raises:
            RuntimeError: If image has not been loaded yet
            ConfigurationError: If any dimension is not positive
        """
        rows, columns = grid_shape(width, height, cell_size)
        sampled = self.greyscale().resize((columns, rows), Image.Resampling.BOX)
        tones = np.asarray(sampled, dtype=float) / 255.0
        return Raster.from_array(tones, width, height)

    def close(self) -> None:
        """Close the image and free resources."""
        if self._image is not None:
            self._image.close()
            self._image = None

    def __enter__(self) -> "ImageReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
