"""Raster types for the image source.

This module defines the sampled image the region extractor works on:
- RasterCell: One classified sample of the image in output space
- Raster: A grid of tone values with its placement in output space

Output space has its origin at the bottom-left corner and the y-axis
pointing up, so image row 0 is the top row of cells.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class RasterCell:
    """A single raster cell.

    Attributes:
        x: Left edge in output units
        y: Bottom edge in output units
        width: Cell width in output units
        height: Cell height in output units
        tone: Brightness in [0, 1] (0 is black, 1 is white)
    """

    x: float
    y: float
    width: float
    height: float
    tone: float

    def bounds(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of the cell."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class Raster:
    """A grid of tone values mapped onto output space.

    Attributes:
        tones: 2D array (rows, columns) of tones in [0, 1], row 0 at the top
        width: Total width in output units
        height: Total height in output units
    """

    tones: np.ndarray
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.tones.ndim != 2 or self.tones.size == 0:
            raise ValueError(f"Raster tones must be a non-empty 2D array, got shape {self.tones.shape}")

    @property
    def rows(self) -> int:
        """Number of cell rows."""
        return int(self.tones.shape[0])

    @property
    def columns(self) -> int:
        """Number of cell columns."""
        return int(self.tones.shape[1])

    @property
    def cell_width(self) -> float:
        """Width of one cell in output units."""
        return self.width / self.columns

    @property
    def cell_height(self) -> float:
        """Height of one cell in output units."""
        return self.height / self.rows

    def cell(self, row: int, column: int) -> RasterCell:
        """Get the cell at a grid position.

        Args:
            row: Row index (0 is the top row)
            column: Column index (0 is the left column)

        Returns:
            RasterCell positioned in output space
        """
        return RasterCell(
            x=column * self.cell_width,
            y=(self.rows - 1 - row) * self.cell_height,
            width=self.cell_width,
            height=self.cell_height,
            tone=float(self.tones[row, column]),
        )

    def iter_cells(self) -> Iterator[RasterCell]:
        """Iterate over all cells, top row first, left to right."""
        for row in range(self.rows):
            for column in range(self.columns):
                yield self.cell(row, column)

    @classmethod
    def from_array(cls, tones: np.ndarray, width: float, height: float) -> "Raster":
        """Build a raster from a tone array, clipping tones into [0, 1]."""
        array = np.clip(np.asarray(tones, dtype=float), 0.0, 1.0)
        return cls(tones=array, width=float(width), height=float(height))

    @classmethod
    def from_cells(
        cls,
        cells: Iterable[RasterCell],
    ) -> "Raster":
        """Build a raster from a collection of equally sized cells.

        Cells may arrive in any order; their grid position is recovered
        from their coordinates.

        Args:
            cells: Cells covering a rectangular grid anchored at the origin

        Returns:
            Raster containing every cell's tone

        Raises:
            ValueError: If cells are missing, repeated, or do not form a full grid
        """
        cell_list = list(cells)
        if not cell_list:
            raise ValueError("Cannot build a raster from zero cells")

        cell_width = cell_list[0].width
        cell_height = cell_list[0].height
        columns = max(round(c.x / cell_width) for c in cell_list) + 1
        rows = max(round(c.y / cell_height) for c in cell_list) + 1

        if len(cell_list) != rows * columns:
            raise ValueError(
                f"Expected {rows * columns} cells for a {columns}x{rows} grid, got {len(cell_list)}"
            )

        tones = np.zeros((rows, columns), dtype=float)
        seen: set[tuple[int, int]] = set()
        for c in cell_list:
            column = round(c.x / cell_width)
            row = rows - 1 - round(c.y / cell_height)
            if (row, column) in seen:
                raise ValueError(f"Duplicate cell at x={c.x}, y={c.y}")
            seen.add((row, column))
            tones[row, column] = c.tone

        return cls.from_array(tones, columns * cell_width, rows * cell_height)
