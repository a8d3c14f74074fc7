"""Slot generation: scanlines clipped to the usable area.

Horizontal scanlines are swept top to bottom at a fixed spacing. Each
scanline is intersected with the usable area; every resulting segment is
thickened to a band one line high and every connected piece of a band
becomes a slot. Spacing does not adapt to the area's shape, so features
thinner than the spacing can fall between scanlines.
"""

import logging
import math

from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

from typefill.core.geometry import flat_buffer, line_parts, polygon_parts, scanline
from typefill.domain import Slot
from typefill.exceptions import ConfigurationError, GeometryError

logger = logging.getLogger(__name__)

POSITION_TOLERANCE = 1e-9


def reading_order_key(slot: Slot, precision: int = 3) -> tuple[float, float]:
    """Sort key for top-to-bottom, left-to-right traversal.

    Tops are rounded so slots on the same row compare equal despite
    floating point noise from buffering.
    """
    return (-round(slot.top, precision), slot.left)


def sort_reading_order(slots: list[Slot], precision: int = 3) -> list[Slot]:
    """Stable-sort slots into reading order and assign their indices.

    Args:
        slots: Slots in generation order
        precision: Decimals kept when comparing tops

    Returns:
        New list of slots with index set to their position
    """
    ordered = sorted(slots, key=lambda s: reading_order_key(s, precision))
    return [slot.with_index(i) for i, slot in enumerate(ordered)]


class SlotGenerator:
    """Generates reading-ordered slots covering a usable area.

    The generator is stateless between calls; configuration is fixed at
    construction.

    Example:
        generator = SlotGenerator(line_height=12.0, width=800.0, height=600.0)
        slots = generator.generate(usable_area)
    """

    def __init__(
        self,
        line_height: float,
        width: float,
        height: float,
        row_precision: int = 3,
    ) -> None:
        """Initialize the slot generator.

        Args:
            line_height: Slot height and scanline spacing in output units
            width: Output width (scanlines span [0, width])
            height: Output height (first scanline sits half a line below it)
            row_precision: Decimals kept when comparing slot tops

        Raises:
            ConfigurationError: If any dimension is not positive
        """
        if not line_height > 0:
            raise ConfigurationError("line_height", line_height, "must be positive")
        if not width > 0:
            raise ConfigurationError("width", width, "must be positive")
        if not height > 0:
            raise ConfigurationError("height", height, "must be positive")
        if row_precision < 0:
            raise ConfigurationError("row_precision", row_precision, "must not be negative")

        self.line_height = line_height
        self.width = width
        self.height = height
        self.row_precision = row_precision

    def scanline_positions(self) -> list[float]:
        """Scanline heights from the top down.

        Starts half a line below the top and steps down one line at a time,
        stopping at the last position that still leaves half a line below
        it, so every band stays inside the canvas.

        Returns:
            Descending list of y positions
        """
        half = self.line_height / 2.0
        steps = (self.height - self.line_height) / self.line_height
        count = math.floor(steps + POSITION_TOLERANCE) + 1
        return [self.height - half - i * self.line_height for i in range(max(count, 0))]

    def bands(self, area: BaseGeometry) -> list[BaseGeometry]:
        """Thicken every scanline/area intersection into a band.

        Args:
            area: Usable placement area

        Returns:
            One band per intersection segment, top scanline first

        Raises:
            GeometryError: If the geometry library rejects an operation
        """
        half = self.line_height / 2.0
        result: list[BaseGeometry] = []

        try:
            for y in self.scanline_positions():
                hit = area.intersection(scanline(y, self.width))
                for segment in line_parts(hit):
                    result.append(flat_buffer(segment, half))
        except GEOSException as e:
            raise GeometryError("slot generator", str(e)) from e

        return result

    def generate(self, area: BaseGeometry) -> list[Slot]:
        """Generate slots in reading order.

        An area that no scanline crosses yields an empty list.

        Args:
            area: Usable placement area

        Returns:
            Slots with index 0..n-1 in reading order
        """
        if area.is_empty:
            return []

        slots: list[Slot] = []
        for band in self.bands(area):
            for piece in polygon_parts(band):
                left, bottom, right, top = piece.bounds
                slots.append(Slot(left=left, bottom=bottom, right=right, top=top))

        ordered = sort_reading_order(slots, self.row_precision)
        logger.debug(
            "Generated %d slots from %d scanlines (line_height=%.2f)",
            len(ordered), len(self.scanline_positions()), self.line_height
        )
        return ordered
