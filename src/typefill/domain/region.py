"""Tonal regions extracted from a raster.

This module defines:
- ToneClass: Which tonal class (dark or light) receives text
- Region: One connected polygonal area of a single class
- RegionMap: The full partition of a raster plus the merged target area
"""

from dataclasses import dataclass, field
from enum import Enum

from shapely.geometry import Polygon
from shapely.geometry.base import BaseGeometry


class ToneClass(str, Enum):
    """Tonal class selected as the placement target."""

    DARK = "dark"
    LIGHT = "light"

    @property
    def opposite(self) -> "ToneClass":
        """The other tonal class."""
        return ToneClass.LIGHT if self is ToneClass.DARK else ToneClass.DARK


@dataclass(frozen=True)
class Region:
    """A maximal connected area of same-class cells.

    Attributes:
        polygon: Region outline (may contain holes)
        tone_class: Tonal class of the cells it covers
        is_target: True if this region belongs to the placement target
    """

    polygon: Polygon
    tone_class: ToneClass
    is_target: bool

    @property
    def area(self) -> float:
        """Region area in square output units."""
        return float(self.polygon.area)


@dataclass(frozen=True)
class RegionMap:
    """Partition of a raster into target and non-target regions.

    Attributes:
        regions: Every connected region, target regions first
        target_area: Union of all target cells (possibly multi-part or empty)
        other_area: Union of all non-target cells (possibly multi-part or empty)
        target: The tonal class that was selected as target
        threshold: Tone threshold used for classification
    """

    regions: list[Region]
    target_area: BaseGeometry
    other_area: BaseGeometry
    target: ToneClass
    threshold: float = field(default=0.5)

    def target_regions(self) -> list[Region]:
        """Get the connected target regions."""
        return [r for r in self.regions if r.is_target]

    def other_regions(self) -> list[Region]:
        """Get the connected non-target regions."""
        return [r for r in self.regions if not r.is_target]

    def has_target(self) -> bool:
        """Check if any cell was classified as target."""
        return not self.target_area.is_empty

    def dark_area(self) -> BaseGeometry:
        """Union of the dark cells, regardless of which class is the target."""
        return self.target_area if self.target is ToneClass.DARK else self.other_area

    def light_area(self) -> BaseGeometry:
        """Union of the light cells, regardless of which class is the target."""
        return self.other_area if self.target is ToneClass.DARK else self.target_area

