"""Domain models for typefill.

This module contains the value types that flow between the layout stages.
All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries for JSON output
- Independent of the image, font and drawing libraries

Key classes:
- RasterCell / Raster: Sampled image in output space
- ToneClass: Dark or light placement target
- Region / RegionMap: Polygonal partition of the raster
- Slot: Bounded rectangle receiving one line of text
- Placement / PackResult: The packer's placement plan
"""

from typefill.domain.placement import PackResult, Placement
from typefill.domain.raster import Raster, RasterCell
from typefill.domain.region import Region, RegionMap, ToneClass
from typefill.domain.slot import Slot

__all__: list[str] = [
    # Enums
    "ToneClass",
    # Core types
    "RasterCell",
    "Raster",
    "Region",
    "RegionMap",
    "Slot",
    "Placement",
    "PackResult",
]
