"""Core layout algorithms for typefill.

This module contains the layout stages:

- Region extraction (threshold classification, cell polygons, union)
- Region buffering (signed flat offset of the target area)
- Slot generation (scanlines clipped to the usable area, reading order)
- Width table (one measurement per distinct character)
- Packing (greedy fit, boundary-space trim, justification)

All stages are designed to be:
- Pure functions of their inputs
- Sequential, each consuming the previous stage's immutable output

Key functions:
- extract_regions: Partition a raster into tonal regions
- buffer_area: Grow or shrink the target area
- sort_reading_order: Order and index slots

Key classes:
- SlotGenerator: Builds slots from a usable area
- MetricsCache: Character width table
- Packer: Places the character stream into slots
- LayoutPipeline: Runs every stage in order
"""

from typefill.core.buffer import buffer_area
from typefill.core.metrics import MetricsCache
from typefill.core.packer import Packer
from typefill.core.pipeline import LayoutPipeline, LayoutResult
from typefill.core.regions import classify, extract_regions
from typefill.core.slots import SlotGenerator, sort_reading_order

__all__ = [
    # Pipeline classes
    "LayoutPipeline",
    "LayoutResult",
    # Stage classes
    "MetricsCache",
    "Packer",
    "SlotGenerator",
    # Stage functions
    "buffer_area",
    "classify",
    "extract_regions",
    "sort_reading_order",
]
