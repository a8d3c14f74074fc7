"""I/O layer for typefill.

This module holds the collaborators around the layout core:

- Load images and sample them into rasters (Pillow)
- Measure character widths from font files (fonttools)
- Draw placement plans to image files (Pillow)
- Write layouts as JSON

Key classes:
- ImageReader: Load images and produce rasters
- FontMetrics: Per-character advance widths
- LayoutRenderer: Draw placements and slots
"""

from typefill.io.fonts import FontMetrics
from typefill.io.reader import ImageReader, grid_shape
from typefill.io.renderer import LayoutRenderer
from typefill.io.writer import layout_to_dict, read_layout_json, write_layout_json

__all__ = [
    "FontMetrics",
    "ImageReader",
    "LayoutRenderer",
    "grid_shape",
    "layout_to_dict",
    "read_layout_json",
    "write_layout_json",
]
