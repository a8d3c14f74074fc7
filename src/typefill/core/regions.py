"""Region extraction: raster cells to tonal polygons.

Each cell is classified as target or non-target by a tone threshold.
Horizontal runs of same-class cells are turned into rectangles and
unioned per class, which yields the maximal 4-connected regions of the
raster and the combined target area.
"""

import logging
from itertools import groupby

import numpy as np
from shapely.geometry import Polygon

from typefill.core.geometry import cell_box, merge, polygon_parts
from typefill.domain import Raster, Region, RegionMap, ToneClass
from typefill.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def validate_threshold(threshold: float) -> None:
    """Raise ConfigurationError unless threshold lies in [0, 1]."""
    if not 0.0 <= threshold <= 1.0:
        raise ConfigurationError("threshold", threshold, "must be within [0, 1]")


def classify(raster: Raster, threshold: float, target: ToneClass = ToneClass.DARK) -> np.ndarray:
    """Classify every raster cell.

    Args:
        raster: Source raster
        threshold: Tone threshold in [0, 1]
        target: Tonal class that counts as target

    Returns:
        Boolean array shaped like raster.tones, True for target cells

    Raises:
        ConfigurationError: If threshold is outside [0, 1]
    """
    validate_threshold(threshold)
    dark = raster.tones <= threshold
    return dark if target is ToneClass.DARK else ~dark


def _run_boxes(raster: Raster, mask: np.ndarray, value: bool) -> list[Polygon]:
    """Rectangles covering each horizontal run of cells whose mask equals value."""
    cell_w = raster.cell_width
    cell_h = raster.cell_height
    boxes: list[Polygon] = []

    for row in range(raster.rows):
        y = (raster.rows - 1 - row) * cell_h
        column = 0
        for is_set, run in groupby(mask[row].tolist()):
            length = sum(1 for _ in run)
            if is_set == value:
                boxes.append(cell_box(column * cell_w, y, length * cell_w, cell_h))
            column += length

    return boxes


def extract_regions(
    raster: Raster,
    threshold: float,
    target: ToneClass = ToneClass.DARK,
) -> RegionMap:
    """Partition a raster into target and non-target regions.

    Args:
        raster: Source raster in output space
        threshold: Tone threshold in [0, 1]
        target: Tonal class that receives text

    Returns:
        RegionMap with connected regions and both merged class areas

    Raises:
        ConfigurationError: If threshold is outside [0, 1]
    """
    mask = classify(raster, threshold, target)

    target_area = merge(_run_boxes(raster, mask, True))
    other_area = merge(_run_boxes(raster, mask, False))

    regions = [Region(polygon=p, tone_class=target, is_target=True) for p in polygon_parts(target_area)]
    regions.extend(
        Region(polygon=p, tone_class=target.opposite, is_target=False)
        for p in polygon_parts(other_area)
    )

    logger.debug(
        "Classified %d cells: %d target, %d regions (threshold=%.3f, target=%s)",
        mask.size, int(mask.sum()), len(regions), threshold, target.value
    )

    return RegionMap(
        regions=regions,
        target_area=target_area,
        other_area=other_area,
        target=target,
        threshold=threshold,
    )
