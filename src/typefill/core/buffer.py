"""Region buffering: grow or shrink the target area."""

import logging

from shapely.errors import GEOSException
from shapely.geometry.base import BaseGeometry

from typefill.core.geometry import flat_buffer, repair
from typefill.exceptions import EmptyAreaError, GeometryError

logger = logging.getLogger(__name__)


def buffer_area(area: BaseGeometry, offset: float) -> BaseGeometry:
    """Offset the target area to produce the usable placement area.

    Positive offsets grow the area, negative offsets erode it. An offset of
    zero returns a repaired copy of the input. Erosion of concave shapes can
    self-intersect, so the result is always repaired.

    Args:
        area: Target area polygon (possibly multi-part)
        offset: Signed distance in output units

    Returns:
        Valid Polygon or MultiPolygon

    Raises:
        EmptyAreaError: If nothing remains (including an empty input area)
        GeometryError: If the geometry library rejects the operation
    """
    try:
        usable = repair(flat_buffer(area, offset)) if offset != 0 else repair(area)
    except GEOSException as e:
        raise GeometryError("region buffer", str(e)) from e

    if usable.is_empty:
        raise EmptyAreaError("region buffer", offset)

    logger.debug(
        "Buffered area by %.2f: %.1f -> %.1f square units",
        offset, area.area, usable.area
    )
    return usable
