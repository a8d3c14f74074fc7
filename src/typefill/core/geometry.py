"""Geometry helpers wrapping shapely.

This module is the single seam between the layout stages and the geometry
library. It provides:
- Validity repair that keeps only the areal part of a result
- Flattening of multi-part and collection geometries
- Flat-capped, mitre-joined buffering
- Horizontal scanline construction

All functions are pure and return new geometries.
"""

from collections.abc import Iterable

from shapely import BufferCapStyle, BufferJoinStyle
from shapely.geometry import LineString, MultiPolygon, Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union
from shapely.validation import make_valid


def polygon_parts(geometry: BaseGeometry) -> list[Polygon]:
    """Split a geometry into its non-empty single-part polygons.

    Non-areal members of collections (points, lines) are dropped.

    Args:
        geometry: Any shapely geometry

    Returns:
        List of polygons in the order the geometry stores them
    """
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    parts: list[Polygon] = []
    for member in getattr(geometry, "geoms", []):
        parts.extend(polygon_parts(member))
    return parts


def line_parts(geometry: BaseGeometry) -> list[LineString]:
    """Split a geometry into its non-degenerate single-part line strings.

    Points (e.g. a scanline touching a vertex) are dropped.

    Args:
        geometry: Any shapely geometry

    Returns:
        List of line strings with positive length
    """
    if geometry.is_empty:
        return []
    if isinstance(geometry, LineString):
        return [geometry] if geometry.length > 0 else []
    parts: list[LineString] = []
    for member in getattr(geometry, "geoms", []):
        parts.extend(line_parts(member))
    return parts


def repair(geometry: BaseGeometry) -> BaseGeometry:
    """Repair an areal geometry and discard any non-areal by-products.

    Self-intersections are resolved with make_valid, which can emit lines
    or points alongside polygons; only the polygons are kept.

    Args:
        geometry: A possibly invalid polygonal geometry

    Returns:
        A valid Polygon or MultiPolygon (empty Polygon if nothing remains)
    """
    if geometry.is_empty:
        return Polygon()
    if geometry.is_valid and isinstance(geometry, (Polygon, MultiPolygon)):
        return geometry
    parts = polygon_parts(make_valid(geometry))
    if not parts:
        return Polygon()
    return parts[0] if len(parts) == 1 else unary_union(parts)


def merge(polygons: Iterable[Polygon]) -> BaseGeometry:
    """Union polygons and repair the result."""
    polygon_list = list(polygons)
    if not polygon_list:
        return Polygon()
    return repair(unary_union(polygon_list))


def flat_buffer(geometry: BaseGeometry, distance: float) -> BaseGeometry:
    """Buffer with flat caps and mitre joins so straight edges stay straight.

    Args:
        geometry: Geometry to offset (line or polygon)
        distance: Signed offset distance (negative erodes polygons)

    Returns:
        Buffered geometry (may be empty)
    """
    return geometry.buffer(
        distance,
        cap_style=BufferCapStyle.flat,
        join_style=BufferJoinStyle.mitre,
    )


def scanline(y: float, width: float) -> LineString:
    """Build a horizontal segment spanning [0, width] at height y."""
    return LineString([(0.0, y), (width, y)])


def cell_box(x: float, y: float, width: float, height: float) -> Polygon:
    """Build the rectangle covering a raster cell or run of cells."""
    return box(x, y, x + width, y + height)
