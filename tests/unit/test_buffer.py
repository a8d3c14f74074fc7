"""Unit tests for region buffering."""

import pytest
from shapely.geometry import MultiPolygon, Polygon, box

from typefill.core.buffer import buffer_area
from typefill.exceptions import EmptyAreaError, GeometryError


class TestBufferArea:
    """Tests for buffer_area."""

    def test_zero_offset_is_identity(self):
        """Offset 0 returns a geometrically equivalent area."""
        area = box(0, 0, 4, 2).union(box(4, 0, 6, 5))
        usable = buffer_area(area, 0.0)
        assert usable.symmetric_difference(area).area == pytest.approx(0.0, abs=1e-9)

    def test_positive_offset_grows_with_square_corners(self):
        """Growing a rectangle keeps it a rectangle."""
        usable = buffer_area(box(0, 0, 2, 2), 1.0)
        assert usable.bounds == pytest.approx((-1.0, -1.0, 3.0, 3.0))
        assert usable.area == pytest.approx(16.0)

    def test_negative_offset_shrinks(self):
        """Eroding a rectangle moves every edge inward."""
        usable = buffer_area(box(0, 0, 4, 2), -0.5)
        assert usable.bounds == pytest.approx((0.5, 0.5, 3.5, 1.5))
        assert usable.area == pytest.approx(3.0)

    def test_erosion_can_split_area(self):
        """Eroding a dumbbell through its thin neck leaves two parts."""
        dumbbell = box(0, 0, 4, 4).union(box(4, 1.5, 8, 2.5)).union(box(8, 0, 12, 4))
        usable = buffer_area(dumbbell, -1.0)
        assert isinstance(usable, MultiPolygon)
        assert len(usable.geoms) == 2
        assert usable.is_valid

    def test_eroded_away_raises(self):
        """Eroding past the area's half width leaves nothing."""
        with pytest.raises(EmptyAreaError) as exc_info:
            buffer_area(box(0, 0, 2, 2), -2.0)
        assert exc_info.value.offset == -2.0
        assert isinstance(exc_info.value, GeometryError)

    def test_empty_input_raises(self):
        """An empty target area cannot produce a usable area."""
        with pytest.raises(EmptyAreaError):
            buffer_area(Polygon(), 0.0)

    def test_invalid_input_is_repaired(self):
        """A self-intersecting bow tie comes back valid."""
        bow_tie = Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])
        assert not bow_tie.is_valid
        usable = buffer_area(bow_tie, 0.0)
        assert usable.is_valid
        assert usable.area == pytest.approx(2.0)
