"""Tests for terrain value objects (GeoPoint, BoundingBox, TerrainGrid)."""

from __future__ import annotations

import numpy as np
import pytest

from domain.terrain.value_objects import BoundingBox, GeoPoint, TerrainGrid


def create_test_grid(data: np.ndarray | None = None) -> TerrainGrid:
    if data is None:
        data = np.linspace(0, 100, 16, dtype=np.float32).reshape(4, 4)
    return TerrainGrid(
        data=data,
        bounds=BoundingBox(min_x=-50.0, min_y=-25.0, max_x=-40.0, max_y=-15.0),
        resolution=(2.5, 2.5),
    )


# ===========================================================================
# GeoPoint
# ===========================================================================
class TestGeoPointInvariants:
    @pytest.mark.parametrize(
        ("latitude", "longitude"),
        [(-90.1, 0.0), (90.1, 0.0), (0.0, -180.1), (0.0, 180.1)],
    )
    def test_out_of_range_rejected(self, latitude, longitude):
        with pytest.raises(ValueError):
            GeoPoint(latitude=latitude, longitude=longitude)

    def test_equal_by_value_and_hashable(self):
        a = GeoPoint(latitude=1.0, longitude=2.0)
        b = GeoPoint(latitude=1.0, longitude=2.0)

        assert a == b
        assert len({a, b}) == 1


# ===========================================================================
# BoundingBox
# ===========================================================================
class TestBoundingBoxInvariants:
    def test_inverted_x_rejected(self):
        with pytest.raises(ValueError, match="Invalid x ordering"):
            BoundingBox(min_x=10.0, min_y=0.0, max_x=5.0, max_y=1.0)

    def test_inverted_y_rejected(self):
        with pytest.raises(ValueError, match="Invalid y ordering"):
            BoundingBox(min_x=0.0, min_y=1.0, max_x=1.0, max_y=0.0)

    def test_longitude_out_of_range_rejected(self):
        with pytest.raises(ValueError, match="longitude out of range"):
            BoundingBox(min_x=-181.0, min_y=0.0, max_x=1.0, max_y=1.0)

    def test_is_frozen(self):
        bounds = BoundingBox(min_x=0.0, min_y=0.0, max_x=1.0, max_y=1.0)
        with pytest.raises(Exception):  # ValidationError (frozen instance)
            bounds.min_x = 0.5


class TestBoundingBoxAround:
    def test_pads_every_side(self):
        bounds = BoundingBox.around([(40.0, -74.0), (40.5, -73.5)], 0.1)

        assert bounds.min_y == pytest.approx(39.9)
        assert bounds.max_y == pytest.approx(40.6)
        assert bounds.min_x == pytest.approx(-74.1)
        assert bounds.max_x == pytest.approx(-73.4)

    def test_single_point(self):
        bounds = BoundingBox.around([(0.0, 0.0)], 0.04)

        assert bounds.width_deg == pytest.approx(0.08)
        assert bounds.height_deg == pytest.approx(0.08)

    def test_clamped_at_pole(self):
        bounds = BoundingBox.around([(89.95, 0.0)], 0.1)

        assert bounds.max_y == 90.0

    def test_empty_rejected(self):
        with pytest.raises(ValueError, match="At least one coordinate"):
            BoundingBox.around([], 0.1)

    def test_non_positive_padding_rejected(self):
        with pytest.raises(ValueError, match="padding_deg must be positive"):
            BoundingBox.around([(0.0, 0.0)], 0.0)

    def test_contains_inclusive(self):
        bounds = BoundingBox(min_x=0.0, min_y=0.0, max_x=1.0, max_y=1.0)

        assert bounds.contains(0.0, 1.0)
        assert not bounds.contains(-0.01, 0.5)


# ===========================================================================
# TerrainGrid
# ===========================================================================
class TestTerrainGridInvariants:
    def test_data_is_read_only_copy(self):
        source = np.zeros((4, 4), dtype=np.float32)
        grid = create_test_grid(source)

        with pytest.raises(ValueError):
            grid.data[0, 0] = 1.0
        # Caller's array untouched
        assert source.flags.writeable

    def test_data_cast_to_float32(self):
        grid = create_test_grid(np.zeros((4, 4), dtype=np.float64))

        assert grid.data.dtype == np.float32

    def test_non_2d_rejected(self):
        with pytest.raises(ValueError, match="Data must be 2D"):
            create_test_grid(np.zeros(4, dtype=np.float32))

    def test_all_nodata_rejected(self):
        with pytest.raises(ValueError, match="100% NoData"):
            create_test_grid(np.full((4, 4), np.nan, dtype=np.float32))

    def test_non_wgs84_crs_rejected(self):
        with pytest.raises(ValueError, match="CRS must be EPSG:4326"):
            TerrainGrid(
                data=np.zeros((2, 2), dtype=np.float32),
                bounds=BoundingBox(min_x=0.0, min_y=0.0, max_x=1.0, max_y=1.0),
                crs="EPSG:3857",
                resolution=(0.5, 0.5),
            )

    def test_non_positive_resolution_rejected(self):
        with pytest.raises(ValueError, match="Resolution must be positive"):
            TerrainGrid(
                data=np.zeros((2, 2), dtype=np.float32),
                bounds=BoundingBox(min_x=0.0, min_y=0.0, max_x=1.0, max_y=1.0),
                resolution=(0.0, 0.5),
            )
