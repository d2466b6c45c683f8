"""Terrain Bounded Context - TerrainModel implementations.

``SyntheticTerrainModel`` is the deterministic trigonometric surrogate used
by default. ``FlatTerrainModel`` is an open-field reference with no relief
and no clutter. ``GridTerrainModel`` samples an in-memory ``TerrainGrid``.
"""

from __future__ import annotations

import math
from enum import Enum

from domain.terrain.errors import PointOutOfBoundsError
from domain.terrain.ports import TerrainModel
from domain.terrain.services import bilinear_interpolate, is_within_bounds
from domain.terrain.value_objects import GeoPoint, TerrainGrid


class ClutterClass(str, Enum):
    """Coarse land-use class with its fixed additive loss."""

    DENSE_URBAN = "dense_urban"
    URBAN = "urban"
    OPEN = "open"

    @property
    def loss_db(self) -> float:
        return _CLUTTER_LOSS_DB[self]


_CLUTTER_LOSS_DB: dict[ClutterClass, float] = {
    ClutterClass.DENSE_URBAN: 30.0,
    ClutterClass.URBAN: 15.0,
    ClutterClass.OPEN: 0.0,
}

# Building-footprint thresholds on |sin| of the scaled coordinates
DENSE_URBAN_THRESHOLD = 0.3
URBAN_THRESHOLD = 0.7


class SyntheticTerrainModel:
    """Deterministic pseudo-terrain: rolling hills plus a fine ripple.

    Elevation stays within roughly +/-102 m; clutter is one of three bands.
    """

    def elevation_m(self, latitude: float, longitude: float) -> float:
        macro = math.sin(latitude * 800) * 45 + math.cos(longitude * 800) * 45
        micro = math.sin(latitude * 5000 + longitude * 3000) * 12
        return macro + micro

    def clutter_class(self, latitude: float, longitude: float) -> ClutterClass:
        building_x = abs(math.sin(latitude * 7241))
        building_y = abs(math.sin(longitude * 7122))
        if building_x < DENSE_URBAN_THRESHOLD and building_y < DENSE_URBAN_THRESHOLD:
            return ClutterClass.DENSE_URBAN
        if building_x < URBAN_THRESHOLD and building_y < URBAN_THRESHOLD:
            return ClutterClass.URBAN
        return ClutterClass.OPEN

    def clutter_loss_db(self, latitude: float, longitude: float) -> float:
        return self.clutter_class(latitude, longitude).loss_db

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class FlatTerrainModel:
    """Sea-level plane without clutter."""

    def elevation_m(self, latitude: float, longitude: float) -> float:
        return 0.0

    def clutter_loss_db(self, latitude: float, longitude: float) -> float:
        return 0.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class GridTerrainModel:
    """Elevation from a TerrainGrid, clutter from a companion model.

    Parameters
    ----------
    grid: TerrainGrid
        Elevation raster in EPSG:4326.
    clutter: TerrainModel | None
        Model whose ``clutter_loss_db`` is used. Defaults to the synthetic one.
    outside: TerrainModel | None
        Fallback for points outside the grid. If None, such points raise
        PointOutOfBoundsError.
    nodata_elevation_m: float
        Elevation reported where the grid holds NoData.
    """

    def __init__(
        self,
        grid: TerrainGrid,
        clutter: TerrainModel | None = None,
        outside: TerrainModel | None = None,
        nodata_elevation_m: float = 0.0,
    ) -> None:
        self.grid = grid
        self.clutter = clutter if clutter is not None else SyntheticTerrainModel()
        self.outside = outside
        self.nodata_elevation_m = nodata_elevation_m

    def elevation_m(self, latitude: float, longitude: float) -> float:
        point = GeoPoint(latitude=latitude, longitude=longitude)
        if not is_within_bounds(point, self.grid.bounds):
            if self.outside is not None:
                return self.outside.elevation_m(latitude, longitude)
            raise PointOutOfBoundsError(point, self.grid.bounds)

        elevation, is_nodata = bilinear_interpolate(self.grid, point)
        if is_nodata:
            return self.nodata_elevation_m
        return elevation

    def clutter_loss_db(self, latitude: float, longitude: float) -> float:
        return self.clutter.clutter_loss_db(latitude, longitude)
