"""Terrain Bounded Context.

Responsible for physical geography and spatial calculations:
- Value Objects: GeoPoint, BoundingBox, TerrainGrid
- Ports: TerrainModel (elevation + clutter)
- Implementations: SyntheticTerrainModel, FlatTerrainModel, GridTerrainModel
- Services: haversine/bearing helpers, geodesic distance, bilinear sampling
"""

from domain.terrain.ports import TerrainModel
from domain.terrain.synthetic import (
    ClutterClass,
    FlatTerrainModel,
    GridTerrainModel,
    SyntheticTerrainModel,
)
from domain.terrain.value_objects import BoundingBox, GeoPoint, TerrainGrid

__all__ = [
    "BoundingBox",
    "ClutterClass",
    "FlatTerrainModel",
    "GeoPoint",
    "GridTerrainModel",
    "SyntheticTerrainModel",
    "TerrainGrid",
    "TerrainModel",
]
