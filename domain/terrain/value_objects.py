"""Terrain Bounded Context - Value Objects.

Immutable data structures representing geographic concepts.
All validation occurs at construction time via Pydantic.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field, model_validator

# WGS84 coordinate limits
MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


class BoundingBox(BaseModel):
    """Geographic extent in EPSG:4326 (Value Object).

    Invariants are enforced at construction time - invalid BoundingBox
    cannot be instantiated.
    """

    min_x: float  # Western boundary (longitude)
    min_y: float  # Southern boundary (latitude)
    max_x: float  # Eastern boundary (longitude)
    max_y: float  # Northern boundary (latitude)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_bounds(self) -> "BoundingBox":
        # Longitude range
        if not (MIN_LONGITUDE <= self.min_x <= MAX_LONGITUDE):
            raise ValueError(f"min_x longitude out of range: {self.min_x}")
        if not (MIN_LONGITUDE <= self.max_x <= MAX_LONGITUDE):
            raise ValueError(f"max_x longitude out of range: {self.max_x}")
        # Latitude range
        if not (MIN_LATITUDE <= self.min_y <= MAX_LATITUDE):
            raise ValueError(f"min_y latitude out of range: {self.min_y}")
        if not (MIN_LATITUDE <= self.max_y <= MAX_LATITUDE):
            raise ValueError(f"max_y latitude out of range: {self.max_y}")
        # Ordering
        if not (self.min_x < self.max_x):
            raise ValueError(
                f"Invalid x ordering: min_x={self.min_x} >= max_x={self.max_x}"
            )
        if not (self.min_y < self.max_y):
            raise ValueError(
                f"Invalid y ordering: min_y={self.min_y} >= max_y={self.max_y}"
            )
        return self

    @classmethod
    def around(
        cls, coordinates: Iterable[tuple[float, float]], padding_deg: float
    ) -> "BoundingBox":
        """Build the box enclosing ``(lat, lng)`` pairs, padded on every side.

        Padding is clamped to the WGS84 limits so boxes near the poles or the
        antimeridian stay constructible.

        Raises:
            ValueError: If no coordinates are given or padding is not positive.
        """
        coords = list(coordinates)
        if not coords:
            raise ValueError("At least one coordinate is required")
        if padding_deg <= 0:
            raise ValueError("padding_deg must be positive")

        lats = [lat for lat, _ in coords]
        lngs = [lng for _, lng in coords]
        return cls(
            min_x=max(MIN_LONGITUDE, min(lngs) - padding_deg),
            min_y=max(MIN_LATITUDE, min(lats) - padding_deg),
            max_x=min(MAX_LONGITUDE, max(lngs) + padding_deg),
            max_y=min(MAX_LATITUDE, max(lats) + padding_deg),
        )

    @property
    def width_deg(self) -> float:
        return self.max_x - self.min_x

    @property
    def height_deg(self) -> float:
        return self.max_y - self.min_y

    def contains(self, latitude: float, longitude: float) -> bool:
        """Inclusive containment test."""
        return (
            self.min_x <= longitude <= self.max_x
            and self.min_y <= latitude <= self.max_y
        )


class TerrainGrid(BaseModel):
    """Immutable elevation grid with geographic metadata (Value Object).

    The data array is made truly immutable (read-only) at construction time.
    Attempts to modify the array after construction will raise ValueError.
    Row 0 is the northern edge (``bounds.max_y``).
    """

    data: NDArray[np.float32]  # 2D float32 array (height x width), read-only
    bounds: BoundingBox  # Geographic extent in EPSG:4326
    crs: str = "EPSG:4326"  # Always "EPSG:4326" (system CRS)
    resolution: tuple[float, float]  # (x_res, y_res) absolute values in degrees

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_grid(self) -> "TerrainGrid":
        # 2D array
        if self.data.ndim != 2:
            raise ValueError(f"Data must be 2D, got {self.data.ndim}D")
        # Non-empty
        if self.data.shape[0] == 0 or self.data.shape[1] == 0:
            raise ValueError(f"Data cannot be empty: {self.data.shape}")
        # CRS
        if self.crs != "EPSG:4326":
            raise ValueError(f"CRS must be EPSG:4326, got {self.crs}")
        # Resolution positive (absolute)
        if self.resolution[0] <= 0 or self.resolution[1] <= 0:
            raise ValueError(f"Resolution must be positive: {self.resolution}")
        if np.isnan(self.data).all():
            raise ValueError("Grid contains 100% NoData")

        # Owned, contiguous float32 copy; never flip flags on caller arrays.
        immutable = np.array(self.data, dtype=np.float32, copy=True, order="C")
        immutable.flags.writeable = False
        object.__setattr__(self, "data", immutable)

        return self


class GeoPoint(BaseModel):
    """Geographic coordinate in WGS84 (Value Object).

    Pydantic frozen models compare by value, so two GeoPoints with the same
    coordinates are equal and hashable.
    """

    latitude: float = Field(ge=MIN_LATITUDE, le=MAX_LATITUDE)
    longitude: float = Field(ge=MIN_LONGITUDE, le=MAX_LONGITUDE)

    model_config = ConfigDict(frozen=True)
