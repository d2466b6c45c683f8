"""Terrain Bounded Context - Domain Services.

Pure geodesy helpers shared by the link budget, the grid sampler and the
sector optimizer. NO I/O operations.

Two distance flavours live here:

* ``haversine_km`` - spherical (R = 6371 km), cheap, used in every hot loop
  of the propagation engine so results stay reproducible.
* ``geodesic_distance`` / ``destination_point`` - WGS84 ellipsoid via
  pyproj, used where a handful of accurate positions are needed.
"""

from __future__ import annotations

import math

from pyproj import Geod

from domain.terrain.value_objects import BoundingBox, GeoPoint, TerrainGrid

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
EARTH_RADIUS_KM = 6371.0

# WGS84 ellipsoid for geodesic calculations (same as GPS, EPSG:4326)
_geod = Geod(ellps="WGS84")


# ---------------------------------------------------------------------------
# Helper: Bounds Check
# ---------------------------------------------------------------------------
def is_within_bounds(point: GeoPoint, bounds: BoundingBox) -> bool:
    """Check if point is within bounds (inclusive)."""
    return bounds.contains(point.latitude, point.longitude)


# ---------------------------------------------------------------------------
# Spherical approximations
# ---------------------------------------------------------------------------
def planar_distance_sq(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Squared coordinate distance in degrees^2 (local planar approximation).

    Only meaningful as a pre-filter before the trigonometric calculations.
    """
    d_lat = lat1 - lat2
    d_lng = lng1 - lng2
    return d_lat * d_lat + d_lng * d_lng


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometres on a sphere of radius 6371 km."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def initial_bearing_deg(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Initial great-circle bearing from point 1 to point 2, in [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_lambda = math.radians(lng2 - lng1)
    y = math.sin(d_lambda) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(
        d_lambda
    )
    return math.degrees(math.atan2(y, x)) % 360.0


def angular_difference_deg(a: float, b: float) -> float:
    """Smallest absolute difference between two bearings, in [0, 180]."""
    return abs(((a - b + 180.0) % 360.0) - 180.0)


# ---------------------------------------------------------------------------
# Geodesic (WGS84 ellipsoid)
# ---------------------------------------------------------------------------
def geodesic_distance(start: GeoPoint, end: GeoPoint) -> float:
    """Calculate geodesic distance between two points in meters.

    Uses WGS84 ellipsoid for millimeter-level precision.
    """
    _, _, distance = _geod.inv(
        start.longitude, start.latitude, end.longitude, end.latitude
    )
    return float(abs(distance))


def destination_point(origin: GeoPoint, bearing_deg: float, distance_m: float) -> GeoPoint:
    """Solve the direct geodesic problem: walk ``distance_m`` along ``bearing_deg``.

    Args:
        origin: Starting point
        bearing_deg: Azimuth clockwise from north, degrees
        distance_m: Distance along the geodesic in meters (>= 0)

    Returns:
        The destination as a GeoPoint (longitude normalized to [-180, 180])

    Raises:
        ValueError: If distance_m is negative
    """
    if distance_m < 0:
        raise ValueError("distance_m must not be negative")

    lon, lat, _ = _geod.fwd(origin.longitude, origin.latitude, bearing_deg, distance_m)
    lon = ((lon + 180.0) % 360.0) - 180.0
    return GeoPoint(latitude=lat, longitude=lon)


# ---------------------------------------------------------------------------
# Bilinear Interpolation
# ---------------------------------------------------------------------------
def bilinear_interpolate(grid: TerrainGrid, point: GeoPoint) -> tuple[float, bool]:
    """Interpolate elevation at arbitrary point using 4 nearest pixels.

    Returns (elevation, is_nodata).
    If any of the 4 neighbors is NaN, returns (NaN, True).

    Points exactly on grid boundaries use clamped indices, so bilinear
    degrades to linear on edges and to nearest on corners.
    """
    # Row 0 = north edge (max_y), so y is inverted
    px = (point.longitude - grid.bounds.min_x) / grid.resolution[0]
    py = (grid.bounds.max_y - point.latitude) / grid.resolution[1]

    height, width = grid.data.shape

    x0 = int(math.floor(px))
    y0 = int(math.floor(py))
    x1 = x0 + 1
    y1 = y0 + 1

    x0 = max(0, min(x0, width - 1))
    x1 = max(0, min(x1, width - 1))
    y0 = max(0, min(y0, height - 1))
    y1 = max(0, min(y1, height - 1))

    q11 = float(grid.data[y0, x0])  # top-left
    q21 = float(grid.data[y0, x1])  # top-right
    q12 = float(grid.data[y1, x0])  # bottom-left
    q22 = float(grid.data[y1, x1])  # bottom-right

    # No infill across NoData
    if math.isnan(q11) or math.isnan(q21) or math.isnan(q12) or math.isnan(q22):
        return (float("nan"), True)

    fx = px - math.floor(px)
    fy = py - math.floor(py)

    elevation = (
        q11 * (1 - fx) * (1 - fy)
        + q21 * fx * (1 - fy)
        + q12 * (1 - fx) * fy
        + q22 * fx * fy
    )

    return (float(elevation), False)
