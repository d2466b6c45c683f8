"""Siting Bounded Context - Site Placement Optimizer.

Greedy, bounded-effort search for new site locations.

Each iteration:
1) Score every point of a (grid_steps + 1)^2 grid over the caller's sites'
   bounding box expanded by ``search_margin_deg`` (map)
2) Pick the best score, first in row-major order on ties (reduce)
3) Synthesize a 3-sector site there, optimize its sectors against the
   working network and add it to the working network

The working network lives in a PlacementRun created per call, so each
accepted candidate changes the scores of the next iteration while the
caller's list is never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import NamedTuple

from domain.coverage.grid import best_rsrp_at
from domain.coverage.settings import PropagationSettings
from domain.network.catalog import AntennaCatalog
from domain.network.errors import InvalidInputError
from domain.network.factories import MIN_MOUNT_HEIGHT_M, MOUNT_OFFSET_BELOW_TOP_M
from domain.network.value_objects import Sector, Site
from domain.siting.demand import MAX_DEMAND, traffic_density
from domain.siting.sectors import optimize_sectors
from domain.siting.settings import (
    DEFAULT_PLACEMENT_SETTINGS,
    DEFAULT_SECTOR_SETTINGS,
    PlacementSettings,
    SectorSettings,
)
from domain.siting.value_objects import Justification, SiteCandidate
from domain.terrain.ports import TerrainModel
from domain.terrain.services import geodesic_distance, haversine_km
from domain.terrain.value_objects import BoundingBox, GeoPoint

logger = logging.getLogger(__name__)


class PointScore(NamedTuple):
    """Score of one grid point and the terms it was built from."""

    latitude: float
    longitude: float
    total: float
    coverage: float
    mesh: float
    demand_term: float
    rsrp_dbm: float
    demand: float

    @property
    def justification(self) -> Justification:
        # Ties favour coverage, then mesh
        best = max(self.coverage, self.mesh, self.demand_term)
        if self.coverage == best:
            return Justification.COVERAGE_GAP
        if self.mesh == best:
            return Justification.MESH_CONTINUITY
        return Justification.CAPACITY_DEMAND


class PlacementRun:
    """Working state of one ``suggest_sites`` call.

    Starts as a copy of the caller's sites and grows by one refined
    candidate site per accepted iteration.
    """

    def __init__(self, sites: Iterable[Site]) -> None:
        self.sites: list[Site] = list(sites)
        self.candidates: list[SiteCandidate] = []

    @property
    def taken_ids(self) -> set[str]:
        return {site.id for site in self.sites}

    def accept(self, site: Site, candidate: SiteCandidate) -> None:
        self.sites.append(site)
        self.candidates.append(candidate)

    def nearest_site_m(self, latitude: float, longitude: float) -> float | None:
        """WGS84 geodesic distance to the nearest working site, in meters."""
        point = GeoPoint(latitude=latitude, longitude=longitude)
        return min(
            (geodesic_distance(site.location, point) for site in self.sites),
            default=None,
        )

    def min_separation_m(self, latitude: float, longitude: float) -> float:
        """Great-circle distance to the nearest working site, in meters."""
        return min(
            (
                haversine_km(site.latitude, site.longitude, latitude, longitude) * 1000
                for site in self.sites
            ),
            default=float("inf"),
        )


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------
def mesh_bonus(rsrp_dbm: float, settings: PlacementSettings = DEFAULT_PLACEMENT_SETTINGS) -> float:
    """Triangular handover-band bonus: 1.0 at the peak, 0 at and beyond the edges."""
    low, peak, high = settings.mesh_low_dbm, settings.mesh_peak_dbm, settings.mesh_high_dbm
    if rsrp_dbm <= low or rsrp_dbm >= high:
        return 0.0
    if rsrp_dbm <= peak:
        return (rsrp_dbm - low) / (peak - low)
    return (high - rsrp_dbm) / (high - peak)


def score_point(
    run: PlacementRun,
    latitude: float,
    longitude: float,
    use_terrain: bool,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None,
    propagation: PropagationSettings | None,
    settings: PlacementSettings,
) -> PointScore:
    level = best_rsrp_at(
        run.sites,
        latitude,
        longitude,
        use_terrain,
        catalog=catalog,
        terrain=terrain,
        settings=propagation,
    )
    demand = traffic_density(latitude, longitude)

    if run.min_separation_m(latitude, longitude) < settings.min_separation_m:
        return PointScore(latitude, longitude, 0.0, 0.0, 0.0, 0.0, level, demand)

    coverage = settings.coverage_weight * max(0.0, settings.coverage_reference_dbm - level)
    mesh = settings.mesh_weight * mesh_bonus(level, settings)
    demand_term = 0.0
    if level < settings.coverage_reference_dbm:
        demand_term = settings.demand_weight * demand / MAX_DEMAND

    return PointScore(
        latitude,
        longitude,
        coverage + mesh + demand_term,
        coverage,
        mesh,
        demand_term,
        level,
        demand,
    )


def search_grid(
    sites: Iterable[Site], settings: PlacementSettings = DEFAULT_PLACEMENT_SETTINGS
) -> tuple[list[float], list[float]]:
    """Latitude and longitude axes of the candidate grid (each grid_steps + 1 long)."""
    bounds = BoundingBox.around(
        ((site.latitude, site.longitude) for site in sites), settings.search_margin_deg
    )
    steps = settings.grid_steps
    lat_step = bounds.height_deg / steps
    lng_step = bounds.width_deg / steps
    latitudes = [bounds.min_y + i * lat_step for i in range(steps + 1)]
    longitudes = [bounds.min_x + j * lng_step for j in range(steps + 1)]
    return latitudes, longitudes


def _scan(
    run: PlacementRun,
    latitudes: list[float],
    longitudes: list[float],
    use_terrain: bool,
    **kwargs,
) -> Iterator[PointScore]:
    for latitude in latitudes:
        for longitude in longitudes:
            yield score_point(run, latitude, longitude, use_terrain, **kwargs)


def best_point(scores: Iterable[PointScore]) -> PointScore | None:
    """Highest total, first encountered on ties."""
    best: PointScore | None = None
    for score in scores:
        if best is None or score.total > best.total:
            best = score
    return best


# ---------------------------------------------------------------------------
# Candidate synthesis
# ---------------------------------------------------------------------------
def _resolve_candidate_antenna(
    catalog: AntennaCatalog, settings: PlacementSettings
) -> str:
    if settings.candidate_antenna_id is not None:
        if settings.candidate_antenna_id not in catalog:
            logger.warning(
                "Candidate antenna %s is not in the catalog; candidates will "
                "report the unknown-antenna level",
                settings.candidate_antenna_id,
            )
        return settings.candidate_antenna_id
    antenna = catalog.default()
    if antenna is None:
        raise InvalidInputError("Antenna catalog is empty; no candidate antenna available")
    return antenna.id


def _unique_site_id(base: str, taken: set[str]) -> str:
    site_id = base
    suffix = 1
    while site_id in taken:
        suffix += 1
        site_id = f"{base}-{suffix}"
    return site_id


def synthesize_candidate_site(
    site_id: str,
    name: str,
    latitude: float,
    longitude: float,
    antenna_id: str,
    settings: PlacementSettings = DEFAULT_PLACEMENT_SETTINGS,
) -> Site:
    """Evenly spaced sector layout (0/120/240 by default) before optimization."""
    count = settings.candidate_sector_count
    height = max(
        MIN_MOUNT_HEIGHT_M, settings.candidate_tower_height_m - MOUNT_OFFSET_BELOW_TOP_M
    )
    sectors = tuple(
        Sector(
            id=f"{site_id}-s{index + 1}",
            antenna_id=antenna_id,
            azimuth_deg=index * 360.0 / count,
            mechanical_tilt_deg=0.0,
            electrical_tilt_deg=settings.candidate_electrical_tilt_deg,
            tx_power_dbm=settings.candidate_tx_power_dbm,
            frequency_mhz=settings.candidate_frequency_mhz,
            height_m=height,
        )
        for index in range(count)
    )
    return Site(
        id=site_id,
        name=name,
        latitude=latitude,
        longitude=longitude,
        tower_height_m=settings.candidate_tower_height_m,
        tower_type=settings.candidate_tower_type,
        sectors=sectors,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def suggest_sites(
    existing_sites: Iterable[Site],
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    propagation: PropagationSettings | None = None,
    settings: PlacementSettings = DEFAULT_PLACEMENT_SETTINGS,
    sector_settings: SectorSettings = DEFAULT_SECTOR_SETTINGS,
) -> list[SiteCandidate]:
    """Propose up to ``settings.target_count`` new site locations.

    Args:
        existing_sites: Current network (never modified)
        use_terrain: Include terrain diffraction while scoring
        catalog: Antenna reference table
        terrain: Elevation/clutter model (synthetic by default)
        propagation: Link budget thresholds (defaults if None)
        settings: Grid, weights and candidate site template
        sector_settings: Knobs forwarded to the sector optimizer

    Returns:
        Candidates in acceptance order. Empty when there are no existing
        sites (there is no area to search) or when no grid point scores
        above zero.

    Raises:
        InvalidInputError: If a candidate antenna is needed and the catalog
            is empty

    Example:
        >>> for candidate in suggest_sites(network, catalog=catalog):
        ...     print(candidate.latitude, candidate.longitude, candidate.reason)
    """
    run = PlacementRun(existing_sites)
    if not run.sites:
        return []

    antenna_id = _resolve_candidate_antenna(catalog, settings)
    latitudes, longitudes = search_grid(run.sites, settings)
    logger.debug(
        "Site placement: %d existing sites, %dx%d grid, target %d",
        len(run.sites),
        len(latitudes),
        len(longitudes),
        settings.target_count,
    )

    for k in range(1, settings.target_count + 1):
        best = best_point(
            _scan(
                run,
                latitudes,
                longitudes,
                use_terrain,
                catalog=catalog,
                terrain=terrain,
                propagation=propagation,
                settings=settings,
            )
        )
        if best is None or best.total <= 0:
            logger.warning(
                "Site placement stopped after %d of %d candidates: no grid point "
                "improves the network",
                len(run.candidates),
                settings.target_count,
            )
            break

        site_id = _unique_site_id(f"candidate-{k}", run.taken_ids)
        name = f"Candidate {k}"
        provisional = synthesize_candidate_site(
            site_id, name, best.latitude, best.longitude, antenna_id, settings
        )
        refined = provisional.with_sectors(
            optimize_sectors(
                provisional,
                run.sites,
                use_terrain,
                catalog=catalog,
                terrain=terrain,
                propagation=propagation,
                settings=sector_settings,
            )
        )
        candidate = SiteCandidate(
            site_id=site_id,
            name=name,
            latitude=best.latitude,
            longitude=best.longitude,
            justification=best.justification,
            score=best.total,
            rsrp_dbm=best.rsrp_dbm,
            demand=best.demand,
            nearest_site_m=run.nearest_site_m(best.latitude, best.longitude),
            tower_height_m=refined.tower_height_m,
            tower_type=refined.tower_type,
            sectors=refined.sectors,
        )
        run.accept(refined, candidate)
        logger.info(
            "Accepted %s at (%.5f, %.5f): score %.2f, %s",
            site_id,
            best.latitude,
            best.longitude,
            best.total,
            best.justification.value,
        )

    return list(run.candidates)
