"""Siting Bounded Context - Sector Parameter Optimizer.

Steers a site's sectors toward the weakest surrounding direction and sets
their downtilt from local demand:

1) Probe ``probe_count`` bearings on a ring of ``probe_radius_m`` around the
   site, scoring each with the best RSRP from *other* sites
2) The weakest bearing (first on ties) is the coverage hole
3) Existing sectors are spread evenly starting at the hole
4) Tilt interpolates between min/max tilt by demand, plus a bonus for tall
   towers, and is carried as electrical tilt
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from domain.coverage.grid import best_rsrp_at
from domain.coverage.settings import PropagationSettings
from domain.network.catalog import AntennaCatalog
from domain.network.errors import InvalidInputError
from domain.network.value_objects import Sector, Site
from domain.siting.demand import MAX_DEMAND, traffic_density
from domain.siting.settings import DEFAULT_SECTOR_SETTINGS, SectorSettings
from domain.terrain.ports import TerrainModel
from domain.terrain.services import destination_point

logger = logging.getLogger(__name__)


def find_coverage_hole(
    site: Site,
    other_sites: Iterable[Site],
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    propagation: PropagationSettings | None = None,
    settings: SectorSettings = DEFAULT_SECTOR_SETTINGS,
) -> float:
    """Bearing (degrees) of the weakest probe around ``site``.

    Ties resolve to the earliest bearing in probe order (0 deg first).
    """
    others = tuple(other_sites)
    spacing = 360.0 / settings.probe_count

    hole_bearing = 0.0
    weakest = float("inf")
    for k in range(settings.probe_count):
        bearing = k * spacing
        probe = destination_point(site.location, bearing, settings.probe_radius_m)
        level = best_rsrp_at(
            others,
            probe.latitude,
            probe.longitude,
            use_terrain,
            catalog=catalog,
            terrain=terrain,
            settings=propagation,
        )
        if level < weakest:
            weakest = level
            hole_bearing = bearing

    logger.debug(
        "Coverage hole for site %s at %.1f deg (%.1f dBm)",
        site.id,
        hole_bearing,
        weakest,
    )
    return hole_bearing


def demand_tilt_deg(site: Site, settings: SectorSettings = DEFAULT_SECTOR_SETTINGS) -> float:
    """Downtilt for ``site`` from the synthetic demand at its location."""
    demand = traffic_density(site.latitude, site.longitude)
    tilt = settings.min_tilt_deg + (
        settings.max_tilt_deg - settings.min_tilt_deg
    ) * (demand / MAX_DEMAND)
    if site.tower_height_m > settings.tall_tower_threshold_m:
        tilt += settings.tall_tower_tilt_bonus_deg
    return round(tilt, settings.tilt_decimals)


def optimize_sectors(
    site: Site,
    all_other_sites: Iterable[Site],
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    propagation: PropagationSettings | None = None,
    settings: SectorSettings = DEFAULT_SECTOR_SETTINGS,
) -> tuple[Sector, ...]:
    """Re-aim and re-tilt the sectors of ``site``.

    Args:
        site: Site to optimize (must have at least one sector)
        all_other_sites: Surrounding network; entries sharing ``site.id``
            are ignored, so the full network list can be passed as is
        use_terrain: Include terrain diffraction while probing
        catalog: Antenna reference table
        terrain: Elevation/clutter model (synthetic by default)
        propagation: Link budget thresholds (defaults if None)
        settings: Probe ring and tilt knobs

    Returns:
        New sectors in the original order with ids, antennas, power,
        frequency and heights preserved; azimuths spread evenly from the
        hole, mechanical tilt 0 and electrical tilt set from demand.

    Raises:
        InvalidInputError: If the site has no sectors
    """
    if not site.sectors:
        raise InvalidInputError(f"Site {site.id!r} has no sectors to optimize")

    unknown = [s.antenna_id for s in site.sectors if s.antenna_id not in catalog]
    if unknown:
        logger.warning(
            "Site %s references antennas missing from the catalog: %s",
            site.id,
            ", ".join(sorted(set(unknown))),
        )

    others = [other for other in all_other_sites if other.id != site.id]
    hole = find_coverage_hole(
        site,
        others,
        use_terrain,
        catalog=catalog,
        terrain=terrain,
        propagation=propagation,
        settings=settings,
    )
    tilt = demand_tilt_deg(site, settings)
    spacing = 360.0 / len(site.sectors)

    return tuple(
        sector.model_copy(
            update={
                "azimuth_deg": (hole + index * spacing) % 360.0,
                "mechanical_tilt_deg": 0.0,
                "electrical_tilt_deg": tilt,
            }
        )
        for index, sector in enumerate(site.sectors)
    )
