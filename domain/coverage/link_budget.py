"""Coverage Bounded Context - Link Budget Calculator.

Received signal level (RSRP) for one (site, sector, target point) triple.

Pipeline:
1) Planar pre-filter (squared degrees) - sentinel when obviously too far
2) Haversine distance + bearing - sentinel beyond the maximum range
3) Antenna lookup - sentinel when the catalog has no such id
4) Horizontal + vertical pattern attenuation, capped at front-to-back
5) Okumura-Hata path loss (free-space formula inside the near field)
6) Clutter loss from the terrain model
7) Optional knife-edge diffraction from sampled terrain
8) Sum, floored at the no-signal sentinel

Everything here is a pure function of its inputs; the site, sector, catalog
and terrain model are only read.
"""

from __future__ import annotations

from typing import NamedTuple

from domain.coverage.propagation import (
    elevation_angle_deg,
    fresnel_parameter,
    hata_urban_path_loss_db,
    knife_edge_loss_db,
    pattern_loss_db,
    wavelength_m,
)
from domain.coverage.settings import DEFAULT_PROPAGATION_SETTINGS, PropagationSettings
from domain.coverage.value_objects import LinkBudget
from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import Sector, Site
from domain.terrain.ports import TerrainModel
from domain.terrain.services import (
    angular_difference_deg,
    haversine_km,
    initial_bearing_deg,
    planar_distance_sq,
)
from domain.terrain.synthetic import SyntheticTerrainModel

DEFAULT_TERRAIN: TerrainModel = SyntheticTerrainModel()


class _Terms(NamedTuple):
    distance_km: float
    bearing_deg: float
    horizontal_loss_db: float
    vertical_loss_db: float
    pattern_gain_db: float
    antenna_gain_dbi: float
    tx_power_dbm: float
    path_loss_db: float
    clutter_loss_db: float
    diffraction_loss_db: float
    rsrp_dbm: float


# ---------------------------------------------------------------------------
# Terrain diffraction
# ---------------------------------------------------------------------------
def diffraction_loss_db(
    site: Site,
    mount_height_m: float,
    target_lat: float,
    target_lng: float,
    distance_m: float,
    frequency_mhz: float,
    terrain: TerrainModel,
    settings: PropagationSettings = DEFAULT_PROPAGATION_SETTINGS,
) -> float:
    """Worst-edge knife-edge loss along the straight site -> target path.

    Samples ``settings.diffraction_samples`` evenly spaced interior points,
    compares ground elevation with the line-of-sight height there and converts
    the largest Fresnel parameter into a loss.
    """
    if distance_m <= 0:
        return 0.0

    tx_elevation = terrain.elevation_m(site.latitude, site.longitude) + mount_height_m
    rx_elevation = terrain.elevation_m(target_lat, target_lng) + settings.rx_height_m
    wavelength = wavelength_m(frequency_mhz)
    samples = settings.diffraction_samples

    worst_v = float("-inf")
    for i in range(1, samples + 1):
        fraction = i / (samples + 1)
        sample_lat = site.latitude + (target_lat - site.latitude) * fraction
        sample_lng = site.longitude + (target_lng - site.longitude) * fraction
        ground = terrain.elevation_m(sample_lat, sample_lng)
        line_of_sight = tx_elevation + (rx_elevation - tx_elevation) * fraction
        v = fresnel_parameter(
            ground - line_of_sight,
            distance_m * fraction,
            distance_m * (1 - fraction),
            wavelength,
        )
        worst_v = max(worst_v, v)

    return knife_edge_loss_db(worst_v)


# ---------------------------------------------------------------------------
# Core evaluation
# ---------------------------------------------------------------------------
def _evaluate(
    site: Site,
    sector: Sector,
    target_lat: float,
    target_lng: float,
    use_terrain: bool,
    catalog: AntennaCatalog,
    terrain: TerrainModel,
    settings: PropagationSettings,
) -> _Terms | float:
    """Return the full term breakdown, or a sentinel RSRP when there is none."""
    if (
        planar_distance_sq(site.latitude, site.longitude, target_lat, target_lng)
        > settings.link_prefilter_deg_sq
    ):
        return settings.no_signal_dbm

    distance_km = haversine_km(site.latitude, site.longitude, target_lat, target_lng)
    if distance_km > settings.max_range_km:
        return settings.no_signal_dbm

    antenna = catalog.get(sector.antenna_id)
    if antenna is None:
        return settings.unknown_antenna_dbm

    distance_m = distance_km * 1000
    bearing = initial_bearing_deg(site.latitude, site.longitude, target_lat, target_lng)

    horizontal_offset = angular_difference_deg(bearing, sector.azimuth_deg)
    horizontal_loss = pattern_loss_db(
        horizontal_offset,
        antenna.horizontal_beamwidth_deg,
        settings.front_to_back_db,
        settings.pattern_slope_db,
    )

    mount_height = site.mount_height_m(sector)
    angle_to_target = elevation_angle_deg(mount_height - settings.rx_height_m, distance_m)
    vertical_offset = abs(angle_to_target - sector.effective_tilt_deg)
    vertical_loss = pattern_loss_db(
        vertical_offset,
        antenna.vertical_beamwidth_deg,
        settings.vertical_loss_cap_db,
        settings.pattern_slope_db,
    )

    # Pattern alone never attenuates more than the front-to-back ratio
    pattern_gain = max(-settings.front_to_back_db, -(horizontal_loss + vertical_loss))

    path_loss = max(
        0.0,
        hata_urban_path_loss_db(
            distance_km,
            sector.frequency_mhz,
            mount_height,
            settings.rx_height_m,
            settings.near_field_km,
        ),
    )

    clutter_loss = terrain.clutter_loss_db(target_lat, target_lng)

    diffraction_loss = 0.0
    if use_terrain and distance_km >= settings.near_field_km:
        diffraction_loss = diffraction_loss_db(
            site,
            mount_height,
            target_lat,
            target_lng,
            distance_m,
            sector.frequency_mhz,
            terrain,
            settings,
        )

    rsrp_dbm = (
        sector.tx_power_dbm
        + antenna.gain_dbi
        + pattern_gain
        - path_loss
        - clutter_loss
        - diffraction_loss
    )

    return _Terms(
        distance_km=distance_km,
        bearing_deg=bearing,
        horizontal_loss_db=horizontal_loss,
        vertical_loss_db=vertical_loss,
        pattern_gain_db=pattern_gain,
        antenna_gain_dbi=antenna.gain_dbi,
        tx_power_dbm=sector.tx_power_dbm,
        path_loss_db=path_loss,
        clutter_loss_db=clutter_loss,
        diffraction_loss_db=diffraction_loss,
        rsrp_dbm=max(settings.no_signal_dbm, rsrp_dbm),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def rsrp(
    site: Site,
    sector: Sector,
    target_lat: float,
    target_lng: float,
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    settings: PropagationSettings | None = None,
) -> float:
    """Received signal level at a target point, in dBm.

    Args:
        site: Site hosting the sector
        sector: Transmitting sector (must belong to ``site``)
        target_lat: Receiver latitude, WGS84 degrees
        target_lng: Receiver longitude, WGS84 degrees
        use_terrain: Include knife-edge diffraction from terrain
        catalog: Antenna reference table
        terrain: Elevation/clutter model (synthetic by default)
        settings: Engine thresholds (defaults if None)

    Returns:
        RSRP in dBm. Sentinels: ``settings.no_signal_dbm`` (-150) when the
        target is out of range, ``settings.unknown_antenna_dbm`` (-140) when
        the sector's antenna is not in the catalog. Never below -150 and never
        above ``tx_power_dbm + gain_dbi``.

    Example:
        >>> level = rsrp(site, site.sectors[0], 40.7218, -74.0060, catalog=catalog)
    """
    terms = _evaluate(
        site,
        sector,
        target_lat,
        target_lng,
        use_terrain,
        catalog,
        terrain if terrain is not None else DEFAULT_TERRAIN,
        settings if settings is not None else DEFAULT_PROPAGATION_SETTINGS,
    )
    if isinstance(terms, float):
        return terms
    return terms.rsrp_dbm


def link_budget(
    site: Site,
    sector: Sector,
    target_lat: float,
    target_lng: float,
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    settings: PropagationSettings | None = None,
) -> LinkBudget | None:
    """Itemized budget behind ``rsrp``.

    Returns None in the sentinel cases (out of range, unknown antenna), where
    there is no meaningful breakdown.
    """
    terms = _evaluate(
        site,
        sector,
        target_lat,
        target_lng,
        use_terrain,
        catalog,
        terrain if terrain is not None else DEFAULT_TERRAIN,
        settings if settings is not None else DEFAULT_PROPAGATION_SETTINGS,
    )
    if isinstance(terms, float):
        return None
    return LinkBudget(**terms._asdict())
