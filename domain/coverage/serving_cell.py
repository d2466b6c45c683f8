"""Coverage Bounded Context - Serving-Cell Selector.

Answers "what would a handset see here": the strongest sector becomes the
serving cell, the next few are reported as neighbors, and a simple SINR proxy
is derived from the serving RSRP.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from domain.coverage.link_budget import DEFAULT_TERRAIN, rsrp
from domain.coverage.settings import DEFAULT_PROPAGATION_SETTINGS, PropagationSettings
from domain.coverage.value_objects import (
    DeviceState,
    LinkDiagnosis,
    NeighborCell,
    Severity,
    SignalProfile,
)
from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import Site
from domain.terrain.ports import TerrainModel
from domain.terrain.services import planar_distance_sq

logger = logging.getLogger(__name__)

SINR_CAP_DB = 30.0
SINR_OFFSET_DB = 105.0
NO_SERVICE_SINR_DB = -20.0
MAX_NEIGHBORS = 3


def sinr_proxy_db(rsrp_dbm: float) -> float:
    """Interference-free SINR estimate: ``min(30, rsrp + 105)``."""
    return min(SINR_CAP_DB, rsrp_dbm + SINR_OFFSET_DB)


def signal_profile(
    sites: Iterable[Site],
    latitude: float,
    longitude: float,
    use_terrain: bool = True,
    *,
    catalog: AntennaCatalog,
    terrain: TerrainModel | None = None,
    settings: PropagationSettings | None = None,
) -> SignalProfile:
    """Serving cell, neighbors and SINR at a probe point.

    Every sector of every site within the probe pre-filter is evaluated.
    Readings at the no-signal floor are not measurements and are dropped.
    The rest are ranked by RSRP, strongest first; ties keep site/sector
    input order.

    Args:
        sites: Candidate serving sites
        latitude: Probe latitude, WGS84 degrees
        longitude: Probe longitude, WGS84 degrees
        use_terrain: Include terrain diffraction
        catalog: Antenna reference table
        terrain: Elevation/clutter model (synthetic by default)
        settings: Engine thresholds (defaults if None)

    Returns:
        SignalProfile; the "no service" profile (RSRP -150, SINR -20, no
        serving cell) when nothing is measurable.
    """
    terrain = terrain if terrain is not None else DEFAULT_TERRAIN
    settings = settings if settings is not None else DEFAULT_PROPAGATION_SETTINGS

    readings: list[tuple[float, Site, str]] = []
    for site in sites:
        if (
            planar_distance_sq(site.latitude, site.longitude, latitude, longitude)
            >= settings.probe_prefilter_deg_sq
        ):
            continue
        for sector in site.sectors:
            level = rsrp(
                site,
                sector,
                latitude,
                longitude,
                use_terrain,
                catalog=catalog,
                terrain=terrain,
                settings=settings,
            )
            if level <= settings.no_signal_dbm:
                continue
            readings.append((level, site, sector.id))

    # sorted() is stable, so equal readings keep input order
    readings = sorted(readings, key=lambda reading: reading[0], reverse=True)

    if not readings:
        return SignalProfile(
            latitude=latitude,
            longitude=longitude,
            rsrp_dbm=settings.no_signal_dbm,
            sinr_db=NO_SERVICE_SINR_DB,
        )

    serving_rsrp, serving_site, serving_cell_id = readings[0]
    neighbors = tuple(
        NeighborCell(
            site_id=site.id,
            site_name=site.name,
            cell_id=cell_id,
            rsrp_dbm=level,
        )
        for level, site, cell_id in readings[1 : MAX_NEIGHBORS + 1]
    )

    return SignalProfile(
        latitude=latitude,
        longitude=longitude,
        rsrp_dbm=serving_rsrp,
        sinr_db=sinr_proxy_db(serving_rsrp),
        serving_site_id=serving_site.id,
        serving_site_name=serving_site.name,
        serving_cell_id=serving_cell_id,
        neighbors=neighbors,
    )


# ---------------------------------------------------------------------------
# Diagnosis
# ---------------------------------------------------------------------------
NO_SERVICE_THRESHOLD_DBM = -115.0
CELL_EDGE_THRESHOLD_DBM = -105.0
FAIR_COVERAGE_THRESHOLD_DBM = -90.0
INTERFERENCE_SINR_DB = 5.0


def diagnose(profile: SignalProfile) -> LinkDiagnosis:
    """Classify a probe reading into a severity with user-facing text.

    Rules are evaluated in order; the first match wins.
    """
    if profile.rsrp_dbm < NO_SERVICE_THRESHOLD_DBM:
        return LinkDiagnosis(
            severity=Severity.CRITICAL,
            remarks="No Service / Out of range.",
            effects="Connection dropped. Unable to initiate calls or data sessions.",
        )
    if profile.rsrp_dbm < CELL_EDGE_THRESHOLD_DBM:
        return LinkDiagnosis(
            severity=Severity.HIGH,
            remarks="Weak Signal / Cell Edge.",
            effects=(
                "High packet loss, intermittent drops, "
                "battery drain due to TX power ramp."
            ),
        )
    if profile.sinr_db < INTERFERENCE_SINR_DB:
        return LinkDiagnosis(
            severity=Severity.MEDIUM,
            remarks="High Interference (Pilot Pollution).",
            effects="Throughput reduced by up to 80%. High retransmission rate.",
        )
    if profile.rsrp_dbm < FAIR_COVERAGE_THRESHOLD_DBM:
        return LinkDiagnosis(
            severity=Severity.LOW,
            remarks="Fair Coverage.",
            effects="Occasional buffering in HD video. Standard voice quality.",
        )
    return LinkDiagnosis(
        severity=Severity.LOW,
        remarks="Optimal connection.",
        effects="High-speed data, ultra-low latency, stable 4K streaming.",
    )


# ---------------------------------------------------------------------------
# Handover tracking
# ---------------------------------------------------------------------------
def track_device(
    previous: DeviceState | None,
    profile: SignalProfile,
    timestamp: float,
) -> DeviceState:
    """Fold a new probe reading into a moving device's state.

    A handover is counted only when the device was served before, is served
    now, and the serving cell changed. Losing or regaining service is not a
    handover.
    """
    if previous is None:
        return DeviceState(profile=profile)

    old_cell = previous.profile.serving_cell_id
    new_cell = profile.serving_cell_id
    if old_cell is not None and new_cell is not None and old_cell != new_cell:
        logger.debug("Handover %s -> %s at t=%s", old_cell, new_cell, timestamp)
        return DeviceState(
            profile=profile,
            handover_count=previous.handover_count + 1,
            last_handover_at=timestamp,
        )

    return DeviceState(
        profile=profile,
        handover_count=previous.handover_count,
        last_handover_at=previous.last_handover_at,
    )
