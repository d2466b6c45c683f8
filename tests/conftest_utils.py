"""Shared test data builders.

Reference data used across bounded contexts: a small antenna catalog and
the Manhattan reference site (35 m tower, 18 dBi 65/7 deg panel, azimuth 0,
4 deg downtilt, 43 dBm at 1800 MHz).

These helpers are used by:
- tests/conftest.py (fixtures)
- test modules that need variations of the reference network
"""

from __future__ import annotations

from domain.network.catalog import AntennaCatalog
from domain.network.value_objects import AntennaModel, Sector, Site

SCENARIO_LAT = 40.7128
SCENARIO_LNG = -74.0060

PANEL_ID = "panel-18dbi"
OMNI_ID = "omni-11dbi"


def create_test_panel() -> AntennaModel:
    return AntennaModel(
        id=PANEL_ID,
        vendor="Acme",
        model="P-65-18",
        gain_dbi=18.0,
        horizontal_beamwidth_deg=65.0,
        vertical_beamwidth_deg=7.0,
        frequency_range_mhz=(1710.0, 2170.0),
        weight_kg=18.5,
        ports=4,
    )


def create_test_omni() -> AntennaModel:
    return AntennaModel(
        id=OMNI_ID,
        vendor="Acme",
        model="O-360-11",
        gain_dbi=11.0,
        horizontal_beamwidth_deg=360.0,
        vertical_beamwidth_deg=10.0,
        frequency_range_mhz=(1710.0, 2170.0),
    )


def create_test_catalog() -> AntennaCatalog:
    return AntennaCatalog([create_test_panel(), create_test_omni()])


def create_scenario_site(**overrides) -> Site:
    """Reference site: one sector due north, tilted 4 deg, mounted at 35 m."""
    fields = {
        "id": "site-nyc",
        "name": "Lower Manhattan",
        "latitude": SCENARIO_LAT,
        "longitude": SCENARIO_LNG,
        "tower_height_m": 35.0,
        "sectors": (
            Sector(
                id="nyc-a",
                antenna_id=PANEL_ID,
                azimuth_deg=0.0,
                electrical_tilt_deg=4.0,
                tx_power_dbm=43.0,
                frequency_mhz=1800.0,
            ),
        ),
    }
    fields.update(overrides)
    return Site(**fields)


def create_three_sector_site(
    site_id: str, latitude: float, longitude: float, antenna_id: str = PANEL_ID
) -> Site:
    """30 m site with sectors at 0/120/240 deg, 4 deg electrical tilt."""
    return Site(
        id=site_id,
        name=site_id.upper(),
        latitude=latitude,
        longitude=longitude,
        tower_height_m=30.0,
        sectors=tuple(
            Sector(
                id=f"{site_id}-{index}",
                antenna_id=antenna_id,
                azimuth_deg=azimuth,
                electrical_tilt_deg=4.0,
            )
            for index, azimuth in enumerate((0.0, 120.0, 240.0))
        ),
    )
