"""Factories for sectors with engineering defaults."""

from __future__ import annotations

from domain.network.value_objects import (
    DEFAULT_FREQUENCY_MHZ,
    DEFAULT_TX_POWER_DBM,
    Sector,
    Site,
)

# Antennas hang slightly below the tower top
MOUNT_OFFSET_BELOW_TOP_M = 2.0
MIN_MOUNT_HEIGHT_M = 1.0


def default_sector(
    site: Site,
    antenna_id: str,
    *,
    azimuth_deg: float = 0.0,
    sector_id: str | None = None,
) -> Sector:
    """Create a fresh sector for ``site``: 43 dBm, 1800 MHz, no tilt.

    The mount height is the tower height minus 2 m, never below 1 m.
    """
    fields: dict[str, object] = {
        "antenna_id": antenna_id,
        "azimuth_deg": azimuth_deg,
        "mechanical_tilt_deg": 0.0,
        "electrical_tilt_deg": 0.0,
        "tx_power_dbm": DEFAULT_TX_POWER_DBM,
        "frequency_mhz": DEFAULT_FREQUENCY_MHZ,
        "height_m": max(
            MIN_MOUNT_HEIGHT_M, site.tower_height_m - MOUNT_OFFSET_BELOW_TOP_M
        ),
    }
    if sector_id is not None:
        fields["id"] = sector_id
    return Sector.model_validate(fields)
