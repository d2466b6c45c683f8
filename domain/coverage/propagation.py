"""Coverage Bounded Context - propagation formulas.

Stateless dB arithmetic: path loss, antenna pattern attenuation and
knife-edge diffraction. Inputs are plain floats so these functions can run
in the innermost loop of a coverage sweep.
"""

from __future__ import annotations

import math

SPEED_OF_LIGHT_M_S = 299_792_458.0

# Knife-edge: below this Fresnel parameter the path is clear
KNIFE_EDGE_CLEAR_V = -0.78


# ---------------------------------------------------------------------------
# Path loss
# ---------------------------------------------------------------------------
def free_space_near_field_db(distance_km: float, frequency_mhz: float) -> float:
    """Free-space style loss used inside the near-field radius.

    A zero distance is evaluated at 10 m so the logarithm stays finite.
    """
    return 32.44 + 20 * math.log10(distance_km or 0.01) + 20 * math.log10(frequency_mhz)


def mobile_height_correction_db(frequency_mhz: float, mobile_height_m: float) -> float:
    """Hata a(hm) for small/medium cities."""
    log_f = math.log10(frequency_mhz)
    return (1.1 * log_f - 0.7) * mobile_height_m - (1.56 * log_f - 0.8)


def hata_urban_path_loss_db(
    distance_km: float,
    frequency_mhz: float,
    base_height_m: float,
    mobile_height_m: float = 1.5,
    near_field_km: float = 0.01,
) -> float:
    """Okumura-Hata urban path loss in dB.

    Args:
        distance_km: Transmitter-receiver distance
        frequency_mhz: Carrier frequency
        base_height_m: Effective base station antenna height (> 0)
        mobile_height_m: Receiver antenna height
        near_field_km: Below this distance the free-space formula is used

    Returns:
        Path loss in dB (larger = weaker signal)
    """
    if distance_km < near_field_km:
        return free_space_near_field_db(distance_km, frequency_mhz)

    log_f = math.log10(frequency_mhz)
    log_hb = math.log10(base_height_m)
    a_hm = mobile_height_correction_db(frequency_mhz, mobile_height_m)

    return (
        69.55
        + 26.16 * log_f
        - 13.82 * log_hb
        - a_hm
        + (44.9 - 6.55 * log_hb) * math.log10(distance_km)
    )


# ---------------------------------------------------------------------------
# Antenna pattern
# ---------------------------------------------------------------------------
def pattern_loss_db(
    offset_deg: float, beamwidth_deg: float, cap_db: float, slope_db: float = 12.0
) -> float:
    """Parabolic main-lobe attenuation, capped at ``cap_db``.

    ``slope_db * (offset / (beamwidth / 2))^2`` - i.e. 12 dB at the half-power
    edge with the default slope and a 3 dB point at a quarter beamwidth off.
    """
    half_beamwidth = beamwidth_deg / 2
    return min(cap_db, slope_db * (offset_deg / half_beamwidth) ** 2)


def elevation_angle_deg(height_difference_m: float, distance_m: float) -> float:
    """Angle below the horizon from the antenna to the receiver (positive = down)."""
    return math.degrees(math.atan2(height_difference_m, distance_m))


# ---------------------------------------------------------------------------
# Diffraction
# ---------------------------------------------------------------------------
def wavelength_m(frequency_mhz: float) -> float:
    return SPEED_OF_LIGHT_M_S / (frequency_mhz * 1e6)


def fresnel_parameter(
    obstruction_m: float, d1_m: float, d2_m: float, wavelength: float
) -> float:
    """Dimensionless Fresnel-Kirchhoff parameter ``v`` for a single edge.

    ``obstruction_m`` is the edge height above the line of sight (negative
    when the edge sits below it).
    """
    return obstruction_m * math.sqrt((2 * (d1_m + d2_m)) / (wavelength * d1_m * d2_m))


def knife_edge_loss_db(v: float) -> float:
    """ITU-R P.526 single knife-edge approximation; 0 dB when ``v <= -0.78``."""
    if v <= KNIFE_EDGE_CLEAR_V:
        return 0.0
    return 6.9 + 20 * math.log10(math.sqrt((v - 0.1) ** 2 + 1) + v - 0.1)
