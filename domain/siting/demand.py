"""Synthetic traffic demand surface."""

from __future__ import annotations

import math

MAX_DEMAND = 100.0


def traffic_density(latitude: float, longitude: float) -> float:
    """Deterministic stand-in for subscriber density, in [0, 100].

    Superposes a fine (1500 rad/deg) and a coarse (400 rad/deg) interference
    pattern weighted 60/40.
    """
    fine = abs(math.sin(latitude * 1500) * math.cos(longitude * 1500)) * 60
    coarse = abs(math.sin(latitude * 400) * math.cos(longitude * 400)) * 40
    return min(MAX_DEMAND, fine + coarse)
