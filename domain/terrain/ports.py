"""Domain Port(s) for terrain and clutter lookups.

Defines the interface (Protocol) that terrain implementations must satisfy.
The link budget only ever talks to this port, so a raster-backed model can
replace the synthetic one without touching the propagation math.
"""

from __future__ import annotations

from typing import Protocol


class TerrainModel(Protocol):
    """Port for ground elevation and clutter attenuation at a coordinate.

    Implementations must be pure: the same coordinate always yields the same
    values, and nothing is cached across calls in a way that changes results.
    """

    def elevation_m(self, latitude: float, longitude: float) -> float:
        """Ground elevation above the reference surface, meters."""
        ...

    def clutter_loss_db(self, latitude: float, longitude: float) -> float:
        """Additional attenuation from ground clutter at the receiver, dB (>= 0)."""
        ...
