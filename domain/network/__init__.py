"""Network Bounded Context.

Responsible for the deployed (or proposed) radio network description:
- Value Objects: AntennaModel, Sector, Site, TowerType, SiteStatus
- Reference data: AntennaCatalog (injected, read-only)
- Factories: default_sector
"""

from domain.network.catalog import AntennaCatalog
from domain.network.errors import (
    DuplicateAntennaError,
    InvalidInputError,
    NetworkError,
    UnknownAntennaError,
)
from domain.network.factories import default_sector
from domain.network.value_objects import (
    AntennaModel,
    Sector,
    Site,
    SiteStatus,
    TowerType,
)

__all__ = [
    "AntennaCatalog",
    "AntennaModel",
    "DuplicateAntennaError",
    "InvalidInputError",
    "NetworkError",
    "Sector",
    "Site",
    "SiteStatus",
    "TowerType",
    "UnknownAntennaError",
    "default_sector",
]
