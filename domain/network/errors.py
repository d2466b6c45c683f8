"""Network Bounded Context - Error Hierarchy.

Expected "no signal" conditions are reported with sentinel RSRP values by the
coverage services, never with these exceptions. The errors below mark caller
mistakes that must not be silently absorbed.
"""

from __future__ import annotations


class NetworkError(Exception):
    """Base error for site, sector and antenna catalog operations."""


class InvalidInputError(NetworkError):
    """Input violates a precondition of the requested operation.

    Distinguishes "caller error" (e.g. a site with zero sectors handed to the
    sector optimizer) from "nothing to do".
    """


class UnknownAntennaError(NetworkError):
    """Antenna id is not present in the catalog.

    Attributes:
        antenna_id: The id that failed to resolve
    """

    def __init__(self, antenna_id: str) -> None:
        self.antenna_id = antenna_id
        super().__init__(f"Unknown antenna id: {antenna_id!r}")


class DuplicateAntennaError(NetworkError):
    """Two catalog entries share the same id.

    Attributes:
        antenna_id: The duplicated id
    """

    def __init__(self, antenna_id: str) -> None:
        self.antenna_id = antenna_id
        super().__init__(f"Duplicate antenna id in catalog: {antenna_id!r}")
