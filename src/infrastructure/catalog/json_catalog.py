"""JSON adapter for the antenna catalog.

Reads a catalog document and returns a domain AntennaCatalog.

Accepted layouts:
    [ {record}, ... ]
    {"antennas": [ {record}, ... ]}

Records use the external camelCase keys (``gainDbi``,
``horizontalBeamwidth``, ``frequencyRangeMhz`` ...).

Lifecycle:
1) Validate the path (exists, .json suffix, not a symlink, non-empty)
2) Decode JSON and locate the record list
3) Validate each record into an AntennaModel
4) Build the catalog (duplicate ids rejected, or skipped when lenient)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.network.catalog import AntennaCatalog
from domain.network.errors import NetworkError
from domain.network.value_objects import AntennaModel

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

_ALLOWED_SUFFIXES = (".json",)


class CatalogLoadError(NetworkError):
    """Catalog document is unreadable, malformed or fails validation."""


def _records_from_document(document: Any) -> list[Any]:
    if isinstance(document, dict):
        document = document.get("antennas")
    if not isinstance(document, list):
        raise CatalogLoadError(
            'Catalog must be a JSON array or an object with an "antennas" array'
        )
    return document


class JsonAntennaCatalogAdapter:
    """Infrastructure adapter for loading antenna catalogs from JSON files.

    Parameters
    ----------
    strict: bool
        When True (default) a duplicated antenna id fails the load. When
        False later duplicates are skipped with a warning.
    """

    def __init__(self, strict: bool = True) -> None:
        self.strict = strict

    def load_catalog(self, file_path: Path | str) -> AntennaCatalog:
        """Load and validate a catalog document.

        Raises:
            FileNotFoundError: If the file does not exist
            CatalogLoadError: If the file is not an acceptable, valid catalog
            OSError: If the file cannot be read (logged, then re-raised)
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(str(path))

        if path.suffix.lower() not in _ALLOWED_SUFFIXES:
            raise CatalogLoadError(f"Unsupported file extension: {path.suffix}")

        try:
            if path.is_symlink():
                raise CatalogLoadError("Symlinks are not permitted")
            if path.stat().st_size == 0:
                raise CatalogLoadError("Empty file")
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            # Log only the filename, errno and strerror
            logger.error(
                "Failed to read %s (errno=%s, strerror=%s)",
                path.name,
                getattr(e, "errno", "unknown"),
                getattr(e, "strerror", "unknown"),
            )
            raise

        try:
            document = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CatalogLoadError(f"Malformed JSON in {path.name}: {e}") from e

        records = _records_from_document(document)

        antennas: list[AntennaModel] = []
        seen: set[str] = set()
        for index, record in enumerate(records):
            try:
                antenna = AntennaModel.model_validate(record)
            except ValidationError as e:
                raise CatalogLoadError(
                    f"Invalid antenna record #{index} in {path.name}: {e}"
                ) from e
            if antenna.id in seen:
                if self.strict:
                    raise CatalogLoadError(
                        f"Duplicate antenna id in {path.name}: {antenna.id!r}"
                    )
                logger.warning(
                    "Catalog %s: skipping duplicate antenna id %s", path.name, antenna.id
                )
                continue
            seen.add(antenna.id)
            antennas.append(antenna)

        catalog = AntennaCatalog(antennas)
        logger.info("Catalog %s: loaded %d antennas", path.name, len(catalog))
        return catalog
