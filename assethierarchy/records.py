"""Mini README: Asset record model and JSON loading helpers.

Structure:
    * AssetRecord - immutable input row consumed by hierarchy builds.
    * MetadataEntry / AssetRecordPayload - Pydantic models validating exports.
    * parse_records - turn decoded JSON into ``AssetRecord`` objects.
    * load_records - read a JSON export from disk.

Exports follow the asset table layout: ``guid``, ``name``, ``category``,
``filePath`` and ``metadata``. Metadata may be a plain mapping or the list of
``{"parameterName": ..., "parameterValue": ...}`` rows produced by the
metadata table. Keys are stored lowercase so they line up with the output of
the identifier normalizer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, Field, ValidationError, validator

from .errors import RecordLoadError
from .logging_utils import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AssetRecord:
    """A single asset with its classification attributes and other metadata."""

    key: str
    name: Optional[str] = None
    category: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)
    file_path: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Name shown in trees, falling back to the key."""

        if self.name and self.name.strip():
            return self.name.strip()
        return self.key

    @property
    def display_category(self) -> str:
        if self.category and self.category.strip():
            return self.category.strip()
        return "Unknown"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "guid": self.key,
            "name": self.display_name,
            "category": self.display_category,
            "filePath": self.file_path,
            "metadata": dict(self.metadata),
        }


class MetadataEntry(BaseModel):
    """One row of the metadata table."""

    parameterName: str
    parameterValue: Any = None
    parameterType: str = "TEXT"


class AssetRecordPayload(BaseModel):
    """Validated JSON shape of an exported asset."""

    guid: str
    name: Optional[str] = None
    category: Optional[str] = None
    filePath: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @validator("guid")
    def _canonical_guid(cls, value: str) -> str:
        """Keys are compared in lowercase and must not be blank."""

        cleaned = value.strip().lower()
        if not cleaned:
            raise ValueError("guid must not be blank")
        return cleaned

    @validator("metadata", pre=True)
    def _flatten_metadata(cls, value: Any) -> Dict[str, Any]:
        """Accept both a mapping and a list of metadata rows."""

        if value is None:
            return {}
        if isinstance(value, list):
            flattened: Dict[str, Any] = {}
            for row in value:
                entry = row if isinstance(row, MetadataEntry) else MetadataEntry(**row)
                flattened[entry.parameterName] = entry.parameterValue
            return flattened
        return value

    def to_record(self) -> AssetRecord:
        return AssetRecord(
            key=self.guid,
            name=self.name,
            category=self.category,
            metadata=dict(self.metadata),
            file_path=self.filePath,
        )


def _extract_rows(document: Any) -> List[Any]:
    """Locate the list of asset rows in a decoded export document."""

    if isinstance(document, list):
        return document
    if isinstance(document, dict):
        for container in ("assets", "data", "records"):
            rows = document.get(container)
            if isinstance(rows, list):
                return rows
    raise RecordLoadError(
        "Expected a list of assets or an object with an 'assets', 'data' or 'records' list"
    )


def parse_records(document: Any) -> List[AssetRecord]:
    """Validate decoded JSON and return the contained records.

    Raises ``RecordLoadError`` when a row is invalid or a key repeats.
    """

    records: List[AssetRecord] = []
    seen: Dict[str, int] = {}
    for index, row in enumerate(_extract_rows(document)):
        if not isinstance(row, dict):
            raise RecordLoadError(f"Asset row {index} is not an object")
        try:
            payload = AssetRecordPayload(**row)
        except (ValidationError, TypeError) as error:
            raise RecordLoadError(f"Asset row {index} is invalid: {error}") from error
        if payload.guid in seen:
            raise RecordLoadError(
                f"Asset row {index} repeats key {payload.guid} from row {seen[payload.guid]}"
            )
        seen[payload.guid] = index
        records.append(payload.to_record())
    LOGGER.debug("Parsed %s asset records", len(records))
    return records


def load_records(path: Union[str, Path]) -> List[AssetRecord]:
    """Read and validate a JSON export of asset records."""

    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as error:
        raise RecordLoadError(f"Record file {path} does not exist") from error
    except json.JSONDecodeError as error:
        raise RecordLoadError(f"Record file {path} is not valid JSON") from error
    records = parse_records(document)
    LOGGER.info("Loaded %s asset records from %s", len(records), path)
    return records

