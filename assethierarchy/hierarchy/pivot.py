"""Mini README: Parameter pivot over asset metadata.

Structure:
    * ParameterPivot - sorted parameter names plus one row per asset.
    * build_pivot - gather the union of parameter names and fill the rows.

Every row holds a value for every known parameter, ``None`` where the asset
does not define it, so the result can be shown as a table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from ..logging_utils import get_logger
from ..records import AssetRecord
from .statistics import record_sort_key

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ParameterPivot:
    parameter_names: List[str] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def total_assets(self) -> int:
        return len(self.rows)

    @property
    def total_parameters(self) -> int:
        return len(self.parameter_names)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "data": self.rows,
            "parameterNames": self.parameter_names,
            "totalAssets": self.total_assets,
            "totalParameters": self.total_parameters,
        }


def build_pivot(records: Iterable[AssetRecord]) -> ParameterPivot:
    """Tabulate metadata parameters across ``records``."""

    ordered = sorted(records, key=record_sort_key)
    names = sorted({name for record in ordered for name in record.metadata})
    rows: List[Dict[str, Any]] = []
    for record in ordered:
        row: Dict[str, Any] = {
            "assetGuid": record.key,
            "assetName": record.display_name,
            "assetCategory": record.display_category,
            "assetFilePath": record.file_path,
        }
        for name in names:
            row[f"param_{name}"] = record.metadata.get(name)
        rows.append(row)
    LOGGER.debug("Pivoted %s assets over %s parameters", len(rows), len(names))
    return ParameterPivot(parameter_names=names, rows=rows)
