"""Mini README: Orphan partitioning and aggregate statistics.

Structure:
    * HierarchyStatistics - counters and the orphan list of one build.
    * collect_statistics - single pass over classified records.

A record is an orphan exactly when its path is empty. Because depth stops
at the first gap, a record without a first-level value is an orphan even
when deeper levels are filled in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ..classification.extractor import ClassificationPath
from ..logging_utils import get_logger
from ..records import AssetRecord

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class HierarchyStatistics:
    """Aggregate view over the classified records of a build."""

    total_count: int = 0
    max_depth: int = 0
    level_distribution: Dict[int, int] = field(default_factory=dict)
    distinct_paths: List[str] = field(default_factory=list)
    orphans: List[AssetRecord] = field(default_factory=list)


def record_sort_key(record: AssetRecord) -> Tuple[str, str]:
    return (record.display_name, record.key)


def collect_statistics(
    classified: Sequence[Tuple[AssetRecord, ClassificationPath]], level_count: int
) -> HierarchyStatistics:
    """Count records per depth and gather orphans and distinct paths.

    ``level_distribution`` has an entry for every level ``0..level_count``
    (zero when unused), so its values always sum to ``total_count``.
    Distinct paths are collected per segment tuple and ordered by it.
    """

    if level_count < 1:
        raise ValueError("level_count must be at least 1")

    depths = np.zeros(len(classified), dtype=np.int64)
    orphans: List[AssetRecord] = []
    paths: Dict[Tuple[str, ...], str] = {}
    for index, (record, classification) in enumerate(classified):
        depths[index] = classification.depth
        if classification.is_empty:
            orphans.append(record)
        else:
            paths.setdefault(classification.segments, classification.path)

    if depths.size and int(depths.max()) > level_count:
        raise ValueError(
            f"Observed depth {int(depths.max())} exceeds the configured {level_count} levels"
        )
    counts = np.bincount(depths, minlength=level_count + 1)
    level_distribution = {level: int(counts[level]) for level in range(level_count + 1)}
    max_depth = int(depths.max()) if depths.size else 0

    orphans.sort(key=record_sort_key)
    statistics = HierarchyStatistics(
        total_count=len(classified),
        max_depth=max_depth,
        level_distribution=level_distribution,
        distinct_paths=[paths[segments] for segments in sorted(paths)],
        orphans=orphans,
    )
    for level, count in level_distribution.items():
        LOGGER.debug("  Level %s: %s assets", level, count)
    return statistics
