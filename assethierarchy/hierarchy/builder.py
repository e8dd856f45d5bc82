"""Mini README: Classification tree construction.

Structure:
    * build_category_forest - prefix nodes, leaf attachment and parent links.
    * HierarchyBuilder - end-to-end build from records to ``HierarchyResult``.
    * build_hierarchy - convenience wrapper driven by the settings.

Build steps:
    1. classify every record (depth and path),
    2. partition orphans and count depths,
    3. group classified records by path,
    4. create a category for every prefix of every path,
    5. attach each group to the category of its full path,
    6. link each category to the category of its path minus the last segment,
    7. order roots, child categories and leaves deterministically.

The prefix lookup table exists only inside one call. Labels are compared
exactly, so ``Circ`` and ``CIRC`` become two separate categories.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..classification.extractor import ClassificationExtractor
from ..configuration import get_settings
from ..logging_utils import get_logger
from ..records import AssetRecord
from .models import CategoryNode, HierarchyResult, LeafNode
from .statistics import collect_statistics

LOGGER = get_logger(__name__)

Segments = Tuple[str, ...]


def _category_sort_key(node: CategoryNode) -> str:
    return node.label


def build_category_forest(
    groups: Mapping[Segments, Sequence[LeafNode]], separator: str = "|"
) -> List[CategoryNode]:
    """Build the category forest for records grouped by path segments.

    Returns the root categories sorted by label. Child categories are sorted
    the same way and leaves by display name, then key.
    """

    nodes: Dict[Segments, CategoryNode] = {}
    for segments in groups:
        if not segments:
            continue
        for length in range(1, len(segments) + 1):
            prefix = segments[:length]
            if prefix not in nodes:
                nodes[prefix] = CategoryNode(
                    label=prefix[-1],
                    level=length - 1,
                    segments=prefix,
                    separator=separator,
                )

    for segments, leaves in groups.items():
        if not segments:
            continue
        node = nodes[segments]
        node.assets.extend(leaves)
        node.assets.sort(key=lambda leaf: leaf.sort_key)

    for segments, node in nodes.items():
        if len(segments) > 1:
            parent = nodes.get(segments[:-1])
            if parent is not None:
                parent.children.append(node)

    for node in nodes.values():
        node.children.sort(key=_category_sort_key)

    roots = [node for segments, node in nodes.items() if len(segments) == 1]
    roots.sort(key=_category_sort_key)
    LOGGER.debug("Built %s category nodes with %s roots", len(nodes), len(roots))
    return roots


class HierarchyBuilder:
    """Turn a flat record collection into a classification hierarchy.

    Builders hold configuration only; every ``build`` call starts from
    scratch, so one builder can serve concurrent builds of unrelated data.
    """

    def __init__(
        self,
        extractor: Optional[ClassificationExtractor] = None,
        *,
        level_prefix: str = "O_DD",
    ) -> None:
        self.extractor = extractor or ClassificationExtractor()
        self.level_prefix = level_prefix

    @classmethod
    def from_settings(cls, settings=None) -> "HierarchyBuilder":
        if settings is None:
            settings = get_settings()
        return cls(
            ClassificationExtractor.from_settings(settings),
            level_prefix=settings.level_prefix,
        )

    def build(self, records: Iterable[AssetRecord]) -> HierarchyResult:
        """Build the hierarchy; every record ends up as a leaf or an orphan."""

        materialised = list(records)
        LOGGER.info("Building hierarchy for %s assets", len(materialised))
        if not materialised:
            LOGGER.info("No assets supplied; returning an empty hierarchy")

        seen_keys = set()
        classified = []
        for record in materialised:
            if record.key in seen_keys:
                LOGGER.warning("Asset key %s appears more than once", record.key)
            seen_keys.add(record.key)
            classified.append((record, self.extractor.classify_record(record)))

        statistics = collect_statistics(classified, self.extractor.level_count)

        groups: Dict[Segments, List[LeafNode]] = {}
        for record, classification in classified:
            if classification.is_empty:
                continue
            groups.setdefault(classification.segments, []).append(
                LeafNode(record=record, classification=classification)
            )

        roots = build_category_forest(groups, self.extractor.separator)
        result = HierarchyResult(
            roots=roots,
            orphans=statistics.orphans,
            total_count=statistics.total_count,
            max_depth=statistics.max_depth,
            level_distribution=statistics.level_distribution,
            distinct_paths=statistics.distinct_paths,
            level_prefix=self.level_prefix,
            separator=self.extractor.separator,
        )
        LOGGER.info(
            "Hierarchy complete: max depth %s, %s classified, %s without classification",
            result.max_depth,
            result.classified_count,
            len(result.orphans),
        )
        return result


def build_hierarchy(records: Iterable[AssetRecord], settings=None) -> HierarchyResult:
    """Build a hierarchy using the configured level names and separator."""

    return HierarchyBuilder.from_settings(settings).build(records)
