"""Mini README: Tree and result models for hierarchy builds.

Structure:
    * LeafNode - wraps one ``AssetRecord`` and its classification.
    * CategoryNode - a classification prefix with child categories and leaves.
    * HierarchyResult - forest, orphans and aggregate statistics of a build.

Category and leaf nodes are separate types. Their identities live in
separate namespaces (``("category", segments)`` versus ``("asset", key)``)
so a synthetic category id can never be mistaken for a record key.
Serialised output keeps the same split through an explicit ``kind`` field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..classification.extractor import ClassificationPath, join_segments
from ..records import AssetRecord

CATEGORY_KIND = "category"
ASSET_KIND = "asset"


@dataclass(slots=True)
class LeafNode:
    """A record attached to the category matching its full path."""

    record: AssetRecord
    classification: ClassificationPath

    @property
    def node_id(self) -> Tuple[str, str]:
        return (ASSET_KIND, self.record.key)

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.record.display_name, self.record.key)

    def as_dict(self, file_index=None) -> Dict[str, Any]:
        record = self.record
        payload: Dict[str, Any] = {
            "kind": ASSET_KIND,
            "id": record.key,
            "guid": record.key,
            "name": record.display_name,
            "category": record.display_category,
            "filePath": record.file_path,
            "depth": self.classification.depth,
            "path": self.classification.path,
            "metadata": dict(record.metadata),
            "children": [],
        }
        if file_index is not None:
            payload["has_model"] = file_index.has_model(record.key)
            payload["has_panorama"] = file_index.has_panorama(record.key)
        return payload


@dataclass(slots=True)
class CategoryNode:
    """One classification prefix; ``level`` is zero-based."""

    label: str
    level: int
    segments: Tuple[str, ...]
    separator: str = "|"
    assets: List[LeafNode] = field(default_factory=list)
    children: List["CategoryNode"] = field(default_factory=list)

    @property
    def path(self) -> str:
        return join_segments(self.segments, self.separator)

    @property
    def node_id(self) -> Tuple[str, Tuple[str, ...]]:
        return (CATEGORY_KIND, self.segments)

    @property
    def asset_count(self) -> int:
        """Number of records attached directly to this category."""

        return len(self.assets)

    @property
    def total_asset_count(self) -> int:
        """Records attached to this category or any descendant."""

        return self.asset_count + sum(child.total_asset_count for child in self.children)

    def walk(self) -> Iterator["CategoryNode"]:
        """Yield this node and all descendant categories depth first."""

        yield self
        for child in self.children:
            yield from child.walk()

    def iter_leaves(self) -> Iterator[LeafNode]:
        for node in self.walk():
            yield from node.assets

    def as_dict(self, *, level_prefix: str = "O_DD", file_index=None) -> Dict[str, Any]:
        """Synthetic, non-leaf entry with child categories before leaves."""

        children: List[Dict[str, Any]] = [
            child.as_dict(level_prefix=level_prefix, file_index=file_index)
            for child in self.children
        ]
        children.extend(leaf.as_dict(file_index) for leaf in self.assets)
        return {
            "kind": CATEGORY_KIND,
            "id": f"{CATEGORY_KIND}:{self.path}",
            "name": self.label,
            "category": f"{level_prefix} Level {self.level + 1}",
            "depth": self.level,
            "path": self.path,
            "metadata": {
                "CATEGORY": self.label,
                "PATH": self.path,
                "ASSET_COUNT": self.asset_count,
            },
            "children": children,
        }


TreeNode = Union[CategoryNode, LeafNode]


@dataclass(slots=True)
class HierarchyResult:
    """Everything produced by one build. Nothing is shared between builds."""

    roots: List[CategoryNode] = field(default_factory=list)
    orphans: List[AssetRecord] = field(default_factory=list)
    total_count: int = 0
    max_depth: int = 0
    level_distribution: Dict[int, int] = field(default_factory=dict)
    distinct_paths: List[str] = field(default_factory=list)
    level_prefix: str = "O_DD"
    separator: str = "|"

    @property
    def circular_references(self) -> List[str]:
        """Always empty: parents are path prefixes, so cycles cannot form."""

        return []

    @property
    def classified_count(self) -> int:
        return self.total_count - len(self.orphans)

    def iter_categories(self) -> Iterator[CategoryNode]:
        for root in self.roots:
            yield from root.walk()

    def iter_leaves(self) -> Iterator[LeafNode]:
        for root in self.roots:
            yield from root.iter_leaves()

    def find_category(self, path: Union[str, Tuple[str, ...]]) -> CategoryNode:
        """Return the category for ``path`` (string or segment tuple)."""

        for node in self.iter_categories():
            if node.segments == path or node.path == path:
                return node
        raise KeyError(f"Category {path!r} is not present in the hierarchy")

    def find_leaf(self, key: str) -> Optional[LeafNode]:
        lowered = key.lower()
        for leaf in self.iter_leaves():
            if leaf.record.key == lowered:
                return leaf
        return None

    def summary(self) -> Dict[str, Any]:
        return {
            "total_assets": self.total_count,
            "classified_assets": self.classified_count,
            "orphaned_assets": len(self.orphans),
            "max_depth": self.max_depth,
            "level_distribution": dict(self.level_distribution),
        }

    def as_dict(self, file_index=None) -> Dict[str, Any]:
        """JSON-ready payload of the whole build."""

        return {
            "roots": [
                root.as_dict(level_prefix=self.level_prefix, file_index=file_index)
                for root in self.roots
            ],
            "orphans": [
                _orphan_as_dict(record, self.separator, file_index) for record in self.orphans
            ],
            "total_assets": self.total_count,
            "max_depth": self.max_depth,
            "circular_references": self.circular_references,
            "level_distribution": {str(level): count for level, count in self.level_distribution.items()},
            "distinct_paths": list(self.distinct_paths),
        }


def _orphan_as_dict(record: AssetRecord, separator: str, file_index) -> Dict[str, Any]:
    leaf = LeafNode(record, ClassificationPath(values=(), depth=0, separator=separator))
    return leaf.as_dict(file_index)
