"""Mini README: Hierarchy construction subsystem.

Exports the builder, the tree and result models, the statistics collector,
the parameter pivot and the console renderer.
"""

from .builder import HierarchyBuilder, build_category_forest, build_hierarchy
from .models import CategoryNode, HierarchyResult, LeafNode, TreeNode
from .pivot import ParameterPivot, build_pivot
from .render import render_tree
from .statistics import HierarchyStatistics, collect_statistics

__all__ = [
    "CategoryNode",
    "HierarchyBuilder",
    "HierarchyResult",
    "HierarchyStatistics",
    "LeafNode",
    "ParameterPivot",
    "TreeNode",
    "build_category_forest",
    "build_hierarchy",
    "build_pivot",
    "collect_statistics",
    "render_tree",
]
