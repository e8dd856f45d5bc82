"""Mini README: Core package initialiser for the asset hierarchy engine.

The package turns a flat set of asset records into a classification tree
and resolves asset file names to canonical lookup keys. High-level entry
points are re-exported here so callers do not need to know the module
layout.
"""

from .logging_utils import get_logger
from .hierarchy import HierarchyBuilder, HierarchyResult, build_hierarchy
from .identifiers import IdentifierNormalizer, normalize_identifier

__all__ = [
    "HierarchyBuilder",
    "HierarchyResult",
    "IdentifierNormalizer",
    "build_hierarchy",
    "get_logger",
    "normalize_identifier",
]
