"""Mini README: Classification attribute extraction.

Exports the extractor that reads a record's ordered level attributes and the
derived ``ClassificationPath`` value it produces.
"""

from .extractor import (
    DEFAULT_LEVEL_NAMES,
    ClassificationExtractor,
    ClassificationPath,
    contiguous_depth,
    join_segments,
)

__all__ = [
    "ClassificationExtractor",
    "ClassificationPath",
    "DEFAULT_LEVEL_NAMES",
    "contiguous_depth",
    "join_segments",
]
