"""Mini README: Classification depth and path extraction.

Structure:
    * ClassificationPath - immutable derived classification of one record.
    * ClassificationExtractor - reads the ordered level attributes.
    * join_segments - unambiguous path string for a list of segments.

Each record carries up to ``level_count`` attributes named ``O_DD1`` to
``O_DD4`` by default. Values are trimmed; missing, ``None``, blank and
malformed values are all empty. Classification must be contiguous from the
root: the depth is the index of the first empty level, so ``[A, B, "", D]``
has depth 2 and ``D`` is ignored. The path joins the first ``depth`` values;
a separator or backslash inside a value is escaped with a backslash, so two
different segment lists never share a path string. Nothing here is cached:
classifications are recomputed on every build.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..errors import MalformedAttribute
from ..logging_utils import get_logger
from ..records import AssetRecord

LOGGER = get_logger(__name__)

DEFAULT_LEVEL_PREFIX = "O_DD"
DEFAULT_LEVEL_COUNT = 4
DEFAULT_SEPARATOR = "|"
DEFAULT_LEVEL_NAMES: Tuple[str, ...] = tuple(
    f"{DEFAULT_LEVEL_PREFIX}{index}" for index in range(1, DEFAULT_LEVEL_COUNT + 1)
)


def join_segments(segments: Sequence[str], separator: str = DEFAULT_SEPARATOR) -> str:
    """Join ``segments`` with ``separator``, escaping it inside each segment."""

    special = set(separator) | {"\\"}
    escaped = (
        "".join("\\" + char if char in special else char for char in segment)
        for segment in segments
    )
    return separator.join(escaped)


@dataclass(frozen=True, slots=True)
class ClassificationPath:
    """Trimmed level values of a record and the contiguous prefix in use."""

    values: Tuple[str, ...]
    depth: int
    separator: str = DEFAULT_SEPARATOR

    @property
    def segments(self) -> Tuple[str, ...]:
        return self.values[: self.depth]

    @property
    def path(self) -> str:
        return join_segments(self.segments, self.separator)

    @property
    def is_empty(self) -> bool:
        """True for records without a first-level value (orphans)."""

        return self.depth == 0

    @property
    def discarded(self) -> Tuple[str, ...]:
        """Non-empty values beyond the first gap, which do not count."""

        return tuple(value for value in self.values[self.depth :] if value)


def contiguous_depth(values: Sequence[str]) -> int:
    """Index of the first empty value, or ``len(values)`` when none is empty."""

    for index, value in enumerate(values):
        if not value:
            return index
    return len(values)


class ClassificationExtractor:
    """Derive ``ClassificationPath`` objects from attribute mappings."""

    def __init__(
        self,
        level_names: Optional[Sequence[str]] = None,
        *,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        names = tuple(DEFAULT_LEVEL_NAMES if level_names is None else level_names)
        if not names:
            raise ValueError("At least one classification level is required")
        if not separator:
            raise ValueError("Path separator must not be empty")
        self.level_names = names
        self.separator = separator

    @classmethod
    def from_settings(cls, settings) -> "ClassificationExtractor":
        return cls(settings.level_names, separator=settings.path_separator)

    @property
    def level_count(self) -> int:
        return len(self.level_names)

    def read_value(self, name: str, value: Any) -> str:
        """Return the trimmed text of ``value``; anything unusable is empty."""

        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        if isinstance(value, bool):
            # bool is an int subclass but never a level label
            problem = MalformedAttribute(name, value)
        elif isinstance(value, (int, Decimal)):
            return str(value).strip()
        elif isinstance(value, float):
            if math.isnan(value):
                return ""
            return str(value).strip()
        else:
            problem = MalformedAttribute(name, value)
        LOGGER.warning("%s; treating it as empty", problem)
        return ""

    def extract_levels(self, attributes: Mapping[str, Any]) -> Tuple[str, ...]:
        """Trimmed values for every configured level, ``""`` when absent."""

        values: List[str] = []
        for name in self.level_names:
            values.append(self.read_value(name, attributes.get(name)))
        return tuple(values)

    def classify(self, attributes: Mapping[str, Any]) -> ClassificationPath:
        """Compute depth and path for one attribute mapping."""

        values = self.extract_levels(attributes)
        classification = ClassificationPath(
            values=values,
            depth=contiguous_depth(values),
            separator=self.separator,
        )
        for segment in classification.segments:
            if self.separator in segment:
                LOGGER.warning(
                    "Level value %r contains the path separator %r; it is escaped in the path",
                    segment,
                    self.separator,
                )
        return classification

    def classify_record(self, record: AssetRecord) -> ClassificationPath:
        classification = self.classify(record.metadata)
        if classification.discarded:
            LOGGER.debug(
                "Asset %s: values %s after the first gap are ignored",
                record.key,
                list(classification.discarded),
            )
        LOGGER.debug(
            "Asset %s: depth %s, path %r", record.key, classification.depth, classification.path
        )
        return classification
