"""Mini README: Tests for level extraction, depth and path rules.

Depth stops at the first empty level, blank and malformed values count as
empty, and the path only joins the contiguous prefix.
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from assethierarchy.classification import (
    ClassificationExtractor,
    contiguous_depth,
    join_segments,
)
from assethierarchy.configuration import HierarchySettings
from assethierarchy.records import AssetRecord


def _levels(*values):
    return {f"O_DD{index}": value for index, value in enumerate(values, start=1)}


def test_full_classification_uses_every_level() -> None:
    """A record with every level filled should reach the full depth."""

    classification = ClassificationExtractor().classify(_levels("A", "B", "C", "D"))

    assert classification.depth == 4
    assert classification.path == "A|B|C|D"
    assert classification.segments == ("A", "B", "C", "D")


def test_depth_truncates_at_first_gap() -> None:
    """Depth should stop at the first empty level."""

    classification = ClassificationExtractor().classify(_levels("A", "", "", "D"))

    assert classification.depth == 1
    assert classification.path == "A"
    assert classification.discarded == ("D",)


def test_gap_in_the_middle_ignores_deeper_levels() -> None:
    """Values after a gap should be reported as discarded, not used."""

    classification = ClassificationExtractor().classify(_levels("A", "B", "", "D"))

    assert classification.depth == 2
    assert classification.path == "A|B"


def test_all_missing_levels_are_orphans() -> None:
    """A record without any level values should have an empty path."""

    classification = ClassificationExtractor().classify(_levels(None, None, None, None))

    assert classification.depth == 0
    assert classification.path == ""
    assert classification.is_empty


def test_missing_and_blank_values_are_equivalent() -> None:
    """Absent, None and whitespace-only values should all count as empty."""

    extractor = ClassificationExtractor()

    assert extractor.extract_levels({"O_DD1": "  X  ", "O_DD2": "   "}) == ("X", "", "", "")
    assert extractor.extract_levels({}) == ("", "", "", "")


def test_first_level_empty_discards_deeper_values() -> None:
    """An empty first level should make the record an orphan even with deeper values."""

    classification = ClassificationExtractor().classify(_levels("", "B", "C", "D"))

    assert classification.is_empty
    assert classification.discarded == ("B", "C", "D")


def test_numbers_are_read_as_text() -> None:
    """Numeric attribute values should become trimmed text labels."""

    extractor = ClassificationExtractor()

    assert extractor.extract_levels(_levels(12, 1.5, Decimal("3"), float("nan"))) == (
        "12",
        "1.5",
        "3",
        "",
    )


def test_malformed_values_are_empty_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Unusable attribute values should be treated as empty with a warning."""

    extractor = ClassificationExtractor()

    with caplog.at_level(logging.WARNING):
        values = extractor.extract_levels(_levels("A", ["B"], True, {"x": 1}))

    assert values == ("A", "", "", "")
    assert "O_DD2" in caplog.text


def test_custom_level_names_and_separator() -> None:
    """Custom level names and separators should drive depth and path."""

    extractor = ClassificationExtractor(["L1", "L2"], separator="/")
    classification = extractor.classify({"L1": "Site", "L2": "Floor", "L3": "ignored"})

    assert extractor.level_count == 2
    assert classification.path == "Site/Floor"


def test_from_settings_derives_level_names() -> None:
    """Extractors built from settings should use the configured prefix and count."""

    settings = HierarchySettings(level_prefix="LEVEL_", level_count=2, path_separator=">")
    extractor = ClassificationExtractor.from_settings(settings)

    assert extractor.level_names == ("LEVEL_1", "LEVEL_2")
    assert extractor.classify({"LEVEL_1": "a", "LEVEL_2": "b"}).path == "a>b"


def test_classify_record_reads_record_metadata() -> None:
    """Classifying a record should read its metadata mapping."""

    record = AssetRecord(key="k1", metadata={"O_DD1": "CIRC", "Width": "300"})

    assert ClassificationExtractor().classify_record(record).path == "CIRC"


def test_invalid_extractor_configuration_is_rejected() -> None:
    """Empty level lists and separators should raise ValueError."""

    with pytest.raises(ValueError):
        ClassificationExtractor([])
    with pytest.raises(ValueError):
        ClassificationExtractor(separator="")


def test_contiguous_depth() -> None:
    """The contiguous depth helper should return the index of the first empty value."""

    assert contiguous_depth(["a", "b"]) == 2
    assert contiguous_depth(["", "b"]) == 0
    assert contiguous_depth([]) == 0


def test_join_segments_escapes_separator_inside_values() -> None:
    """Separators and backslashes inside a value should be escaped so paths stay unique."""

    assert join_segments(["A", "B"]) == "A|B"
    assert join_segments(["A|B"]) == "A\\|B"
    assert join_segments(["A\\", "B"]) != join_segments(["A\\|B"])
    assert join_segments(["x/y", "z"], "/") == "x\\/y/z"
    assert join_segments([]) == ""
