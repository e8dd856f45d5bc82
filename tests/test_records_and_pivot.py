"""Mini README: Tests for record loading, statistics and the parameter pivot.

Structure:
    * record parsing accepts both metadata shapes and rejects bad exports.
    * collect_statistics counts depths and keeps orphans ordered.
    * build_pivot fills missing parameters with None.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from assethierarchy.classification import ClassificationExtractor
from assethierarchy.errors import RecordLoadError
from assethierarchy.hierarchy import build_pivot, collect_statistics
from assethierarchy.records import AssetRecord, load_records, parse_records


def test_parse_records_flattens_metadata_rows() -> None:
    """Metadata rows should be flattened into a name to value mapping."""

    records = parse_records(
        {
            "assets": [
                {
                    "guid": "  ABC-1 ",
                    "name": "Chair",
                    "filePath": "/assets/glb/abc-1.glb",
                    "metadata": [
                        {"parameterName": "O_DD1", "parameterValue": "FURN"},
                        {"parameterName": "Width", "parameterValue": "450", "parameterType": "NUMBER"},
                    ],
                }
            ]
        }
    )

    assert records == [
        AssetRecord(
            key="abc-1",
            name="Chair",
            category=None,
            metadata={"O_DD1": "FURN", "Width": "450"},
            file_path="/assets/glb/abc-1.glb",
        )
    ]
    assert records[0].display_category == "Unknown"


def test_parse_records_accepts_plain_list_and_mapping_metadata() -> None:
    """A bare list of assets with mapping metadata should parse."""

    records = parse_records([{"guid": "k", "metadata": {"O_DD1": "A"}}])

    assert records[0].metadata == {"O_DD1": "A"}
    assert records[0].display_name == "k"


@pytest.mark.parametrize(
    "document",
    [
        {"unexpected": []},
        [{"name": "no guid"}],
        [{"guid": "   "}],
        [{"guid": "k", "metadata": "not metadata"}],
        [{"guid": "k"}, {"guid": "K"}],
        ["not an object"],
    ],
)
def test_parse_records_rejects_invalid_documents(document) -> None:
    """Invalid rows, duplicate keys and wrong shapes should raise RecordLoadError."""

    with pytest.raises(RecordLoadError):
        parse_records(document)


def test_load_records_reads_json_file(tmp_path: Path) -> None:
    """Records should load from a JSON export on disk."""

    path = tmp_path / "assets.json"
    path.write_text(json.dumps([{"guid": "x", "metadata": {"O_DD1": "A"}}]), encoding="utf-8")

    assert [record.key for record in load_records(path)] == ["x"]


def test_load_records_reports_missing_and_invalid_files(tmp_path: Path) -> None:
    """Missing files and bad JSON should raise RecordLoadError."""

    with pytest.raises(RecordLoadError):
        load_records(tmp_path / "missing.json")
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(RecordLoadError):
        load_records(broken)


def test_collect_statistics_counts_levels_and_orphans() -> None:
    """Statistics should bin depths and list orphans in display order."""

    extractor = ClassificationExtractor()
    records = [
        AssetRecord(key="b", name="Zed", metadata={"O_DD1": ""}),
        AssetRecord(key="a", name="Able", metadata={"O_DD2": "deep"}),
        AssetRecord(key="c", metadata={"O_DD1": "X", "O_DD2": "Y", "O_DD3": "Z", "O_DD4": "W"}),
    ]
    classified = [(record, extractor.classify_record(record)) for record in records]

    statistics = collect_statistics(classified, extractor.level_count)

    assert statistics.total_count == 3
    assert statistics.max_depth == 4
    assert statistics.level_distribution == {0: 2, 1: 0, 2: 0, 3: 0, 4: 1}
    assert [record.key for record in statistics.orphans] == ["a", "b"]
    assert statistics.distinct_paths == ["X|Y|Z|W"]


def test_collect_statistics_rejects_invalid_level_count() -> None:
    """A level count below one should raise ValueError."""

    with pytest.raises(ValueError):
        collect_statistics([], 0)


def test_build_pivot_fills_missing_parameters() -> None:
    """Pivot rows should carry every parameter, blank when absent."""

    pivot = build_pivot(
        [
            AssetRecord(key="2", name="B", metadata={"Width": "10"}),
            AssetRecord(key="1", name="A", metadata={"O_DD1": "CIRC"}),
        ]
    )

    assert pivot.parameter_names == ["O_DD1", "Width"]
    assert [row["assetGuid"] for row in pivot.rows] == ["1", "2"]
    assert pivot.rows[0]["param_Width"] is None
    assert pivot.rows[1]["param_Width"] == "10"
    payload = pivot.as_dict()
    assert payload["totalAssets"] == 2
    assert payload["totalParameters"] == 2
