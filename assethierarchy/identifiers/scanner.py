"""Mini README: Batch resolution of asset file names.

Structure:
    * ScanFailure - one file name that no rule could resolve.
    * ScanReport - aggregated per-file outcome of a scan.
    * scan_filenames - resolve an iterable of names independently.
    * scan_directory - list a directory and resolve every matching file.

Each file is evaluated on its own: a name that cannot be resolved is
recorded as a failure and the scan moves on. Directory listing is the only
I/O in this module and happens before any resolution takes place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from ..logging_utils import get_logger
from .normalizer import DEFAULT_NORMALIZER, IdentifierNormalizer, NormalizedIdentifier

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ScanFailure:
    """File name the normalizer rejected."""

    filename: str
    reason: str


@dataclass(slots=True)
class ScanReport:
    """Outcome of resolving a batch of file names."""

    resolved: Dict[str, NormalizedIdentifier] = field(default_factory=dict)
    failures: List[ScanFailure] = field(default_factory=list)
    total_found: int = 0

    @property
    def keys(self) -> List[str]:
        """Distinct keys resolved by the scan, sorted."""

        return sorted({result.key for result in self.resolved.values() if result.key})

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_found": self.total_found,
            "processed": [
                {
                    "filename": filename,
                    "key": result.key,
                    "rule": result.rule.value if result.rule else None,
                    "rule_index": result.rule_index,
                    "suffix": result.suffix.value if result.suffix else None,
                }
                for filename, result in self.resolved.items()
            ],
            "errors": [
                {"filename": failure.filename, "reason": failure.reason}
                for failure in self.failures
            ],
        }


def scan_filenames(
    filenames: Iterable[str], normalizer: Optional[IdentifierNormalizer] = None
) -> ScanReport:
    """Resolve every file name, collecting successes and failures."""

    normalizer = normalizer or DEFAULT_NORMALIZER
    report = ScanReport()
    for filename in filenames:
        report.total_found += 1
        result = normalizer.normalize(filename)
        if result.matched:
            report.resolved[filename] = result
        else:
            report.failures.append(
                ScanFailure(filename=filename, reason="no identifier rule matched")
            )
            LOGGER.warning("Skipping %s: no identifier rule matched", filename)
    LOGGER.info(
        "Scanned %s files: %s resolved, %s failed",
        report.total_found,
        len(report.resolved),
        len(report.failures),
    )
    return report


def list_directory(
    directory: Path, extensions: Optional[Sequence[str]] = None
) -> List[str]:
    """Return sorted file names in ``directory``, optionally filtered by extension.

    A missing directory yields an empty list.
    """

    directory = Path(directory)
    if not directory.is_dir():
        LOGGER.info("Directory %s not found; nothing to scan", directory)
        return []
    wanted = {extension.lstrip(".").lower() for extension in extensions} if extensions else None
    names = []
    for entry in directory.iterdir():
        if not entry.is_file():
            continue
        if wanted is not None and entry.suffix.lstrip(".").lower() not in wanted:
            continue
        names.append(entry.name)
    return sorted(names)


def scan_directory(
    directory: Path,
    normalizer: Optional[IdentifierNormalizer] = None,
    *,
    extensions: Optional[Sequence[str]] = None,
) -> ScanReport:
    """List ``directory`` and resolve each file name it contains."""

    return scan_filenames(list_directory(directory, extensions), normalizer)
