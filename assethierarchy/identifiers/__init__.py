"""Mini README: Identifier resolution for asset files.

Exports the normalizer cascade, the batch scanner used when many files are
dropped in at once, and the availability index that records which assets
have model or panorama files.
"""

from .availability import AssetFileIndex
from .normalizer import (
    DEFAULT_MATCHERS,
    DEFAULT_SUFFIX_STRIPPERS,
    IdentifierNormalizer,
    MatchRule,
    NormalizedIdentifier,
    SuffixKind,
    normalize_identifier,
)
from .scanner import ScanFailure, ScanReport, scan_directory, scan_filenames

__all__ = [
    "AssetFileIndex",
    "DEFAULT_MATCHERS",
    "DEFAULT_SUFFIX_STRIPPERS",
    "IdentifierNormalizer",
    "MatchRule",
    "NormalizedIdentifier",
    "ScanFailure",
    "ScanReport",
    "SuffixKind",
    "normalize_identifier",
    "scan_directory",
    "scan_filenames",
]
