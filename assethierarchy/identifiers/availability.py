"""Mini README: Model and panorama availability per asset key.

Structure:
    * AssetFileIndex - sets of keys that have a model file or a panorama.

The index is built from file listings before a hierarchy build and is only
consulted when results are serialised, keeping the build itself free of
I/O. Names are resolved with the identifier normalizer, so a panorama
``<key>_360.jpg`` and a model ``<key>.glb`` both count for ``<key>``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

from ..logging_utils import get_logger
from .normalizer import DEFAULT_NORMALIZER, IdentifierNormalizer, SuffixKind
from .scanner import list_directory

LOGGER = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AssetFileIndex:
    """Keys for which model and panorama files exist."""

    model_keys: FrozenSet[str] = field(default_factory=frozenset)
    panorama_keys: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_filenames(
        cls,
        model_files: Iterable[str] = (),
        panorama_files: Iterable[str] = (),
        normalizer: Optional[IdentifierNormalizer] = None,
    ) -> "AssetFileIndex":
        """Resolve listings; only names carrying the expected suffix count."""

        normalizer = normalizer or DEFAULT_NORMALIZER
        model_keys = set()
        for filename in model_files:
            result = normalizer.normalize(filename)
            if result.matched and result.suffix is SuffixKind.MODEL:
                model_keys.add(result.key)
        panorama_keys = set()
        for filename in panorama_files:
            result = normalizer.normalize(filename)
            if result.matched and result.suffix is SuffixKind.PANORAMA:
                panorama_keys.add(result.key)
        LOGGER.debug(
            "File index holds %s model keys and %s panorama keys",
            len(model_keys),
            len(panorama_keys),
        )
        return cls(frozenset(model_keys), frozenset(panorama_keys))

    @classmethod
    def from_directories(
        cls,
        model_directory: Optional[Path] = None,
        panorama_directory: Optional[Path] = None,
        normalizer: Optional[IdentifierNormalizer] = None,
    ) -> "AssetFileIndex":
        """Build the index from directory listings; missing directories are empty."""

        model_files = list_directory(model_directory) if model_directory else []
        panorama_files = list_directory(panorama_directory) if panorama_directory else []
        return cls.from_filenames(model_files, panorama_files, normalizer)

    def has_model(self, key: str) -> bool:
        return key.lower() in self.model_keys

    def has_panorama(self, key: str) -> bool:
        return key.lower() in self.panorama_keys
