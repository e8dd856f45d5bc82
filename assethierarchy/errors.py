"""Mini README: Exception taxonomy for the asset hierarchy engine.

Structure:
    * AssetHierarchyError - common base class.
    * MalformedAttribute - attribute value that cannot be read as text.
    * NoIdentifierMatch - the file name cascade found no key.
    * RecordLoadError - a record document failed validation.

Builds never raise for incomplete classification data. ``MalformedAttribute``
is created to describe the problem in logs and then the value is treated as
empty. ``NoIdentifierMatch`` is only raised by the strict lookup helper;
the default normalizer returns a failed result instead.
"""

from __future__ import annotations

from typing import Any


class AssetHierarchyError(Exception):
    """Base class for errors raised by the package."""


class MalformedAttribute(AssetHierarchyError, ValueError):
    """A classification attribute held a value that is not usable text."""

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(
            f"Attribute {name!r} has unsupported value of type {type(value).__name__}"
        )
        self.name = name
        self.value = value


class NoIdentifierMatch(AssetHierarchyError, LookupError):
    """Raised when no identifier rule resolves a file name."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"No identifier rule matched file name {filename!r}")
        self.filename = filename


class RecordLoadError(AssetHierarchyError, ValueError):
    """Raised when a record document cannot be parsed."""
