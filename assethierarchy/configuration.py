"""Mini README: Centralised configuration models and helpers.

Structure:
    * HierarchySettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read the classification level naming, the path
    separator, the file naming conventions understood by the identifier
    normalizer and the optional asset directories. Values come from
    ``ASSETHIERARCHY_*`` environment variables or a local ``.env`` file and
    are validated once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional, Tuple

from pydantic import Field, validator
from pydantic_settings import BaseSettings, NoDecode


class HierarchySettings(BaseSettings):
    """Runtime configuration for hierarchy builds and file name resolution."""

    log_level: str = Field("INFO", description="Root logging level name.")
    level_prefix: str = Field(
        "O_DD",
        description="Metadata name prefix of the classification attributes (O_DD1, O_DD2, ...).",
    )
    level_count: int = Field(
        4,
        description="Number of classification levels read from each record.",
        ge=1,
        le=16,
    )
    path_separator: str = Field(
        "|",
        description="Separator used to join classification values into a path.",
    )
    model_extensions: Annotated[Tuple[str, ...], NoDecode] = Field(
        ("glb",),
        description="File extensions recognised as 3-D model files.",
    )
    panorama_marker: str = Field(
        "_360",
        description="Token placed between the identifier and a panorama image extension.",
    )
    panorama_extensions: Annotated[Tuple[str, ...], NoDecode] = Field(
        ("jpg", "jpeg", "png"),
        description="Image extensions accepted after the panorama marker.",
    )
    model_directory: Optional[Path] = Field(
        None,
        description="Directory holding model files, used to flag asset availability.",
    )
    panorama_directory: Optional[Path] = Field(
        None,
        description="Directory holding panorama images, used to flag asset availability.",
    )

    class Config:
        env_prefix = "ASSETHIERARCHY_"
        env_file = ".env"
        case_sensitive = False
        protected_namespaces = ()

    @validator("path_separator")
    def _require_separator(cls, value: str) -> str:
        """Reject an empty separator, which would make paths ambiguous."""

        if not value:
            raise ValueError("path_separator must not be empty")
        return value

    @validator("model_extensions", "panorama_extensions", pre=True)
    def _normalise_extensions(cls, value: object) -> Tuple[str, ...]:
        """Accept comma separated strings (as read from the environment) and strip leading dots."""

        if isinstance(value, str):
            value = value.split(",")
        extensions = tuple(str(item).strip().lstrip(".").lower() for item in value)
        return tuple(item for item in extensions if item)

    @validator("model_directory", "panorama_directory", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        """Expand user directories without creating anything on disk."""

        if value in (None, ""):
            return None
        return Path(value).expanduser().resolve()

    @property
    def level_names(self) -> List[str]:
        """Attribute names for each level, ordered from the root."""

        return [f"{self.level_prefix}{index}" for index in range(1, self.level_count + 1)]


@lru_cache()
def get_settings() -> HierarchySettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return HierarchySettings()
