"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hierarchy_schema.hierarchy_composition.composition_settings import CompositionSettings
from hierarchy_schema.type_model.type_descriptors import TypeDescriptor


@dataclass(frozen=True)
class CatalogConfig:
    """Type descriptors loaded from the configured catalog."""

    types: tuple[TypeDescriptor, ...]
    source_path: Path | None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path
    catalog: CatalogConfig
    settings: CompositionSettings
    root_types: tuple[str, ...] | None

    @property
    def type_names(self) -> tuple[str, ...]:
        return tuple(type_descriptor.name for type_descriptor in self.catalog.types)
