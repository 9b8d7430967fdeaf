"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from hierarchy_schema.hierarchy_composition.composition_settings import CompositionSettings
from hierarchy_schema.type_model.catalog_reader import (
    CatalogError,
    load_type_catalog,
    parse_type_catalog,
)

from .runtime_settings import CatalogConfig, Configuration


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    settings = _parse_generation_section(parsed.get("generation"))
    catalog = _parse_catalog_section(
        parsed.get("catalog"),
        path.parent,
        generate_abstract_members=settings.generate_abstract_members,
    )
    known_types = {type_descriptor.name for type_descriptor in catalog.types}
    root_types = _parse_output_section(parsed.get("output"), known_types=known_types)

    return Configuration(path=path, catalog=catalog, settings=settings, root_types=root_types)


def _parse_generation_section(value: Any) -> CompositionSettings:
    if value is None:
        return CompositionSettings()
    section = _require_mapping(value, "generation")
    flatten = _optional_bool(
        section.get("flatten_inheritance_hierarchy"), "generation.flatten_inheritance_hierarchy"
    )
    allow_overrides = _optional_bool(
        section.get("allow_overrides_when_flattening"),
        "generation.allow_overrides_when_flattening",
    )
    generate_abstract = _optional_bool(
        section.get("generate_abstract_members", True), "generation.generate_abstract_members"
    )
    max_workers = _require_positive_int(section.get("max_workers", 1), "generation.max_workers")
    return CompositionSettings(
        flatten_inheritance_hierarchy=flatten,
        allow_overrides_when_flattening=allow_overrides,
        generate_abstract_members=generate_abstract,
        max_workers=max_workers,
    )


def _parse_catalog_section(
    value: Any, base_path: Path, *, generate_abstract_members: bool
) -> CatalogConfig:
    section = _require_mapping(value, "catalog")
    inline = section.get("inline")
    path_value = section.get("path")
    if inline and path_value:
        raise ConfigurationError("Catalog definition must not set both inline and path.")
    try:
        if inline:
            if not isinstance(inline, Mapping):
                raise ConfigurationError("catalog.inline must be a mapping with a 'types' list.")
            types = parse_type_catalog(inline, generate_abstract_members=generate_abstract_members)
            return CatalogConfig(types=types, source_path=None)
        if path_value:
            if not isinstance(path_value, str):
                raise ConfigurationError("catalog.path must be a string.")
            catalog_path = _resolve_path(base_path, path_value)
            if not catalog_path.exists():
                raise ConfigurationError(f"Type catalog not found: {catalog_path}")
            types = load_type_catalog(
                catalog_path, generate_abstract_members=generate_abstract_members
            )
            return CatalogConfig(types=types, source_path=catalog_path)
    except CatalogError as exc:
        raise ConfigurationError(str(exc)) from exc
    raise ConfigurationError("Catalog definition requires either inline or path.")


def _parse_output_section(value: Any, *, known_types: set[str]) -> tuple[str, ...] | None:
    if value is None:
        return None
    section = _require_mapping(value, "output")
    raw_roots = section.get("root_types")
    if raw_roots is None:
        return None
    root_types = _normalize_string_sequence(raw_roots, "output.root_types")
    for type_name in root_types:
        if type_name not in known_types:
            raise ConfigurationError(
                f"output.root_types '{type_name}' does not exist in the type catalog."
            )
    return root_types


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be a boolean.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
