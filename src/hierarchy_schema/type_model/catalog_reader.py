"""Type catalog reader service.

A type catalog is a YAML (or JSON) document listing type descriptors. It stands
in for a language introspection layer: every entry already names its members,
base type, interfaces and markers.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .type_descriptors import FlattenPolicy, MemberDescriptor, TypeDescriptor, TypeKind


class CatalogError(Exception):
    """Raised when a type catalog cannot be read or is malformed."""


def load_type_catalog(
    catalog_path: Path | str, *, generate_abstract_members: bool = True
) -> tuple[TypeDescriptor, ...]:
    """Read a catalog file and return its type descriptors in document order."""
    path = Path(catalog_path)
    if not path.exists():
        raise CatalogError(f"Type catalog not found: {path}")
    try:
        parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse type catalog {path}: {exc}") from exc
    return parse_type_catalog(parsed, generate_abstract_members=generate_abstract_members)


def parse_type_catalog(
    document: Any, *, generate_abstract_members: bool = True
) -> tuple[TypeDescriptor, ...]:
    """Build type descriptors from an already parsed catalog document."""
    if not isinstance(document, Mapping):
        raise CatalogError("Type catalog root must be a mapping.")
    entries = document.get("types")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise CatalogError("Type catalog requires a 'types' list.")

    return tuple(
        _parse_type_entry(entry, index, generate_abstract_members=generate_abstract_members)
        for index, entry in enumerate(entries)
    )


def _parse_type_entry(
    entry: Any, index: int, *, generate_abstract_members: bool
) -> TypeDescriptor:
    if not isinstance(entry, Mapping):
        raise CatalogError(f"types[{index}] must be a mapping.")
    name = _require_non_empty_string(entry.get("name"), f"types[{index}].name")
    label = f"type '{name}'"

    kind = _parse_kind(entry.get("kind", TypeKind.CLASS.value), label)
    base_type = _optional_string(entry.get("base"), f"{label} base")
    interfaces = _string_sequence(entry.get("interfaces"), f"{label} interfaces")
    flatten = entry.get("flatten", False)
    if not isinstance(flatten, bool):
        raise CatalogError(f"{label} flatten must be a boolean.")

    container = entry.get("container")
    is_container_hybrid = container is not None
    container_value_type = None
    if is_container_hybrid:
        if not isinstance(container, Mapping):
            raise CatalogError(f"{label} container must be a mapping.")
        container_value_type = _parse_entry_value_type(container.get("value_type"), label)

    members = []
    raw_members = entry.get("members") or []
    if not isinstance(raw_members, Sequence) or isinstance(raw_members, str):
        raise CatalogError(f"{label} members must be a list.")
    for member_index, raw_member in enumerate(raw_members):
        member_label = f"{label} members[{member_index}]"
        member, is_abstract = _parse_member(raw_member, member_label)
        if not generate_abstract_members and (is_abstract or kind is TypeKind.INTERFACE):
            continue
        members.append(member)

    try:
        return TypeDescriptor(
            name=name,
            own_members=tuple(members),
            base_type=base_type,
            interfaces=interfaces,
            flatten_policy=FlattenPolicy.FORCE_FLATTEN if flatten else FlattenPolicy.DEFAULT,
            is_container_hybrid=is_container_hybrid,
            container_value_type=container_value_type,
            kind=kind,
        )
    except ValueError as exc:
        raise CatalogError(str(exc)) from exc


def _parse_member(value: Any, label: str) -> tuple[MemberDescriptor, bool]:
    if not isinstance(value, Mapping):
        raise CatalogError(f"{label} must be a mapping.")
    name = _require_non_empty_string(value.get("name"), f"{label}.name")
    if "type" not in value:
        raise CatalogError(f"{label}.type is required.")
    value_type = value["type"]
    if not isinstance(value_type, (str, Mapping, bool)):
        raise CatalogError(f"{label}.type must be a type name or a schema mapping.")

    flags = {}
    for key in ("required", "shadowing", "abstract"):
        flag = value.get(key, False)
        if not isinstance(flag, bool):
            raise CatalogError(f"{label}.{key} must be a boolean.")
        flags[key] = flag

    member = MemberDescriptor(
        name=name,
        value_type=value_type,
        is_required=flags["required"],
        is_shadowing=flags["shadowing"],
    )
    return member, flags["abstract"]


def _parse_entry_value_type(value: Any, label: str) -> Any:
    # Entries stay open: true is accepted, false is not.
    if value is None or value is True or isinstance(value, (str, Mapping)):
        return value
    raise CatalogError(
        f"{label} container.value_type must be a type name, a schema mapping or true."
    )


def _parse_kind(value: Any, label: str) -> TypeKind:
    try:
        return TypeKind(value)
    except ValueError as exc:
        allowed = ", ".join(kind.value for kind in TypeKind)
        raise CatalogError(f"{label} kind must be one of: {allowed}.") from exc


def _string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (_require_non_empty_string(value, field_name),)
    if isinstance(value, Sequence):
        return tuple(_require_non_empty_string(item, field_name) for item in value)
    raise CatalogError(f"{field_name} must be a string or list of strings.")


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise CatalogError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise CatalogError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    return _require_non_empty_string(value, field_name)
