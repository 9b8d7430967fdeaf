"""Container-hybrid handling: structured members plus an open key/value map."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from hierarchy_schema.type_model.type_descriptors import TypeDescriptor

from .resolved_schemas import ResolvedSchema

ANY_ENTRY_VALUE = True


def container_entry_schema(type_descriptor: TypeDescriptor) -> Any:
    """Return the open-map value schema a hybrid type declares."""
    if type_descriptor.container_value_type is None:
        return ANY_ENTRY_VALUE
    return type_descriptor.container_value_type


def apply_hybrid(type_descriptor: TypeDescriptor, resolved: ResolvedSchema) -> ResolvedSchema:
    """Attach the open-map facet to a container-hybrid type's schema.

    Named properties stay as they are and take precedence over the open map for
    their exact keys. Non-hybrid types are returned unchanged.
    """
    if not type_descriptor.is_container_hybrid:
        return resolved
    return replace(resolved, additional_properties_schema=container_entry_schema(type_descriptor))
