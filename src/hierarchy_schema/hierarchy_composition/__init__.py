"""Hierarchy composition exports."""

from .composition_settings import CompositionSettings
from .container_hybrid import ANY_ENTRY_VALUE, apply_hybrid, container_entry_schema
from .hierarchy_composer import (
    ancestor_closure,
    compose,
    compose_report,
    compose_type,
    index_universe,
    order_hierarchy,
)
from .resolved_schemas import CompositionReport, ResolvedSchema, TypeFailure

__all__ = [
    "ANY_ENTRY_VALUE",
    "CompositionReport",
    "CompositionSettings",
    "ResolvedSchema",
    "TypeFailure",
    "ancestor_closure",
    "apply_hybrid",
    "compose",
    "compose_report",
    "compose_type",
    "container_entry_schema",
    "index_universe",
    "order_hierarchy",
]
