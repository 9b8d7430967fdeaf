"""JSON document rendering for schema graphs."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from hierarchy_schema.hierarchy_composition.resolved_schemas import ResolvedSchema

from .graph_models import SchemaGraph

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-04/schema#"
DEFINITIONS_POINTER = "#/definitions/"


class SchemaRenderingError(Exception):
    """Raised when a schema cannot be rendered as a JSON document."""


def render_schema(resolved: ResolvedSchema) -> dict[str, Any]:
    """Render one resolved schema as a JSON-Schema style mapping."""
    document: dict[str, Any] = {"type": "object"}
    if resolved.all_of_references:
        document["allOf"] = [
            {"$ref": f"{DEFINITIONS_POINTER}{reference}"}
            for reference in resolved.all_of_references
        ]
    document["properties"] = {
        name: _render_value_type(member.value_type, f"{resolved.type_name}.{name}")
        for name, member in resolved.properties.items()
    }
    if resolved.required_names:
        document["required"] = list(resolved.required_names)
    if resolved.additional_properties_schema is not None:
        document["additionalProperties"] = _render_value_type(
            resolved.additional_properties_schema, f"{resolved.type_name} entries"
        )
    return document


def render_graph_document(graph: SchemaGraph) -> dict[str, Any]:
    """Render all roots and definitions of a graph."""
    return {
        "roots": {name: render_schema(schema) for name, schema in graph.roots.items()},
        "definitions": {
            name: render_schema(schema) for name, schema in graph.definitions.items()
        },
    }


def render_root_document(graph: SchemaGraph, root_name: str) -> dict[str, Any]:
    """Render one root as a standalone document carrying the definitions it reaches."""
    if root_name not in graph.roots:
        raise SchemaRenderingError(f"Schema graph has no root named '{root_name}'.")
    document: dict[str, Any] = {"$schema": JSON_SCHEMA_DRAFT, "title": root_name}
    document.update(render_schema(graph.roots[root_name]))
    reachable = graph.reachable_definitions(root_name)
    if reachable:
        document["definitions"] = {
            name: render_schema(schema) for name, schema in reachable.items()
        }
    return document


def dump_document(document: Mapping[str, Any]) -> str:
    """Serialize a rendered document to deterministic JSON text."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _render_value_type(value_type: Any, label: str) -> Any:
    if isinstance(value_type, bool):
        return value_type
    if isinstance(value_type, str):
        return {"type": value_type}
    if isinstance(value_type, Mapping):
        return dict(value_type)
    raise SchemaRenderingError(
        f"{label}: unsupported value type {type(value_type).__name__}; "
        "expected a type name or a schema mapping."
    )
