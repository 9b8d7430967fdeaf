"""Schema document rendering tests."""

from __future__ import annotations

import json

import pytest
from hierarchy_schema.hierarchy_composition import compose
from hierarchy_schema.schema_graph import (
    SchemaRenderingError,
    dump_document,
    emit,
    render_graph_document,
    render_root_document,
    render_schema,
)
from hierarchy_schema.type_model import MemberDescriptor, TypeDescriptor


def _universe() -> list[TypeDescriptor]:
    return [
        TypeDescriptor(
            name="Person",
            own_members=(
                MemberDescriptor(name="Name", value_type="string", is_required=True),
                MemberDescriptor(name="Tags", value_type={"type": "array"}),
            ),
        ),
        TypeDescriptor(
            name="Registry",
            base_type="Person",
            is_container_hybrid=True,
            container_value_type="integer",
        ),
        TypeDescriptor(name="Anything", is_container_hybrid=True),
    ]


def test_render_schema_includes_links_properties_required_and_open_entries() -> None:
    resolved = compose(_universe())

    assert render_schema(resolved["Person"]) == {
        "type": "object",
        "properties": {"Name": {"type": "string"}, "Tags": {"type": "array"}},
        "required": ["Name"],
    }
    assert render_schema(resolved["Registry"]) == {
        "type": "object",
        "allOf": [{"$ref": "#/definitions/Person"}],
        "properties": {},
        "additionalProperties": {"type": "integer"},
    }
    assert render_schema(resolved["Anything"])["additionalProperties"] is True


def test_root_document_carries_only_reachable_definitions() -> None:
    graph = emit(compose(_universe()))

    document = render_root_document(graph, "Registry")

    assert document["$schema"] == "http://json-schema.org/draft-04/schema#"
    assert document["title"] == "Registry"
    assert list(document["definitions"]) == ["Person"]
    assert "definitions" not in render_root_document(graph, "Anything")


def test_graph_document_survives_json_round_trip() -> None:
    graph = emit(compose(_universe()))
    document = render_graph_document(graph)

    reparsed = json.loads(dump_document(document))

    assert reparsed == document
    assert list(reparsed["roots"]) == ["Anything", "Person", "Registry"]
    assert list(reparsed["definitions"]) == ["Person"]


def test_dump_document_is_stable_text() -> None:
    text = dump_document({"b": 1, "a": "ü"})

    assert text == '{\n  "b": 1,\n  "a": "ü"\n}\n'


def test_unknown_root_cannot_be_rendered() -> None:
    graph = emit(compose(_universe()))

    with pytest.raises(SchemaRenderingError, match="no root named 'Missing'"):
        render_root_document(graph, "Missing")


def test_unsupported_value_type_raises_rendering_error() -> None:
    resolved = compose(
        [TypeDescriptor(name="Odd", own_members=(MemberDescriptor(name="Count", value_type=3),))]
    )

    with pytest.raises(SchemaRenderingError, match="Odd.Count"):
        render_schema(resolved["Odd"])
