"""End-to-end inheritance scenarios: catalog -> compose -> emit -> render."""

from __future__ import annotations

import json

import pytest
from hierarchy_schema.composition_errors import OverrideNotAllowedError
from hierarchy_schema.hierarchy_composition import CompositionSettings, compose
from hierarchy_schema.schema_graph import (
    dump_document,
    emit,
    render_graph_document,
    render_root_document,
)
from hierarchy_schema.type_model import parse_type_catalog


_SCHOOL_CATALOG = {
    "types": [
        {"name": "Person", "members": [{"name": "Name", "type": "string"}]},
        {
            "name": "Teacher",
            "base": "Person",
            "members": [{"name": "Class", "type": "string", "required": True}],
        },
        {
            "name": "Principal",
            "base": "Teacher",
            "members": [
                {"name": "Name", "type": "string", "required": True, "shadowing": True},
                {"name": "NumberOfStaff", "type": "integer"},
            ],
        },
    ]
}


_INTERFACE_CATALOG = {
    "types": [
        {
            "name": "IFoo",
            "kind": "interface",
            "interfaces": ["IBar", "IBaz"],
            "members": [{"name": "Foo", "type": "string"}],
        },
        {"name": "IBar", "kind": "interface", "members": [{"name": "Bar", "type": "string"}]},
        {"name": "IBaz", "kind": "interface", "members": [{"name": "Baz", "type": "string"}]},
        {"name": "ISame", "kind": "interface", "members": [{"name": "Bar", "type": "string"}]},
    ]
}


_FLATTEN_MARKER_CATALOG = {
    "types": [
        {"name": "A", "base": "B", "members": [{"name": "Aaa", "type": "string"}]},
        {"name": "B", "base": "C", "flatten": True, "members": [{"name": "Bbb", "type": "string"}]},
        {"name": "C", "members": [{"name": "Ccc", "type": "string"}]},
    ]
}


_DICTIONARY_CATALOG = {
    "types": [
        {
            "name": "Test",
            "members": [
                {"name": "Id", "type": {"type": ["integer", "null"]}},
                {"name": "Info", "type": {"$ref": "#/definitions/Metadata"}},
            ],
        },
        {"name": "Metadata", "container": {"value_type": "string"}},
        {
            "name": "TaggedMetadata",
            "base": "Metadata",
            "members": [{"name": "Owner", "type": "string", "required": True}],
        },
    ]
}


def _root_document(catalog: dict, root: str, settings: CompositionSettings | None = None) -> dict:
    graph = emit(compose(parse_type_catalog(catalog), settings, root_names=[root]), [root])
    return json.loads(dump_document(render_root_document(graph, root)))


def test_flattened_teacher_has_all_properties_in_one_schema() -> None:
    document = _root_document(
        _SCHOOL_CATALOG, "Teacher", CompositionSettings(flatten_inheritance_hierarchy=True)
    )

    assert list(document["properties"]) == ["Name", "Class"]
    assert "allOf" not in document
    assert "definitions" not in document


def test_flattened_teacher_is_unaffected_by_a_failing_descendant() -> None:
    settings = CompositionSettings(flatten_inheritance_hierarchy=True)

    resolved = compose(parse_type_catalog(_SCHOOL_CATALOG), settings, root_names=["Teacher"])

    assert sorted(resolved) == ["Person", "Teacher"]


def test_flattened_principal_overrides_name_when_overrides_allowed() -> None:
    settings = CompositionSettings(
        flatten_inheritance_hierarchy=True, allow_overrides_when_flattening=True
    )

    document = _root_document(_SCHOOL_CATALOG, "Principal", settings)

    assert set(document["properties"]) == {"Name", "Class", "NumberOfStaff"}
    assert document["required"] == ["Name", "Class"]


def test_flattened_principal_fails_when_overrides_disallowed() -> None:
    with pytest.raises(OverrideNotAllowedError):
        compose(
            parse_type_catalog(_SCHOOL_CATALOG),
            CompositionSettings(flatten_inheritance_hierarchy=True),
        )


def test_linked_principal_references_its_ancestors_as_definitions() -> None:
    document = _root_document(_SCHOOL_CATALOG, "Principal")

    assert document["allOf"] == [{"$ref": "#/definitions/Teacher"}]
    assert list(document["definitions"]) == ["Teacher", "Person"]
    assert document["definitions"]["Teacher"]["allOf"] == [{"$ref": "#/definitions/Person"}]
    assert list(document["definitions"]["Teacher"]["properties"]) == ["Class"]


def test_flattened_interfaces_have_exactly_three_properties() -> None:
    settings = CompositionSettings(flatten_inheritance_hierarchy=True)

    document = _root_document(_INTERFACE_CATALOG, "IFoo", settings)

    assert len(document["properties"]) == 3
    assert set(document["properties"]) == {"Foo", "Bar", "Baz"}


def test_flatten_marker_merges_the_marked_type_into_its_child() -> None:
    # The marker names the ancestor to merge away, so B disappears and C stays linked;
    # generators that mark the receiving type instead would keep B and drop C.
    graph = emit(compose(parse_type_catalog(_FLATTEN_MARKER_CATALOG)), ["A"])
    document = render_root_document(graph, "A")

    assert "B" not in document["definitions"]
    assert "C" in document["definitions"]
    assert list(document["properties"]) == ["Bbb", "Aaa"]
    assert list(document["definitions"]["C"]["properties"]) == ["Ccc"]


@pytest.mark.parametrize("generate_abstract_members", [True, False])
def test_dictionary_hybrid_round_trips_both_facets(generate_abstract_members: bool) -> None:
    catalog = parse_type_catalog(
        _DICTIONARY_CATALOG, generate_abstract_members=generate_abstract_members
    )
    settings = CompositionSettings(
        flatten_inheritance_hierarchy=True, generate_abstract_members=generate_abstract_members
    )

    graph = emit(compose(catalog, settings))
    reparsed = json.loads(dump_document(render_graph_document(graph)))

    tagged = reparsed["roots"]["TaggedMetadata"]
    assert tagged["properties"] == {"Owner": {"type": "string"}}
    assert tagged["required"] == ["Owner"]
    assert tagged["additionalProperties"] == {"type": "string"}
    assert reparsed["roots"]["Test"]["properties"]["Info"] == {"$ref": "#/definitions/Metadata"}


def test_repeated_composition_is_byte_identical_across_orderings_and_workers() -> None:
    catalog = [
        *parse_type_catalog(_SCHOOL_CATALOG),
        *parse_type_catalog(_INTERFACE_CATALOG),
        *parse_type_catalog(_FLATTEN_MARKER_CATALOG),
        *parse_type_catalog(_DICTIONARY_CATALOG),
    ]

    def _render(types: list, settings: CompositionSettings) -> str:
        return dump_document(render_graph_document(emit(compose(types, settings))))

    first = _render(catalog, CompositionSettings())
    second = _render(catalog, CompositionSettings())
    reordered = _render(list(reversed(catalog)), CompositionSettings(max_workers=4))

    assert first == second == reordered
