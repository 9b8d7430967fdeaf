"""Collision policy tests."""

from __future__ import annotations

import pytest
from hierarchy_schema.member_resolution import (
    CollisionDecision,
    InheritedMember,
    decide,
    derivation_order,
)
from hierarchy_schema.type_model import MemberDescriptor, TypeKind


def _declared(
    declaring_type: str,
    *,
    value_type: str = "string",
    required: bool = False,
    kind: TypeKind = TypeKind.CLASS,
    lineage: tuple[str, ...] = (),
) -> InheritedMember:
    return InheritedMember(
        member=MemberDescriptor(name="Name", value_type=value_type, is_required=required),
        declaring_type=declaring_type,
        declaring_kind=kind,
        lineage=frozenset(lineage),
    )


@pytest.mark.parametrize("overrides_allowed", [True, False])
def test_identical_declarations_keep_existing(overrides_allowed: bool) -> None:
    left = _declared("ILeft", kind=TypeKind.INTERFACE, lineage=("IBase",))
    right = _declared("IRight", kind=TypeKind.INTERFACE, lineage=("IBase",))

    assert decide(left, right, overrides_allowed) is CollisionDecision.KEEP_EXISTING


def test_more_derived_declaration_replaces_when_overrides_allowed() -> None:
    person = _declared("Person")
    principal = _declared("Principal", required=True, lineage=("Teacher", "Person"))

    assert decide(person, principal, True) is CollisionDecision.REPLACE_WITH_INCOMING


def test_less_derived_declaration_is_ignored_when_overrides_allowed() -> None:
    person = _declared("Person")
    principal = _declared("Principal", required=True, lineage=("Teacher", "Person"))

    assert decide(principal, person, True) is CollisionDecision.KEEP_EXISTING


def test_classes_win_over_unrelated_interfaces() -> None:
    from_class = _declared("Base", required=True)
    from_interface = _declared("IThing", kind=TypeKind.INTERFACE)

    assert decide(from_class, from_interface, True) is CollisionDecision.KEEP_EXISTING
    assert decide(from_interface, from_class, True) is CollisionDecision.REPLACE_WITH_INCOMING


def test_disagreeing_siblings_fail_even_when_overrides_allowed() -> None:
    left = _declared("ILeft", kind=TypeKind.INTERFACE)
    right = _declared("IRight", kind=TypeKind.INTERFACE, value_type="integer")

    assert decide(left, right, True) is CollisionDecision.FAIL


def test_any_difference_fails_when_overrides_disallowed() -> None:
    person = _declared("Person")
    principal = _declared("Principal", required=True, lineage=("Person",))

    assert decide(person, principal, False) is CollisionDecision.FAIL


def test_derivation_order_is_antisymmetric() -> None:
    person = _declared("Person")
    teacher = _declared("Teacher", lineage=("Person",))
    sibling = _declared("Student", lineage=("Person",))

    assert derivation_order(person, teacher) == 1
    assert derivation_order(teacher, person) == -1
    assert derivation_order(teacher, sibling) == 0


def test_same_declaration_reached_twice_is_kept() -> None:
    first_path = _declared("IBase", kind=TypeKind.INTERFACE)
    second_path = _declared("IBase", kind=TypeKind.INTERFACE)

    assert decide(first_path, second_path, False) is CollisionDecision.KEEP_EXISTING


def test_unchanged_redeclaration_by_descendant_counts_as_override() -> None:
    person = _declared("Person")
    teacher = _declared("Teacher", lineage=("Person",))

    assert decide(person, teacher, False) is CollisionDecision.FAIL
    assert decide(person, teacher, True) is CollisionDecision.REPLACE_WITH_INCOMING


def test_unchanged_redeclaration_by_descendant_interface_counts_as_override() -> None:
    named = _declared("INamed", kind=TypeKind.INTERFACE)
    titled = _declared("ITitled", kind=TypeKind.INTERFACE, lineage=("INamed",))

    assert decide(named, titled, False) is CollisionDecision.FAIL


def test_class_implementing_unchanged_interface_member_is_merged() -> None:
    named = _declared("INamed", kind=TypeKind.INTERFACE)
    person = _declared("Person", lineage=("INamed",))

    assert decide(named, person, False) is CollisionDecision.KEEP_EXISTING
