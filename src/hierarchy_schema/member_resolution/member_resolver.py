"""Effective member set computation for one type."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from hierarchy_schema.composition_errors import AmbiguousMemberError, OverrideNotAllowedError
from hierarchy_schema.type_model.type_descriptors import TypeDescriptor

from .collision_policy import CollisionDecision, decide, derivation_order
from .member_models import EffectiveMemberSet, InheritedMember


def resolve_members(
    type_descriptor: TypeDescriptor,
    ancestor_member_sets: Sequence[EffectiveMemberSet],
    *,
    lineage: frozenset[str],
    overrides_allowed: bool,
) -> EffectiveMemberSet:
    """Merge ancestor members and overlay the type's own members.

    Args:
      type_descriptor: The type being resolved.
      ancestor_member_sets: Effective members of each direct ancestor, base type
        first and interfaces in declaration order.
      lineage: Names of every transitive ancestor of the type.
      overrides_allowed: Whether a more derived declaration may replace an
        inherited one.

    Returns:
      The winning declaration per member name and the resulting required names.

    Raises:
      AmbiguousMemberError: Two co-equal ancestors disagree on a member.
      OverrideNotAllowedError: A more derived declaration redeclares an
        inherited one while overriding is disallowed.
    """
    merged: dict[str, InheritedMember] = {}

    for member_set in ancestor_member_sets:
        _merge_all(merged, member_set.members.values(), type_descriptor.name, overrides_allowed)

    own = (
        InheritedMember(
            member=member,
            declaring_type=type_descriptor.name,
            declaring_kind=type_descriptor.kind,
            lineage=lineage,
        )
        for member in type_descriptor.own_members
    )
    _merge_all(merged, own, type_descriptor.name, overrides_allowed)

    required_names = frozenset(
        name for name, inherited in merged.items() if inherited.member.is_required
    )
    return EffectiveMemberSet(members=merged, required_names=required_names)


def _merge_all(
    merged: dict[str, InheritedMember],
    candidates: Iterable[InheritedMember],
    type_name: str,
    overrides_allowed: bool,
) -> None:
    for incoming in candidates:
        name = incoming.member.name
        existing = merged.get(name)
        if existing is None:
            merged[name] = incoming
            continue

        decision = decide(existing, incoming, overrides_allowed)
        if decision is CollisionDecision.REPLACE_WITH_INCOMING:
            # Assignment keeps the first occurrence's position.
            merged[name] = incoming
        elif decision is CollisionDecision.FAIL:
            raise _collision_error(type_name, existing, incoming)


def _collision_error(
    type_name: str, existing: InheritedMember, incoming: InheritedMember
) -> AmbiguousMemberError:
    details = {
        "type_name": type_name,
        "member_name": incoming.member.name,
        "existing_type": existing.declaring_type,
        "incoming_type": incoming.declaring_type,
    }
    if derivation_order(existing, incoming) == 0:
        return AmbiguousMemberError(**details)
    return OverrideNotAllowedError(**details)
