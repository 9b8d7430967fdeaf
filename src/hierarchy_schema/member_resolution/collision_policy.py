"""Same-name member collision policy."""

from __future__ import annotations

from enum import Enum

from hierarchy_schema.type_model.type_descriptors import TypeKind

from .member_models import InheritedMember


class CollisionDecision(str, Enum):
    """Outcome of two same-name members meeting."""

    KEEP_EXISTING = "keep_existing"
    REPLACE_WITH_INCOMING = "replace_with_incoming"
    FAIL = "fail"


def derivation_order(existing: InheritedMember, incoming: InheritedMember) -> int:
    """Compare how derived two declarations are.

    Returns 1 when ``incoming`` is more derived, -1 when ``existing`` is, and 0
    for co-equal declarations (siblings with no ancestor relationship and the
    same kind).
    """
    if incoming.descends_from(existing):
        return 1
    if existing.descends_from(incoming):
        return -1
    if incoming.declaring_kind is TypeKind.CLASS and existing.declaring_kind is TypeKind.INTERFACE:
        return 1
    if existing.declaring_kind is TypeKind.CLASS and incoming.declaring_kind is TypeKind.INTERFACE:
        return -1
    return 0


def decide(
    existing: InheritedMember, incoming: InheritedMember, overrides_allowed: bool
) -> CollisionDecision:
    """Decide which of two same-name declarations survives.

    The same declaration reached along two paths merges. Any redeclaration by a
    descendant of the same kind is an override attempt, even when the member is
    unchanged. Other structurally identical declarations merge.
    """
    if existing.declaring_type == incoming.declaring_type:
        return CollisionDecision.KEEP_EXISTING
    if existing.member.is_identical_to(incoming.member) and not _is_redeclaration(
        existing, incoming
    ):
        return CollisionDecision.KEEP_EXISTING

    if not overrides_allowed:
        return CollisionDecision.FAIL

    order = derivation_order(existing, incoming)
    if order > 0:
        return CollisionDecision.REPLACE_WITH_INCOMING
    if order < 0:
        return CollisionDecision.KEEP_EXISTING
    return CollisionDecision.FAIL


def _is_redeclaration(existing: InheritedMember, incoming: InheritedMember) -> bool:
    # A class implementing an interface member is not redeclaring it.
    return incoming.descends_from(existing) and incoming.declaring_kind is existing.declaring_kind

