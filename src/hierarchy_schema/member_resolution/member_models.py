"""Member resolution entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from hierarchy_schema.type_model.type_descriptors import MemberDescriptor, TypeKind


@dataclass(frozen=True)
class InheritedMember:
    """A member descriptor together with the type that declared it."""

    member: MemberDescriptor
    declaring_type: str
    declaring_kind: TypeKind
    lineage: frozenset[str]

    def descends_from(self, other: InheritedMember) -> bool:
        """Return True when this member's declaring type derives from the other's."""
        return other.declaring_type in self.lineage


@dataclass(frozen=True)
class EffectiveMemberSet:
    """Winning member per name, in first-occurrence order."""

    members: Mapping[str, InheritedMember]
    required_names: frozenset[str]

    @property
    def descriptors(self) -> dict[str, MemberDescriptor]:
        return {name: inherited.member for name, inherited in self.members.items()}

    def __contains__(self, name: object) -> bool:
        return name in self.members

    def __len__(self) -> int:
        return len(self.members)
