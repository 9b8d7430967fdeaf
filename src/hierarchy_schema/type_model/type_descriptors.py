"""Type descriptor entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FlattenPolicy(str, Enum):
    """Per-type flattening marker."""

    DEFAULT = "default"
    FORCE_FLATTEN = "force_flatten"


class TypeKind(str, Enum):
    """Declared kind of a type."""

    CLASS = "class"
    INTERFACE = "interface"


@dataclass(frozen=True)
class MemberDescriptor:
    """One named property declared on a type."""

    name: str
    value_type: Any
    is_required: bool = False
    is_shadowing: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Member names must be non-empty strings.")

    def is_identical_to(self, other: MemberDescriptor) -> bool:
        """Return True when both descriptors have the same value type and required-ness."""
        return self.value_type == other.value_type and self.is_required == other.is_required


@dataclass(frozen=True)
class TypeDescriptor:  # pylint: disable=too-many-instance-attributes
    """Immutable description of one declared type and its direct ancestors."""

    name: str
    own_members: tuple[MemberDescriptor, ...] = ()
    base_type: str | None = None
    interfaces: tuple[str, ...] = ()
    flatten_policy: FlattenPolicy = FlattenPolicy.DEFAULT
    is_container_hybrid: bool = False
    container_value_type: Any = None
    kind: TypeKind = TypeKind.CLASS

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Type names must be non-empty strings.")

        members = tuple(self.own_members)
        seen: set[str] = set()
        for member in members:
            if member.name in seen:
                raise ValueError(f"Type '{self.name}' declares member '{member.name}' twice.")
            seen.add(member.name)
        object.__setattr__(self, "own_members", members)
        # Interfaces reached twice through one declaration collapse to their first position.
        object.__setattr__(self, "interfaces", tuple(dict.fromkeys(self.interfaces)))

    @property
    def ancestor_names(self) -> tuple[str, ...]:
        """Return direct ancestors: base type first, then interfaces in declaration order."""
        if self.base_type is None:
            return self.interfaces
        return (self.base_type, *self.interfaces)

    @property
    def is_force_flattened(self) -> bool:
        return self.flatten_policy is FlattenPolicy.FORCE_FLATTEN
