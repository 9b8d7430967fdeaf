"""Composition outcome entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from hierarchy_schema.composition_errors import AmbiguousMemberError, CompositionError
from hierarchy_schema.member_resolution.member_models import EffectiveMemberSet
from hierarchy_schema.type_model.type_descriptors import MemberDescriptor


@dataclass(frozen=True)
class ResolvedSchema:  # pylint: disable=too-many-instance-attributes
    """Composed schema for one type."""

    type_name: str
    definition_name: str | None
    properties: Mapping[str, MemberDescriptor]
    required_names: tuple[str, ...]
    all_of_references: tuple[str, ...]
    effective_members: EffectiveMemberSet
    additional_properties_schema: Any = None

    def __post_init__(self) -> None:
        missing = [name for name in self.required_names if name not in self.properties]
        if missing:
            raise ValueError(
                f"Schema '{self.type_name}' requires unknown properties: {', '.join(missing)}"
            )

    @property
    def is_linked(self) -> bool:
        """Return True when descendants reference this schema instead of merging it."""
        return self.definition_name is not None

    @property
    def has_open_entries(self) -> bool:
        return self.additional_properties_schema is not None


@dataclass(frozen=True)
class TypeFailure:
    """A type whose schema could not be composed."""

    type_name: str
    error: CompositionError | None
    blocked_by: str | None = None

    def describe(self) -> str:
        """Return a one-line, human readable failure description."""
        if self.error is not None:
            return str(self.error)
        return (
            f"Type '{self.type_name}': skipped because ancestor '{self.blocked_by}' "
            "could not be composed."
        )

    @property
    def member_name(self) -> str | None:
        if isinstance(self.error, AmbiguousMemberError):
            return self.error.member_name
        return None


@dataclass(frozen=True)
class CompositionReport:
    """Best-effort composition outcome for a whole universe."""

    schemas: Mapping[str, ResolvedSchema]
    failures: tuple[TypeFailure, ...]

    @property
    def is_ok(self) -> bool:
        """Return True when every type was composed."""
        return not self.failures

    def describe_failures(self) -> list[str]:
        return [failure.describe() for failure in self.failures]

    def raise_for_failures(self) -> None:
        """Raise the first root-cause error, in dependency order."""
        for failure in self.failures:
            if failure.error is not None:
                raise failure.error
