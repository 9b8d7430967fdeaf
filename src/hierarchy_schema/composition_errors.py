"""Composition error taxonomy."""

from __future__ import annotations

from collections.abc import Sequence


class CompositionError(Exception):
    """Base class for errors caused by the supplied type universe."""

    def __init__(self, message: str, *, type_name: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name


class MalformedUniverseError(CompositionError):
    """Raised when the type universe is incomplete or structurally invalid."""


class CyclicHierarchyError(CompositionError):
    """Raised when base types or interfaces form a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(
            f"Inheritance cycle detected: {' -> '.join(self.cycle)}",
            type_name=self.cycle[0] if self.cycle else None,
        )


class AmbiguousMemberError(CompositionError):
    """Raised when two same-name members cannot be reconciled."""

    def __init__(
        self,
        *,
        type_name: str,
        member_name: str,
        existing_type: str,
        incoming_type: str,
        message: str | None = None,
    ) -> None:
        self.member_name = member_name
        self.existing_type = existing_type
        self.incoming_type = incoming_type
        super().__init__(
            message
            or (
                f"Type '{type_name}': member '{member_name}' is declared differently by "
                f"'{existing_type}' and '{incoming_type}'."
            ),
            type_name=type_name,
        )


class OverrideNotAllowedError(AmbiguousMemberError):
    """Raised when flattening meets an override while overriding is disabled."""

    def __init__(
        self, *, type_name: str, member_name: str, existing_type: str, incoming_type: str
    ) -> None:
        super().__init__(
            type_name=type_name,
            member_name=member_name,
            existing_type=existing_type,
            incoming_type=incoming_type,
            message=(
                f"Type '{type_name}': member '{member_name}' declared by '{existing_type}' "
                f"is overridden by '{incoming_type}', but overriding is not allowed "
                "while flattening the inheritance hierarchy."
            ),
        )


class DanglingReferenceError(RuntimeError):
    """Raised when an emitted schema references a definition missing from the graph."""

    def __init__(self, referrer: str, reference: str) -> None:
        self.referrer = referrer
        self.reference = reference
        super().__init__(
            f"Schema '{referrer}' references definition '{reference}' "
            "which is not part of the schema graph."
        )
