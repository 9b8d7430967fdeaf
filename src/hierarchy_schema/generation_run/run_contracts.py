"""Generation run entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hierarchy_schema.hierarchy_composition.resolved_schemas import TypeFailure


@dataclass(frozen=True)
class GenerationRequest:
    """Input contract for one generation run."""

    config_path: str
    output_path: str | None = None
    root_types: tuple[str, ...] = ()
    best_effort: bool = False


@dataclass(frozen=True)
class GenerationOutcome:
    """Output contract for one completed generation run."""

    document_text: str
    output_path: Path | None
    root_types: tuple[str, ...]
    definition_count: int
    failures: tuple[TypeFailure, ...]

    @property
    def is_ok(self) -> bool:
        return not self.failures
