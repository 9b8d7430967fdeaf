"""Schema graph entities."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass

from hierarchy_schema.hierarchy_composition.resolved_schemas import ResolvedSchema


@dataclass(frozen=True)
class SchemaGraph:
    """Root schemas per requested type plus the linked definitions they reach."""

    roots: Mapping[str, ResolvedSchema]
    definitions: Mapping[str, ResolvedSchema]

    def reachable_definitions(self, root_name: str) -> dict[str, ResolvedSchema]:
        """Return the definitions reachable from one root, in discovery order."""
        reached: dict[str, ResolvedSchema] = {}
        pending = deque(self.roots[root_name].all_of_references)
        while pending:
            reference = pending.popleft()
            if reference in reached:
                continue
            definition = self.definitions[reference]
            reached[reference] = definition
            pending.extend(definition.all_of_references)
        return reached
