"""Schema graph assembly service."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping, Sequence

from hierarchy_schema.composition_errors import DanglingReferenceError
from hierarchy_schema.hierarchy_composition.resolved_schemas import ResolvedSchema

from .graph_models import SchemaGraph

_LOGGER = logging.getLogger(__name__)


def emit(
    resolved_map: Mapping[str, ResolvedSchema], root_names: Sequence[str] | None = None
) -> SchemaGraph:
    """Package resolved schemas into roots and the linked definitions they reference.

    Args:
      resolved_map: Composed schemas keyed by type name.
      root_names: Types to expose as roots. Defaults to every type, sorted by name.

    Returns:
      The schema graph. Definitions are ordered breadth-first from the roots.

    Raises:
      KeyError: A requested root type was not composed.
      DanglingReferenceError: A schema links a definition that does not exist.
    """
    requested = sorted(resolved_map) if root_names is None else list(dict.fromkeys(root_names))
    missing = [name for name in requested if name not in resolved_map]
    if missing:
        raise KeyError(f"Unknown root type(s): {', '.join(missing)}")

    by_definition = {
        schema.definition_name: schema
        for schema in resolved_map.values()
        if schema.definition_name is not None
    }
    roots = {name: resolved_map[name] for name in requested}

    definitions: dict[str, ResolvedSchema] = {}
    pending: deque[tuple[str, str]] = deque(
        (name, reference) for name in requested for reference in roots[name].all_of_references
    )
    while pending:
        referrer, reference = pending.popleft()
        if reference in definitions:
            continue
        definition = by_definition.get(reference)
        if definition is None:
            raise DanglingReferenceError(referrer, reference)
        definitions[reference] = definition
        pending.extend((reference, nested) for nested in definition.all_of_references)

    _LOGGER.debug("Emitted %d root(s) and %d definition(s)", len(roots), len(definitions))
    return SchemaGraph(roots=roots, definitions=definitions)
