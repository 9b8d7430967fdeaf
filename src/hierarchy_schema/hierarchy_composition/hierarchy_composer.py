"""Hierarchy composition service."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass
from typing import Any

from hierarchy_schema.composition_errors import (
    CompositionError,
    CyclicHierarchyError,
    MalformedUniverseError,
)
from hierarchy_schema.member_resolution import resolve_members
from hierarchy_schema.type_model.type_descriptors import TypeDescriptor, TypeKind

from .composition_settings import CompositionSettings
from .container_hybrid import apply_hybrid
from .resolved_schemas import CompositionReport, ResolvedSchema, TypeFailure

_LOGGER = logging.getLogger(__name__)

_WaveOutcome = ResolvedSchema | CompositionError


@dataclass(frozen=True)
class _CompositionContext:
    """Read-only inputs shared by every type composed in one wave."""

    types_by_name: Mapping[str, TypeDescriptor]
    lineages: Mapping[str, frozenset[str]]
    resolved: Mapping[str, ResolvedSchema]
    settings: CompositionSettings


def compose(
    universe: Iterable[TypeDescriptor],
    settings: CompositionSettings | None = None,
    *,
    root_names: Iterable[str] | None = None,
) -> dict[str, ResolvedSchema]:
    """Compose the universe, raising the first failure encountered.

    With ``root_names`` only those types and their ancestors are composed.
    """
    report = compose_report(universe, settings, root_names=root_names)
    report.raise_for_failures()
    return dict(report.schemas)


def compose_report(
    universe: Iterable[TypeDescriptor],
    settings: CompositionSettings | None = None,
    *,
    root_names: Iterable[str] | None = None,
) -> CompositionReport:
    """Compose types, collecting per-type failures instead of raising.

    Structural problems with the universe itself (duplicates, unknown ancestors,
    cycles) are still raised because no type can be trusted afterwards.
    Descendants of a failed type are reported as blocked. When ``root_names`` is
    given, types outside their ancestor closure are neither composed nor
    reported.

    Raises:
      KeyError: A requested root is not part of the universe.
    """
    active_settings = settings or CompositionSettings()
    types_by_name = index_universe(universe)
    waves = order_hierarchy(types_by_name)
    if root_names is not None:
        selected = ancestor_closure(types_by_name, root_names)
        waves = _restrict_waves(waves, selected)
    lineages = _compute_lineages(types_by_name, waves)

    resolved: dict[str, ResolvedSchema] = {}
    failures: dict[str, TypeFailure] = {}
    pool: AbstractContextManager[ThreadPoolExecutor | None] = (
        ThreadPoolExecutor(max_workers=active_settings.max_workers)
        if active_settings.max_workers > 1
        else nullcontext()
    )
    with pool as executor:
        for depth, wave in enumerate(waves):
            ready: list[str] = []
            for type_name in wave:
                blocker = _failed_ancestor(types_by_name[type_name], failures)
                if blocker is None:
                    ready.append(type_name)
                else:
                    failures[type_name] = TypeFailure(
                        type_name=type_name, error=None, blocked_by=blocker
                    )

            _LOGGER.debug("Composing wave %d with %d type(s)", depth, len(ready))
            context = _CompositionContext(
                types_by_name=types_by_name,
                lineages=lineages,
                resolved=dict(resolved),
                settings=active_settings,
            )
            outcomes = _compose_wave(ready, context, executor)
            for type_name, outcome in zip(ready, outcomes, strict=True):
                if isinstance(outcome, ResolvedSchema):
                    resolved[type_name] = outcome
                else:
                    _LOGGER.debug("Composition of %s failed: %s", type_name, outcome)
                    failures[type_name] = TypeFailure(type_name=type_name, error=outcome)

    ordered_failures = tuple(
        failures[type_name] for wave in waves for type_name in wave if type_name in failures
    )
    return CompositionReport(schemas=resolved, failures=ordered_failures)


def index_universe(universe: Iterable[TypeDescriptor]) -> dict[str, TypeDescriptor]:
    """Index types by name and validate ancestor references."""
    types_by_name: dict[str, TypeDescriptor] = {}
    for type_descriptor in universe:
        if type_descriptor.name in types_by_name:
            raise MalformedUniverseError(
                f"Type '{type_descriptor.name}' is declared more than once.",
                type_name=type_descriptor.name,
            )
        types_by_name[type_descriptor.name] = type_descriptor

    for type_descriptor in types_by_name.values():
        _validate_ancestors(type_descriptor, types_by_name)
    return types_by_name


def ancestor_closure(
    types_by_name: Mapping[str, TypeDescriptor], root_names: Iterable[str]
) -> frozenset[str]:
    """Return the requested types together with everything they inherit from."""
    pending = list(dict.fromkeys(root_names))
    missing = [name for name in pending if name not in types_by_name]
    if missing:
        raise KeyError(f"Unknown root type(s): {', '.join(missing)}")

    selected: set[str] = set()
    while pending:
        type_name = pending.pop()
        if type_name in selected:
            continue
        selected.add(type_name)
        pending.extend(types_by_name[type_name].ancestor_names)
    return frozenset(selected)


def order_hierarchy(types_by_name: Mapping[str, TypeDescriptor]) -> list[tuple[str, ...]]:
    """Group types into dependency waves; every ancestor sits in an earlier wave.

    Raises:
      CyclicHierarchyError: When the remaining types depend on each other.
    """
    placed: set[str] = set()
    remaining = list(types_by_name)
    waves: list[tuple[str, ...]] = []
    while remaining:
        wave = tuple(
            type_name
            for type_name in remaining
            if all(ancestor in placed for ancestor in types_by_name[type_name].ancestor_names)
        )
        if not wave:
            raise CyclicHierarchyError(_find_cycle(types_by_name, remaining))
        placed.update(wave)
        waves.append(wave)
        remaining = [type_name for type_name in remaining if type_name not in placed]
    return waves


def _validate_ancestors(
    type_descriptor: TypeDescriptor, types_by_name: Mapping[str, TypeDescriptor]
) -> None:
    name = type_descriptor.name
    for ancestor_name in type_descriptor.ancestor_names:
        if ancestor_name not in types_by_name:
            raise MalformedUniverseError(
                f"Type '{name}' references unknown ancestor '{ancestor_name}'.", type_name=name
            )

    if type_descriptor.base_type is not None:
        if type_descriptor.kind is TypeKind.INTERFACE:
            raise MalformedUniverseError(
                f"Interface '{name}' cannot declare a base type.", type_name=name
            )
        if types_by_name[type_descriptor.base_type].kind is not TypeKind.CLASS:
            raise MalformedUniverseError(
                f"Type '{name}' uses '{type_descriptor.base_type}' as base type, "
                "but it is not a class.",
                type_name=name,
            )
    for interface_name in type_descriptor.interfaces:
        if types_by_name[interface_name].kind is not TypeKind.INTERFACE:
            raise MalformedUniverseError(
                f"Type '{name}' implements '{interface_name}', but it is not an interface.",
                type_name=name,
            )


def _find_cycle(types_by_name: Mapping[str, TypeDescriptor], remaining: Sequence[str]) -> list[str]:
    # Every unplaced type has at least one unplaced ancestor, so the walk must revisit a type.
    unplaced = set(remaining)
    path: list[str] = []
    positions: dict[str, int] = {}
    current = remaining[0]
    while current not in positions:
        positions[current] = len(path)
        path.append(current)
        current = next(
            ancestor
            for ancestor in types_by_name[current].ancestor_names
            if ancestor in unplaced
        )
    return [*path[positions[current] :], current]


def _restrict_waves(
    waves: Sequence[tuple[str, ...]], selected: frozenset[str]
) -> list[tuple[str, ...]]:
    restricted = [tuple(name for name in wave if name in selected) for wave in waves]
    return [wave for wave in restricted if wave]


def _compute_lineages(
    types_by_name: Mapping[str, TypeDescriptor], waves: Sequence[tuple[str, ...]]
) -> dict[str, frozenset[str]]:
    lineages: dict[str, frozenset[str]] = {}
    for wave in waves:
        for type_name in wave:
            ancestors: set[str] = set()
            for ancestor in types_by_name[type_name].ancestor_names:
                ancestors.add(ancestor)
                ancestors.update(lineages[ancestor])
            lineages[type_name] = frozenset(ancestors)
    return lineages


def _failed_ancestor(
    type_descriptor: TypeDescriptor, failures: Mapping[str, TypeFailure]
) -> str | None:
    for ancestor in type_descriptor.ancestor_names:
        if ancestor in failures:
            return ancestor
    return None


def _compose_wave(
    type_names: Sequence[str],
    context: _CompositionContext,
    executor: ThreadPoolExecutor | None,
) -> list[_WaveOutcome]:
    if executor is None or len(type_names) < 2:
        return [_compose_type_safely(type_name, context) for type_name in type_names]
    return list(executor.map(lambda type_name: _compose_type_safely(type_name, context), type_names))


def _compose_type_safely(type_name: str, context: _CompositionContext) -> _WaveOutcome:
    try:
        return compose_type(
            context.types_by_name[type_name],
            context.resolved,
            lineage=context.lineages[type_name],
            settings=context.settings,
        )
    except CompositionError as exc:
        return exc


def compose_type(
    type_descriptor: TypeDescriptor,
    resolved: Mapping[str, ResolvedSchema],
    *,
    lineage: frozenset[str],
    settings: CompositionSettings,
) -> ResolvedSchema:
    """Compose one type whose direct ancestors are already resolved."""
    ancestors = [resolved[name] for name in type_descriptor.ancestor_names]
    effective = resolve_members(
        type_descriptor,
        [ancestor.effective_members for ancestor in ancestors],
        lineage=lineage,
        overrides_allowed=settings.overrides_allowed,
    )

    ordered_names: dict[str, None] = {}
    references: dict[str, None] = {}
    inherited_entries: Any = None
    for ancestor in ancestors:
        if ancestor.definition_name is not None:
            references[ancestor.definition_name] = None
            continue
        # Flattened: take the ancestor's members, its links and its open-map facet.
        ordered_names.update(dict.fromkeys(ancestor.properties))
        references.update(dict.fromkeys(ancestor.all_of_references))
        if inherited_entries is None:
            inherited_entries = ancestor.additional_properties_schema
    ordered_names.update(dict.fromkeys(member.name for member in type_descriptor.own_members))

    properties = {name: effective.members[name].member for name in ordered_names}
    flattened_away = settings.flatten_inheritance_hierarchy or type_descriptor.is_force_flattened
    schema = ResolvedSchema(
        type_name=type_descriptor.name,
        definition_name=None if flattened_away else type_descriptor.name,
        properties=properties,
        required_names=tuple(name for name in properties if name in effective.required_names),
        all_of_references=tuple(references),
        effective_members=effective,
        additional_properties_schema=inherited_entries,
    )
    _LOGGER.debug(
        "Composed %s: %d propert(ies), links=%s",
        type_descriptor.name,
        len(properties),
        list(schema.all_of_references),
    )
    return apply_hybrid(type_descriptor, schema)
