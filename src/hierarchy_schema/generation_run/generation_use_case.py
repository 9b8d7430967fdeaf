"""Generation run use-case service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from hierarchy_schema.composition_errors import CompositionError
from hierarchy_schema.configuration import (
    Configuration,
    ConfigurationError,
    load_configuration,
)
from hierarchy_schema.hierarchy_composition import CompositionReport, TypeFailure, compose_report
from hierarchy_schema.schema_graph import (
    SchemaRenderingError,
    dump_document,
    emit,
    render_graph_document,
)

from .run_contracts import GenerationOutcome, GenerationRequest

_LOGGER = logging.getLogger(__name__)


class GenerationRunError(Exception):
    """Raised when a generation run cannot be completed."""

    def __init__(self, message: str, failures: Sequence[TypeFailure] = ()) -> None:
        super().__init__(message)
        self.failures = tuple(failures)


def execute_generation_run(request: GenerationRequest) -> GenerationOutcome:
    """Compose the configured catalog and render the requested roots as one document."""
    configuration = _load_configuration(request.config_path)
    requested = tuple(dict.fromkeys(request.root_types or configuration.root_types or ()))
    unknown = [name for name in requested if name not in configuration.type_names]
    if unknown:
        raise GenerationRunError(f"Unknown root type(s): {', '.join(unknown)}")

    # Explicit roots only need their own ancestor closure to compose.
    report = _compose(configuration, requested or None)
    if not report.is_ok and not request.best_effort:
        raise GenerationRunError(_failure_message(report), failures=report.failures)
    candidates = requested or tuple(sorted(report.schemas))
    root_types = tuple(name for name in candidates if name in report.schemas)

    graph = emit(report.schemas, root_types)
    try:
        document_text = dump_document(render_graph_document(graph))
    except SchemaRenderingError as exc:
        raise GenerationRunError(str(exc)) from exc

    output_path = None
    if request.output_path is not None:
        output_path = Path(request.output_path)
        try:
            output_path.write_text(document_text, encoding="utf-8")
        except OSError as exc:
            raise GenerationRunError(f"Failed to write schema document: {exc}") from exc
        output_path = output_path.resolve()

    _LOGGER.debug(
        "Generated %d root(s) with %d definition(s)", len(root_types), len(graph.definitions)
    )
    return GenerationOutcome(
        document_text=document_text,
        output_path=output_path,
        root_types=root_types,
        definition_count=len(graph.definitions),
        failures=report.failures,
    )


def check_catalog(config_path: str) -> CompositionReport:
    """Compose every configured type and return the per-type report."""
    return _compose(_load_configuration(config_path))


def _load_configuration(config_path: str) -> Configuration:
    try:
        return load_configuration(config_path)
    except ConfigurationError as exc:
        raise GenerationRunError(str(exc)) from exc


def _compose(
    configuration: Configuration, root_names: Sequence[str] | None = None
) -> CompositionReport:
    try:
        return compose_report(
            configuration.catalog.types, configuration.settings, root_names=root_names
        )
    except CompositionError as exc:
        raise GenerationRunError(str(exc)) from exc


def _failure_message(report: CompositionReport) -> str:
    lines = ["Schema composition failed:"]
    lines.extend(f"  - {line}" for line in report.describe_failures())
    return "\n".join(lines)
