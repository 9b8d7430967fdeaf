"""Schema graph exports."""

from .document_rendering import (
    SchemaRenderingError,
    dump_document,
    render_graph_document,
    render_root_document,
    render_schema,
)
from .graph_emitter import emit
from .graph_models import SchemaGraph

__all__ = [
    "SchemaGraph",
    "SchemaRenderingError",
    "dump_document",
    "emit",
    "render_graph_document",
    "render_root_document",
    "render_schema",
]
