"""Generation run domain exports."""

from .generation_use_case import GenerationRunError, check_catalog, execute_generation_run
from .run_contracts import GenerationOutcome, GenerationRequest

__all__ = [
    "GenerationOutcome",
    "GenerationRequest",
    "GenerationRunError",
    "check_catalog",
    "execute_generation_run",
]
