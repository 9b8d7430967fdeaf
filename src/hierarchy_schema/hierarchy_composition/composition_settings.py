"""Composition settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompositionSettings:
    """Options controlling how inheritance hierarchies are composed."""

    flatten_inheritance_hierarchy: bool = False
    allow_overrides_when_flattening: bool = False
    generate_abstract_members: bool = True
    max_workers: int = 1

    def __post_init__(self) -> None:
        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            raise ValueError("max_workers must be an integer.")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be greater than zero.")

    @property
    def overrides_allowed(self) -> bool:
        """Linked composition always tolerates overrides; flattening follows the setting."""
        if self.flatten_inheritance_hierarchy:
            return self.allow_overrides_when_flattening
        return True
