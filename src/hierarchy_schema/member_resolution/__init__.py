"""Member resolution exports."""

from .collision_policy import CollisionDecision, decide, derivation_order
from .member_models import EffectiveMemberSet, InheritedMember
from .member_resolver import resolve_members

__all__ = [
    "CollisionDecision",
    "EffectiveMemberSet",
    "InheritedMember",
    "decide",
    "derivation_order",
    "resolve_members",
]
