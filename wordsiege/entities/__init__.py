"""
Word-bearing entities: hostiles, the boss phase and pickups.
"""

from .hostile import Hostile, HostilePath, HostileArchetype, HostileState, HitResult
from .boss import BossPhase, BossState
from .pickup import TypedPickup, PickupKind, PickupState

__all__ = [
    "Hostile",
    "HostilePath",
    "HostileArchetype",
    "HostileState",
    "HitResult",
    "BossPhase",
    "BossState",
    "TypedPickup",
    "PickupKind",
    "PickupState",
]
