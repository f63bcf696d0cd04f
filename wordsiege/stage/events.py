"""
Events the stage controller publishes for renderers and the HUD.

The set is closed: collaborators pattern-match on these types and never
subscribe to anything else.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..core.word_target import TargetKind
from ..entities.pickup import PickupKind
from ..systems.economy import ScoreSummary
from ..systems.stage_flow import StageOutcome


class EliminationCause(str, Enum):
    ARROW = "arrow"
    BOMB = "bomb"


@dataclass(frozen=True)
class TargetProgress:
    target_id: int
    kind: TargetKind
    input: str
    is_mistake: bool


@dataclass(frozen=True)
class HostileSpawned:
    hostile_id: int
    word: str


@dataclass(frozen=True)
class HostileEliminated:
    hostile_id: int
    word: str
    cause: EliminationCause


@dataclass(frozen=True)
class HostileDamaged:
    hostile_id: int
    old_word: str
    new_word: str


@dataclass(frozen=True)
class HostileBreached:
    hostile_id: int
    word: str


@dataclass(frozen=True)
class BossSpawned:
    boss_id: int
    name: str
    word: str


@dataclass(frozen=True)
class BossWordChanged:
    boss_id: int
    word: str


@dataclass(frozen=True)
class BossDefeated:
    boss_id: int


@dataclass(frozen=True)
class BossBreached:
    boss_id: int
    damage: int


@dataclass(frozen=True)
class PickupSpawned:
    pickup_id: int
    kind: PickupKind
    word: str


@dataclass(frozen=True)
class PickupCollected:
    pickup_id: int
    kind: PickupKind
    typed: bool


@dataclass(frozen=True)
class PickupMissed:
    pickup_id: int
    kind: PickupKind


@dataclass(frozen=True)
class BombActivated:
    eliminated: int


@dataclass(frozen=True)
class StageEnded:
    outcome: StageOutcome
    summary: ScoreSummary


StageEvent = Union[
    TargetProgress,
    HostileSpawned,
    HostileEliminated,
    HostileDamaged,
    HostileBreached,
    BossSpawned,
    BossWordChanged,
    BossDefeated,
    BossBreached,
    PickupSpawned,
    PickupCollected,
    PickupMissed,
    BombActivated,
    StageEnded,
]
