"""
Stage completion state machine.

active -> won | lost, each terminal state entered exactly once.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class StageOutcome(str, Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


@dataclass
class StageSnapshot:
    """Facts the completion check needs, gathered by the controller."""
    boss_spawned: bool
    boss_defeated: bool
    wave_exhausted: bool
    live_hostiles: int
    wall_health: int


class StageFlow:
    """Decides when a stage is won or lost."""

    def __init__(self):
        self.outcome = StageOutcome.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.outcome == StageOutcome.ACTIVE

    @property
    def is_terminal(self) -> bool:
        return not self.is_active

    @staticmethod
    def is_won(snapshot: StageSnapshot) -> bool:
        return (
            snapshot.boss_spawned
            and snapshot.boss_defeated
            and snapshot.wave_exhausted
            and snapshot.live_hostiles == 0
        )

    @staticmethod
    def is_lost(snapshot: StageSnapshot) -> bool:
        return snapshot.wall_health <= 0

    def check_wall(self, wall_health: int) -> Optional[StageOutcome]:
        """Run right after any wall-damaging event."""
        if wall_health <= 0:
            return self.enter(StageOutcome.LOST)
        return None

    def evaluate(self, snapshot: StageSnapshot) -> Optional[StageOutcome]:
        """
        Check both terminal conditions; a destroyed wall takes precedence.

        Returns:
            The outcome if this call moved the stage into a terminal state
        """
        if self.is_lost(snapshot):
            return self.enter(StageOutcome.LOST)
        if self.is_won(snapshot):
            return self.enter(StageOutcome.WON)
        return None

    def enter(self, outcome: StageOutcome) -> Optional[StageOutcome]:
        """Enter a terminal state; repeated calls are absorbed."""
        if outcome == StageOutcome.ACTIVE or self.is_terminal:
            return None
        self.outcome = outcome
        return outcome
