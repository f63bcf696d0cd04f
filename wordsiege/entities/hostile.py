"""
Hostile entities that advance on the wall carrying a word.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict
import math

from ..core.word_target import TargetKind, TypingProgressMixin


class HostilePath(str, Enum):
    """Lateral movement pattern while advancing."""
    STRAIGHT = "straight"
    ZIGZAG = "zigzag"
    DRIFT = "drift"


class HostileArchetype(str, Enum):
    """Hostile archetypes with different speeds and toughness."""
    NORMAL = "normal"
    FAST = "fast"
    HEAVY = "heavy"


class HostileState(str, Enum):
    SPAWNING = "spawning"
    ADVANCING = "advancing"
    ELIMINATING = "eliminating"
    BREACHING = "breaching"
    GONE = "gone"


class HitResult(str, Enum):
    """Outcome of an arrow hit on a hostile."""
    IGNORED = "ignored"
    DAMAGED = "damaged"
    ELIMINATED = "eliminated"


ARCHETYPE_HIT_POINTS = {
    HostileArchetype.NORMAL: 1,
    HostileArchetype.FAST: 1,
    HostileArchetype.HEAVY: 2,
}

# Lateral limits keep zigzag and drift hostiles inside the field
ZIGZAG_MARGIN = 120
DRIFT_MARGIN = 100


@dataclass
class Hostile(TypingProgressMixin):
    """A moving enemy bearing a typeable word.

    The hostile advances along ``y`` towards ``breach_y``. Lateral motion
    depends on its path; ``x`` never affects targeting.
    """
    id: int
    word: str
    x: float
    y: float
    speed: float
    breach_y: float
    field_width: float
    path: HostilePath = HostilePath.STRAIGHT
    archetype: HostileArchetype = HostileArchetype.NORMAL
    danger_zone: float = 140.0
    zigzag_frequency: float = 0.0045
    drift_speed: float = 0.0
    hit_points: int = 1
    typed_count: int = 0
    focused: bool = False
    state: HostileState = HostileState.SPAWNING
    elapsed_ms: float = 0.0
    start_x: float = field(init=False)

    def __post_init__(self) -> None:
        self.start_x = self.x
        self.hit_points = ARCHETYPE_HIT_POINTS[self.archetype]

    @property
    def kind(self) -> TargetKind:
        return TargetKind.HOSTILE

    @property
    def is_alive(self) -> bool:
        return self.state in (HostileState.SPAWNING, HostileState.ADVANCING)

    @property
    def is_targetable(self) -> bool:
        return self.state == HostileState.ADVANCING

    @property
    def distance_to_breach(self) -> float:
        return self.breach_y - self.y

    @property
    def in_danger_zone(self) -> bool:
        return self.distance_to_breach <= self.danger_zone

    def activate(self) -> None:
        """Finish spawning and start advancing."""
        if self.state == HostileState.SPAWNING:
            self.state = HostileState.ADVANCING

    def advance(self, delta_ms: float) -> bool:
        """
        Move the hostile forward.

        Args:
            delta_ms: Elapsed time in milliseconds

        Returns:
            True if the hostile reached the breach line this step
        """
        if self.state != HostileState.ADVANCING:
            return False

        self.elapsed_ms += delta_ms
        self.y += self.speed * delta_ms / 1000.0

        if self.path == HostilePath.ZIGZAG:
            amplitude = min(180, max(60, len(self.word) * 12))
            offset = math.sin(self.elapsed_ms * self.zigzag_frequency) * amplitude
            self.x = self._clamp_x(self.start_x + offset, ZIGZAG_MARGIN)
        elif self.path == HostilePath.DRIFT:
            self.x = self._clamp_x(self.x + self.drift_speed * delta_ms / 1000.0, DRIFT_MARGIN)

        if self.y >= self.breach_y:
            self.state = HostileState.BREACHING
            self.focused = False
            return True
        return False

    def _clamp_x(self, x: float, margin: float) -> float:
        low = min(margin, self.field_width / 2)
        high = max(self.field_width - margin, low)
        return max(low, min(high, x))

    def hit_by_arrow(self) -> HitResult:
        """Apply one completed word to this hostile."""
        if self.state != HostileState.ADVANCING:
            return HitResult.IGNORED

        self.hit_points = max(0, self.hit_points - 1)
        if self.hit_points > 0:
            return HitResult.DAMAGED

        self.state = HostileState.ELIMINATING
        self.focused = False
        return HitResult.ELIMINATED

    def eliminate_by_bomb(self) -> bool:
        """Area-clear elimination; ignores remaining hit points."""
        if not self.is_alive:
            return False
        self.hit_points = 0
        self.state = HostileState.ELIMINATING
        self.focused = False
        return True

    def replace_word(self, word: str) -> None:
        """Swap in a new word after a non-lethal hit."""
        self.word = word
        self.typed_count = 0

    def remove(self) -> None:
        self.state = HostileState.GONE
        self.focused = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "word": self.word,
            "typed": self.typed_count,
            "x": self.x,
            "y": self.y,
            "path": self.path.value,
            "archetype": self.archetype.value,
            "hit_points": self.hit_points,
            "state": self.state.value,
            "focused": self.focused,
            "danger": self.in_danger_zone,
        }
