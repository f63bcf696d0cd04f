"""
Boss phase: a single enemy carrying an ordered list of words.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.errors import InvalidStageConfigError
from ..core.word_target import TargetKind, TypingProgressMixin


class BossState(str, Enum):
    ADVANCING = "advancing"
    RETREATING = "retreating"
    DEFEATED = "defeated"
    BREACHED = "breached"


@dataclass
class BossPhase(TypingProgressMixin):
    """
    Multi-word enemy that retreats between words instead of dying.

    Completing a word that is not the last one pushes the boss back by
    ``pushback`` and makes it invulnerable for ``retreat_ms``; the next
    word is only revealed once the retreat ends.
    """
    id: int
    words: List[str]
    x: float
    y: float
    speed: float
    breach_y: float
    pushback: float = 140.0
    damage: int = 2
    name: str = "Boss"
    danger_zone: float = 140.0
    retreat_ms: float = 360.0
    current_index: int = 0
    typed_count: int = 0
    focused: bool = False
    state: BossState = BossState.ADVANCING
    retreat_remaining_ms: float = 0.0

    def __post_init__(self) -> None:
        if not self.words:
            raise InvalidStageConfigError("Boss must have at least one word.")

    @property
    def kind(self) -> TargetKind:
        return TargetKind.BOSS

    @property
    def word(self) -> str:
        return self.words[self.current_index]

    @property
    def is_alive(self) -> bool:
        return self.state in (BossState.ADVANCING, BossState.RETREATING)

    @property
    def is_defeated(self) -> bool:
        return self.state == BossState.DEFEATED

    @property
    def is_targetable(self) -> bool:
        return self.state == BossState.ADVANCING

    @property
    def distance_to_breach(self) -> float:
        return self.breach_y - self.y

    @property
    def in_danger_zone(self) -> bool:
        return self.distance_to_breach <= self.danger_zone

    @property
    def words_remaining(self) -> int:
        if self.is_defeated:
            return 0
        return len(self.words) - self.current_index

    def advance(self, delta_ms: float) -> Optional[str]:
        """
        Move the boss or run down its retreat timer.

        Args:
            delta_ms: Elapsed time in milliseconds

        Returns:
            "breached" when the boss reached the wall, "word_changed" when
            a retreat finished and a new word is exposed, otherwise None
        """
        if self.state == BossState.RETREATING:
            self.retreat_remaining_ms = max(0.0, self.retreat_remaining_ms - delta_ms)
            if self.retreat_remaining_ms == 0:
                self.current_index += 1
                self.typed_count = 0
                self.state = BossState.ADVANCING
                return "word_changed"
            return None

        if self.state != BossState.ADVANCING:
            return None

        self.y += self.speed * delta_ms / 1000.0
        if self.y >= self.breach_y:
            self.state = BossState.BREACHED
            self.focused = False
            return "breached"
        return None

    def complete_word(self) -> bool:
        """
        Apply a completed word.

        Returns:
            True if this completion defeated the boss
        """
        if self.state != BossState.ADVANCING:
            return False

        self.typed_count = len(self.word)
        self.focused = False

        if self.current_index >= len(self.words) - 1:
            self.state = BossState.DEFEATED
            return True

        self.y -= self.pushback
        self.state = BossState.RETREATING
        self.retreat_remaining_ms = self.retreat_ms
        return False

    def recover_from_breach(self) -> None:
        """Fall back after hitting the wall and keep attacking with the same word."""
        if self.state != BossState.BREACHED:
            return
        self.y = self.breach_y - self.pushback
        self.typed_count = 0
        self.state = BossState.ADVANCING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "word": self.word,
            "typed": self.typed_count,
            "index": self.current_index,
            "total_words": len(self.words),
            "x": self.x,
            "y": self.y,
            "state": self.state.value,
            "focused": self.focused,
            "danger": self.in_danger_zone,
        }
