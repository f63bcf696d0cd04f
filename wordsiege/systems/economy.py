"""
Score, bomb and wall economy.

Combo milestones feed bomb charges; breaches and mistakes reset the combo;
wall health and bomb charges are clamped where they change so they are
never observed out of range.
"""

from dataclasses import dataclass
from typing import Any, Dict
import math

COMBO_STEP = 5
COMBO_STEP_BONUS = 0.2
POINTS_PER_LETTER = 10
BOMB_POINTS_PER_ELIMINATION = 15


@dataclass
class ScoreSummary:
    """Snapshot of the score tracker."""
    score: int
    combo: int
    best_combo: int
    accuracy: float
    words_completed: int
    enemies_defeated: int
    typed_eliminations: int
    bomb_eliminations: int
    bombs_used: int
    breaches: int
    mistakes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "combo": self.combo,
            "best_combo": self.best_combo,
            "accuracy": self.accuracy,
            "words_completed": self.words_completed,
            "enemies_defeated": self.enemies_defeated,
            "typed_eliminations": self.typed_eliminations,
            "bomb_eliminations": self.bomb_eliminations,
            "bombs_used": self.bombs_used,
            "breaches": self.breaches,
            "mistakes": self.mistakes,
        }


class ScoreTracker:
    """Score, combo and accuracy accumulator."""

    def __init__(self):
        self.score = 0
        self.combo = 0
        self.best_combo = 0
        self.total_typed_chars = 0
        self.mistakes = 0
        self.words_completed = 0
        self.typed_eliminations = 0
        self.bomb_eliminations = 0
        self.bombs_used = 0
        self.breaches = 0

    @staticmethod
    def combo_multiplier(combo: int) -> float:
        """Multiplier that steps up by 20% for every 5-combo milestone."""
        return 1 + (combo // COMBO_STEP) * COMBO_STEP_BONUS

    def register_success(self, word_length: int) -> int:
        """
        Register a completed word.

        Returns:
            Points awarded for the word
        """
        self.words_completed += 1
        self.total_typed_chars += word_length
        self.combo += 1
        self.best_combo = max(self.best_combo, self.combo)
        points = math.floor(word_length * POINTS_PER_LETTER * self.combo_multiplier(self.combo))
        self.score += points
        return points

    def register_mistake(self) -> None:
        self.mistakes += 1
        self.combo = 0

    def register_typed_elimination(self, count: int = 1) -> None:
        if count > 0:
            self.typed_eliminations += count

    def register_bomb_clear(self, count: int) -> None:
        if count <= 0:
            return
        self.bombs_used += 1
        self.bomb_eliminations += count
        self.score += count * BOMB_POINTS_PER_ELIMINATION

    def register_breach(self) -> None:
        """A breach resets the combo and counts against accuracy."""
        self.breaches += 1
        self.mistakes += 1
        self.combo = 0

    @property
    def accuracy(self) -> float:
        attempts = self.total_typed_chars + self.mistakes
        if attempts == 0:
            return 1.0
        return self.total_typed_chars / attempts

    def summary(self) -> ScoreSummary:
        return ScoreSummary(
            score=self.score,
            combo=self.combo,
            best_combo=self.best_combo,
            accuracy=self.accuracy,
            words_completed=self.words_completed,
            enemies_defeated=self.typed_eliminations + self.bomb_eliminations,
            typed_eliminations=self.typed_eliminations,
            bomb_eliminations=self.bomb_eliminations,
            bombs_used=self.bombs_used,
            breaches=self.breaches,
            mistakes=self.mistakes,
        )


class BombState:
    """
    Bomb charges and cooldown.

    The cooldown only runs after an activation left the player with no
    charges; it regenerates one charge when it expires. Charges earned
    from combos or pickups cancel a running cooldown.
    """

    def __init__(self, initial: int = 1, max_charges: int = 2, cooldown_ms: float = 20000,
                 combo_threshold: int = 6):
        self.max_charges = max(0, max_charges)
        self.charges = max(0, min(self.max_charges, initial))
        self.cooldown_ms = max(0.0, float(cooldown_ms))
        self.cooldown_remaining = 0.0
        self.combo_threshold = max(1, combo_threshold)
        self.last_awarded_combo = 0

    def update(self, delta_ms: float) -> bool:
        """
        Run down the cooldown.

        Returns:
            True if a charge regenerated this step
        """
        if self.cooldown_remaining <= 0:
            return False

        self.cooldown_remaining = max(0.0, self.cooldown_remaining - delta_ms)
        if self.cooldown_remaining == 0 and self.charges < self.max_charges:
            self.charges += 1
            return True
        return False

    def can_activate(self) -> bool:
        return self.charges > 0

    def activate(self) -> bool:
        if not self.can_activate():
            return False
        self.charges -= 1
        if self.charges == 0:
            self.cooldown_remaining = self.cooldown_ms
        return True

    def add_charge(self, amount: int = 1) -> bool:
        """
        Deposit charges from a pickup or milestone.

        Returns:
            True if the charge count changed
        """
        if amount <= 0:
            return False
        previous = self.charges
        self.charges = min(self.max_charges, self.charges + amount)
        if self.charges != previous:
            self.cooldown_remaining = 0.0
            return True
        return False

    def register_combo(self, combo: int) -> bool:
        """
        Grant a charge at each distinct positive multiple of the threshold.

        Returns:
            True if a charge was granted
        """
        if combo == 0:
            self.last_awarded_combo = 0
            return False
        if combo % self.combo_threshold != 0:
            return False
        if combo == self.last_awarded_combo:
            return False
        self.last_awarded_combo = combo
        return self.add_charge(1)

    def status(self) -> Dict[str, Any]:
        return {
            "charges": self.charges,
            "max_charges": self.max_charges,
            "cooldown_remaining": self.cooldown_remaining,
            "cooldown": self.cooldown_ms,
        }


class Wall:
    """Wall health, clamped to [0, max_health]."""

    def __init__(self, max_health: int):
        self.max_health = max(0, max_health)
        self.health = self.max_health

    def take_damage(self, amount: int = 1) -> int:
        self.health = max(0, self.health - max(0, amount))
        return self.health

    def repair(self, amount: int = 1) -> int:
        self.health = min(self.max_health, self.health + max(0, amount))
        return self.health

    @property
    def is_destroyed(self) -> bool:
        return self.health <= 0

    def status(self) -> Dict[str, int]:
        return {"current": self.health, "max": self.max_health}
