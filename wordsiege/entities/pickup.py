"""
Falling resource drops.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.word_target import TargetKind, TypingProgressMixin


class PickupKind(str, Enum):
    BOMB_CHARGE = "bomb_charge"
    WALL_REPAIR = "wall_repair"


class PickupState(str, Enum):
    FALLING = "falling"
    COLLECTED = "collected"
    MISSED = "missed"
    GONE = "gone"


@dataclass
class TypedPickup(TypingProgressMixin):
    """
    A resource drop falling towards the ground.

    Bomb-charge pickups carry a word and must be typed before they land;
    wall-repair pickups are collected automatically on arrival.
    """
    id: int
    resource_kind: PickupKind
    x: float
    y: float
    fall_speed: float
    ground_y: float
    word: str = ""
    typed_count: int = 0
    focused: bool = False
    state: PickupState = PickupState.FALLING

    def __post_init__(self) -> None:
        if self.requires_typing and not self.word:
            raise ValueError("Typed pickups must provide a word.")
        if not self.requires_typing:
            self.word = ""

    @property
    def kind(self) -> TargetKind:
        return TargetKind.PICKUP

    @property
    def requires_typing(self) -> bool:
        return self.resource_kind == PickupKind.BOMB_CHARGE

    @property
    def is_alive(self) -> bool:
        return self.state == PickupState.FALLING

    @property
    def is_targetable(self) -> bool:
        return self.requires_typing and self.state == PickupState.FALLING

    def update(self, delta_ms: float) -> Optional[PickupState]:
        """
        Let the pickup fall.

        Returns:
            COLLECTED or MISSED when the pickup landed this step, else None
        """
        if self.state != PickupState.FALLING:
            return None

        self.y += self.fall_speed * delta_ms / 1000.0
        if self.y < self.ground_y:
            return None

        self.focused = False
        if self.requires_typing:
            self.state = PickupState.MISSED
        else:
            self.state = PickupState.COLLECTED
        return self.state

    def complete_by_typing(self) -> bool:
        """Collect a typed pickup once its word is finished."""
        if not self.is_targetable:
            return False
        self.typed_count = len(self.word)
        self.focused = False
        self.state = PickupState.COLLECTED
        return True

    def forfeit(self) -> None:
        """Drop the pickup without collecting or missing it."""
        self.focused = False
        self.state = PickupState.GONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.resource_kind.value,
            "word": self.word,
            "typed": self.typed_count,
            "x": self.x,
            "y": self.y,
            "state": self.state.value,
            "focused": self.focused,
        }
