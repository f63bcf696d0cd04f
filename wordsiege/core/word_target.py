"""
Word target capability interface.

Hostiles, the boss phase and typed pickups all expose a current word and a
typed-progress counter. The controller and target selector only talk to
them through this interface.
"""

from enum import IntEnum
from typing import Protocol, runtime_checkable


class TargetKind(IntEnum):
    """Variants of word targets."""
    HOSTILE = 0
    BOSS = 1
    PICKUP = 2


@runtime_checkable
class WordTarget(Protocol):
    """Anything the typing resolver can be bound to."""

    id: int
    typed_count: int
    focused: bool

    @property
    def word(self) -> str:
        ...

    @property
    def kind(self) -> TargetKind:
        ...

    @property
    def is_targetable(self) -> bool:
        ...

    def set_progress(self, count: int) -> None:
        ...

    def reset_progress(self) -> None:
        ...

    def mark_focused(self, focused: bool) -> None:
        ...


class TypingProgressMixin:
    """Progress tracking shared by every word target.

    Expects the host class to provide ``word``, ``typed_count`` and
    ``focused`` attributes.
    """

    def set_progress(self, count: int) -> None:
        """Set typed progress, clamped to the current word length."""
        self.typed_count = max(0, min(len(self.word), count))

    def reset_progress(self) -> None:
        self.typed_count = 0

    def mark_focused(self, focused: bool) -> None:
        self.focused = focused
