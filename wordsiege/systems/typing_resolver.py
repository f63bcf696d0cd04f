"""
Typing resolver - keystroke-driven state machine bound to one target word.

The resolver owns a single input buffer. Every keystroke is handled to
completion before the next one: outcomes are delivered synchronously to
one consumer (the stage controller), which may re-target the resolver
while an outcome is being delivered.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Union
import re

BACKSPACE = "backspace"

_ACCEPTED_KEY = re.compile(r"^[a-z0-9]$", re.IGNORECASE)


@dataclass(frozen=True)
class Progress:
    input: str
    is_mistake: bool


@dataclass(frozen=True)
class Complete:
    word: str


@dataclass(frozen=True)
class Mistake:
    pass


@dataclass(frozen=True)
class Mismatch:
    next_input: str
    current_length: int


@dataclass(frozen=True)
class FreeType:
    char: str


@dataclass(frozen=True)
class Clear:
    pass


TypingOutcome = Union[Progress, Complete, Mistake, Mismatch, FreeType, Clear]
OutcomeHandler = Callable[[TypingOutcome], None]


class TypingResolver:
    """
    Resolves keystrokes against the currently bound target word.

    When the buffer is empty, the first letter is offered to the consumer
    as ``FreeType`` so it can bind a better candidate. A wrong letter is
    offered as ``Mismatch`` before it is counted as a mistake; the
    consumer decides whether re-targeting is allowed.
    """

    def __init__(self, on_outcome: Optional[OutcomeHandler] = None):
        """
        Initialize the resolver.

        Args:
            on_outcome: Consumer called synchronously with every outcome
        """
        self._on_outcome = on_outcome
        self.target_word: str = ""
        self.input_buffer: str = ""
        self.is_mistake: bool = False
        self.completed: bool = False
        # Bumped on every re-target so a key is never processed twice
        self._generation: int = 0
        self._emitted: List[TypingOutcome] = []

    def set_handler(self, on_outcome: Optional[OutcomeHandler]) -> None:
        self._on_outcome = on_outcome

    def set_target(self, word: str) -> None:
        """Bind a new target word and clear the buffer."""
        self._generation += 1
        self.target_word = word or ""
        self.input_buffer = ""
        self.is_mistake = False
        self.completed = False
        self._emit(Progress(self.input_buffer, False))

    def set_target_with_input(self, word: str, prefix: str) -> None:
        """
        Re-target mid-type, seeding the buffer with an already typed prefix.

        A prefix that does not match the word falls back to an empty
        buffer instead of rejecting the re-target.
        """
        self._generation += 1
        self.target_word = word or ""
        self.is_mistake = False
        self.completed = False
        normalized_target = self.target_word.lower()
        normalized_input = (prefix or "").lower()

        if not self.target_word or not normalized_target.startswith(normalized_input):
            self.input_buffer = ""
            self._emit(Progress(self.input_buffer, False))
            return

        self.input_buffer = normalized_input
        self._emit(Progress(self.input_buffer, False))

        if len(self.input_buffer) == len(self.target_word):
            self._complete()

    def clear_target(self) -> None:
        """Unbind the target. Safe to call repeatedly."""
        if not self.target_word and not self.input_buffer:
            return
        self.set_target("")

    def handle_key(self, key: str) -> List[TypingOutcome]:
        """
        Process one key press.

        Args:
            key: A single character, or "backspace"

        Returns:
            Outcomes emitted while handling this key, in order
        """
        self._emitted = []

        if key == BACKSPACE:
            self.input_buffer = ""
            self.is_mistake = False
            self._emit(Progress(self.input_buffer, False))
            self._emit(Clear())
            return self._emitted

        if not key or not _ACCEPTED_KEY.match(key):
            return self._emitted

        if self.completed:
            return self._emitted

        char = key.lower()

        generation = self._generation
        if not self.input_buffer:
            self._emit(FreeType(char))
            # The consumer re-targeted and seeded the buffer
            if self._generation != generation:
                return self._emitted

        if not self.target_word:
            return self._emitted

        next_input = self.input_buffer + char
        normalized_target = self.target_word.lower()

        if normalized_target.startswith(next_input):
            self.input_buffer = next_input
            self.is_mistake = False
            self._emit(Progress(self.input_buffer, False))
            if len(self.input_buffer) == len(self.target_word):
                self._complete()
            return self._emitted

        self._emit(Mismatch(next_input, len(self.input_buffer)))
        if self._generation != generation:
            return self._emitted

        self.is_mistake = True
        self._emit(Mistake())
        self._emit(Progress(self.input_buffer, True))
        return self._emitted

    def _complete(self) -> None:
        if self.completed:
            return
        self.completed = True
        self._emit(Complete(self.target_word))

    def _emit(self, outcome: TypingOutcome) -> None:
        self._emitted.append(outcome)
        if self._on_outcome is not None:
            self._on_outcome(outcome)
