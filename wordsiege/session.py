"""
Game session - stage progression, word banks and difficulty mixes.

A GameSession is an explicit object passed to whoever needs it; nothing
here is module-level state. Progression can be written to and read back
from a YAML file.
"""

from pathlib import Path
from typing import Dict, List, Optional, Union

import numpy as np
import yaml

from .stage.config import StageDefinition
from .stage.controller import StageController
from .utils.word_bank import WordBank, WordMix, default_bank, make_word_bag

# Shift applied from g1 to g3 when asking for a harder mix past the last stage
DIFFICULTY_STEP = 0.1


class GameSession:
    """
    Holds everything that outlives a single stage.

    Tracks the current and unlocked stage, the available word banks, the
    selected bank and per-stage word-mix overrides.
    """

    def __init__(
        self,
        stages: Optional[List[StageDefinition]] = None,
        banks: Optional[List[WordBank]] = None,
    ):
        """
        Initialize the session.

        Args:
            stages: Stage definitions in play order (built-in stage if None)
            banks: Word banks (built-in default bank if None)
        """
        self.stages: List[StageDefinition] = list(stages) if stages else [StageDefinition()]
        self.banks: List[WordBank] = list(banks) if banks else [default_bank()]
        self.selected_bank_id: str = self.banks[0].id
        self.current_stage_index: int = 0
        self.unlocked_stage_index: int = 0
        self.mix_overrides: Dict[int, WordMix] = {}

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    @property
    def current_stage(self) -> StageDefinition:
        return self.stages[self.current_stage_index]

    def get_stage(self, stage_id: int) -> StageDefinition:
        """
        Look up a stage by id.

        Raises:
            ValueError: if no stage has this id
        """
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        available = ", ".join(str(s.id) for s in self.stages)
        raise ValueError(f"Unknown stage: {stage_id}. Available: {available}")

    def stage_index(self, stage_id: int) -> int:
        return self.stages.index(self.get_stage(stage_id))

    def select_stage(self, index: int) -> StageDefinition:
        """
        Make a stage current.

        Raises:
            ValueError: if the index is out of range
        """
        if index < 0 or index >= len(self.stages):
            raise ValueError(f"Stage index {index} out of range")
        self.current_stage_index = index
        return self.current_stage

    def is_stage_unlocked(self, index: int) -> bool:
        return 0 <= index <= self.unlocked_stage_index

    def mark_stage_completed(self, index: int) -> None:
        """Unlock the stage after ``index``. Out-of-range indices are ignored."""
        if index < 0 or index >= len(self.stages):
            return
        self.unlocked_stage_index = min(
            len(self.stages) - 1, max(self.unlocked_stage_index, index + 1)
        )

    def reset_progress(self) -> None:
        self.current_stage_index = 0
        self.unlocked_stage_index = 0

    # ------------------------------------------------------------------
    # Word banks
    # ------------------------------------------------------------------

    @property
    def selected_bank(self) -> WordBank:
        for bank in self.banks:
            if bank.id == self.selected_bank_id:
                return bank
        return self.banks[0]

    def select_bank(self, bank_id: str) -> WordBank:
        """
        Select the bank used for new stages.

        Raises:
            ValueError: if no bank has this id
        """
        for bank in self.banks:
            if bank.id == bank_id:
                self.selected_bank_id = bank_id
                return bank
        raise ValueError(f"Unknown word bank: {bank_id}")

    def upsert_bank(self, bank: WordBank) -> WordBank:
        """Add a bank, or replace the bank with the same id."""
        for i, existing in enumerate(self.banks):
            if existing.id == bank.id:
                self.banks[i] = bank
                return bank
        self.banks.append(bank)
        return bank

    def delete_bank(self, bank_id: str) -> None:
        """Remove a bank; the default bank comes back when none are left."""
        self.banks = [b for b in self.banks if b.id != bank_id]
        if not self.banks:
            self.banks = [default_bank()]
        if not any(b.id == self.selected_bank_id for b in self.banks):
            self.selected_bank_id = self.banks[0].id

    # ------------------------------------------------------------------
    # Difficulty mixes
    # ------------------------------------------------------------------

    def get_stage_word_mix(self, stage_id: int) -> WordMix:
        if stage_id in self.mix_overrides:
            return self.mix_overrides[stage_id]
        return self.get_stage(stage_id).word_mix

    def set_stage_word_mix(self, stage_id: int, mix: WordMix) -> WordMix:
        self.get_stage(stage_id)
        normalized = mix.normalized()
        self.mix_overrides[stage_id] = normalized
        return normalized

    def next_difficulty_mix(self, stage_id: int) -> WordMix:
        """
        Mix to use after clearing ``stage_id``.

        That is the next stage's mix; past the last stage the current mix
        gets harder by moving weight from g1 to g3.
        """
        index = self.stage_index(stage_id)
        if index < len(self.stages) - 1:
            return self.get_stage_word_mix(self.stages[index + 1].id)

        base = self.get_stage_word_mix(stage_id)
        return WordMix(
            g1=max(0.0, base.g1 - DIFFICULTY_STEP),
            g2=base.g2,
            g3=min(1.0, base.g3 + DIFFICULTY_STEP),
        ).normalized()

    # ------------------------------------------------------------------
    # Stage creation
    # ------------------------------------------------------------------

    def create_controller(
        self, index: Optional[int] = None, seed: Optional[int] = None
    ) -> StageController:
        """
        Build a controller for a stage.

        Args:
            index: Stage index (current stage if None)
            seed: Optional seed for the word bag and the stage itself

        Returns:
            A fresh StageController
        """
        stage = self.select_stage(index) if index is not None else self.current_stage
        mix = self.get_stage_word_mix(stage.id)
        rng = np.random.default_rng(seed)
        words = make_word_bag(stage.config.spawn.total, mix, self.selected_bank, rng)
        return StageController(
            stage.config,
            words,
            seed=seed,
            stage_id=stage.id,
            stage_name=stage.name,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        return {
            "current_stage_index": self.current_stage_index,
            "unlocked_stage_index": self.unlocked_stage_index,
            "selected_bank_id": self.selected_bank_id,
            "word_mix_overrides": {
                stage_id: mix.to_dict() for stage_id, mix in self.mix_overrides.items()
            },
        }

    def apply_dict(self, data: Dict) -> None:
        """Restore progression, clamping indices to the known stages."""
        last = len(self.stages) - 1
        self.unlocked_stage_index = max(0, min(last, int(data.get("unlocked_stage_index", 0))))
        self.current_stage_index = max(0, min(last, int(data.get("current_stage_index", 0))))

        bank_id = data.get("selected_bank_id")
        if bank_id and any(b.id == bank_id for b in self.banks):
            self.selected_bank_id = bank_id

        self.mix_overrides = {}
        known = {s.id for s in self.stages}
        for stage_id, mix in (data.get("word_mix_overrides") or {}).items():
            if int(stage_id) in known:
                self.mix_overrides[int(stage_id)] = WordMix.from_dict(mix).normalized()

    def save(self, path: Union[str, Path]) -> None:
        """Write progression to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        print(f"[Session] Progress saved to {path}")

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        stages: Optional[List[StageDefinition]] = None,
        banks: Optional[List[WordBank]] = None,
    ) -> "GameSession":
        """
        Create a session and restore progression from a YAML file.

        A missing file gives a fresh session.
        """
        session = cls(stages=stages, banks=banks)
        path = Path(path)
        if not path.exists():
            print(f"[Session] No saved progress at {path}, starting fresh")
            return session

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        session.apply_dict(data)
        print(f"[Session] Progress loaded from {path} "
              f"(stage {session.current_stage_index + 1}, unlocked {session.unlocked_stage_index + 1})")
        return session
