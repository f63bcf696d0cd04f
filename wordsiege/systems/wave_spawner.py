"""
Wave spawner - timed generator of hostiles.

Chooses archetype, word, path and speed for each hostile while keeping
the number of live hostiles under the concurrency cap and the number of
spawned hostiles within the stage budget.
"""

from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence
import itertools
import math

import numpy as np

from ..entities.hostile import Hostile, HostileArchetype, HostilePath
from ..stage.config import SpawnConfig

# Share of the wave that must be spawned before the boss appears
BOSS_TRIGGER_RATIO = 0.6

ARCHETYPES = [HostileArchetype.FAST, HostileArchetype.HEAVY, HostileArchetype.NORMAL]
ARCHETYPE_WEIGHTS = [0.35, 0.25, 0.40]

SPEED_MULTIPLIERS: Dict[HostileArchetype, float] = {
    HostileArchetype.FAST: 1.35,
    HostileArchetype.HEAVY: 0.7,
    HostileArchetype.NORMAL: 1.15,
}

SHORT_WORD_MAX = 6
LONG_WORD_MIN = 9
NORMAL_WORD_MIN = 7

FALLBACK_WORDS = ["defend", "castle", "arrow"]

# Hostiles appear above the field and walk down into it
SPAWN_OFFSET_RANGE = (80, 140)
SPAWN_MARGIN = 120


class SpawnerState(str, Enum):
    RUNNING = "running"
    EXHAUSTED = "exhausted"
    STOPPED = "stopped"


def word_fits_archetype(word: str, archetype: HostileArchetype) -> bool:
    """Word-length bucket for each archetype."""
    if archetype == HostileArchetype.FAST:
        return len(word) <= SHORT_WORD_MAX
    if archetype == HostileArchetype.HEAVY:
        return len(word) >= LONG_WORD_MIN
    return len(word) >= NORMAL_WORD_MIN


def boss_trigger_count(total: int) -> int:
    return math.ceil(total * BOSS_TRIGGER_RATIO)


class WaveSpawner:
    """
    Spawns hostiles on a timer under a concurrency cap and a total budget.

    The first hostile appears after half an interval; afterwards the timer
    resets to the full interval on each spawn. When the timer has run out
    but the field is full, the spawn waits for a free slot.
    """

    def __init__(
        self,
        config: SpawnConfig,
        word_pool: Sequence[str],
        field_width: float,
        breach_y: float,
        danger_zone: float,
        rng: Optional[np.random.Generator] = None,
        next_id: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the spawner.

        Args:
            config: Spawn budget, timing and speed settings
            word_pool: Words for this stage (already mixed by difficulty)
            field_width: Width of the playing field in pixels
            breach_y: Advance-axis coordinate of the wall
            danger_zone: Distance at which hostiles count as dangerous
            rng: Random generator
            next_id: Source of unique target ids
        """
        self.config = config
        self.words: List[str] = list(word_pool) if word_pool else list(FALLBACK_WORDS)
        self.field_width = field_width
        self.breach_y = breach_y
        self.danger_zone = danger_zone
        self.rng = rng if rng is not None else np.random.default_rng()
        self._next_id = next_id or itertools.count(1).__next__

        self.paths = [HostilePath(p) for p in config.paths] or [HostilePath.STRAIGHT]
        self.spawned_count = 0
        self.spawn_timer = config.interval * 0.5
        self.state = SpawnerState.RUNNING

    @property
    def total(self) -> int:
        return self.config.total

    @property
    def max_concurrent(self) -> int:
        return self.config.max_concurrent

    @property
    def is_running(self) -> bool:
        return self.state == SpawnerState.RUNNING

    @property
    def is_exhausted(self) -> bool:
        return self.spawned_count >= self.config.total

    @property
    def remaining(self) -> int:
        return max(0, self.config.total - self.spawned_count)

    def boss_threshold_reached(self) -> bool:
        return self.spawned_count >= boss_trigger_count(self.config.total)

    def stop(self) -> None:
        """Stop spawning regardless of remaining budget. Idempotent."""
        if self.state == SpawnerState.RUNNING:
            self.state = SpawnerState.STOPPED

    def update(self, delta_ms: float, live_hostiles: int) -> Optional[Hostile]:
        """
        Advance the spawn timer.

        Args:
            delta_ms: Elapsed time in milliseconds
            live_hostiles: Hostiles currently alive on the field

        Returns:
            The newly spawned hostile, if any
        """
        if self.state != SpawnerState.RUNNING:
            return None

        if self.is_exhausted:
            self.state = SpawnerState.EXHAUSTED
            return None

        self.spawn_timer = max(0.0, self.spawn_timer - delta_ms)
        if self.spawn_timer > 0:
            return None

        if live_hostiles >= self.config.max_concurrent:
            return None

        hostile = self._spawn()
        self.spawn_timer = self.config.interval
        if self.is_exhausted:
            self.state = SpawnerState.EXHAUSTED
        return hostile

    def choose_archetype(self) -> HostileArchetype:
        idx = int(self.rng.choice(len(ARCHETYPES), p=ARCHETYPE_WEIGHTS))
        return ARCHETYPES[idx]

    def choose_word(self, archetype: HostileArchetype, exclude: str = "") -> str:
        """Pick a word from the archetype's length bucket, else the full pool."""
        bucket = [w for w in self.words if word_fits_archetype(w, archetype)]
        pool = bucket or self.words
        if exclude and len(pool) > 1:
            pool = [w for w in pool if w != exclude] or pool
        return pool[int(self.rng.integers(len(pool)))]

    def replacement_word(self, hostile: Hostile) -> str:
        """New word for a hostile that survived a hit."""
        return self.choose_word(hostile.archetype, exclude=hostile.word)

    def _spawn(self) -> Hostile:
        archetype = self.choose_archetype()
        word = self.choose_word(archetype)
        path = self.paths[int(self.rng.integers(len(self.paths)))]
        base_speed = float(self.rng.uniform(self.config.speed_min, self.config.speed_max))

        margin = min(SPAWN_MARGIN, self.field_width / 2)
        x = float(self.rng.uniform(margin, self.field_width - margin))
        y = -float(self.rng.uniform(*SPAWN_OFFSET_RANGE))

        hostile = Hostile(
            id=self._next_id(),
            word=word,
            x=x,
            y=y,
            speed=base_speed * SPEED_MULTIPLIERS[archetype],
            breach_y=self.breach_y,
            field_width=self.field_width,
            path=path,
            archetype=archetype,
            danger_zone=self.danger_zone,
            zigzag_frequency=float(self.rng.uniform(0.0035, 0.0055)),
            drift_speed=float(self.rng.uniform(-12, 12)),
        )
        self.spawned_count += 1
        return hostile
