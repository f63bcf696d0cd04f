"""
Stage controller - orchestrates one stage of Word Siege.

Drives the wave spawner, typing resolver, target selector, economy and
stage flow. All mutation happens on the caller's thread through two
entry points: update(delta_ms) once per frame and key_press(key) once per
input event.
"""

from typing import Any, Dict, List, Optional, Sequence
import itertools

import numpy as np

from ..core.errors import InvalidStageConfigError
from ..core.word_target import TargetKind, WordTarget
from ..entities.boss import BossPhase
from ..entities.hostile import Hostile, HitResult
from ..entities.pickup import PickupKind, PickupState, TypedPickup
from ..systems.economy import BombState, ScoreSummary, ScoreTracker, Wall
from ..systems.stage_flow import StageFlow, StageOutcome, StageSnapshot
from ..systems.target_selector import TargetSelector
from ..systems.typing_resolver import (
    Clear, Complete, FreeType, Mismatch, Mistake, Progress, TypingOutcome, TypingResolver,
)
from ..systems.wave_spawner import SHORT_WORD_MAX, WaveSpawner
from ..utils.word_bank import clean_words, normalize_words
from .config import BossConfig, StageConfig
from .events import (
    BombActivated, BossBreached, BossDefeated, BossSpawned, BossWordChanged,
    EliminationCause, HostileBreached, HostileDamaged, HostileEliminated, HostileSpawned,
    PickupCollected, PickupMissed, PickupSpawned, StageEnded, StageEvent, TargetProgress,
)

BOMB_KEY = "space"
BREACH_DAMAGE = 1
BOSS_SPAWN_Y = -100.0


def build_boss_words(boss: BossConfig, word_pool: Sequence[str]) -> List[str]:
    """
    Resolve the boss word list.

    The configured words come first; when ``word_count`` asks for more,
    the longest unused words from the stage pool fill the gap.

    Raises:
        InvalidStageConfigError: if no usable boss word remains
    """
    words = normalize_words(boss.words)
    if boss.word_count > 0:
        if len(words) < boss.word_count:
            extras = sorted(
                (w for w in normalize_words(word_pool) if w not in words),
                key=len,
                reverse=True,
            )
            words.extend(extras[: boss.word_count - len(words)])
        words = words[: boss.word_count]
    if not words:
        raise InvalidStageConfigError("Boss must have at least one word.")
    return words


class StageController:
    """
    Runs a single stage: spawning, typing, scoring and completion.

    Outcomes from the typing resolver are consumed synchronously by
    ``_on_typing_outcome``; everything collaborators need is published
    as StageEvent values through ``drain_events()``.
    """

    def __init__(
        self,
        config: StageConfig,
        word_pool: Sequence[str],
        seed: Optional[int] = None,
        stage_id: int = 1,
        stage_name: str = "",
    ):
        """
        Initialize the stage.

        Args:
            config: Stage parameters
            word_pool: Words for hostiles, already mixed by difficulty;
                repeats are kept so the mix weighting survives
            seed: Optional seed for reproducible stages
            stage_id: Identifier of the stage definition
            stage_name: Display name of the stage

        Raises:
            InvalidStageConfigError: if the stage can never terminate
        """
        config.validate()
        self.config = config
        self.word_pool = clean_words(word_pool)
        self.seed = seed
        self.stage_id = stage_id
        self.stage_name = stage_name
        self.boss_words = build_boss_words(config.boss, self.word_pool)

        # Stage state (initialized in reset)
        self.rng: np.random.Generator = np.random.default_rng(seed)
        self._ids = itertools.count(1)
        self.hostiles: List[Hostile] = []
        self.pickups: List[TypedPickup] = []
        self.boss: Optional[BossPhase] = None
        self.boss_spawned: bool = False
        self.focus: Optional[WordTarget] = None
        self.elapsed_ms: float = 0.0
        self.events: List[StageEvent] = []

        self.reset()

    def reset(self) -> Dict[str, Any]:
        """
        Reset the stage to its initial state.

        Returns:
            Dictionary containing the initial stage state
        """
        self.rng = np.random.default_rng(self.seed)
        self._ids = itertools.count(1)

        self.spawner = WaveSpawner(
            self.config.spawn,
            self.word_pool,
            field_width=self.config.width,
            breach_y=self.config.breach_y,
            danger_zone=self.config.danger_zone,
            rng=self.rng,
            next_id=self._next_id,
        )
        self.resolver = TypingResolver(self._on_typing_outcome)
        self.selector = TargetSelector(
            get_boss=lambda: self.boss,
            get_hostiles=lambda: self.hostiles,
            get_pickups=lambda: self.pickups,
        )
        self.score = ScoreTracker()
        bombs = self.config.bombs
        self.bombs = BombState(
            initial=bombs.initial,
            max_charges=bombs.max,
            cooldown_ms=bombs.cooldown,
            combo_threshold=bombs.combo_threshold,
        )
        self.wall = Wall(self.config.wall_max_health)
        self.flow = StageFlow()

        self.hostiles = []
        self.pickups = []
        self.boss = None
        self.boss_spawned = False
        self.focus = None
        self.elapsed_ms = 0.0
        self.events = []

        return self.get_state()

    def _next_id(self) -> int:
        return next(self._ids)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def outcome(self) -> StageOutcome:
        return self.flow.outcome

    @property
    def is_over(self) -> bool:
        return self.flow.is_terminal

    @property
    def target_word(self) -> str:
        return self.resolver.target_word

    @property
    def input_buffer(self) -> str:
        return self.resolver.input_buffer

    def live_hostiles(self) -> List[Hostile]:
        return [h for h in self.hostiles if h.is_alive]

    def summary(self) -> ScoreSummary:
        return self.score.summary()

    def wall_status(self) -> Dict[str, int]:
        return self.wall.status()

    def bomb_status(self) -> Dict[str, Any]:
        return self.bombs.status()

    def drain_events(self) -> List[StageEvent]:
        """Return and clear the events published since the last call."""
        events, self.events = self.events, []
        return events

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def update(self, delta_ms: float) -> None:
        """
        Advance the simulation.

        Order within a tick: spawn budget and concurrency cap first, then
        the boss trigger, motion and breaches, pickups, bomb cooldown,
        focus refresh, and the completion check last.

        Args:
            delta_ms: Elapsed time in milliseconds
        """
        if self.flow.is_terminal:
            return

        self.elapsed_ms += delta_ms

        hostile = self.spawner.update(delta_ms, len(self.live_hostiles()))
        if hostile is not None:
            hostile.activate()
            self.hostiles.append(hostile)
            self.events.append(HostileSpawned(hostile.id, hostile.word))

        if not self.boss_spawned and self.spawner.boss_threshold_reached():
            self._spawn_boss()

        for hostile in list(self.hostiles):
            if hostile.advance(delta_ms):
                self._handle_hostile_breach(hostile)
                if self.flow.is_terminal:
                    return

        if self.boss is not None:
            result = self.boss.advance(delta_ms)
            if result == "breached":
                self._handle_boss_breach(self.boss)
                if self.flow.is_terminal:
                    return
            elif result == "word_changed":
                self.events.append(BossWordChanged(self.boss.id, self.boss.word))

        self._update_pickups(delta_ms)
        self.bombs.update(delta_ms)
        self._ensure_focus()
        self._check_completion()

    def key_press(self, key: str) -> List[TypingOutcome]:
        """
        Handle one key press.

        Args:
            key: A single character, "backspace", or "space" for a bomb

        Returns:
            Typing outcomes produced by the key
        """
        if self.flow.is_terminal:
            return []
        if key == BOMB_KEY:
            self.activate_bomb()
            return []
        return self.resolver.handle_key(key)

    def activate_bomb(self) -> int:
        """
        Eliminate every live hostile at once.

        Returns:
            Number of hostiles eliminated (0 if the bomb was not used)
        """
        if self.flow.is_terminal:
            return 0

        live = self.live_hostiles()
        if not live or not self.bombs.activate():
            return 0

        for hostile in live:
            if hostile.eliminate_by_bomb():
                self.events.append(
                    HostileEliminated(hostile.id, hostile.word, EliminationCause.BOMB)
                )
                if hostile is self.focus:
                    self.focus = None
                self._remove_hostile(hostile)

        self.score.register_bomb_clear(len(live))
        self.events.append(BombActivated(len(live)))

        self._ensure_focus()
        self._check_completion()
        return len(live)

    # ------------------------------------------------------------------
    # Typing outcomes
    # ------------------------------------------------------------------

    def _on_typing_outcome(self, outcome: TypingOutcome) -> None:
        if isinstance(outcome, Progress):
            if self.focus is not None:
                self.focus.set_progress(len(outcome.input))
                self.events.append(TargetProgress(
                    self.focus.id, self.focus.kind, outcome.input, outcome.is_mistake
                ))
        elif isinstance(outcome, Complete):
            self._on_word_completed(outcome.word)
        elif isinstance(outcome, Mistake):
            self.score.register_mistake()
            self.bombs.register_combo(self.score.combo)
        elif isinstance(outcome, FreeType):
            target = self.selector.on_free_type(outcome.char, self.focus)
            if target is not None:
                self._bind(target, prefix=outcome.char)
        elif isinstance(outcome, Mismatch):
            target = self.selector.on_mismatch(outcome.next_input, outcome.current_length)
            if target is not None and target is not self.focus:
                self._bind(target, prefix=outcome.next_input)
        elif isinstance(outcome, Clear):
            for target in self.selector.candidates():
                if target.typed_count > 0:
                    target.reset_progress()
                    self.events.append(TargetProgress(target.id, target.kind, "", False))

    def _on_word_completed(self, word: str) -> None:
        matches = self.selector.find_all_with_word(word)
        if self.focus is not None and self.focus not in matches and self.focus.word == word:
            matches.append(self.focus)

        for target in matches:
            target.set_progress(len(word))
            target.mark_focused(False)
        self.focus = None

        if matches:
            self.score.register_success(len(word))
            self.bombs.register_combo(self.score.combo)

        eliminated = 0
        for target in matches:
            if target.kind == TargetKind.HOSTILE:
                if self._hit_hostile(target):
                    eliminated += 1
            elif target.kind == TargetKind.BOSS:
                if target.complete_word():
                    self.events.append(BossDefeated(target.id))
            elif target.kind == TargetKind.PICKUP:
                if target.complete_by_typing():
                    self._collect_pickup(target, typed=True)
        self.score.register_typed_elimination(eliminated)

        self._ensure_focus()
        self._check_completion()

    def _hit_hostile(self, hostile: Hostile) -> bool:
        result = hostile.hit_by_arrow()
        if result == HitResult.DAMAGED:
            old_word = hostile.word
            hostile.replace_word(self.spawner.replacement_word(hostile))
            self.events.append(HostileDamaged(hostile.id, old_word, hostile.word))
            return False
        if result == HitResult.ELIMINATED:
            self.events.append(
                HostileEliminated(hostile.id, hostile.word, EliminationCause.ARROW)
            )
            self._remove_hostile(hostile)
            self._maybe_drop_pickup(hostile)
            return True
        return False

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def _bind(self, target: Optional[WordTarget], prefix: Optional[str] = None) -> None:
        """Focus a target and point the resolver at its word."""
        previous = self.focus
        if previous is not None and previous is not target:
            previous.mark_focused(False)
            if previous.typed_count > 0:
                previous.reset_progress()
                self.events.append(TargetProgress(previous.id, previous.kind, "", False))

        self.focus = target
        if target is None:
            self.resolver.clear_target()
            return

        target.mark_focused(True)
        if prefix is None:
            self.resolver.set_target(target.word)
        else:
            self.resolver.set_target_with_input(target.word, prefix)

    def _ensure_focus(self) -> None:
        """Keep the focus on a live target whose word the resolver holds."""
        if self.flow.is_terminal:
            return

        focus = self.focus
        if focus is not None and focus.is_targetable and focus.word == self.resolver.target_word:
            return

        target = self.selector.pick_focus()
        if target is None:
            if focus is not None or self.resolver.target_word:
                self._bind(None)
            return
        self._bind(target)

    # ------------------------------------------------------------------
    # Breaches, boss and pickups
    # ------------------------------------------------------------------

    def _handle_hostile_breach(self, hostile: Hostile) -> None:
        if hostile is self.focus:
            self.focus = None
            self.resolver.clear_target()
        self.events.append(HostileBreached(hostile.id, hostile.word))
        self._remove_hostile(hostile)
        self._damage_wall(BREACH_DAMAGE)

    def _handle_boss_breach(self, boss: BossPhase) -> None:
        if boss is self.focus:
            self.focus = None
            self.resolver.clear_target()
        self.events.append(BossBreached(boss.id, boss.damage))
        self._damage_wall(boss.damage)
        if not self.flow.is_terminal:
            boss.recover_from_breach()

    def _damage_wall(self, amount: int) -> None:
        self.wall.take_damage(amount)
        self.score.register_breach()
        self.bombs.register_combo(self.score.combo)
        outcome = self.flow.check_wall(self.wall.health)
        if outcome is not None:
            self._finish(outcome)

    def _remove_hostile(self, hostile: Hostile) -> None:
        hostile.remove()
        if hostile in self.hostiles:
            self.hostiles.remove(hostile)

    def _spawn_boss(self) -> None:
        boss_config = self.config.boss
        self.boss = BossPhase(
            id=self._next_id(),
            words=list(self.boss_words),
            x=self.config.width / 2,
            y=BOSS_SPAWN_Y,
            speed=boss_config.speed,
            breach_y=self.config.breach_y,
            pushback=boss_config.pushback,
            damage=boss_config.damage,
            name=boss_config.name,
            danger_zone=self.config.danger_zone,
            retreat_ms=boss_config.retreat_ms,
        )
        self.boss_spawned = True
        self.events.append(BossSpawned(self.boss.id, self.boss.name, self.boss.word))

    def _maybe_drop_pickup(self, hostile: Hostile) -> None:
        if self.config.drop_rate <= 0 or self.rng.random() >= self.config.drop_rate:
            return

        if self.rng.random() < 0.5:
            kind = PickupKind.BOMB_CHARGE
            word = self._pickup_word()
        else:
            kind = PickupKind.WALL_REPAIR
            word = ""

        pickup = TypedPickup(
            id=self._next_id(),
            resource_kind=kind,
            x=hostile.x,
            y=max(0.0, hostile.y),
            fall_speed=self.config.pickup_fall_speed,
            ground_y=self.config.breach_y,
            word=word,
        )
        self.pickups.append(pickup)
        self.events.append(PickupSpawned(pickup.id, kind, word))

    def _pickup_word(self) -> str:
        live = {t.word for t in self.selector.candidates()}
        pool = [w for w in self.spawner.words if len(w) <= SHORT_WORD_MAX and w not in live]
        pool = pool or self.spawner.words
        return pool[int(self.rng.integers(len(pool)))]

    def _update_pickups(self, delta_ms: float) -> None:
        for pickup in list(self.pickups):
            landed = pickup.update(delta_ms)
            if landed is None:
                continue
            if pickup is self.focus:
                self.focus = None
                self.resolver.clear_target()
            if landed == PickupState.COLLECTED:
                self._collect_pickup(pickup, typed=False)
            else:
                self.events.append(PickupMissed(pickup.id, pickup.resource_kind))
                self.pickups.remove(pickup)

    def _collect_pickup(self, pickup: TypedPickup, typed: bool) -> None:
        if pickup.resource_kind == PickupKind.BOMB_CHARGE:
            self.bombs.add_charge(1)
        else:
            self.wall.repair(1)
        self.events.append(PickupCollected(pickup.id, pickup.resource_kind, typed))
        if pickup in self.pickups:
            self.pickups.remove(pickup)

    # ------------------------------------------------------------------
    # Completion
    # ------------------------------------------------------------------

    def _snapshot(self) -> StageSnapshot:
        return StageSnapshot(
            boss_spawned=self.boss_spawned,
            boss_defeated=self.boss is not None and self.boss.is_defeated,
            wave_exhausted=self.spawner.is_exhausted,
            live_hostiles=len(self.live_hostiles()),
            wall_health=self.wall.health,
        )

    def _check_completion(self) -> None:
        if self.flow.is_terminal:
            return
        outcome = self.flow.evaluate(self._snapshot())
        if outcome is not None:
            self._finish(outcome)

    def _finish(self, outcome: StageOutcome) -> None:
        """Tear down live activity after entering a terminal state."""
        self.spawner.stop()
        if self.focus is not None:
            self.focus.mark_focused(False)
        self.focus = None
        self.resolver.clear_target()
        for pickup in self.pickups:
            pickup.forfeit()
        self.pickups = []
        self.events.append(StageEnded(outcome, self.score.summary()))

    # ------------------------------------------------------------------
    # Rendering state
    # ------------------------------------------------------------------

    def get_state(self) -> Dict[str, Any]:
        """Get current stage state for rendering."""
        return {
            "stage_id": self.stage_id,
            "stage_name": self.stage_name,
            "width": self.config.width,
            "height": self.config.height,
            "breach_y": self.config.breach_y,
            "danger_zone": self.config.danger_zone,
            "hostiles": [h.to_dict() for h in self.hostiles],
            "boss": self.boss.to_dict() if self.boss is not None and self.boss.is_alive else None,
            "pickups": [p.to_dict() for p in self.pickups],
            "target_word": self.resolver.target_word,
            "input": self.resolver.input_buffer,
            "is_mistake": self.resolver.is_mistake,
            "wall": self.wall.status(),
            "bombs": self.bombs.status(),
            "score": self.score.summary().to_dict(),
            "spawned": self.spawner.spawned_count,
            "total": self.spawner.total,
            "outcome": self.flow.outcome.value,
            "elapsed_ms": self.elapsed_ms,
        }
