"""
Stage systems: typing resolution, targeting, spawning, economy and flow.
"""

from .typing_resolver import (
    TypingResolver, TypingOutcome, Progress, Complete, Mistake, Mismatch, FreeType, Clear,
    BACKSPACE,
)
from .target_selector import TargetSelector
from .wave_spawner import WaveSpawner, SpawnerState, boss_trigger_count
from .economy import ScoreTracker, ScoreSummary, BombState, Wall
from .stage_flow import StageFlow, StageOutcome, StageSnapshot

__all__ = [
    "TypingResolver",
    "TypingOutcome",
    "Progress",
    "Complete",
    "Mistake",
    "Mismatch",
    "FreeType",
    "Clear",
    "BACKSPACE",
    "TargetSelector",
    "WaveSpawner",
    "SpawnerState",
    "boss_trigger_count",
    "ScoreTracker",
    "ScoreSummary",
    "BombState",
    "Wall",
    "StageFlow",
    "StageOutcome",
    "StageSnapshot",
]
