"""
Stage module for Word Siege.

Configuration lives here; import the controller and renderer from
``wordsiege.stage.controller`` and ``wordsiege.stage.renderer``.
"""

from .config import StageConfig, StageDefinition, SpawnConfig, BombConfig, BossConfig

__all__ = [
    "StageConfig",
    "StageDefinition",
    "SpawnConfig",
    "BombConfig",
    "BossConfig",
]
