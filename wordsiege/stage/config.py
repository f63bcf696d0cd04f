"""
Stage configuration.

Every stage is a StageDefinition (identity, word mix) wrapping a
StageConfig (wall, spawning, bombs, boss and pickups). Missing keys in a
dictionary fall back to the built-in base stage.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.errors import InvalidStageConfigError
from ..utils.word_bank import WordMix

ALL_PATHS = ["straight", "zigzag", "drift"]


@dataclass
class SpawnConfig:
    """Hostile wave parameters (times in milliseconds, speeds in px/s)."""
    total: int = 18
    interval: float = 1500
    max_concurrent: int = 4
    speed_min: float = 80.0
    speed_max: float = 140.0
    paths: List[str] = field(default_factory=lambda: list(ALL_PATHS))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "interval": self.interval,
            "max_concurrent": self.max_concurrent,
            "speed": {"min": self.speed_min, "max": self.speed_max},
            "paths": list(self.paths),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpawnConfig":
        speed = data.get("speed", {})
        return cls(
            total=data.get("total", 18),
            interval=data.get("interval", 1500),
            max_concurrent=data.get("max_concurrent", 4),
            speed_min=speed.get("min", 80.0),
            speed_max=speed.get("max", 140.0),
            paths=list(data.get("paths", ALL_PATHS)),
        )


@dataclass
class BombConfig:
    """Bomb charges and how they are earned."""
    initial: int = 1
    max: int = 2
    cooldown: float = 20000
    combo_threshold: int = 6

    def to_dict(self) -> Dict[str, Any]:
        return {
            "initial": self.initial,
            "max": self.max,
            "cooldown": self.cooldown,
            "combo_threshold": self.combo_threshold,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BombConfig":
        return cls(
            initial=data.get("initial", 1),
            max=data.get("max", 2),
            cooldown=data.get("cooldown", 20000),
            combo_threshold=data.get("combo_threshold", 6),
        )


@dataclass
class BossConfig:
    """Boss phase parameters.

    ``word_count`` is the target length of the word list; 0 keeps the
    configured list as is.
    """
    name: str = "Shadow Scout"
    words: List[str] = field(
        default_factory=lambda: ["shadow", "focus", "valor", "resist", "unyielding"]
    )
    word_count: int = 0
    speed: float = 60.0
    pushback: float = 140.0
    damage: int = 2
    retreat_ms: float = 360.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "words": list(self.words),
            "word_count": self.word_count,
            "speed": self.speed,
            "pushback": self.pushback,
            "damage": self.damage,
            "retreat_ms": self.retreat_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BossConfig":
        return cls(
            name=data.get("name", "Shadow Scout"),
            words=list(data.get("words", ["shadow", "focus", "valor", "resist", "unyielding"])),
            word_count=data.get("word_count", 0),
            speed=data.get("speed", 60.0),
            pushback=data.get("pushback", 140.0),
            damage=data.get("damage", 2),
            retreat_ms=data.get("retreat_ms", 360.0),
        )


@dataclass
class StageConfig:
    """Configuration for a single stage."""

    # Field geometry (hostiles advance down the y axis towards breach_y)
    width: int = 1280
    height: int = 720
    breach_y: float = 620.0
    danger_zone: float = 140.0

    wall_max_health: int = 3

    # Pickups
    drop_rate: float = 0.25
    pickup_fall_speed: float = 110.0

    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    bombs: BombConfig = field(default_factory=BombConfig)
    boss: BossConfig = field(default_factory=BossConfig)

    def validate(self) -> None:
        """
        Reject stages that can never reach a terminal state.

        Raises:
            InvalidStageConfigError: zero spawn total or empty boss words
        """
        if self.spawn.total <= 0:
            raise InvalidStageConfigError("Stage spawn total must be positive.")
        if not self.boss.words:
            raise InvalidStageConfigError("Boss must have at least one word.")
        if self.spawn.max_concurrent <= 0:
            raise InvalidStageConfigError("Stage max_concurrent must be positive.")
        if self.wall_max_health <= 0:
            raise InvalidStageConfigError("Wall max health must be positive.")

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "breach_y": self.breach_y,
            "danger_zone": self.danger_zone,
            "wall": {"max_hp": self.wall_max_health},
            "drop_rate": self.drop_rate,
            "pickup_fall_speed": self.pickup_fall_speed,
            "spawn": self.spawn.to_dict(),
            "bombs": self.bombs.to_dict(),
            "boss": self.boss.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StageConfig":
        """Create config from dictionary."""
        wall = data.get("wall", {})
        return cls(
            width=data.get("width", 1280),
            height=data.get("height", 720),
            breach_y=data.get("breach_y", 620.0),
            danger_zone=data.get("danger_zone", 140.0),
            wall_max_health=wall.get("max_hp", 3),
            drop_rate=data.get("drop_rate", 0.25),
            pickup_fall_speed=data.get("pickup_fall_speed", 110.0),
            spawn=SpawnConfig.from_dict(data.get("spawn", {})),
            bombs=BombConfig.from_dict(data.get("bombs", {})),
            boss=BossConfig.from_dict(data.get("boss", {})),
        )


@dataclass
class StageDefinition:
    """A playable stage: identity, difficulty mix and configuration."""
    id: int = 1
    name: str = "Wall Drill"
    description: str = "Light pressure. Learn arrows and bombs."
    difficulty: str = "easy"
    word_mix: WordMix = field(default_factory=WordMix)
    config: StageConfig = field(default_factory=StageConfig)

    def to_dict(self) -> Dict[str, Any]:
        data = self.config.to_dict()
        data.update({
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "difficulty": self.difficulty,
            "word_mix": self.word_mix.to_dict(),
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StageDefinition":
        return cls(
            id=data.get("id", 1),
            name=data.get("name", "Wall Drill"),
            description=data.get("description", ""),
            difficulty=data.get("difficulty", "easy"),
            word_mix=WordMix.from_dict(data.get("word_mix", {})),
            config=StageConfig.from_dict(data),
        )
