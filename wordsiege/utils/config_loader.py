"""
Configuration Loader - Load stage and display configuration from YAML.

Supports a single configuration file:
- config/default.yaml - display settings, the stage base and the stage list

Each stage entry overrides the base; missing keys fall back to the
built-in defaults of the stage dataclasses.
"""
import yaml
from pathlib import Path
from typing import Optional, Any, Dict, List
from dataclasses import dataclass, field
from copy import deepcopy

from ..stage.config import StageDefinition


@dataclass
class DisplayConfig:
    """Window settings for the play script."""
    window_width: int = 1280
    window_height: int = 720
    render_fps: int = 60


@dataclass
class ProgressConfig:
    """Where stage progression is saved."""
    save_path: str = "progress.yaml"
    autosave: bool = True


@dataclass
class Config:
    """Complete application configuration."""
    display: DisplayConfig = field(default_factory=DisplayConfig)
    progress: ProgressConfig = field(default_factory=ProgressConfig)
    stages: List[StageDefinition] = field(default_factory=lambda: [StageDefinition()])


def _dict_to_dataclass(data: dict, cls: type) -> Any:
    """Convert a dictionary to a dataclass instance."""
    if not data:
        return cls()

    # Get the fields that the dataclass expects
    field_names = {f.name for f in cls.__dataclass_fields__.values()}

    # Filter to only include valid fields
    filtered_data = {k: v for k, v in data.items() if k in field_names}

    return cls(**filtered_data)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries, with override values taking precedence.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = deepcopy(value)

    return result


def _find_config_dir() -> Path:
    """Find the config directory."""
    possible_paths = [
        Path("config"),
        Path(__file__).parent.parent.parent / "config",
        Path.cwd() / "config",
    ]

    for path in possible_paths:
        if path.exists() and path.is_dir():
            return path

    # Fallback to project root config folder
    return Path(__file__).parent.parent.parent / "config"


def _load_yaml_file(path: Path) -> Dict:
    """Load a YAML file, returning empty dict if not found."""
    if not path.exists():
        return {}

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return data if data else {}


def build_stages(data: Dict) -> List[StageDefinition]:
    """
    Build stage definitions from a configuration dictionary.

    Args:
        data: Dictionary with an optional 'base' mapping and a 'stages' list

    Returns:
        Stage definitions in file order

    Raises:
        ValueError: if two stages share an id
    """
    base = data.get('base') or {}
    entries = data.get('stages') or []

    stages = [StageDefinition.from_dict(_deep_merge(base, entry or {})) for entry in entries]

    ids = [stage.id for stage in stages]
    if len(ids) != len(set(ids)):
        raise ValueError(f"Duplicate stage ids in configuration: {ids}")

    return stages


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to config file (defaults to config/default.yaml)

    Returns:
        Config object with all settings
    """
    path = Path(config_path) if config_path else _find_config_dir() / "default.yaml"
    data = _load_yaml_file(path)

    if not data:
        print(f"[Config] No config found at {path}, using defaults")
        return Config()

    config = Config()

    if 'display' in data:
        config.display = _dict_to_dataclass(data['display'], DisplayConfig)

    if 'progress' in data:
        config.progress = _dict_to_dataclass(data['progress'], ProgressConfig)

    stages = build_stages(data)
    if stages:
        config.stages = stages
    else:
        print(f"[Config] No stages defined in {path}, using the built-in stage")

    return config


def load_stages(config_path: Optional[str] = None) -> List[StageDefinition]:
    """Load only the stage list."""
    return load_config(config_path).stages


def save_stages(stages: List[StageDefinition], config_path: str) -> None:
    """
    Save stage definitions to a YAML file.

    Args:
        stages: Stage definitions to save
        config_path: Path to save to
    """
    data = {'stages': [stage.to_dict() for stage in stages]}

    with open(config_path, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
