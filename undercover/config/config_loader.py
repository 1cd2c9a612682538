"""
Configuration loader for YAML-based game configurations.
"""

import yaml
from pathlib import Path
from typing import Optional

from .game_config import GameConfig


def load_config_from_yaml(config_path: str) -> GameConfig:
    """
    Load game configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        GameConfig instance with values from YAML file

    Raises:
        FileNotFoundError: If the config file doesn't exist
        yaml.YAMLError: If the YAML file is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    config = GameConfig()
    if config_dict is None:
        return config

    for key, value in config_dict.items():
        if not hasattr(config, key):
            # Warn about unknown keys but don't fail
            print(f"Warning: Unknown config key '{key}' in YAML file")
            continue
        if key == "special_role_min_players" and isinstance(value, dict):
            # Partial overrides keep the defaults for roles not mentioned
            merged = dict(config.special_role_min_players)
            merged.update(value)
            value = merged
        setattr(config, key, value)

    return config


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load configuration from YAML file or return a fresh default.

    Args:
        config_path: Optional path to YAML config file. If None, returns default config.
    """
    if config_path is None:
        return GameConfig()

    return load_config_from_yaml(config_path)
