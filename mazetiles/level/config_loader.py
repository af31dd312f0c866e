"""Configuration loader for the level generator."""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import List

from mazetiles.config import FAIL_ON_WARNINGS, LEVEL_CONFIG_PATH, LEVEL_FILE, TILE
from mazetiles.tiles.tile_registry import DEFAULT_TILE_SET

logger = logging.getLogger(__name__)


@dataclass
class LevelConfig:
    """Configuration for one level generation pass."""
    level_file: str = LEVEL_FILE
    tile_size: int = TILE
    # Sprite for each tile code, indexed by code. Codes past the end of the
    # list have no asset and are skipped at placement.
    tile_set: List[str] = field(default_factory=lambda: list(DEFAULT_TILE_SET))
    # Raise LevelWarningsError instead of returning a result with warnings
    fail_on_warnings: bool = FAIL_ON_WARNINGS


def load_level_config(config_path: str = LEVEL_CONFIG_PATH) -> LevelConfig:
    """
    Load generator configuration from JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        LevelConfig: Loaded configuration, or defaults when the file is
        missing or unreadable
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return LevelConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return LevelConfig()

    config_data = data.get('level_config', {}) if isinstance(data, dict) else {}
    config = LevelConfig()
    if not isinstance(config_data, dict):
        logger.warning("level_config must be an object, using defaults")
        return config

    if 'level_file' in config_data:
        config.level_file = str(config_data['level_file'])
    if 'tile_size' in config_data:
        try:
            config.tile_size = int(config_data['tile_size'])
        except (TypeError, ValueError):
            logger.warning("Invalid tile_size %r, using %d", config_data['tile_size'], TILE)
    if 'tile_set' in config_data:
        tile_set = config_data['tile_set']
        if isinstance(tile_set, list):
            config.tile_set = [str(path) for path in tile_set]
        else:
            logger.warning("tile_set must be a list, using default tile set")
    if 'fail_on_warnings' in config_data:
        fail_on_warnings = config_data['fail_on_warnings']
        if isinstance(fail_on_warnings, bool):
            config.fail_on_warnings = fail_on_warnings
        else:
            logger.warning("Invalid fail_on_warnings %r, using %s", fail_on_warnings, FAIL_ON_WARNINGS)

    unknown = set(config_data) - {'level_file', 'tile_size', 'tile_set', 'fail_on_warnings'}
    if unknown:
        logger.debug("Ignoring unknown config keys: %s", sorted(unknown))
    return config


def save_level_config(config: LevelConfig, config_path: str = LEVEL_CONFIG_PATH) -> None:
    """
    Save generator configuration to JSON file.

    Args:
        config: Configuration to save
        config_path: Path to save the configuration file
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = {
        "level_config": {
            "level_file": config.level_file,
            "tile_size": config.tile_size,
            "tile_set": list(config.tile_set),
            "fail_on_warnings": config.fail_on_warnings,
        }
    }

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)
