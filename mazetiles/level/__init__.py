from .config_loader import LevelConfig, load_level_config, save_level_config
from .level_generator import GenerationResult, LevelGenerator, TilePlacement

__all__ = [
    "LevelConfig",
    "load_level_config",
    "save_level_config",
    "GenerationResult",
    "LevelGenerator",
    "TilePlacement",
]
