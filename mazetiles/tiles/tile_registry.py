import logging
from typing import Dict, List, Optional

from .tile_data import TileData, VisualProperties
from .tile_types import TileType

# Default sprite for each tile code, indexed by code.
DEFAULT_TILE_SET: List[str] = [
    "assets/tiles/empty.png",
    "assets/tiles/outer_corner.png",
    "assets/tiles/outer_wall.png",
    "assets/tiles/inner_corner.png",
    "assets/tiles/inner_wall.png",
    "assets/tiles/pellet.png",
    "assets/tiles/power_pellet.png",
    "assets/tiles/t_junction.png",
    "assets/tiles/gate.png",
]

logger = logging.getLogger(__name__)


class TileRegistry:
    """The configured tile set: one entry per tile code.

    Entries are created from a list of sprites in code order, so a short list
    leaves the higher codes without an entry. Codes without an entry cannot be
    placed; register_custom_tile can fill any of them.
    """

    def __init__(self, sprite_paths: Optional[List[str]] = None):
        self._tiles: Dict[TileType, TileData] = {}
        paths = DEFAULT_TILE_SET if sprite_paths is None else sprite_paths
        if len(paths) > len(TileType):
            logger.warning("Tile set has %d entries but only %d tile codes exist; extra entries ignored",
                           len(paths), len(TileType))
            paths = paths[:len(TileType)]
        for code, sprite_path in enumerate(paths):
            self._register_default(TileType(code), sprite_path)

    def _register_default(self, tile_type: TileType, sprite_path: str):
        self.register_tile(TileData(
            tile_type=tile_type,
            name=tile_type.display_name,
            visual=VisualProperties(
                sprite_path=sprite_path,
                rotatable=tile_type.is_wall_like,
            ),
        ))

    def register_tile(self, tile_data: TileData):
        """Register or replace the entry for a tile code."""
        self._tiles[tile_data.tile_type] = tile_data

    def register_custom_tile(self, tile_data: TileData):
        """Register a tile for a code that has no entry yet."""
        if tile_data.tile_type in self._tiles:
            raise ValueError(f"Tile type {tile_data.tile_type} already registered")
        self.register_tile(tile_data)

    def get_tile(self, code: int) -> Optional[TileData]:
        """Get tile data by code, None when the tile set has no entry for it."""
        if code not in self._tiles:
            return None
        return self._tiles[TileType(code)]

    def get_all_tiles(self) -> Dict[TileType, TileData]:
        """Get all registered tiles."""
        return self._tiles.copy()

    def is_valid_index(self, code: int) -> bool:
        return self.get_tile(code) is not None

    def __len__(self) -> int:
        """Number of tile codes with an entry."""
        return len(self._tiles)

