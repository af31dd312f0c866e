from dataclasses import dataclass
from typing import Optional

from .tile_types import TileType
from ..core.constants import LAYER_PELLETS, LAYER_WALLS


@dataclass
class VisualProperties:
    """Visual properties for a tile."""
    sprite_path: Optional[str] = None
    # Sprite art can be rotated to join neighbouring walls
    rotatable: bool = False


@dataclass
class TileData:
    """Complete data for one entry of the tile set."""
    tile_type: TileType
    name: str
    visual: VisualProperties

    @property
    def layer(self) -> str:
        """Tilemap layer the tile is placed on. Pellets get their own layer."""
        return LAYER_PELLETS if self.tile_type.is_pellet else LAYER_WALLS

    @property
    def is_rotatable(self) -> bool:
        return self.visual.rotatable
