from .tile_types import TileType
from .tile_grid import Grid
from .tile_parser import LayoutParser, ParseResult
from .autotile import AutotileResolver, TileOrientation, can_connect, is_nonwall
from .tile_registry import TileRegistry

__all__ = [
    "TileType",
    "Grid",
    "LayoutParser",
    "ParseResult",
    "AutotileResolver",
    "TileOrientation",
    "can_connect",
    "is_nonwall",
    "TileRegistry",
]
