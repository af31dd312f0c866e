"""Level generator: turns a quarter layout file into a placement plan.

One generation pass reads the layout text, mirrors it into the full grid,
resolves the rotation of every wall, and lists every tile to place on the
walls and pellets layers. The plan is handed to whatever draws the tilemap;
nothing here renders.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mazetiles.core.constants import LAYER_PELLETS, LAYER_WALLS
from mazetiles.core.diagnostics import Diagnostics, InvalidTileIndex, LevelWarningsError
from mazetiles.level.config_loader import LevelConfig
from mazetiles.tiles.autotile import AutotileResolver, TileOrientation
from mazetiles.tiles.tile_grid import Grid
from mazetiles.tiles.tile_parser import LayoutParser
from mazetiles.tiles.tile_registry import TileRegistry
from mazetiles.tiles.tile_types import TileType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TilePlacement:
    """One tile to put on a tilemap layer."""
    x: int  # grid column
    y: int  # grid row
    position: Tuple[int, int]  # tilemap cell, level centred on the origin
    tile: TileType
    layer: str
    sprite_path: Optional[str] = None
    rotation: Optional[int] = None  # None for tiles that are never rotated


@dataclass
class GenerationResult:
    """Output of one generation pass."""
    grid: Grid
    placements: List[TilePlacement] = field(default_factory=list)
    orientations: Dict[Tuple[int, int], TileOrientation] = field(default_factory=dict)
    warnings: Diagnostics = field(default_factory=Diagnostics)
    tile_size: int = 1

    def layer(self, name: str) -> List[TilePlacement]:
        """Get the placements on one layer, in generation order."""
        return [p for p in self.placements if p.layer == name]

    def placement_at(self, x: int, y: int) -> Optional[TilePlacement]:
        for placement in self.placements:
            if (placement.x, placement.y) == (x, y):
                return placement
        return None

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """Size of the whole level in pixels, for sizing the view around it."""
        return self.grid.width * self.tile_size, self.grid.height * self.tile_size

    @property
    def is_clean(self) -> bool:
        return not self.warnings

    def raise_for_warnings(self) -> None:
        """Raise LevelWarningsError if the pass produced any warning."""
        if self.warnings:
            raise LevelWarningsError(self.warnings)


def placement_offsets(grid: Grid) -> Tuple[int, int]:
    """Offset added to grid coordinates so the level is centred on the origin."""
    return -(grid.width // 2), -((grid.height + 1) // 2)


class LevelGenerator:
    """Builds the tile placement plan for a level."""

    def __init__(self, config: Optional[LevelConfig] = None,
                 parser: Optional[LayoutParser] = None,
                 resolver: Optional[AutotileResolver] = None,
                 registry: Optional[TileRegistry] = None):
        """
        Initialize the level generator.

        Args:
            config: Generator configuration; defaults when omitted
            parser: Layout parser to use
            resolver: Autotile resolver to use
            registry: Tile set; built from config.tile_set when omitted
        """
        self.config = config or LevelConfig()
        self.parser = parser or LayoutParser()
        self.resolver = resolver or AutotileResolver()
        self.registry = registry if registry is not None else TileRegistry(self.config.tile_set)

    @staticmethod
    def load_level_file(path: str) -> str:
        """
        Read layout text from disk.

        Trailing line breaks at the end of the file are dropped; the parser
        would otherwise read them as a blank row.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Level file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            return f.read().rstrip("\r\n")

    def generate_from_file(self, path: Optional[str] = None) -> GenerationResult:
        """Run a generation pass on a level file (config.level_file by default)."""
        path = path or self.config.level_file
        logger.info("Generating level from %s", path)
        return self.generate(self.load_level_file(path))

    def generate(self, text: str) -> GenerationResult:
        """
        Run one generation pass over layout text.

        Returns:
            GenerationResult holding the grid, the placement plan and every
            warning raised while parsing, resolving and placing tiles.

        Raises:
            LevelWarningsError: only when config.fail_on_warnings is set and
                the pass produced warnings
        """
        parsed = self.parser.parse(text)
        result = GenerationResult(grid=parsed.grid, tile_size=self.config.tile_size)
        result.warnings.extend(parsed.warnings)

        if len(self.registry) == 0 or max(parsed.grid.width, parsed.grid.height) == 0:
            logger.warning("Level generator is enabled but one or more required fields have not been defined.")
            return result

        resolved = self.resolver.resolve_all(parsed.grid)
        result.orientations = resolved.orientations
        result.warnings.extend(resolved.warnings)

        offset_x, offset_y = placement_offsets(parsed.grid)
        for x, y, tile in parsed.grid.cells():
            placement = self._place_tile(x, y, tile, (x + offset_x, y + offset_y),
                                         resolved.orientations.get((x, y)), result.warnings)
            if placement is not None:
                result.placements.append(placement)

        logger.info("Generated %dx%d level: %d walls, %d pellets, %d warning(s)",
                    parsed.grid.width, parsed.grid.height,
                    len(result.layer(LAYER_WALLS)), len(result.layer(LAYER_PELLETS)),
                    len(result.warnings))
        if self.config.fail_on_warnings:
            result.raise_for_warnings()
        return result

    def _place_tile(self, x: int, y: int, tile: TileType, position: Tuple[int, int],
                    orientation: Optional[TileOrientation],
                    warnings: Diagnostics) -> Optional[TilePlacement]:
        tile_data = self.registry.get_tile(tile)
        if tile_data is None:
            warning = warnings.add(InvalidTileIndex(x, y, tile_code=int(tile),
                                                    tile_set_size=len(self.registry)))
            logger.warning(warning.message)
            return None

        return TilePlacement(
            x=x,
            y=y,
            position=position,
            tile=tile,
            layer=tile_data.layer,
            sprite_path=tile_data.visual.sprite_path,
            rotation=orientation.rotation if orientation else None,
        )


if __name__ == "__main__":
    from mazetiles.level.config_loader import load_level_config

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    generator = LevelGenerator(load_level_config())
    level = generator.generate_from_file()
    for kind, count in level.warnings.summary().items():
        logger.info("  %s: %d", kind, count)
