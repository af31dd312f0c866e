"""Wall autotiling: pick a sprite rotation for every wall-like cell.

Each wall-like tile is rotated so that its sprite joins up with the walls
around it. The rotation only depends on the raw tile codes of the cell's
neighbours, never on the rotation chosen for another cell, so cells can be
resolved in any order.

Rotation rules are ordered tables of (predicate, rotation) pairs. The first
predicate that holds wins; when none does, the cell gets FALLBACK_ROTATION and
a GeometryWarning is recorded. That only happens for layouts whose wall
geometry does not make sense for the tile used.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

from .tile_grid import CellCode, Grid
from .tile_types import TileType
from ..core.constants import (
    DOWN, DOWN_LEFT, DOWN_RIGHT, FALLBACK_ROTATION, GATE_CORRECTION, LEFT, OUT_OF_BOUNDS,
    RIGHT, ROTATION_0, ROTATION_90, ROTATION_180, ROTATION_270, UP, UP_LEFT, UP_RIGHT,
)
from ..core.diagnostics import Diagnostics, GeometryWarning

logger = logging.getLogger(__name__)

OPEN_CODES = frozenset((TileType.EMPTY, TileType.PELLET, TileType.POWER_PELLET))


def can_connect(code: CellCode) -> bool:
    """True if a neighbour with this code joins up with a wall.

    Any wall-like tile connects to any other; there is no matching between
    wall subtypes. Out-of-bounds never connects.
    """
    if code == OUT_OF_BOUNDS:
        return False
    return code not in OPEN_CODES


def is_nonwall(code: CellCode) -> bool:
    """True only for open tiles (empty or pellets). Out-of-bounds is not open."""
    return code in OPEN_CODES


class ConnectivityFlags(NamedTuple):
    up: bool
    down: bool
    left: bool
    right: bool


class DiagonalOpenness(NamedTuple):
    """Which diagonal neighbours do NOT connect."""
    up_left: bool
    up_right: bool
    down_left: bool
    down_right: bool


@dataclass(frozen=True)
class Neighborhood:
    """Everything the rotation rules look at for one cell."""
    connects: ConnectivityFlags
    empty: ConnectivityFlags
    diagonal_open: DiagonalOpenness


class TileOrientation(NamedTuple):
    tile: TileType
    rotation: int


Rule = Tuple[Callable[[Neighborhood], bool], int]

# T-junctions: the one side without a connection is the stem's opposite.
T_JUNCTION_RULES: List[Rule] = [
    (lambda n: n.connects.left and n.connects.right and n.connects.down and not n.connects.up, ROTATION_0),
    (lambda n: n.connects.up and n.connects.down and n.connects.left and not n.connects.right, ROTATION_270),
    (lambda n: n.connects.left and n.connects.right and n.connects.up and not n.connects.down, ROTATION_180),
    (lambda n: n.connects.up and n.connects.down and n.connects.right and not n.connects.left, ROTATION_90),
]

# Corners joining exactly two perpendicular neighbours.
CORNER_RULES: List[Rule] = [
    (lambda n: n.connects.right and n.connects.down and not n.connects.up and not n.connects.left, ROTATION_0),
    (lambda n: n.connects.left and n.connects.down and not n.connects.up and not n.connects.right, ROTATION_270),
    (lambda n: n.connects.left and n.connects.up and not n.connects.down and not n.connects.right, ROTATION_180),
    (lambda n: n.connects.right and n.connects.up and not n.connects.down and not n.connects.left, ROTATION_90),
]

# Inner corners with extra walls around them. The open diagonal sits inside
# the bend, opposite the two connections that form it.
COMPLEX_CORNER_RULES: List[Rule] = [
    (lambda n: n.diagonal_open.down_right and n.connects.left and n.connects.up, ROTATION_0),
    (lambda n: n.diagonal_open.down_left and n.connects.right and n.connects.up, ROTATION_90),
    (lambda n: n.diagonal_open.up_left and n.connects.right and n.connects.down, ROTATION_180),
    (lambda n: n.diagonal_open.up_right and n.connects.left and n.connects.down, ROTATION_270),
]

# Straight walls run alongside open space; away from any opening they follow
# the axis with more connections.
STRAIGHT_RULES: List[Rule] = [
    (lambda n: (n.empty.left or n.empty.right)
        and (n.connects.up or n.connects.down or (n.empty.left and n.empty.right)), ROTATION_90),
    (lambda n: (n.empty.up or n.empty.down)
        and (n.connects.left or n.connects.right or (n.empty.up and n.empty.down)), ROTATION_0),
    (lambda n: n.connects.left and n.connects.right and not (n.connects.up and n.connects.down), ROTATION_0),
    (lambda n: n.connects.up and n.connects.down and not (n.connects.left and n.connects.right), ROTATION_90),
]


def first_match(rules: List[Rule], neighborhood: Neighborhood) -> Optional[int]:
    """Rotation of the first rule whose predicate holds, or None."""
    for predicate, rotation in rules:
        if predicate(neighborhood):
            return rotation
    return None


@dataclass
class ResolveResult:
    """Orientation of every wall-like cell from one pass over a grid."""
    orientations: Dict[Tuple[int, int], TileOrientation] = field(default_factory=dict)
    warnings: Diagnostics = field(default_factory=Diagnostics)

    def rotation_at(self, x: int, y: int) -> Optional[int]:
        orientation = self.orientations.get((x, y))
        return orientation.rotation if orientation else None


class AutotileResolver:
    """Classifies grid cells and computes wall sprite rotations."""

    def __init__(self):
        self._rotators: Dict[TileType, Callable] = {
            TileType.T_JUNCTION: self._rotate_t_junction,
            TileType.OUTER_CORNER: self._rotate_outer_corner,
            TileType.INNER_CORNER: self._rotate_inner_corner,
            TileType.OUTER_WALL: self._rotate_straight,
            TileType.INNER_WALL: self._rotate_straight,
            TileType.GATE: self._rotate_gate,
        }

    @staticmethod
    def neighbor(grid: Grid, x: int, y: int, dx: int, dy: int) -> CellCode:
        """Tile code at (x + dx, y + dy), or OUT_OF_BOUNDS."""
        return grid.get(x + dx, y + dy)

    def connectivity(self, grid: Grid, x: int, y: int) -> ConnectivityFlags:
        return ConnectivityFlags(*(can_connect(self.neighbor(grid, x, y, *d)) for d in (UP, DOWN, LEFT, RIGHT)))

    def emptiness(self, grid: Grid, x: int, y: int) -> ConnectivityFlags:
        return ConnectivityFlags(*(is_nonwall(self.neighbor(grid, x, y, *d)) for d in (UP, DOWN, LEFT, RIGHT)))

    def diagonal_openness(self, grid: Grid, x: int, y: int) -> DiagonalOpenness:
        return DiagonalOpenness(*(not can_connect(self.neighbor(grid, x, y, *d))
                                  for d in (UP_LEFT, UP_RIGHT, DOWN_LEFT, DOWN_RIGHT)))

    def neighborhood(self, grid: Grid, x: int, y: int) -> Neighborhood:
        return Neighborhood(
            connects=self.connectivity(grid, x, y),
            empty=self.emptiness(grid, x, y),
            diagonal_open=self.diagonal_openness(grid, x, y),
        )

    def classify_and_rotate(self, grid: Grid, x: int, y: int,
                            warnings: Optional[Diagnostics] = None) -> Optional[TileOrientation]:
        """
        Classify the cell at (x, y) and compute its sprite rotation.

        Args:
            grid: Parsed level grid
            x, y: Cell coordinate
            warnings: Optional collection that receives a GeometryWarning when
                no rule matches

        Returns:
            TileOrientation for wall-like cells, None for open cells and
            coordinates outside the grid.
        """
        code = grid.get(x, y)
        if code == OUT_OF_BOUNDS:
            return None
        rotator = self._rotators.get(code)
        if rotator is None:
            return None

        neighborhood = self.neighborhood(grid, x, y)
        rotation = rotator(grid, x, y, neighborhood)
        if rotation is None:
            self._warn(code, x, y, neighborhood, warnings)
            rotation = FALLBACK_ROTATION
        return TileOrientation(code, rotation)

    def resolve_all(self, grid: Grid) -> ResolveResult:
        """Resolve every cell of the grid in one pass."""
        result = ResolveResult()
        for x, y, _tile in grid.cells():
            orientation = self.classify_and_rotate(grid, x, y, result.warnings)
            if orientation is not None:
                result.orientations[(x, y)] = orientation
        logger.info("Resolved %d wall tiles (%d geometry warnings)",
                    len(result.orientations), len(result.warnings))
        return result

    def _rotate_t_junction(self, grid, x, y, neighborhood):
        return first_match(T_JUNCTION_RULES, neighborhood)

    def _rotate_outer_corner(self, grid, x, y, neighborhood):
        return first_match(CORNER_RULES, neighborhood)

    def _rotate_inner_corner(self, grid, x, y, neighborhood):
        rotation = first_match(CORNER_RULES, neighborhood)
        if rotation is None:
            rotation = first_match(COMPLEX_CORNER_RULES, neighborhood)
        return rotation

    def _rotate_straight(self, grid, x, y, neighborhood):
        return first_match(STRAIGHT_RULES, neighborhood)

    def _rotate_gate(self, grid, x, y, neighborhood):
        rotation = first_match(STRAIGHT_RULES, neighborhood)
        if rotation is None:
            return None
        return self._correct_gate(grid, x, y, rotation)

    @staticmethod
    def _correct_gate(grid: Grid, x: int, y: int, rotation: int) -> int:
        """Turn the mirrored gate of a pair around so both face each other."""
        if rotation == ROTATION_0 and x >= grid.width / 2:
            return rotation - GATE_CORRECTION
        if rotation == ROTATION_90 and y >= grid.height / 2:
            return rotation - GATE_CORRECTION
        return rotation

    @staticmethod
    def _warn(tile: TileType, x: int, y: int, neighborhood: Neighborhood,
              warnings: Optional[Diagnostics]) -> None:
        c = neighborhood.connects
        detail = f"connects up={c.up} down={c.down} left={c.left} right={c.right}"
        warning = GeometryWarning(x, y, tile_name=tile.display_name, detail=detail)
        if warnings is not None:
            warnings.add(warning)
        logger.warning(warning.message)
