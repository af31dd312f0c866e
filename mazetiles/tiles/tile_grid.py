from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

from .tile_types import TileType
from ..core.constants import OUT_OF_BOUNDS, TOKEN_SEPARATOR, ROW_SEPARATOR

# A cell lookup yields either a tile or the OUT_OF_BOUNDS sentinel.
CellCode = Union[TileType, int]


@dataclass(frozen=True)
class Grid:
    """Immutable rectangular grid of tiles, stored row-major and addressed by (x, y)."""
    rows: Tuple[Tuple[TileType, ...], ...]

    def __post_init__(self):
        if self.rows:
            width = len(self.rows[0])
            for y, row in enumerate(self.rows):
                if len(row) != width:
                    raise ValueError(f"Row {y} has {len(row)} tiles, expected {width}")

    @classmethod
    def from_rows(cls, rows: List[List[TileType]]) -> "Grid":
        return cls(tuple(tuple(TileType(code) for code in row) for row in rows))

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> CellCode:
        """Get the tile at (x, y), or OUT_OF_BOUNDS outside the grid."""
        if not self.in_bounds(x, y):
            return OUT_OF_BOUNDS
        return self.rows[y][x]

    def __getitem__(self, pos: Tuple[int, int]) -> TileType:
        x, y = pos
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} grid")
        return self.rows[y][x]

    def cells(self) -> Iterator[Tuple[int, int, TileType]]:
        """Iterate (x, y, tile) over every cell, row by row."""
        for y, row in enumerate(self.rows):
            for x, tile in enumerate(row):
                yield x, y, tile

    def quadrant(self) -> "Grid":
        """Get the authored quarter this grid was mirrored from.

        Keeps the left half of the columns and the rows up to and including
        the shared centre row.
        """
        half_width = self.width // 2
        half_height = (self.height + 1) // 2
        return Grid(tuple(row[:half_width] for row in self.rows[:half_height]))

    def to_csv(self) -> str:
        """Convert the grid back to layout text (no trailing newline)."""
        return ROW_SEPARATOR.join(
            TOKEN_SEPARATOR.join(str(int(tile)) for tile in row) for row in self.rows
        )

    def to_lists(self) -> List[List[int]]:
        """2D list of integer tile codes, rows first."""
        return [[int(tile) for tile in row] for row in self.rows]
