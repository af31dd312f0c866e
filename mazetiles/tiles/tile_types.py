from enum import IntEnum


class TileType(IntEnum):
    """Enumeration of all tile codes that can appear in a level layout."""

    # Open tiles
    EMPTY = 0
    # Wall-like tiles
    OUTER_CORNER = 1
    OUTER_WALL = 2
    INNER_CORNER = 3
    INNER_WALL = 4
    # Collectibles
    PELLET = 5
    POWER_PELLET = 6
    # More wall-like tiles
    T_JUNCTION = 7
    GATE = 8

    @property
    def is_wall_like(self) -> bool:
        """Return True if tile is solid boundary geometry."""
        return self not in (TileType.EMPTY, TileType.PELLET, TileType.POWER_PELLET)

    @property
    def is_open(self) -> bool:
        """Return True if tile is passable space (empty or a pellet)."""
        return not self.is_wall_like

    @property
    def is_pellet(self) -> bool:
        return self in (TileType.PELLET, TileType.POWER_PELLET)

    @property
    def is_corner(self) -> bool:
        return self in (TileType.OUTER_CORNER, TileType.INNER_CORNER)

    @property
    def is_straight(self) -> bool:
        """Return True for tiles rotated by the straight wall rules (gates included)."""
        return self in (TileType.OUTER_WALL, TileType.INNER_WALL, TileType.GATE)

    @property
    def display_name(self) -> str:
        """Return human-readable name."""
        return {
            TileType.EMPTY: "Empty",
            TileType.OUTER_CORNER: "Outer Corner",
            TileType.OUTER_WALL: "Outer Wall",
            TileType.INNER_CORNER: "Inner Corner",
            TileType.INNER_WALL: "Inner Wall",
            TileType.PELLET: "Pellet",
            TileType.POWER_PELLET: "Power Pellet",
            TileType.T_JUNCTION: "T Junction",
            TileType.GATE: "Gate",
        }.get(self, f"Tile_{self.value}")

    @classmethod
    def from_code(cls, code: int) -> "TileType":
        """Look up a tile by its integer code. Raises ValueError when out of range."""
        return cls(code)
