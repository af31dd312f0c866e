# mazetiles/core/constants.py
"""
Global constants for the layout and autotile system.

Coordinate System:
- Grids are addressed by (x, y) = (column, row).
- Origin: Top-left corner of the level text (first character of the first line).
- X-axis: Increases from left to right (0 to W-1).
- Y-axis: Increases from top to bottom (0 to H-1). "Up" is y - 1.
"""

# === Layout text format ===
ROW_SEPARATOR = "\n"
TOKEN_SEPARATOR = ","

# Tile codes are single digits. Horizontal mirroring assumes this, so a
# multi-digit token is never a valid code.
MIN_TILE_CODE = 0
MAX_TILE_CODE = 8

# Returned by neighbour lookups outside the grid. Not a valid tile code.
OUT_OF_BOUNDS = -1

# === Rotations (degrees, counter-clockwise, around the tile centre) ===
ROTATION_0 = 0
ROTATION_90 = 90
ROTATION_180 = 180
ROTATION_270 = 270
FALLBACK_ROTATION = ROTATION_0

# Gates are drawn facing their mirrored partner; the second gate of a pair is
# turned back by this amount.
GATE_CORRECTION = 180

# Cardinal offsets (dx, dy)
UP = (0, -1)
DOWN = (0, 1)
LEFT = (-1, 0)
RIGHT = (1, 0)

# Diagonal offsets (dx, dy)
UP_LEFT = (-1, -1)
UP_RIGHT = (1, -1)
DOWN_LEFT = (-1, 1)
DOWN_RIGHT = (1, 1)

# === Placement layers ===
LAYER_WALLS = "walls"
LAYER_PELLETS = "pellets"


def normalize_rotation(rotation: int) -> int:
    """Map a signed rotation (e.g. -90) onto [0, 360)."""
    return rotation % 360
