"""
Tests for the wall autotiler.

Each rotation table is exercised one pattern at a time on a 3x3 grid built
around the cell under test, then on grids produced by the layout parser.
"""

import pytest

from mazetiles.core.constants import OUT_OF_BOUNDS, normalize_rotation
from mazetiles.core.diagnostics import Diagnostics, GeometryWarning
from mazetiles.tiles.autotile import AutotileResolver, TileOrientation, can_connect, is_nonwall
from mazetiles.tiles.tile_grid import Grid
from mazetiles.tiles.tile_parser import LayoutParser
from mazetiles.tiles.tile_types import TileType

W = 4  # any wall-like neighbour
O = 0  # open neighbour


@pytest.fixture(scope="module")
def resolver():
    return AutotileResolver()


@pytest.fixture(scope="module")
def parser():
    return LayoutParser()


def _around(center, up=O, down=O, left=O, right=O, ul=O, ur=O, dl=O, dr=O):
    """3x3 grid with the cell under test at (1, 1)."""
    return Grid.from_rows([
        [ul, up, ur],
        [left, center, right],
        [dl, down, dr],
    ])


def _rotate(resolver, grid, x=1, y=1):
    warnings = Diagnostics()
    orientation = resolver.classify_and_rotate(grid, x, y, warnings)
    return orientation, warnings


# --- Connectivity predicates ---

@pytest.mark.parametrize("code,expected", [
    (OUT_OF_BOUNDS, False),
    (0, False), (5, False), (6, False),
    (1, True), (2, True), (3, True), (4, True), (7, True), (8, True),
])
def test_can_connect(code, expected):
    assert can_connect(code) is expected


@pytest.mark.parametrize("code,expected", [
    (OUT_OF_BOUNDS, False),
    (0, True), (5, True), (6, True),
    (1, False), (2, False), (3, False), (4, False), (7, False), (8, False),
])
def test_is_nonwall(code, expected):
    assert is_nonwall(code) is expected


def test_neighbor_outside_grid(resolver):
    grid = _around(2)
    assert resolver.neighbor(grid, 0, 0, -1, 0) == OUT_OF_BOUNDS
    assert resolver.neighbor(grid, 2, 2, 0, 1) == OUT_OF_BOUNDS
    assert resolver.neighbor(grid, 1, 1, 0, -1) == TileType.EMPTY


def test_connectivity_flags(resolver):
    grid = _around(2, up=W, left=5, right=8)
    flags = resolver.connectivity(grid, 1, 1)
    assert (flags.up, flags.down, flags.left, flags.right) == (True, False, False, True)


# --- Open cells ---

@pytest.mark.parametrize("code", [0, 5, 6])
def test_open_cells_have_no_rotation(resolver, code):
    assert resolver.classify_and_rotate(_around(code, up=W, down=W), 1, 1) is None


def test_outside_coordinate_has_no_rotation(resolver):
    assert resolver.classify_and_rotate(_around(2), 5, 5) is None


# --- T-junctions ---

@pytest.mark.parametrize("flags,rotation", [
    (dict(left=W, right=W, down=W), 0),
    (dict(up=W, down=W, left=W), 270),
    (dict(left=W, right=W, up=W), 180),
    (dict(up=W, down=W, right=W), 90),
])
def test_t_junction_patterns(resolver, flags, rotation):
    orientation, warnings = _rotate(resolver, _around(7, **flags))
    assert orientation == TileOrientation(TileType.T_JUNCTION, rotation)
    assert not warnings


@pytest.mark.parametrize("flags", [
    dict(up=W, down=W, left=W, right=W),
    dict(left=W, right=W),
    dict(),
])
def test_t_junction_fallback(resolver, flags):
    orientation, warnings = _rotate(resolver, _around(7, **flags))
    assert orientation.rotation == 0
    assert warnings.count(GeometryWarning) == 1
    assert warnings.items[0].position == (1, 1)


# --- Corners ---

@pytest.mark.parametrize("code", [1, 3])
@pytest.mark.parametrize("flags,rotation", [
    (dict(right=W, down=W), 0),
    (dict(left=W, down=W), 270),
    (dict(left=W, up=W), 180),
    (dict(right=W, up=W), 90),
])
def test_simple_corner_patterns(resolver, code, flags, rotation):
    orientation, warnings = _rotate(resolver, _around(code, **flags))
    assert orientation == TileOrientation(TileType(code), rotation)
    assert not warnings


def test_outer_corner_never_uses_diagonals(resolver):
    grid = _around(1, up=W, down=W, left=W, right=W, ul=W, ur=W, dl=W)
    orientation, warnings = _rotate(resolver, grid)
    assert orientation == TileOrientation(TileType.OUTER_CORNER, 0)
    assert warnings.count(GeometryWarning) == 1


@pytest.mark.parametrize("open_diagonal,rotation", [
    ("dr", 0),
    ("dl", 90),
    ("ul", 180),
    ("ur", 270),
])
def test_complex_inner_corner(resolver, open_diagonal, rotation):
    diagonals = dict(ul=W, ur=W, dl=W, dr=W)
    diagonals[open_diagonal] = O
    grid = _around(3, up=W, down=W, left=W, right=W, **diagonals)
    orientation, warnings = _rotate(resolver, grid)
    assert orientation == TileOrientation(TileType.INNER_CORNER, rotation)
    assert not warnings


def test_complex_inner_corner_with_three_connections(resolver):
    # Walls left, up and right; the bend opens towards the lower right
    grid = _around(3, up=W, left=W, right=W, ul=W, ur=W, dl=W, dr=O)
    orientation, _ = _rotate(resolver, grid)
    assert orientation.rotation == 0


def test_complex_inner_corner_prefers_first_rule(resolver):
    grid = _around(3, up=W, down=W, left=W, right=W)
    orientation, warnings = _rotate(resolver, grid)
    assert orientation.rotation == 0
    assert not warnings


def test_enclosed_inner_corner_falls_back(resolver):
    grid = _around(3, up=W, down=W, left=W, right=W, ul=W, ur=W, dl=W, dr=W)
    orientation, warnings = _rotate(resolver, grid)
    assert orientation.rotation == 0
    assert warnings.count(GeometryWarning) == 1


# --- Straight walls ---

@pytest.mark.parametrize("code", [2, 4])
def test_straight_wall_beside_horizontal_opening_runs_vertically(resolver, code):
    orientation, _ = _rotate(resolver, _around(code, up=W, down=W, left=O, right=W))
    assert orientation.rotation == 90


@pytest.mark.parametrize("code", [2, 4])
def test_straight_wall_above_opening_runs_horizontally(resolver, code):
    orientation, _ = _rotate(resolver, _around(code, up=W, down=O, left=W, right=W))
    assert orientation.rotation == 0


def test_isolated_straight_wall_is_vertical(resolver):
    orientation, warnings = _rotate(resolver, _around(4))
    assert orientation.rotation == 90
    assert not warnings


def test_straight_wall_follows_open_side(resolver):
    grid = Grid.from_rows([[W, W, W], [O, 4, O], [W, W, W]])
    orientation, _ = _rotate(resolver, grid)
    assert orientation.rotation == 90

    grid = Grid.from_rows([[O, O, O], [4, 4, 4], [O, O, O]])
    orientation, _ = _rotate(resolver, grid)
    assert orientation.rotation == 0


def test_straight_wall_tie_break_prefers_horizontal(resolver):
    # Top edge: nothing above, walls on the other three sides
    grid = Grid.from_rows([[2, 2, 2], [4, 4, 4]])
    orientation, warnings = _rotate(resolver, grid, 1, 0)
    assert orientation == TileOrientation(TileType.OUTER_WALL, 0)
    assert not warnings


def test_straight_wall_tie_break_prefers_vertical(resolver):
    # Left edge: nothing to the left, walls on the other three sides
    grid = Grid.from_rows([[2, 4], [2, 4], [2, 4]])
    orientation, warnings = _rotate(resolver, grid, 0, 1)
    assert orientation.rotation == 90
    assert not warnings


def test_enclosed_straight_wall_falls_back(resolver):
    grid = _around(4, up=W, down=W, left=W, right=W)
    orientation, warnings = _rotate(resolver, grid)
    assert orientation.rotation == 0
    assert warnings.count(GeometryWarning) == 1
    assert "Inner Wall" in warnings.items[0].message


# --- Gates ---

def test_horizontal_gate_pair_faces_each_other(resolver, parser):
    grid = parser.parse_grid("0,0\n2,8")
    assert grid.to_lists()[1] == [2, 8, 8, 2]
    assert resolver.classify_and_rotate(grid, 1, 1) == TileOrientation(TileType.GATE, 0)
    assert resolver.classify_and_rotate(grid, 2, 1) == TileOrientation(TileType.GATE, -180)


def test_vertical_gate_pair_faces_each_other(resolver):
    grid = Grid.from_rows([[0, 2, 0], [0, 8, 0], [0, 8, 0], [0, 2, 0]])
    assert resolver.classify_and_rotate(grid, 1, 1).rotation == 90
    rotation = resolver.classify_and_rotate(grid, 1, 2).rotation
    assert rotation == -90
    assert normalize_rotation(rotation) == 270


def test_vertical_gate_below_midpoint_of_odd_height(resolver):
    grid = Grid.from_rows([[0, 2, 0], [0, 8, 0], [0, 8, 0], [0, 8, 0], [0, 2, 0]])
    # Height 5: midpoint is 2.5, so only row 3 is turned
    rotations = [resolver.classify_and_rotate(grid, 1, y).rotation for y in (1, 2, 3)]
    assert rotations == [90, 90, -90]


# --- Whole grids ---

def test_small_quarter_corners(resolver, parser):
    grid = parser.parse_grid("1,2,1\n2,0,2\n1,2,1")
    result = resolver.resolve_all(grid)

    assert result.rotation_at(0, 0) == 0
    assert result.rotation_at(5, 0) == 270
    assert result.rotation_at(5, 4) == 180
    assert result.rotation_at(0, 4) == 90
    for x, y, tile in grid.cells():
        if tile == TileType.OUTER_CORNER:
            assert result.rotation_at(x, y) in (0, 90, 180, 270)

    # Corners joined to three or four walls have no matching pattern
    assert result.warnings.count(GeometryWarning) == 8
    assert result.rotation_at(1, 1) is None
    assert len(result.orientations) == 26


def test_clean_quarter_resolves_without_warnings(resolver, parser):
    grid = parser.parse_grid("1,2\n2,0")
    result = resolver.resolve_all(grid)
    assert not result.warnings
    assert [result.rotation_at(x, 0) for x in range(4)] == [0, 0, 0, 270]
    assert [result.rotation_at(x, 1) for x in (0, 3)] == [90, 90]
    assert [result.rotation_at(x, 2) for x in range(4)] == [90, 0, 0, 180]


def test_resolution_does_not_depend_on_order(resolver, parser):
    grid = parser.parse_grid("1,2,2,7\n2,5,5,4\n1,2,1,3")
    forward = resolver.resolve_all(grid).orientations
    backward = {}
    for x, y, _ in reversed(list(grid.cells())):
        orientation = resolver.classify_and_rotate(grid, x, y)
        if orientation is not None:
            backward[(x, y)] = orientation
    assert forward == backward


def test_geometry_warnings_are_logged(resolver, caplog):
    with caplog.at_level("WARNING"):
        resolver.classify_and_rotate(_around(7), 1, 1)
    assert "No rotation rule matched T Junction" in caplog.text


def test_enclosed_gate_keeps_plain_fallback(resolver):
    grid = Grid.from_rows([[4, 4, 4, 4], [4, 8, 8, 4], [4, 4, 4, 4]])
    for x in (1, 2):
        orientation, warnings = _rotate(resolver, grid, x, 1)
        assert orientation == TileOrientation(TileType.GATE, 0)
        assert warnings.count(GeometryWarning) == 1
        assert warnings.items[0].message.startswith(f"No rotation rule matched Gate at ({x}, 1)")
