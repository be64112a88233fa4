# src/cryptwalk/mapgen/carve.py
# Carving primitives shared by the dungeon, building and town generators.
# All writes go through Grid.set_tile, so out-of-bounds cells are ignored.

from ..grid import Grid
from ..rect import Rect
from ..rng import PMRandom
from ..tiles import Tile


def carve_room(grid: Grid, r: Rect, tile: Tile = Tile.FLOOR) -> None:
    for x, y in r.cells():
        grid.set_tile(x, y, tile)


def carve_h(grid: Grid, x1: int, x2: int, y: int, tile: Tile = Tile.FLOOR) -> None:
    for x in range(min(x1, x2), max(x1, x2) + 1):
        grid.set_tile(x, y, tile)


def carve_v(grid: Grid, y1: int, y2: int, x: int, tile: Tile = Tile.FLOOR) -> None:
    for y in range(min(y1, y2), max(y1, y2) + 1):
        grid.set_tile(x, y, tile)


def carve_straight(grid: Grid, x1: int, y1: int, x2: int, y2: int) -> None:
    """Axis-aligned run; diagonal endpoints carve nothing."""
    if x1 == x2:
        carve_v(grid, y1, y2, x1)
    elif y1 == y2:
        carve_h(grid, x1, x2, y1)


def carve_corridor_l(grid: Grid, rng: PMRandom, x1: int, y1: int, x2: int, y2: int) -> bool:
    """
    L-shaped corridor between two points. One coin flip picks
    horizontal-then-vertical or vertical-then-horizontal; returns True for
    horizontal-first.
    """
    if rng.chance(0.5):
        carve_h(grid, x1, x2, y1)
        carve_v(grid, y1, y2, x2)
        return True
    carve_v(grid, y1, y2, x1)
    carve_h(grid, x1, x2, y2)
    return False


def ring_walls(grid: Grid, tile: Tile = Tile.WALL) -> None:
    w, h = grid.width, grid.height
    for x in range(w):
        grid.set_tile(x, 0, tile)
        grid.set_tile(x, h - 1, tile)
    for y in range(h):
        grid.set_tile(0, y, tile)
        grid.set_tile(w - 1, y, tile)
