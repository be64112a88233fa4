# src/cryptwalk/mapgen/town.py
# The town: a walled field of grass with a fixed catalog of buildings, roads
# from every door to the inn, and small porches in front of each door.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..config import BuildingConfig, TownConfig
from ..grid import Grid
from ..rect import Rect
from ..rng import PMRandom
from ..tiles import Tile, is_door
from .building import BuildingCategory, generate_interior
from .carve import ring_walls
from .connectivity import bfs_path
from .placement import Placement, PlacementLog, Status, overlaps_any

log = logging.getLogger(__name__)

XY = Tuple[int, int]


class DoorSide(Enum):
    NORTH = (0, -1)
    SOUTH = (0, 1)
    WEST = (-1, 0)
    EAST = (1, 0)

    def __init__(self, dx: int, dy: int):
        self.dx = dx
        self.dy = dy


HUB = BuildingCategory.INN
CENTRAL = {BuildingCategory.INN, BuildingCategory.WEAPON_SHOP, BuildingCategory.MAGIC_SHOP}

PRIORITY = {
    BuildingCategory.INN: 0,
    BuildingCategory.WEAPON_SHOP: 1,
    BuildingCategory.MAGIC_SHOP: 1,
    BuildingCategory.QUEST_HOUSE_1: 2,
    BuildingCategory.QUEST_HOUSE_2: 2,
    BuildingCategory.CRYPT: 3,
    BuildingCategory.HOUSE: 4,
}


@dataclass(frozen=True)
class Prefab:
    category: BuildingCategory
    w: int
    h: int
    door_side: DoorSide


CATALOG: Tuple[Prefab, ...] = (
    Prefab(BuildingCategory.INN, 9, 7, DoorSide.SOUTH),
    Prefab(BuildingCategory.WEAPON_SHOP, 7, 6, DoorSide.SOUTH),
    Prefab(BuildingCategory.MAGIC_SHOP, 7, 6, DoorSide.SOUTH),
    Prefab(BuildingCategory.QUEST_HOUSE_1, 6, 5, DoorSide.SOUTH),
    Prefab(BuildingCategory.QUEST_HOUSE_2, 6, 5, DoorSide.SOUTH),
    Prefab(BuildingCategory.CRYPT, 9, 7, DoorSide.SOUTH),
)


def door_for(r: Rect, side: DoorSide) -> XY:
    cx, cy = r.center
    if side is DoorSide.NORTH:
        return (cx, r.y)
    if side is DoorSide.SOUTH:
        return (cx, r.y2)
    if side is DoorSide.WEST:
        return (r.x, cy)
    return (r.x2, cy)


def step_out(door: XY, side: DoorSide, n: int = 1) -> XY:
    return (door[0] + side.dx * n, door[1] + side.dy * n)


@dataclass
class BuildingLot:
    category: BuildingCategory
    rect: Rect
    door: XY
    door_side: DoorSide
    interior: Optional[Grid] = field(default=None, repr=False, compare=False)

    @property
    def has_interior(self) -> bool:
        return self.interior is not None

    def get_interior(self, rng: PMRandom, config: Optional[BuildingConfig] = None) -> Grid:
        """Generate the interior on first entry; later calls return the same Grid."""
        if self.interior is None:
            self.interior = generate_interior(self.category, rng, config)
        return self.interior


@dataclass
class Town:
    grid: Grid
    lots: List[BuildingLot] = field(default_factory=list)
    start: Optional[XY] = None
    placements: PlacementLog = field(default_factory=PlacementLog)

    def lot(self, category: BuildingCategory) -> Optional[BuildingLot]:
        for b in self.lots:
            if b.category is category:
                return b
        return None

    def lot_at_door(self, x: int, y: int) -> Optional[BuildingLot]:
        for b in self.lots:
            if b.door == (x, y):
                return b
        return None

    @property
    def hub(self) -> Optional[BuildingLot]:
        return self.lot(HUB)

    @property
    def crypt_door(self) -> Optional[XY]:
        crypt = self.lot(BuildingCategory.CRYPT)
        return crypt.door if crypt else None

    def is_crypt_door(self, x: int, y: int) -> bool:
        return self.crypt_door == (x, y)

    def outside_of_door(self, b: BuildingLot) -> XY:
        return step_out(b.door, b.door_side)


# ---------- placement ----------

def _fits_inside(r: Rect, w: int, h: int) -> bool:
    # Stay clear of the boundary ring with a 1-cell gap.
    return r.x >= 2 and r.y >= 2 and r.x2 <= w - 3 and r.y2 <= h - 3


def _accept(grid: Grid, r: Rect, p: Prefab, taken: List[Rect]) -> Optional[BuildingLot]:
    if not _fits_inside(r, grid.width, grid.height):
        return None
    if overlaps_any(r, taken):
        return None
    door = door_for(r, p.door_side)
    ox, oy = step_out(door, p.door_side)
    if not grid.in_bounds(ox, oy) or grid.tile(ox, oy) is Tile.WALL:
        return None
    return BuildingLot(p.category, r, door, p.door_side)


def _biased_origin(p: Prefab, w: int, h: int, rng: PMRandom) -> Optional[XY]:
    if p.category in CENTRAL:
        return rng.range(w // 2 - 10, w // 2 + 10), rng.range(h // 2 - 8, h // 2 + 8)
    hi_x, hi_y = w - p.w - 4, h - p.h - 4
    if hi_x < 3 or hi_y < 3:
        return None
    rx = rng.range(3, hi_x)
    ry = rng.range(3, hi_y)
    if p.category is BuildingCategory.CRYPT:
        # Push against one of the four edges.
        if rng.chance(0.5):
            rx = 3 if rng.chance(0.5) else hi_x
        else:
            ry = 3 if rng.chance(0.5) else hi_y
    return rx, ry


def _brute_origin(p: Prefab, w: int, h: int, rng: PMRandom) -> Optional[XY]:
    hi_x, hi_y = w - p.w - 3, h - p.h - 3
    if hi_x < 2 or hi_y < 2:
        return None
    return rng.range(2, hi_x), rng.range(2, hi_y)


def _search(
    grid: Grid, p: Prefab, taken: List[Rect], rng: PMRandom, tries: int, biased: bool,
) -> Tuple[Optional[BuildingLot], int]:
    w, h = grid.width, grid.height
    for attempt in range(1, tries + 1):
        origin = _biased_origin(p, w, h, rng) if biased else _brute_origin(p, w, h, rng)
        if origin is None:
            # Prefab cannot fit this town; the attempt is burned.
            continue
        rx, ry = origin
        lot = _accept(grid, Rect(rx, ry, p.w, p.h), p, taken)
        if lot is not None:
            return lot, attempt
    return None, tries


def stamp_building(grid: Grid, lot: BuildingLot) -> None:
    for x, y in lot.rect.cells():
        grid.set_tile(x, y, Tile.WALL)
    door = Tile.CRYPT_DOOR if lot.category is BuildingCategory.CRYPT else Tile.DOOR
    grid.set_tile(lot.door[0], lot.door[1], door)


def place_buildings(grid: Grid, catalog, rng: PMRandom, cfg: TownConfig, placements: PlacementLog) -> List[BuildingLot]:
    ordered = sorted(catalog, key=lambda p: PRIORITY[p.category])
    taken: List[Rect] = []
    lots: List[BuildingLot] = []
    for p in ordered:
        lot, attempts = _search(grid, p, taken, rng, cfg.biased_tries, biased=True)
        if lot is None:
            log.debug("%s: biased search exhausted, trying brute force", p.category.value)
            lot, more = _search(grid, p, taken, rng, cfg.brute_tries, biased=False)
            attempts += more
        if lot is None:
            log.warning("town: could not place %s", p.category.value)
            placements.record(Placement(Status.SKIPPED, None, attempts, p.category.value))
            continue
        stamp_building(grid, lot)
        lots.append(lot)
        taken.append(lot.rect.expand(cfg.buffer))
        placements.record(Placement(Status.PLACED, lot, attempts, p.category.value))
    return lots


# ---------- roads ----------

def paint_path(grid: Grid, a: XY, b: XY) -> bool:
    path = bfs_path(grid, a, b)
    if path is None:
        return False
    for x, y in path:
        cur = grid.tile(x, y)
        if cur is Tile.WALL or is_door(cur):
            continue
        grid.set_tile(x, y, Tile.PATH)
    return True


def paint_porch(grid: Grid, door: XY) -> None:
    dx0, dy0 = door
    for dx, dy in ((0, 0), (1, 0), (-1, 0), (0, 1), (0, -1)):
        x, y = dx0 + dx, dy0 + dy
        if grid.tile(x, y) is Tile.GRASS:
            grid.set_tile(x, y, Tile.PATH)


def generate_town(
    width: int,
    height: int,
    rng: PMRandom,
    config: Optional[TownConfig] = None,
    catalog=CATALOG,
) -> Town:
    cfg = config or TownConfig()
    grid = Grid.filled(width, height, Tile.GRASS)
    grid.set_fog_enabled(False)
    ring_walls(grid)

    town = Town(grid)
    town.lots = place_buildings(grid, catalog, rng, cfg, town.placements)

    hub = town.hub
    if hub is not None:
        for b in town.lots:
            if b is hub:
                continue
            if not paint_path(grid, hub.door, b.door):
                log.warning("town: no road from %s to %s", hub.category.value, b.category.value)

    for b in town.lots:
        paint_porch(grid, b.door)

    if hub is not None:
        sx, sy = step_out(hub.door, hub.door_side, 2)
        town.start = (sx, sy) if grid.is_walkable(sx, sy) else hub.door
    else:
        mid = (width // 2, height // 2)
        town.start = mid if grid.is_walkable(*mid) else (1, 1)
    grid.start = town.start

    log.debug("town %dx%d lots=%d %s", width, height, len(town.lots), town.placements.summary())
    return town

