# src/cryptwalk/mapgen/building.py
# Building interiors: an entry room behind a border door, then up to two more
# rooms grown east/north/south off short stub corridors. Service buildings get
# exactly one NPC, placed in the last room ("behind the counter").

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..config import BuildingConfig
from ..grid import Grid
from ..rect import Rect
from ..rng import PMRandom
from ..tiles import Tile
from .carve import carve_corridor_l, carve_room, carve_straight
from .placement import PlacementLog, overlaps_any, place_with_budget

log = logging.getLogger(__name__)

XY = Tuple[int, int]


class BuildingCategory(Enum):
    INN = "inn"
    WEAPON_SHOP = "weapon_shop"
    MAGIC_SHOP = "magic_shop"
    QUEST_HOUSE_1 = "quest_house_1"
    QUEST_HOUSE_2 = "quest_house_2"
    CRYPT = "crypt"
    HOUSE = "house"


class NpcRole(Enum):
    SHOPKEEPER = ("Shopkeeper", ("Welcome! Need supplies?", "Press [Z] to browse items."))
    BLACKSMITH = ("Blacksmith", ("Looking for something sharp?", "Press [Z] to browse weapons."))
    INNKEEPER = ("Innkeeper", ("Need a room?", "Press [Z] to rest (restore HP/MP)."))

    def __init__(self, display_name: str, lines: Tuple[str, ...]):
        self.display_name = display_name
        self.lines = lines


ROLE_FOR_CATEGORY = {
    BuildingCategory.MAGIC_SHOP: NpcRole.SHOPKEEPER,
    BuildingCategory.WEAPON_SHOP: NpcRole.BLACKSMITH,
    BuildingCategory.INN: NpcRole.INNKEEPER,
}


@dataclass
class Npc:
    role: NpcRole
    name: str
    x: int
    y: int

    @property
    def pos(self) -> XY:
        return (self.x, self.y)

    def dialogue(self) -> List[str]:
        return list(self.role.lines)


# Growth directions relative to the last placed room.
EAST, NORTH, SOUTH = 0, 1, 2


@dataclass
class Interior:
    grid: Grid
    door: XY
    target_rooms: int
    placements: PlacementLog = field(default_factory=PlacementLog)

    @property
    def npc(self) -> Optional[Npc]:
        return self.grid.npcs[0] if self.grid.npcs else None


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(v, hi))


def _fits(r: Rect, w: int, h: int) -> bool:
    return r.x >= 1 and r.y >= 1 and r.x2 <= w - 2 and r.y2 <= h - 2


def make_entry_room(w: int, h: int, start: XY, rng: PMRandom) -> Rect:
    rw = 7 + rng.next_int(3)
    rh = 5 + rng.next_int(2)
    rx = _clamp(1, 1, w - rw - 1)
    ry = _clamp(start[1] - rh // 2, 1, h - rh - 1)
    return Rect(rx, ry, rw, rh)


@dataclass(frozen=True)
class _Candidate:
    room: Rect
    stub_from: XY
    stub_to: XY


def _sample_candidate(last: Rect, w: int, h: int, rng: PMRandom) -> _Candidate:
    stub_len = 1 + rng.next_int(3)
    rw = 5 + rng.next_int(4)
    rh = 4 + rng.next_int(3)
    direction = rng.next_int(3)

    if direction == EAST:
        y = _clamp(last.y + 1 + rng.next_int(max(1, last.h - 2)), 1, h - 2)
        sx, sy = last.x2 + 1, y
        ex, ey = sx + stub_len, y
        room = Rect(ex + 1, y - rh // 2, rw, rh)
    elif direction == NORTH:
        x = _clamp(last.x + 1 + rng.next_int(max(1, last.w - 2)), 1, w - 2)
        sx, sy = x, last.y - 1
        ex, ey = x, sy - stub_len
        room = Rect(x - rw // 2, ey - rh, rw, rh)
    else:
        x = _clamp(last.x + 1 + rng.next_int(max(1, last.w - 2)), 1, w - 2)
        sx, sy = x, last.y2 + 1
        ex, ey = x, sy + stub_len
        room = Rect(x - rw // 2, ey + 1, rw, rh)
    return _Candidate(room, (sx, sy), (ex, ey))


def pick_npc_tile(grid: Grid, room: Rect, door: XY, rng: PMRandom, tries: int) -> XY:
    """Walkable cell inside `room` (inset by one) that is not the start or a door."""
    for _ in range(tries):
        x = room.x + 1 + rng.next_int(max(1, room.w - 2))
        y = room.y + 1 + rng.next_int(max(1, room.h - 2))
        if not grid.is_walkable(x, y):
            continue
        if (x, y) == grid.start or (x, y) == door:
            continue
        if grid.tile(x, y) is Tile.DOOR:
            continue
        return (x, y)
    return room.center


def spawn_npc(category: BuildingCategory, grid: Grid, door: XY, rng: PMRandom, tries: int) -> Optional[Npc]:
    role = ROLE_FOR_CATEGORY.get(category)
    if role is None or not grid.rooms:
        return None
    x, y = pick_npc_tile(grid, grid.rooms[-1], door, rng, tries)
    npc = Npc(role, role.display_name, x, y)
    grid.npcs.append(npc)
    return npc


def build_interior(
    category: BuildingCategory,
    rng: PMRandom,
    config: Optional[BuildingConfig] = None,
) -> Interior:
    cfg = config or BuildingConfig()
    w, h = cfg.width, cfg.height
    grid = Grid.filled(w, h, Tile.WALL)
    grid.set_fog_enabled(False)

    # The door sits on the outer border so it reads as the way out.
    door = (0, h // 2)
    start = (1, door[1])
    target = 1 + rng.next_int(3)
    placements = PlacementLog()

    entry = make_entry_room(w, h, start, rng)
    carve_room(grid, entry)
    rooms: List[Rect] = [entry]
    carve_corridor_l(grid, rng, start[0], start[1], entry.center[0], entry.center[1])

    last = entry
    for i in range(1, target):
        p = place_with_budget(
            lambda: _sample_candidate(last, w, h, rng),
            lambda c: _fits(c.room, w, h) and not overlaps_any(c.room, rooms, pad=1),
            cfg.room_tries,
            label=f"room {i}",
        )
        placements.record(p)
        if not p.placed:
            log.debug("%s: room %d skipped after %d tries", category.value, i, p.attempts)
            continue
        cand = p.value
        carve_straight(grid, cand.stub_from[0], cand.stub_from[1], cand.stub_to[0], cand.stub_to[1])
        cx, cy = cand.room.center
        carve_corridor_l(grid, rng, cand.stub_to[0], cand.stub_to[1], cx, cy)
        carve_room(grid, cand.room)
        rooms.append(cand.room)
        last = cand.room

    # Stamped last so no carving pass can overwrite them.
    grid.set_tile(door[0], door[1], Tile.DOOR)
    grid.set_tile(start[0], start[1], Tile.FLOOR)
    grid.start = start
    grid.rooms = rooms

    spawn_npc(category, grid, door, rng, cfg.npc_tries)
    log.debug("interior %s rooms=%d/%d npcs=%d", category.value, len(rooms), target, len(grid.npcs))
    return Interior(grid, door, target, placements)


def generate_interior(
    category: BuildingCategory,
    rng: PMRandom,
    config: Optional[BuildingConfig] = None,
) -> Grid:
    return build_interior(category, rng, config).grid
