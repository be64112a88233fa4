# src/cryptwalk/mapgen/dungeon.py
# Dungeon floors: rejection-sampled rooms chained by L corridors.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..config import MIN_DUNGEON_SIZE, DungeonConfig
from ..errors import GenerationError
from ..grid import Grid
from ..rect import Rect
from ..rng import PMRandom
from ..tiles import Tile
from .carve import carve_corridor_l, carve_room
from .connectivity import flood_fill, nearest_in
from .placement import Placement, PlacementLog, Status, overlaps_any

log = logging.getLogger(__name__)

XY = Tuple[int, int]

# Below this not even two 1x1 rooms fit apart inside the outer wall.
MIN_SIZE = MIN_DUNGEON_SIZE
FALLBACK_ROOM = 8
# From this size on the fixed 3,3 / w-12,h-12 fallback rooms stay apart.
FIXED_FALLBACK_SIZE = 24


@dataclass
class Floor:
    """Generated dungeon floor. Unpacks as (grid, start, exit)."""
    grid: Grid
    start: XY
    exit: XY
    placements: PlacementLog = field(default_factory=PlacementLog)
    used_fallback: bool = False

    @property
    def rooms(self) -> List[Rect]:
        return self.grid.rooms

    def __iter__(self) -> Iterator:
        return iter((self.grid, self.start, self.exit))


def _sample_room(width: int, height: int, rng: PMRandom, cfg: DungeonConfig) -> Optional[Rect]:
    rw = rng.range(cfg.room_min, cfg.room_max)
    rh = rng.range(cfg.room_min, cfg.room_max)
    # Keep a 1-cell margin inside the outer wall.
    max_x = (width - 2) - rw
    max_y = (height - 2) - rh
    if max_x < 1 or max_y < 1:
        return None
    return Rect(rng.range(1, max_x), rng.range(1, max_y), rw, rh)


def _fallback_rooms(width: int, height: int) -> Tuple[Rect, Rect]:
    if min(width, height) >= FIXED_FALLBACK_SIZE:
        s = FALLBACK_ROOM
        a = Rect(3, 3, s, s).clamp_into(width, height)
        b = Rect(width - s - 4, height - s - 4, s, s).clamp_into(width, height)
        return a, b
    # Hug opposite corners inside the wall, shrunk to keep a 1-cell gap.
    s = min(FALLBACK_ROOM, (min(width, height) - 3) // 2)
    return Rect(1, 1, s, s), Rect(width - 1 - s, height - 1 - s, s, s)


def ensure_rooms_connected(grid: Grid, rng: PMRandom) -> int:
    """
    Flood from the start; join every unreached room center to the nearest
    reached cell with an L corridor. Returns the number of repairs.
    """
    if not grid.rooms or grid.start is None:
        return 0
    reach = flood_fill(grid, grid.start)
    repairs = 0
    limit = max(grid.width, grid.height)
    for r in grid.rooms:
        c = r.center
        if c in reach:
            continue
        anchor = nearest_in(reach, c, limit) or grid.start
        carve_corridor_l(grid, rng, anchor[0], anchor[1], c[0], c[1])
        reach = flood_fill(grid, grid.start)
        repairs += 1
    return repairs


def generate_dungeon(
    width: int,
    height: int,
    rng: PMRandom,
    config: Optional[DungeonConfig] = None,
) -> Floor:
    cfg = config or DungeonConfig()
    if width < MIN_SIZE or height < MIN_SIZE:
        raise GenerationError(f"dungeon must be at least {MIN_SIZE}x{MIN_SIZE}, got {width}x{height}")

    grid = Grid.filled(width, height, Tile.WALL, fog=True)
    placements = PlacementLog()
    rooms: List[Rect] = []

    for i in range(cfg.max_rooms):
        cand = _sample_room(width, height, rng, cfg)
        if cand is None or overlaps_any(cand, rooms, pad=1):
            placements.record(Placement(Status.SKIPPED, None, 1, f"room {i}"))
            continue
        carve_room(grid, cand)
        if rooms:
            px, py = rooms[-1].center
            cx, cy = cand.center
            carve_corridor_l(grid, rng, px, py, cx, cy)
        rooms.append(cand)
        placements.record(Placement(Status.PLACED, cand, 1, f"room {i}"))

    used_fallback = False
    if len(rooms) < 2:
        # Start over from solid rock so no orphaned room survives.
        log.warning("only %d room(s) placed in %dx%d; using fallback layout", len(rooms), width, height)
        grid = Grid.filled(width, height, Tile.WALL, fog=True)
        a, b = _fallback_rooms(width, height)
        carve_room(grid, a)
        carve_room(grid, b)
        carve_corridor_l(grid, rng, a.center[0], a.center[1], b.center[0], b.center[1])
        rooms = [a, b]
        used_fallback = True

    grid.rooms = rooms
    start = rooms[0].center
    exit_ = rooms[-1].center
    grid.start = start
    repairs = ensure_rooms_connected(grid, rng)
    if repairs:
        log.info("connectivity pass carved %d extra corridor(s)", repairs)

    grid.set_tile(exit_[0], exit_[1], Tile.STAIRS_DOWN)
    grid.exit = exit_

    log.debug("dungeon %dx%d rooms=%d %s", width, height, len(rooms), placements.summary())
    return Floor(grid, start, exit_, placements, used_fallback)
