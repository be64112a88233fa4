from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Iterator, List, Optional, Sequence, Tuple

from .errors import NoFloorTileError
from .rect import Rect
from .rng import PMRandom
from .tiles import Tile, tile_from_glyph

if TYPE_CHECKING:
    from .mapgen.building import Npc

XY = Tuple[int, int]

DEFAULT_FLOOR_TRIES = 10_000


@dataclass
class Grid:
    """
    Fixed-size tile map, row-major in a flat buffer.

    Every read goes through tile()/in_bounds(); out-of-bounds reads behave
    like WALL so callers never special-case the edges.
    """
    width: int
    height: int
    buf: List[Tile]
    visible_now: bytearray
    seen_ever: bytearray
    fog_enabled: bool = True
    start: Optional[XY] = None
    exit: Optional[XY] = None
    rooms: List[Rect] = field(default_factory=list)
    npcs: List["Npc"] = field(default_factory=list)

    @classmethod
    def filled(cls, width: int, height: int, fill: Tile = Tile.WALL, fog: bool = True) -> "Grid":
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be non-empty, got {width}x{height}")
        n = width * height
        return cls(width, height, [fill] * n, bytearray(n), bytearray(n), fog_enabled=fog)

    @classmethod
    def from_rows(cls, rows: Sequence[str], fog: bool = True) -> "Grid":
        """Parse glyph rows (see Tile glyphs) into a grid; the inverse of rows()."""
        if not rows or any(len(r) != len(rows[0]) for r in rows):
            raise ValueError("rows must be non-empty and rectangular")
        g = cls.filled(len(rows[0]), len(rows), fog=fog)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                g.buf[g.idx(x, y)] = tile_from_glyph(ch)
        return g

    @property
    def stride(self) -> int:
        return self.width

    def idx(self, x: int, y: int) -> int:
        return y * self.stride + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ---------- tiles ----------

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            return Tile.WALL
        return self.buf[self.idx(x, y)]

    def set_tile(self, x: int, y: int, t: Tile) -> None:
        if self.in_bounds(x, y):
            self.buf[self.idx(x, y)] = t

    def is_walkable(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.buf[self.idx(x, y)].walkable

    def blocks_sight(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self.buf[self.idx(x, y)].opaque

    def cells_of(self, *tiles: Tile) -> Iterator[XY]:
        wanted = set(tiles)
        for i, t in enumerate(self.buf):
            if t in wanted:
                yield (i % self.stride, i // self.stride)

    # ---------- visibility ----------

    def mark_visible(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            return
        i = self.idx(x, y)
        self.visible_now[i] = 1
        self.seen_ever[i] = 1

    def clear_visible_now(self) -> None:
        self.visible_now[:] = bytes(len(self.visible_now))

    def is_visible_now(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return not self.fog_enabled or bool(self.visible_now[self.idx(x, y)])

    def was_seen_ever(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return not self.fog_enabled or bool(self.seen_ever[self.idx(x, y)])

    def apply_visibility(self, cells: Iterable[XY]) -> None:
        """Replace visible-now with `cells`; seen-ever only grows."""
        if not self.fog_enabled:
            return
        self.clear_visible_now()
        for x, y in cells:
            self.mark_visible(x, y)

    def set_fog_enabled(self, enabled: bool) -> None:
        self.fog_enabled = enabled
        if not enabled:
            n = len(self.buf)
            self.visible_now[:] = b"\x01" * n
            self.seen_ever[:] = b"\x01" * n

    # ---------- sampling ----------

    def find_random_floor_tile(self, rng: PMRandom, max_tries: int = DEFAULT_FLOOR_TRIES) -> XY:
        """
        Rejection-sample a FLOOR cell inside the 1-cell border.

        Raises NoFloorTileError once `max_tries` samples miss, instead of
        spinning forever on a grid that has no interior floor.
        """
        if self.width < 3 or self.height < 3:
            raise NoFloorTileError(f"{self.width}x{self.height} grid has no interior")
        for _ in range(max_tries):
            x = rng.range(1, self.width - 2)
            y = rng.range(1, self.height - 2)
            if self.buf[self.idx(x, y)] is Tile.FLOOR:
                return (x, y)
        raise NoFloorTileError(f"no FLOOR tile found in {max_tries} tries")

    def find_random_room_floor(
        self,
        rng: PMRandom,
        exclude: Optional[Rect] = None,
        max_tries: int = 5000,
    ) -> XY:
        """FLOOR cell inside a recorded room, optionally outside `exclude`."""
        if not self.rooms:
            return self.find_random_floor_tile(rng)
        for _ in range(max_tries):
            r = rng.choice(self.rooms)
            x = rng.range(r.x, r.x2)
            y = rng.range(r.y, r.y2)
            if self.tile(x, y) is not Tile.FLOOR:
                continue
            if exclude is not None and exclude.contains(x, y):
                continue
            return (x, y)
        return self.find_random_floor_tile(rng)

    # ---------- dumps ----------

    def rows(self) -> List[str]:
        out = []
        for y in range(self.height):
            row = self.buf[self.idx(0, y):self.idx(0, y) + self.width]
            out.append("".join(t.glyph for t in row))
        return out

    def fingerprint(self) -> str:
        """Stable digest of tiles and generation metadata."""
        h = hashlib.sha256()
        h.update(f"{self.width}x{self.height}\n".encode())
        h.update("\n".join(self.rows()).encode())
        h.update(repr((self.start, self.exit, self.rooms)).encode())
        h.update(repr([(n.role.name, n.x, n.y) for n in self.npcs]).encode())
        return h.hexdigest()
