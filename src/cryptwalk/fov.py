# src/cryptwalk/fov.py
# Radius-limited field of view: one Bresenham ray from the origin to every
# candidate cell in the disc.
#
# This is an origin-only raycast, not symmetric shadowcasting. A seeing B does
# not imply B sees A, and rays can slip diagonally between two walls that only
# touch at a corner. Both are kept as-is; callers that need symmetric sight
# (e.g. monster awareness) must test the reverse ray themselves.

from __future__ import annotations

import logging
from typing import AbstractSet, FrozenSet, Iterable, Iterator, Tuple

from .grid import Grid

log = logging.getLogger(__name__)

XY = Tuple[int, int]


class VisibilitySet(AbstractSet[XY]):
    """Immutable set of visible cells from one origin at one radius."""

    __slots__ = ("_cells", "origin", "radius")

    def __init__(self, cells: Iterable[XY], origin: XY, radius: int):
        self._cells: FrozenSet[XY] = frozenset(cells)
        self.origin = origin
        self.radius = radius

    def __contains__(self, item: object) -> bool:
        return item in self._cells

    def __iter__(self) -> Iterator[XY]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def visible(self, x: int, y: int) -> bool:
        return (x, y) in self._cells

    def __repr__(self) -> str:
        return f"VisibilitySet(origin={self.origin}, radius={self.radius}, cells={len(self._cells)})"


def bresenham(x0: int, y0: int, x1: int, y1: int) -> Iterator[XY]:
    """Cells stepped through from (x0,y0) to (x1,y1); the origin is not yielded."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy
    x, y = x0, y0
    while (x, y) != (x1, y1):
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        yield (x, y)


def has_line_of_sight(grid: Grid, x0: int, y0: int, x1: int, y1: int) -> bool:
    # The first opaque cell on the ray is itself visible (the wall face).
    for x, y in bresenham(x0, y0, x1, y1):
        if grid.blocks_sight(x, y):
            return (x, y) == (x1, y1)
    return True


def compute(grid: Grid, ox: int, oy: int, radius: int) -> VisibilitySet:
    if not grid.in_bounds(ox, oy):
        return VisibilitySet((), (ox, oy), radius)
    cells = {(ox, oy)}
    if radius > 0:
        r2 = radius * radius
        for y in range(oy - radius, oy + radius + 1):
            for x in range(ox - radius, ox + radius + 1):
                if not grid.in_bounds(x, y):
                    continue
                dx, dy = x - ox, y - oy
                if dx * dx + dy * dy > r2:
                    continue
                if has_line_of_sight(grid, ox, oy, x, y):
                    cells.add((x, y))
    return VisibilitySet(cells, (ox, oy), radius)


def update_visibility(grid: Grid, ox: int, oy: int, radius: int) -> VisibilitySet:
    """Recompute FOV and push it into the grid's visible-now / seen-ever maps."""
    vis = compute(grid, ox, oy, radius)
    grid.apply_visibility(vis)
    log.debug("fov origin=(%d,%d) r=%d visible=%d", ox, oy, radius, len(vis))
    return vis
