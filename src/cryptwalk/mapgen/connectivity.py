"""Reachability helpers: BFS shortest paths, flood fill, nearest-cell search.

Paths use a same-shaped parent grid that doubles as the visited set; a path
is rebuilt by walking parents back from the goal and reversing.
"""
from __future__ import annotations

from collections import deque
from typing import Callable, Collection, Deque, List, Optional, Set, Tuple

from ..grid import Grid
from ..tiles import Tile

XY = Tuple[int, int]
Passable = Callable[[Grid, int, int], bool]

DIRS4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


def not_wall(grid: Grid, x: int, y: int) -> bool:
    return grid.in_bounds(x, y) and grid.tile(x, y) is not Tile.WALL


def walkable(grid: Grid, x: int, y: int) -> bool:
    return grid.is_walkable(x, y)


def bfs_path(grid: Grid, start: XY, goal: XY, passable: Passable = not_wall) -> Optional[List[XY]]:
    """Shortest 4-connected path start→goal (inclusive), or None."""
    sx, sy = start
    gx, gy = goal
    if not (grid.in_bounds(sx, sy) and grid.in_bounds(gx, gy)):
        return None
    w = grid.width
    parent: List[Optional[int]] = [None] * (w * grid.height)
    parent[sy * w + sx] = sy * w + sx
    q: Deque[XY] = deque([start])
    while q:
        x, y = q.popleft()
        if (x, y) == goal:
            break
        for dx, dy in DIRS4:
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny):
                continue
            i = ny * w + nx
            if parent[i] is not None:
                continue
            if not passable(grid, nx, ny):
                continue
            parent[i] = y * w + x
            q.append((nx, ny))

    gi = gy * w + gx
    if parent[gi] is None:
        return None
    path: List[XY] = []
    cur = gi
    si = sy * w + sx
    while cur != si:
        path.append((cur % w, cur // w))
        cur = parent[cur]
    path.append(start)
    path.reverse()
    return path


def flood_fill(grid: Grid, start: XY, passable: Passable = walkable) -> Set[XY]:
    """Every cell reachable from `start`; empty if `start` itself is blocked."""
    sx, sy = start
    if not passable(grid, sx, sy):
        return set()
    seen = {start}
    q: Deque[XY] = deque([start])
    while q:
        x, y = q.popleft()
        for dx, dy in DIRS4:
            n = (x + dx, y + dy)
            if n in seen or not passable(grid, n[0], n[1]):
                continue
            seen.add(n)
            q.append(n)
    return seen


def nearest_in(cells: Collection[XY], target: XY, limit: int) -> Optional[XY]:
    """Expanding square-ring search around `target` for a member of `cells`."""
    tx, ty = target
    if target in cells:
        return target
    for r in range(1, limit + 1):
        for dx in range(-r, r + 1):
            for c in ((tx + dx, ty - r), (tx + dx, ty + r)):
                if c in cells:
                    return c
        for dy in range(-r + 1, r):
            for c in ((tx - r, ty + dy), (tx + r, ty + dy)):
                if c in cells:
                    return c
    return None
