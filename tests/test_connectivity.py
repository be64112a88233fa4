from cryptwalk.grid import Grid
from cryptwalk.mapgen.connectivity import bfs_path, flood_fill, nearest_in

MAZE = [
    "#######",
    "#..#..#",
    "#.##..#",
    "#.....#",
    "###+###",
    "#.....#",
    "#######",
]


def test_bfs_shortest_path():
    g = Grid.from_rows(MAZE)
    path = bfs_path(g, (1, 1), (5, 1))
    assert path[0] == (1, 1) and path[-1] == (5, 1)
    assert len(path) == 9
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        assert abs(ax - bx) + abs(ay - by) == 1


def test_bfs_no_path_and_out_of_bounds():
    g = Grid.from_rows(MAZE)
    assert bfs_path(g, (1, 1), (0, 0)) is None
    assert bfs_path(g, (1, 1), (-3, 2)) is None
    assert bfs_path(g, (2, 1), (2, 1)) == [(2, 1)]


def test_flood_stops_at_locked_door():
    g = Grid.from_rows(MAZE)
    reach = flood_fill(g, (1, 1))
    assert (5, 3) in reach
    assert (3, 4) not in reach
    assert (1, 5) not in reach
    assert flood_fill(g, (0, 0)) == set()


def test_nearest_in_ring_search():
    cells = {(10, 10), (3, 4)}
    assert nearest_in(cells, (3, 4), 5) == (3, 4)
    assert nearest_in(cells, (5, 5), 5) == (3, 4)
    assert nearest_in(cells, (30, 30), 3) is None
