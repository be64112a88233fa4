from cryptwalk.fov import bresenham, compute, has_line_of_sight, update_visibility
from cryptwalk.grid import Grid
from cryptwalk.mapgen.carve import carve_room
from cryptwalk.rect import Rect
from cryptwalk.tiles import Tile


def corridor():
    g = Grid.filled(12, 3)
    carve_room(g, Rect(1, 1, 10, 1))
    return g


def open_room():
    g = Grid.filled(21, 21)
    carve_room(g, Rect(1, 1, 19, 19))
    return g


def test_bresenham_skips_origin_ends_on_target():
    pts = list(bresenham(0, 0, 3, 1))
    assert pts[-1] == (3, 1)
    assert (0, 0) not in pts
    assert len(pts) == 3


def test_origin_always_visible():
    g = Grid.filled(5, 5)
    vis = compute(g, 2, 2, 4)
    assert vis.visible(2, 2)
    assert compute(g, 2, 2, 0) == {(2, 2)}


def test_out_of_bounds_origin_sees_nothing():
    assert len(compute(corridor(), -1, 1, 5)) == 0


def test_corridor_fully_visible():
    g = corridor()
    vis = compute(g, 1, 1, 10)
    for x in range(1, 11):
        assert (x, 1) in vis


def test_wall_face_visible_but_not_beyond():
    g = open_room()
    g.set_tile(10, 5, Tile.WALL)
    assert has_line_of_sight(g, 10, 10, 10, 5)
    assert not has_line_of_sight(g, 10, 10, 10, 3)


def test_smaller_radius_is_subset():
    g = open_room()
    g.set_tile(12, 10, Tile.WALL)
    small = compute(g, 10, 10, 3)
    big = compute(g, 10, 10, 6)
    assert small <= big
    for x, y in big:
        assert (x - 10) ** 2 + (y - 10) ** 2 <= 36


def test_seen_ever_only_grows():
    g = corridor()
    first = update_visibility(g, 1, 1, 3)
    update_visibility(g, 10, 1, 3)
    for x, y in first:
        assert g.was_seen_ever(x, y)
    assert not g.is_visible_now(1, 1)
    assert g.is_visible_now(10, 1)


def test_negative_radius_sees_only_origin():
    g = open_room()
    assert compute(g, 2, 2, -3) == {(2, 2)}


def test_seen_ever_covers_visible_now_everywhere():
    g = open_room()
    g.set_tile(10, 10, Tile.WALL)
    for ox, oy in [(1, 1), (10, 4), (18, 18), (3, 15), (10, 12)]:
        update_visibility(g, ox, oy, 6)
        for y in range(g.height):
            for x in range(g.width):
                if g.is_visible_now(x, y):
                    assert g.was_seen_ever(x, y)
