import itertools

import pytest

from cryptwalk.config import DungeonConfig
from cryptwalk.errors import GenerationError
from cryptwalk.mapgen.connectivity import flood_fill
from cryptwalk.mapgen.dungeon import MIN_SIZE, generate_dungeon
from cryptwalk.rect import Rect
from cryptwalk.rng import PMRandom
from cryptwalk.tiles import Tile

SEEDS = [1, 2, 3, 17, 99, 2024, 31337]


def gen(seed, w=120, h=76, **kw):
    return generate_dungeon(w, h, PMRandom.from_seed(seed), DungeonConfig(width=w, height=h, **kw))


@pytest.mark.parametrize("seed", SEEDS)
def test_rooms_keep_a_gap(seed):
    fl = gen(seed)
    assert len(fl.rooms) >= 2
    for a, b in itertools.combinations(fl.rooms, 2):
        assert not a.intersects(b.expand(1))


@pytest.mark.parametrize("seed", SEEDS)
def test_start_and_exit(seed):
    grid, start, exit_ = gen(seed)
    assert grid.tile(*start) is Tile.FLOOR
    assert grid.tile(*exit_) is Tile.STAIRS_DOWN
    assert grid.start == start and grid.exit == exit_
    assert start != exit_
    assert grid.rooms[0].contains(*start)
    assert grid.rooms[-1].contains(*exit_)


@pytest.mark.parametrize("seed", SEEDS)
def test_every_room_reachable(seed):
    fl = gen(seed)
    reach = flood_fill(fl.grid, fl.start)
    assert fl.exit in reach
    for r in fl.rooms:
        assert r.center in reach


@pytest.mark.parametrize("seed", SEEDS[:3])
def test_outer_ring_stays_solid(seed):
    g = gen(seed).grid
    for x in range(g.width):
        assert g.tile(x, 0) is Tile.WALL and g.tile(x, g.height - 1) is Tile.WALL
    for y in range(g.height):
        assert g.tile(0, y) is Tile.WALL and g.tile(g.width - 1, y) is Tile.WALL


def test_fog_starts_dark():
    g = gen(5).grid
    assert g.fog_enabled
    assert not g.is_visible_now(*g.start)
    assert not g.was_seen_ever(*g.start)


@pytest.mark.parametrize("max_rooms", [0, 1])
def test_fallback_layout(max_rooms):
    fl = gen(3, max_rooms=max_rooms)
    assert fl.used_fallback
    assert fl.rooms == [Rect(3, 3, 8, 8), Rect(108, 64, 8, 8)]
    assert fl.exit in flood_fill(fl.grid, fl.start)
    # Nothing outside the two rooms and their corridor.
    assert len(list(fl.grid.cells_of(Tile.FLOOR, Tile.STAIRS_DOWN))) < 8 * 8 * 2 + 120 + 76


def test_fallback_on_minimum_size():
    fl = gen(8, w=MIN_SIZE, h=MIN_SIZE, max_rooms=0)
    a, b = fl.rooms
    assert not a.intersects(b.expand(1))
    assert fl.exit in flood_fill(fl.grid, fl.start)


def test_too_small_raises():
    with pytest.raises(GenerationError):
        generate_dungeon(MIN_SIZE - 1, 40, PMRandom.from_seed(1))


def test_placement_log_counts_every_attempt():
    fl = gen(11, max_rooms=20)
    assert len(fl.placements.entries) == 20
    if not fl.used_fallback:
        assert len(fl.placements.placed) == len(fl.rooms)


@pytest.mark.parametrize("size", [(5, 5), (9, 7), (12, 30), (20, 20), (20, 76), (23, 40)])
def test_small_dungeons_degrade_to_fallback(size):
    w, h = size
    for seed in SEEDS[:4]:
        fl = gen(seed, w=w, h=h)
        assert len(fl.rooms) >= 2
        for a, b in itertools.combinations(fl.rooms, 2):
            assert not a.intersects(b.expand(1))
        assert fl.grid.tile(*fl.start) is Tile.FLOOR
        assert fl.exit in flood_fill(fl.grid, fl.start)
        for x in range(w):
            assert fl.grid.tile(x, 0) is Tile.WALL and fl.grid.tile(x, h - 1) is Tile.WALL


def test_tiny_dungeon_uses_shrunken_fallback():
    fl = gen(2, w=5, h=5)
    assert fl.used_fallback
    assert fl.rooms == [Rect(1, 1, 1, 1), Rect(3, 3, 1, 1)]
