from cryptwalk.config import DungeonConfig, GenConfig
from cryptwalk.fov import VisibilitySet
from cryptwalk.mapgen.building import BuildingCategory
from cryptwalk.mapgen.generator import new_run
from cryptwalk.tiles import Tile


def world_prints(seed):
    run = new_run(seed)
    prints = [run.floor(n).grid.fingerprint() for n in (1, 2, 3)]
    town = run.town()
    prints.append(town.grid.fingerprint())
    prints.append(run.interior(town.lot(BuildingCategory.WEAPON_SHOP)).fingerprint())
    prints.append(run.building(BuildingCategory.HOUSE).grid.fingerprint())
    return prints


def test_same_seed_same_worlds():
    assert world_prints(1337) == world_prints(1337)


def test_different_seeds_differ():
    a, b = world_prints(1), world_prints(2)
    assert a[0] != b[0]


def test_floors_of_a_run_differ():
    prints = world_prints(8)
    assert len(set(prints[:3])) == 3


def test_random_floor_tile_and_look():
    run = new_run(21)
    fl = run.floor()
    x, y = run.random_floor_tile(fl.grid)
    assert fl.grid.tile(x, y) is Tile.FLOOR
    vis = run.look(fl.grid, *fl.start)
    assert isinstance(vis, VisibilitySet)
    assert fl.start in vis
    assert vis.radius == run.config.fov.radius
    assert fl.grid.is_visible_now(*fl.start)


def test_run_uses_its_config():
    cfg = GenConfig(dungeon=DungeonConfig(width=40, height=30, max_rooms=6))
    fl = new_run(3, cfg).floor()
    assert (fl.grid.width, fl.grid.height) == (40, 30)
