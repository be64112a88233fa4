import pytest

from cryptwalk.mapgen.building import (
    ROLE_FOR_CATEGORY, BuildingCategory, NpcRole, build_interior, generate_interior,
)
from cryptwalk.mapgen.connectivity import flood_fill
from cryptwalk.rng import PMRandom
from cryptwalk.tiles import Tile

SEEDS = range(1, 16)


def build(category, seed):
    return build_interior(category, PMRandom.from_seed(seed))


@pytest.mark.parametrize("category", list(BuildingCategory))
def test_door_start_and_reachability(category):
    for seed in SEEDS:
        it = build(category, seed)
        g = it.grid
        assert it.door[0] == 0
        assert g.tile(*it.door) is Tile.DOOR
        assert g.tile(*g.start) is Tile.FLOOR
        reach = flood_fill(g, g.start)
        assert it.door in reach
        for r in g.rooms:
            assert r.center in reach


@pytest.mark.parametrize("category", list(BuildingCategory))
def test_room_count_within_target(category):
    for seed in SEEDS:
        it = build(category, seed)
        assert 1 <= len(it.grid.rooms) <= it.target_rooms <= 3
        assert len(it.placements.entries) == it.target_rooms - 1
        assert len(it.placements.placed) == len(it.grid.rooms) - 1


@pytest.mark.parametrize("category", sorted(ROLE_FOR_CATEGORY, key=lambda c: c.value))
def test_service_buildings_get_one_npc(category):
    for seed in SEEDS:
        it = build(category, seed)
        g = it.grid
        assert len(g.npcs) == 1
        npc = it.npc
        assert npc.role is ROLE_FOR_CATEGORY[category]
        assert g.is_walkable(*npc.pos)
        assert npc.pos != g.start and npc.pos != it.door
        assert g.rooms[-1].contains(*npc.pos)


@pytest.mark.parametrize("category", [BuildingCategory.HOUSE, BuildingCategory.CRYPT,
                                      BuildingCategory.QUEST_HOUSE_1, BuildingCategory.QUEST_HOUSE_2])
def test_other_buildings_are_empty(category):
    for seed in SEEDS:
        assert build(category, seed).npc is None


def test_innkeeper_dialogue():
    it = build(BuildingCategory.INN, 4)
    assert it.npc.name == "Innkeeper"
    assert it.npc.dialogue() == list(NpcRole.INNKEEPER.lines)


def test_interiors_are_fully_lit():
    g = generate_interior(BuildingCategory.HOUSE, PMRandom.from_seed(2))
    assert not g.fog_enabled
    assert g.is_visible_now(g.width - 1, g.height - 1)


def test_same_seed_same_interior():
    a = generate_interior(BuildingCategory.MAGIC_SHOP, PMRandom.from_seed(77))
    b = generate_interior(BuildingCategory.MAGIC_SHOP, PMRandom.from_seed(77))
    assert a.fingerprint() == b.fingerprint()
