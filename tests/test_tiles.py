import pytest

from cryptwalk.tiles import Tile, blocks_sight, is_door, is_walkable, tile_from_glyph


def test_only_wall_blocks_sight():
    assert [t for t in Tile if blocks_sight(t)] == [Tile.WALL]


def test_walkability():
    assert not is_walkable(Tile.WALL)
    assert not is_walkable(Tile.LOCKED_DOOR)
    for t in (Tile.FLOOR, Tile.DOOR, Tile.CRYPT_DOOR, Tile.GRASS, Tile.PATH, Tile.STAIRS_DOWN):
        assert is_walkable(t)


def test_doors():
    assert is_door(Tile.DOOR) and is_door(Tile.LOCKED_DOOR) and is_door(Tile.CRYPT_DOOR)
    assert not is_door(Tile.FLOOR)


def test_glyphs_round_trip_and_are_unique():
    assert len({t.glyph for t in Tile}) == len(Tile)
    for t in Tile:
        assert tile_from_glyph(t.glyph) is t
    with pytest.raises(ValueError):
        tile_from_glyph("?")
