# src/cryptwalk/tiles.py
# Canonical tile kinds shared by dungeons, the town and building interiors.

from enum import Enum


class Tile(Enum):
    # glyph, walkable, opaque
    WALL = ("#", False, True)
    FLOOR = (".", True, False)
    STAIRS_UP = ("<", True, False)
    STAIRS_DOWN = (">", True, False)
    DOOR = ("D", True, False)
    LOCKED_DOOR = ("+", False, False)
    CRYPT_DOOR = ("C", True, False)
    KEY = ("k", True, False)
    TOWN_PORTAL = ("O", True, False)
    GRASS = (",", True, False)
    PATH = (":", True, False)

    def __init__(self, glyph: str, walkable: bool, opaque: bool):
        self.glyph = glyph
        self.walkable = walkable
        self.opaque = opaque


DOOR_TILES = frozenset({Tile.DOOR, Tile.LOCKED_DOOR, Tile.CRYPT_DOOR})

_BY_GLYPH = {t.glyph: t for t in Tile}


def is_walkable(tile: Tile) -> bool:
    return tile.walkable


def blocks_sight(tile: Tile) -> bool:
    # Only WALL is opaque; locked doors stop movement but not sight.
    return tile.opaque


def is_door(tile: Tile) -> bool:
    return tile in DOOR_TILES


def tile_from_glyph(ch: str) -> Tile:
    try:
        return _BY_GLYPH[ch]
    except KeyError:
        raise ValueError(f"unknown tile glyph {ch!r}") from None
