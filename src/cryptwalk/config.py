import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from .errors import ConfigError

# Smallest dungeon that still holds two separated 1x1 rooms inside the outer wall.
MIN_DUNGEON_SIZE = 5


@dataclass(frozen=True)
class DungeonConfig:
    width: int = 120
    height: int = 76
    room_min: int = 5
    room_max: int = 11
    # Attempt budget, not a room-count target.
    max_rooms: int = 12


@dataclass(frozen=True)
class BuildingConfig:
    width: int = 21
    height: int = 15
    room_tries: int = 30
    npc_tries: int = 200


@dataclass(frozen=True)
class TownConfig:
    width: int = 60
    height: int = 38
    biased_tries: int = 1200
    brute_tries: int = 6000
    buffer: int = 2


@dataclass(frozen=True)
class FovConfig:
    radius: int = 10


@dataclass(frozen=True)
class GenConfig:
    dungeon: DungeonConfig = field(default_factory=DungeonConfig)
    building: BuildingConfig = field(default_factory=BuildingConfig)
    town: TownConfig = field(default_factory=TownConfig)
    fov: FovConfig = field(default_factory=FovConfig)
    floor_tile_tries: int = 10_000


# Defaults used when a caller passes no config.
DEFAULT = GenConfig()

ENV_PREFIX = "CRYPTWALK_"


def _coerce_int(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def _override_section(section: Any, name: str, env: Mapping[str, str]) -> Any:
    changes = {}
    for f in fields(section):
        key = f"{ENV_PREFIX}{name.upper()}_{f.name.upper()}"
        if key in env:
            changes[f.name] = _coerce_int(key, env[key])
    return replace(section, **changes) if changes else section


def load_config(env: Optional[Mapping[str, str]] = None, base: GenConfig = DEFAULT) -> GenConfig:
    """
    Apply CRYPTWALK_* environment overrides on top of `base`.

    Section fields map to CRYPTWALK_<SECTION>_<FIELD>, e.g.
    CRYPTWALK_DUNGEON_WIDTH=80 or CRYPTWALK_FOV_RADIUS=6. The floor sampling
    budget is CRYPTWALK_FLOOR_TILE_TRIES.
    """
    if env is None:
        env = os.environ
    sections = {}
    for name in ("dungeon", "building", "town", "fov"):
        sections[name] = _override_section(getattr(base, name), name, env)
    key = f"{ENV_PREFIX}FLOOR_TILE_TRIES"
    if key in env:
        sections["floor_tile_tries"] = _coerce_int(key, env[key])
    cfg = replace(base, **sections)
    validate(cfg)
    return cfg


def validate(cfg: GenConfig) -> None:
    d = cfg.dungeon
    if d.width < MIN_DUNGEON_SIZE or d.height < MIN_DUNGEON_SIZE:
        raise ConfigError(f"dungeon {d.width}x{d.height} is below {MIN_DUNGEON_SIZE}x{MIN_DUNGEON_SIZE}")
    if d.room_min < 1 or d.room_max < d.room_min:
        raise ConfigError(f"bad dungeon room size range {d.room_min}..{d.room_max}")
    if d.max_rooms < 0:
        raise ConfigError("dungeon max_rooms must be >= 0")
    if cfg.fov.radius < 0:
        raise ConfigError("fov radius must be >= 0")
    if cfg.floor_tile_tries < 1:
        raise ConfigError("floor_tile_tries must be >= 1")
    b = cfg.building
    if b.width < 12 or b.height < 9:
        raise ConfigError(f"building interior {b.width}x{b.height} is too small")
    t = cfg.town
    if t.width < 30 or t.height < 24:
        raise ConfigError(f"town {t.width}x{t.height} is too small")
