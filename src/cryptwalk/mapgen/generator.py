# src/cryptwalk/mapgen/generator.py
# Run-level entry points: one seeded RNG stream feeds every world of a run.

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..config import DEFAULT, GenConfig
from ..fov import VisibilitySet, update_visibility
from ..grid import Grid
from ..rng import PMRandom
from .building import BuildingCategory, Interior, build_interior
from .dungeon import Floor, generate_dungeon
from .town import BuildingLot, Town, generate_town

log = logging.getLogger(__name__)


@dataclass
class Run:
    """
    Owns the run's RNG and config. Worlds are produced in call order from the
    single stream, so the same seed plus the same sequence of calls rebuilds
    every floor, the town and every interior identically. Caching which
    floor was already built belongs to the caller.
    """
    seed: int
    rng: PMRandom
    config: GenConfig = field(default_factory=GenConfig)

    def floor(self, number: int = 1) -> Floor:
        cfg = self.config.dungeon
        t0 = time.perf_counter()
        fl = generate_dungeon(cfg.width, cfg.height, self.rng, cfg)
        log.debug("floor %d generated in %.1fms", number, (time.perf_counter() - t0) * 1000)
        if fl.used_fallback:
            log.info("floor %d used the two-room fallback", number)
        return fl

    def town(self) -> Town:
        cfg = self.config.town
        t0 = time.perf_counter()
        town = generate_town(cfg.width, cfg.height, self.rng, cfg)
        log.debug("town generated in %.1fms", (time.perf_counter() - t0) * 1000)
        for p in town.placements.skipped:
            log.info("town is missing %s", p.label)
        return town

    def interior(self, lot: BuildingLot) -> Grid:
        """Interior for a town lot, generated once and kept on the lot."""
        return lot.get_interior(self.rng, self.config.building)

    def building(self, category: BuildingCategory) -> Interior:
        it = build_interior(category, self.rng, self.config.building)
        if it.placements.skipped:
            log.info("%s interior: %d of %d room(s) placed",
                     category.value, len(it.grid.rooms), it.target_rooms)
        return it

    def random_floor_tile(self, grid: Grid) -> Tuple[int, int]:
        return grid.find_random_floor_tile(self.rng, self.config.floor_tile_tries)

    def look(self, grid: Grid, x: int, y: int) -> VisibilitySet:
        """Recompute what the player sees from (x, y) at the configured radius."""
        return update_visibility(grid, x, y, self.config.fov.radius)


def new_run(seed: int, config: Optional[GenConfig] = None) -> Run:
    cfg = config or DEFAULT
    log.debug("new run seed=%d", seed)
    return Run(seed, PMRandom.from_seed(seed), cfg)
