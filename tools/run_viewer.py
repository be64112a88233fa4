#!/usr/bin/env python3
# Minimal interactive viewer for generated worlds (no gameplay).
# - Arrow keys / WASD move the look origin; FOV is recomputed every step
# - Source cycle (dungeon floor -> town -> interiors): G
# - New floor from the same run: N
# - Fog on/off: F
# - 60 Hz fixed loop

import argparse, logging
import pygame

from cryptwalk.config import load_config
from cryptwalk.logging_config import setup_logging
from cryptwalk.mapgen.building import BuildingCategory
from cryptwalk.mapgen.generator import new_run

from render_grid import COLORS, NPC_COLOR

MOVES = {
    pygame.K_LEFT: (-1, 0), pygame.K_a: (-1, 0),
    pygame.K_RIGHT: (1, 0), pygame.K_d: (1, 0),
    pygame.K_UP: (0, -1), pygame.K_w: (0, -1),
    pygame.K_DOWN: (0, 1), pygame.K_s: (0, 1),
}

def dim(rgb, k=0.35):
    return tuple(int(c * k) for c in rgb)

def draw_world(screen, grid, tile, me):
    screen.fill((0, 0, 0))
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.is_visible_now(x, y):
                color = COLORS[grid.tile(x, y)]
            elif grid.was_seen_ever(x, y):
                color = dim(COLORS[grid.tile(x, y)])
            else:
                continue
            pygame.draw.rect(screen, color, pygame.Rect(x * tile, y * tile, tile, tile))
    for npc in grid.npcs:
        if grid.is_visible_now(npc.x, npc.y):
            pygame.draw.circle(screen, NPC_COLOR, (npc.x * tile + tile // 2, npc.y * tile + tile // 2), tile // 2 - 1)
    pygame.draw.rect(screen, (255, 60, 60), pygame.Rect(me[0] * tile, me[1] * tile, tile, tile))

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=1, help="Run seed")
    ap.add_argument("--tile", type=int, default=8, help="Tile size in pixels")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    run = new_run(args.seed, load_config())
    town = run.town()
    floor_no = 1
    floor = run.floor(floor_no)
    sources = ["dungeon", "town"] + [lot.category.value for lot in town.lots]
    source_mode = "dungeon"

    def load_grid():
        if source_mode == "dungeon":
            return floor.grid
        if source_mode == "town":
            return town.grid
        return run.interior(town.lot(BuildingCategory(source_mode)))

    pygame.init()
    clock = pygame.time.Clock()
    grid = load_grid()
    screen = pygame.display.set_mode((grid.width * args.tile, grid.height * args.tile))
    me = grid.start
    run.look(grid, *me)

    running = True
    while running:
        reload = False
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key in MOVES:
                    dx, dy = MOVES[ev.key]
                    if grid.is_walkable(me[0] + dx, me[1] + dy):
                        me = (me[0] + dx, me[1] + dy)
                        run.look(grid, *me)
                elif ev.key == pygame.K_g:
                    i = sources.index(source_mode)
                    source_mode = sources[(i + 1) % len(sources)]
                    reload = True
                elif ev.key == pygame.K_n:
                    floor_no += 1
                    floor = run.floor(floor_no)
                    source_mode = "dungeon"
                    reload = True
                elif ev.key == pygame.K_f:
                    grid.set_fog_enabled(not grid.fog_enabled)
                    run.look(grid, *me)

        if reload:
            grid = load_grid()
            screen = pygame.display.set_mode((grid.width * args.tile, grid.height * args.tile))
            me = grid.start
            run.look(grid, *me)

        draw_world(screen, grid, args.tile, me)
        label = f"floor {floor_no}" if source_mode == "dungeon" else source_mode
        pygame.display.set_caption(f"Cryptwalk Viewer - seed {args.seed}  {label}  fog:{grid.fog_enabled}")
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()

if __name__ == "__main__":
    main()
