#!/usr/bin/env python3
# Render generated worlds (or glyph TSVs written by cwtool) to PNGs using Pillow.

import argparse, csv, os
from PIL import Image, ImageDraw

from cryptwalk.grid import Grid
from cryptwalk.mapgen.building import BuildingCategory
from cryptwalk.mapgen.generator import new_run
from cryptwalk.tiles import Tile

COLORS = {
    Tile.WALL: (60, 60, 70),
    Tile.FLOOR: (200, 190, 170),
    Tile.STAIRS_UP: (120, 200, 255),
    Tile.STAIRS_DOWN: (255, 220, 0),
    Tile.DOOR: (150, 90, 40),
    Tile.LOCKED_DOOR: (200, 40, 40),
    Tile.CRYPT_DOOR: (140, 60, 200),
    Tile.KEY: (255, 255, 120),
    Tile.TOWN_PORTAL: (80, 160, 255),
    Tile.GRASS: (70, 150, 60),
    Tile.PATH: (190, 160, 110),
}
NPC_COLOR = (240, 240, 255)

def read_tsv(path):
    with open(path, encoding="utf-8", newline="") as f:
        rows = ["".join(r) for r in csv.reader(f, delimiter="\t") if r]
    return Grid.from_rows(rows)

def render_grid(grid, out_png, tile_size=8, margin=0):
    w = grid.width * tile_size + 2 * margin
    h = grid.height * tile_size + 2 * margin
    canvas = Image.new("RGB", (w, h), (0, 0, 0))
    draw = ImageDraw.Draw(canvas)
    for y in range(grid.height):
        for x in range(grid.width):
            x0 = margin + x * tile_size
            y0 = margin + y * tile_size
            draw.rectangle((x0, y0, x0 + tile_size - 1, y0 + tile_size - 1), fill=COLORS[grid.tile(x, y)])
    for npc in grid.npcs:
        x0 = margin + npc.x * tile_size
        y0 = margin + npc.y * tile_size
        draw.ellipse((x0 + 1, y0 + 1, x0 + tile_size - 2, y0 + tile_size - 2), fill=NPC_COLOR)
    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    canvas.save(out_png)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, help="Generate a run from this seed")
    ap.add_argument("--floors", type=int, default=3, help="Dungeon floors to render")
    ap.add_argument("--tsv", type=str, help="Render a single glyph TSV instead")
    ap.add_argument("--outdir", type=str, default="out/png", help="Where to write PNGs")
    ap.add_argument("--tile", type=int, default=8, help="Tile size in pixels")
    args = ap.parse_args()

    if args.tsv:
        name = os.path.splitext(os.path.basename(args.tsv))[0]
        render_grid(read_tsv(args.tsv), os.path.join(args.outdir, f"{name}.png"), args.tile)
        print(f"Wrote {name}.png to {args.outdir}")
        return
    if args.seed is None:
        raise SystemExit("need --seed or --tsv")

    run = new_run(args.seed)
    base = os.path.join(args.outdir, str(args.seed))
    for n in range(1, args.floors + 1):
        render_grid(run.floor(n).grid, os.path.join(base, f"floor_{n:02d}.png"), args.tile)
    town = run.town()
    render_grid(town.grid, os.path.join(base, "town.png"), args.tile)
    for lot in town.lots:
        render_grid(run.interior(lot), os.path.join(base, f"{lot.category.value}.png"), args.tile * 2)
    render_grid(run.building(BuildingCategory.HOUSE).grid, os.path.join(base, "house.png"), args.tile * 2)
    print(f"Wrote PNGs to {base}")

if __name__ == "__main__":
    main()
