#!/usr/bin/env python3
import argparse, csv, logging, os
from cryptwalk.config import load_config
from cryptwalk.logging_config import setup_logging
from cryptwalk.mapgen.building import BuildingCategory
from cryptwalk.mapgen.generator import new_run

def write_tsv(rows, path):
    with open(path, 'w', newline='') as f:
        w = csv.writer(f, delimiter='\t')
        for r in rows:
            w.writerow(list(r))

def build_rows(args):
    run = new_run(args.seed, load_config())
    if args.kind == 'dungeon':
        for _ in range(args.floor - 1):
            run.floor()
        return run.floor(args.floor).grid.rows()
    if args.kind == 'town':
        return run.town().grid.rows()
    return run.building(BuildingCategory(args.category)).grid.rows()

def cmd_emit(args):
    rows = build_rows(args)
    if args.out == '-':
        for r in rows:
            print(r)
        return
    write_tsv(rows, args.out)
    print(f"Wrote {args.out}")

def cmd_golden(args):
    base = os.path.join(args.outdir, str(args.seed))
    os.makedirs(base, exist_ok=True)
    run = new_run(args.seed, load_config())
    for n in range(1, args.floors + 1):
        path = os.path.join(base, f"floor_{n:02d}.tsv")
        write_tsv(run.floor(n).grid.rows(), path)
    write_tsv(run.town().grid.rows(), os.path.join(base, "town.tsv"))
    print(f"Wrote golden pack to {base}")

def main():
    p = argparse.ArgumentParser()
    p.add_argument('-v', '--verbose', action='store_true')
    sub = p.add_subparsers(dest='cmd', required=True)
    p1 = sub.add_parser('emit')
    p1.add_argument('--seed', type=int, required=True)
    p1.add_argument('--kind', choices=['dungeon', 'town', 'interior'], default='dungeon')
    p1.add_argument('--floor', type=int, default=1)
    p1.add_argument('--category', choices=[c.value for c in BuildingCategory], default='inn')
    p1.add_argument('--out', type=str, default='-')
    p1.set_defaults(func=cmd_emit)
    p2 = sub.add_parser('golden')
    p2.add_argument('--seed', type=int, required=True)
    p2.add_argument('--floors', type=int, default=5)
    p2.add_argument('--outdir', type=str, required=True)
    p2.set_defaults(func=cmd_golden)
    args = p.parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)
    args.func(args)

if __name__ == '__main__':
    main()
