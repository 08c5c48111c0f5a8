from __future__ import annotations
import argparse, json, logging, os, random, time

from tqdm import tqdm

from generator.config import load_config
from generator.orchestrator import generate, generate_parallel
from generator.payload import build_payload
from sokoban_core.render import render_ascii


def main():
    p = argparse.ArgumentParser(description="Generate puzzles whose solver move count lies in a window")
    p.add_argument("--config", type=str, default=None, help="YAML config (e.g. configs/generate.yaml)")
    p.add_argument("--min_moves", type=int, default=None)
    p.add_argument("--max_moves", type=int, default=None)
    p.add_argument("--count", type=int, default=1, help="number of puzzles")
    p.add_argument("--seed", type=int, default=None, help="reproducible run (default: OS entropy)")
    p.add_argument("--jobs", type=int, default=1, help="parallel attempts per puzzle")
    p.add_argument("--out", type=str, default=None, help="write [time_limit_ms, grid] payloads as JSON")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    cfg = load_config(args.config)
    rng = random.Random(args.seed) if args.seed is not None else random.SystemRandom()

    started = time.time()
    payloads = []
    for _ in tqdm(range(args.count), desc="Generating", unit="puzzle", disable=args.count == 1):
        if args.jobs > 1:
            maze, moves = generate_parallel(args.min_moves, args.max_moves, jobs=args.jobs, config=cfg, rng=rng)
        else:
            maze, moves = generate(args.min_moves, args.max_moves, config=cfg, rng=rng)
        print(f"\n-- {moves} moves --\n{render_ascii(maze)}")
        payloads.append(build_payload(maze, moves, cfg))

    if args.out:
        os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(payloads, f)
        print(f"wrote {len(payloads)} puzzles → {args.out}")
    print(f"total_time={time.time()-started:.2f}s")


if __name__ == "__main__":
    main()
