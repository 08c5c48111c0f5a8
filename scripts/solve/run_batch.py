from __future__ import annotations
import argparse, csv, os, time
from typing import Dict
from multiprocessing import Pool, cpu_count
from tqdm import tqdm

from sokoban_core.parser import parse_maze_file
from search.greedy import SolverConfig, solve
from heuristics.selector import HEURISTICS


def _run_one(args_tuple) -> Dict[str, object]:
    path, heur_name, max_iterations, time_limit = args_tuple
    maze = parse_maze_file(path)
    cfg = SolverConfig(max_iterations=max_iterations, heuristic=heur_name, time_limit_s=time_limit)
    res = solve(maze, cfg)
    return {
        "path": path,
        "heuristic": heur_name,
        "status": res.status.value,
        "nodes": res.nodes,
        "runtime": res.runtime,
        "moves": res.moves,
        "pushes": res.pushes,
    }


def main():
    p = argparse.ArgumentParser(description="Batch greedy solves → CSV (flags, parallel)")
    p.add_argument("--list", required=True, help="text file with one maze path per line")
    p.add_argument("--h", default="greedy", choices=list(HEURISTICS))
    p.add_argument("--out", default="results/batch.csv")
    p.add_argument("--max_iterations", type=int, default=100_000)
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--jobs", type=int, default=0, help="processes (0→cpu_count)")
    args = p.parse_args()

    os.makedirs(os.path.dirname(args.out) or ".", exist_ok=True)

    with open(args.list, "r", encoding="utf-8") as f:
        paths = [ln.strip() for ln in f if ln.strip() and not ln.strip().startswith("#")]

    jobs = args.jobs or cpu_count()
    payload = [(path, args.h, args.max_iterations, args.time_limit) for path in paths]

    started = time.time()
    if jobs == 1:
        rows = [_run_one(t) for t in tqdm(payload, desc="Solving", unit="maze")]
    else:
        with Pool(processes=jobs) as pool:
            rows = list(tqdm(pool.imap_unordered(_run_one, payload), total=len(payload), desc="Solving", unit="maze"))

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["path", "heuristic", "status", "nodes", "runtime", "moves", "pushes"])
        w.writeheader()
        for r in rows:
            w.writerow(r)

    print(f"done: {len(rows)} mazes → {args.out}; total_time={time.time()-started:.2f}s; jobs={jobs}")


if __name__ == "__main__":
    main()
