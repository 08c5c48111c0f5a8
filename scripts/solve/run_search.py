from __future__ import annotations
import argparse
import logging

from sokoban_core.parser import parse_maze_file
from sokoban_core.render import render_ascii
from search.greedy import SolverConfig, solve
from heuristics.selector import HEURISTICS

def main():
    p = argparse.ArgumentParser(description="Solve one ASCII maze with greedy best-first search")
    p.add_argument("path", help="ASCII level file ('#', '-', '.', '$', '*', '@', '+', space = void)")
    p.add_argument("--h", type=str, default="greedy", choices=list(HEURISTICS), help="heuristic")
    p.add_argument("--max_iterations", type=int, default=100_000)
    p.add_argument("--time_limit", type=float, default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    maze = parse_maze_file(args.path)
    print(render_ascii(maze))
    cfg = SolverConfig(max_iterations=args.max_iterations, heuristic=args.h, time_limit_s=args.time_limit)
    res = solve(maze, cfg)
    print("Result:", {
        "status": res.status.value,
        "moves": res.moves,
        "pushes": res.pushes,
        "nodes": res.nodes,
        "runtime": round(res.runtime, 3),
    })

if __name__ == "__main__":
    main()
