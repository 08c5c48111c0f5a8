from __future__ import annotations
from multiprocessing import Pool
from typing import List, Optional, Sequence, Tuple
import itertools
import logging
import random

from search.greedy import SolveResult, solve
from sokoban_core.errors import FillError, GenerationError, TemplateNotFoundError
from sokoban_core.maze import Maze, Template
from .builder import build_maze
from .catalog import load_templates
from .config import AppConfig
from .filler import fill_maze

logger = logging.getLogger(__name__)

Generated = Tuple[Maze, int]


def run_attempt(
    templates: Sequence[Template],
    rng: random.Random,
    config: AppConfig,
) -> Tuple[Optional[Maze], Optional[SolveResult]]:
    """One build → fill → solve pass. (None, None) when the maze could not be built or filled."""
    try:
        maze = build_maze(templates, rng, config.generator)
        fill_maze(maze, rng, config.generator)
    except (TemplateNotFoundError, FillError) as e:
        logger.debug("attempt rejected: %s", e)
        return None, None
    return maze, solve(maze, config.solver)


def _window(config: AppConfig, min_moves: Optional[int], max_moves: Optional[int]) -> Tuple[int, int]:
    lo = config.generator.min_moves if min_moves is None else min_moves
    hi = config.generator.max_moves if max_moves is None else max_moves
    if lo > hi:
        raise ValueError(f"min_moves ({lo}) > max_moves ({hi})")
    return lo, hi


def _accepts(result: Optional[SolveResult], lo: int, hi: int) -> bool:
    return result is not None and result.success and lo <= result.moves <= hi


def generate(
    min_moves: Optional[int] = None,
    max_moves: Optional[int] = None,
    *,
    config: Optional[AppConfig] = None,
    rng: Optional[random.Random] = None,
    templates: Optional[Sequence[Template]] = None,
) -> Generated:
    """Builds puzzles until the solver's move count lands in [min_moves, max_moves].

    Every rejected attempt restarts from template selection. The count is the
    best plan the greedy solver found, an upper bound rather than the optimum.
    Raises GenerationError once `config.generator.max_attempts` attempts failed.
    """
    config = config or AppConfig()
    rng = rng or random.SystemRandom()
    lo, hi = _window(config, min_moves, max_moves)
    templates = templates or load_templates(config.generator.catalog)
    budget = config.generator.max_attempts

    attempts = itertools.count(1) if budget is None else range(1, budget + 1)
    for attempt in attempts:
        maze, result = run_attempt(templates, rng, config)
        if result is not None:
            logger.debug("attempt %d: %s, %d moves", attempt, result.status.value, result.moves)
        if maze is not None and _accepts(result, lo, hi):
            logger.info("accepted puzzle after %d attempts: %d moves", attempt, result.moves)
            return maze, result.moves
    raise GenerationError(f"no puzzle within {lo}..{hi} moves after {budget} attempts", attempts=budget)


# ---- parallel attempts

def _run_seeded(args_tuple) -> Tuple[Optional[Maze], Optional[SolveResult]]:
    seed, config = args_tuple
    templates = load_templates(config.generator.catalog)
    return run_attempt(templates, random.Random(seed), config)


def generate_parallel(
    min_moves: Optional[int] = None,
    max_moves: Optional[int] = None,
    *,
    jobs: int = 2,
    config: Optional[AppConfig] = None,
    rng: Optional[random.Random] = None,
) -> Generated:
    """Runs independent attempts in a process pool and keeps the first that fits.

    Attempts are dispatched in rounds of `4 * jobs` so an unbounded budget never
    queues unbounded work.
    """
    config = config or AppConfig()
    rng = rng or random.SystemRandom()
    lo, hi = _window(config, min_moves, max_moves)
    budget = config.generator.max_attempts
    round_size = 4 * jobs

    done = 0
    with Pool(processes=jobs) as pool:
        while budget is None or done < budget:
            n = round_size if budget is None else min(round_size, budget - done)
            payload: List[Tuple[int, AppConfig]] = [(rng.getrandbits(64), config) for _ in range(n)]
            for maze, result in pool.imap_unordered(_run_seeded, payload):
                done += 1
                if maze is not None and _accepts(result, lo, hi):
                    logger.info("accepted puzzle after %d attempts: %d moves", done, result.moves)
                    return maze, result.moves
    raise GenerationError(f"no puzzle within {lo}..{hi} moves after {budget} attempts", attempts=budget)
