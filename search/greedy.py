from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Set, Tuple
import logging
import time

from sokoban_core.deadlocks import has_deadlock
from sokoban_core.maze import Maze
from sokoban_core.moves import successors_steps
from sokoban_core.state import State, state_from_maze, state_key
from sokoban_core.errors import ConfigError
from heuristics.selector import HEURISTICS, get_heuristic
from .priority_queue import PriorityQueue

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Search knobs. The caps are safety valves: hitting them can cost the
    solution or its quality, never correctness of a reported plan."""
    max_iterations: int = 100_000
    open_limit: int = 10_000
    open_keep: int = 5_000
    push_weight: float = 2.0
    wall_penalty: float = 0.5
    heuristic: str = "greedy"
    time_limit_s: Optional[float] = None

    def validate(self) -> None:
        if self.max_iterations < 1:
            raise ConfigError("max_iterations must be >= 1")
        if not 1 <= self.open_keep <= self.open_limit:
            raise ConfigError(f"need 1 <= open_keep ({self.open_keep}) <= open_limit ({self.open_limit})")
        if self.push_weight < 0 or self.wall_penalty < 0:
            raise ConfigError("push_weight and wall_penalty must be >= 0")
        if self.heuristic.lower() not in HEURISTICS:
            raise ConfigError(f"unknown heuristic: {self.heuristic}")
        if self.time_limit_s is not None and self.time_limit_s <= 0:
            raise ConfigError("time_limit_s must be > 0 or null")


class SolveStatus(str, Enum):
    SOLVED = "solved"
    NO_PLAYER = "no_player"
    NO_GOALS = "no_goals"
    BOX_GOAL_MISMATCH = "box_goal_mismatch"
    DEADLOCKED = "deadlocked"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SolveResult:
    """Outcome of a search. `moves` is the shortest plan found (an upper bound on
    the optimum, the search is greedy), or -1 when nothing was found."""
    status: SolveStatus
    moves: int = -1
    pushes: int = -1
    nodes: int = 0
    runtime: float = 0.0

    @property
    def success(self) -> bool:
        return self.status is SolveStatus.SOLVED


Node = Tuple[State, int, int]  # (state, moves, pushes)


def greedy_best_first(
    start: State,
    h_fn: Callable[[State], float],
    config: SolverConfig,
) -> SolveResult:
    """Best-first search ordered by h + push_weight * pushes.

    A win does not stop the search: it becomes the bound and the frontier is
    drained looking for a shorter plan, pruning anything at least as long.
    """
    t0 = time.time()
    openq = PriorityQueue()
    closed: Set[str] = set()
    openq.push(h_fn(start), (start, 0, 0))

    best_moves: Optional[int] = None
    best_pushes = -1
    expanded = 0

    while len(openq) > 0 and expanded < config.max_iterations:
        if config.time_limit_s is not None and (time.time() - t0) > config.time_limit_s:
            break
        expanded += 1
        s, moves, pushes = openq.pop()

        key = state_key(s)
        if key in closed:
            continue
        closed.add(key)

        if s.is_solved():
            if best_moves is None or moves < best_moves:
                best_moves = moves
                best_pushes = pushes
            continue

        if best_moves is not None and moves >= best_moves:
            continue
        if has_deadlock(s):
            continue

        for ns, pushed in successors_steps(s):
            if state_key(ns) in closed:
                continue
            npushes = pushes + (1 if pushed else 0)
            openq.push(h_fn(ns) + config.push_weight * npushes, (ns, moves + 1, npushes))

        if len(openq) > config.open_limit:
            openq.trim(config.open_keep)

    runtime = time.time() - t0
    if best_moves is None:
        return SolveResult(SolveStatus.EXHAUSTED, nodes=expanded, runtime=runtime)
    return SolveResult(SolveStatus.SOLVED, moves=best_moves, pushes=best_pushes,
                       nodes=expanded, runtime=runtime)


def solve(maze: Maze, config: Optional[SolverConfig] = None) -> SolveResult:
    """Validates a filled maze and searches it. Never mutates `maze`."""
    config = config or SolverConfig()
    start, n_boxes, n_goals = state_from_maze(maze)

    if start is None:
        logger.warning("No player found in maze")
        return SolveResult(SolveStatus.NO_PLAYER)
    if n_boxes == 0:
        return SolveResult(SolveStatus.SOLVED, moves=0, pushes=0)
    if n_goals == 0:
        logger.warning("No goals found in maze")
        return SolveResult(SolveStatus.NO_GOALS)
    if n_boxes != n_goals:
        logger.warning("Number of boxes (%d) does not match number of goals (%d)", n_boxes, n_goals)
        return SolveResult(SolveStatus.BOX_GOAL_MISMATCH)
    if has_deadlock(start):
        logger.debug("Initial state is in deadlock")
        return SolveResult(SolveStatus.DEADLOCKED)
    if start.is_solved():
        return SolveResult(SolveStatus.SOLVED, moves=0, pushes=0)

    h_fn = get_heuristic(config.heuristic, config.wall_penalty)
    return greedy_best_first(start, h_fn, config)


def solve_maze(maze: Maze, config: Optional[SolverConfig] = None) -> int:
    """Move count of the best plan found, -1 on any failure."""
    return solve(maze, config).moves
