from __future__ import annotations
from typing import List, Tuple

import numpy as np
from scipy.optimize import linear_sum_assignment
from sokoban_core.state import State, iter_bits
from sokoban_core.deadlocks import blocked_sides

WALL_PENALTY = 0.5


# ---- helpers

def manhattan(a: Tuple[int, int], b: Tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _positions(mask: int, width: int) -> List[Tuple[int, int]]:
    return [(i % width, i // width) for i in iter_bits(mask)]


def maneuverability_cost(state: State, wall_penalty: float = WALL_PENALTY) -> float:
    """Penalty per blocked side of every box: boxes hugging walls are harder to steer."""
    if wall_penalty == 0:
        return 0.0
    sides = 0
    for b in iter_bits(state.boxes):
        sides += sum(blocked_sides(state, b))
    return sides * wall_penalty


# ---- classical heuristics

def h_zero(state: State) -> float:
    return 0.0


def h_greedy(state: State, wall_penalty: float = WALL_PENALTY) -> float:
    """Each box in turn takes its nearest still-unused goal (Manhattan distance).
    First come, first served: cheap but not an optimal assignment."""
    goals = _positions(state.goals, state.width)
    used = [False] * len(goals)
    total = 0.0
    for box in _positions(state.boxes, state.width):
        best = -1
        best_dist = 0
        for i, g in enumerate(goals):
            if used[i]:
                continue
            d = manhattan(box, g)
            if best == -1 or d < best_dist:
                best = i
                best_dist = d
        if best != -1:
            used[best] = True
            total += best_dist
    return total + maneuverability_cost(state, wall_penalty)


def h_hungarian(state: State, wall_penalty: float = WALL_PENALTY) -> float:
    """Cost = optimal matching of boxes → goals by Manhattan distance,
    plus the same maneuverability penalty as h_greedy."""
    boxes = _positions(state.boxes, state.width)
    goals = _positions(state.goals, state.width)
    n = min(len(boxes), len(goals))
    if n == 0:
        return maneuverability_cost(state, wall_penalty)
    boxes = boxes[:n]
    goals = goals[:n]

    C = np.empty((n, n), dtype=np.int32)
    for i, b in enumerate(boxes):
        for j, g in enumerate(goals):
            C[i, j] = manhattan(b, g)
    r, c = linear_sum_assignment(C)
    return float(C[r, c].sum()) + maneuverability_cost(state, wall_penalty)
