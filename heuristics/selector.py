from __future__ import annotations
from typing import Callable

from sokoban_core.state import State
from heuristics.classic import WALL_PENALTY, h_zero, h_greedy, h_hungarian

HEURISTICS = ("greedy", "hungarian", "zero")


def get_heuristic(name: str, wall_penalty: float = WALL_PENALTY) -> Callable[[State], float]:
    name = name.lower()
    if name == "zero":
        return h_zero
    if name == "greedy":
        return lambda s: h_greedy(s, wall_penalty)
    if name == "hungarian":
        return lambda s: h_hungarian(s, wall_penalty)
    raise ValueError(f"unknown heuristic: {name}")
