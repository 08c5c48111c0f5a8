from __future__ import annotations
from typing import Any, List
import json

from sokoban_core.maze import Maze
from .config import AppConfig


def time_to_solve_ms(moves: int, config: AppConfig) -> int:
    """Time limit handed to players. Flat for now; `moves` is kept so the
    limit can scale with difficulty without changing callers."""
    return config.time_to_solve_s * 1000


def build_payload(maze: Maze, moves: int, config: AppConfig) -> List[Any]:
    """[time_limit_ms, grid] as consumed by the publishing side."""
    return [time_to_solve_ms(moves, config), maze]


def dumps_payload(maze: Maze, moves: int, config: AppConfig) -> str:
    return json.dumps(build_payload(maze, moves, config), separators=(",", ":"))
