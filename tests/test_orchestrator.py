import random

import pytest

from sokoban_core.cell import Element, get_element
from sokoban_core.errors import GenerationError
from sokoban_core.maze import find_elements, is_rectangular
from search.greedy import SolverConfig, solve
from generator.config import AppConfig, GeneratorConfig
from generator.orchestrator import generate, generate_parallel


def _fast_config(**generator):
    return AppConfig(
        generator=GeneratorConfig(**generator),
        solver=SolverConfig(max_iterations=5_000),
    )


def test_generate_wide_window():
    cfg = _fast_config(max_attempts=None)
    maze, moves = generate(0, 1_000_000, config=cfg, rng=random.Random(3))
    assert 0 <= moves <= 1_000_000
    assert is_rectangular(maze)

    player, boxes, goals = find_elements(maze)
    assert player is not None
    assert len(boxes) == len(goals) > 0
    assert sum(1 for row in maze for c in row if get_element(c) == Element.PLAYER) == 1

    # re-solving the identical puzzle never does worse
    again = solve(maze, cfg.solver)
    assert again.success
    assert again.moves <= moves


def test_generate_attempt_budget():
    cfg = AppConfig(
        generator=GeneratorConfig(max_attempts=2),
        solver=SolverConfig(max_iterations=50),
    )
    with pytest.raises(GenerationError) as exc:
        generate(10 ** 9, 10 ** 9, config=cfg, rng=random.Random(0))
    assert exc.value.attempts == 2


def test_generate_rejects_inverted_window():
    with pytest.raises(ValueError):
        generate(5, 4)


def test_generate_parallel_wide_window():
    cfg = _fast_config(max_attempts=None)
    maze, moves = generate_parallel(0, 1_000_000, jobs=2, config=cfg, rng=random.Random(9))
    assert 0 <= moves <= 1_000_000
    assert solve(maze, cfg.solver).moves <= moves
