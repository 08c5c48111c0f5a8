import random

import pytest

from sokoban_core.cell import Element, Tile, get_element, get_tile, is_walkable, next_position
from sokoban_core.errors import FillError
from sokoban_core.maze import count_walkable, find_elements
from sokoban_core.parser import parse_maze_str
from sokoban_core.render import render_ascii
from generator.builder import build_maze
from generator.catalog import load_templates
from generator.config import GeneratorConfig
from generator.filler import add_elements, fill_maze, reverse_step, scramble

ROOM = """
##########
#--------#
#--------#
#---##---#
#--------#
#--------#
##########
"""


def _elements_on_walkable(maze):
    return all(get_element(c) == Element.NONE or is_walkable(c) for row in maze for c in row)


def test_add_elements_solved_layout():
    maze = parse_maze_str(ROOM)
    walkable = count_walkable(maze)
    (player, facing), goals = add_elements(maze, random.Random(3))

    expected = 1 + walkable // 20
    assert len(goals) == expected == len(set(goals))
    p, boxes, goal_cells = find_elements(maze)
    assert p == player
    assert sorted(boxes) == sorted(goals) == sorted(goal_cells)
    # facing the anchor box
    assert next_position(player, facing) in goals
    assert _elements_on_walkable(maze)


def test_add_elements_too_small():
    with pytest.raises(FillError):
        add_elements(parse_maze_str("###\n#-#\n###"), random.Random(0))


def test_reverse_step_drags_box():
    maze = parse_maze_str("######\n#--@$#\n######")
    pos, d = reverse_step(maze, ((3, 1), (1, 0)), random.Random(0))
    assert pos == (2, 1)
    assert d == (1, 0)
    assert render_ascii(maze) == "######\n#-@$-#\n######"


def test_reverse_step_undoes_trapping_drag():
    maze = parse_maze_str("#####\n#-@$#\n#####")
    pos, _ = reverse_step(maze, ((2, 1), (1, 0)), random.Random(0))
    assert pos == (1, 1)
    assert render_ascii(maze) == "#####\n#@-$#\n#####"


def test_reverse_step_stuck_player():
    with pytest.raises(FillError):
        reverse_step(parse_maze_str("###\n#@#\n###"), ((1, 1), (0, 1)), random.Random(0))


def test_scramble_preserves_counts():
    maze = parse_maze_str(ROOM)
    rng = random.Random(11)
    player, goals = add_elements(maze, rng)
    cfg = GeneratorConfig(batch_min=20, batch_max=40, batch_max_count=10)
    scramble(maze, player, goals, rng, cfg)

    p, boxes, goal_cells = find_elements(maze)
    assert p is not None
    assert len(boxes) == len(goal_cells) == len(goals)
    assert sum(1 for row in maze for c in row if get_element(c) == Element.PLAYER) == 1
    assert all(get_tile(maze[y][x]) == Tile.GOAL for x, y in goals)
    assert _elements_on_walkable(maze)


def test_fill_generated_maze():
    templates = load_templates()
    rng = random.Random(2024)
    filled = 0
    while filled < 5:
        maze = build_maze(templates, rng)
        walkable = count_walkable(maze)
        try:
            fill_maze(maze, rng, GeneratorConfig(batch_max_count=5))
        except FillError:
            continue
        filled += 1
        p, boxes, goals = find_elements(maze)
        assert p is not None
        assert len(boxes) == len(goals) == 1 + walkable // 20
        assert all(len(row) == len(maze[0]) for row in maze)
