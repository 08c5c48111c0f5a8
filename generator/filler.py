from __future__ import annotations
from typing import List, Optional, Tuple
import logging
import random

from sokoban_core.cell import (
    DIRECTIONS,
    Direction,
    Element,
    Position,
    Tile,
    direction_between,
    get_tile,
    next_position,
)
from sokoban_core.errors import FillError
from sokoban_core.maze import (
    Maze,
    count_walkable,
    dims,
    has_box,
    is_valid_walkable_position,
    swap_elements,
)
from .config import GeneratorConfig

logger = logging.getLogger(__name__)

PlayerVector = Tuple[Position, Direction]


def free_neighbors(maze: Maze, pos: Position) -> List[Position]:
    """Walkable, unoccupied orthogonal neighbors in up/down/left/right order."""
    out = []
    for d in DIRECTIONS:
        target = next_position(pos, d)
        if is_valid_walkable_position(maze, target, True):
            out.append(target)
    return out


def box_count_for(walkable: int, ratio: float) -> int:
    return 1 + int(walkable * ratio)


def add_elements(maze: Maze, rng: random.Random, ratio: float = 1 / 20) -> Tuple[PlayerVector, List[Position]]:
    """Lays out the *solved* puzzle: every box on its own goal, the player next to one of them.

    Returns the player vector (position, facing) and the goal cells.
    """
    width, height = dims(maze)
    walkable = count_walkable(maze)
    box_count = box_count_for(walkable, ratio)
    if walkable < box_count + 1:
        raise FillError(f"{walkable} walkable cells cannot hold {box_count} boxes and a player")
    logger.debug("adding %d boxes to %d walkable cells", box_count, walkable)

    goals: List[Position] = []
    while len(goals) < box_count:
        x = rng.randrange(width)
        y = rng.randrange(height)
        if not is_valid_walkable_position(maze, (x, y), True):
            continue
        maze[y][x] = Tile.GOAL | Element.BOX
        goals.append((x, y))

    anchors = list(goals)
    first = anchors.pop(rng.randrange(len(anchors)))
    rng.shuffle(anchors)
    for anchor in [first] + anchors:
        candidates = free_neighbors(maze, anchor)
        if not candidates:
            continue
        pos = candidates[rng.randrange(len(candidates))]
        x, y = pos
        maze[y][x] = get_tile(maze[y][x]) | Element.PLAYER
        return (pos, direction_between(pos, anchor)), goals
    raise FillError("no box has a free neighbor for the player")


def reverse_step(maze: Maze, player: PlayerVector, rng: random.Random) -> PlayerVector:
    """Undoes one hypothetical forward move.

    The player steps back to a random free neighbor `prev`. The forward move
    went from `prev` to the current cell, so a box lying one step further in
    that direction was pushed there and gets dragged back. A drag that leaves
    the player without a free neighbor is undone.
    """
    pos, _ = player
    candidates = free_neighbors(maze, pos)
    if not candidates:
        raise FillError(f"player at {pos} cannot move")
    prev = candidates[rng.randrange(len(candidates))]
    direction = direction_between(prev, pos)
    swap_elements(maze, pos, prev)

    box_pos = next_position(pos, direction)
    if has_box(maze, box_pos):
        swap_elements(maze, box_pos, pos)
        if not free_neighbors(maze, prev):
            swap_elements(maze, pos, box_pos)
    return prev, direction


def goals_cleared(maze: Maze, goals: List[Position]) -> bool:
    return all(not has_box(maze, g) for g in goals)


def scramble(
    maze: Maze,
    player: PlayerVector,
    goals: List[Position],
    rng: random.Random,
    config: Optional[GeneratorConfig] = None,
) -> PlayerVector:
    """Batches of reverse steps until no box sits on its starting goal
    (or the batch budget is spent)."""
    config = config or GeneratorConfig()
    for batch in range(config.batch_max_count):
        for _ in range(rng.randrange(config.batch_min, config.batch_max)):
            player = reverse_step(maze, player, rng)
        if goals_cleared(maze, goals):
            logger.debug("goals cleared after %d batches", batch + 1)
            return player
    logger.debug("boxes still on goals after %d batches", config.batch_max_count)
    return player


def fill_maze(maze: Maze, rng: random.Random, config: Optional[GeneratorConfig] = None) -> PlayerVector:
    """Places boxes, goals and player in `maze` and scrambles them backwards."""
    config = config or GeneratorConfig()
    player, goals = add_elements(maze, rng, config.boxes_per_space)
    return scramble(maze, player, goals, rng, config)
