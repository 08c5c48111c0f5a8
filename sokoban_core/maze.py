from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .cell import (
    Element,
    Position,
    Tile,
    get_element,
    get_tile,
    is_free_and_walkable,
    is_walkable,
)

Maze = List[List[int]]
Template = List[List[int]]


def dims(maze: Maze) -> Tuple[int, int]:
    """(width, height); an empty maze is 0x0."""
    if not maze:
        return 0, 0
    return len(maze[0]), len(maze)


def in_bounds(maze: Maze, pos: Position) -> bool:
    w, h = dims(maze)
    x, y = pos
    return 0 <= x < w and 0 <= y < h


def is_valid_walkable_position(maze: Maze, pos: Position, with_element_check: bool = False) -> bool:
    """Inside the grid, on a walkable tile and, if asked, not occupied."""
    if not in_bounds(maze, pos):
        return False
    x, y = pos
    return is_free_and_walkable(maze[y][x], with_element_check)


def has_box(maze: Maze, pos: Position) -> bool:
    if not is_valid_walkable_position(maze, pos):
        return False
    x, y = pos
    return get_element(maze[y][x]) == Element.BOX


def is_rectangular(maze: Maze) -> bool:
    return all(len(row) == len(maze[0]) for row in maze) if maze else True


def copy_maze(maze: Maze) -> Maze:
    return [list(row) for row in maze]


def iter_cells(maze: Maze) -> Iterable[Tuple[Position, int]]:
    for y, row in enumerate(maze):
        for x, cell in enumerate(row):
            yield (x, y), cell


def count_walkable(maze: Maze) -> int:
    return sum(1 for _, cell in iter_cells(maze) if is_walkable(cell))


def find_elements(maze: Maze) -> Tuple[Optional[Position], List[Position], List[Position]]:
    """Scans the grid once: (player, boxes, goals), all row-major."""
    player: Optional[Position] = None
    boxes: List[Position] = []
    goals: List[Position] = []
    for pos, cell in iter_cells(maze):
        element = get_element(cell)
        if element == Element.PLAYER:
            player = pos
        elif element == Element.BOX:
            boxes.append(pos)
        if get_tile(cell) == Tile.GOAL:
            goals.append(pos)
    return player, boxes, goals


def swap_elements(maze: Maze, a: Position, b: Position) -> None:
    """Exchanges the elements of two cells, tiles stay put."""
    ax, ay = a
    bx, by = b
    ca = maze[ay][ax]
    cb = maze[by][bx]
    maze[ay][ax] = get_tile(ca) | get_element(cb)
    maze[by][bx] = get_tile(cb) | get_element(ca)
