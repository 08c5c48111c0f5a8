from __future__ import annotations
from typing import List

from sokoban_core.cell import Tile, get_tile, is_walkable, pack
from sokoban_core.maze import Maze, dims


def can_void(maze: Maze, x: int, y: int) -> bool:
    """Non-walkable cell with no walkable cell in its (clipped) 3x3 neighborhood."""
    if is_walkable(maze[y][x]):
        return False
    width, height = dims(maze)
    for j in range(max(y - 1, 0), min(y + 1, height - 1) + 1):
        for i in range(max(x - 1, 0), min(x + 1, width - 1) + 1):
            if is_walkable(maze[j][i]):
                return False
    return True


def remove_extra_walls(maze: Maze) -> None:
    """Erodes solid wall mass in place, keeping a rim around walkable ground."""
    width, height = dims(maze)
    for y in range(height):
        for x in range(width):
            if can_void(maze, x, y):
                maze[y][x] = pack(Tile.VOID)


def _non_void_indices(flags: List[bool]) -> List[int]:
    return [i for i, empty in enumerate(flags) if not empty]


def reduce_maze(maze: Maze) -> Maze:
    """Thins walls, then strips every all-void row and column.

    Border strips leave the bounding box of the content; an interior all-void
    band is dropped as well so no row or column of the result is empty.
    """
    remove_extra_walls(maze)
    width, _ = dims(maze)
    row_empty = [all(get_tile(c) == Tile.VOID for c in row) for row in maze]
    col_empty = [all(get_tile(row[x]) == Tile.VOID for row in maze) for x in range(width)]

    rows = _non_void_indices(row_empty)
    cols = _non_void_indices(col_empty)
    return [[maze[y][x] for x in cols] for y in rows]
