from __future__ import annotations
from typing import List, Optional, Sequence
import logging
import random

from sokoban_core.cell import Tile, pack
from sokoban_core.errors import TemplateNotFoundError
from sokoban_core.maze import Maze, Template
from .aligner import horizontally_aligned, rotate, vertically_aligned
from .catalog import void_template
from .config import GeneratorConfig
from .reducer import reduce_maze

logger = logging.getLogger(__name__)


def find_template(
    templates: Sequence[Template],
    rng: random.Random,
    is_bottom_edge: bool,
    is_right_edge: bool,
    top: Optional[Template] = None,
    left: Optional[Template] = None,
    max_attempts: int = 10_000,
) -> Template:
    """Rejection-samples a rotated catalog entry that fits its neighbors.

    Missing neighbors and the outside of the maze are the void template, so a
    walkable socket never points out of the maze.
    """
    boundary = void_template(len(templates[0]))
    top = top if top is not None else boundary
    left = left if left is not None else boundary
    for _ in range(max_attempts):
        template = rotate(templates[rng.randrange(len(templates))], rng.randrange(4))
        if vertically_aligned(top, template) and \
           horizontally_aligned(left, template) and \
           (not is_bottom_edge or vertically_aligned(template, boundary)) and \
           (not is_right_edge or horizontally_aligned(template, boundary)):
            return template
    raise TemplateNotFoundError(attempts=max_attempts)


def stitch(width: int, height: int, grid: List[List[Template]]) -> Maze:
    """Copies template interiors into one grid wrapped in a wall ring."""
    fill = len(grid[0][0]) - 2
    maze = [[pack(Tile.WALL)] * (2 + fill * width) for _ in range(2 + fill * height)]
    for y in range(height):
        for x in range(width):
            template = grid[y][x]
            for ty in range(fill):
                maze_y = 1 + fill * y + ty
                maze[maze_y][1 + fill * x:1 + fill * (x + 1)] = template[1 + ty][1:1 + fill]
    return maze


def build_template_grid(
    templates: Sequence[Template],
    rng: random.Random,
    width: int,
    height: int,
    max_attempts: int = 10_000,
) -> List[List[Template]]:
    """Row-major placement, each cell constrained by its top and left neighbor only."""
    grid: List[List[Template]] = []
    for y in range(height):
        row: List[Template] = []
        for x in range(width):
            try:
                template = find_template(
                    templates, rng,
                    is_bottom_edge=y == height - 1,
                    is_right_edge=x == width - 1,
                    top=grid[y - 1][x] if y > 0 else None,
                    left=row[x - 1] if x > 0 else None,
                    max_attempts=max_attempts,
                )
            except TemplateNotFoundError as e:
                e.cell = (x, y)
                raise
            row.append(template)
        grid.append(row)
    return grid


def build_maze(
    templates: Sequence[Template],
    rng: random.Random,
    config: Optional[GeneratorConfig] = None,
) -> Maze:
    """Empty (no boxes, no player) reduced maze of 2..4 x 2..4 templates."""
    config = config or GeneratorConfig()
    width = rng.randrange(config.min_tiles, config.max_tiles)
    height = rng.randrange(config.min_tiles, config.max_tiles)
    logger.debug("building %dx%d template grid", width, height)
    grid = build_template_grid(templates, rng, width, height, config.max_template_attempts)
    return reduce_maze(stitch(width, height, grid))
