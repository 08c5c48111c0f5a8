from typing import List, Optional
from .cell import Element, Tile, get_element, pack
from .maze import Maze

TOK_WALL = "#"
TOK_GOAL = "."
TOK_BOX = "$"
TOK_BOX_ON_GOAL = "*"
TOK_PLAYER = "@"
TOK_PLAYER_ON_GOAL = "+"
TOK_FLOOR = "-"
TOK_VOID = " "

_CELLS = {
    TOK_WALL: pack(Tile.WALL),
    TOK_GOAL: pack(Tile.GOAL),
    TOK_BOX: pack(Tile.FLOOR, Element.BOX),
    TOK_BOX_ON_GOAL: pack(Tile.GOAL, Element.BOX),
    TOK_PLAYER: pack(Tile.FLOOR, Element.PLAYER),
    TOK_PLAYER_ON_GOAL: pack(Tile.GOAL, Element.PLAYER),
}


def _nonblank_lines(text: str) -> List[str]:
    return [line.rstrip("\n") for line in text.splitlines() if line.strip() != ""]


def parse_maze_str(maze_str: str, void: str = TOK_VOID) -> Maze:
    """Parses an ASCII level into a packed cell grid.

    Supported characters:
      '#': wall
      '.': goal
      '$': box
      '*': box on goal
      '@': player
      '+': player on goal
      `void` (space by default): outside the level
    Other characters ('-', '_', ...) are treated as floor.
    Short lines are padded with void so the result is rectangular.
    """
    lines = _nonblank_lines(maze_str)
    if not lines:
        raise ValueError("Empty level")
    width = max(len(line) for line in lines)
    lines = [line.ljust(width, void) for line in lines]

    maze: Maze = []
    player: Optional[int] = None
    for r, line in enumerate(lines):
        row = []
        for c, ch in enumerate(line):
            if ch == void:
                cell = pack(Tile.VOID)
            else:
                cell = _CELLS.get(ch, pack(Tile.FLOOR))
            if get_element(cell) == Element.PLAYER:
                if player is not None:
                    raise ValueError(f"More than one player in level (row {r}, col {c})")
                player = r * width + c
            row.append(cell)
        maze.append(row)
    return maze


def parse_maze_file(path: str) -> Maze:
    with open(path, "r", encoding="utf-8") as f:
        return parse_maze_str(f.read())
