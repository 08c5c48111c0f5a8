from .cell import Element, Tile, get_element, get_tile
from .maze import Maze


def render_ascii(maze: Maze, void: str = " ") -> str:
    """ASCII visualization of a packed grid (inverse of parse_maze_str)."""
    out_lines = []
    for row in maze:
        row_chars = []
        for cell in row:
            tile = get_tile(cell)
            element = get_element(cell)
            if tile == Tile.VOID:
                row_chars.append(void)
                continue
            if tile == Tile.WALL:
                row_chars.append('#')
                continue
            has_goal = tile == Tile.GOAL
            if element == Element.PLAYER:
                row_chars.append('+' if has_goal else '@')
            elif element == Element.BOX:
                row_chars.append('*' if has_goal else '$')
            else:
                row_chars.append('.' if has_goal else '-')
        out_lines.append(''.join(row_chars))
    return "\n".join(out_lines)
