from __future__ import annotations

from sokoban_core.cell import is_walkable
from sokoban_core.maze import Template


def compatible(ref: int, other: int) -> bool:
    """A walkable socket cell needs walkable ground across the seam;
    a non-walkable one imposes nothing."""
    return not is_walkable(ref) or is_walkable(other)


def vertically_aligned(top: Template, bottom: Template) -> bool:
    """`bottom` can sit right under `top`."""
    n = len(top)
    for i in range(n):
        if not compatible(bottom[0][i], top[n - 2][i]) or \
           not compatible(top[n - 1][i], bottom[1][i]):
            return False
    return True


def horizontally_aligned(left: Template, right: Template) -> bool:
    """`right` can sit right after `left`."""
    n = len(left)
    for i in range(n):
        if not compatible(right[i][0], left[i][n - 2]) or \
           not compatible(left[i][n - 1], right[i][1]):
            return False
    return True


def rotate_clockwise(template: Template) -> Template:
    """One quarter turn: transpose, then reverse every row."""
    return [list(reversed(col)) for col in zip(*template)]


def rotate(template: Template, times: int = 0) -> Template:
    """`times` quarter turns clockwise; returns a new grid, rotate(t, 4) == t."""
    out = [list(row) for row in template]
    for _ in range(times % 4):
        out = rotate_clockwise(out)
    return out
