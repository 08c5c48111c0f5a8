from __future__ import annotations
from typing import List, Tuple

from .cell import DOWN, LEFT, RIGHT, UP, Direction
from .state import State, iter_bits

# --- low-level helpers -------------------------------------------------------

def _blocked(state: State, idx: int, direction: Direction) -> bool:
    """Neighbor tile is not walkable; outside the grid counts as blocked.
    Boxes are ignored, only the static tiles matter."""
    return not state.is_walkable(state.step(idx, direction))


def blocked_sides(state: State, idx: int) -> Tuple[bool, bool, bool, bool]:
    """(left, right, up, down) blocked flags of a cell."""
    return (
        _blocked(state, idx, LEFT),
        _blocked(state, idx, RIGHT),
        _blocked(state, idx, UP),
        _blocked(state, idx, DOWN),
    )


def _goal_in_row(state: State, y: int) -> bool:
    row_mask = (1 << state.width) - 1
    return (state.goals >> (y * state.width)) & row_mask != 0


def _goal_in_column(state: State, x: int) -> bool:
    return any(state.is_goal_cell(y * state.width + x) for y in range(state.height))

# --- individual deadlock rules ----------------------------------------------

def is_corner_deadlock(state: State, box_idx: int) -> bool:
    """Box (not on goal) against two perpendicular walls."""
    if state.is_goal_cell(box_idx):
        return False
    left, right, up, down = blocked_sides(state, box_idx)
    return (left and up) or (left and down) or (right and up) or (right and down)


def is_line_deadlock(state: State, box_idx: int) -> bool:
    """Box squeezed in a one-cell corridor whose line holds no goal.

    Walls above and below: the box can only travel along its row.
    Walls left and right: the box can only travel along its column.
    The goal is looked up along the axis the box can still travel, never
    across it, so a box in a corridor that leads to a goal is not flagged.
    """
    if state.is_goal_cell(box_idx):
        return False
    left, right, up, down = blocked_sides(state, box_idx)
    x, y = state.idx_to_xy(box_idx)
    if up and down and not _goal_in_row(state, y):
        return True
    if left and right and not _goal_in_column(state, x):
        return True
    return False


def is_simple_deadlock(state: State) -> bool:
    """Corner or line deadlock on any box that is not on a goal."""
    for b in iter_bits(state.boxes):
        if state.is_goal_cell(b):
            continue
        if is_corner_deadlock(state, b) or is_line_deadlock(state, b):
            return True
    return False


def box_formations(state: State, box_idx: int) -> List[Tuple[int, int, int, int]]:
    """The four 2x2 formations anchored at a box: down-right, down-left, up-right, up-left.
    Cells outside the grid are -1."""
    formations = []
    for vd, hd in ((DOWN, RIGHT), (DOWN, LEFT), (UP, RIGHT), (UP, LEFT)):
        side = state.step(box_idx, hd)
        below = state.step(box_idx, vd)
        diag = state.step(below, hd) if below >= 0 else -1
        formations.append((box_idx, side, below, diag))
    return formations


def is_advanced_deadlock(state: State) -> bool:
    """Clustered boxes: a 2x2 formation holding at least two boxes but fewer goals
    than boxes can never be fully covered."""
    boxes = list(iter_bits(state.boxes))
    coords = [state.idx_to_xy(b) for b in boxes]
    for i in range(len(boxes)):
        x1, y1 = coords[i]
        for j in range(i + 1, len(boxes)):
            x2, y2 = coords[j]
            if abs(x1 - x2) > 1 or abs(y1 - y2) > 1:
                continue
            for formation in box_formations(state, boxes[i]):
                n_boxes = sum(1 for c in formation if state.has_box(c))
                if n_boxes < 2:
                    continue
                n_goals = sum(1 for c in formation if state.is_goal_cell(c))
                if n_boxes > n_goals:
                    return True
    return False

# --- combined API ------------------------------------------------------------

def has_deadlock(state: State) -> bool:
    """Conservative test: True means the box configuration is treated as unsolvable."""
    return is_simple_deadlock(state) or is_advanced_deadlock(state)
