from typing import List, Tuple
from .cell import DIRECTIONS
from .state import State, set_bit, clear_bit


Move = Tuple[State, bool]  # (next state, was it a push)


def successors_steps(state: State) -> List[Move]:
    """Generates single player steps (cost of step = 1 move).

    For each direction (up, down, left, right):
      1) a walkable, box-free target cell is a plain move,
      2) a target holding a box is a push, legal only if the cell beyond
         is walkable and box-free; the player takes the box's old cell.
    """
    succs: List[Move] = []
    for d in DIRECTIONS:
        target = state.step(state.player, d)
        if not state.is_walkable(target):
            continue
        if not state.has_box(target):
            succs.append((State(
                width=state.width,
                height=state.height,
                floor=state.floor,
                goals=state.goals,
                boxes=state.boxes,
                player=target,
            ), False))
            continue
        beyond = state.step(target, d)
        if not state.is_free_floor(beyond):
            continue
        new_boxes = clear_bit(state.boxes, target)
        new_boxes = set_bit(new_boxes, beyond)
        succs.append((State(
            width=state.width,
            height=state.height,
            floor=state.floor,
            goals=state.goals,
            boxes=new_boxes,
            player=target,  # the player is on the old position of the box
        ), True))
    return succs
