from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .cell import Direction, Element, Position, Tile, get_element, get_tile, is_walkable
from .maze import Maze, dims

# Bit helpers
__all__ = [
    "State",
    "bit",
    "has_bit",
    "set_bit",
    "clear_bit",
    "iter_bits",
    "state_from_maze",
    "state_key",
]

def bit(idx: int) -> int:
    return 1 << idx

def has_bit(mask: int, idx: int) -> bool:
    return (mask >> idx) & 1 == 1

def set_bit(mask: int, idx: int) -> int:
    return mask | bit(idx)

def clear_bit(mask: int, idx: int) -> int:
    return mask & ~bit(idx)

def iter_bits(mask: int) -> Iterable[int]:
    """Iterates over the indices of set bits, lowest first."""
    while mask:
        low = mask & -mask
        yield low.bit_length() - 1
        mask ^= low


@dataclass(frozen=True, slots=True)
class State:
    """
    Immutable search node of the solver.

    Stores the level as bitmaps: walkable floor, goals, boxes; plus the player index.
    Cell indexing: idx = y*width + x.
    Floor and goals are fixed for a whole search, moves only produce new boxes/player.
    """

    width: int
    height: int
    floor: int # bitset: walkable cells (floor or goal tile)
    goals: int # bitset
    boxes: int # bitset
    player: int # index (y*W + x)


    # ---- state properties
    def is_solved(self) -> bool:
        """Box set equals goal set."""
        return self.boxes == self.goals


    # ---- convenient checks/conversions
    def idx_to_xy(self, idx: int) -> Position:
        return (idx % self.width, idx // self.width)


    def xy_to_idx(self, x: int, y: int) -> int:
        return y * self.width + x


    def step(self, idx: int, direction: Direction) -> int:
        """Neighbor index in `direction`, -1 when it leaves the grid."""
        x = idx % self.width + direction[0]
        y = idx // self.width + direction[1]
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return -1


    def is_walkable(self, idx: int) -> bool:
        return idx >= 0 and has_bit(self.floor, idx)


    def is_goal_cell(self, idx: int) -> bool:
        return idx >= 0 and has_bit(self.goals, idx)


    def has_box(self, idx: int) -> bool:
        return idx >= 0 and has_bit(self.boxes, idx)


    def is_free_floor(self, idx: int) -> bool:
        """Walkable and not holding a box."""
        return self.is_walkable(idx) and not self.has_box(idx)


    def box_positions(self) -> List[Position]:
        return [self.idx_to_xy(b) for b in iter_bits(self.boxes)]


    def goal_positions(self) -> List[Position]:
        return [self.idx_to_xy(g) for g in iter_bits(self.goals)]


def state_from_maze(maze: Maze) -> Tuple[Optional[State], int, int]:
    """Builds the solver state of a filled maze.

    Returns (state, box_count, goal_count). The state is None when the maze has no player.
    """
    width, height = dims(maze)
    floor = goals = boxes = 0
    box_count = goal_count = 0
    player = -1
    for y, row in enumerate(maze):
        for x, cell in enumerate(row):
            idx = y * width + x
            if is_walkable(cell):
                floor = set_bit(floor, idx)
            if get_tile(cell) == Tile.GOAL:
                goals = set_bit(goals, idx)
                goal_count += 1
            element = get_element(cell)
            if element == Element.BOX:
                boxes = set_bit(boxes, idx)
                box_count += 1
            elif element == Element.PLAYER:
                player = idx
    if player == -1:
        return None, box_count, goal_count
    state = State(width=width, height=height, floor=floor,
                  goals=goals, boxes=boxes, player=player)
    return state, box_count, goal_count


def state_key(state: State) -> str:
    """Canonical key: "px,py:" followed by the sorted box coordinates joined by '|'."""
    px, py = state.idx_to_xy(state.player)
    boxes = "|".join(sorted(f"{x},{y}" for x, y in state.box_positions()))
    return f"{px},{py}:{boxes}"
