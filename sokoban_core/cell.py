from enum import IntEnum
from typing import Tuple

__all__ = [
    "Tile",
    "Element",
    "TILE_MASK",
    "ELEMENT_MASK",
    "Position",
    "Direction",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "DIRECTIONS",
    "pack",
    "get_tile",
    "get_element",
    "is_walkable",
    "is_free_and_walkable",
    "next_position",
    "direction_between",
]

TILE_MASK = 0x0F
ELEMENT_MASK = 0xF0


class Tile(IntEnum):
    VOID = 0x00
    WALL = 0x01
    FLOOR = 0x02
    GOAL = 0x03


class Element(IntEnum):
    NONE = 0x00
    PLAYER = 0x10
    BOX = 0x20


Position = Tuple[int, int]   # (x, y)
Direction = Tuple[int, int]  # unit vector (dx, dy)

UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)
DIRECTIONS: Tuple[Direction, ...] = (UP, DOWN, LEFT, RIGHT)


# ---- packing

def pack(tile: int, element: int = Element.NONE) -> int:
    """Tile in the low nibble, element in the high nibble."""
    if element != Element.NONE and not is_walkable(tile):
        raise ValueError(f"element {element:#x} on non-walkable tile {tile:#x}")
    return (tile & TILE_MASK) | (element & ELEMENT_MASK)


def get_tile(cell: int) -> int:
    return cell & TILE_MASK


def get_element(cell: int) -> int:
    return cell & ELEMENT_MASK


def is_walkable(cell: int) -> bool:
    """Floor or goal. Accepts a bare tile or a packed cell."""
    t = cell & TILE_MASK
    return t == Tile.FLOOR or t == Tile.GOAL


def is_free_and_walkable(cell: int, with_element_check: bool = False) -> bool:
    if not is_walkable(cell):
        return False
    return not with_element_check or get_element(cell) == Element.NONE


# ---- geometry

def next_position(pos: Position, direction: Direction) -> Position:
    return (pos[0] + direction[0], pos[1] + direction[1])


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def direction_between(origin: Position, target: Position) -> Direction:
    return (_sign(target[0] - origin[0]), _sign(target[1] - origin[1]))
