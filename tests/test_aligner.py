import itertools

import pytest

from sokoban_core.cell import Tile, is_walkable
from generator.aligner import compatible, horizontally_aligned, rotate, vertically_aligned
from generator.catalog import load_templates, parse_templates, void_template

OPEN, SOLID, CORRIDOR, TEE = parse_templates("""
_____
_---_
_---_
_---_
_____

_____
_###_
_###_
_###_
_____

_____
_###_
-----
_###_
_____

__-__
_#-#_
_---_
_###_
_____
""")


@pytest.mark.parametrize("ref,other", list(itertools.product(list(Tile), repeat=2)))
def test_compatible_truth_table(ref, other):
    expected = not (is_walkable(ref) and not is_walkable(other))
    assert compatible(ref, other) is expected


def test_rotate_is_cyclic_of_order_four():
    for template in load_templates():
        assert rotate(template, 4) == template
        assert rotate(rotate(template, 3), 1) == template


def test_rotate_clockwise():
    grid = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    assert rotate(grid, 1) == [[7, 4, 1], [8, 5, 2], [9, 6, 3]]
    assert rotate(grid, 2) == [[9, 8, 7], [6, 5, 4], [3, 2, 1]]
    # input untouched
    assert grid == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]


def test_vertical_alignment():
    void = void_template(5)
    # the tee's top socket needs floor under the template above
    assert vertically_aligned(OPEN, TEE)
    assert not vertically_aligned(void, TEE)
    assert not vertically_aligned(SOLID, TEE)
    # bottom edge: nothing walkable may point down
    assert vertically_aligned(OPEN, void)
    assert not vertically_aligned(rotate(TEE, 2), void)


def test_horizontal_alignment():
    void = void_template(5)
    assert horizontally_aligned(OPEN, CORRIDOR)
    assert not horizontally_aligned(SOLID, CORRIDOR)
    assert not horizontally_aligned(CORRIDOR, void)
    # rotated a quarter turn the corridor runs vertically and fits the edge
    assert horizontally_aligned(rotate(CORRIDOR, 1), void)
