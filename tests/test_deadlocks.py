from sokoban_core.parser import parse_maze_str
from sokoban_core.state import state_from_maze
from sokoban_core.deadlocks import (
    is_corner_deadlock,
    is_line_deadlock,
    is_simple_deadlock,
    is_advanced_deadlock,
    has_deadlock,
)


def _state(lvl):
    s, _, _ = state_from_maze(parse_maze_str(lvl))
    return s


def test_corner_deadlock():
    s = _state("""
#####
#$--#
#-@-#
#--.#
#####
""")
    # box in the left upper corner (not goal) → deadlock
    box = s.xy_to_idx(1, 1)
    assert is_corner_deadlock(s, box)
    assert has_deadlock(s)


def test_corner_deadlock_ignores_goal_layout():
    # goals on the box's row and column do not rescue a cornered box
    s = _state("""
#####
#$-.#
#-@-#
#.--#
#####
""")
    assert is_simple_deadlock(s)


def test_box_on_goal_in_corner_is_fine():
    s = _state("""
#####
#*--#
#-@-#
#---#
#####
""")
    assert not has_deadlock(s)


def test_horizontal_corridor_without_goal():
    s = _state("""
#######
#@--$-#
###-###
#--.--#
#######
""")
    assert is_line_deadlock(s, s.xy_to_idx(4, 1))
    assert has_deadlock(s)


def test_horizontal_corridor_with_goal_in_row():
    s = _state("""
#######
#@--$.#
###-###
#-----#
#######
""")
    assert not is_line_deadlock(s, s.xy_to_idx(4, 1))
    assert not has_deadlock(s)


def test_vertical_corridor():
    with_goal = _state("""
#####
#-@-#
##-##
##$##
##-##
#-.-#
#####
""")
    assert not is_simple_deadlock(with_goal)

    without_goal = _state("""
#####
#-@-#
##-##
##$##
##-##
#.--#
#####
""")
    assert is_line_deadlock(without_goal, without_goal.xy_to_idx(2, 3))
    assert has_deadlock(without_goal)


def test_advanced_deadlock_adjacent_boxes():
    s = _state("""
######
#----#
#-$$-#
#-@..#
######
""")
    assert not is_simple_deadlock(s)
    assert is_advanced_deadlock(s)
    assert has_deadlock(s)


def test_advanced_deadlock_boxes_on_goals():
    s = _state("""
######
#----#
#-**-#
#-@--#
######
""")
    assert not is_advanced_deadlock(s)


def test_advanced_deadlock_needs_neighbours():
    s = _state("""
#######
#-----#
#-$-$-#
#-@-..#
#######
""")
    assert not is_advanced_deadlock(s)
    assert not has_deadlock(s)


def test_horizontal_corridor_goal_in_column_does_not_help():
    # the box can only slide sideways, a goal below the wall is out of reach
    s = _state("""
#######
#@--$-#
#######
#---.-#
#######
""")
    assert is_line_deadlock(s, s.xy_to_idx(4, 1))
    assert has_deadlock(s)
