from sokoban_core.cell import Tile, get_tile, pack
from sokoban_core.maze import is_rectangular
from sokoban_core.parser import parse_maze_str
from sokoban_core.render import render_ascii
from generator.reducer import reduce_maze, remove_extra_walls

V = pack(Tile.VOID)
W = pack(Tile.WALL)
F = pack(Tile.FLOOR)


def _is_void(c):
    return get_tile(c) == Tile.VOID


def test_thin_solid_block():
    maze = parse_maze_str("""
#######
#######
#######
###-###
#######
#######
#######
""")
    remove_extra_walls(maze)
    assert render_ascii(maze, void="_").splitlines() == [
        "_______",
        "_______",
        "__###__",
        "__#-#__",
        "__###__",
        "_______",
        "_______",
    ]
    assert render_ascii(reduce_maze(maze)) == "###\n#-#\n###"


def test_reduce_keeps_walls_next_to_floor():
    maze = parse_maze_str("""
######
#----#
#-##-#
#----#
######
""")
    assert render_ascii(reduce_maze(maze)) == "######\n#----#\n#-##-#\n#----#\n######"


def test_reduce_minimal_bounding_box():
    maze = [
        [V, V, V, V, V, V],
        [V, V, V, V, V, V],
        [V, W, W, W, V, V],
        [V, W, F, W, V, V],
        [V, W, W, W, V, V],
        [V, V, V, V, V, V],
    ]
    reduced = reduce_maze(maze)
    assert reduced == [[W, W, W], [W, F, W], [W, W, W]]


def test_reduce_strips_inner_void_band():
    maze = [
        [W, W, W, V, W, W, W],
        [W, F, W, V, W, F, W],
        [W, W, W, V, W, W, W],
    ]
    reduced = reduce_maze(maze)
    assert is_rectangular(reduced)
    assert len(reduced) == 3 and len(reduced[0]) == 6
    assert not any(all(_is_void(c) for c in row) for row in reduced)
    assert not any(all(_is_void(row[x]) for row in reduced) for x in range(6))


def test_reduce_empty():
    assert reduce_maze([[V, W], [W, W]]) == []
