import json
import os

import pytest

from sokoban_core.errors import ConfigError
from sokoban_core.parser import parse_maze_str
from generator.config import AppConfig, config_from_dict, load_config
from generator.payload import build_payload, dumps_payload

CONFIG = os.path.join(os.path.dirname(__file__), "..", "configs", "generate.yaml")


def test_defaults():
    cfg = load_config(None)
    assert cfg.generator.min_moves == 40 and cfg.generator.max_moves == 60
    assert cfg.solver.max_iterations == 100_000
    assert cfg.solver.open_limit == 10_000 and cfg.solver.open_keep == 5_000


def test_bundled_yaml_matches_defaults():
    cfg = load_config(CONFIG)
    assert cfg == AppConfig()


def test_partial_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("generator:\n  min_moves: 10\n  max_moves: 20\nsolver:\n  heuristic: hungarian\n",
                    encoding="utf-8")
    cfg = load_config(str(path))
    assert (cfg.generator.min_moves, cfg.generator.max_moves) == (10, 20)
    assert cfg.solver.heuristic == "hungarian"
    assert cfg.solver.push_weight == 2.0


def test_unknown_keys():
    with pytest.raises(ConfigError):
        config_from_dict({"generator": {"min_movez": 3}})
    with pytest.raises(ConfigError):
        config_from_dict({"publisher": {}})


def test_invalid_values():
    with pytest.raises(ConfigError):
        config_from_dict({"generator": {"min_moves": 9, "max_moves": 3}})
    with pytest.raises(ConfigError):
        load_config("does/not/exist.yaml")


def test_payload():
    maze = parse_maze_str("#####\n#@$.#\n#####")
    cfg = config_from_dict({"output": {"time_to_solve_s": 90}})
    ms, grid = build_payload(maze, 12, cfg)
    assert ms == 90_000
    assert grid == maze
    assert json.loads(dumps_payload(maze, 12, cfg)) == [90_000, maze]


def test_unknown_output_key():
    with pytest.raises(ConfigError):
        config_from_dict({"output": {"time_to_solve": 90}})


@pytest.mark.parametrize("solver", [
    {"open_limit": 10, "open_keep": 20},
    {"open_keep": 0},
    {"heuristic": "astar"},
    {"max_iterations": 0},
    {"push_weight": -1.0},
    {"time_limit_s": 0},
])
def test_invalid_solver_values(solver):
    with pytest.raises(ConfigError):
        config_from_dict({"solver": solver})
