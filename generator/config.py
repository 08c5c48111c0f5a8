from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional
import os

import yaml

from search.greedy import SolverConfig
from sokoban_core.errors import ConfigError


@dataclass
class GeneratorConfig:
    min_moves: int = 40
    max_moves: int = 60
    min_tiles: int = 2  # inclusive
    max_tiles: int = 5  # exclusive
    boxes_per_space: float = 1 / 20
    batch_min: int = 200  # inclusive
    batch_max: int = 500  # exclusive
    batch_max_count: int = 500
    max_template_attempts: int = 10_000
    max_attempts: Optional[int] = 1_000  # None: retry forever
    catalog: Optional[str] = None  # path, None: bundled catalog

    def validate(self) -> None:
        if self.min_moves > self.max_moves:
            raise ConfigError(f"min_moves ({self.min_moves}) > max_moves ({self.max_moves})")
        if not 1 <= self.min_tiles < self.max_tiles:
            raise ConfigError("need 1 <= min_tiles < max_tiles")
        if not 1 <= self.batch_min < self.batch_max:
            raise ConfigError("need 1 <= batch_min < batch_max")
        if self.boxes_per_space < 0:
            raise ConfigError("boxes_per_space must be >= 0")
        if self.max_template_attempts < 1:
            raise ConfigError("max_template_attempts must be >= 1")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ConfigError("max_attempts must be >= 1 or null")


@dataclass
class OutputConfig:
    time_to_solve_s: int = 120


@dataclass
class AppConfig:
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    time_to_solve_s: int = 120


def _build(cls, section: Optional[Dict[str, Any]], name: str):
    section = section or {}
    if not isinstance(section, dict):
        raise ConfigError(f"section '{name}' must be a mapping")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"unknown keys in '{name}': {', '.join(unknown)}")
    return cls(**section)


def config_from_dict(cfg: Optional[Dict[str, Any]]) -> AppConfig:
    cfg = cfg or {}
    unknown = sorted(set(cfg) - {"generator", "solver", "output"})
    if unknown:
        raise ConfigError(f"unknown sections: {', '.join(unknown)}")
    out = _build(OutputConfig, cfg.get("output"), "output")
    if out.time_to_solve_s < 1:
        raise ConfigError("time_to_solve_s must be >= 1")
    app = AppConfig(
        generator=_build(GeneratorConfig, cfg.get("generator"), "generator"),
        solver=_build(SolverConfig, cfg.get("solver"), "solver"),
        time_to_solve_s=int(out.time_to_solve_s),
    )
    app.generator.validate()
    app.solver.validate()
    return app


def load_config(path: Optional[str]) -> AppConfig:
    """Reads a YAML config; a missing path gives the defaults."""
    if path is None:
        return AppConfig()
    if not os.path.isfile(path):
        raise ConfigError(f"config not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e
    return config_from_dict(cfg)
