"""
Typed failures for the generation pipeline.
"""

from __future__ import annotations

from typing import Optional


class SokogenError(RuntimeError):
    """Base class for generator failures."""


class ConfigError(SokogenError):
    """Malformed or unknown configuration value."""


class TemplateCatalogError(SokogenError):
    """Template data file is missing or malformed."""


class TemplateNotFoundError(SokogenError):
    """
    Raised when no catalog entry/rotation satisfies a cell's socket constraints
    within the configured number of draws.
    """

    def __init__(
        self,
        message: str = "no satisfying template",
        *,
        attempts: Optional[int] = None,
        cell: Optional[tuple] = None,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.cell = cell


class FillError(SokogenError):
    """The maze cannot host the requested boxes or the player got stuck."""


class GenerationError(SokogenError):
    """The attempt budget ran out before a puzzle landed in the move window."""

    def __init__(self, message: str, *, attempts: Optional[int] = None) -> None:
        super().__init__(message)
        self.attempts = attempts
