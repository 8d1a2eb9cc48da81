"""Exceptions raised while reading and transpiling templates."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hypertextgen.streamreader import Position


class Error(RuntimeError):
    """Base class of every error reported by the transpiler."""


class ParsingError(Error):
    """A template file could not be read."""


class TemplateError(Error):
    """A template contains invalid syntax at a known position."""

    def __init__(self, position: Position, message: str) -> None:
        self.position = position
        self.message = message
        super().__init__(f"[line:{position.line}, column:{position.column}] {message}")