"""Cell and column model shared by every listing."""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict


class SemanticColor(StrEnum):
    """Meaning of a cell's colour; the renderer picks the actual style."""

    SUCCESS = "success"
    WARN = "warn"
    DANGER = "danger"
    INFO = "info"
    DEFAULT = "default"


class Cell(BaseModel):
    """One table cell: plain display text plus semantic styling."""

    model_config = ConfigDict(frozen=True)

    value: str = ""
    foreground: SemanticColor | None = None
    background: SemanticColor | None = None

    @classmethod
    def plain(cls, text: object) -> Cell:
        """Cell with default styling."""
        return cls(value=str(text))

    @classmethod
    def styled(
        cls,
        text: object,
        foreground: SemanticColor | None = None,
        background: SemanticColor | None = None,
    ) -> Cell:
        """Cell with explicit foreground/background semantics."""
        return cls(value=str(text), foreground=foreground, background=background)

    @classmethod
    def placeholder(cls) -> Cell:
        """Stand-in for a column that has no value on this row."""
        return cls()

    def __str__(self) -> str:
        return self.value


class Column(NamedTuple):
    """Column descriptor: the lowercase flag users type and the header shown."""

    flag: str
    display_name: str


def columns(*pairs: tuple[str, str]) -> tuple[Column, ...]:
    """Build an ordered column map from ``(flag, display_name)`` pairs."""
    return tuple(Column(flag, display_name) for flag, display_name in pairs)
