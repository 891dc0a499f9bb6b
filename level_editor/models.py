"""
Core models and data structures for the Level Editor.
"""

from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum


class Action(Enum):
    PAINT = "PAINT"
    ERASE = "ERASE"


class PointerButton(Enum):
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class PointerKind(Enum):
    DOWN = "DOWN"
    MOVE = "MOVE"
    UP = "UP"


@dataclass(frozen=True)
class PointerEvent:
    """A decoded mouse report, in 0-based terminal columns/rows."""

    kind: PointerKind
    x: int
    y: int
    button: Optional[PointerButton] = None


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class TileVisual:
    glyph: str
    fg_color: Tuple[int, int, int]
    bg_color: Tuple[int, int, int]
