"""
Brush stroke state machine for the Level Editor.

Idle until a pointer goes down on a cell, then Drawing until a pointer is
released anywhere. The action (paint or erase) is fixed by the button that
started the stroke; the symbol painted is the palette's brush at the moment
each cell is reached.
"""

from dataclasses import dataclass
from typing import Optional

from .grid import Grid, get_cell, set_cell
from .models import Action, PointerButton
from .palette import EMPTY, Palette


@dataclass(frozen=True)
class Stroke:
    action: Action


def action_for_button(button: PointerButton) -> Action:
    return Action.ERASE if button == PointerButton.SECONDARY else Action.PAINT


class PaintSession:
    def __init__(self, grid: Grid, palette: Palette):
        self.grid = grid
        self.palette = palette
        self.stroke: Optional[Stroke] = None
        self.mutations = 0

    @property
    def is_drawing(self) -> bool:
        return self.stroke is not None

    @property
    def action(self) -> Optional[Action]:
        return self.stroke.action if self.stroke else None

    def pointer_down(self, r: int, c: int, button: PointerButton):
        self.stroke = Stroke(action_for_button(button))
        self.modify_cell(r, c, self.stroke.action)

    def pointer_enter(self, r: int, c: int):
        # Hovering without a stroke never paints
        if self.stroke is None:
            return
        # Re-entering a cell that already holds the value leaves the grid as is
        if get_cell(self.grid, r, c) == self.symbol_for(self.stroke.action):
            return
        self.modify_cell(r, c, self.stroke.action)

    def pointer_up(self):
        self.stroke = None

    def symbol_for(self, action: Action) -> str:
        return EMPTY if action == Action.ERASE else self.palette.brush

    def modify_cell(self, r: int, c: int, action: Action):
        self.grid = set_cell(self.grid, r, c, self.symbol_for(action))
        self.mutations += 1
