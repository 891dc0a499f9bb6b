"""
Tests for brush strokes: paint/erase selection, dragging and release.
"""

from level_editor.grid import get_cell, iter_cells, set_cell
from level_editor.models import Action, PointerButton
from level_editor.paint_session import PaintSession, Stroke, action_for_button
from level_editor.serializer import serialize


def changed_cells(before, after):
    return {
        (r, c)
        for (r, c, old), (_, _, new) in zip(iter_cells(before), iter_cells(after))
        if old != new
    }


class TestActionSelection:
    """Test the button that starts a stroke fixes its action."""

    def test_secondary_erases(self):
        assert action_for_button(PointerButton.SECONDARY) == Action.ERASE

    def test_other_buttons_paint(self):
        assert action_for_button(PointerButton.PRIMARY) == Action.PAINT
        assert action_for_button(PointerButton.MIDDLE) == Action.PAINT


class TestPointerDown:
    """Test starting a stroke."""

    def test_primary_click_paints_brush(self, session, empty_grid):
        """Test down then up paints exactly the clicked cell."""
        session.palette.select_brush("w")
        session.pointer_down(3, 4, PointerButton.PRIMARY)
        session.pointer_up()

        assert session.grid == set_cell(empty_grid, 3, 4, "w")
        assert session.mutations == 1
        assert not session.is_drawing

    def test_secondary_click_erases_regardless_of_brush(self, session):
        """Test right-click writes the floor even with a wall brush."""
        session.grid = set_cell(session.grid, 1, 1, "k")
        start = session.grid
        session.palette.select_brush("w")

        session.pointer_down(1, 1, PointerButton.SECONDARY)

        assert session.grid == set_cell(start, 1, 1, ".")
        assert session.action == Action.ERASE

    def test_down_enters_drawing(self, session):
        """Test a press opens a stroke."""
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        assert session.is_drawing
        assert session.stroke == Stroke(Action.PAINT)

    def test_grid_replaced_not_mutated(self, session, empty_grid):
        """Test painting produces a new grid and keeps the old snapshot valid."""
        session.palette.select_brush("h")
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        assert session.grid is not empty_grid
        assert get_cell(empty_grid, 0, 0) == "."


class TestDrag:
    """Test painting across cells while the button is held."""

    def test_drag_along_row(self, session, empty_grid):
        """Test a three-cell drag paints three cells with three mutations."""
        session.palette.select_brush("w")
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        session.pointer_enter(0, 0)
        session.pointer_enter(0, 1)
        session.pointer_enter(0, 0)
        session.pointer_enter(0, 2)
        session.pointer_enter(0, 0)
        session.pointer_up()

        assert serialize(session.grid).split("\n")[0] == '"www' + "." * 13 + '",'
        assert changed_cells(empty_grid, session.grid) == {(0, 0), (0, 1), (0, 2)}
        assert session.mutations == 3

    def test_brush_change_mid_drag(self, session):
        """Test a new brush only affects cells reached after the change."""
        session.palette.select_brush("w")
        session.pointer_down(2, 0, PointerButton.PRIMARY)
        session.pointer_enter(2, 1)
        session.palette.select_brush("c")
        session.pointer_enter(2, 2)
        session.pointer_enter(2, 3)
        session.pointer_up()

        assert session.grid[2][:5] == ("w", "w", "c", "c", ".")

    def test_brush_change_keeps_action(self, session):
        """Test an erase stroke keeps erasing after the brush changes."""
        for c in range(3):
            session.grid = set_cell(session.grid, 0, c, "r")
        session.pointer_down(0, 0, PointerButton.SECONDARY)
        session.palette.select_brush("w")
        session.pointer_enter(0, 1)
        session.pointer_enter(0, 2)

        assert session.grid[0][:3] == (".", ".", ".")
        assert session.action == Action.ERASE

    def test_erase_drag(self, session):
        """Test dragging with the secondary button clears cells."""
        session.palette.select_brush("p")
        for c in range(4):
            session.pointer_down(5, c, PointerButton.PRIMARY)
            session.pointer_up()
        session.pointer_down(5, 1, PointerButton.SECONDARY)
        session.pointer_enter(5, 2)
        session.pointer_up()

        assert session.grid[5][:4] == ("p", ".", ".", "p")


class TestIdle:
    """Test behaviour without a stroke."""

    def test_up_without_down_is_noop(self, session, empty_grid):
        """Test a stray release keeps the session idle and the grid unchanged."""
        session.pointer_up()
        assert not session.is_drawing
        assert session.grid is empty_grid

    def test_hover_never_paints(self, session, empty_grid):
        """Test enter events while idle do nothing."""
        session.palette.select_brush("w")
        for c in range(5):
            session.pointer_enter(0, c)
        assert session.grid is empty_grid
        assert session.mutations == 0

    def test_hover_after_release_does_not_paint(self, session):
        """Test the stroke ends on release."""
        session.palette.select_brush("w")
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        session.pointer_up()
        session.pointer_enter(0, 1)
        assert session.grid[0][:2] == ("w", ".")
        assert session.mutations == 1


class TestRepeatWrites:
    """Test rewriting a cell with its own value."""

    def test_same_value_keeps_grid_identity(self, session):
        """Test writing the value a cell already holds does not replace the grid."""
        session.palette.select_brush("w")
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        painted = session.grid
        session.pointer_enter(0, 0)
        assert session.grid is painted
        assert session.mutations == 1

    def test_second_stroke_on_same_cell(self, session):
        """Test a new stroke starts fresh with its own action."""
        session.palette.select_brush("d")
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        session.pointer_up()
        session.pointer_down(0, 0, PointerButton.SECONDARY)
        session.pointer_up()
        assert session.grid[0][0] == "."
        assert session.mutations == 2

    def test_click_on_cell_holding_brush(self, session, empty_grid):
        """Test a click always writes once, even when the cell already matches."""
        session.pointer_down(0, 0, PointerButton.PRIMARY)
        session.pointer_up()
        assert session.mutations == 1
        assert session.grid is not empty_grid
        assert session.grid == empty_grid

    def test_right_click_on_floor(self, session, empty_grid):
        """Test erasing a floor cell still replaces the grid once."""
        session.palette.select_brush("w")
        session.pointer_down(4, 4, PointerButton.SECONDARY)
        session.pointer_up()
        assert session.mutations == 1
        assert session.grid is not empty_grid
        assert session.grid[4][4] == "."
