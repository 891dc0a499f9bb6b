"""
Text export of the grid: one quoted, comma-terminated literal per row,
ready to paste into a level list.
"""

from .grid import Grid, Row


def serialize_row(row: Row) -> str:
    return f'"{"".join(row)}",'


def serialize(grid: Grid) -> str:
    return "\n".join(serialize_row(row) for row in grid)
