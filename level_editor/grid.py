"""
Grid model for the Level Editor.

A grid is a tuple of rows, each row a tuple of one-character tile symbols.
Grids are never changed in place: `set_cell` builds a new grid that shares
every untouched row with the old one, so a changed grid can be spotted with
an identity check.
"""

from typing import Iterator, Tuple

from .palette import EMPTY

Row = Tuple[str, ...]
Grid = Tuple[Row, ...]


def create_grid(rows: int, cols: int, fill: str = EMPTY) -> Grid:
    row = tuple(fill for _ in range(cols))
    return tuple(row for _ in range(rows))


def grid_size(grid: Grid) -> Tuple[int, int]:
    """Return (rows, cols)."""
    return len(grid), (len(grid[0]) if grid else 0)


def get_cell(grid: Grid, r: int, c: int) -> str:
    return grid[r][c]


def set_cell(grid: Grid, r: int, c: int, symbol: str) -> Grid:
    rows, cols = grid_size(grid)
    assert 0 <= r < rows and 0 <= c < cols, f"cell ({r}, {c}) outside {rows}x{cols} grid"
    row = grid[r]
    new_row = row[:c] + (symbol,) + row[c + 1 :]
    return grid[:r] + (new_row,) + grid[r + 1 :]


def iter_cells(grid: Grid) -> Iterator[Tuple[int, int, str]]:
    """Yield (row, col, symbol) for every cell, row by row."""
    for r, row in enumerate(grid):
        for c, symbol in enumerate(row):
            yield r, c, symbol
