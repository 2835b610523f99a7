"""
Payline evaluation for the 3x3 grid.

Lines are indexed 0-4 in a fixed order: the three rows top to bottom, then
the descending diagonal and the ascending diagonal. Payout code relies on
this order to recover a line's symbol without rescanning the grid.
"""

from typing import List, Tuple

from spinpool.core.catalog import Symbol
from spinpool.core.reels import Grid, REEL_COUNT, ROW_COUNT

# Each payline is a sequence of (column, row) cells
PAYLINES: Tuple[Tuple[Tuple[int, int], ...], ...] = (
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)

DESCENDING_DIAGONAL = 3
ASCENDING_DIAGONAL = 4


def _check_shape(grid: Grid):
    if len(grid) != REEL_COUNT or any(len(column) != ROW_COUNT for column in grid):
        raise ValueError(f"Grid must be {REEL_COUNT}x{ROW_COUNT}")


def evaluate(grid: Grid) -> List[int]:
    """Return the indices of every winning payline, in ascending order."""
    _check_shape(grid)

    winning_lines = []
    for index, cells in enumerate(PAYLINES):
        first_col, first_row = cells[0]
        first = grid[first_col][first_row]
        if all(grid[col][row] == first for col, row in cells[1:]):
            winning_lines.append(index)

    return winning_lines


def winning_symbol(grid: Grid, line_index: int) -> Symbol:
    """
    Symbol that completed a winning line.

    Rows read the first reel at that row. Both diagonals cross the centre
    cell, so they read the centre.
    """
    if not 0 <= line_index < len(PAYLINES):
        raise IndexError(f"No payline {line_index}")
    if line_index < ROW_COUNT:
        return grid[0][line_index]
    return grid[1][1]
