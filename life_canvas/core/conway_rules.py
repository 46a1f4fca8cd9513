"""
Scalar Conway's Game of Life rules.

Reference implementation of the B3/S23 rule over a flat, row-major cell
buffer with toroidal wrap-around. The engine runs a compiled kernel; these
functions are the readable version it is checked against.
"""

from typing import Set, TYPE_CHECKING

from .cell import Cell

if TYPE_CHECKING:
    import numpy as np


# Standard Conway rules
SURVIVAL_SET: Set[int] = {2, 3}  # Live cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Dead cells born with exactly 3 neighbors


def update_cell(cell: Cell, live_neighbors: int) -> Cell:
    """Apply Conway's rules to determine next cell state.

    Args:
        cell: Current cell state
        live_neighbors: Number of live neighbors (0-8)

    Returns:
        Next cell state
    """
    if cell is Cell.ALIVE:
        return Cell.ALIVE if live_neighbors in SURVIVAL_SET else Cell.DEAD
    else:
        return Cell.ALIVE if live_neighbors in BIRTH_SET else Cell.DEAD


def count_live_neighbors(cells: 'np.ndarray', width: int, height: int, row: int, col: int) -> int:
    """Count live neighbors of cell at (row, col) using Moore neighborhood.

    Args:
        cells: Flat row-major status buffer of width*height bytes
        width: Universe width in cells
        height: Universe height in cells
        row: Cell row
        col: Cell column

    Returns:
        Number of live neighbors (0-8)
    """
    count = 0

    # height-1 and width-1 stand for -1 and stay non-negative
    for delta_row in (height - 1, 0, 1):
        for delta_col in (width - 1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue  # Skip center cell

            # Wrap around edges (torus)
            neighbor_row = (row + delta_row) % height
            neighbor_col = (col + delta_col) % width

            count += int(cells[neighbor_row * width + neighbor_col])

    return count


def next_generation(cells: 'np.ndarray', width: int, height: int) -> list[Cell]:
    """Compute the next generation cell by cell.

    Args:
        cells: Flat row-major status buffer
        width: Universe width in cells
        height: Universe height in cells

    Returns:
        Next generation as a flat list of Cell values
    """
    result = []
    for row in range(height):
        for col in range(width):
            cell = Cell(int(cells[row * width + col]))
            neighbors = count_live_neighbors(cells, width, height, row, col)
            result.append(update_cell(cell, neighbors))
    return result
