"""
Grid geometry helpers.

Cells are addressed by a linear index in ``[0, width * height)``;
row is ``index // width`` and column is ``index % width``.
"""
from functools import lru_cache
from typing import Tuple


def index_to_position(index: int, width: int) -> Tuple[int, int]:
    """Convert a linear cell index to ``(row, col)``."""
    return divmod(index, width)


def position_to_index(row: int, col: int, width: int) -> int:
    """Convert ``(row, col)`` to a linear cell index."""
    return row * width + col


def is_valid_position(row: int, col: int, width: int, height: int) -> bool:
    """Check if position is within board bounds."""
    return 0 <= row < height and 0 <= col < width


def is_valid_index(index: int, width: int, height: int) -> bool:
    """Check if a linear index addresses a cell on the board."""
    return 0 <= index < width * height


@lru_cache(maxsize=None)
def neighbors_of(index: int, width: int, height: int) -> Tuple[int, ...]:
    """
    Get the indices of all cells touching ``index``.

    Orthogonal and diagonal neighbours are included, the cell itself is
    not, and anything past the board edge is clipped, so corners have 3
    neighbours, edges 5 and interior cells 8.

    Args:
        index: Linear index of the centre cell.
        width: Number of columns.
        height: Number of rows.

    Returns:
        Tuple of neighbour indices in row-major order.
    """
    row, col = index_to_position(index, width)
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if is_valid_position(new_row, new_col, width, height):
                neighbors.append(position_to_index(new_row, new_col, width))
    return tuple(neighbors)
