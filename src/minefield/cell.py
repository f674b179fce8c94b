"""
Cell module for the minefield engine.

A cell carries its content (mine or adjacent-mine count) and the state
the player sees (hidden, flagged or revealed).
"""
from dataclasses import dataclass
from enum import Enum


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """What the player currently sees on a cell."""

    HIDDEN = "hidden"
    FLAGGED = "flagged"
    REVEALED = "revealed"


# Observation codes shared by the numpy grid and the snapshot
OBS_HIDDEN = -1
OBS_FLAGGED = -2
OBS_MINE = 9
OBS_EXPLODED = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    A single cell on the board.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighbouring cells (0-8).
        state: Current visible state.
        exploded: True for the mine that ended the game.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    exploded: bool = False

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell was hidden and is now revealed, False if it
            was already revealed or is flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle the flag on this cell.

        Returns:
            True if the flag was toggled, False if the cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the visible state as a small integer.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: The mine that exploded
        """
        if self.state == CellState.HIDDEN:
            return OBS_HIDDEN
        if self.state == CellState.FLAGGED:
            return OBS_FLAGGED
        if self.exploded:
            return OBS_EXPLODED
        if self.is_mine:
            return OBS_MINE
        return self.adjacent_mines
