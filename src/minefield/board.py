"""
Board module for the minefield engine.

Implements per-cell state, deferred mine placement, the flood-fill reveal
and flag bookkeeping. The board knows nothing about the game lifecycle;
``Game`` decides which of these operations are legal at any moment.
"""
import logging
import random
from enum import Enum, auto
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional

import numpy as np

from .cell import Cell, CellState
from .config import BoardConfig
from .errors import IllegalAction
from .events import CellChanged, EventBus, RemainingMinesChanged
from .generator import generate
from .geometry import is_valid_index, neighbors_of

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class RevealResult(Enum):
    """Outcome of revealing a single cell."""

    CONTINUE = auto()
    HIT_MINE = auto()
    ALREADY_REVEALED = auto()


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Grid of cells with mine layout, counters and reveal/flag mechanics.

    Counters are kept incrementally and always match a scan of the cells:
    ``revealed_count`` counts revealed safe cells, ``flagged_count``
    counts flagged cells.
    """

    def __init__(
        self,
        config: BoardConfig,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize an empty, ungenerated board.

        Args:
            config: Board dimensions and mine count.
            events: Bus that receives cell and counter events.
            rng: Random source used for mine placement.
        """
        self.config = config
        self.events = events if events is not None else EventBus()
        self.rng = rng or random.Random()
        self._init_state()

    # ========================================================================
    # Initialization (Low-level)
    # ========================================================================

    def _init_state(self) -> None:
        """Create hidden cells and zero all counters."""
        self._cells: List[Cell] = [Cell() for _ in range(self.config.total_cells)]
        self._mines: FrozenSet[int] = frozenset()
        self._counts: Mapping[int, int] = MappingProxyType({})
        self._generated = False
        self.revealed_count = 0
        self.flagged_count = 0
        self.exploded_index: Optional[int] = None

    def generate(self, safe_index: int) -> None:
        """
        Place mines, keeping ``safe_index`` clear.

        Args:
            safe_index: Cell the player opened first.

        Raises:
            IllegalAction: If the board has already been generated or the
                index is off the board.
        """
        self._check_index(safe_index)
        if self._generated:
            raise IllegalAction("board already generated", safe_index)

        mines, counts = generate(self.config, safe_index, self.rng)
        for index, cell in enumerate(self._cells):
            cell.is_mine = index in mines
            cell.adjacent_mines = counts.get(index, 0)

        self._mines = mines
        self._counts = MappingProxyType(counts)
        self._generated = True

    def _check_index(self, index: int) -> None:
        if not is_valid_index(index, self.config.width, self.config.height):
            raise IllegalAction("index off the board", index)

    def _neighbors(self, index: int):
        return neighbors_of(index, self.config.width, self.config.height)

    # ========================================================================
    # Reveal (Mid-level)
    # ========================================================================

    def reveal(self, index: int) -> RevealResult:
        """
        Reveal a cell, flooding outward through zero-count cells.

        The fill uses an explicit stack so large open areas cannot exhaust
        the call stack. Flagged cells and mines are never opened by the
        fill; numbered cells on the border are opened but do not expand.

        Args:
            index: Cell to reveal.

        Returns:
            ``ALREADY_REVEALED`` if the cell was open (nothing changes),
            ``HIT_MINE`` if it holds a mine (nothing changes; the caller
            handles the loss), ``CONTINUE`` otherwise.

        Raises:
            IllegalAction: If the index is off the board, the board has not
                been generated yet, or the cell is flagged.
        """
        self._check_index(index)
        if not self._generated:
            raise IllegalAction("board not generated", index)

        cell = self._cells[index]
        if cell.is_revealed:
            return RevealResult.ALREADY_REVEALED
        if cell.is_flagged:
            raise IllegalAction("cell is flagged", index)
        if cell.is_mine:
            return RevealResult.HIT_MINE

        opened = 0
        stack = [index]
        while stack:
            current = stack.pop()
            cell = self._cells[current]
            if cell.is_mine or not cell.reveal():
                continue
            self.revealed_count += 1
            opened += 1
            self.events.emit(
                CellChanged(current, CellState.REVEALED, cell.adjacent_mines)
            )
            if cell.adjacent_mines == 0:
                stack.extend(
                    neighbor for neighbor in self._neighbors(current)
                    if self._cells[neighbor].is_hidden
                )

        logger.debug("Revealed %d cells from %d", opened, index)
        return RevealResult.CONTINUE

    def reveal_mines(self, exploded_index: int) -> None:
        """
        Open every mine after a loss.

        The exploded mine is marked and reported first. Flagged mines lose
        their flag, so ``flagged_count`` drops accordingly. Safe cells are
        left untouched.
        """
        self._check_index(exploded_index)
        self.exploded_index = exploded_index
        self._cells[exploded_index].exploded = True

        remaining_before = self.remaining_mines
        order = [exploded_index] + sorted(self._mines - {exploded_index})
        for index in order:
            cell = self._cells[index]
            if cell.is_revealed:
                continue
            if cell.is_flagged:
                self.flagged_count -= 1
            cell.state = CellState.REVEALED
            self.events.emit(
                CellChanged(
                    index,
                    CellState.REVEALED,
                    mine=True,
                    exploded=index == exploded_index,
                )
            )

        if self.remaining_mines != remaining_before:
            self.events.emit(RemainingMinesChanged(self.remaining_mines))

    # ========================================================================
    # Flags (Mid-level)
    # ========================================================================

    def toggle_flag(self, index: int) -> bool:
        """
        Toggle the flag on a hidden or flagged cell.

        Args:
            index: Cell to flag or unflag.

        Returns:
            True if the flag was toggled, False if the cell is revealed.

        Raises:
            IllegalAction: If the index is off the board.
        """
        self._check_index(index)
        cell = self._cells[index]
        remaining_before = self.remaining_mines
        if not cell.toggle_flag():
            return False

        self.flagged_count += 1 if cell.is_flagged else -1
        self.events.emit(CellChanged(index, cell.state))
        if self.remaining_mines != remaining_before:
            self.events.emit(RemainingMinesChanged(self.remaining_mines))
        return True

    def flag_remaining_mines(self) -> int:
        """Flag every mine that is still unflagged; returns how many."""
        flagged = 0
        for index in sorted(self._mines):
            if not self._cells[index].is_flagged and self.toggle_flag(index):
                flagged += 1
        return flagged

    @property
    def remaining_mines(self) -> int:
        """Mines minus flags, floored at zero."""
        return max(0, self.config.mines - self.flagged_count)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def is_generated(self) -> bool:
        return self._generated

    @property
    def is_cleared(self) -> bool:
        """True once every safe cell is revealed."""
        return self.revealed_count == self.config.safe_cells

    @property
    def mines(self) -> FrozenSet[int]:
        return self._mines

    @property
    def adjacency(self) -> Mapping[int, int]:
        """Read-only adjacent-mine counts for every safe cell."""
        return self._counts

    def get_cell(self, index: int) -> Optional[Cell]:
        """Get cell at index, or None if invalid."""
        if not is_valid_index(index, self.config.width, self.config.height):
            return None
        return self._cells[index]

    def cell_state(self, index: int) -> CellState:
        self._check_index(index)
        return self._cells[index].state

    def hidden_indices(self) -> List[int]:
        """Indices of all hidden, unflagged cells."""
        return [index for index, cell in enumerate(self._cells) if cell.is_hidden]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = exploded mine
        """
        flat = np.fromiter(
            (cell.to_observation() for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        )
        return flat.reshape(self.config.height, self.config.width)

    def reset(self) -> None:
        """Discard the layout and return every cell to hidden."""
        self._init_state()
