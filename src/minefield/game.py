"""
Game lifecycle for the minefield engine.

``Game`` is the only object a front end needs: it accepts reveal, flag and
reset actions, decides whether they are legal, drives the board, keeps
elapsed time and reports everything that happens through its event bus.
"""
import logging
import random
import threading
from enum import Enum
from typing import Any, Dict, Optional

from .board import Board, RevealResult
from .cell import CellState
from .config import DEFAULT_CONFIG, BoardConfig
from .errors import IllegalAction
from .events import EventBus, GameLost, GameReset, GameWon, TimerTicked
from .timer import ThreadingTicker, Ticker

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Lifecycle of a single game."""

    READY = "ready"
    RUNNING = "running"
    WON = "won"
    LOST = "lost"


TERMINAL_STATES = frozenset({GameState.WON, GameState.LOST})


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    State machine for one game: READY -> RUNNING -> WON | LOST.

    Mines are placed on the first reveal, with the revealed cell kept safe.
    Once WON or LOST, reveal and flag actions are ignored until ``reset()``.
    Illegal actions never raise; they return False and change nothing.
    Actions and timer ticks are serialised by one lock, so listeners never
    see a tick in the middle of an action's burst of events.
    """

    def __init__(
        self,
        config: BoardConfig = DEFAULT_CONFIG,
        ticker: Optional[Ticker] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize a game in the READY state.

        Args:
            config: Board dimensions and mine count.
            ticker: Source of one-second ticks; a ``ThreadingTicker`` if
                omitted.
            rng: Random source for mine placement.
            seed: Seed for a fresh ``random.Random`` when ``rng`` is omitted.
        """
        self.events = EventBus()
        self.board = Board(config, self.events, rng or random.Random(seed))
        self.ticker = ticker or ThreadingTicker()
        self._lock = threading.RLock()
        self._state = GameState.READY
        self._elapsed = 0
        self._timing = False

    # ========================================================================
    # Actions
    # ========================================================================

    def reveal_action(self, index: int) -> bool:
        """
        Reveal a cell.

        On the first reveal the mine layout is generated around ``index``
        and the clock starts. Hitting a mine loses the game; opening the
        last safe cell wins it.

        Args:
            index: Cell to reveal.

        Returns:
            True if the board changed, False if the action was ignored.
        """
        with self._lock:
            try:
                self._check_playable(index)
                if self.board.cell_state(index) == CellState.FLAGGED:
                    raise IllegalAction("cell is flagged", index)
            except IllegalAction as exc:
                logger.debug("Ignored reveal: %s", exc)
                return False

            if self._state == GameState.READY:
                self.board.generate(index)
                self._state = GameState.RUNNING
                self._start_timer()

            result = self.board.reveal(index)
            if result == RevealResult.HIT_MINE:
                self._lose(index)
            elif result == RevealResult.CONTINUE:
                self._check_win_condition()
            return result != RevealResult.ALREADY_REVEALED

    def flag_action(self, index: int) -> bool:
        """
        Toggle a flag on a cell.

        Flags may be placed before the first reveal and there is no cap on
        how many; the remaining-mines counter just stops at zero.

        Returns:
            True if the flag was toggled, False if the action was ignored.
        """
        with self._lock:
            try:
                self._check_playable(index)
            except IllegalAction as exc:
                logger.debug("Ignored flag: %s", exc)
                return False
            return self.board.toggle_flag(index)

    def reset(self) -> None:
        """Start over with the same configuration."""
        with self._lock:
            self._stop_timer()
            self.board.reset()
            self._state = GameState.READY
            self._elapsed = 0
            config = self.config
            logger.info(
                "New %dx%d game with %d mines", config.width, config.height, config.mines
            )
            self.events.emit(GameReset(config.width, config.height, config.mines))

    def close(self) -> None:
        """Release the ticker; the game can still be reset afterwards."""
        with self._lock:
            self._stop_timer()

    def _check_playable(self, index: int) -> None:
        if self._state in TERMINAL_STATES:
            raise IllegalAction(f"game is {self._state.value}", index)
        if self.board.get_cell(index) is None:
            raise IllegalAction("index off the board", index)

    # ========================================================================
    # Outcome Handling
    # ========================================================================

    def _check_win_condition(self) -> None:
        """Win once every safe cell is open, then flag the leftover mines."""
        if not self.board.is_cleared:
            return
        self._state = GameState.WON
        self._stop_timer()
        self.board.flag_remaining_mines()
        logger.info("Game won in %d seconds", self._elapsed)
        self.events.emit(GameWon(self._elapsed))

    def _lose(self, exploded_index: int) -> None:
        self._state = GameState.LOST
        self._stop_timer()
        self.board.reveal_mines(exploded_index)
        logger.info("Game lost on cell %d", exploded_index)
        self.events.emit(GameLost(exploded_index))

    # ========================================================================
    # Time Accounting
    # ========================================================================

    def _start_timer(self) -> None:
        if self._timing:
            return
        self._timing = True
        self.ticker.start(self._on_tick)

    def _stop_timer(self) -> None:
        if not self._timing:
            return
        self._timing = False
        self.ticker.cancel()

    def _on_tick(self) -> None:
        # May arrive on the ticker's thread; never interleaves with an action.
        with self._lock:
            if self._state != GameState.RUNNING:
                return
            self._elapsed += 1
            self.events.emit(TimerTicked(self._elapsed))

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def config(self) -> BoardConfig:
        return self.board.config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_over(self) -> bool:
        return self._state in TERMINAL_STATES

    @property
    def elapsed(self) -> int:
        """Whole seconds since the first reveal, frozen once the game ends."""
        return self._elapsed

    @property
    def remaining_mines(self) -> int:
        return self.board.remaining_mines

    @property
    def is_timing(self) -> bool:
        return self._timing

    def cell_state(self, index: int) -> CellState:
        """
        Get the visible state of a cell.

        Raises:
            IllegalAction: If the index is off the board.
        """
        return self.board.cell_state(index)

    def snapshot(self) -> Dict[str, Any]:
        """
        Serialisable view of everything a front end may show.

        Cells use the observation codes from ``Board.get_observation``.
        """
        config = self.config
        return {
            "state": self._state.value,
            "width": config.width,
            "height": config.height,
            "mines": config.mines,
            "elapsed": self._elapsed,
            "remaining_mines": self.remaining_mines,
            "revealed": self.board.revealed_count,
            "flagged": self.board.flagged_count,
            "cells": self.board.get_observation().ravel().tolist(),
        }
