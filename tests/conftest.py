"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, EventBus, Game, ManualTicker


# ============================================================================
# Layout Helpers
# ============================================================================

class FixedLayout:
    """Random source whose ``sample`` always returns the given mines."""

    def __init__(self, mines: Iterable[int]) -> None:
        self.mines = list(mines)

    def sample(self, population, k):
        assert k == len(self.mines)
        assert all(mine in population for mine in self.mines)
        return list(self.mines)


# Middle column of a 5x5 board: columns 0-1 and 3-4 are separate regions
COLUMN_MINES = (2, 7, 12, 17, 22)


class EventRecorder:
    """Collects every event emitted on a bus."""

    def __init__(self, bus: EventBus) -> None:
        self.events = []
        bus.subscribe(self.events.append)

    def of_type(self, event_type):
        return [event for event in self.events if isinstance(event, event_type)]

    def clear(self) -> None:
        self.events.clear()


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def small_config() -> BoardConfig:
    """Smallest legal board with a 5-mine column."""
    return BoardConfig(5, 5, 5)


@pytest.fixture
def one_mine_config() -> BoardConfig:
    return BoardConfig(5, 5, 1)


@pytest.fixture
def default_config() -> BoardConfig:
    """Default 10x10 board with 15 mines."""
    return BoardConfig(10, 10, 15)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def column_board(small_config: BoardConfig) -> Board:
    """5x5 board with mines down the middle column, not yet generated."""
    return Board(small_config, rng=FixedLayout(COLUMN_MINES))


@pytest.fixture
def generated_column_board(column_board: Board) -> Board:
    column_board.generate(0)
    return column_board


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def ticker() -> ManualTicker:
    return ManualTicker()


@pytest.fixture
def make_game(ticker: ManualTicker):
    """Factory for games with a fixed layout and manual ticker."""

    def factory(config: BoardConfig, mines: Iterable[int]) -> Game:
        return Game(config, ticker=ticker, rng=FixedLayout(mines))

    return factory


@pytest.fixture
def column_game(make_game, small_config: BoardConfig) -> Game:
    """5x5 game with mines down the middle column."""
    return make_game(small_config, COLUMN_MINES)


@pytest.fixture
def corner_game(make_game, one_mine_config: BoardConfig) -> Game:
    """5x5 game with a single mine in the bottom-right corner."""
    return make_game(one_mine_config, [24])


@pytest.fixture
def random_game(default_config: BoardConfig, ticker: ManualTicker) -> Game:
    """Default game with seeded random placement."""
    return Game(default_config, ticker=ticker, seed=1234)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    return Cell(is_mine=True)


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
def make_board():
    """Factory for boards with a fixed layout."""

    def factory(config: BoardConfig, mines: Iterable[int]) -> Board:
        return Board(config, rng=FixedLayout(mines))

    return factory


@pytest.fixture
def record_events():
    """Factory that attaches an ``EventRecorder`` to a bus."""
    return EventRecorder


@pytest.fixture
def column_mines():
    return COLUMN_MINES


@pytest.fixture
def fixed_layout():
    """The ``FixedLayout`` class, for swapping a board's random source."""
    return FixedLayout
