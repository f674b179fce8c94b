"""
Minefield game engine.

Provides board generation with a safe first reveal, flood-fill reveal,
flag bookkeeping and the game lifecycle, plus text and gymnasium front ends.
"""
from .cell import Cell, CellState
from .config import (
    BoardConfig,
    BoardLimits,
    LIMITS,
    DEFAULT_CONFIG,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    PRESETS,
    parse_board_params,
    parse_query_string,
)
from .errors import MinefieldError, InvalidConfiguration, IllegalAction
from .events import (
    Event,
    EventBus,
    CellChanged,
    GameWon,
    GameLost,
    GameReset,
    RemainingMinesChanged,
    TimerTicked,
)
from .generator import generate
from .geometry import index_to_position, position_to_index, neighbors_of
from .board import Board, RevealResult
from .timer import Ticker, ManualTicker, ThreadingTicker
from .game import Game, GameState
from .render import TextRenderer, format_time
from .environment import MinefieldEnv

__version__ = "1.0.0"

__all__ = [
    # Core
    "Cell",
    "CellState",
    "Board",
    "RevealResult",
    "Game",
    "GameState",
    "generate",
    "index_to_position",
    "position_to_index",
    "neighbors_of",
    # Configuration
    "BoardConfig",
    "BoardLimits",
    "LIMITS",
    "DEFAULT_CONFIG",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "parse_board_params",
    "parse_query_string",
    # Errors
    "MinefieldError",
    "InvalidConfiguration",
    "IllegalAction",
    # Events
    "Event",
    "EventBus",
    "CellChanged",
    "GameWon",
    "GameLost",
    "GameReset",
    "RemainingMinesChanged",
    "TimerTicked",
    # Time
    "Ticker",
    "ManualTicker",
    "ThreadingTicker",
    # Front ends
    "TextRenderer",
    "format_time",
    "MinefieldEnv",
]
