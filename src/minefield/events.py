"""
Events emitted by the engine for a presentation layer to react to.

Every event is a frozen dataclass and can be turned into a plain dict with
``to_dict()`` for logging or sending over the wire.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from .cell import CellState

logger = logging.getLogger(__name__)


# ============================================================================
# Event Types
# ============================================================================

@dataclass(frozen=True)
class Event:
    """Base class for engine events."""

    @property
    def type(self) -> str:
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, CellState):
                data[key] = value.value
        data["type"] = self.type
        return data


@dataclass(frozen=True)
class CellChanged(Event):
    """
    A cell changed visible state.

    ``adjacent_mines`` is only set when a safe cell is revealed;
    ``mine`` and ``exploded`` describe revealed mines after a loss.
    """

    index: int
    state: CellState
    adjacent_mines: Optional[int] = None
    mine: bool = False
    exploded: bool = False


@dataclass(frozen=True)
class GameWon(Event):
    elapsed: int


@dataclass(frozen=True)
class GameLost(Event):
    exploded_index: int


@dataclass(frozen=True)
class RemainingMinesChanged(Event):
    count: int


@dataclass(frozen=True)
class TimerTicked(Event):
    elapsed: int


@dataclass(frozen=True)
class GameReset(Event):
    width: int
    height: int
    mines: int


Listener = Callable[[Event], None]


# ============================================================================
# Event Bus
# ============================================================================

class EventBus:
    """Synchronous fan-out of events to subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Args:
            listener: Called with every emitted event, in emission order.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: Event) -> None:
        logger.debug("emit %s", event)
        for listener in list(self._listeners):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)
