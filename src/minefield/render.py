"""
Plain-text presentation of a game.

``TextRenderer`` listens to a game's events to keep a status message and
draws the board from the game's observation grid on demand.
"""
from typing import Callable, Dict, Optional, Sequence

from .cell import OBS_EXPLODED, OBS_FLAGGED, OBS_HIDDEN, OBS_MINE
from .events import Event, GameLost, GameReset, GameWon
from .game import Game

READY_MESSAGE = "Ready! Reveal any cell to start."
RESET_MESSAGE = "New game started. Good luck!"
LOST_MESSAGE = "Boom! You hit a mine. Try again."

SYMBOLS: Dict[int, str] = {
    OBS_HIDDEN: ".",
    OBS_FLAGGED: "F",
    OBS_MINE: "*",
    OBS_EXPLODED: "X",
    0: " ",
}


def format_time(total_seconds: int) -> str:
    """Format seconds as ``MM:SS``; minutes keep growing past 99."""
    minutes, seconds = divmod(max(0, int(total_seconds)), 60)
    return f"{minutes:02d}:{seconds:02d}"


def cell_symbol(code: int) -> str:
    return SYMBOLS.get(code, str(code))


class TextRenderer:
    """Renders a game as ASCII and tracks the message to show with it."""

    def __init__(self, game: Game, warnings: Optional[Sequence[str]] = None) -> None:
        """
        Attach to a game.

        Args:
            game: Game to draw.
            warnings: Configuration warnings shown instead of the ready
                message until the first game event arrives.
        """
        self.game = game
        self.message = " ".join(warnings) if warnings else READY_MESSAGE
        self._unsubscribe: Optional[Callable[[], None]] = game.events.subscribe(
            self.handle_event
        )

    def handle_event(self, event: Event) -> None:
        if isinstance(event, GameWon):
            self.message = f"Victory! Time: {format_time(event.elapsed)}."
        elif isinstance(event, GameLost):
            self.message = LOST_MESSAGE
        elif isinstance(event, GameReset):
            self.message = RESET_MESSAGE

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def status_line(self) -> str:
        return (
            f"Mines: {self.game.remaining_mines}  "
            f"Time: {format_time(self.game.elapsed)}"
        )

    def render_board(self) -> str:
        """Draw the grid with row and column labels."""
        observation = self.game.board.get_observation()
        height, width = observation.shape
        label_width = len(str(height - 1))
        column_width = len(str(width - 1))

        header = " " * (label_width + 1) + " ".join(
            str(col).rjust(column_width) for col in range(width)
        )
        lines = [header]
        for row in range(height):
            cells = " ".join(
                cell_symbol(int(code)).rjust(column_width)
                for code in observation[row]
            )
            lines.append(f"{str(row).rjust(label_width)} {cells}")
        return "\n".join(lines)

    def render(self) -> str:
        return "\n".join([self.status_line(), self.render_board(), self.message])
