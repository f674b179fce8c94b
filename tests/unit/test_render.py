"""
Unit tests for the text renderer.
"""
import pytest
from minefield import Game, ManualTicker, TextRenderer, format_time
from minefield.render import LOST_MESSAGE, READY_MESSAGE, RESET_MESSAGE


class TestFormatTime:
    """Test MM:SS formatting."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "00:00"), (9, "00:09"), (75, "01:15"), (3600, "60:00"), (-5, "00:00")],
    )
    def test_format_time(self, seconds: int, expected: str) -> None:
        assert format_time(seconds) == expected


class TestTextRenderer:
    """Test board drawing and status messages."""

    def test_initial_render(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game)
        lines = renderer.render().splitlines()

        assert lines[0] == "Mines: 5  Time: 00:00"
        assert lines[1] == "  0 1 2 3 4"
        assert lines[2] == "0 . . . . ."
        assert lines[-1] == READY_MESSAGE

    def test_warnings_replace_ready_message(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game, ["Too wide.", "Too tall."])
        assert renderer.message == "Too wide. Too tall."

    def test_revealed_and_flagged_cells(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game)
        column_game.reveal_action(0)
        column_game.flag_action(4)
        lines = renderer.render_board().splitlines()

        assert lines[1] == "0   2 . . F"
        assert lines[2] == "1   3 . . ."

    def test_loss_shows_mines_and_message(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game)
        column_game.reveal_action(0)
        column_game.reveal_action(2)
        lines = renderer.render_board().splitlines()

        assert lines[1] == "0   2 X . ."
        assert lines[2] == "1   3 * . ."
        assert renderer.message == LOST_MESSAGE

    def test_win_message_includes_time(
        self, column_game: Game, ticker: ManualTicker
    ) -> None:
        renderer = TextRenderer(column_game)
        column_game.reveal_action(0)
        ticker.tick(65)
        column_game.reveal_action(4)
        assert renderer.message == "Victory! Time: 01:05."
        assert renderer.status_line() == "Mines: 0  Time: 01:05"

    def test_reset_message(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game)
        column_game.reset()
        assert renderer.message == RESET_MESSAGE

    def test_detach(self, column_game: Game) -> None:
        renderer = TextRenderer(column_game)
        renderer.detach()
        renderer.detach()
        column_game.reset()
        assert renderer.message == READY_MESSAGE

    def test_wide_board_labels(self) -> None:
        from minefield import BoardConfig

        game = Game(BoardConfig(12, 11, 5), ticker=ManualTicker())
        lines = TextRenderer(game).render_board().splitlines()
        assert lines[0].split() == [str(col) for col in range(12)]
        assert lines[1].startswith(" 0 ")
        assert lines[-1].startswith("10 ")
        assert len(lines) == 12
