"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface so agents can play through the same
``Game`` object a human front end uses.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import OBS_EXPLODED, OBS_FLAGGED, OBS_HIDDEN
from .config import DEFAULT_CONFIG, BoardConfig
from .game import Game, GameState
from .render import TextRenderer
from .timer import ManualTicker

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_ILLEGAL = -0.1
REWARD_FLAG = 0.0


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for minefield.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine, 10 = exploded mine (after a loss)

    Actions:
        Discrete space of size 2 * width * height. Action ``i`` below
        ``width * height`` reveals cell ``i``; the rest toggle a flag on
        cell ``i - width * height``.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an ignored action
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()

        self.config = config or DEFAULT_CONFIG
        self.ticker = ManualTicker()
        self.game = Game(self.config, ticker=self.ticker)
        self.renderer = TextRenderer(self.game)
        self.render_mode = render_mode
        self.total_cells = self.config.total_cells

        self.observation_space = spaces.Box(
            low=OBS_FLAGGED,
            high=OBS_EXPLODED,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(2 * self.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seeds mine placement for reproducible boards.
            options: Unused.

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.game.board.rng = random.Random(seed)
        self.game.reset()
        self._steps = 0
        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one reveal or flag action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action = int(action)
        self._steps += 1
        # Each step counts as one second of play
        self.ticker.tick()

        if action < self.total_cells:
            reward = self._reveal_reward(action)
        else:
            accepted = self.game.flag_action(action - self.total_cells)
            reward = REWARD_FLAG if accepted else REWARD_ILLEGAL

        observation = self.game.board.get_observation()
        terminated = self.game.is_over
        return observation, reward, terminated, False, self._get_info()

    def _reveal_reward(self, index: int) -> float:
        if not self.game.reveal_action(index):
            return REWARD_ILLEGAL
        if self.game.state == GameState.WON:
            return REWARD_WIN
        if self.game.state == GameState.LOST:
            return REWARD_LOSS
        return REWARD_SAFE

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": self.game.board.revealed_count,
            "total_safe": self.config.safe_cells,
            "remaining_mines": self.game.remaining_mines,
            "game_state": self.game.state.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.renderer.render()
        if self.render_mode == "human":
            print(self.renderer.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would not be ignored.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.is_over:
            return mask
        observation = self.game.board.get_observation().ravel()
        hidden = observation == OBS_HIDDEN
        mask[: self.total_cells] = hidden
        mask[self.total_cells:] = hidden | (observation == OBS_FLAGGED)
        return mask
