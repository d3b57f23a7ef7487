"""
Gymnasium environment wrapper for Minesweeper.

Exposes the board to external agents through a standard RL interface,
and renders boards as plain text.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board
from .cell import Cell, EXPLODED_CODE, FLAGGED_CODE
from .config import BoardConfig


# ============================================================================
# Text Rendering
# ============================================================================

def cell_symbol(cell: Cell) -> str:
    """Single character shown for a cell."""
    if not cell.revealed:
        return "F" if cell.flagged else "."
    if cell.is_mine:
        return "X" if cell.exploded else "*"
    if cell.number == 0:
        return " "
    return str(cell.number)


def render_ansi(board: Board) -> str:
    """Render board as text, one line per row from y = 0."""
    lines = []
    for y in range(board.height):
        lines.append(" ".join(
            cell_symbol(board.get_cell(x, y)) for x in range(board.width)
        ))
    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array of shape (height, width) where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine, 10 = exploded mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (x=i % width, y=i // width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
            seed: Seed for mine placement.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self._rng = random.Random(seed)
        self.board = Board(self.config, rng=self._rng)

        self.observation_space = spaces.Box(
            low=FLAGGED_CODE,
            high=EXPLODED_CODE,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.cell_count)

        self._steps = 0
        self._total_safe_cells = self.config.cell_count - self.board.total_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.board.initialize(self.config)
        self._steps = 0
        self._total_safe_cells = self.config.cell_count - self.board.total_mines

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(int(action))
        self._steps += 1

        reward = self._calculate_reward(x, y)
        observation = self.board.get_observation()
        terminated = self.board.is_game_over

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return action % self.config.width, action // self.config.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """Reveal the cell and score the outcome."""
        if not self.board.reveal(x, y):
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.count_revealed(),
            "total_safe": self._total_safe_cells,
            "game_state": self.board.game_state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.board)
        if self.render_mode == "human":
            print(render_ansi(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.board.get_valid_actions():
            mask[y * self.config.width + x] = True
        return mask
