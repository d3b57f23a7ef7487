"""
Auto-player for Minesweeper.

Opens random cells on a board one step at a time. The host loop calls
step() once per tick, so the board keeps a single writer.
"""
import logging
import random
from typing import Optional, Set, Tuple

from ..board import Board

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Auto Player
# ============================================================================

class AutoPlayer:
    """
    Reveals random cells through the board's public operations.

    A run makes width * height attempts. By default an attempt samples
    x in [0, width - 1) and y in [0, height - 1), which never touches the
    last column or row; pass full_range=True to sample the whole grid.
    Attempts landing on a cell already visited in this run are skipped
    without using up a step.
    """

    def __init__(
        self,
        board: Board,
        rng: Optional[random.Random] = None,
        full_range: bool = False,
    ) -> None:
        """
        Initialize the auto-player.

        Args:
            board: Board to play on.
            rng: Random source for picking cells.
            full_range: Sample the last column and row too.
        """
        self.board = board
        self.rng = rng or random.Random()
        self.full_range = full_range
        self.attempts_left = board.width * board.height
        self.visited: Set[Position] = set()
        self._cancelled = False

    @property
    def finished(self) -> bool:
        """True once the run is out of attempts, cancelled or the game ended."""
        return (
            self._cancelled
            or self.attempts_left <= 0
            or self.board.is_game_over
        )

    def cancel(self) -> None:
        """Stop the run. Takes effect before the next step."""
        self._cancelled = True

    def _pick(self) -> Position:
        if self.full_range:
            return (
                self.rng.randrange(self.board.width),
                self.rng.randrange(self.board.height),
            )
        return (
            self.rng.randrange(max(self.board.width - 1, 1)),
            self.rng.randrange(max(self.board.height - 1, 1)),
        )

    def step(self) -> Optional[Position]:
        """
        Reveal the next random cell.

        Returns:
            The position opened, or None when the run is finished.
        """
        while not self.finished:
            self.attempts_left -= 1
            position = self._pick()
            if position in self.visited:
                continue
            self.visited.add(position)
            self.board.reveal(*position)
            logger.debug("Auto-play opened %s", position)
            return position
        return None

    def run(self) -> int:
        """Play until finished. Returns the number of cells opened."""
        steps = 0
        while self.step() is not None:
            steps += 1
        return steps
