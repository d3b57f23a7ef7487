"""
Game session for Minesweeper.

Owns the current board and takes the commands a host application sends:
reveal, flag, restart and the autoplay toggle. The host loop calls
update() every frame; autoplay advances from there.
"""
import logging
import random
from pathlib import Path
from typing import Optional, Tuple, Union

from .agents.auto_player import AutoPlayer
from .board import Board
from .config import BoardConfig, load_config
from .events import EventBus, GameEvent

logger = logging.getLogger(__name__)


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    A sequence of games sharing one event bus and configuration source.

    Attributes:
        events: Bus every board of this session publishes on.
        autoplay_interval: Seconds between auto-player reveals.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        autoplay: bool = False,
        autoplay_interval: float = 1.0,
        config: Optional[BoardConfig] = None,
    ) -> None:
        """
        Initialize the session and start the first game.

        Args:
            config_path: JSON board configuration, re-read on every new game.
            events: Event bus to publish on.
            rng: Random source for board sizes, mines and autoplay.
            autoplay: Whether the auto-player starts enabled.
            autoplay_interval: Seconds between auto-player reveals.
            config: Fixed configuration, used instead of config_path.
        """
        self.config_path = config_path
        self.events = events or EventBus()
        self.rng = rng or random.Random()
        self.autoplay_interval = autoplay_interval
        self._fixed_config = config
        self._autoplay = autoplay
        self.new_game()

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def new_game(self) -> Board:
        """Replace the board with a freshly generated one."""
        self.config = self._fixed_config or load_config(self.config_path, self.rng)
        self.board = Board(self.config, events=self.events, rng=self.rng)
        self.auto_player = AutoPlayer(self.board, rng=self.rng)
        self._cooldown = 0.0
        logger.info(
            "New game: %dx%d, %d mines",
            self.config.width, self.config.height, self.board.total_mines,
        )
        return self.board

    def restart(self) -> Board:
        """Start a new game and announce it with game-restarted."""
        board = self.new_game()
        self.events.emit(GameEvent.GAME_RESTARTED)
        return board

    # ========================================================================
    # Commands
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        return self.board.reveal(x, y)

    def toggle_flag(self, x: int, y: int) -> bool:
        return self.board.toggle_flag(x, y)

    @property
    def autoplay(self) -> bool:
        return self._autoplay

    def set_autoplay(self, enabled: bool) -> None:
        """Turn the auto-player on or off. Turning it off is immediate."""
        self._autoplay = enabled
        if not enabled:
            self._cooldown = 0.0

    def update(self, dt: float) -> Optional[Tuple[int, int]]:
        """
        Advance the session by dt seconds.

        Returns:
            The position the auto-player opened on this tick, if any.
        """
        if not self._autoplay or self.board.is_game_over:
            return None
        if self.auto_player.finished:
            return None

        self._cooldown -= dt
        if self._cooldown > 0:
            return None
        self._cooldown = self.autoplay_interval
        return self.auto_player.step()

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def total_mines(self) -> int:
        return self.board.total_mines

    @property
    def marked_mines(self) -> int:
        return self.board.marked_mines
