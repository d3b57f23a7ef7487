"""
Board module for Minesweeper game.

Implements the game board with mine placement, cell revealing,
flagging and win/lose detection. State changes are announced on an
EventBus so a presentation layer can follow along.
"""
import logging
import random
from dataclasses import replace
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellKind
from .config import BoardConfig
from .events import EventBus, GameEvent

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement, revealing logic,
    and win/lose conditions. Coordinates are (x, y) with x the column.
    Out-of-grid positions resolve to an invalid cell and every command on
    them is a silent no-op.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        events: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        mine_positions: Optional[Iterable[Position]] = None,
    ) -> None:
        """
        Create and generate a board.

        Args:
            config: Board size and mine count (default: 9x9 with 10 mines).
            events: Bus the board publishes on.
            rng: Random source for mine placement.
            mine_positions: Explicit mine coordinates instead of random ones.
        """
        self.events = events or EventBus()
        self.rng = rng or random.Random()
        self.initialize(config or BoardConfig(), mine_positions)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def initialize(
        self,
        config: BoardConfig,
        mine_positions: Optional[Iterable[Position]] = None,
    ) -> None:
        """Allocate a fresh grid and generate mines and numbers."""
        self.config = config
        self._game_state = GameState.PLAYING
        self._marked_mines = 0
        self._init_grid()
        if mine_positions is None:
            self._place_mines()
        else:
            self._place_mines_at(mine_positions)
        self._total_mines = sum(
            1 for x, y in self._positions() if self._grid[x][y].is_mine
        )
        if mine_positions is not None:
            self.config = replace(config, mines_count=self._total_mines)
        self._calculate_adjacent_mines()
        logger.debug(
            "Generated %dx%d board with %d mines",
            config.width, config.height, self._total_mines,
        )

    def _init_grid(self) -> None:
        """Create empty grid of cells, indexed [x][y]."""
        self._grid: List[List[Cell]] = [
            [Cell(x, y) for y in range(self.config.height)]
            for x in range(self.config.width)
        ]

    def _place_mines(self) -> None:
        """
        Place mines at random positions.

        A collision probes forward in row-major order, wrapping to the
        next row and then to the origin, until a free cell is found.
        """
        width, height = self.config.width, self.config.height
        for _ in range(self.config.mines_count):
            x = self.rng.randrange(width)
            y = self.rng.randrange(height)
            while self._grid[x][y].is_mine:
                x += 1
                if x < width:
                    continue
                x = 0
                y += 1
                if y < height:
                    continue
                y = 0
            self._grid[x][y].kind = CellKind.MINE

    def _place_mines_at(self, positions: Iterable[Position]) -> None:
        for x, y in positions:
            if self._is_valid_position(x, y):
                self._grid[x][y].kind = CellKind.MINE

    def _calculate_adjacent_mines(self) -> None:
        """Number every non-mine cell; cells with no mines stay empty."""
        for x, y in self._positions():
            cell = self._grid[x][y]
            if cell.is_mine:
                continue
            cell.number = self._count_adjacent_mines(x, y)
            if cell.number > 0:
                cell.kind = CellKind.NUMBER

    def _count_adjacent_mines(self, x: int, y: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(
            1 for nx, ny in self._get_neighbors(x, y)
            if self._grid[nx][ny].is_mine
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _positions(self) -> Iterable[Position]:
        for x in range(self.config.width):
            for y in range(self.config.height):
                yield x, y

    def _get_neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples for neighbors inside the grid.
        """
        neighbors = []
        for delta_x in (-1, 0, 1):
            for delta_y in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self._is_valid_position(new_x, new_y):
                    neighbors.append((new_x, new_y))
        return neighbors

    def _is_valid_position(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, x: int, y: int) -> bool:
        """
        Reveal a cell at the given position.

        A mine ends the game. An empty cell floods outward through its
        empty neighbors. Revealing the last safe cell wins.

        Args:
            x: Column to reveal.
            y: Row to reveal.

        Returns:
            True if anything was revealed, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        cell = self.get_cell(x, y)
        if cell.is_invalid or cell.revealed or cell.flagged:
            return False

        if cell.is_mine:
            self._explode(cell)
        elif cell.is_empty:
            self.flood_reveal(x, y)
            self.check_win_condition()
        else:
            cell.reveal()
            self.check_win_condition()
        return True

    def flood_reveal(self, x: int, y: int) -> List[Position]:
        """
        Reveal a region of empty cells and its numbered border.

        Uses an explicit stack; a position is scheduled at most once so each
        cell is processed at most once. Mines, invalid and already revealed
        cells stop the fill. A flagged safe cell is opened and loses its flag.

        Returns:
            Positions revealed by this call, in processing order.
        """
        revealed = []
        stack = [(x, y)]
        scheduled = {(x, y)}
        while stack:
            cx, cy = stack.pop()
            cell = self.get_cell(cx, cy)
            if cell.is_mine or cell.is_invalid or cell.revealed:
                continue
            cell.flagged = False
            cell.revealed = True
            revealed.append((cx, cy))
            if not cell.is_empty:
                continue
            for neighbor in self._get_neighbors(cx, cy):
                if neighbor not in scheduled:
                    scheduled.add(neighbor)
                    stack.append(neighbor)
        return revealed

    def _explode(self, cell: Cell) -> None:
        """Lose the game: mark the trigger and show every mine."""
        logger.debug("Mine hit at %s", cell.position)
        self._game_state = GameState.LOST
        cell.revealed = True
        cell.exploded = True
        for x, y in self._positions():
            if self._grid[x][y].is_mine:
                self._grid[x][y].revealed = True
        self.events.emit(GameEvent.GAME_OVER, True)

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on a cell.

        Flagging a mine updates the marked-mines counter and emits
        mine-marked with the new flag state.

        Args:
            x: Column.
            y: Row.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        cell = self.get_cell(x, y)
        if not cell.toggle_flag():
            return False
        if cell.is_mine:
            self._marked_mines += 1 if cell.flagged else -1
            self.events.emit(GameEvent.MINE_MARKED, cell.flagged)
        return True

    def check_win_condition(self) -> bool:
        """
        Check if all non-mine cells are revealed.

        On a win the game ends, game-won is emitted and every mine is
        flagged. The marked-mines counter only tracks player flags.
        """
        if self._game_state != GameState.PLAYING:
            return self._game_state == GameState.WON
        for x, y in self._positions():
            cell = self._grid[x][y]
            if not cell.is_mine and not cell.revealed:
                return False

        logger.debug("Board cleared")
        self._game_state = GameState.WON
        for x, y in self._positions():
            if self._grid[x][y].is_mine:
                self._grid[x][y].flagged = True
        self.events.emit(GameEvent.GAME_WON, True)
        return True

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def total_mines(self) -> int:
        return self._total_mines

    @property
    def marked_mines(self) -> int:
        return self._marked_mines

    @property
    def remaining_mines(self) -> int:
        """Mines left for the player to mark."""
        return self._total_mines - self._marked_mines

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_game_over(self) -> bool:
        return self._game_state != GameState.PLAYING

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    def get_cell(self, x: int, y: int) -> Cell:
        """Get cell at position, or an invalid cell outside the grid."""
        if not self._is_valid_position(x, y):
            return Cell.invalid(x, y)
        return self._grid[x][y]

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        """Copy of the grid for rendering, indexed [x][y]."""
        return tuple(
            tuple(replace(cell) for cell in column) for column in self._grid
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as numpy array for an agent.

        Returns:
            2D array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
                10 = exploded mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for x, y in self._positions():
            obs[y, x] = self._grid[x][y].to_observation()
        return obs

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can still be revealed.

        Returns:
            List of (x, y) positions that are hidden and unflagged.
        """
        return [
            (x, y) for x, y in self._positions()
            if self._grid[x][y].is_hidden
        ]

    def count_revealed(self) -> int:
        return sum(1 for x, y in self._positions() if self._grid[x][y].revealed)
