"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their kind
(empty/number/mine) and play state (hidden/revealed/flagged).
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Tuple


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """What a cell holds. Fixed once the grid is generated."""

    EMPTY = auto()
    NUMBER = auto()
    MINE = auto()
    INVALID = auto()


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


HIDDEN_CODE = -1
FLAGGED_CODE = -2
MINE_CODE = 9
EXPLODED_CODE = 10


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        x: Column of the cell.
        y: Row of the cell.
        kind: Empty, number, mine or invalid (outside the grid).
        number: Count of mines in neighboring cells (0-8).
        revealed: Whether the cell has been opened.
        flagged: Whether the player marked the cell.
        exploded: True only for the mine that ended the game.
    """

    x: int = 0
    y: int = 0
    kind: CellKind = CellKind.EMPTY
    number: int = 0
    revealed: bool = False
    flagged: bool = False
    exploded: bool = False

    @classmethod
    def invalid(cls, x: int, y: int) -> "Cell":
        """Placeholder returned for positions outside the grid."""
        return cls(x, y, CellKind.INVALID)

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed, flagged or invalid.
        """
        if self.revealed or self.flagged or self.is_invalid:
            return False
        self.revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed or invalid.
        """
        if self.revealed or self.is_invalid:
            return False
        self.flagged = not self.flagged
        return True

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def state(self) -> CellState:
        """Visual state derived from the revealed/flagged bits."""
        if self.revealed:
            return CellState.REVEALED
        if self.flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_mine(self) -> bool:
        return self.kind == CellKind.MINE

    @property
    def is_empty(self) -> bool:
        return self.kind == CellKind.EMPTY

    @property
    def is_number(self) -> bool:
        return self.kind == CellKind.NUMBER

    @property
    def is_invalid(self) -> bool:
        return self.kind == CellKind.INVALID

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden (neither revealed nor flagged)."""
        return self.state == CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to observation value for an agent.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine
            10: The mine that exploded
        """
        if self.flagged and not self.revealed:
            return FLAGGED_CODE
        if not self.revealed:
            return HIDDEN_CODE
        if self.is_mine:
            return EXPLODED_CODE if self.exploded else MINE_CODE
        return self.number
