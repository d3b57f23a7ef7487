"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Any, List, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import Board, BoardConfig, Cell, CellKind, EventBus, GameEvent


# ============================================================================
# Helpers
# ============================================================================

class EventRecorder:
    """Collects every event published on a bus as (name, payload) pairs."""

    def __init__(self, events: EventBus) -> None:
        self.received: List[Tuple[str, Tuple[Any, ...]]] = []
        for event in GameEvent:
            events.subscribe(event, self._handler(event))

    def _handler(self, event: GameEvent):
        def record(*payload: Any) -> None:
            self.received.append((event.value, payload))
        return record

    def named(self, name: str) -> List[Tuple[Any, ...]]:
        return [payload for event, payload in self.received if event == name]


class SequenceRandom:
    """Stands in for random.Random; randrange returns scripted values in order."""

    def __init__(self, values: List[int]) -> None:
        self.values = list(values)

    def randrange(self, *args: Any, **kwargs: Any) -> int:
        return self.values.pop(0)


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def events() -> EventBus:
    """Create an empty event bus."""
    return EventBus()


@pytest.fixture
def recorder(events: EventBus) -> EventRecorder:
    """Record everything published on the events fixture."""
    return EventRecorder(events)


@pytest.fixture
def default_board(events: EventBus) -> Board:
    """Create a seeded 9x9 board with 10 mines."""
    return Board(BoardConfig(9, 9, 10), events=events, rng=random.Random(7))


@pytest.fixture
def center_mine_board(events: EventBus) -> Board:
    """3x3 board with a single mine forced at (1, 1)."""
    return Board(BoardConfig(3, 3, 1), events=events, mine_positions=[(1, 1)])


@pytest.fixture
def corner_mine_board(events: EventBus) -> Board:
    """5x5 board with a single mine at (4, 4)."""
    return Board(BoardConfig(5, 5, 1), events=events, mine_positions=[(4, 4)])


@pytest.fixture
def empty_board(events: EventBus) -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0), events=events)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden empty cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(kind=CellKind.MINE)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(kind=CellKind.NUMBER, number=3)
    cell.reveal()
    return cell


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(9, 9, 10)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a valid JSON configuration file."""
    path = tmp_path / "board.json"
    path.write_text('{"width": 4, "height": 6, "minesCount": 5}')
    return path


@pytest.fixture
def scripted_rng():
    """Factory for a Random that returns the given randrange values."""
    return SequenceRandom
