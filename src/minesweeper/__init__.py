"""
Minesweeper game module.

Provides the board engine, its event bus, configuration loading,
a game session for host applications and a Gymnasium environment.
"""
from .cell import Cell, CellKind, CellState
from .config import (
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    config_from_dict,
    load_config,
    random_config,
)
from .events import EventBus, GameEvent
from .board import Board, GameState
from .session import GameSession
from .environment import MinesweeperEnv, render_ansi

__all__ = [
    "Cell",
    "CellKind",
    "CellState",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "config_from_dict",
    "load_config",
    "random_config",
    "EventBus",
    "GameEvent",
    "Board",
    "GameState",
    "GameSession",
    "MinesweeperEnv",
    "render_ansi",
]
