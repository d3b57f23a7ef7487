"""
Minesweeper agents module.

Provides players that drive the board from outside:
- AutoPlayer: timed random opener used by a game session
- RandomAgent: baseline agent for the Gymnasium environment
"""
from .auto_player import AutoPlayer
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "AutoPlayer",
    "BaseAgent",
    "RandomAgent",
]
