"""
Board configuration for Minesweeper game.

Board sizes come from an optional JSON record
``{"width": int, "height": int, "minesCount": int}``; anything missing or
malformed falls back to a randomized board.
"""
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

MIN_SIDE = 1
MAX_SIDE = 15
MIN_RANDOM_MINES = 1
MAX_RANDOM_MINES = 31


def clamp(value: int, low: int, high: int) -> int:
    """Restrict value to the closed range [low, high]."""
    return max(low, min(value, high))


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines_count: Total mines to place, clamped to the cell count.
    """

    width: int = 9
    height: int = 9
    mines_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()
        self.mines_count = clamp(self.mines_count, 0, self.cell_count)

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        for name in ("width", "height", "mines_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")

    @property
    def cell_count(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)


# ============================================================================
# Loading
# ============================================================================

def random_config(rng: Optional[random.Random] = None) -> BoardConfig:
    """Create a randomized board used when no configuration is available."""
    rng = rng or random.Random()
    return BoardConfig(
        width=rng.randint(MIN_SIDE, MAX_SIDE),
        height=rng.randint(MIN_SIDE, MAX_SIDE),
        mines_count=rng.randint(MIN_RANDOM_MINES, MAX_RANDOM_MINES),
    )


def config_from_dict(data: Mapping[str, Any]) -> BoardConfig:
    """
    Build a configuration from a parsed record.

    Raises:
        ValueError: If a key is missing or a value is invalid.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration must be an object, got {type(data).__name__}")
    try:
        return BoardConfig(
            width=data["width"],
            height=data["height"],
            mines_count=data["minesCount"],
        )
    except KeyError as exc:
        raise ValueError(f"Missing configuration key: {exc.args[0]}") from exc


def load_config(
    path: Optional[Union[str, Path]] = None,
    rng: Optional[random.Random] = None,
) -> BoardConfig:
    """
    Load a board configuration, falling back to a random board.

    Args:
        path: JSON file to read. A missing ``.json`` suffix is added.
        rng: Random source for the fallback board.

    Returns:
        The configured board, or a randomized one when the file is absent
        or cannot be parsed.
    """
    if not path:
        return random_config(rng)

    path = Path(path)
    if path.suffix != ".json":
        path = path.with_name(path.name + ".json")

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return config_from_dict(data)
    except (OSError, ValueError) as exc:
        logger.warning("Using random board, could not load %s: %s", path, exc)
        return random_config(rng)
