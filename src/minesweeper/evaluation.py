"""
Evaluation module for Minesweeper players.

Plays many games with an agent or the auto-player and reports
aggregate outcomes.
"""
import random
from typing import Dict, Optional

from .agents.auto_player import AutoPlayer
from .agents.base_agent import BaseAgent
from .board import Board
from .config import BoardConfig
from .environment import MinesweeperEnv


# ============================================================================
# Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare players.

    Provides standardized evaluation across different player types.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: cell count).
            seed: Seed for boards and the auto-player.
        """
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps or self.board_config.cell_count
        self.seed = seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate an environment agent.

        Returns:
            Dictionary with win_rate, avg_reward, avg_steps, avg_revealed.
        """
        env = MinesweeperEnv(config=self.board_config, seed=self.seed)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for _ in range(self.num_episodes):
            observation, info = env.reset()
            agent.reset()

            for _ in range(self.max_steps):
                valid_actions = env.get_action_mask()
                action = agent.select_action(observation, valid_actions)
                observation, reward, terminated, truncated, info = env.step(
                    action
                )
                total_reward += reward
                total_steps += 1
                if terminated or truncated:
                    break

            if info.get("game_state") == "WON":
                wins += 1
            total_revealed += info.get("revealed", 0)

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def evaluate_autoplay(self, full_range: bool = False) -> Dict[str, float]:
        """
        Run the auto-player to completion on fresh boards.

        Returns:
            Dictionary with win_rate, loss_rate, unfinished_rate and
            avg_revealed.
        """
        rng = random.Random(self.seed)
        wins = losses = 0
        total_revealed = 0

        for _ in range(self.num_episodes):
            board = Board(self.board_config, rng=rng)
            AutoPlayer(board, rng=rng, full_range=full_range).run()
            wins += board.is_won
            losses += board.is_lost
            total_revealed += board.count_revealed()

        episodes = self.num_episodes
        return {
            "win_rate": wins / episodes,
            "loss_rate": losses / episodes,
            "unfinished_rate": (episodes - wins - losses) / episodes,
            "avg_revealed": total_revealed / episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            print(f"Evaluating {name}...")
            results[name] = self.evaluate(agent)
        return results
