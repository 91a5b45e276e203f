"""Desktop host for SkiFree."""

from skifree.simulator.scores import load_leaderboard, save_leaderboard

__all__ = ["load_leaderboard", "save_leaderboard"]
