"""
Ant colony skirmish engine.

A pure-Python two-player, turn-based strategy game on a discrete grid:
opposing ant colonies move, fight and carry food home to their anthills.

- Grid world with O(1) occupancy lookups
- One action (move or attack) per ant per turn, explicit end of turn
- Two-phase food economy: pick up on a food cell, score on an own anthill
- Win detection by elimination, food exhaustion or turn limit
- Deterministic scripted opponents
"""

from antwar.config import GameConfig
from antwar.entities import Ant, Food, Anthill, PLAYER_ONE, PLAYER_TWO, opponent
from antwar.exceptions import AntwarError, ConfigError, WorldInvariantError
from antwar.grid_world import GridWorld
from antwar.layouts import Layout, FIXED_LAYOUTS, random_layout
from antwar.actions import ActionType, ActionError, ActionResult, Action, Direction
from antwar.outcome import Outcome, evaluate_outcome
from antwar.game_state import GameState, Phase
from antwar.engine import TurnEngine
from antwar.ai_opponents import GreedyAI, RandomAI, greedy_step
from antwar.renderer import GameRenderer

__all__ = [
    "GameConfig",
    "Ant", "Food", "Anthill", "PLAYER_ONE", "PLAYER_TWO", "opponent",
    "AntwarError", "ConfigError", "WorldInvariantError",
    "GridWorld", "Layout", "FIXED_LAYOUTS", "random_layout",
    "ActionType", "ActionError", "ActionResult", "Action", "Direction",
    "Outcome", "evaluate_outcome",
    "GameState", "Phase",
    "TurnEngine",
    "GreedyAI", "RandomAI", "greedy_step",
    "GameRenderer",
]
