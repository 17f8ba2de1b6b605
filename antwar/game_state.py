"""
Game State - Turn bookkeeping plus observation encoding.

Tracks whose turn it is, the turn counter, scores, the current selection
and the terminal outcome. Also encodes the board as a tensor of feature
planes for renderers and learning agents.

Observation space: (height, width, NUM_FEATURE_PLANES), from the
perspective of one player.
"""

from enum import Enum
from typing import Dict, Optional

import numpy as np

from antwar.entities import PLAYER_ONE, PLAYER_TWO
from antwar.outcome import Outcome


# Feature planes:
# own ant, enemy ant, food, own anthill, enemy anthill,
# carrying food, has acted, health fraction
PLANE_OWN_ANT = 0
PLANE_ENEMY_ANT = 1
PLANE_FOOD = 2
PLANE_OWN_ANTHILL = 3
PLANE_ENEMY_ANTHILL = 4
PLANE_CARRYING = 5
PLANE_ACTED = 6
PLANE_HEALTH = 7
NUM_FEATURE_PLANES = 8


class Phase(Enum):
    PLAYER1_TURN = "player1_turn"
    PLAYER2_TURN = "player2_turn"
    GAME_OVER = "game_over"


class GameState:
    """Session state. Created once per game and replaced wholesale on restart."""

    def __init__(self):
        self.phase = Phase.PLAYER1_TURN
        self.turn = 1
        self.scores: Dict[int, int] = {PLAYER_ONE: 0, PLAYER_TWO: 0}
        self.outcome = Outcome.ONGOING
        self.selected_ant_id: Optional[int] = None
        # Player whose turn it was when the game ended
        self._last_active = PLAYER_ONE

    @property
    def active_player(self) -> int:
        if self.phase == Phase.PLAYER1_TURN:
            return PLAYER_ONE
        if self.phase == Phase.PLAYER2_TURN:
            return PLAYER_TWO
        return self._last_active

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.GAME_OVER

    def flip_turn(self):
        """Hand control to the other player, counting a new turn on return to player 1."""
        if self.phase == Phase.PLAYER1_TURN:
            self.phase = Phase.PLAYER2_TURN
        elif self.phase == Phase.PLAYER2_TURN:
            self.phase = Phase.PLAYER1_TURN
            self.turn += 1

    def finish(self, outcome: Outcome):
        """Record the terminal outcome. Only the first call has any effect."""
        if self.is_over or outcome == Outcome.ONGOING:
            return
        self._last_active = self.active_player
        self.outcome = outcome
        self.phase = Phase.GAME_OVER
        self.selected_ant_id = None

    @property
    def message(self) -> str:
        if not self.is_over:
            return ""
        if self.outcome == Outcome.TIE:
            return "Game Over - Tie!"
        return f"Game Over - Player {self.outcome.winner} Wins!"

    @property
    def turn_indicator(self) -> str:
        return f"Turn {self.turn} - Player {self.active_player}"

    def get_observation(self, world, player: int, max_health: int) -> np.ndarray:
        """
        Encode the board as a (H, W, NUM_FEATURE_PLANES) tensor.
        Ownership planes are relative to the given player.
        """
        obs = np.zeros((world.height, world.width, NUM_FEATURE_PLANES),
                       dtype=np.float32)

        for hill in world.anthills.values():
            plane = PLANE_OWN_ANTHILL if hill.player == player else PLANE_ENEMY_ANTHILL
            for x, y in hill.tiles:
                obs[y, x, plane] = 1.0

        for food in world.foods.values():
            obs[food.y, food.x, PLANE_FOOD] = 1.0

        for ant in world.ants.values():
            x, y = ant.x, ant.y
            plane = PLANE_OWN_ANT if ant.player == player else PLANE_ENEMY_ANT
            obs[y, x, plane] = 1.0
            if ant.is_carrying_food:
                obs[y, x, PLANE_CARRYING] = 1.0
            if ant.has_acted:
                obs[y, x, PLANE_ACTED] = 1.0
            obs[y, x, PLANE_HEALTH] = ant.health / max_health

        return obs
