"""
Win Evaluation - Pure function from world state to game outcome.

Conditions, first match wins:
1. A side has no ants left: the other side wins (both empty: tie)
2. Food exhausted (none on the board, none carried): higher score wins
3. Turn limit exceeded: higher score wins
"""

from enum import IntEnum
from typing import Dict, Optional

from antwar.entities import PLAYER_ONE, PLAYER_TWO


class Outcome(IntEnum):
    ONGOING = 0
    PLAYER1_WINS = 1
    PLAYER2_WINS = 2
    TIE = 3

    @property
    def winner(self) -> Optional[int]:
        if self == Outcome.PLAYER1_WINS:
            return PLAYER_ONE
        if self == Outcome.PLAYER2_WINS:
            return PLAYER_TWO
        return None


def compare_scores(scores: Dict[int, int]) -> Outcome:
    s1, s2 = scores.get(PLAYER_ONE, 0), scores.get(PLAYER_TWO, 0)
    if s1 > s2:
        return Outcome.PLAYER1_WINS
    if s2 > s1:
        return Outcome.PLAYER2_WINS
    return Outcome.TIE


def evaluate_outcome(world, scores: Dict[int, int], turn: int,
                     max_turns: Optional[int] = None,
                     end_when_food_exhausted: bool = True) -> Outcome:
    """Evaluate the win conditions without touching any state."""
    p1_alive = bool(world.get_player_ants(PLAYER_ONE))
    p2_alive = bool(world.get_player_ants(PLAYER_TWO))

    if not p1_alive and not p2_alive:
        return Outcome.TIE
    if not p1_alive:
        return Outcome.PLAYER2_WINS
    if not p2_alive:
        return Outcome.PLAYER1_WINS

    if end_when_food_exhausted and world.food_count == 0 and not world.any_carrying():
        return compare_scores(scores)

    if max_turns is not None and turn > max_turns:
        return compare_scores(scores)

    return Outcome.ONGOING
