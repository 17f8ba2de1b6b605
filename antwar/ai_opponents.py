"""
Scripted AI Opponents - Bots that play a whole turn for one side.

- GreedyAI: attack if possible, otherwise walk food home, forage, or head
  for the centre. Deterministic given the same state.
- RandomAI: uniformly random legal move or attack per ant (seeded).

A turn is a generator with one suspension point per applied action, so a
host can pace the presentation between actions without the bot ever
touching game state while suspended.
"""

import logging
import random
from typing import Callable, Iterator, List, Optional

from antwar.actions import (
    Action, ActionResult, ActionType, Direction,
    get_valid_actions_mask, manhattan, step,
)
from antwar.entities import Ant, Position

logger = logging.getLogger(__name__)


def greedy_step(pos: Position, target: Position) -> Optional[Position]:
    """
    One step toward target along the axis with the larger delta.

    Ties (|dx| <= |dy|) go to the y axis; if the chosen axis has no delta
    there is no step and None is returned.
    """
    dx = target[0] - pos[0]
    dy = target[1] - pos[1]
    if abs(dx) > abs(dy):
        return (pos[0] + (1 if dx > 0 else -1), pos[1])
    if dy == 0:
        return None
    return (pos[0], pos[1] + (1 if dy > 0 else -1))


class BaseAI:
    """Base class for scripted players."""

    name = "base"

    def decide(self, engine, ant: Ant) -> Optional[Action]:
        """The action for one ant given the current state, or None to idle."""
        return None

    def take_turn(self, engine) -> Iterator[ActionResult]:
        """
        Play the active player's turn, yielding each applied action.

        Ants act in registration order; each sees the board as left by the
        ants before it. Ants that were removed or have already acted are
        skipped. Finishes by ending the turn unless the game ended first.
        If control has left this player while suspended, the turn stops
        without acting further.
        """
        player = engine.active_player
        ant_ids = [a.ant_id for a in engine.world.get_player_ants(player)]

        for ant_id in ant_ids:
            if engine.is_over or engine.active_player != player:
                return
            ant = engine.world.ants.get(ant_id)
            if ant is None or ant.has_acted:
                continue

            action = self.decide(engine, ant)
            if action is None:
                continue
            result = self._apply(engine, ant, action)
            if result:
                yield result
            else:
                logger.debug(f"{self.name}: ant {ant_id} idles ({result.describe()})")

        if not engine.is_over and engine.active_player == player:
            yield engine.pass_turn()

    def play_turn(self, engine,
                  on_action: Optional[Callable[[ActionResult], None]] = None
                  ) -> List[ActionResult]:
        """Run a whole turn, calling on_action after every applied action."""
        results = []
        for result in self.take_turn(engine):
            results.append(result)
            if on_action is not None:
                on_action(result)
        return results

    def _apply(self, engine, ant: Ant, action: Action) -> ActionResult:
        if action.action_type == ActionType.ATTACK:
            return engine.attack_ant(ant, action.target)
        return engine.move_ant(ant, action.target)

    def _move_toward(self, engine, ant: Ant, target: Position) -> Optional[Action]:
        """Greedy step toward target; blocked steps are not retried."""
        nxt = greedy_step(ant.position, target)
        if nxt is None or not engine.can_move(ant, nxt):
            return None
        return Action(ant.ant_id, ActionType.MOVE, nxt)


def _nearest(origin: Position, positions: List[Position]) -> Optional[Position]:
    """Closest position by Manhattan distance; ties go to the earliest listed."""
    best, best_dist = None, None
    for pos in positions:
        dist = manhattan(origin, pos)
        if best_dist is None or dist < best_dist:
            best, best_dist = pos, dist
    return best


class GreedyAI(BaseAI):
    """
    Per ant, first match wins:
    1. Attack the first enemy found scanning up, down, left, right
    2. Carrying food: step toward the nearest own anthill tile
    3. Otherwise: step toward the nearest food item
    4. Fallback: step toward the centre of the grid
    """

    name = "greedy"

    def decide(self, engine, ant: Ant) -> Optional[Action]:
        world = engine.world

        for d in Direction:
            target = step(ant.position, d)
            if engine.can_attack(ant, target):
                return Action(ant.ant_id, ActionType.ATTACK, target)

        if ant.is_carrying_food:
            home = _nearest(ant.position, world.anthill_tiles(ant.player))
            if home is not None:
                return self._move_toward(engine, ant, home)
        else:
            food = _nearest(ant.position, [f.position for f in world.get_foods()])
            if food is not None:
                return self._move_toward(engine, ant, food)

        return self._move_toward(engine, ant, world.center)


class RandomAI(BaseAI):
    """Picks a random legal move or attack for every ant."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def decide(self, engine, ant: Ant) -> Optional[Action]:
        mask = get_valid_actions_mask(ant, engine.world)
        options = []
        for d in Direction:
            if mask[0, d]:
                options.append(Action(ant.ant_id, ActionType.MOVE, step(ant.position, d)))
            if mask[1, d]:
                options.append(Action(ant.ant_id, ActionType.ATTACK, step(ant.position, d)))
        if not options:
            return None
        return self.rng.choice(options)


AI_CLASSES = {
    "greedy": GreedyAI,
    "random": RandomAI,
}
