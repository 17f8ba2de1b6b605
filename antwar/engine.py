"""
Turn Engine - The state machine that validates and applies player actions.

Handles:
- Selection of the active player's ants
- Move legality and resolution (food pickup, then delivery)
- Attack legality and resolution (damage, food loss, removal)
- One action per ant per turn
- Turn hand-over and the turn counter
- Win/loss detection after every committed action

The engine owns the world and the game state; callers read them between
actions and submit intents through the methods below. Every method answers
with an ActionResult and rejected actions leave all state untouched.
"""

import logging
from typing import Dict, Iterable, Optional

import numpy as np

from antwar.actions import ActionError, ActionResult, ActionType, manhattan
from antwar.config import GameConfig
from antwar.entities import Ant, Position
from antwar.game_state import GameState, Phase
from antwar.grid_world import GridWorld
from antwar.layouts import build_layout
from antwar.outcome import Outcome, evaluate_outcome

logger = logging.getLogger(__name__)


class TurnEngine:
    """
    Two-player turn-based engine for one game session.

    scripted_players lists the sides driven by an AI. While such a side is
    active, the caller API (select/move/attack/click/end_turn) is
    closed so human input cannot interleave a scripted turn.
    """

    def __init__(self, config: Optional[GameConfig] = None,
                 scripted_players: Iterable[int] = ()):
        self.config = config or GameConfig()
        self.config.validate()
        self.scripted_players = frozenset(scripted_players)
        self.rng = np.random.default_rng(self.config.seed)
        self.world: Optional[GridWorld] = None
        self.state: Optional[GameState] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> GameState:
        """Rebuild the world and start a fresh game."""
        if seed is not None:
            self.rng = np.random.default_rng(seed)

        layout = build_layout(self.config, self.rng)
        self.world = GridWorld.from_layout(
            layout,
            max_health=self.config.max_health,
            attack_damage=self.config.attack_damage,
        )
        self.state = GameState()
        logger.info(f"New game on {self.world.width}x{self.world.height} grid: "
                    f"{len(self.world.ants)} ants, {self.world.food_count} food")
        return self.state

    def restart(self, seed: Optional[int] = None) -> ActionResult:
        self.reset(seed)
        return ActionResult.success(ActionType.RESTART)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def scores(self) -> Dict[int, int]:
        return dict(self.state.scores)

    @property
    def active_player(self) -> int:
        return self.state.active_player

    @property
    def turn(self) -> int:
        return self.state.turn

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def outcome(self) -> Outcome:
        return self.state.outcome

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def message(self) -> str:
        return self.state.message

    @property
    def selected_ant(self) -> Optional[Ant]:
        if self.state.selected_ant_id is None:
            return None
        return self.world.ants.get(self.state.selected_ant_id)

    def get_observation(self, player: int) -> np.ndarray:
        return self.state.get_observation(self.world, player, self.config.max_health)

    # ------------------------------------------------------------------
    # Legality (pure predicates)
    # ------------------------------------------------------------------

    def _check_actor(self, ant: Optional[Ant]) -> Optional[ActionError]:
        """Checks shared by every unit action."""
        if self.state.is_over:
            return ActionError.GAME_ALREADY_OVER
        if ant is None or self.world.ants.get(ant.ant_id) is not ant:
            return ActionError.NO_SUCH_UNIT
        if ant.player != self.state.active_player:
            return ActionError.NOT_YOUR_TURN
        return None

    def check_move(self, ant: Optional[Ant], target: Position) -> Optional[ActionError]:
        """Why the move would be rejected, or None if it is legal."""
        error = self._check_actor(ant)
        if error is not None:
            return error
        if not self.world.in_bounds(target):
            return ActionError.OUT_OF_BOUNDS
        if ant.has_acted:
            return ActionError.ALREADY_ACTED
        if manhattan(ant.position, target) != 1:
            return ActionError.NOT_ADJACENT
        if self.world.ant_at(target) is not None:
            return ActionError.CELL_OCCUPIED
        return None

    def can_move(self, ant: Optional[Ant], target: Position) -> bool:
        return self.check_move(ant, target) is None

    def check_attack(self, attacker: Optional[Ant],
                     target: Position) -> Optional[ActionError]:
        """Why the attack would be rejected, or None if it is legal."""
        error = self._check_actor(attacker)
        if error is not None:
            return error
        if not self.world.in_bounds(target):
            return ActionError.OUT_OF_BOUNDS
        if attacker.has_acted:
            return ActionError.ALREADY_ACTED
        if manhattan(attacker.position, target) != 1:
            return ActionError.NOT_ADJACENT
        defender = self.world.ant_at(target)
        if defender is None:
            return ActionError.NO_SUCH_UNIT
        if defender.player == attacker.player:
            return ActionError.INVALID_TARGET
        return None

    def can_attack(self, attacker: Optional[Ant], target: Position) -> bool:
        return self.check_attack(attacker, target) is None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_ant(self, ant: Optional[Ant]) -> ActionResult:
        error = self._check_actor(ant)
        if error is None and ant.has_acted:
            error = ActionError.ALREADY_ACTED
        if error is not None:
            return self._reject(ActionType.SELECT, error, ant)

        self.state.selected_ant_id = ant.ant_id
        return ActionResult.success(ActionType.SELECT, ant_id=ant.ant_id,
                                    target=ant.position)

    def deselect(self) -> ActionResult:
        self.state.selected_ant_id = None
        return ActionResult.success(ActionType.DESELECT)

    # ------------------------------------------------------------------
    # Unit actions
    # ------------------------------------------------------------------

    def move_ant(self, ant: Optional[Ant], target: Position) -> ActionResult:
        """Move an ant one cell, then resolve pickup and delivery in that order."""
        error = self.check_move(ant, target)
        if error is not None:
            return self._reject(ActionType.MOVE, error, ant, target)

        self.world.move_ant(ant.ant_id, target)
        result = ActionResult.success(ActionType.MOVE, ant_id=ant.ant_id,
                                      target=target)

        # Both clauses are evaluated, but they need opposite carrying states
        # at move start, so at most one fires.
        was_carrying = ant.is_carrying_food
        food = self.world.food_at(target)
        if food is not None and not was_carrying:
            self.world.remove_food(food.food_id)
            ant.is_carrying_food = True
            result.picked_up = True
        elif was_carrying and self.world.is_own_anthill(target, ant.player):
            ant.is_carrying_food = False
            self.state.scores[ant.player] += 1
            result.delivered = True

        ant.has_acted = True
        self.state.selected_ant_id = None
        logger.debug(result.describe())
        self._check_game_over()
        return result

    def attack_ant(self, attacker: Optional[Ant], target: Position) -> ActionResult:
        """Damage the enemy ant at target; a carried food item is destroyed."""
        error = self.check_attack(attacker, target)
        if error is not None:
            return self._reject(ActionType.ATTACK, error, attacker, target)

        defender = self.world.ant_at(target)
        before = defender.health
        defender.take_damage(attacker.attack_damage)
        defender.is_carrying_food = False
        attacker.has_acted = True

        result = ActionResult.success(ActionType.ATTACK, ant_id=attacker.ant_id,
                                      target=target,
                                      damage=before - defender.health)
        if not defender.is_alive:
            self.world.remove_ant(defender.ant_id)
            result.killed = True

        self.state.selected_ant_id = None
        logger.debug(result.describe())
        self._check_game_over()
        return result

    def pass_turn(self) -> ActionResult:
        """Refresh the outgoing player's ants and hand control over."""
        if self.state.is_over:
            return self._reject(ActionType.END_TURN, ActionError.GAME_ALREADY_OVER)

        outgoing = self.state.active_player
        self.state.selected_ant_id = None
        for ant in self.world.get_player_ants(outgoing):
            ant.has_acted = False
        self.state.flip_turn()
        logger.debug(f"Player {outgoing} ended turn; {self.state.turn_indicator}")

        self._check_game_over()
        return ActionResult.success(ActionType.END_TURN)

    # ------------------------------------------------------------------
    # Caller API (grid positions, as translated from pointer input)
    # ------------------------------------------------------------------

    def _caller_blocked(self) -> bool:
        return (not self.state.is_over
                and self.state.active_player in self.scripted_players)

    def select(self, pos: Position) -> ActionResult:
        if self._caller_blocked():
            return self._reject(ActionType.SELECT, ActionError.NOT_YOUR_TURN, target=pos)
        if not self.state.is_over and not self.world.in_bounds(pos):
            return self._reject(ActionType.SELECT, ActionError.OUT_OF_BOUNDS, target=pos)
        return self.select_ant(self.world.ant_at(pos))

    def end_turn(self) -> ActionResult:
        """End the caller's turn. Scripted sides end theirs with pass_turn."""
        if self._caller_blocked():
            return self._reject(ActionType.END_TURN, ActionError.NOT_YOUR_TURN)
        return self.pass_turn()

    def move(self, target: Position) -> ActionResult:
        """Move the selected ant."""
        return self._with_selection(ActionType.MOVE, target, self.move_ant)

    def attack(self, target: Position) -> ActionResult:
        """Attack with the selected ant."""
        return self._with_selection(ActionType.ATTACK, target, self.attack_ant)

    def click(self, pos: Position) -> ActionResult:
        """
        One tile click: select an own ready ant, otherwise use the current
        selection to move there, or to attack there if moving is illegal.
        """
        if self._caller_blocked():
            return self._reject(ActionType.SELECT, ActionError.NOT_YOUR_TURN, target=pos)
        if self.state.is_over:
            return self._reject(ActionType.SELECT, ActionError.GAME_ALREADY_OVER,
                                target=pos)

        clicked = self.world.ant_at(pos)
        if (clicked is not None and clicked.player == self.state.active_player
                and not clicked.has_acted):
            return self.select_ant(clicked)

        selected = self.selected_ant
        if selected is None:
            return self._reject(ActionType.MOVE, ActionError.NO_SELECTION, target=pos)
        if self.can_move(selected, pos):
            return self.move_ant(selected, pos)
        if self.can_attack(selected, pos):
            return self.attack_ant(selected, pos)
        return self.move_ant(selected, pos)  # Reports the move rejection

    def _with_selection(self, action: ActionType, target: Position,
                        apply) -> ActionResult:
        if self._caller_blocked():
            return self._reject(action, ActionError.NOT_YOUR_TURN, target=target)
        if self.state.is_over:
            return self._reject(action, ActionError.GAME_ALREADY_OVER, target=target)
        selected = self.selected_ant
        if selected is None:
            return self._reject(action, ActionError.NO_SELECTION, target=target)
        return apply(selected, target)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _reject(self, action: ActionType, error: ActionError,
                ant: Optional[Ant] = None,
                target: Optional[Position] = None) -> ActionResult:
        result = ActionResult.failure(
            action, error,
            ant_id=ant.ant_id if ant is not None else None,
            target=target,
        )
        logger.debug(result.describe())
        return result

    def _check_game_over(self):
        """Evaluate the win conditions; a recorded outcome is never replaced."""
        if self.state.is_over:
            return
        outcome = evaluate_outcome(
            self.world, self.state.scores, self.state.turn,
            max_turns=self.config.max_turns,
            end_when_food_exhausted=self.config.end_when_food_exhausted,
        )
        if outcome != Outcome.ONGOING:
            self.state.finish(outcome)
            logger.info(f"{self.state.message} Turn {self.state.turn}, "
                        f"scores {self.state.scores}")
