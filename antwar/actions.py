"""
Action System - Action types, results, error taxonomy and legality masks.

Every engine operation answers with an ActionResult. Illegal requests are
not exceptions: they come back with ok=False and an ActionError naming the
first rule that was broken, and they leave the game untouched.

Each ant may take one action (move or attack) per turn of its owner.
"""

from enum import IntEnum
from dataclasses import dataclass
from typing import Optional

import numpy as np

from antwar.entities import Ant, Position


class ActionType(IntEnum):
    SELECT = 0
    DESELECT = 1
    MOVE = 2
    ATTACK = 3
    END_TURN = 4
    RESTART = 5


class ActionError(IntEnum):
    """Why an action was rejected."""
    OUT_OF_BOUNDS = 1
    NOT_YOUR_TURN = 2
    ALREADY_ACTED = 3
    NOT_ADJACENT = 4
    CELL_OCCUPIED = 5
    NO_SUCH_UNIT = 6
    GAME_ALREADY_OVER = 7
    NO_SELECTION = 8
    INVALID_TARGET = 9


class Direction(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Direction offsets: (dx, dy). y grows toward player 2's side.
DIR_OFFSETS = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def step(pos: Position, direction: Direction) -> Position:
    dx, dy = DIR_OFFSETS[direction]
    return (pos[0] + dx, pos[1] + dy)


@dataclass
class Action:
    """A decision for one ant, as produced by the scripted AIs."""
    ant_id: int
    action_type: ActionType
    target: Optional[Position] = None


@dataclass
class ActionResult:
    """Outcome of one engine call. Truthy iff the action was applied."""
    ok: bool
    action: ActionType
    error: Optional[ActionError] = None
    ant_id: Optional[int] = None
    target: Optional[Position] = None
    picked_up: bool = False     # Move consumed a food item
    delivered: bool = False     # Move scored a delivery
    damage: int = 0             # Health removed by an attack
    killed: bool = False        # Attack removed the defender

    def __bool__(self):
        return self.ok

    @classmethod
    def success(cls, action: ActionType, **kwargs) -> 'ActionResult':
        return cls(ok=True, action=action, **kwargs)

    @classmethod
    def failure(cls, action: ActionType, error: ActionError,
                **kwargs) -> 'ActionResult':
        return cls(ok=False, action=action, error=error, **kwargs)

    def describe(self) -> str:
        """Short human-readable summary for logs and text UIs."""
        where = f" -> {self.target}" if self.target is not None else ""
        who = f" ant {self.ant_id}" if self.ant_id is not None else ""
        if not self.ok:
            return f"{self.action.name}{who}{where} rejected: {self.error.name}"
        extras = []
        if self.picked_up:
            extras.append("picked up food")
        if self.delivered:
            extras.append("delivered food")
        if self.damage:
            extras.append(f"dealt {self.damage}")
        if self.killed:
            extras.append("killed")
        suffix = f" ({', '.join(extras)})" if extras else ""
        return f"{self.action.name}{who}{where}{suffix}"


def get_valid_actions_mask(ant: Ant, world) -> np.ndarray:
    """
    Geometric legality of each cardinal action for one ant.

    Returns a (2, 4) int8 array: row 0 marks legal moves, row 1 legal
    attacks, columns in Direction order. Turn ownership and game-over are
    the engine's concern and are not reflected here.
    """
    mask = np.zeros((2, len(Direction)), dtype=np.int8)
    if ant.has_acted or not ant.is_alive:
        return mask  # Spent ants can do nothing

    for d in Direction:
        target = step(ant.position, d)
        if not world.in_bounds(target):
            continue
        other = world.ant_at(target)
        if other is None:
            mask[0, d] = 1
        elif other.player != ant.player:
            mask[1, d] = 1
    return mask
