"""
Entities - Ants, food and anthills.

Plain data records. They carry identity, ownership and status flags; all
rule logic lives in the engine, and all position bookkeeping in the world:
- Ant: mobile player unit with health, attack damage and per-turn flags
- Food: neutral item, consumed when an ant steps onto it
- Anthill: permanent player base covering one or more cells
"""

from dataclasses import dataclass, field
from typing import List, Tuple

Position = Tuple[int, int]

PLAYER_ONE = 1
PLAYER_TWO = 2


def opponent(player: int) -> int:
    """The other player id."""
    return PLAYER_TWO if player == PLAYER_ONE else PLAYER_ONE


@dataclass
class Ant:
    """A player-owned unit occupying one grid cell."""
    ant_id: int
    player: int            # 1 or 2
    x: int
    y: int
    max_health: int = 3
    health: int = -1       # -1 means start at max_health
    attack_damage: int = 1
    has_acted: bool = False
    is_carrying_food: bool = False

    def __post_init__(self):
        if self.health == -1:
            self.health = self.max_health

    @property
    def position(self) -> Position:
        return (self.x, self.y)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def take_damage(self, damage: int):
        """Apply damage to this ant, never dropping below zero."""
        self.health = max(0, self.health - damage)


@dataclass
class Food:
    food_id: int
    x: int
    y: int

    @property
    def position(self) -> Position:
        return (self.x, self.y)


@dataclass
class Anthill:
    """A fixed base. Tiles keep their authored order for tie-breaking."""
    anthill_id: int
    player: int
    tiles: List[Position] = field(default_factory=list)
