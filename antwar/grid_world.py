"""
Grid World - Spatial registry of every live entity.

Each cell can contain:
- Nothing
- A food item
- An anthill tile
- An ant (at most one), possibly standing on an anthill tile

Ants standing on anthill tiles is the only permitted co-location. Every
entity kind has its own coordinate-keyed index, so occupancy queries are
O(1). Entity dicts preserve registration order, which the scripted AI
relies on for stable unit ordering.
"""

from typing import Dict, List, Optional, Tuple, Union

from antwar.entities import Ant, Food, Anthill, Position
from antwar.exceptions import WorldInvariantError

Occupant = Union[Ant, Food, Anthill, None]


class GridWorld:
    """Fixed-size grid holding ants, food and anthills."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.ants: Dict[int, Ant] = {}          # ant_id -> Ant
        self.foods: Dict[int, Food] = {}        # food_id -> Food
        self.anthills: Dict[int, Anthill] = {}  # anthill_id -> Anthill
        self._next_id = 0
        # Spatial indexes: (x, y) -> entity id
        self._ant_index: Dict[Position, int] = {}
        self._food_index: Dict[Position, int] = {}
        self._hill_index: Dict[Position, int] = {}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    is_in_bounds = in_bounds

    @property
    def center(self) -> Position:
        return (self.width // 2, self.height // 2)

    def ant_at(self, pos: Position) -> Optional[Ant]:
        aid = self._ant_index.get(pos)
        if aid is not None:
            return self.ants.get(aid)
        return None

    def food_at(self, pos: Position) -> Optional[Food]:
        fid = self._food_index.get(pos)
        if fid is not None:
            return self.foods.get(fid)
        return None

    def anthill_at(self, pos: Position) -> Optional[Anthill]:
        hid = self._hill_index.get(pos)
        if hid is not None:
            return self.anthills.get(hid)
        return None

    def occupant_at(self, pos: Position) -> Occupant:
        """
        What stands on a cell: an Ant, Food, Anthill (tile) or None.

        An ant on its own anthill is reported as the ant.
        """
        return self.ant_at(pos) or self.food_at(pos) or self.anthill_at(pos)

    def is_own_anthill(self, pos: Position, player: int) -> bool:
        hill = self.anthill_at(pos)
        return hill is not None and hill.player == player

    def get_player_ants(self, player: int) -> List[Ant]:
        """Live ants of a player, in registration order."""
        return [a for a in self.ants.values() if a.player == player and a.is_alive]

    def get_foods(self) -> List[Food]:
        """Food items in registration order."""
        return list(self.foods.values())

    @property
    def food_count(self) -> int:
        return len(self.foods)

    def any_carrying(self) -> bool:
        return any(a.is_carrying_food for a in self.ants.values())

    def anthill_tiles(self, player: int) -> List[Position]:
        """All tiles of a player's anthills, in authored tile order."""
        tiles = []
        for hill in self.anthills.values():
            if hill.player == player:
                tiles.extend(hill.tiles)
        return tiles

    def adjacent_positions(self, pos: Position) -> List[Position]:
        """In-bounds cardinal neighbours (up, down, left, right)."""
        x, y = pos
        dirs = [(0, 1), (0, -1), (-1, 0), (1, 0)]
        return [(x + dx, y + dy) for dx, dy in dirs
                if self.in_bounds((x + dx, y + dy))]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _take_id(self) -> int:
        eid = self._next_id
        self._next_id += 1
        return eid

    def _check_bounds(self, pos: Position, what: str):
        if not self.in_bounds(pos):
            raise WorldInvariantError(f"{what} placed out of bounds",
                                      {"pos": pos, "size": (self.width, self.height)})

    def add_ant(self, player: int, pos: Position, max_health: int = 3,
                attack_damage: int = 1) -> Ant:
        """Register a new ant. Ants may stand on anthill tiles, nothing else."""
        self._check_bounds(pos, "Ant")
        if pos in self._ant_index:
            raise WorldInvariantError("Two ants cannot share a cell", {"pos": pos})
        if pos in self._food_index:
            raise WorldInvariantError("Ant placed on a food cell", {"pos": pos})

        ant = Ant(ant_id=self._take_id(), player=player, x=pos[0], y=pos[1],
                  max_health=max_health, attack_damage=attack_damage)
        self.ants[ant.ant_id] = ant
        self._ant_index[pos] = ant.ant_id
        return ant

    def add_food(self, pos: Position) -> Food:
        self._check_bounds(pos, "Food")
        if pos in self._food_index:
            raise WorldInvariantError("Two food items cannot share a cell", {"pos": pos})
        if pos in self._ant_index or pos in self._hill_index:
            raise WorldInvariantError("Food placed on an occupied cell", {"pos": pos})

        food = Food(food_id=self._take_id(), x=pos[0], y=pos[1])
        self.foods[food.food_id] = food
        self._food_index[pos] = food.food_id
        return food

    def add_anthill(self, player: int, tiles: List[Position]) -> Anthill:
        if not tiles:
            raise WorldInvariantError("Anthill needs at least one tile",
                                      {"player": player})
        for pos in tiles:
            self._check_bounds(pos, "Anthill")
            if pos in self._hill_index or pos in self._food_index:
                raise WorldInvariantError("Anthill tile overlaps another entity",
                                          {"pos": pos})

        hill = Anthill(anthill_id=self._take_id(), player=player, tiles=list(tiles))
        self.anthills[hill.anthill_id] = hill
        for pos in tiles:
            self._hill_index[pos] = hill.anthill_id
        return hill

    def move_ant(self, ant_id: int, pos: Position) -> Ant:
        """Relocate an ant. The target must be in bounds and free of ants."""
        ant = self.ants.get(ant_id)
        if ant is None:
            raise WorldInvariantError("Cannot move a removed ant", {"ant_id": ant_id})
        self._check_bounds(pos, "Ant")
        other = self._ant_index.get(pos)
        if other is not None and other != ant_id:
            raise WorldInvariantError("Two ants cannot share a cell",
                                      {"pos": pos, "ant_id": ant_id, "other": other})

        self._ant_index.pop(ant.position, None)
        ant.x, ant.y = pos
        self._ant_index[pos] = ant_id
        return ant

    def remove_ant(self, ant_id: int) -> Optional[Ant]:
        """Remove an ant. Removing an unknown id is a no-op returning None."""
        ant = self.ants.pop(ant_id, None)
        if ant:
            self._ant_index.pop(ant.position, None)
        return ant

    def remove_food(self, food_id: int) -> Optional[Food]:
        """Remove a food item. Removing an unknown id is a no-op returning None."""
        food = self.foods.pop(food_id, None)
        if food:
            self._food_index.pop(food.position, None)
        return food

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_layout(cls, layout, max_health: int = 3,
                    attack_damage: int = 1) -> 'GridWorld':
        """
        Build a world from a Layout.

        Anthills are registered first, then player 1 ants, player 2 ants and
        finally food, each in the layout's listed order.
        """
        world = cls(layout.width, layout.height)
        for player in sorted(layout.anthills):
            world.add_anthill(player, layout.anthills[player])
        for player in sorted(layout.ants):
            for pos in layout.ants[player]:
                world.add_ant(player, pos, max_health=max_health,
                              attack_damage=attack_damage)
        for pos in layout.food:
            world.add_food(pos)
        return world

    def snapshot(self) -> Tuple:
        """Hashable summary of all entity state, used to detect mutation."""
        ants = tuple((a.ant_id, a.player, a.x, a.y, a.health,
                      a.has_acted, a.is_carrying_food)
                     for a in self.ants.values())
        foods = tuple((f.food_id, f.x, f.y) for f in self.foods.values())
        return ants, foods
