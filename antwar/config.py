"""
Game Configuration - Setup options for a skirmish.

Defaults follow the classic 10x10 setup: four ants per side, eight food
items, three health per ant and a fifty turn limit. Every option can be
overridden from the environment with ANTWAR_* variables.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import os

from antwar.exceptions import ConfigError


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer", {"value": raw})


def _env_optional_limit(name: str, default: Optional[int]) -> Optional[int]:
    """Like _env_int, but '0' and 'none' disable the limit."""
    raw = os.getenv(name)
    if raw is not None and raw.strip().lower() in ("0", "none"):
        return None
    return _env_int(name, default)


@dataclass
class GameConfig:
    """Master configuration for one game session."""
    # Grid (used by randomized layouts only)
    width: int = 10
    height: int = 10

    # Spawning
    ants_per_player: int = 4
    food_count: int = 8
    spawn_rows: int = 2              # Depth of each side's spawn band
    layout: Optional[str] = None     # Fixed layout name, None = randomized
    seed: Optional[int] = None

    # Units
    max_health: int = 3
    attack_damage: int = 1

    # Win conditions
    max_turns: Optional[int] = 50    # None = no turn limit
    end_when_food_exhausted: bool = True

    @classmethod
    def from_env(cls) -> 'GameConfig':
        """Load from environment variables"""
        defaults = cls()
        layout = os.getenv('ANTWAR_LAYOUT') or None
        return cls(
            width=_env_int('ANTWAR_WIDTH', defaults.width),
            height=_env_int('ANTWAR_HEIGHT', defaults.height),
            ants_per_player=_env_int('ANTWAR_ANTS', defaults.ants_per_player),
            food_count=_env_int('ANTWAR_FOOD', defaults.food_count),
            layout=layout,
            seed=_env_int('ANTWAR_SEED', None),
            max_health=_env_int('ANTWAR_MAX_HEALTH', defaults.max_health),
            attack_damage=_env_int('ANTWAR_ATTACK_DAMAGE', defaults.attack_damage),
            max_turns=_env_optional_limit('ANTWAR_MAX_TURNS', defaults.max_turns),
        )

    def validate(self):
        """Raise ConfigError if this config cannot produce a playable world."""
        from antwar.layouts import FIXED_LAYOUTS

        if self.max_health <= 0:
            raise ConfigError("max_health must be positive",
                              {"max_health": self.max_health})
        if self.attack_damage <= 0:
            raise ConfigError("attack_damage must be positive",
                              {"attack_damage": self.attack_damage})
        if self.max_turns is not None and self.max_turns <= 0:
            raise ConfigError("max_turns must be positive or None",
                              {"max_turns": self.max_turns})

        if self.layout is not None:
            if self.layout not in FIXED_LAYOUTS:
                raise ConfigError(f"Unknown layout '{self.layout}'",
                                  {"known": ", ".join(sorted(FIXED_LAYOUTS))})
            return

        if self.width <= 0 or self.height <= 0:
            raise ConfigError("Grid dimensions must be positive",
                              {"width": self.width, "height": self.height})
        if self.spawn_rows <= 0 or 2 * self.spawn_rows >= self.height:
            raise ConfigError("Spawn bands must leave at least one row for food",
                              {"spawn_rows": self.spawn_rows, "height": self.height})
        if self.ants_per_player <= 0:
            raise ConfigError("ants_per_player must be positive",
                              {"ants_per_player": self.ants_per_player})
        if self.food_count < 0:
            raise ConfigError("food_count cannot be negative",
                              {"food_count": self.food_count})

        # One cell of each band is taken by the anthill
        band_cells = self.width * self.spawn_rows - 1
        if self.ants_per_player > band_cells:
            raise ConfigError("Too many ants for the spawn band",
                              {"ants_per_player": self.ants_per_player,
                               "band_cells": band_cells})
        food_cells = self.width * (self.height - 2 * self.spawn_rows)
        if self.food_count > food_cells:
            raise ConfigError("Too much food for the food band",
                              {"food_count": self.food_count,
                               "food_cells": food_cells})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
