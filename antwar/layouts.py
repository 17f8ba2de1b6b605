"""
Spawn Layouts - Fixed hand-authored maps and randomized spawning.

Player 1 starts at the bottom of the grid (low y), player 2 at the top.
Fixed layouts are point-symmetric so neither side has a positional edge.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Set

import numpy as np

from antwar.entities import Position, PLAYER_ONE, PLAYER_TWO
from antwar.exceptions import ConfigError


@dataclass
class Layout:
    """Starting positions for every entity. Lists keep registration order."""
    width: int
    height: int
    anthills: Dict[int, List[Position]] = field(default_factory=dict)
    ants: Dict[int, List[Position]] = field(default_factory=dict)
    food: List[Position] = field(default_factory=list)


CLASSIC = Layout(
    width=10, height=10,
    anthills={
        PLAYER_ONE: [(5, 0)],
        PLAYER_TWO: [(4, 9)],
    },
    ants={
        PLAYER_ONE: [(2, 1), (4, 1), (6, 1), (8, 1)],
        PLAYER_TWO: [(7, 8), (5, 8), (3, 8), (1, 8)],
    },
    food=[(1, 3), (5, 3), (8, 4), (3, 4),
          (8, 6), (4, 6), (1, 5), (6, 5)],
)

ARENA = Layout(
    width=20, height=15,
    anthills={
        # 2x3 blocks on the left and right edges
        PLAYER_ONE: [(0, 6), (1, 6), (0, 7), (1, 7), (0, 8), (1, 8)],
        PLAYER_TWO: [(19, 8), (18, 8), (19, 7), (18, 7), (19, 6), (18, 6)],
    },
    ants={
        PLAYER_ONE: [(2, 5), (2, 7), (2, 9), (3, 6), (3, 8)],
        PLAYER_TWO: [(17, 9), (17, 7), (17, 5), (16, 8), (16, 6)],
    },
    food=[(6, 2), (9, 4), (6, 11), (9, 10), (7, 7),
          (13, 12), (10, 10), (13, 3), (10, 4), (12, 7)],
)

FIXED_LAYOUTS: Dict[str, Layout] = {
    "classic": CLASSIC,
    "arena": ARENA,
}


def random_free_cell(rng: np.random.Generator, width: int, rows: range,
                     forbidden: Set[Position]) -> Position:
    """Pick a random cell within the given rows that is not forbidden."""
    for _ in range(2000):
        x = int(rng.integers(0, width))
        y = int(rng.integers(rows.start, rows.stop))
        if (x, y) not in forbidden:
            return x, y

    # Fallback scan (deterministic)
    for y in rows:
        for x in range(width):
            if (x, y) not in forbidden:
                return x, y
    raise ConfigError("No free cell left to spawn into",
                      {"rows": f"{rows.start}..{rows.stop - 1}", "width": width})


def random_layout(config, rng: np.random.Generator) -> Layout:
    """
    Randomized spawn within each side's band of rows.

    Each player gets a single-cell anthill on its back row; ants spawn in
    the player's band, food in the rows between the two bands.
    """
    w, h, band = config.width, config.height, config.spawn_rows
    layout = Layout(width=w, height=h)
    layout.anthills[PLAYER_ONE] = [(w // 2, 0)]
    layout.anthills[PLAYER_TWO] = [(w - 1 - w // 2, h - 1)]

    taken: Set[Position] = set(layout.anthills[PLAYER_ONE] + layout.anthills[PLAYER_TWO])

    bands = {
        PLAYER_ONE: range(0, band),
        PLAYER_TWO: range(h - band, h),
    }
    for player in (PLAYER_ONE, PLAYER_TWO):
        cells = []
        for _ in range(config.ants_per_player):
            pos = random_free_cell(rng, w, bands[player], taken)
            taken.add(pos)
            cells.append(pos)
        layout.ants[player] = cells

    food_rows = range(band, h - band)
    for _ in range(config.food_count):
        pos = random_free_cell(rng, w, food_rows, taken)
        taken.add(pos)
        layout.food.append(pos)

    return layout


def build_layout(config, rng: np.random.Generator) -> Layout:
    """The fixed layout named by the config, or a fresh random one."""
    if config.layout is not None:
        layout = FIXED_LAYOUTS.get(config.layout)
        if layout is None:
            raise ConfigError(f"Unknown layout '{config.layout}'")
        return layout
    return random_layout(config, rng)
