"""
Game Renderer - ASCII visualization of the board.

Renders the grid as text for the command-line host and for logs. Row
height-1 (player 2's side) is printed first so player 1 sits at the bottom.
"""

from antwar.entities import PLAYER_ONE, PLAYER_TWO


# Uppercase for player 1, lowercase for player 2
ANT_SYMBOL = 'A'
CARRYING_SYMBOL = 'C'
ANTHILL_SYMBOL = 'H'
FOOD_SYMBOL = '*'
EMPTY_SYMBOL = '.'


def _owned(symbol: str, player: int) -> str:
    return symbol.upper() if player == PLAYER_ONE else symbol.lower()


class GameRenderer:
    """ASCII renderer for a TurnEngine."""

    @staticmethod
    def render(engine, show_info: bool = True) -> str:
        world, state = engine.world, engine.state
        w, h = world.width, world.height
        lines = []

        if show_info:
            lines.append(f"{state.turn_indicator}  "
                         f"P1 score: {state.scores[PLAYER_ONE]}  "
                         f"P2 score: {state.scores[PLAYER_TWO]}")
            lines.append(f"P1 ants: {len(world.get_player_ants(PLAYER_ONE))}  "
                         f"P2 ants: {len(world.get_player_ants(PLAYER_TWO))}  "
                         f"Food: {world.food_count}")
            lines.append("")

        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))
        lines.append("  " + "-" * w)

        for y in reversed(range(h)):
            row = f"{y % 10}|"
            for x in range(w):
                ant = world.ant_at((x, y))
                if ant is not None:
                    sym = CARRYING_SYMBOL if ant.is_carrying_food else ANT_SYMBOL
                    row += _owned(sym, ant.player)
                elif world.food_at((x, y)) is not None:
                    row += FOOD_SYMBOL
                else:
                    hill = world.anthill_at((x, y))
                    row += _owned(ANTHILL_SYMBOL, hill.player) if hill else EMPTY_SYMBOL
            row += f"|{y % 10}"
            lines.append(row)

        lines.append("  " + "-" * w)
        lines.append("  " + "".join(f"{x % 10}" for x in range(w)))

        if show_info:
            lines.append("")
            lines.append("Legend: A=Ant C=Carrying H=Anthill *=Food")
            lines.append("        UPPER=P1  lower=P2")
            if state.is_over:
                lines.append(f"\n*** {state.message} ***")

        return "\n".join(lines)

    @staticmethod
    def render_compact(engine) -> str:
        """Compact single-line rendering for logging."""
        world, state = engine.world, engine.state
        return (f"T{state.turn:04d} "
                f"P1[a={len(world.get_player_ants(PLAYER_ONE))} "
                f"s={state.scores[PLAYER_ONE]}] "
                f"P2[a={len(world.get_player_ants(PLAYER_TWO))} "
                f"s={state.scores[PLAYER_TWO]}] "
                f"food={world.food_count}")

    @staticmethod
    def render_ant_details(engine, player: int) -> str:
        """Render detailed ant info for a player."""
        lines = [f"Player {player} ants:"]
        for ant in engine.world.get_player_ants(player):
            extra = ""
            if ant.is_carrying_food:
                extra += " [carrying]"
            if ant.has_acted:
                extra += " [acted]"
            lines.append(f"  #{ant.ant_id} ({ant.x},{ant.y}) "
                         f"HP={ant.health}/{ant.max_health}{extra}")
        return "\n".join(lines)
