"""
Interactive Play Script - Watch the bots play or play against one.

Usage:
    python -m antwar.play                          # Greedy vs Greedy demo
    python -m antwar.play demo --p1 random         # Random vs Greedy
    python -m antwar.play human --layout arena     # You (P1) vs Greedy
    python -m antwar.play evaluate --games 50      # Win tally over seeded games
"""

import argparse
import logging
import sys
import time
from collections import Counter

from antwar.ai_opponents import AI_CLASSES
from antwar.config import GameConfig
from antwar.engine import TurnEngine
from antwar.entities import PLAYER_ONE, PLAYER_TWO, opponent
from antwar.exceptions import ConfigError
from antwar.outcome import Outcome
from antwar.renderer import GameRenderer

HELP_TEXT = """Commands:
  select X Y   select your ant at (X, Y)
  move X Y     move the selected ant
  attack X Y   attack with the selected ant
  click X Y    select, move or attack, like clicking a tile
  end          end your turn
  restart      start a new game
  quit         leave"""


def make_ai(name: str, seed=None):
    if name == "random":
        return AI_CLASSES[name](seed=seed)
    return AI_CLASSES[name]()


def build_config(args) -> GameConfig:
    config = GameConfig.from_env()
    if args.layout:
        config.layout = args.layout
    if args.seed is not None:
        config.seed = args.seed
    if args.max_turns is not None:
        config.max_turns = args.max_turns or None
    return config


def build_bot_config(args) -> GameConfig:
    """Bot-only games must be guaranteed to end."""
    config = build_config(args)
    if config.max_turns is None:
        raise ConfigError("Bot-only games need a turn limit")
    return config


def demo_game(args):
    """Run a game between two scripted AIs, rendering after every turn."""
    bots = {PLAYER_ONE: make_ai(args.p1, args.seed), PLAYER_TWO: make_ai(args.p2, args.seed)}
    print("=" * 60)
    print(f"DEMO: {args.p1.upper()} vs {args.p2.upper()}")
    print("=" * 60)

    engine = TurnEngine(build_bot_config(args), scripted_players=(PLAYER_ONE, PLAYER_TWO))
    print(GameRenderer.render(engine))

    def pace(player, result):
        print(f"  P{player} {result.describe()}")
        if args.delay > 0:
            time.sleep(args.delay)

    while not engine.is_over:
        player = engine.active_player
        print(f"\n--- {engine.state.turn_indicator} ---")
        bots[player].play_turn(engine, on_action=lambda r: pace(player, r))
        print(GameRenderer.render(engine))

    print(f"\n{'=' * 60}")
    print(engine.message)
    print(GameRenderer.render_compact(engine))


def _parse_pos(parts):
    if len(parts) != 3:
        raise ValueError("expected X and Y")
    return int(parts[1]), int(parts[2])


def human_game(args):
    """Player 1 is read from stdin, player 2 is a scripted AI."""
    bot_player = opponent(PLAYER_ONE)
    bot = make_ai(args.p2, args.seed)
    engine = TurnEngine(build_config(args), scripted_players=(bot_player,))
    print(HELP_TEXT)
    print(GameRenderer.render(engine))

    for line in sys.stdin:
        parts = line.split()
        if not parts:
            continue
        cmd = parts[0].lower()
        if cmd == "quit":
            break

        try:
            if cmd in ("select", "move", "attack", "click"):
                result = getattr(engine, cmd)(_parse_pos(parts))
            elif cmd == "end":
                result = engine.end_turn()
            elif cmd == "restart":
                result = engine.restart()
            else:
                print(HELP_TEXT)
                continue
        except ValueError as e:
            print(f"Bad command: {e}")
            continue

        print(result.describe())

        if engine.active_player == bot_player and not engine.is_over:
            bot.play_turn(engine, on_action=lambda r: print(f"  P{bot_player} {r.describe()}"))

        print(GameRenderer.render(engine))
        if engine.is_over:
            print("Type 'restart' to play again or 'quit' to leave.")


def evaluate(args):
    """Play seeded games between two bots and tally the outcomes."""
    tally = Counter()
    base_seed = args.seed or 0
    for i in range(args.games):
        config = build_bot_config(args)
        config.seed = base_seed + i
        engine = TurnEngine(config, scripted_players=(PLAYER_ONE, PLAYER_TWO))
        bots = {PLAYER_ONE: make_ai(args.p1, config.seed),
                PLAYER_TWO: make_ai(args.p2, config.seed)}
        while not engine.is_over:
            bots[engine.active_player].play_turn(engine)
        tally[engine.outcome] += 1
        logging.getLogger(__name__).debug(
            f"Game {i}: {engine.message} {GameRenderer.render_compact(engine)}")

    print(f"{args.p1.upper()} (P1) vs {args.p2.upper()} (P2) over {args.games} games:")
    print(f"  P1 wins: {tally[Outcome.PLAYER1_WINS]}")
    print(f"  P2 wins: {tally[Outcome.PLAYER2_WINS]}")
    print(f"  Ties:    {tally[Outcome.TIE]}")
    return tally


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='antwar',
                                     description='Turn-based ant colony skirmish')
    parser.add_argument('mode', nargs='?', default='demo',
                        choices=['demo', 'human', 'evaluate'])
    parser.add_argument('--p1', default='greedy', choices=sorted(AI_CLASSES),
                        help='Player 1 AI for demo/evaluate (default: greedy)')
    parser.add_argument('--p2', default='greedy', choices=sorted(AI_CLASSES),
                        help='Player 2 AI (default: greedy)')
    parser.add_argument('--layout', default=None, choices=['classic', 'arena'],
                        help='Fixed layout (default: randomized spawn)')
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--max-turns', type=int, default=None,
                        help='Turn limit, 0 disables it')
    parser.add_argument('--delay', type=float, default=0.0,
                        help='Pause between AI actions in seconds')
    parser.add_argument('--games', type=int, default=20,
                        help='Games to play in evaluate mode')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    return parser


def main(argv=None):
    args = create_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s %(message)s',
    )

    try:
        if args.mode == 'human':
            human_game(args)
        elif args.mode == 'evaluate':
            evaluate(args)
        else:
            demo_game(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == '__main__':
    sys.exit(main())
