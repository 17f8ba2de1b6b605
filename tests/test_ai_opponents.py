"""
Tests for the scripted opponents and the command-line host.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from antwar.actions import Action, ActionError, ActionType
from antwar.ai_opponents import AI_CLASSES, GreedyAI, RandomAI, greedy_step
from antwar.config import GameConfig
from antwar.engine import TurnEngine
from antwar.entities import PLAYER_ONE, PLAYER_TWO
from antwar.grid_world import GridWorld
from antwar.outcome import Outcome
from antwar import play


def make_engine(width=10, height=10, **overrides):
    params = dict(layout="classic", max_turns=None, end_when_food_exhausted=False)
    params.update(overrides)
    engine = TurnEngine(GameConfig(**params))
    engine.world = GridWorld(width, height)
    return engine


def play_out(engine, bots, max_actions=5000):
    """Play until game over, returning the board snapshot after every action."""
    history = []
    while not engine.is_over:
        for result in bots[engine.active_player].take_turn(engine):
            assert result
            history.append(engine.world.snapshot())
            assert len(history) < max_actions
    return history


def assert_world_consistent(engine):
    world = engine.world
    positions = [a.position for a in world.ants.values()]
    assert len(positions) == len(set(positions))
    for ant in world.ants.values():
        assert 0 < ant.health <= ant.max_health
        assert world.in_bounds(ant.position)
        assert world.ant_at(ant.position) is ant
    for food in world.foods.values():
        assert world.food_at(food.position) is food
        assert world.anthill_at(food.position) is None


class TestGreedyStep:
    def test_larger_axis_wins(self):
        assert greedy_step((0, 0), (3, 1)) == (1, 0)
        assert greedy_step((0, 0), (1, 3)) == (0, 1)
        assert greedy_step((5, 5), (3, 5)) == (4, 5)
        assert greedy_step((0, 0), (-2, 1)) == (-1, 0)

    def test_ties_go_to_y(self):
        assert greedy_step((0, 0), (1, 1)) == (0, 1)
        assert greedy_step((4, 4), (2, 2)) == (4, 3)

    def test_vertical_only(self):
        assert greedy_step((2, 2), (2, 0)) == (2, 1)

    def test_no_step_at_target(self):
        assert greedy_step((2, 2), (2, 2)) is None


class TestGreedyAI:
    def setup_method(self):
        self.engine = make_engine()
        self.world = self.engine.world
        self.ai = GreedyAI()

    def test_attack_first_direction(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (6, 5))
        self.world.add_ant(PLAYER_TWO, (5, 6))
        self.world.add_food((5, 4))
        action = self.ai.decide(self.engine, ant)
        assert action == Action(ant.ant_id, ActionType.ATTACK, (5, 6))

    def test_attack_scan_order(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (4, 5))
        self.world.add_ant(PLAYER_TWO, (5, 4))
        assert self.ai.decide(self.engine, ant).target == (5, 4)

    def test_carrier_heads_home(self):
        self.world.add_anthill(PLAYER_ONE, [(0, 5)])
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        ant.is_carrying_food = True
        self.world.add_ant(PLAYER_TWO, (9, 9))
        self.world.add_food((6, 5))
        action = self.ai.decide(self.engine, ant)
        assert action == Action(ant.ant_id, ActionType.MOVE, (4, 5))

    def test_nearest_anthill_tie_goes_to_first_tile(self):
        self.world.add_anthill(PLAYER_ONE, [(5, 8), (5, 2)])
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        ant.is_carrying_food = True
        self.world.add_ant(PLAYER_TWO, (0, 9))
        assert self.ai.decide(self.engine, ant).target == (5, 6)

    def test_forage_nearest_food(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (0, 9))
        self.world.add_food((5, 1))
        self.world.add_food((8, 5))
        assert self.ai.decide(self.engine, ant).target == (6, 5)

    def test_food_tie_goes_to_first_listed(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (0, 9))
        self.world.add_food((5, 7))
        self.world.add_food((5, 3))
        assert self.ai.decide(self.engine, ant).target == (5, 6)

    def test_blocked_step_idles(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_ONE, (6, 5))
        self.world.add_ant(PLAYER_TWO, (0, 9))
        self.world.add_food((7, 5))
        assert self.ai.decide(self.engine, ant) is None

    def test_centre_fallback(self):
        ant = self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        assert self.ai.decide(self.engine, ant).target == (0, 1)

    def test_idle_at_centre(self):
        ant = self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        assert self.ai.decide(self.engine, ant) is None


class TestTakeTurn:
    def setup_method(self):
        self.engine = make_engine()
        self.world = self.engine.world
        self.ai = GreedyAI()

    def test_yields_actions_then_end_turn(self):
        self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_ONE, (9, 0))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        results = list(self.ai.take_turn(self.engine))
        assert [r.action for r in results] == \
            [ActionType.MOVE, ActionType.MOVE, ActionType.END_TURN]
        assert self.engine.active_player == PLAYER_TWO

    def test_registration_order_decides_conflicts(self):
        first = self.world.add_ant(PLAYER_ONE, (4, 5))
        second = self.world.add_ant(PLAYER_ONE, (6, 5))
        self.world.add_ant(PLAYER_TWO, (0, 9))
        self.world.add_food((5, 5))
        results = self.ai.play_turn(self.engine)
        assert first.is_carrying_food
        assert first.position == (5, 5)
        # Centre is now taken, so the second ant has nowhere to go
        assert second.position == (6, 5)
        assert len(results) == 2

    def test_skips_spent_ants(self):
        ant = self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        ant.has_acted = True
        results = self.ai.play_turn(self.engine)
        assert [r.action for r in results] == [ActionType.END_TURN]
        assert ant.position == (0, 0)

    def test_stops_when_game_ends(self):
        self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_ONE, (5, 5))
        self.world.add_ant(PLAYER_TWO, (1, 0), max_health=1)
        results = self.ai.play_turn(self.engine)
        assert len(results) == 1
        assert results[0].killed
        assert self.engine.outcome == Outcome.PLAYER1_WINS
        assert self.world.ant_at((5, 5)) is not None  # Never got to act

    def test_on_action_callback(self):
        self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        seen = []
        results = self.ai.play_turn(self.engine, on_action=seen.append)
        assert seen == results

    def test_generator_does_nothing_until_resumed(self):
        ant = self.world.add_ant(PLAYER_ONE, (0, 0))
        self.world.add_ant(PLAYER_TWO, (9, 9))
        turn = self.ai.take_turn(self.engine)
        assert ant.position == (0, 0)
        next(turn)
        assert ant.position == (0, 1)
        assert self.engine.active_player == PLAYER_ONE
        next(turn)
        assert self.engine.active_player == PLAYER_TWO
        with pytest.raises(StopIteration):
            next(turn)

    def test_suspended_turn_cannot_be_ended_by_caller(self):
        engine = TurnEngine(GameConfig(layout="classic"), scripted_players=(PLAYER_TWO,))
        assert engine.end_turn()
        turn = self.ai.take_turn(engine)
        first = next(turn)
        assert first.action == ActionType.MOVE
        assert engine.end_turn().error == ActionError.NOT_YOUR_TURN
        assert engine.active_player == PLAYER_TWO
        rest = list(turn)
        assert rest[-1].action == ActionType.END_TURN
        assert engine.active_player == PLAYER_ONE
        assert engine.turn == 2

    def test_turn_stops_once_control_has_moved_on(self):
        engine = TurnEngine(GameConfig(layout="classic"), scripted_players=(PLAYER_TWO,))
        engine.end_turn()
        turn = self.ai.take_turn(engine)
        next(turn)
        engine.pass_turn()
        assert list(turn) == []
        assert engine.active_player == PLAYER_ONE
        assert engine.turn == 2
        assert not any(a.has_acted for a in engine.world.get_player_ants(PLAYER_ONE))


class TestFullGames:
    @pytest.mark.parametrize("layout", ["classic", "arena"])
    def test_greedy_is_deterministic(self, layout):
        histories = []
        for _ in range(2):
            engine = TurnEngine(GameConfig(layout=layout, max_turns=30),
                                scripted_players=(PLAYER_ONE, PLAYER_TWO))
            bots = {PLAYER_ONE: GreedyAI(), PLAYER_TWO: GreedyAI()}
            histories.append((play_out(engine, bots), engine.outcome))
        assert histories[0] == histories[1]
        assert histories[0][1] != Outcome.ONGOING

    def test_random_is_seeded(self):
        histories = []
        for _ in range(2):
            engine = TurnEngine(GameConfig(seed=3, max_turns=20))
            bots = {PLAYER_ONE: RandomAI(seed=1), PLAYER_TWO: RandomAI(seed=2)}
            histories.append(play_out(engine, bots))
        assert histories[0] == histories[1]

    @pytest.mark.parametrize("seed", range(5))
    def test_random_play_keeps_world_consistent(self, seed):
        engine = TurnEngine(GameConfig(seed=seed, max_turns=30))
        bots = {PLAYER_ONE: RandomAI(seed=seed), PLAYER_TWO: RandomAI(seed=seed + 100)}
        while not engine.is_over:
            for result in bots[engine.active_player].take_turn(engine):
                assert result
                assert_world_consistent(engine)
            assert engine.turn <= 31
        assert engine.is_over

    def test_registry(self):
        assert set(AI_CLASSES) == {"greedy", "random"}
        assert isinstance(play.make_ai("random", 4), RandomAI)
        assert isinstance(play.make_ai("greedy"), GreedyAI)


class TestCommandLine:
    def test_evaluate(self, capsys):
        assert play.main(["evaluate", "--games", "3", "--p1", "random",
                          "--max-turns", "10"]) == 0
        out = capsys.readouterr().out
        assert "over 3 games" in out

    def test_evaluate_tally(self):
        args = play.create_parser().parse_args(
            ["evaluate", "--games", "4", "--layout", "classic", "--max-turns", "15"])
        tally = play.evaluate(args)
        assert sum(tally.values()) == 4

    def test_demo(self, capsys):
        assert play.main(["demo", "--layout", "classic", "--max-turns", "3"]) == 0
        out = capsys.readouterr().out
        assert "DEMO: GREEDY vs GREEDY" in out
        assert "Game Over" in out

    def test_bot_games_need_turn_limit(self, capsys):
        assert play.main(["demo", "--max-turns", "0"]) == 2
        assert "turn limit" in capsys.readouterr().err

    def test_human_session(self, monkeypatch, capsys):
        import io
        commands = "select 2 1\nmove 2 2\nend\nbogus\nquit\n"
        monkeypatch.setattr(sys, "stdin", io.StringIO(commands))
        assert play.main(["human", "--layout", "classic"]) == 0
        out = capsys.readouterr().out
        assert "SELECT ant" in out
        assert "MOVE ant" in out
        assert "Turn 2 - Player 1" in out


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
