"""评估模块测试"""
import io
import random

import pytest
import torch

from core.cards import Card, Suit, Rank
from core.actions import Play, PlayType
from core.state import Hand
from models import PolicyNetwork
from evaluation import (
    EvalResult,
    Agent,
    RandomAgent,
    RuleBasedAgent,
    ModelAgent,
    Evaluator,
    Arena,
    MatchResult,
)


def _hand(ranks, visibility):
    return Hand(cards=[Card(Suit.SPADES, r) for r in ranks], visibility=list(visibility))


class _FixedAgent(Agent):
    """总是执行同一个动作"""

    def __init__(self, name, play):
        super().__init__(name)
        self.play = play

    def act(self, hand, faceup):
        return self.play


class TestAgents:
    """智能体测试"""

    def test_base_agent_abstract(self):
        with pytest.raises(NotImplementedError):
            Agent().act(_hand([Rank.ACE] * 6, [True] * 6), Card(Suit.HEARTS, Rank.ACE))

    def test_random_agent_valid_plays(self):
        agent = RandomAgent(rng=random.Random(0))
        hand = _hand([Rank.ACE] * 6, [False] * 6)
        seen = set()
        for _ in range(200):
            play = agent(hand, Card(Suit.HEARTS, Rank.TWO))
            if not play.is_nop:
                assert 0 <= play.position < 6
            seen.add(play.play_type)
        assert seen == {PlayType.NOP, PlayType.SWAP_DISCARD, PlayType.DRAW}

    def test_rule_swaps_worst_visible(self):
        agent = RuleBasedAgent()
        hand = _hand(
            [Rank.ACE, Rank.NINE, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE],
            [True, True, False, False, False, False],
        )
        assert agent.act(hand, Card(Suit.HEARTS, Rank.THREE)) == Play.swap_discard(1)

    def test_rule_takes_low_card_into_hidden(self):
        agent = RuleBasedAgent()
        hand = _hand(
            [Rank.ACE, Rank.KING, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE],
            [True, True, False, False, False, False],
        )
        assert agent.act(hand, Card(Suit.HEARTS, Rank.THREE)) == Play.swap_discard(2)

    def test_rule_draws_into_hidden(self):
        agent = RuleBasedAgent()
        hand = _hand(
            [Rank.ACE, Rank.KING, Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE],
            [True, True, True, False, False, False],
        )
        assert agent.act(hand, Card(Suit.HEARTS, Rank.NINE)) == Play.draw(3)

    def test_rule_nop_on_good_hand(self):
        agent = RuleBasedAgent()
        hand = _hand([Rank.KING, Rank.ACE, Rank.ACE, Rank.TWO, Rank.KING, Rank.KING], [True] * 6)
        assert agent.act(hand, Card(Suit.HEARTS, Rank.QUEEN)) == Play.nop()

    def test_model_agent(self):
        net = PolicyNetwork(generator=torch.Generator().manual_seed(0))
        agent = ModelAgent(net, name="net")
        hand = _hand([Rank.ACE] * 6, [True, True, False, False, False, False])
        play = agent(hand, Card(Suit.HEARTS, Rank.FIVE))
        assert isinstance(play, Play)
        assert play == agent(hand, Card(Suit.HEARTS, Rank.FIVE))


class TestEvaluator:
    """Evaluator 测试"""

    def test_evaluate_against_random(self):
        evaluator = Evaluator(holes=6, seed=0)
        result = evaluator.evaluate(RuleBasedAgent(), n_games=20)
        assert isinstance(result, EvalResult)
        assert result.games_played == 20
        assert len(result.scores) == 20
        assert 0.0 <= result.win_rate <= 1.0
        assert result.avg_score == pytest.approx(sum(result.scores) / 20)

    def test_seeded_evaluation_reproducible(self):
        a = Evaluator(holes=6, seed=3).evaluate(RuleBasedAgent(), n_games=10)
        b = Evaluator(holes=6, seed=3).evaluate(RuleBasedAgent(), n_games=10)
        assert a.scores == b.scores

    def test_solo_always_wins(self):
        result = Evaluator(holes=3, seed=1).evaluate(_FixedAgent("a", Play.nop()), [], n_games=5)
        assert result.win_rate == 1.0

    def test_seats_rotate(self):
        seats = []

        class _Recorder(Agent):
            def act(self, hand, faceup):
                seats.append(self.name)
                return Play.nop()

        Evaluator(holes=1, seed=2).evaluate(_Recorder("me"), [_Recorder("opp")], n_games=2)
        assert seats == ["me", "opp", "opp", "me"]

    def test_zero_games(self):
        result = Evaluator(seed=0).evaluate(RuleBasedAgent(), n_games=0)
        assert result.games_played == 0
        assert result.win_rate == 0.0


class TestArena:
    """Arena 测试"""

    def test_play_match(self):
        arena = Arena(holes=4)
        result = arena.play_match(
            [RuleBasedAgent("rule"), RandomAgent("rand", random.Random(0))],
            random.Random(1),
        )
        assert isinstance(result, MatchResult)
        assert result.agents == ("rule", "rand")
        assert len(result.scores) == 2
        assert len(result.turns) == 8
        assert set(result.winners) <= {"rule", "rand"}

    def test_turn_records(self):
        arena = Arena(holes=2)
        result = arena.play_match(
            [_FixedAgent("a", Play.nop()), _FixedAgent("b", Play.draw(1))],
            random.Random(2),
        )
        assert [(t.hole, t.player) for t in result.turns] == [(0, 0), (0, 1), (1, 0), (1, 1)]
        assert all(t.play == Play.nop() for t in result.turns if t.player == 0)
        assert result.turns[-1].score == result.scores[1]

    def test_render(self):
        stream = io.StringIO()
        arena = Arena(holes=1, render=True, stream=stream, color=False)
        arena.play_match([_FixedAgent("alice", Play.draw(0)), _FixedAgent("bob", Play.nop())],
                         random.Random(3))
        text = stream.getvalue()
        assert "alice" in text
        assert "bob" in text
        assert "Faceup" in text
        assert "Played Draw(0)" in text
        assert "Played Nop" in text
        assert "score:" in text
        assert "\033[" not in text

    def test_render_color(self):
        stream = io.StringIO()
        arena = Arena(holes=1, render=True, stream=stream)
        arena.play_match([_FixedAgent("alice", Play.nop())], random.Random(4))
        assert "\033[93malice" in stream.getvalue()

    def test_winners_ties(self):
        result = MatchResult(agents=("a", "b", "c"), scores=[4, 2, 2])
        assert result.winners == ["b", "c"]

    def test_round_robin(self):
        arena = Arena(holes=3)
        agents = [
            RuleBasedAgent("rule"),
            RandomAgent("rand", random.Random(0)),
            _FixedAgent("idle", Play.nop()),
        ]
        standings = arena.round_robin(agents, games_per_pair=4, seed=0)
        assert set(standings) == {"rule", "rand", "idle"}
        for stats in standings.values():
            # 每个智能体与另外两个各打 4 局
            assert stats["games"] == 8
            assert 0.0 <= stats["win_rate"] <= 1.0
            assert stats["avg_score"] == pytest.approx(stats["total_score"] / 8)
