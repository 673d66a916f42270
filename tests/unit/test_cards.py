"""牌定义与计分测试"""
import pytest
from collections import Counter

from core.cards import (
    Suit,
    Rank,
    Card,
    SUITS,
    RANKS,
    RANK_POINTS,
    CARD_BACK,
    FULL_DECK,
    DECK_SIZE,
    new_deck,
    cards_points,
)


class TestRankEnum:
    """Rank 枚举测试"""

    def test_rank_count(self):
        assert len(RANKS) == 13

    def test_rank_indices(self):
        assert Rank.ACE == 0
        assert Rank.KING == 12
        assert [int(r) for r in RANKS] == list(range(13))


class TestCard:
    """Card 测试"""

    def test_immutable(self):
        card = Card(Suit.SPADES, Rank.ACE)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_equality_by_fields(self):
        assert Card(Suit.HEARTS, Rank.TEN) == Card(Suit.HEARTS, Rank.TEN)
        assert Card(Suit.HEARTS, Rank.TEN) != Card(Suit.CLUBS, Rank.TEN)
        assert len({Card(Suit.HEARTS, Rank.TEN), Card(Suit.HEARTS, Rank.TEN)}) == 1

    def test_points(self):
        assert Card(Suit.CLUBS, Rank.ACE).points == 1
        assert Card(Suit.CLUBS, Rank.SEVEN).points == 7
        assert Card(Suit.CLUBS, Rank.JACK).points == 10
        assert Card(Suit.CLUBS, Rank.QUEEN).points == 10
        assert Card(Suit.CLUBS, Rank.KING).points == 0

    def test_glyphs(self):
        assert Card(Suit.SPADES, Rank.ACE).glyph == "\U0001F0A1"
        assert Card(Suit.HEARTS, Rank.TEN).glyph == "\U0001F0BA"
        # 跳过骑士牌
        assert Card(Suit.DIAMONDS, Rank.QUEEN).glyph == "\U0001F0CD"
        assert Card(Suit.CLUBS, Rank.KING).glyph == "\U0001F0DE"
        assert CARD_BACK == "\U0001F0A0"


class TestDeck:
    """完整牌组测试"""

    def test_deck_size(self):
        assert len(new_deck()) == 52
        assert DECK_SIZE == 52
        assert len(FULL_DECK) == 52

    def test_deck_unique(self):
        deck = new_deck()
        assert len(set(deck)) == 52

    def test_deck_composition(self):
        deck = new_deck()
        suits = Counter(c.suit for c in deck)
        ranks = Counter(c.rank for c in deck)
        assert all(suits[s] == 13 for s in SUITS)
        assert all(ranks[r] == 4 for r in RANKS)

    def test_fresh_deck_is_independent(self):
        deck = new_deck()
        deck.pop()
        assert len(new_deck()) == 52


class TestPoints:
    """计分测试"""

    def test_rank_points_table(self):
        assert sum(RANK_POINTS.values()) == 75
        assert RANK_POINTS[Rank.ACE] == 1
        assert RANK_POINTS[Rank.NINE] == 9
        assert RANK_POINTS[Rank.TEN] == RANK_POINTS[Rank.JACK] == RANK_POINTS[Rank.QUEEN] == 10
        assert RANK_POINTS[Rank.KING] == 0

    def test_cards_points(self):
        cards = [
            Card(Suit.SPADES, Rank.ACE),
            Card(Suit.SPADES, Rank.KING),
            Card(Suit.SPADES, Rank.QUEEN),
            Card(Suit.SPADES, Rank.TEN),
            Card(Suit.SPADES, Rank.FIVE),
            Card(Suit.SPADES, Rank.TWO),
        ]
        assert cards_points(cards) == 28
