"""
牌的定义与计分

高尔夫 (Golf) 使用一副 52 张的标准扑克:
- 4 种花色 × 13 种点数
- 不含大小王
"""
from enum import Enum, IntEnum
from dataclasses import dataclass
from typing import Dict, List, Tuple


class Suit(Enum):
    """花色"""
    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


class Rank(IntEnum):
    """点数 (值即为 one-hot 编码的列索引)"""
    ACE = 0
    TWO = 1
    THREE = 2
    FOUR = 3
    FIVE = 4
    SIX = 5
    SEVEN = 6
    EIGHT = 7
    NINE = 8
    TEN = 9
    JACK = 10
    QUEEN = 11
    KING = 12


# 发牌顺序
SUITS: Tuple[Suit, ...] = (Suit.SPADES, Suit.CLUBS, Suit.HEARTS, Suit.DIAMONDS)
RANKS: Tuple[Rank, ...] = tuple(Rank)

# 点数到分值的映射 (K 为 0 分)
RANK_POINTS: Dict[Rank, int] = {
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 10,
    Rank.KING: 0,
}

# 点数到显示字符的映射
RANK_TO_STR: Dict[Rank, str] = {
    Rank.ACE: 'A', Rank.TWO: '2', Rank.THREE: '3', Rank.FOUR: '4',
    Rank.FIVE: '5', Rank.SIX: '6', Rank.SEVEN: '7', Rank.EIGHT: '8',
    Rank.NINE: '9', Rank.TEN: '10', Rank.JACK: 'J', Rank.QUEEN: 'Q',
    Rank.KING: 'K',
}

# Unicode 扑克牌区块 (U+1F0A0 起)
CARD_BACK = "\U0001F0A0"

SUIT_GLYPH_BASE: Dict[Suit, int] = {
    Suit.SPADES: 0x1F0A0,
    Suit.HEARTS: 0x1F0B0,
    Suit.DIAMONDS: 0x1F0C0,
    Suit.CLUBS: 0x1F0D0,
}

# 0xC 为骑士 (Knight)，跳过
RANK_GLYPH_OFFSET: Dict[Rank, int] = {
    Rank.ACE: 0x1, Rank.TWO: 0x2, Rank.THREE: 0x3, Rank.FOUR: 0x4,
    Rank.FIVE: 0x5, Rank.SIX: 0x6, Rank.SEVEN: 0x7, Rank.EIGHT: 0x8,
    Rank.NINE: 0x9, Rank.TEN: 0xA, Rank.JACK: 0xB, Rank.QUEEN: 0xD,
    Rank.KING: 0xE,
}


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变的牌

    Attributes:
        suit: 花色
        rank: 点数
    """
    suit: Suit
    rank: Rank

    @property
    def points(self) -> int:
        """计分值"""
        return RANK_POINTS[self.rank]

    @property
    def glyph(self) -> str:
        """Unicode 牌面字符"""
        return chr(SUIT_GLYPH_BASE[self.suit] + RANK_GLYPH_OFFSET[self.rank])

    def __str__(self) -> str:
        return self.glyph

    def __repr__(self) -> str:
        return f"Card({RANK_TO_STR[self.rank]} of {self.suit.value})"


def new_deck() -> List[Card]:
    """
    创建一副完整的牌 (未洗牌)

    Returns:
        52 张牌的列表，每种 (花色, 点数) 恰好一张
    """
    return [Card(suit, rank) for suit in SUITS for rank in RANKS]


def cards_points(cards: List[Card]) -> int:
    """计算一组牌的总分"""
    return sum(RANK_POINTS[card.rank] for card in cards)


FULL_DECK: Tuple[Card, ...] = tuple(new_deck())
DECK_SIZE = len(FULL_DECK)
