"""
游戏状态定义

Game 持有:
- 每个玩家的手牌 (Hand)
- 摸牌堆 (draw)
- 弃牌堆 (discard)

任意两回合之间，三者合起来恰好是一副完整的 52 张牌。
"""
from dataclasses import dataclass
from typing import Callable, List, Optional
import random

from .cards import Card, CARD_BACK, DECK_SIZE, cards_points, new_deck
from .actions import Play, PlayType


CARDS_PER_ROW = 3
ROWS_PER_HAND = 2
CARDS_PER_HAND = CARDS_PER_ROW * ROWS_PER_HAND

# 发牌时翻开的牌数
INITIAL_FACEUP = 2

# 至少要给摸牌堆留一张牌作为初始明牌
MAX_PLAYERS = (DECK_SIZE - 1) // CARDS_PER_HAND

Decider = Callable[["Hand", Card], Play]


class GameError(RuntimeError):
    """牌堆耗尽等不可恢复的状态"""


@dataclass
class Hand:
    """
    玩家手牌

    Attributes:
        cards: 手牌 (ROWS_PER_HAND 行 × CARDS_PER_ROW 列，按行展开)
        visibility: 每个位置是否已翻开 (对持有者可见)
        width: 每行牌数
    """
    cards: List[Card]
    visibility: List[bool]
    width: int = CARDS_PER_ROW

    def __post_init__(self):
        if len(self.cards) != len(self.visibility):
            raise ValueError(
                f"cards ({len(self.cards)}) and visibility ({len(self.visibility)}) differ in length"
            )
        if len(self.cards) != CARDS_PER_HAND:
            raise ValueError(f"A hand holds {CARDS_PER_HAND} cards, got {len(self.cards)}")

    @classmethod
    def deal(cls, cards: List[Card], rng: random.Random) -> 'Hand':
        """发一手牌，随机翻开 INITIAL_FACEUP 张"""
        visibility = [False] * len(cards)
        for idx in rng.sample(range(len(cards)), INITIAL_FACEUP):
            visibility[idx] = True
        return cls(cards=list(cards), visibility=visibility)

    def __len__(self) -> int:
        return len(self.cards)

    def score(self) -> int:
        """手牌总分 (与是否翻开无关，越低越好)"""
        return cards_points(self.cards)

    def render(self) -> str:
        """按行渲染手牌，未翻开的牌显示为牌背"""
        lines = []
        for start in range(0, len(self.cards), self.width):
            row = zip(self.cards[start:start + self.width],
                      self.visibility[start:start + self.width])
            lines.append(" ".join(card.glyph if vis else CARD_BACK for card, vis in row))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()


class Game:
    """
    一局 N 人高尔夫

    只负责回合合法性与牌堆记账，不关心动作是如何选出来的。
    """

    def __init__(self, n_players: int, rng: Optional[random.Random] = None):
        """
        Args:
            n_players: 玩家数
            rng: 随机数生成器 (洗牌与初始翻牌)，默认新建一个未设种子的实例
        """
        if not 1 <= n_players <= MAX_PLAYERS:
            raise ValueError(f"n_players must be in [1, {MAX_PLAYERS}], got {n_players}")

        self.rng = rng or random.Random()

        # 洗牌
        deck = new_deck()
        self.rng.shuffle(deck)

        # 发牌 (从牌堆顶，即列表末尾)
        self.players: List[Hand] = []
        for _ in range(n_players):
            cards = [deck.pop() for _ in range(CARDS_PER_HAND)]
            self.players.append(Hand.deal(cards, self.rng))

        self.draw: List[Card] = deck
        self.discard: List[Card] = []

    @property
    def n_players(self) -> int:
        return len(self.players)

    @property
    def faceup(self) -> Optional[Card]:
        """弃牌堆顶的明牌"""
        return self.discard[-1] if self.discard else None

    def card_count(self) -> int:
        """所有牌堆与手牌的总张数"""
        return len(self.draw) + len(self.discard) + sum(len(h) for h in self.players)

    def scores(self) -> List[int]:
        """各玩家当前得分"""
        return [hand.score() for hand in self.players]

    def _prepare_piles(self):
        """确保摸牌堆和弃牌堆都非空"""
        if not self.draw:
            # 弃牌堆回收为摸牌堆
            self.draw, self.discard = self.discard, self.draw
            if not self.draw:
                raise GameError("Both draw and discard piles are empty")

        if not self.discard:
            self.discard.append(self.draw.pop())

    def play(self, player: int, decide: Decider) -> Play:
        """
        执行一个回合

        Args:
            player: 玩家索引
            decide: 决策函数 (hand, faceup) -> Play

        Returns:
            实际执行的动作
        """
        self._prepare_piles()

        hand = self.players[player]
        play = decide(hand, self.discard[-1])
        self.apply(player, play)
        return play

    def apply(self, player: int, play: Play):
        """将动作作用到指定玩家的手牌与牌堆上"""
        hand = self.players[player]

        if play.play_type == PlayType.NOP:
            return

        idx = play.position
        if not 0 <= idx < len(hand):
            raise IndexError(f"Play position {idx} out of range for hand of {len(hand)}")

        if play.play_type == PlayType.SWAP_DISCARD:
            hand.cards[idx], self.discard[-1] = self.discard[-1], hand.cards[idx]
            hand.visibility[idx] = True
        elif play.play_type == PlayType.DRAW:
            if not self.draw:
                raise GameError("Draw pile is empty")
            replaced = hand.cards[idx]
            hand.cards[idx] = self.draw.pop()
            hand.visibility[idx] = True
            self.discard.append(replaced)
        else:
            raise ValueError(f"Unknown play type: {play.play_type}")
