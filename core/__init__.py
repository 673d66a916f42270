"""
Core Layer - 纯游戏逻辑 (无 ML 依赖)

Modules:
    cards: 牌定义与计分
    actions: 动作类型
    state: 手牌与对局状态
"""
from .cards import (
    Suit,
    Rank,
    Card,
    SUITS,
    RANKS,
    RANK_POINTS,
    RANK_TO_STR,
    CARD_BACK,
    FULL_DECK,
    DECK_SIZE,
    new_deck,
    cards_points,
)

from .actions import (
    PlayType,
    Play,
)

from .state import (
    Hand,
    Game,
    GameError,
    Decider,
    CARDS_PER_ROW,
    ROWS_PER_HAND,
    CARDS_PER_HAND,
    INITIAL_FACEUP,
    MAX_PLAYERS,
)

__all__ = [
    # cards
    "Suit",
    "Rank",
    "Card",
    "SUITS",
    "RANKS",
    "RANK_POINTS",
    "RANK_TO_STR",
    "CARD_BACK",
    "FULL_DECK",
    "DECK_SIZE",
    "new_deck",
    "cards_points",
    # actions
    "PlayType",
    "Play",
    # state
    "Hand",
    "Game",
    "GameError",
    "Decider",
    "CARDS_PER_ROW",
    "ROWS_PER_HAND",
    "CARDS_PER_HAND",
    "INITIAL_FACEUP",
    "MAX_PLAYERS",
]
