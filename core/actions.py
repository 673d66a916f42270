"""
动作类型定义

每回合玩家只能做三件事之一:
- NOP: 什么都不做
- SWAP_DISCARD: 用弃牌堆顶的牌换掉手牌中的一张
- DRAW: 从牌堆摸一张换掉手牌中的一张，被换下的牌进入弃牌堆
"""
from enum import IntEnum
from dataclasses import dataclass
from typing import Optional


class PlayType(IntEnum):
    """动作类型 (值即为网络输出中动作 logits 的顺序)"""
    NOP = 0
    SWAP_DISCARD = 1
    DRAW = 2


@dataclass(frozen=True, slots=True)
class Play:
    """
    不可变动作表示

    Attributes:
        play_type: 动作类型
        position: 手牌位置 (NOP 时为 None)
    """
    play_type: PlayType
    position: Optional[int] = None

    def __post_init__(self):
        if self.play_type == PlayType.NOP:
            if self.position is not None:
                raise ValueError("NOP does not take a position")
        elif self.position is None:
            raise ValueError(f"{self.play_type.name} requires a position")

    @classmethod
    def nop(cls) -> 'Play':
        """创建 NOP 动作"""
        return cls(PlayType.NOP)

    @classmethod
    def swap_discard(cls, position: int) -> 'Play':
        """创建 SWAP_DISCARD 动作"""
        return cls(PlayType.SWAP_DISCARD, position)

    @classmethod
    def draw(cls, position: int) -> 'Play':
        """创建 DRAW 动作"""
        return cls(PlayType.DRAW, position)

    @property
    def is_nop(self) -> bool:
        return self.play_type == PlayType.NOP

    def __str__(self) -> str:
        if self.is_nop:
            return "Nop"
        name = "SwapDiscard" if self.play_type == PlayType.SWAP_DISCARD else "Draw"
        return f"{name}({self.position})"
