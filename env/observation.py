"""
观测与动作编码

游戏状态 <-> 网络张量 之间的固定协议，必须与网络的输入/输出维度保持一致。

输入特征布局 (INPUT_SIZE = 97):
- [0, 84): 6 个手牌位置，每个位置 14 维
    * 已翻开: 点数 one-hot (0-12)
    * 未翻开: 第 13 维 (隐藏标记)
- [84, 97): 弃牌堆明牌的点数 one-hot

输出布局 (OUTPUT_SIZE = 9):
- [0, 6): 手牌位置 logits
- [6, 9): 动作类型 logits (NOP, SWAP_DISCARD, DRAW)
"""
from typing import Optional, Union

import numpy as np
import torch

from core.cards import Card, RANKS
from core.actions import Play, PlayType
from core.state import Hand, CARDS_PER_HAND


RANK_FEATURES = len(RANKS)
HIDDEN_FEATURE = RANK_FEATURES
POSITION_FEATURES = RANK_FEATURES + 1
HAND_FEATURES = CARDS_PER_HAND * POSITION_FEATURES
FACEUP_OFFSET = HAND_FEATURES
INPUT_SIZE = HAND_FEATURES + RANK_FEATURES

# 动作 logits 的顺序
ACTION_ORDER = (PlayType.NOP, PlayType.SWAP_DISCARD, PlayType.DRAW)
ACTION_FEATURES = len(ACTION_ORDER)
OUTPUT_SIZE = CARDS_PER_HAND + ACTION_FEATURES


def encode_observation(
    hand: Hand,
    faceup: Card,
    out: Optional[np.ndarray] = None,
    faceup_offset: int = FACEUP_OFFSET,
) -> np.ndarray:
    """
    将 (手牌, 明牌) 编码为特征向量

    Args:
        hand: 当前玩家手牌
        faceup: 弃牌堆顶的明牌
        out: 复用的输出缓冲区 (可选)
        faceup_offset: 明牌 one-hot 的起始索引。
            设为 0 时明牌与第 0 个手牌位置共用索引区间 (旧版布局)，仅用于对比实验。

    Returns:
        (input_size,) float32 数组
    """
    size = max(INPUT_SIZE, faceup_offset + RANK_FEATURES)
    if out is None:
        out = np.zeros(size, dtype=np.float32)
    else:
        if out.shape[0] < size:
            raise ValueError(f"Output buffer too small: {out.shape[0]} < {size}")
        out.fill(0.0)

    base = 0
    for card, visible in zip(hand.cards, hand.visibility):
        offset = int(card.rank) if visible else HIDDEN_FEATURE
        out[base + offset] = 1.0
        base += POSITION_FEATURES

    out[faceup_offset + int(faceup.rank)] = 1.0
    return out


def decode_action(
    output: Union[np.ndarray, torch.Tensor],
    hand_size: int = CARDS_PER_HAND,
) -> Play:
    """
    将网络输出解码为动作

    动作类型取 3 个动作 logits 的 argmax；若为 SWAP_DISCARD 或 DRAW，
    位置取前 hand_size 个 logits 的 argmax。并列时取第一个最大值。

    Args:
        output: 网络输出
        hand_size: 手牌张数

    Returns:
        Play
    """
    if isinstance(output, torch.Tensor):
        values = output.detach().cpu().numpy()
    else:
        values = np.asarray(output, dtype=np.float32)

    if values.shape[0] < hand_size + ACTION_FEATURES:
        raise ValueError(
            f"Output of length {values.shape[0]} cannot hold {hand_size} card logits "
            f"and {ACTION_FEATURES} action logits"
        )

    play_type = ACTION_ORDER[int(np.argmax(values[hand_size:hand_size + ACTION_FEATURES]))]
    if play_type == PlayType.NOP:
        return Play.nop()

    position = int(np.argmax(values[:hand_size]))
    return Play(play_type, position)


class PolicyDecider:
    """
    网络决策函数

    把一个策略网络包装成 Game.play 需要的 (hand, faceup) -> Play 回调，
    输入缓冲区在回合间复用。
    """

    def __init__(self, network, faceup_offset: int = FACEUP_OFFSET):
        """
        Args:
            network: 提供 infer(features) 的策略网络
            faceup_offset: 明牌编码起始索引
        """
        if network.input_dim < max(INPUT_SIZE, faceup_offset + RANK_FEATURES):
            raise ValueError(
                f"Network input_dim {network.input_dim} is smaller than the observation encoding"
            )
        if network.output_dim < CARDS_PER_HAND + ACTION_FEATURES:
            raise ValueError(
                f"Network output_dim {network.output_dim} cannot hold {CARDS_PER_HAND} card logits "
                f"and {ACTION_FEATURES} action logits"
            )
        self.network = network
        self.faceup_offset = faceup_offset
        self._input_buf = np.zeros(network.input_dim, dtype=np.float32)

    def __call__(self, hand: Hand, faceup: Card) -> Play:
        encode_observation(hand, faceup, self._input_buf, self.faceup_offset)
        output = self.network.infer(self._input_buf)
        return decode_action(output, len(hand))
