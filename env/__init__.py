"""
Environment Layer - 游戏状态与网络张量之间的桥接

Modules:
    observation: 观测编码与动作解码
"""
from .observation import (
    RANK_FEATURES,
    HIDDEN_FEATURE,
    POSITION_FEATURES,
    HAND_FEATURES,
    FACEUP_OFFSET,
    INPUT_SIZE,
    ACTION_ORDER,
    ACTION_FEATURES,
    OUTPUT_SIZE,
    encode_observation,
    decode_action,
    PolicyDecider,
)

__all__ = [
    "RANK_FEATURES",
    "HIDDEN_FEATURE",
    "POSITION_FEATURES",
    "HAND_FEATURES",
    "FACEUP_OFFSET",
    "INPUT_SIZE",
    "ACTION_ORDER",
    "ACTION_FEATURES",
    "OUTPUT_SIZE",
    "encode_observation",
    "decode_action",
    "PolicyDecider",
]
