"""
Evaluation Layer - 评估框架

Modules:
    evaluator: 评估器和智能体
    arena: 对战竞技场
"""
from .evaluator import (
    EvalResult,
    Agent,
    RandomAgent,
    RuleBasedAgent,
    ModelAgent,
    Evaluator,
)
from .arena import (
    TurnRecord,
    MatchResult,
    Arena,
)

__all__ = [
    # evaluator
    "EvalResult",
    "Agent",
    "RandomAgent",
    "RuleBasedAgent",
    "ModelAgent",
    "Evaluator",
    # arena
    "TurnRecord",
    "MatchResult",
    "Arena",
]
