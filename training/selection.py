"""
选择与繁殖

排序、截断精英、按衰减的变异率克隆繁殖
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence
import random

import torch

from models.policy_net import PolicyNetwork
from .tournament import TournamentResult


@dataclass
class ScoredNetwork:
    """带分数的网络 (分数越低越好)"""
    network: PolicyNetwork
    score: int


def score_groups(
    groups: Sequence[Sequence[PolicyNetwork]],
    results: Sequence[TournamentResult],
    mode: str = "group_best",
) -> List[ScoredNetwork]:
    """
    汇总各组对局结果

    Args:
        groups: 小组列表
        results: 与 groups 对应的结果
        mode: "group_best" 每组只保留得分最低的成员；"all" 保留所有成员

    Returns:
        参与排名的候选列表
    """
    if len(groups) != len(results):
        raise ValueError(f"{len(groups)} groups but {len(results)} results")

    scored = []
    for group, result in zip(groups, results):
        if mode == "group_best":
            idx = result.winner
            scored.append(ScoredNetwork(group[idx], result.scores[idx]))
        elif mode == "all":
            scored.extend(ScoredNetwork(net, score) for net, score in zip(group, result.scores))
        else:
            raise ValueError(f"Unknown selection mode: {mode}")
    return scored


def rank(scored: Sequence[ScoredNetwork]) -> List[ScoredNetwork]:
    """按分数升序排序 (稳定排序)"""
    return sorted(scored, key=lambda s: s.score)


def elite_count(n_scored: int, keep_top_frac: int) -> int:
    """精英数量，至少保留 1 个"""
    return max(1, n_scored // keep_top_frac)


def select_elite(ranked: Sequence[ScoredNetwork], keep_top_frac: int) -> List[ScoredNetwork]:
    """保留排名前 1/keep_top_frac 的候选"""
    return list(ranked[:elite_count(len(ranked), keep_top_frac)])


def mutation_rate(generation: int, decay: float) -> float:
    """
    逆幂律衰减的变异率

    Args:
        generation: 当前代数 (从 1 开始)
        decay: 衰减指数 (0 表示恒为 1.0)
    """
    if generation < 1:
        raise ValueError(f"generation starts at 1, got {generation}")
    return 1.0 / generation ** decay


def repopulate(
    elite: Sequence[PolicyNetwork],
    size: int,
    rate: float,
    rng: Optional[random.Random] = None,
    generator: Optional[torch.Generator] = None,
) -> List[PolicyNetwork]:
    """
    生成下一代种群

    每个位置从精英中均匀采样一个父代，克隆后变异。

    Args:
        elite: 精英网络 (非空)
        size: 新种群大小
        rate: 变异率
        rng: 父代采样用的随机数生成器
        generator: 变异噪声用的 torch 生成器

    Returns:
        新种群
    """
    if not elite:
        raise ValueError("Cannot repopulate from an empty elite set")
    rng = rng or random.Random()

    population = []
    for _ in range(size):
        child = rng.choice(elite).clone()
        child.mutate(rate, generator)
        population.append(child)
    return population
