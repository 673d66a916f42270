"""
自博弈锦标赛

把种群划分为固定人数的小组，每组完整打完一局，组与组之间并行
"""
from typing import List, Optional, Sequence
from dataclasses import dataclass
from concurrent.futures import ThreadPoolExecutor
import logging
import random
import time

from core.state import Game
from env.observation import PolicyDecider
from models.policy_net import PolicyNetwork

logger = logging.getLogger(__name__)


@dataclass
class TournamentResult:
    """
    一组对局的结果

    Attributes:
        scores: 各成员最终手牌得分 (与组内顺序一致)
        turns: 总回合数
    """
    scores: List[int]
    turns: int

    @property
    def winner(self) -> int:
        """得分最低的成员索引 (并列取第一个)"""
        return min(range(len(self.scores)), key=lambda i: self.scores[i])


def partition(population: Sequence[PolicyNetwork], players: int) -> List[List[PolicyNetwork]]:
    """
    按顺序划分小组

    种群大小不能整除时，最后一组人数较少。

    Args:
        population: 种群
        players: 每组人数

    Returns:
        小组列表
    """
    if players <= 0:
        raise ValueError(f"players must be positive, got {players}")
    return [list(population[i:i + players]) for i in range(0, len(population), players)]


def play_tournament(
    networks: Sequence[PolicyNetwork],
    holes: int,
    rng: Optional[random.Random] = None,
) -> TournamentResult:
    """
    一组网络打一局

    每轮 (hole) 每个成员按组内顺序各走一回合。

    Args:
        networks: 本组网络 (每个网络只属于这一组)
        holes: 轮数
        rng: 本局的随机数生成器

    Returns:
        TournamentResult
    """
    game = Game(len(networks), rng)
    deciders = [PolicyDecider(net) for net in networks]

    turns = 0
    for _ in range(holes):
        for idx, decide in enumerate(deciders):
            game.play(idx, decide)
            turns += 1

    return TournamentResult(scores=game.scores(), turns=turns)


class TournamentRunner:
    """
    并行锦标赛调度器

    fork-join: 每组一个任务提交到线程池，全部完成后按组顺序返回结果。
    各组之间不共享可变状态，无需加锁。
    """

    def __init__(self, holes: int, num_workers: Optional[int] = None):
        """
        Args:
            holes: 每局轮数
            num_workers: 线程数 (None 表示由 ThreadPoolExecutor 决定)
        """
        self.holes = holes
        self.num_workers = num_workers

    def run(
        self,
        groups: Sequence[Sequence[PolicyNetwork]],
        rng: random.Random,
    ) -> List[TournamentResult]:
        """
        运行所有小组

        Args:
            groups: 小组列表
            rng: 用于派生每组种子的随机数生成器 (在提交前派生，结果与调度顺序无关)

        Returns:
            与 groups 顺序一致的结果列表
        """
        seeds = [rng.getrandbits(64) for _ in groups]
        start = time.time()

        if self.num_workers == 1 or len(groups) <= 1:
            results = [
                play_tournament(group, self.holes, random.Random(seed))
                for group, seed in zip(groups, seeds)
            ]
        else:
            with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
                futures = [
                    executor.submit(play_tournament, group, self.holes, random.Random(seed))
                    for group, seed in zip(groups, seeds)
                ]
                # 按提交顺序 join，任一组出错时异常直接抛出
                results = [future.result() for future in futures]

        logger.debug(f"Played {len(groups)} tournaments in {time.time() - start:.2f}s")
        return results
