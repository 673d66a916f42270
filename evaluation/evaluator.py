"""
评估器

评估智能体在对局中的表现
"""
from typing import List, Optional
from dataclasses import dataclass, field
import logging
import random

import numpy as np

from core.cards import Card, RANK_POINTS
from core.actions import Play
from core.state import Game, Hand
from env.observation import PolicyDecider
from models.policy_net import PolicyNetwork

logger = logging.getLogger(__name__)

# 随机一张牌的期望分值
EXPECTED_CARD_POINTS = sum(RANK_POINTS.values()) / len(RANK_POINTS)


@dataclass
class EvalResult:
    """评估结果 (分数越低越好)"""
    avg_score: float
    win_rate: float
    games_played: int
    score_std: float = 0.0
    scores: List[int] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"EvalResult(avg_score={self.avg_score:.2f}, "
            f"win_rate={self.win_rate:.2%}, "
            f"games={self.games_played})"
        )


class Agent:
    """智能体基类"""

    def __init__(self, name: str = "agent"):
        self.name = name

    def act(self, hand: Hand, faceup: Card) -> Play:
        """选择动作"""
        raise NotImplementedError

    def __call__(self, hand: Hand, faceup: Card) -> Play:
        return self.act(hand, faceup)


class RandomAgent(Agent):
    """随机智能体"""

    def __init__(self, name: str = "random", rng: Optional[random.Random] = None):
        super().__init__(name)
        self.rng = rng or random.Random()

    def act(self, hand: Hand, faceup: Card) -> Play:
        choice = self.rng.randrange(3)
        if choice == 0:
            return Play.nop()
        position = self.rng.randrange(len(hand))
        return Play.swap_discard(position) if choice == 1 else Play.draw(position)


class RuleBasedAgent(Agent):
    """
    规则智能体

    - 明牌比最差的已翻开牌更小: 换掉它
    - 明牌足够小且有未翻开的牌: 换到未翻开位置
    - 还有未翻开的牌: 摸牌替换第一个未翻开位置
    - 最差的已翻开牌高于期望: 摸牌替换它
    - 否则不动
    """

    def __init__(self, name: str = "rule", low_card: int = 4):
        super().__init__(name)
        self.low_card = low_card

    def act(self, hand: Hand, faceup: Card) -> Play:
        visible = [i for i, v in enumerate(hand.visibility) if v]
        hidden = [i for i, v in enumerate(hand.visibility) if not v]
        faceup_points = RANK_POINTS[faceup.rank]

        worst = None
        if visible:
            worst = max(visible, key=lambda i: RANK_POINTS[hand.cards[i].rank])
        worst_points = RANK_POINTS[hand.cards[worst].rank] if worst is not None else -1

        if worst is not None and faceup_points < worst_points:
            return Play.swap_discard(worst)
        if hidden and faceup_points <= self.low_card:
            return Play.swap_discard(hidden[0])
        if hidden:
            return Play.draw(hidden[0])
        if worst_points > EXPECTED_CARD_POINTS:
            return Play.draw(worst)
        return Play.nop()


class ModelAgent(Agent):
    """模型智能体"""

    def __init__(self, network: PolicyNetwork, name: str = "model"):
        super().__init__(name)
        self.network = network
        self._decide = PolicyDecider(network)

    def act(self, hand: Hand, faceup: Card) -> Play:
        return self._decide(hand, faceup)


class Evaluator:
    """
    评估器

    让智能体与对手多次对局，座位轮换
    """

    def __init__(self, holes: int = 18, seed: Optional[int] = None):
        """
        Args:
            holes: 每局轮数
            seed: 随机种子
        """
        self.holes = holes
        self.rng = random.Random(seed)

    def evaluate(
        self,
        agent: Agent,
        opponents: Optional[List[Agent]] = None,
        n_games: int = 100,
        verbose: bool = False,
    ) -> EvalResult:
        """
        评估智能体

        Args:
            agent: 待评估智能体
            opponents: 对手列表 (默认一个随机智能体)
            n_games: 游戏数量
            verbose: 是否输出详情

        Returns:
            评估结果
        """
        if opponents is None:
            opponents = [RandomAgent("opp", random.Random(self.rng.getrandbits(64)))]

        n_players = len(opponents) + 1
        scores = []
        wins = 0

        for game_idx in range(n_games):
            # 座位轮换
            agent_position = game_idx % n_players
            seats = list(opponents)
            seats.insert(agent_position, agent)

            game = Game(n_players, random.Random(self.rng.getrandbits(64)))
            for _ in range(self.holes):
                for idx, seat in enumerate(seats):
                    game.play(idx, seat.act)

            final = game.scores()
            scores.append(final[agent_position])
            # 并列最低也算赢
            if final[agent_position] == min(final):
                wins += 1

            if verbose and (game_idx + 1) % 10 == 0:
                logger.info(
                    f"Game {game_idx + 1}/{n_games}, "
                    f"Avg score: {np.mean(scores):.2f}, Win rate: {wins / (game_idx + 1):.2%}"
                )

        return EvalResult(
            avg_score=float(np.mean(scores)) if scores else 0.0,
            win_rate=wins / n_games if n_games > 0 else 0.0,
            games_played=n_games,
            score_std=float(np.std(scores)) if scores else 0.0,
            scores=scores,
        )
