"""
对战竞技场

组织智能体之间的对局，可在控制台逐回合渲染
"""
from typing import List, Optional, TextIO, Tuple
from dataclasses import dataclass, field
from collections import defaultdict
import logging
import random
import sys

from core.cards import Card
from core.actions import Play
from core.state import Game, Hand
from .evaluator import Agent

logger = logging.getLogger(__name__)

# 玩家名颜色 (ANSI)
PLAYER_COLORS = ("\033[93m", "\033[96m", "\033[95m", "\033[92m")
RESET_COLOR = "\033[39m"


@dataclass
class TurnRecord:
    """单回合记录"""
    hole: int
    player: int
    faceup: Card
    play: Play
    score: int


@dataclass
class MatchResult:
    """对局结果"""
    agents: Tuple[str, ...]
    scores: List[int]
    turns: List[TurnRecord] = field(default_factory=list)

    @property
    def winners(self) -> List[str]:
        """得分最低的智能体 (可能并列)"""
        best = min(self.scores)
        return [name for name, score in zip(self.agents, self.scores) if score == best]

    def __repr__(self) -> str:
        board = ", ".join(f"{name}={score}" for name, score in zip(self.agents, self.scores))
        return f"MatchResult({board})"


class Arena:
    """
    对战竞技场

    每轮 (hole) 每个智能体按座位顺序走一回合
    """

    def __init__(
        self,
        holes: int = 18,
        render: bool = False,
        stream: Optional[TextIO] = None,
        color: bool = True,
    ):
        """
        Args:
            holes: 每局轮数
            render: 是否逐回合打印手牌与动作
            stream: 输出流 (默认 stdout)
            color: 是否给玩家名上色
        """
        self.holes = holes
        self.render = render
        self.stream = stream
        self.color = color

    def _print(self, text: str = ""):
        print(text, file=self.stream or sys.stdout)

    def _player_label(self, idx: int, agent: Agent) -> str:
        if not self.color:
            return agent.name
        return f"{PLAYER_COLORS[idx % len(PLAYER_COLORS)]}{agent.name}{RESET_COLOR}"

    def _render_turn(self, idx: int, agent: Agent, hand: Hand, faceup: Card, play: Play):
        self._print(self._player_label(idx, agent))
        self._print(hand.render())
        self._print(f"Faceup {faceup.glyph}")
        self._print(f"Played {play}")

    def play_match(
        self,
        agents: List[Agent],
        rng: Optional[random.Random] = None,
    ) -> MatchResult:
        """
        进行一局

        Args:
            agents: 智能体列表 (座位顺序)
            rng: 本局随机数生成器

        Returns:
            对局结果
        """
        game = Game(len(agents), rng)
        turns = []

        for hole in range(self.holes):
            for idx, agent in enumerate(agents):

                def decide(hand: Hand, faceup: Card, agent=agent, idx=idx) -> Play:
                    play = agent.act(hand, faceup)
                    if self.render:
                        self._render_turn(idx, agent, hand, faceup, play)
                    turns.append(TurnRecord(hole, idx, faceup, play, -1))
                    return play

                game.play(idx, decide)
                turns[-1].score = game.players[idx].score()
                if self.render:
                    self._print(f"score: {turns[-1].score}")

        result = MatchResult(
            agents=tuple(agent.name for agent in agents),
            scores=game.scores(),
            turns=turns,
        )
        if self.render:
            self._print()
            for idx, agent in enumerate(agents):
                self._print(f"{self._player_label(idx, agent)}: {result.scores[idx]}")
        return result

    def round_robin(
        self,
        agents: List[Agent],
        games_per_pair: int = 10,
        seed: Optional[int] = None,
    ) -> dict:
        """
        两两对战

        每对智能体打 games_per_pair 局，先后手轮换

        Returns:
            名称 -> {"games", "wins", "avg_score"}
        """
        rng = random.Random(seed)
        standings = {agent.name: defaultdict(float) for agent in agents}

        for i in range(len(agents)):
            for j in range(i + 1, len(agents)):
                for game_idx in range(games_per_pair):
                    seats = [agents[i], agents[j]] if game_idx % 2 == 0 else [agents[j], agents[i]]
                    result = self.play_match(seats, random.Random(rng.getrandbits(64)))
                    winners = result.winners
                    for agent, score in zip(seats, result.scores):
                        stats = standings[agent.name]
                        stats["games"] += 1
                        stats["total_score"] += score
                        if agent.name in winners:
                            stats["wins"] += 1

        for name, stats in standings.items():
            if stats["games"] > 0:
                stats["avg_score"] = stats["total_score"] / stats["games"]
                stats["win_rate"] = stats["wins"] / stats["games"]
            logger.debug(f"{name}: {dict(stats)}")

        return {name: dict(stats) for name, stats in standings.items()}
