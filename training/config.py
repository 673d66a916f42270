"""
训练配置

定义进化训练相关的超参数
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Literal, Optional

from core.state import MAX_PLAYERS


SELECTION_MODES = ("group_best", "all")


@dataclass
class EvolutionConfig:
    """
    进化训练配置

    Attributes:
        generations: 训练代数
        decay: 变异率衰减指数，rate = 1 / generation ** decay
        population_size: 种群大小
        players: 每组对局人数
        holes: 每组对局的轮数 (每轮每人一回合)
        keep_top_frac: 精英保留比例的分母 (8 表示保留前 1/8)
        selection: 计分方式
            "group_best": 每组只保留得分最低的成员 (N 个网络进，N/players 个出)
            "all": 每个成员单独计分
        num_workers: 线程池大小 (None 表示由执行器决定)
        seed: 随机种子 (None 表示不可复现)
        log_interval: 日志间隔 (代)
    """
    # 进化参数
    generations: int = 100
    decay: float = 0.5
    population_size: int = 1024
    keep_top_frac: int = 8
    selection: Literal["group_best", "all"] = "group_best"

    # 对局参数
    players: int = 2
    holes: int = 18

    # 并行
    num_workers: Optional[int] = None

    # 其他
    seed: Optional[int] = None
    log_interval: int = 10

    def validate(self) -> 'EvolutionConfig':
        """检查配置，非法时抛出 ValueError"""
        if self.generations <= 0:
            raise ValueError(f"generations must be positive, got {self.generations}")
        if self.decay < 0:
            raise ValueError(f"decay must be non-negative, got {self.decay}")
        if self.population_size <= 0:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if not 1 <= self.players <= MAX_PLAYERS:
            raise ValueError(f"players must be in [1, {MAX_PLAYERS}], got {self.players}")
        if self.population_size < self.players:
            raise ValueError(
                f"population_size ({self.population_size}) must be at least players ({self.players})"
            )
        if self.holes <= 0:
            raise ValueError(f"holes must be positive, got {self.holes}")
        if self.keep_top_frac <= 0:
            raise ValueError(f"keep_top_frac must be positive, got {self.keep_top_frac}")
        if self.selection not in SELECTION_MODES:
            raise ValueError(f"selection must be one of {SELECTION_MODES}, got {self.selection!r}")
        if self.num_workers is not None and self.num_workers <= 0:
            raise ValueError(f"num_workers must be positive, got {self.num_workers}")
        if self.log_interval <= 0:
            raise ValueError(f"log_interval must be positive, got {self.log_interval}")
        return self

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'EvolutionConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
