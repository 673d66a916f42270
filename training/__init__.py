"""
Training Layer - 进化训练框架

Modules:
    config: 训练配置
    tournament: 分组自博弈与并行调度
    selection: 排名、精英截断与繁殖
    trainer: 训练循环与回调
"""
from .config import (
    EvolutionConfig,
    SELECTION_MODES,
)
from .tournament import (
    TournamentResult,
    TournamentRunner,
    partition,
    play_tournament,
)
from .selection import (
    ScoredNetwork,
    score_groups,
    rank,
    elite_count,
    select_elite,
    mutation_rate,
    repopulate,
)
from .trainer import (
    GenerationStats,
    Callback,
    ProgressBarCallback,
    TensorBoardCallback,
    WandbCallback,
    CheckpointCallback,
    EarlyStoppingCallback,
    EvolutionTrainer,
)

__all__ = [
    # config
    "EvolutionConfig",
    "SELECTION_MODES",
    # tournament
    "TournamentResult",
    "TournamentRunner",
    "partition",
    "play_tournament",
    # selection
    "ScoredNetwork",
    "score_groups",
    "rank",
    "elite_count",
    "select_elite",
    "mutation_rate",
    "repopulate",
    # trainer
    "GenerationStats",
    "Callback",
    "ProgressBarCallback",
    "TensorBoardCallback",
    "WandbCallback",
    "CheckpointCallback",
    "EarlyStoppingCallback",
    "EvolutionTrainer",
]
