"""
进化训练器

主训练循环: 分组对局 -> 计分 -> 排名 -> 记录历史最佳 -> 截断精英 -> 克隆变异
"""
from typing import List, Optional
from dataclasses import dataclass, asdict
from pathlib import Path
import logging
import random
import time

import numpy as np
import torch
from tqdm import tqdm

try:
    from torch.utils.tensorboard import SummaryWriter
    HAS_TENSORBOARD = True
except ImportError:
    SummaryWriter = None
    HAS_TENSORBOARD = False

try:
    import wandb
    HAS_WANDB = True
except ImportError:
    wandb = None
    HAS_WANDB = False

from models.config import NetworkSpec
from models.policy_net import PolicyNetwork
from models.serialization import save_network
from .config import EvolutionConfig
from .tournament import TournamentRunner, partition
from .selection import score_groups, rank, select_elite, mutation_rate, repopulate

logger = logging.getLogger(__name__)


@dataclass
class GenerationStats:
    """
    单代统计

    Attributes:
        best_mean: 历史最佳平均分，已包含本代的更新；
            improved 为 True 时它等于本代的 generation_mean
        improved: 本代是否刷新了历史最佳
    """
    generation: int = 0
    generations: int = 0
    learning_rate: float = 0.0
    best_mean: float = float("inf")
    generation_best: int = 0
    generation_mean: float = 0.0
    generation_std: float = 0.0
    elite_size: int = 0
    improved: bool = False
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        """完成百分比"""
        return 100.0 * self.generation / self.generations if self.generations else 0.0

    def to_dict(self):
        return asdict(self)


class Callback:
    """回调基类"""

    def on_train_start(self, trainer: "EvolutionTrainer"):
        pass

    def on_train_end(self, trainer: "EvolutionTrainer"):
        pass

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        pass


class ProgressBarCallback(Callback):
    """单行进度条，每代原地刷新"""

    def __init__(self, disable: bool = False):
        self.disable = disable
        self._bar: Optional[tqdm] = None

    def on_train_start(self, trainer: "EvolutionTrainer"):
        self._bar = tqdm(
            total=trainer.config.generations,
            desc="Generation",
            disable=self.disable,
            dynamic_ncols=True,
        )

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        self._bar.set_postfix(
            lr=f"{stats.learning_rate:.4f}",
            best_avg=f"{stats.best_mean:.4f}",
            best=stats.generation_best,
            avg=f"{stats.generation_mean:.4f}",
            refresh=False,
        )
        self._bar.update(1)

    def on_train_end(self, trainer: "EvolutionTrainer"):
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class TensorBoardCallback(Callback):
    """TensorBoard 日志回调"""

    def __init__(self, log_dir: str):
        if not HAS_TENSORBOARD:
            raise ImportError("tensorboard is required for TensorBoardCallback")
        self.writer = SummaryWriter(log_dir)

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        step = stats.generation
        self.writer.add_scalar("evolution/learning_rate", stats.learning_rate, step)
        self.writer.add_scalar("evolution/best_mean", stats.best_mean, step)
        self.writer.add_scalar("generation/best", stats.generation_best, step)
        self.writer.add_scalar("generation/mean", stats.generation_mean, step)
        self.writer.add_scalar("generation/std", stats.generation_std, step)
        self.writer.add_scalar("perf/seconds", stats.elapsed, step)

    def on_train_end(self, trainer: "EvolutionTrainer"):
        self.writer.close()


class WandbCallback(Callback):
    """Weights & Biases 日志回调"""

    def __init__(
        self,
        project: str = "golf-evolution",
        name: Optional[str] = None,
        config: Optional[dict] = None,
    ):
        if not HAS_WANDB:
            raise ImportError("wandb is required for WandbCallback. Run: pip install wandb")
        wandb.init(project=project, name=name, config=config)

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        wandb.log({
            "evolution/learning_rate": stats.learning_rate,
            "evolution/best_mean": stats.best_mean,
            "generation/best": stats.generation_best,
            "generation/mean": stats.generation_mean,
            "generation/std": stats.generation_std,
            "perf/seconds": stats.elapsed,
            "generation": stats.generation,
        })

    def on_train_end(self, trainer: "EvolutionTrainer"):
        wandb.finish()


class CheckpointCallback(Callback):
    """定期保存历史最佳网络"""

    def __init__(self, save_dir: str, save_freq: int = 10):
        self.save_dir = Path(save_dir)
        self.save_dir.mkdir(parents=True, exist_ok=True)
        self.save_freq = save_freq

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        if stats.generation % self.save_freq == 0 and trainer.best_network is not None:
            path = self.save_dir / f"best_gen_{stats.generation}.pt"
            trainer.save(str(path))
            logger.info(f"Saved checkpoint to {path}")


class EarlyStoppingCallback(Callback):
    """历史最佳连续 patience 代没有提升时，在代与代之间停止训练"""

    def __init__(self, patience: int = 10):
        self.patience = patience
        self.wait = 0

    def on_generation_end(self, trainer: "EvolutionTrainer", stats: GenerationStats):
        if stats.improved:
            self.wait = 0
        else:
            self.wait += 1
            if self.wait >= self.patience:
                logger.info(f"Early stopping triggered at generation {stats.generation}")
                trainer.should_stop = True


class EvolutionTrainer:
    """
    进化训练器

    不使用梯度: 每代的唯一变化来源是对精英克隆的随机扰动
    """

    def __init__(
        self,
        config: EvolutionConfig,
        spec: Optional[NetworkSpec] = None,
        callbacks: Optional[List[Callback]] = None,
    ):
        """
        Args:
            config: 训练配置
            spec: 网络规格
            callbacks: 回调列表
        """
        self.config = config.validate()
        self.spec = spec or NetworkSpec()
        self.callbacks = callbacks or []

        # 随机源: 父代采样 / 每组种子 与 网络初始化 / 变异噪声 分开
        self.rng = random.Random(config.seed)
        self.generator = torch.Generator()
        if config.seed is not None:
            self.generator.manual_seed(config.seed)
        else:
            self.generator.seed()

        self.runner = TournamentRunner(config.holes, config.num_workers)

        self.population: List[PolicyNetwork] = [
            PolicyNetwork(self.spec, self.generator) for _ in range(config.population_size)
        ]

        # 历史最佳
        self.best_mean = float("inf")
        self.best_network: Optional[PolicyNetwork] = None

        # 状态
        self.generation = 0
        self.history: List[GenerationStats] = []
        self.should_stop = False

    def step(self) -> GenerationStats:
        """运行一代"""
        self.generation += 1
        start = time.time()

        # 分组并行对局
        groups = partition(self.population, self.config.players)
        results = self.runner.run(groups, self.rng)

        # 计分与排名
        ranked = rank(score_groups(groups, results, self.config.selection))
        scores = np.array([s.score for s in ranked], dtype=np.float64)
        generation_mean = float(scores.mean())
        rate = mutation_rate(self.generation, self.config.decay)

        # 只有平均分更低时才更新历史最佳
        improved = generation_mean < self.best_mean
        if improved:
            self.best_mean = generation_mean
            self.best_network = ranked[0].network.clone()

        # 截断并繁殖下一代 (整体替换)
        elite = select_elite(ranked, self.config.keep_top_frac)
        self.population = repopulate(
            [s.network for s in elite],
            self.config.population_size,
            rate,
            self.rng,
            self.generator,
        )

        return GenerationStats(
            generation=self.generation,
            generations=self.config.generations,
            learning_rate=rate,
            best_mean=self.best_mean,
            generation_best=ranked[0].score,
            generation_mean=generation_mean,
            generation_std=float(scores.std()),
            elite_size=len(elite),
            improved=improved,
            elapsed=time.time() - start,
        )

    def train(self) -> List[GenerationStats]:
        """
        训练到配置的代数 (或被回调提前停止)

        Returns:
            每代统计
        """
        for callback in self.callbacks:
            callback.on_train_start(self)

        start_time = time.time()
        while self.generation < self.config.generations and not self.should_stop:
            stats = self.step()
            self.history.append(stats)

            if stats.generation % self.config.log_interval == 0 or stats.generation == stats.generations:
                logger.info(
                    f"Generation {stats.generation}/{stats.generations} ({stats.progress:.0f}%) | "
                    f"LR {stats.learning_rate:.4f} | "
                    f"Best avg {stats.best_mean:.4f} | "
                    f"Best {stats.generation_best} | "
                    f"Avg {stats.generation_mean:.4f} | "
                    f"Time {time.time() - start_time:.0f}s"
                )

            for callback in self.callbacks:
                callback.on_generation_end(self, stats)

        for callback in self.callbacks:
            callback.on_train_end(self)

        return self.history

    def save(self, path: str) -> bool:
        """
        保存历史最佳网络

        Returns:
            是否实际保存
        """
        if self.best_network is None:
            logger.warning("No best network recorded yet, nothing saved")
            return False
        save_network(self.best_network, path)
        return True
