#!/usr/bin/env python3
"""
训练脚本

Usage:
    python scripts/train.py n_epochs decay_rate units players holes keep_top_frac save_path
    python scripts/train.py 500 0.5 1024 2 18 8 golf.pt --workers 8 --seed 42
    python scripts/train.py 100 0.5 256 2 18 8 golf.pt --selection all --log-dir logs
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from models import NetworkSpec
from training import (
    EvolutionConfig,
    EvolutionTrainer,
    SELECTION_MODES,
    ProgressBarCallback,
    TensorBoardCallback,
    WandbCallback,
    CheckpointCallback,
    EarlyStoppingCallback,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Golf evolutionary training")

    # 位置参数 (顺序固定)
    parser.add_argument("generations", type=int, help="Number of generations")
    parser.add_argument("decay", type=float, help="Mutation decay exponent: rate = 1 / gen ** decay")
    parser.add_argument("population", type=int, help="Population size")
    parser.add_argument("players", type=int, help="Players per tournament group")
    parser.add_argument("holes", type=int, help="Holes per tournament")
    parser.add_argument("keep_top_frac", type=int, help="Keep the top 1/N of each generation")
    parser.add_argument("save_path", type=str, help="Where to save the best network")

    # 训练参数
    parser.add_argument("--selection", type=str, default="group_best", choices=SELECTION_MODES,
                        help="Score only each group's winner or every member")
    parser.add_argument("--workers", type=int, default=None, help="Tournament worker threads")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--hidden-dims", type=int, nargs=2, default=(10, 9), help="Hidden layer widths")
    parser.add_argument("--log-interval", type=int, default=10, help="Log interval (generations)")

    # 保存和日志
    parser.add_argument("--checkpoint-dir", type=str, default=None, help="Periodic checkpoint directory")
    parser.add_argument("--save-freq", type=int, default=50, help="Checkpoint frequency (generations)")
    parser.add_argument("--log-dir", type=str, default=None, help="TensorBoard log directory")
    parser.add_argument("--patience", type=int, default=None,
                        help="Stop after N generations without best-average improvement")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")

    # Weights & Biases
    parser.add_argument("--wandb", action="store_true", help="Enable Weights & Biases logging")
    parser.add_argument("--wandb-project", type=str, default="golf-evolution", help="W&B project name")
    parser.add_argument("--wandb-name", type=str, default=None, help="W&B run name")

    return parser


def build_callbacks(args, config: EvolutionConfig) -> list:
    """根据参数创建回调"""
    callbacks = [ProgressBarCallback(disable=args.no_progress)]

    if args.checkpoint_dir:
        callbacks.append(CheckpointCallback(args.checkpoint_dir, args.save_freq))

    if args.patience:
        callbacks.append(EarlyStoppingCallback(args.patience))

    if args.log_dir:
        try:
            Path(args.log_dir).mkdir(parents=True, exist_ok=True)
            callbacks.append(TensorBoardCallback(args.log_dir))
        except ImportError:
            logger.warning("TensorBoard not available, skipping logging")

    if args.wandb:
        try:
            callbacks.append(WandbCallback(
                project=args.wandb_project,
                name=args.wandb_name,
                config=config.to_dict(),
            ))
            logger.info(f"W&B logging enabled: {args.wandb_project}")
        except ImportError:
            logger.warning("wandb not available. Run: pip install wandb")

    return callbacks


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()

    if not argv:
        parser.print_usage()
        return 0

    args = parser.parse_args(argv)

    try:
        config = EvolutionConfig(
            generations=args.generations,
            decay=args.decay,
            population_size=args.population,
            players=args.players,
            holes=args.holes,
            keep_top_frac=args.keep_top_frac,
            selection=args.selection,
            num_workers=args.workers,
            seed=args.seed,
            log_interval=args.log_interval,
        ).validate()
        spec = NetworkSpec(hidden_dims=tuple(args.hidden_dims))
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    logger.info("=" * 50)
    logger.info("Golf Evolution Training")
    logger.info("=" * 50)
    logger.info(f"Generations: {config.generations}")
    logger.info(f"Population: {config.population_size} ({config.players} players/group)")
    logger.info(f"Holes: {config.holes}, Keep top 1/{config.keep_top_frac}")
    logger.info(f"Network: {spec.layer_shapes}")
    logger.info("=" * 50)

    trainer = EvolutionTrainer(config, spec, build_callbacks(args, config))
    history = trainer.train()

    logger.info("=" * 50)
    logger.info("Training completed!")
    if history:
        logger.info(f"Final stats: {history[-1]}")
    logger.info("=" * 50)

    logger.info(f"Saving model to {args.save_path}...")
    trainer.save(args.save_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
