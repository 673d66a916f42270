#!/usr/bin/env python3
"""
评估脚本

Usage:
    python scripts/evaluate.py golf.pt --games 100
    python scripts/evaluate.py golf.pt --opponent rule --holes 18
    python scripts/evaluate.py golf.pt --compare other.pt --games 200
"""
import argparse
import json
import logging
import pickle
import random
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from models import load_network
from evaluation import (
    Arena,
    Evaluator,
    ModelAgent,
    RandomAgent,
    RuleBasedAgent,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Golf Evaluation")

    parser.add_argument("model", type=str, help="Model path for evaluation")
    parser.add_argument("--compare", type=str, default=None, help="Second model for a head-to-head")

    # 评估参数
    parser.add_argument("--games", type=int, default=100, help="Number of games")
    parser.add_argument("--holes", type=int, default=18, help="Holes per game")
    parser.add_argument(
        "--opponent",
        type=str,
        default="random",
        choices=["random", "rule", "self"],
        help="Opponent type",
    )

    # 其他
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--output", type=str, help="Output file for results")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        network = load_network(args.model)
        other = load_network(args.compare) if args.compare else None
    except (FileNotFoundError, ValueError, RuntimeError, pickle.UnpicklingError) as e:
        logger.error(f"Could not load model: {e}")
        return 1

    agent = ModelAgent(network, name=Path(args.model).stem)

    if other is not None:
        arena = Arena(holes=args.holes)
        rival = ModelAgent(other, name=Path(args.compare).stem)
        if rival.name == agent.name:
            rival.name = f"{rival.name}_2"
        standings = arena.round_robin([agent, rival], games_per_pair=args.games, seed=args.seed)
        for name, stats in standings.items():
            logger.info(
                f"{name}: avg score {stats['avg_score']:.2f}, "
                f"win rate {stats['win_rate']:.2%} ({int(stats['games'])} games)"
            )
        results = {"mode": "compare", "standings": standings}
    else:
        if args.opponent == "rule":
            opponent = RuleBasedAgent("rule")
        elif args.opponent == "self":
            opponent = ModelAgent(network.clone(), name="self")
        else:
            opponent = RandomAgent("random", random.Random(args.seed))

        evaluator = Evaluator(holes=args.holes, seed=args.seed)
        result = evaluator.evaluate(agent, [opponent], n_games=args.games, verbose=args.verbose)
        logger.info(f"vs {opponent.name}: {result}")
        results = {
            "mode": "evaluate",
            "opponent": opponent.name,
            "avg_score": result.avg_score,
            "score_std": result.score_std,
            "win_rate": result.win_rate,
            "games": result.games_played,
        }

    if args.output:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        logger.info(f"Results saved to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
