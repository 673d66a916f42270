#!/usr/bin/env python3
"""
对战脚本

加载两个网络，打一局并在控制台逐回合显示手牌与动作

Usage:
    python scripts/play.py golf.pt                  # 与自己的副本对战
    python scripts/play.py golf_a.pt golf_b.pt --holes 18
    python scripts/play.py golf.pt --opponent rule --seed 7
"""
import argparse
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
from evaluation import Arena, ModelAgent, RandomAgent, RuleBasedAgent

logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Golf Play")

    parser.add_argument("model_a", type=str, help="Model path for player A")
    parser.add_argument("model_b", type=str, nargs="?", default=None,
                        help="Model path for player B (defaults to a copy of player A)")
    parser.add_argument(
        "--opponent",
        type=str,
        default="model",
        choices=["model", "random", "rule"],
        help="Opponent type for player B",
    )
    parser.add_argument("--holes", type=int, default=18, help="Holes to play")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--no-color", action="store_true", help="Disable colored player names")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.model_b and args.opponent != "model":
        logger.error(f"model_b cannot be combined with --opponent {args.opponent}")
        return 1

    try:
        network_a = load_network(args.model_a)
        if args.model_b:
            network_b = load_network(args.model_b)
        else:
            network_b = network_a.clone()
    except (FileNotFoundError, ValueError, RuntimeError, pickle.UnpicklingError) as e:
        logger.error(f"Could not load model: {e}")
        return 1

    player_a = ModelAgent(network_a, name="Player A")
    if args.opponent == "random":
        player_b = RandomAgent("Player B", random.Random(args.seed))
    elif args.opponent == "rule":
        player_b = RuleBasedAgent("Player B")
    else:
        player_b = ModelAgent(network_b, name="Player B")

    arena = Arena(holes=args.holes, render=True, color=not args.no_color)
    result = arena.play_match([player_a, player_b], random.Random(args.seed))

    print("=" * 60)
    print(f"Winner: {', '.join(result.winners)}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
