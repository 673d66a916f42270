"""
模型持久化

将策略网络保存到磁盘 / 从磁盘加载
"""
from pathlib import Path
from typing import Union
import logging
import pickle

import torch

from .config import NetworkSpec
from .policy_net import PolicyNetwork

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

FORMAT_VERSION = 1


def save_network(network: PolicyNetwork, path: PathLike):
    """
    保存网络

    文件内容: 规格 (各层维度) + state_dict (各层权重与偏置)

    Args:
        network: 策略网络
        path: 保存路径
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    torch.save({
        "format_version": FORMAT_VERSION,
        "spec": network.spec.to_dict(),
        "state_dict": network.state_dict(),
    }, path)
    logger.debug(f"Saved network ({network.num_parameters()} params) to {path}")


def load_network(path: PathLike) -> PolicyNetwork:
    """
    加载网络

    Args:
        path: 模型路径

    Returns:
        PolicyNetwork 实例

    Raises:
        FileNotFoundError: 文件不存在
        ValueError: 文件损坏、格式不正确或权重与规格不一致
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Model file not found: {path}")

    try:
        checkpoint = torch.load(path, map_location="cpu", weights_only=True)
    except (RuntimeError, EOFError, pickle.UnpicklingError) as e:
        raise ValueError(f"Could not read checkpoint {path}: {e}") from e

    if not isinstance(checkpoint, dict) or "spec" not in checkpoint or "state_dict" not in checkpoint:
        raise ValueError(f"Not a policy network checkpoint: {path}")

    version = checkpoint.get("format_version", 0)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported checkpoint version {version} in {path}")

    network = PolicyNetwork(NetworkSpec.from_dict(checkpoint["spec"]))
    try:
        network.load_state_dict(checkpoint["state_dict"])
    except RuntimeError as e:
        raise ValueError(f"Checkpoint weights do not match its spec in {path}: {e}") from e
    logger.debug(f"Loaded network from {path}")
    return network
