"""
Model Layer - 策略网络

Modules:
    config: 网络规格
    policy_net: 固定拓扑的全连接策略网络 (推理 + 变异)
    serialization: 保存与加载
"""
from .config import NetworkSpec, GOLF_SMALL, GOLF_WIDE
from .policy_net import DenseLayer, PolicyNetwork
from .serialization import save_network, load_network

__all__ = [
    # config
    "NetworkSpec",
    "GOLF_SMALL",
    "GOLF_WIDE",
    # policy_net
    "DenseLayer",
    "PolicyNetwork",
    # serialization
    "save_network",
    "load_network",
]
