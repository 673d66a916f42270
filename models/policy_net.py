"""
策略网络

固定拓扑的 3 层全连接网络，只做前向推理和随机扰动:
- 没有激活函数 (纯仿射复合)
- 没有梯度，没有反向传播
- 进化搜索通过 mutate() 产生行为差异
"""
import copy
from typing import Optional, Union

import numpy as np
import torch
import torch.nn as nn

from .config import NetworkSpec


ArrayLike = Union[np.ndarray, torch.Tensor]


class DenseLayer(nn.Module):
    """
    全连接层

    out = W @ x + b，每个输出单元一个偏置。
    权重、偏置和输出缓冲区都注册为 buffer，不参与求导。
    """

    def __init__(
        self,
        input_size: int,
        output_size: int,
        init_range: float = 1.0,
        generator: Optional[torch.Generator] = None,
    ):
        """
        Args:
            input_size: 输入维度
            output_size: 输出维度
            init_range: 初始化半宽
            generator: 随机数生成器 (可选)
        """
        super().__init__()
        self.input_size = input_size
        self.output_size = output_size

        weight = torch.empty(output_size, input_size).uniform_(-init_range, init_range, generator=generator)
        bias = torch.empty(output_size).uniform_(-init_range, init_range, generator=generator)

        self.register_buffer("weight", weight)
        self.register_buffer("bias", bias)
        # 输出缓冲区在每次 forward 时复用
        self.register_buffer("out_buf", torch.zeros(output_size), persistent=False)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.addmv(self.bias, self.weight, x, out=self.out_buf)

    def mutate(self, rate: float, generator: Optional[torch.Generator] = None):
        """
        给每个权重和偏置加上 [-rate, rate) 的均匀噪声

        噪声本身严格落在区间内；加到 float32 参数上后，前后差值可能因舍入达到 rate。
        """
        self.weight.add_(torch.empty_like(self.weight).uniform_(-rate, rate, generator=generator))
        self.bias.add_(torch.empty_like(self.bias).uniform_(-rate, rate, generator=generator))

    def extra_repr(self) -> str:
        return f"input_size={self.input_size}, output_size={self.output_size}"


class PolicyNetwork(nn.Module):
    """
    高尔夫策略网络

    结构:
        features -> hidden_0 -> hidden_1 -> hidden_2 -> [card logits | action logits]
    """

    def __init__(
        self,
        spec: Optional[NetworkSpec] = None,
        generator: Optional[torch.Generator] = None,
    ):
        """
        Args:
            spec: 网络规格 (默认 97 -> 10 -> 9 -> 9)
            generator: 初始化用的随机数生成器 (可选)
        """
        super().__init__()
        self.spec = spec or NetworkSpec()

        (in0, out0), (in1, out1), (in2, out2) = self.spec.layer_shapes
        self.hidden_0 = DenseLayer(in0, out0, self.spec.init_range, generator)
        self.hidden_1 = DenseLayer(in1, out1, self.spec.init_range, generator)
        self.hidden_2 = DenseLayer(in2, out2, self.spec.init_range, generator)

        self.eval()

    @property
    def input_dim(self) -> int:
        return self.spec.input_dim

    @property
    def output_dim(self) -> int:
        return self.spec.output_dim

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        x = self.hidden_0(x)
        x = self.hidden_1(x)
        return self.hidden_2(x)

    @torch.no_grad()
    def infer(self, features: ArrayLike) -> torch.Tensor:
        """
        前向推理

        Args:
            features: (input_dim,) 特征向量

        Returns:
            (output_dim,) 输出。该张量是最后一层的缓冲区，
            下一次在同一实例上调用 infer 时会被覆盖。
        """
        if isinstance(features, torch.Tensor):
            x = features.to(torch.float32)
        else:
            x = torch.from_numpy(np.asarray(features, dtype=np.float32))

        if x.dim() != 1 or x.shape[0] != self.input_dim:
            raise ValueError(
                f"Expected input of shape ({self.input_dim},), got {tuple(x.shape)}"
            )
        return self.forward(x)

    @torch.no_grad()
    def mutate(self, rate: float, generator: Optional[torch.Generator] = None):
        """
        原地随机扰动所有权重与偏置

        Args:
            rate: 噪声半宽，噪声取自 [-rate, rate)
            generator: 随机数生成器 (可选)
        """
        if rate < 0:
            raise ValueError(f"Mutation rate must be non-negative, got {rate}")
        for layer in self.layers():
            layer.mutate(rate, generator)

    def clone(self) -> 'PolicyNetwork':
        """完全独立的深拷贝 (不共享任何缓冲区)"""
        return copy.deepcopy(self)

    def layers(self):
        """按顺序返回三层"""
        return (self.hidden_0, self.hidden_1, self.hidden_2)

    def num_parameters(self) -> int:
        """权重与偏置总数"""
        return sum(layer.weight.numel() + layer.bias.numel() for layer in self.layers())
