"""
模型配置

定义策略网络的规格
"""
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from env.observation import INPUT_SIZE, OUTPUT_SIZE


@dataclass
class NetworkSpec:
    """
    策略网络规格

    固定 3 层全连接: input_dim -> hidden_dims[0] -> hidden_dims[1] -> output_dim

    Attributes:
        input_dim: 输入特征维度 (需与观测编码一致)
        hidden_dims: 两个隐藏层的维度
        output_dim: 输出维度 (手牌位置 logits + 3 个动作 logits)
        init_range: 初始化均匀分布的半宽，权重与偏置取自 [-init_range, init_range)
    """
    input_dim: int = INPUT_SIZE
    hidden_dims: Tuple[int, int] = (10, 9)
    output_dim: int = OUTPUT_SIZE
    init_range: float = 1.0

    def __post_init__(self):
        self.hidden_dims = tuple(self.hidden_dims)
        if len(self.hidden_dims) != 2:
            raise ValueError(f"hidden_dims must have exactly 2 entries, got {self.hidden_dims}")
        if min(self.input_dim, self.output_dim, *self.hidden_dims) <= 0:
            raise ValueError("All layer widths must be positive")

    @property
    def layer_shapes(self) -> Tuple[Tuple[int, int], ...]:
        """各层 (输入, 输出) 维度"""
        dims = (self.input_dim, *self.hidden_dims, self.output_dim)
        return tuple(zip(dims[:-1], dims[1:]))

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'NetworkSpec':
        """从字典创建配置"""
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return {
            "input_dim": self.input_dim,
            "hidden_dims": list(self.hidden_dims),
            "output_dim": self.output_dim,
            "init_range": self.init_range,
        }


# 参考配置 97 -> 10 -> 9 -> 9
GOLF_SMALL = NetworkSpec()

GOLF_WIDE = NetworkSpec(hidden_dims=(32, 16))
