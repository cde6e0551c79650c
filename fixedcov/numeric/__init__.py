"""
Fixed-point numeric module.

This module provides:
- FixedPoint scalars with deterministic scaled-integer arithmetic
- Tensors of fixed-point values with reshape, transpose, matmul and sum
"""

from .fixed_point import FixedFormat, FixedPoint, Q16_16
from .tensor import Tensor

__all__ = [
    "FixedFormat",
    "FixedPoint",
    "Q16_16",
    "Tensor"
]
