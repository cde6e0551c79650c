"""
Weighted covariance module.

This module computes one exponentially weighted covariance matrix from
a block of observations (rows = time, columns = assets) and a weight
vector, entirely in fixed-point arithmetic.

Two centering modes are available:
- "reference": X_centered[row, col] = X_weighted.flat[col] - mean[row],
  reproducing the established pipeline output bit for bit
- "column": conventional weighted covariance
  (X - mu)^T W (X - mu) / (sum(w) - 1)
"""

from typing import Tuple

from ..exceptions import DimensionMismatchError, ShapeError
from ..numeric.fixed_point import FixedPoint
from ..numeric.tensor import Tensor
from .weights import diagonalize

CENTERING_MODES = ("reference", "column")


def _check_inputs(block: Tensor, weights: Tensor) -> None:
    if block.ndim != 2:
        raise ShapeError("Input tensor is not 2D")
    if weights.ndim != 1:
        raise ShapeError("Input tensor is not 1D")
    if block.shape[0] != weights.shape[0]:
        raise DimensionMismatchError("Data/weight length mismatch")
    if block.shape[0] == 0:
        raise ShapeError("Data block has no rows")


def weighted_mean(block: Tensor, weights: Tensor) -> Tuple[Tensor, FixedPoint]:
    """
    Weighted column mean of a data block.

    Parameters:
    -----------
    block : Tensor
        Data block of shape (m, n)
    weights : Tensor
        Weight vector of shape (m,)

    Returns:
    --------
    tuple
        (mean vector of shape (n,), total weight)
    """
    _check_inputs(block, weights)
    length = weights.shape[0]
    n = block.shape[1]

    weights_row = weights.reshape((1, length))
    weighted_sum = weights_row @ block
    total_weight = weights.sum(axis=0, keepdims=False).at(0)

    mean = weighted_sum.reshape((n,)) / total_weight
    return mean, total_weight


def weighted_covariance(block: Tensor,
                        weights: Tensor,
                        centering: str = "reference") -> Tensor:
    """
    Weighted covariance matrix of one data block.

    Parameters:
    -----------
    block : Tensor
        Data block of shape (m, n)
    weights : Tensor
        Weight vector of shape (m,); weights[0] applies to row 0
    centering : str
        "reference" or "column"

    Returns:
    --------
    Tensor
        Covariance matrix of shape (n, n)
    """
    if centering not in CENTERING_MODES:
        raise ValueError(
            f"Unknown centering '{centering}', expected one of {CENTERING_MODES}"
        )

    mean, total_weight = weighted_mean(block, weights)
    m, n = block.shape
    W = diagonalize(weights)

    if centering == "reference":
        X_weighted = W @ block
        # Row vector of the first n flat entries against the mean as a column
        leading = X_weighted.reshape((m * n, 1)).take_rows(0, n).reshape((1, n))
        X_centered = leading - mean.reshape((n, 1))
        numerator = X_centered.transpose((1, 0)) @ X_centered
    else:
        X_centered = block - mean.reshape((1, n))
        numerator = X_centered.transpose((1, 0)) @ (W @ X_centered)

    # Bessel-style correction; zero when total weight is exactly one
    denominator = total_weight - FixedPoint.one(block.fmt)
    return numerator / denominator
