"""
Exponential weighting module.

This module builds the EWMA weight kernel and the diagonal weight
matrix used by the weighted covariance calculation.
"""

import warnings

from ..exceptions import ShapeError
from ..numeric.fixed_point import FixedFormat, FixedPoint, Q16_16
from ..numeric.tensor import Tensor


def _fixed_lambda(lambda_unscaled: int, fmt: FixedFormat) -> FixedPoint:
    if isinstance(lambda_unscaled, bool) or not isinstance(lambda_unscaled, int):
        raise TypeError("lambda_unscaled must be an integer percentage")
    if lambda_unscaled < 0:
        raise ValueError(f"lambda_unscaled must be non-negative, got {lambda_unscaled}")
    return FixedPoint.new_unscaled(lambda_unscaled, False, fmt) / FixedPoint.new_unscaled(100, False, fmt)


def _warn_if_not_decaying(lambda_unscaled: int) -> None:
    # Called directly from a public function; stacklevel 3 is its caller
    if lambda_unscaled >= 100:
        warnings.warn(
            f"Decay factor {lambda_unscaled}/100 is not below 1; weights will not decay",
            RuntimeWarning,
            stacklevel=3,
        )


def decay_factor(lambda_unscaled: int, fmt: FixedFormat = Q16_16) -> FixedPoint:
    """
    Fixed-point decay factor from a percentage.

    Parameters:
    -----------
    lambda_unscaled : int
        Decay in percent, e.g. 94 for 0.94
    fmt : FixedFormat
        Fixed-point format

    Returns:
    --------
    FixedPoint
        lambda_unscaled / 100
    """
    lam = _fixed_lambda(lambda_unscaled, fmt)
    _warn_if_not_decaying(lambda_unscaled)
    return lam


def exponential_weights(lambda_unscaled: int,
                        length: int,
                        fmt: FixedFormat = Q16_16) -> Tensor:
    """
    Exponentially decaying weight vector.

    weight[i] = (1 - lambda) * lambda**i, so index 0 carries the largest
    weight. No normalization is applied.

    Parameters:
    -----------
    lambda_unscaled : int
        Decay in percent
    length : int
        Number of weights

    Returns:
    --------
    Tensor
        1D tensor of shape (length,)
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")

    lam = _fixed_lambda(lambda_unscaled, fmt)
    _warn_if_not_decaying(lambda_unscaled)
    scale = FixedPoint.one(fmt) - lam
    return Tensor((length,), [scale * lam.pow(i) for i in range(length)], fmt)


def diagonalize(vector: Tensor) -> Tensor:
    """Square matrix with vector on the diagonal and zeros elsewhere."""
    if vector.ndim != 1:
        raise ShapeError("Input tensor is not 1D")

    n = vector.shape[0]
    zero = FixedPoint.zero(vector.fmt)
    data = [vector.at(i) if i == j else zero
            for i in range(n)
            for j in range(n)]
    return Tensor((n, n), data, vector.fmt)
