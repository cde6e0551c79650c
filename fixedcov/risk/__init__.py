"""
Risk modeling module.

This module provides:
- Exponential weight generation and diagonal weight matrices
- Weighted covariance of a single data block
- Rolling window EWMA covariance
- A pandas-facing EWMA covariance estimator
"""

from .weights import decay_factor, exponential_weights, diagonalize
from .covariance import weighted_covariance, weighted_mean
from .rolling import rolling_covariance, window_slices
from .ewma import FixedPointEWMAEstimator

__all__ = [
    "decay_factor",
    "exponential_weights",
    "diagonalize",
    "weighted_covariance",
    "weighted_mean",
    "rolling_covariance",
    "window_slices",
    "FixedPointEWMAEstimator"
]
