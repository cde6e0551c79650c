"""
Fixed-Point EWMA Covariance

Rolling exponentially weighted covariance matrices over multivariate
time series, computed in deterministic fixed-point arithmetic.

Modules:
    numeric: Fixed-point scalars and tensors
    risk: Exponential weights, weighted covariance, rolling windows, estimator
    utils: Data conversion, I/O, configuration, logging and plotting
    pipeline: Config-driven end-to-end run
"""

__version__ = "1.0"

# Import main classes for convenience
from .numeric.fixed_point import FixedFormat, FixedPoint, Q16_16
from .numeric.tensor import Tensor
from .risk.weights import exponential_weights, diagonalize
from .risk.covariance import weighted_covariance
from .risk.rolling import rolling_covariance
from .risk.ewma import FixedPointEWMAEstimator

__all__ = [
    "FixedFormat",
    "FixedPoint",
    "Q16_16",
    "Tensor",
    "exponential_weights",
    "diagonalize",
    "weighted_covariance",
    "rolling_covariance",
    "FixedPointEWMAEstimator"
]
