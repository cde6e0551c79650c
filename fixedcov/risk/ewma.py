"""
EWMA covariance estimation module.

This module wraps the fixed-point rolling covariance in an estimator
that accepts and returns pandas objects.
"""

import logging
from typing import Dict, Hashable, List, Optional, Union

import numpy as np
import pandas as pd

from ..exceptions import ConfigError
from ..numeric.fixed_point import FixedFormat, Q16_16
from ..numeric.tensor import Tensor
from ..utils.data_processor import DataProcessor
from .covariance import CENTERING_MODES
from .rolling import rolling_covariance

logger = logging.getLogger(__name__)


class FixedPointEWMAEstimator:
    """
    Rolling exponentially weighted covariance estimator.

    Computes one covariance matrix per window of consecutive rows using
    fixed-point arithmetic, so results are reproducible bit for bit.
    """

    def __init__(self,
                 lambda_percent: int = 94,
                 window: int = 30,
                 fmt: FixedFormat = Q16_16,
                 centering: str = "reference"):
        """
        Initialize EWMA estimator.

        Parameters:
        -----------
        lambda_percent : int
            Decay factor in percent (94 for 0.94)
        window : int
            Rows per estimation window
        fmt : FixedFormat
            Fixed-point format used throughout
        centering : str
            "reference" or "column"
        """
        if centering not in CENTERING_MODES:
            raise ValueError(
                f"Unknown centering '{centering}', expected one of {CENTERING_MODES}"
            )
        self.lambda_percent = lambda_percent
        self.window = window
        self.fmt = fmt
        self.centering = centering
        self.covariances_: Optional[List[Tensor]] = None
        self.covariance_series_: Optional[Dict[Hashable, pd.DataFrame]] = None
        self.assets_: Optional[List[Hashable]] = None

    @classmethod
    def from_config(cls, config) -> 'FixedPointEWMAEstimator':
        """Build from a Config instance, rejecting invalid ewma settings."""
        lambda_percent = config.get_int('ewma.lambda_percent')
        window = config.get_int('ewma.window')
        centering = config.get('ewma.centering')

        if lambda_percent < 0:
            raise ConfigError(f"'ewma.lambda_percent' must be non-negative, got {lambda_percent}")
        if window <= 0:
            raise ConfigError(f"'ewma.window' must be positive, got {window}")
        if centering not in CENTERING_MODES:
            raise ConfigError(
                f"'ewma.centering' must be one of {CENTERING_MODES}, got {centering!r}"
            )

        return cls(
            lambda_percent=lambda_percent,
            window=window,
            fmt=config.fixed_format,
            centering=centering,
        )

    def fit(self, returns: Union[pd.DataFrame, np.ndarray]) -> 'FixedPointEWMAEstimator':
        """
        Fit rolling EWMA covariance.

        Parameters:
        -----------
        returns : pd.DataFrame or np.ndarray
            Return series (time x assets)

        Returns:
        --------
        self : FixedPointEWMAEstimator
        """
        if isinstance(returns, pd.DataFrame):
            if not returns.index.is_unique:
                raise ValueError("Return index must be unique; each window is keyed by its last label")
            index = list(returns.index)
            assets = list(returns.columns)
        else:
            returns = np.asarray(returns, dtype=float)
            index = list(range(returns.shape[0]))
            assets = list(range(returns.shape[1])) if returns.ndim == 2 else []

        processor = DataProcessor(fmt=self.fmt)
        data = processor.to_tensor(returns)

        def log_window(start: int, cov: Tensor) -> None:
            logger.debug("Window starting at row %d -> %s", start, index[start + self.window - 1])

        logger.info("Fitting EWMA covariance: %d rows, %d assets, window=%d, lambda=%d%%, %s",
                    data.shape[0], data.shape[1], self.window, self.lambda_percent, self.fmt)

        covariances = rolling_covariance(
            data,
            self.lambda_percent,
            self.window,
            centering=self.centering,
            observer=log_window,
        )

        labels = index[self.window - 1:]
        self.covariances_ = covariances
        self.covariance_series_ = {
            label: processor.to_frame(cov, index=assets, columns=assets)
            for label, cov in zip(labels, covariances)
        }
        self.assets_ = assets

        logger.info("Computed %d covariance matrices", len(covariances))
        return self

    def predict(self, date: Optional[Hashable] = None) -> pd.DataFrame:
        """
        Get covariance matrix for a window end label.

        Parameters:
        -----------
        date : hashable, optional
            Index label of the last row of a window (latest if None)

        Returns:
        --------
        pd.DataFrame
            Covariance matrix
        """
        if self.covariance_series_ is None:
            raise ValueError("Model not fitted. Call fit() first.")

        if date is None:
            return list(self.covariance_series_.values())[-1]
        if date not in self.covariance_series_:
            try:
                date = pd.Timestamp(date)
            except (ValueError, TypeError):
                raise KeyError(f"No covariance window ends at {date!r}") from None
            if date not in self.covariance_series_:
                raise KeyError(f"No covariance window ends at {date}")
        return self.covariance_series_[date]

    def variance_frame(self) -> pd.DataFrame:
        """Per-asset variances (diagonal entries) for each window end."""
        if self.covariance_series_ is None:
            raise ValueError("Model not fitted. Call fit() first.")

        return pd.DataFrame(
            [np.diag(cov.to_numpy()) for cov in self.covariance_series_.values()],
            index=list(self.covariance_series_.keys()),
            columns=self.assets_,
        )
