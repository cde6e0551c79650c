"""
End-to-end rolling covariance pipeline driven by a Config.
"""

import logging
from typing import Optional

from .risk.ewma import FixedPointEWMAEstimator
from .utils.config import Config
from .utils.io import DataLoader
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_pipeline(config: Optional[Config] = None) -> FixedPointEWMAEstimator:
    """
    Load returns, fit the estimator and save the covariance series.

    Parameters:
    -----------
    config : Config, optional
        Pipeline configuration; located on disk when omitted

    Returns:
    --------
    FixedPointEWMAEstimator
        Fitted estimator
    """
    if config is None:
        config = Config()

    setup_logging(level=config.log_level, log_file=config.get('logging.file'))

    loader = DataLoader(base_path=config.get('data.root_path'))
    returns_path = config.get_data_path('returns')
    returns = loader.load_returns(config.get('data.returns'))
    logger.info("Loaded returns from %s: %d rows x %d assets",
                returns_path, returns.shape[0], returns.shape[1])

    estimator = FixedPointEWMAEstimator.from_config(config).fit(returns)

    output = config.get('output.covariances')
    if output:
        loader.save_covariance_series(estimator.covariance_series_, output)
        logger.info("Saved %d covariance matrices to %s",
                    len(estimator.covariance_series_), output)

    return estimator
