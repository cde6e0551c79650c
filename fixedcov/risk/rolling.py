"""
Rolling window covariance module.

This module slides a fixed-width window one row at a time over a
(time x assets) tensor and computes a weighted covariance matrix for
each window position.
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

from ..exceptions import InvalidWindowError, ShapeError
from ..numeric.tensor import Tensor
from .covariance import weighted_covariance
from .weights import exponential_weights

logger = logging.getLogger(__name__)

WindowObserver = Callable[[int, Tensor], None]


def _check_window(data: Tensor, window: int) -> None:
    if data.ndim != 2:
        raise ShapeError("Input tensor is not 2D")
    if isinstance(window, bool) or not isinstance(window, int):
        raise InvalidWindowError(f"Window must be an integer, got {window!r}")
    if window <= 0:
        raise InvalidWindowError(f"Window must be positive, got {window}")
    if window > data.shape[0]:
        raise InvalidWindowError(
            f"Window {window} exceeds the {data.shape[0]} available rows"
        )


def window_slices(data: Tensor, window: int) -> Iterator[Tuple[int, Tensor]]:
    """
    Iterate over window sub-blocks.

    Parameters:
    -----------
    data : Tensor
        Data matrix of shape (m, n)
    window : int
        Window width, 1 <= window <= m

    Yields:
    -------
    tuple
        (start row, copied sub-block of shape (window, n))
    """
    _check_window(data, window)
    m = data.shape[0]
    for start in range(m - window + 1):
        yield start, data.take_rows(start, start + window)


def rolling_covariance(data: Tensor,
                       lambda_unscaled: int,
                       window: int,
                       centering: str = "reference",
                       observer: Optional[WindowObserver] = None) -> List[Tensor]:
    """
    Exponentially weighted covariance for every window position.

    Parameters:
    -----------
    data : Tensor
        Data matrix of shape (m, n)
    lambda_unscaled : int
        Decay in percent
    window : int
        Window width
    centering : str
        Centering mode passed to weighted_covariance
    observer : callable, optional
        Called as observer(start_row, covariance) after each window

    Returns:
    --------
    list of Tensor
        m - window + 1 matrices of shape (n, n), in window-start order
    """
    _check_window(data, window)
    weights = exponential_weights(lambda_unscaled, window, data.fmt)

    covariances = []
    for start, block in window_slices(data, window):
        cov = weighted_covariance(block, weights, centering=centering)
        covariances.append(cov)
        if observer is not None:
            observer(start, cov)

    logger.debug("Computed %d covariance matrices (window=%d, lambda=%d%%)",
                 len(covariances), window, lambda_unscaled)
    return covariances
