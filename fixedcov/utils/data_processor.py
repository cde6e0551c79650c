"""
Data processing utilities.

This module converts float return panels into fixed-point tensors
and back, handling missing values and out-of-range observations.
"""

import warnings
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..numeric.fixed_point import FixedFormat, Q16_16
from ..numeric.tensor import Tensor


class DataProcessor:
    """
    Boundary conversion between pandas/numpy and fixed-point tensors.

    Provides NaN filling, range clipping and conversion in both
    directions.
    """

    def __init__(self, fmt: FixedFormat = Q16_16, fill_value: float = 0.0):
        """
        Initialize data processor.

        Parameters:
        -----------
        fmt : FixedFormat
            Target fixed-point format
        fill_value : float
            Replacement for missing observations
        """
        self.fmt = fmt
        self.fill_value = fill_value

    @property
    def bound(self) -> float:
        """Largest representable magnitude as a float."""
        return self.fmt.max_raw / self.fmt.one

    def clean(self, data: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """
        Fill missing values and clip to the representable range.

        Parameters:
        -----------
        data : pd.DataFrame or np.ndarray
            Observations (time x assets)

        Returns:
        --------
        np.ndarray
            Cleaned float matrix
        """
        values = np.asarray(data, dtype=float)
        if values.ndim != 2:
            raise ValueError(f"Expected a 2D panel, got {values.ndim}D")

        values = np.where(np.isnan(values), self.fill_value, values)

        out_of_range = np.abs(values) > self.bound
        if out_of_range.any():
            warnings.warn(
                f"{int(out_of_range.sum())} values outside the {self.fmt} range were clipped",
                RuntimeWarning,
            )
            values = np.clip(values, -self.bound, self.bound)
        return values

    def to_tensor(self, data: Union[pd.DataFrame, np.ndarray]) -> Tensor:
        """Clean and convert a panel to a fixed-point tensor."""
        return Tensor.from_numpy(self.clean(data), self.fmt)

    def to_frame(self,
                 tensor: Tensor,
                 index: Optional[Sequence] = None,
                 columns: Optional[Sequence] = None) -> pd.DataFrame:
        """Float DataFrame view of a 2D tensor."""
        return pd.DataFrame(tensor.to_numpy(), index=index, columns=columns)
