"""
Data I/O utilities.

This module provides loading and saving of return panels and
covariance series.
"""

import os
import pickle
from typing import Any, Dict, Hashable

import pandas as pd


class DataLoader:
    """
    Data loading utilities.

    Provides a unified interface for CSV and pickle files relative to
    a base directory.
    """

    def __init__(self, base_path: str = "./data"):
        """
        Initialize data loader.

        Parameters:
        -----------
        base_path : str
            Base path for data files
        """
        self.base_path = base_path

    def _path(self, filename: str) -> str:
        return os.path.join(self.base_path, filename)

    def load_csv(self, filename: str, **kwargs) -> pd.DataFrame:
        """
        Load CSV file.

        Parameters:
        -----------
        filename : str
            Filename or path
        **kwargs : dict
            Additional arguments for pd.read_csv

        Returns:
        --------
        pd.DataFrame
            Loaded data
        """
        return pd.read_csv(self._path(filename), **kwargs)

    def save_csv(self, data: pd.DataFrame, filename: str, **kwargs):
        """
        Save DataFrame to CSV.

        Parameters:
        -----------
        data : pd.DataFrame
            Data to save
        filename : str
            Output filename
        **kwargs : dict
            Additional arguments for to_csv
        """
        filepath = self._path(filename)
        os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
        data.to_csv(filepath, **kwargs)

    def load_pickle(self, filename: str) -> Any:
        """Load pickled object."""
        with open(self._path(filename), 'rb') as f:
            return pickle.load(f)

    def save_pickle(self, obj: Any, filename: str):
        """Save object to pickle file."""
        filepath = self._path(filename)
        os.makedirs(os.path.dirname(filepath) or ".", exist_ok=True)
        with open(filepath, 'wb') as f:
            pickle.dump(obj, f)

    def load_returns(self, filename: str) -> pd.DataFrame:
        """
        Load a return panel (time x assets).

        The first column is used as a date index.
        """
        return self.load_csv(filename, index_col=0, parse_dates=True)

    def save_covariance_series(self,
                               series: Dict[Hashable, pd.DataFrame],
                               filename: str) -> pd.DataFrame:
        """
        Save a covariance series in long format.

        Parameters:
        -----------
        series : dict
            Window label -> covariance DataFrame
        filename : str
            Output filename

        Returns:
        --------
        pd.DataFrame
            Long table with columns date, asset_i, asset_j, covariance
        """
        rows = []
        for label, cov in series.items():
            for asset_i in cov.index:
                for asset_j in cov.columns:
                    rows.append({
                        'date': label,
                        'asset_i': asset_i,
                        'asset_j': asset_j,
                        'covariance': cov.loc[asset_i, asset_j],
                    })

        table = pd.DataFrame(rows, columns=['date', 'asset_i', 'asset_j', 'covariance'])
        self.save_csv(table, filename, index=False)
        return table
