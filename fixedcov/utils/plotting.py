"""
Plotting and visualization utilities.

This module provides plots for inspecting rolling covariance output.
"""

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import seaborn as sns
import pandas as pd
from typing import Tuple


class Plotter:
    """
    Plotting utilities for covariance analysis.
    """

    def __init__(self, style: str = 'default', figsize: Tuple[int, int] = (12, 8)):
        """
        Initialize plotter.

        Parameters:
        -----------
        style : str
            Matplotlib style name
        figsize : tuple
            Default figure size
        """
        plt.style.use(style)
        self.figsize = figsize

    def plot_covariance_heatmap(self,
                                covariance: pd.DataFrame,
                                title: str = "Covariance Matrix") -> Figure:
        """
        Plot a covariance matrix as an annotated heatmap.

        Parameters:
        -----------
        covariance : pd.DataFrame
            Square covariance matrix
        title : str
            Plot title

        Returns:
        --------
        Figure
            Figure object
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        sns.heatmap(covariance, ax=ax, annot=True, fmt=".2e", cmap="RdBu_r", center=0.0)

        ax.set_title(title, fontsize=16)
        plt.tight_layout()
        return fig

    def plot_variance_series(self,
                             variances: pd.DataFrame,
                             title: str = "Rolling EWMA Variance") -> Figure:
        """
        Plot per-asset variances over window end dates.

        Parameters:
        -----------
        variances : pd.DataFrame
            Window end x assets
        title : str
            Plot title

        Returns:
        --------
        Figure
            Figure object
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        for asset in variances.columns:
            ax.plot(variances.index, variances[asset].values, label=str(asset), linewidth=2)

        ax.set_title(title, fontsize=16)
        ax.set_xlabel('Window End', fontsize=12)
        ax.set_ylabel('Variance', fontsize=12)
        ax.legend()
        ax.grid(True, alpha=0.3)

        plt.tight_layout()
        return fig
