"""
Utility functions and data processing.

This module provides:
- Conversion between pandas panels and fixed-point tensors
- Configuration management
- I/O utilities
- Logging setup
- Plotting and visualization
"""

from .data_processor import DataProcessor
from .config import Config
from .io import DataLoader
from .logging_config import setup_logging
from .plotting import Plotter

__all__ = [
    "DataProcessor",
    "Config",
    "DataLoader",
    "setup_logging",
    "Plotter"
]
