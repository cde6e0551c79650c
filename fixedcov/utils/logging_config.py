"""
Logging configuration.

Library modules only create loggers; applications call setup_logging
once at startup to attach handlers.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[str] = None) -> None:
    """
    Configure root logging.

    Parameters:
    -----------
    level : int
        Logging level
    log_file : str, optional
        Also write to this file, creating parent directories
    """
    handlers: List[logging.Handler] = [
        logging.StreamHandler(sys.stdout),
    ]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )
