#!/usr/bin/env python3
"""
Logger setup for price list matching
"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(log_level: str = 'INFO', log_dir: Optional[Path] = None,
                 log_format: str = LOG_FORMAT) -> logging.Logger:
    """
    Setup logging configuration

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directory for log files (defaults to 'logs/')
        log_format: Record format shared by the file and console handlers

    Returns:
        Configured logger instance
    """
    log_dir = Path(log_dir or 'logs')
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_dir / 'price_match.log', encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )

    return logging.getLogger('price_match')
