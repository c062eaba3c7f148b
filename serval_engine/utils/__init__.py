"""
Utility modules for the engine.
"""

from serval_engine.utils.config import Config
from serval_engine.utils.logging import setup_logging, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
    'PerformanceLogger',
]
