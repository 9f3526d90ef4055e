"""Utility modules for common functionality"""

from .random_utils import create_rng
from .logging_utils import setup_logger

__all__ = ['create_rng', 'setup_logger']
